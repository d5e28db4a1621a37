"""
Project-wide constants for gemini_media
"""  # noqa: D200, D212, D415

# ==============================================================================
# Generation
# ==============================================================================

DEFAULT_MODEL = "gemini-3-pro-preview"
DEFAULT_TEMPERATURE = 0.5

SYSTEM_INSTRUCTION = (
    "When given a video and a query, call the relevant function only once "
    "with the appropriate timecodes and text for the video"
)

# Retry settings for ambiguous responses
MAX_ATTEMPTS = 3
RETRY_BASE_DELAY = 1.0  # seconds
RETRY_MAX_JITTER = 1.0  # seconds, jitter is drawn from [0, RETRY_MAX_JITTER)

# ==============================================================================
# Upload processing
# ==============================================================================

FILE_POLL_INTERVAL = 2.0  # seconds
MAX_POLL_ATTEMPTS = 60  # ~2 minutes at the default interval

_MB = 1024 * 1024

INLINE_MAX_BYTES = 20 * _MB  # Inline payload limit, larger files need the Files API

# Progress milestones (percent)
PROGRESS_START = 10
PROGRESS_SUBMITTED = 50
PROGRESS_POLL_STEP = 5
PROGRESS_POLL_CEILING = 95
PROGRESS_INLINE_ENCODING = 30
PROGRESS_DONE = 100
PROGRESS_RESET = 0

# Status lines shown while uploading (display only)
STATUS_UPLOADING = "Uploading file..."
STATUS_PROCESSING = "Processing media..."
STATUS_ENCODING = "Encoding media..."
STATUS_READY = "Processing complete"

SUPPORTED_MEDIA_PREFIXES = ("video/", "audio/")
