"""Exception hierarchy for gemini_media."""

from enum import Enum


class GeminiMediaError(Exception):
    """Base exception for all gemini_media errors."""


class ConfigurationError(GeminiMediaError):
    """Raised when configuration cannot be resolved or is inconsistent."""


class ValidationError(GeminiMediaError):
    """Raised when input validation fails."""


class APIError(GeminiMediaError):
    """Raised when a provider call fails."""


class UploadErrorKind(str, Enum):
    """Terminal failure categories of an upload."""

    TIMEOUT = "timeout"
    PROCESSING_FAILED = "processing_failed"
    READ_FAILED = "read_failed"
    UNSUPPORTED_MEDIA = "unsupported_media"
    TRANSPORT = "transport"


class UploadError(GeminiMediaError):
    """Terminal upload failure. Never retried automatically."""

    kind: UploadErrorKind = UploadErrorKind.TRANSPORT

    def __init__(self, message: str, *, display_name: str | None = None) -> None:
        """Initialize with a user-facing message and the affected file name."""
        super().__init__(message)
        self.message = message
        self.display_name = display_name


class UploadTimeoutError(UploadError):
    """The file was still processing after the last allowed poll."""

    kind = UploadErrorKind.TIMEOUT


class UploadProcessingError(UploadError):
    """The remote service reported the file as failed."""

    kind = UploadErrorKind.PROCESSING_FAILED


class UploadReadError(UploadError):
    """The file could not be turned into a transmittable payload."""

    kind = UploadErrorKind.READ_FAILED


class UnsupportedMediaError(UploadError):
    """The file is neither video nor audio."""

    kind = UploadErrorKind.UNSUPPORTED_MEDIA
