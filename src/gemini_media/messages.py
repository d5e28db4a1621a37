"""User-facing messages for outcomes and upload failures.

The presentation layer only ever receives these strings, never exceptions.
"""

from __future__ import annotations

from gemini_media.core.exceptions import UploadError, UploadErrorKind
from gemini_media.core.types import (
    Failed,
    GenerationOutcome,
    Inconclusive,
    RecitationBlocked,
    SafetyBlocked,
)

SAFETY_BLOCKED_MESSAGE = (
    "The model blocked the response due to safety concerns. "
    "Please try a different prompt or video."
)
RECITATION_BLOCKED_MESSAGE = "The model blocked the response due to recitation concerns."
INCONCLUSIVE_MESSAGE = (
    "The model didn't return a valid response after multiple attempts. "
    "Please try a different prompt."
)
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
NO_MEDIA_MESSAGE = "Please upload a video or audio file first."

UNSUPPORTED_MEDIA_MESSAGE = "Invalid file type. Please upload a video or audio file."
UPLOAD_TIMEOUT_MESSAGE = "File processing timed out. Please try again."
UPLOAD_PROCESSING_FAILED_MESSAGE = "File processing failed."
UPLOAD_READ_FAILED_MESSAGE = "Could not read the file. It may be too large or corrupt."
UPLOAD_GENERIC_MESSAGE = "Error processing file."

_UPLOAD_FALLBACKS = {
    UploadErrorKind.TIMEOUT: UPLOAD_TIMEOUT_MESSAGE,
    UploadErrorKind.PROCESSING_FAILED: UPLOAD_PROCESSING_FAILED_MESSAGE,
    UploadErrorKind.READ_FAILED: UPLOAD_READ_FAILED_MESSAGE,
    UploadErrorKind.UNSUPPORTED_MEDIA: UNSUPPORTED_MEDIA_MESSAGE,
    UploadErrorKind.TRANSPORT: UPLOAD_GENERIC_MESSAGE,
}


def outcome_error_message(outcome: GenerationOutcome) -> str | None:
    """Message for outcomes that carry no result, else None."""
    match outcome:
        case SafetyBlocked():
            return SAFETY_BLOCKED_MESSAGE
        case RecitationBlocked():
            return RECITATION_BLOCKED_MESSAGE
        case Inconclusive():
            return INCONCLUSIVE_MESSAGE
        case Failed(message=message):
            return message or UNKNOWN_ERROR_MESSAGE
        case _:
            return None


def upload_error_message(error: UploadError) -> str:
    """Message for a terminal upload failure."""
    return error.message or _UPLOAD_FALLBACKS[error.kind]
