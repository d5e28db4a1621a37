"""Upload pipeline: turn local media into a READY ``UploadedFile``.

Two interchangeable backends share one contract:

- ``RemoteUploadPipeline`` submits bytes to the Files API and polls until the
  service reports the file as ready (default).
- ``InlineUploadPipeline`` packages the bytes into a self-contained handle
  with no remote round-trip and no polling.

Both either return a READY handle or raise a terminal ``UploadError``, and
both report monotonic progress ending in 100 (success) or 0 (failure).
Callers own the release of superseded handles via ``release()``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import hashlib
import logging
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from gemini_media.constants import (
    INLINE_MAX_BYTES,
    PROGRESS_INLINE_ENCODING,
    PROGRESS_POLL_CEILING,
    PROGRESS_POLL_STEP,
    PROGRESS_START,
    PROGRESS_SUBMITTED,
    STATUS_ENCODING,
    STATUS_PROCESSING,
    STATUS_READY,
    STATUS_UPLOADING,
    SUPPORTED_MEDIA_PREFIXES,
)
from gemini_media.core.exceptions import (
    UnsupportedMediaError,
    UploadError,
    UploadReadError,
)
from gemini_media.core.types import FileState, UploadedFile
from gemini_media.messages import (
    UNSUPPORTED_MEDIA_MESSAGE,
    UPLOAD_GENERIC_MESSAGE,
)
from gemini_media.pipeline.poller import UploadPoller
from gemini_media.pipeline.progress import ProgressObserver, ProgressTracker
from gemini_media.telemetry import TelemetryContext

if TYPE_CHECKING:
    from gemini_media.config import FrozenConfig
    from gemini_media.pipeline.adapters.base import UploadsCapability
    from gemini_media.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

T_SUBMIT = "upload.submit"


class UploadPipeline(Protocol):
    """Contract shared by every upload backend."""

    async def upload(
        self,
        data: bytes,
        mime_type: str,
        display_name: str,
        observer: ProgressObserver | None = None,
    ) -> UploadedFile: ...

    async def release(self, file: UploadedFile) -> None: ...


def is_supported_media(mime_type: str) -> bool:
    return mime_type.startswith(SUPPORTED_MEDIA_PREFIXES)


def check_media_type(mime_type: str, display_name: str) -> None:
    """Raise ``UnsupportedMediaError`` unless the file is video or audio."""
    if not is_supported_media(mime_type or ""):
        raise UnsupportedMediaError(UNSUPPORTED_MEDIA_MESSAGE, display_name=display_name)


def read_media(path: str | Path) -> tuple[bytes, str, str]:
    """Read a media file from disk.

    Returns ``(data, mime_type, display_name)``. The MIME type is guessed from
    the file name; unknown extensions map to ``application/octet-stream`` and
    will be rejected by the pipeline's media check.
    """
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise UploadReadError(
            f"Could not read {file_path.name}: {e.strerror or e}",
            display_name=file_path.name,
        ) from e
    mime_type, _ = mimetypes.guess_type(file_path.name)
    return data, mime_type or "application/octet-stream", file_path.name


class RemoteUploadPipeline:
    """Submit to the Files API, then poll until the file is READY."""

    def __init__(
        self,
        uploads: UploadsCapability,
        *,
        poller: UploadPoller | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self._uploads = uploads
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()
        self.poller = poller or UploadPoller(uploads, telemetry=self._telemetry)

    async def upload(
        self,
        data: bytes,
        mime_type: str,
        display_name: str,
        observer: ProgressObserver | None = None,
    ) -> UploadedFile:
        tracker = ProgressTracker(observer)
        try:
            check_media_type(mime_type, display_name)
            tracker.status(STATUS_UPLOADING)
            tracker.advance(PROGRESS_START)
            with self._telemetry(T_SUBMIT, size_bytes=len(data)):
                handle = await self._uploads.upload(
                    data=data, mime_type=mime_type, display_name=display_name
                )
            log.debug("Submitted %s as %s (%s)", display_name, handle.name, handle.state.value)
            tracker.advance(PROGRESS_SUBMITTED)
            tracker.status(STATUS_PROCESSING)

            def _on_poll(_: int) -> None:
                tracker.advance(
                    min(tracker.percent + PROGRESS_POLL_STEP, PROGRESS_POLL_CEILING)
                )

            ready = await self.poller.wait_until_ready(handle, on_poll=_on_poll)
        except UploadError:
            tracker.reset()
            raise
        except Exception as e:
            tracker.reset()
            raise UploadError(
                str(e) or UPLOAD_GENERIC_MESSAGE, display_name=display_name
            ) from e

        tracker.complete()
        tracker.status(STATUS_READY)
        return ready

    async def release(self, file: UploadedFile) -> None:
        """Best-effort deletion of a superseded remote file."""
        try:
            await self._uploads.release(file)
        except Exception as e:
            log.warning("Failed to release %s: %s", file.name, e)


class InlineUploadPipeline:
    """Package bytes into a self-contained handle without a remote round-trip."""

    def __init__(self, *, max_bytes: int = INLINE_MAX_BYTES) -> None:
        self.max_bytes = max_bytes

    async def upload(
        self,
        data: bytes,
        mime_type: str,
        display_name: str,
        observer: ProgressObserver | None = None,
    ) -> UploadedFile:
        tracker = ProgressTracker(observer)
        try:
            check_media_type(mime_type, display_name)
            tracker.status(STATUS_ENCODING)
            tracker.advance(PROGRESS_INLINE_ENCODING)
            handle = self._encode(data, mime_type, display_name)
        except UploadError:
            tracker.reset()
            raise
        tracker.complete()
        tracker.status(STATUS_READY)
        return handle

    def _encode(self, data: bytes, mime_type: str, display_name: str) -> UploadedFile:
        try:
            payload = bytes(data)
        except TypeError as e:
            raise UploadReadError(
                f"Could not read {display_name}: {e}", display_name=display_name
            ) from e
        if not payload:
            raise UploadReadError(f"{display_name} is empty.", display_name=display_name)
        if len(payload) > self.max_bytes:
            raise UploadReadError(
                f"{display_name} is too large to send inline "
                f"({len(payload)} bytes, limit {self.max_bytes}).",
                display_name=display_name,
            )
        digest = hashlib.sha256(payload).hexdigest()[:16]
        return UploadedFile(
            name=f"inline/{digest}",
            mime_type=mime_type,
            display_name=display_name,
            state=FileState.READY,
            inline_data=payload,
        )

    async def release(self, file: UploadedFile) -> None:
        # Inline handles hold no remote resources.
        return None


def create_upload_pipeline(
    config: FrozenConfig,
    uploads: UploadsCapability,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    telemetry: TelemetryContextProtocol | None = None,
) -> UploadPipeline:
    """Build the backend selected by ``config.upload_strategy``."""
    if config.upload_strategy == "inline":
        return InlineUploadPipeline(max_bytes=config.inline_max_bytes)
    poller = UploadPoller(
        uploads,
        interval=config.poll_interval,
        max_attempts=config.max_poll_attempts,
        sleep=sleep,
        telemetry=telemetry,
    )
    return RemoteUploadPipeline(uploads, poller=poller, telemetry=telemetry)
