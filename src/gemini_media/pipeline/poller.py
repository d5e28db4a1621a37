"""Status polling for files the remote service is still processing."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import logging
from typing import TYPE_CHECKING

from gemini_media.constants import FILE_POLL_INTERVAL, MAX_POLL_ATTEMPTS
from gemini_media.core.exceptions import UploadProcessingError, UploadTimeoutError
from gemini_media.core.types import FileState, UploadedFile
from gemini_media.messages import (
    UPLOAD_PROCESSING_FAILED_MESSAGE,
    UPLOAD_TIMEOUT_MESSAGE,
)
from gemini_media.telemetry import TelemetryContext

if TYPE_CHECKING:
    from gemini_media.pipeline.adapters.base import UploadsCapability
    from gemini_media.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

T_POLL = "upload.poll"


class UploadPoller:
    """Polls a pending upload until it is READY, FAILED, or out of attempts.

    A poll is one status call, always preceded by one ``interval`` sleep, so
    the wait is bounded by ``interval * max_attempts``. The handle passed in
    counts as the initial observation and is not itself a poll.
    """

    def __init__(
        self,
        uploads: UploadsCapability,
        *,
        interval: float = FILE_POLL_INTERVAL,
        max_attempts: int = MAX_POLL_ATTEMPTS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._uploads = uploads
        self.interval = interval
        self.max_attempts = max_attempts
        self._sleep = sleep
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    async def wait_until_ready(
        self,
        file: UploadedFile,
        *,
        on_poll: Callable[[int], None] | None = None,
    ) -> UploadedFile:
        """Return the READY handle or raise a terminal ``UploadError``.

        ``on_poll`` is called with the 1-based poll number before each wait.
        """
        current = file
        polls = 0
        while not current.state.is_terminal:
            if polls >= self.max_attempts:
                log.warning(
                    "File %s still %s after %d polls",
                    current.name,
                    current.state.value,
                    polls,
                )
                raise UploadTimeoutError(
                    UPLOAD_TIMEOUT_MESSAGE, display_name=current.display_name
                )
            polls += 1
            if on_poll is not None:
                on_poll(polls)
            await self._sleep(self.interval)
            with self._telemetry(T_POLL, attempt=polls) as tele:
                observed = await self._uploads.get_status(current)
                tele.count("polls")
            current = self._observe(current, observed)
            log.debug("Poll %d for %s: %s", polls, current.name, current.state.value)

        if current.state is FileState.FAILED:
            log.warning(
                "File %s failed processing: %s",
                current.name,
                current.error_message or "no detail",
            )
            raise UploadProcessingError(
                UPLOAD_PROCESSING_FAILED_MESSAGE, display_name=current.display_name
            )
        return current

    def _observe(self, previous: UploadedFile, observed: UploadedFile) -> UploadedFile:
        # State never returns to PENDING once processing has started.
        if (
            previous.state is FileState.PROCESSING
            and observed.state is FileState.PENDING
        ):
            log.warning("File %s reported PENDING after PROCESSING", observed.name)
            return observed.with_state(FileState.PROCESSING)
        return observed
