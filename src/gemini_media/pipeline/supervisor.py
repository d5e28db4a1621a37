"""Request supervisor: attempts, retries, classification and supersession.

Each ``submit`` allocates a new, strictly increasing request id and records it
as current. Every checkpoint (before an attempt, after a response arrives,
before delivery) compares the request's id with the current token and returns
an ``Abandoned`` sentinel when they differ. Only the newest request can
therefore reach observers, whatever order the underlying calls complete in.

Cancellation is cooperative: ``cancel()`` advances the token without starting
a request. A call already in flight keeps running at the transport level and
its result is discarded at the next checkpoint.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import logging
import random
from typing import TYPE_CHECKING, Protocol

from gemini_media.core.types import (
    Abandoned,
    AnalysisRequest,
    Classification,
    Failed,
    GenerationOutcome,
    Inconclusive,
    UploadedFile,
)
from gemini_media.messages import UNKNOWN_ERROR_MESSAGE
from gemini_media.pipeline.classifier import classify, is_terminal
from gemini_media.pipeline.retry import RetryPolicy
from gemini_media.telemetry import TelemetryContext

if TYPE_CHECKING:
    from gemini_media.pipeline.adapters.base import GenerationAdapter
    from gemini_media.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

T_REQUEST = "supervisor.request"
T_ATTEMPT = "supervisor.attempt"
T_BACKOFF = "supervisor.backoff"


class SupervisorObserver(Protocol):
    """Receives lifecycle notifications for submitted requests."""

    def request_started(self, request: AnalysisRequest) -> None: ...

    def loading_changed(self, loading: bool) -> None: ...

    def outcome_delivered(
        self, request: AnalysisRequest, outcome: GenerationOutcome
    ) -> None: ...

    def request_settled(self, request: AnalysisRequest, *, current: bool) -> None: ...


class NullObserver:
    """Observer that ignores every notification."""

    def request_started(self, request: AnalysisRequest) -> None:
        pass

    def loading_changed(self, loading: bool) -> None:
        pass

    def outcome_delivered(
        self, request: AnalysisRequest, outcome: GenerationOutcome
    ) -> None:
        pass

    def request_settled(self, request: AnalysisRequest, *, current: bool) -> None:
        pass


class RequestSupervisor:
    """Owns the lifecycle of analysis requests against one generation adapter."""

    def __init__(
        self,
        adapter: GenerationAdapter,
        *,
        policy: RetryPolicy | None = None,
        observer: SupervisorObserver | None = None,
        telemetry: TelemetryContextProtocol | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._adapter = adapter
        self.policy = policy or RetryPolicy()
        self._observer: SupervisorObserver = observer or NullObserver()
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()
        self._sleep = sleep
        self._rng = rng
        self._last_issued = 0
        self._current_id = 0
        self.in_progress = False

    @property
    def current_id(self) -> int:
        return self._current_id

    def is_current(self, request_id: int) -> bool:
        return request_id == self._current_id

    def _advance(self) -> int:
        self._last_issued += 1
        self._current_id = self._last_issued
        return self._current_id

    def begin(self, prompt: str, file: UploadedFile) -> AnalysisRequest:
        """Create a request and make it current. Supersedes any earlier request."""
        request = AnalysisRequest(id=self._advance(), prompt=prompt, file=file)
        self._set_loading(True)
        self._observer.request_started(request)
        return request

    def cancel(self) -> None:
        """Invalidate the current request without starting a new one."""
        stale = self._current_id
        self._advance()
        self._set_loading(False)
        log.debug("Cancelled request %d", stale)

    async def submit(
        self, prompt: str, file: UploadedFile
    ) -> GenerationOutcome | Abandoned:
        """Run a new request to completion, or until it is superseded."""
        return await self.run(self.begin(prompt, file))

    async def run(self, request: AnalysisRequest) -> GenerationOutcome | Abandoned:
        """Drive an already-begun request and deliver its outcome if still current."""
        try:
            with self._telemetry(T_REQUEST, request_id=request.id):
                try:
                    result = await self._attempt_loop(request)
                except Exception as e:
                    result = self._failure(request, e)

            stale = self._checkpoint(request, "delivery")
            if stale is not None:
                return stale
            if isinstance(result, Abandoned):
                return result
            self._observer.outcome_delivered(request, result)
            return result
        finally:
            current = self.is_current(request.id)
            if current:
                self._set_loading(False)
            self._observer.request_settled(request, current=current)

    async def _attempt_loop(
        self, request: AnalysisRequest
    ) -> GenerationOutcome | Abandoned:
        attempts = self.policy.max_attempts
        for attempt in range(attempts):
            stale = self._checkpoint(request, "attempt")
            if stale is not None:
                return stale

            with self._telemetry(T_ATTEMPT, request_id=request.id, attempt=attempt):
                response = await self._adapter.generate(
                    prompt=request.prompt, file=request.file
                )

            stale = self._checkpoint(request, "response")
            if stale is not None:
                return stale

            classification: Classification = classify(response)
            log.debug(
                "Request %d attempt %d/%d classified as %s",
                request.id,
                attempt + 1,
                attempts,
                type(classification).__name__,
            )
            if is_terminal(classification):
                return classification  # type: ignore[return-value]

            if self.policy.should_retry(classification, attempt):
                delay = self.policy.delay(attempt, rng=self._rng)
                with self._telemetry(T_BACKOFF, request_id=request.id, attempt=attempt):
                    log.debug("Request %d backing off %.2fs", request.id, delay)
                    await self._sleep(delay)

        log.info("Request %d inconclusive after %d attempts", request.id, attempts)
        return Inconclusive(attempts=attempts)

    def _checkpoint(self, request: AnalysisRequest, where: str) -> Abandoned | None:
        if self.is_current(request.id):
            return None
        log.debug(
            "Request %d superseded by %d at %s checkpoint",
            request.id,
            self._current_id,
            where,
        )
        self._telemetry.count("supervisor.abandoned", checkpoint=where)
        return Abandoned(request_id=request.id)

    def _failure(
        self, request: AnalysisRequest, error: Exception
    ) -> Failed | Abandoned:
        if not self.is_current(request.id):
            log.debug("Discarding error from superseded request %d: %s", request.id, error)
            return Abandoned(request_id=request.id)
        log.warning("Request %d failed: %s", request.id, error, exc_info=True)
        return Failed(message=str(error) or UNKNOWN_ERROR_MESSAGE)

    def _set_loading(self, loading: bool) -> None:
        if self.in_progress == loading:
            return
        self.in_progress = loading
        self._observer.loading_changed(loading)
