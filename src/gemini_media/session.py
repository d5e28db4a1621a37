"""Analysis session: one loaded media file, many analysis requests.

The session wires an upload pipeline and a request supervisor together and
keeps the presentation-facing state (progress, results, error messages).
Everything the presentation layer reads is plain data; upload failures and
request outcomes are converted to messages here.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import logging
from pathlib import Path
import random
from typing import TYPE_CHECKING

from gemini_media.config import FrozenConfig, resolve_config
from gemini_media.core.exceptions import UploadError, ValidationError
from gemini_media.core.types import (
    Abandoned,
    AnalysisRequest,
    Failed,
    Failure,
    FunctionResult,
    GenerationOutcome,
    Result,
    Success,
    TextResult,
    UploadedFile,
)
from gemini_media.messages import (
    NO_MEDIA_MESSAGE,
    outcome_error_message,
    upload_error_message,
)
from gemini_media.pipeline.adapters.gemini import GoogleGenAIAdapter
from gemini_media.pipeline.adapters.mock import MockAdapter
from gemini_media.pipeline.retry import RetryPolicy
from gemini_media.pipeline.supervisor import RequestSupervisor
from gemini_media.pipeline.upload import create_upload_pipeline, read_media
from gemini_media.timecodes import Timecode, is_timecode_call, parse_timecodes

if TYPE_CHECKING:
    from gemini_media.pipeline.adapters.base import GenerationAdapter
    from gemini_media.pipeline.upload import UploadPipeline
    from gemini_media.prompts import PromptResolver
    from gemini_media.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

SUPERSEDED_UPLOAD_MESSAGE = "Upload superseded by a newer file."


@dataclass
class SessionState:
    """Presentation-facing state of a session."""

    file: UploadedFile | None = None
    is_loading_media: bool = False
    upload_progress: int = 0
    upload_status: str = ""
    media_error: str | None = None

    active_mode: str | None = None
    is_loading: bool = False
    timecodes: list[Timecode] | None = None
    text_response: str | None = None
    api_error: str | None = None

    def clear_results(self) -> None:
        self.timecodes = None
        self.text_response = None
        self.api_error = None


class AnalysisSession:
    """Upload once, analyze many times; only the newest analysis is applied."""

    def __init__(
        self,
        adapter: GenerationAdapter,
        pipeline: UploadPipeline,
        resolver: PromptResolver,
        *,
        policy: RetryPolicy | None = None,
        telemetry: TelemetryContextProtocol | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: random.Random | None = None,
        on_settled: Callable[[AnalysisRequest], None] | None = None,
    ) -> None:
        self.state = SessionState()
        self.pipeline = pipeline
        self.resolver = resolver
        self.supervisor = RequestSupervisor(
            adapter,
            policy=policy,
            observer=self,
            telemetry=telemetry,
            sleep=sleep,
            rng=rng,
        )
        self._on_settled = on_settled
        self._upload_generation = 0

    # --- Media ---

    async def load_media(
        self, data: bytes, mime_type: str, display_name: str
    ) -> Result[UploadedFile, UploadError]:
        """Upload new media, replacing and releasing the current file."""
        self._upload_generation += 1
        generation = self._upload_generation
        # Requests against the outgoing file must not reach the new state.
        self.supervisor.cancel()

        previous = self.state.file
        self.state.file = None
        self.state.is_loading_media = True
        self.state.media_error = None
        self.state.upload_progress = 0
        self.state.clear_results()
        if previous is not None:
            await self.pipeline.release(previous)

        try:
            handle = await self.pipeline.upload(
                data,
                mime_type,
                display_name,
                observer=_UploadProgress(self, generation),
            )
        except UploadError as e:
            if self.is_current_upload(generation):
                self.state.media_error = upload_error_message(e)
            log.info("Upload of %s failed: %s", display_name, e)
            return Failure(e)
        finally:
            if self.is_current_upload(generation):
                self.state.is_loading_media = False
                self.state.upload_progress = 0

        if not self.is_current_upload(generation):
            await self.pipeline.release(handle)
            return Failure(UploadError(SUPERSEDED_UPLOAD_MESSAGE, display_name=display_name))

        self.state.file = handle
        return Success(handle)

    async def load_media_file(self, path: str | Path) -> Result[UploadedFile, UploadError]:
        """Read media from disk, then ``load_media``."""
        try:
            data, mime_type, display_name = read_media(path)
        except UploadError as e:
            self.state.media_error = upload_error_message(e)
            return Failure(e)
        return await self.load_media(data, mime_type, display_name)

    async def close(self) -> None:
        """Release the current file at the end of the session."""
        self.supervisor.cancel()
        if self.state.file is not None:
            file, self.state.file = self.state.file, None
            await self.pipeline.release(file)

    # --- Analysis ---

    async def analyze(
        self, mode: str, user_input: str | None = None
    ) -> GenerationOutcome | Abandoned:
        """Resolve the mode's prompt and run it against the loaded file."""
        file = self.state.file
        if file is None:
            self.state.api_error = NO_MEDIA_MESSAGE
            return Failed(message=NO_MEDIA_MESSAGE)
        try:
            prompt = self.resolver.resolve(mode, user_input)
        except ValidationError as e:
            self.supervisor.cancel()
            self.state.clear_results()
            self.state.api_error = str(e)
            return Failed(message=str(e))

        self.state.active_mode = mode
        return await self.supervisor.submit(prompt, file)

    def cancel(self) -> None:
        """Discard the in-flight analysis, if any."""
        self.supervisor.cancel()
        self.state.api_error = None

    # --- SupervisorObserver ---

    def request_started(self, request: AnalysisRequest) -> None:
        self.state.clear_results()

    def loading_changed(self, loading: bool) -> None:
        self.state.is_loading = loading

    def outcome_delivered(
        self, request: AnalysisRequest, outcome: GenerationOutcome
    ) -> None:
        match outcome:
            case FunctionResult() if is_timecode_call(outcome):
                try:
                    self.state.timecodes = parse_timecodes(outcome)
                except ValidationError as e:
                    self.state.api_error = str(e)
            case FunctionResult(name=name):
                log.warning("Ignoring unexpected function call %r", name)
            case TextResult(text=text):
                self.state.text_response = text
            case _:
                self.state.api_error = outcome_error_message(outcome)

    def request_settled(self, request: AnalysisRequest, *, current: bool) -> None:
        if self._on_settled is not None:
            self._on_settled(request)

    def is_current_upload(self, generation: int) -> bool:
        return generation == self._upload_generation


class _UploadProgress:
    """Applies progress from one upload while it is still the newest."""

    def __init__(self, session: AnalysisSession, generation: int) -> None:
        self._session = session
        self._generation = generation

    def on_progress(self, percent: int) -> None:
        if self._session.is_current_upload(self._generation):
            self._session.state.upload_progress = percent

    def on_status(self, status: str) -> None:
        if self._session.is_current_upload(self._generation):
            self._session.state.upload_status = status


def select_adapter(config: FrozenConfig) -> MockAdapter | GoogleGenAIAdapter:
    """Real adapter when ``use_real_api`` is set, otherwise the deterministic mock."""
    if not config.use_real_api:
        return MockAdapter()
    return GoogleGenAIAdapter(
        config.api_key, model=config.model, temperature=config.temperature
    )


def create_session(
    resolver: PromptResolver,
    config: FrozenConfig | None = None,
    *,
    adapter: GenerationAdapter | None = None,
    telemetry: TelemetryContextProtocol | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    on_settled: Callable[[AnalysisRequest], None] | None = None,
) -> AnalysisSession:
    """Build a session from resolved configuration.

    The adapter is used for both generation and uploads; it must also provide
    ``upload``/``get_status``/``release`` unless the inline strategy is used.
    """
    frozen = config or resolve_config().to_frozen()
    chosen = adapter or select_adapter(frozen)
    pipeline = create_upload_pipeline(
        frozen, chosen, sleep=sleep, telemetry=telemetry  # type: ignore[arg-type]
    )
    policy = RetryPolicy(
        max_attempts=frozen.max_attempts,
        base_delay=frozen.retry_base_delay,
        max_jitter=frozen.retry_max_jitter,
    )
    return AnalysisSession(
        chosen,
        pipeline,
        resolver,
        policy=policy,
        telemetry=telemetry,
        sleep=sleep,
        on_settled=on_settled,
    )
