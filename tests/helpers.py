"""Shared fakes for supervisor and upload pipeline tests."""

import asyncio
from collections.abc import Iterable, Sequence

from gemini_media.core.types import (
    AnalysisRequest,
    FileState,
    FinishReason,
    FunctionCall,
    GenerationOutcome,
    GenerationResponse,
    UploadedFile,
)

EMPTY = GenerationResponse()


def text_response(text: str) -> GenerationResponse:
    return GenerationResponse(text=text, finish_reason=FinishReason.STOP)


def call_response(name: str, args: dict) -> GenerationResponse:
    return GenerationResponse(
        function_calls=(FunctionCall(name=name, args=args),),
        finish_reason=FinishReason.STOP,
    )


def blocked_response(reason: FinishReason) -> GenerationResponse:
    return GenerationResponse(finish_reason=reason)


def ready_file(name: str = "files/abc123") -> UploadedFile:
    return UploadedFile(
        name=name,
        mime_type="video/mp4",
        display_name="clip.mp4",
        state=FileState.READY,
        uri=f"https://generativelanguage.googleapis.com/v1beta/{name}",
    )


class RecordingSleep:
    """Async sleep replacement that records delays and returns immediately."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


class ScriptedGenerationAdapter:
    """Returns scripted responses (or raises scripted errors) in order.

    Once the script is exhausted the last entry repeats.
    """

    def __init__(self, script: Sequence[GenerationResponse | Exception]) -> None:
        self.script = list(script)
        self.calls: list[tuple[str, UploadedFile]] = []

    async def generate(self, *, prompt: str, file: UploadedFile) -> GenerationResponse:
        self.calls.append((prompt, file))
        index = min(len(self.calls) - 1, len(self.script) - 1)
        item = self.script[index]
        await asyncio.sleep(0)
        if isinstance(item, Exception):
            raise item
        return item


class GatedGenerationAdapter:
    """Blocks each call until the test releases the gate for its prompt."""

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}
        self.replies: dict[str, GenerationResponse | Exception] = {}
        self.started: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    def script(self, prompt: str, reply: GenerationResponse | Exception) -> None:
        self.gates[prompt] = asyncio.Event()
        self.started[prompt] = asyncio.Event()
        self.replies[prompt] = reply

    def release(self, prompt: str) -> None:
        self.gates[prompt].set()

    async def generate(self, *, prompt: str, file: UploadedFile) -> GenerationResponse:
        self.calls.append(prompt)
        self.started[prompt].set()
        await self.gates[prompt].wait()
        reply = self.replies[prompt]
        if isinstance(reply, Exception):
            raise reply
        return reply


class ScriptedUploads:
    """Upload capability whose observed states follow a script.

    The first state is returned by ``upload``; each ``get_status`` call
    returns the next one, repeating the last when exhausted.
    """

    def __init__(
        self,
        states: Iterable[FileState],
        *,
        upload_error: Exception | None = None,
        status_error: Exception | None = None,
    ) -> None:
        self.states = list(states)
        self.upload_error = upload_error
        self.status_error = status_error
        self.uploads = 0
        self.status_calls = 0
        self.released: list[str] = []

    def _handle(self, index: int) -> UploadedFile:
        state = self.states[min(index, len(self.states) - 1)]
        return UploadedFile(
            name="files/scripted",
            mime_type="video/mp4",
            display_name="clip.mp4",
            state=state,
            uri="https://example.invalid/files/scripted",
        )

    async def upload(
        self, *, data: bytes, mime_type: str, display_name: str
    ) -> UploadedFile:
        self.uploads += 1
        if self.upload_error is not None:
            raise self.upload_error
        return self._handle(0)

    async def get_status(self, file: UploadedFile) -> UploadedFile:
        self.status_calls += 1
        if self.status_error is not None:
            raise self.status_error
        return self._handle(self.status_calls)

    async def release(self, file: UploadedFile) -> None:
        self.released.append(file.name)


class RecordingObserver:
    """Supervisor observer that records every notification."""

    def __init__(self) -> None:
        self.started: list[int] = []
        self.loading: list[bool] = []
        self.delivered: list[tuple[int, GenerationOutcome]] = []
        self.settled: list[tuple[int, bool]] = []

    def request_started(self, request: AnalysisRequest) -> None:
        self.started.append(request.id)

    def loading_changed(self, loading: bool) -> None:
        self.loading.append(loading)

    def outcome_delivered(
        self, request: AnalysisRequest, outcome: GenerationOutcome
    ) -> None:
        self.delivered.append((request.id, outcome))

    def request_settled(self, request: AnalysisRequest, *, current: bool) -> None:
        self.settled.append((request.id, current))


class RecordingProgress:
    """Progress observer that records percentages and status lines."""

    def __init__(self) -> None:
        self.progress: list[int] = []
        self.statuses: list[str] = []

    def on_progress(self, percent: int) -> None:
        self.progress.append(percent)

    def on_status(self, status: str) -> None:
        self.statuses.append(status)
