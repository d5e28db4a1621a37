"""Deterministic adapter used for tests and examples (no network)."""

from __future__ import annotations

import hashlib

from gemini_media.core.types import FileState, GenerationResponse, UploadedFile


class MockAdapter:
    """Echoes prompts as text and accepts every upload immediately."""

    def __init__(self) -> None:
        self.released: list[str] = []

    async def generate(self, *, prompt: str, file: UploadedFile) -> GenerationResponse:
        return GenerationResponse(text=f"echo: {prompt} [{file.display_name}]")

    async def upload(
        self, *, data: bytes, mime_type: str, display_name: str
    ) -> UploadedFile:
        digest = hashlib.sha256(data).hexdigest()[:12]
        return UploadedFile(
            name=f"files/mock-{digest}",
            mime_type=mime_type,
            display_name=display_name,
            state=FileState.READY,
            uri=f"mock://uploaded/{display_name}",
        )

    async def get_status(self, file: UploadedFile) -> UploadedFile:
        return file.with_state(FileState.READY)

    async def release(self, file: UploadedFile) -> None:
        self.released.append(file.name)
