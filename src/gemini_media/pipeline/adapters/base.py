"""Adapter protocols consumed by the supervisor and the upload pipeline.

Adapters own every provider SDK detail. They hand back neutral types from
``core.types``: a ``GenerationResponse`` decoded once at this boundary, and
``UploadedFile`` handles whose state is already mapped onto ``FileState``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gemini_media.core.types import GenerationResponse, UploadedFile


@runtime_checkable
class GenerationAdapter(Protocol):
    """Issues one generation call for a prompt and a ready file."""

    async def generate(
        self, *, prompt: str, file: UploadedFile
    ) -> GenerationResponse: ...


@runtime_checkable
class UploadsCapability(Protocol):
    """Remote file submission and status lookup."""

    async def upload(
        self, *, data: bytes, mime_type: str, display_name: str
    ) -> UploadedFile: ...

    async def get_status(self, file: UploadedFile) -> UploadedFile: ...

    async def release(self, file: UploadedFile) -> None: ...
