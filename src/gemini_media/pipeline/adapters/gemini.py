"""Google GenAI adapter.

Wraps the async surface of ``google.genai.Client`` and decodes SDK objects
into the neutral types in ``core.types``. Nothing outside this module touches
SDK response shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
import io
import logging
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from gemini_media.constants import (
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    SYSTEM_INSTRUCTION,
)
from gemini_media.core.exceptions import APIError, ConfigurationError
from gemini_media.core.types import (
    FileState,
    FinishReason,
    FunctionCall,
    GenerationResponse,
    UploadedFile,
)
from gemini_media.functions import generation_tools

log = logging.getLogger(__name__)

_BLOCKED_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
)


def _field(obj: Any, *names: str) -> Any:
    """Read the first present attribute or key among ``names``."""
    for name in names:
        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
        elif hasattr(obj, name):
            return getattr(obj, name)
    return None


def _decode_call(raw: Any) -> FunctionCall | None:
    name = _field(raw, "name")
    if not name:
        return None
    args = _field(raw, "args")
    return FunctionCall(name=str(name), args=dict(args) if args is not None else None)


def decode_response(response: Any) -> GenerationResponse:
    """Decode an SDK response (or an equivalent mapping) into a typed record.

    Text is assembled from non-thought text parts of the first candidate, so
    that responses mixing function calls and text decode without SDK warnings.
    Mappings may carry a top-level ``text`` and ``function_calls`` instead.
    """
    candidates = _field(response, "candidates") or ()
    first = candidates[0] if candidates else None
    finish_reason = FinishReason.parse(_field(first, "finish_reason", "finishReason"))

    calls: list[FunctionCall] = []
    text_chunks: list[str] = []
    content = _field(first, "content")
    for part in _field(content, "parts") or ():
        raw_call = _field(part, "function_call", "functionCall")
        if raw_call is not None:
            decoded = _decode_call(raw_call)
            if decoded is not None:
                calls.append(decoded)
        text = _field(part, "text")
        if isinstance(text, str) and text and not _field(part, "thought"):
            text_chunks.append(text)

    if not calls:
        for raw_call in _field(response, "function_calls", "functionCalls") or ():
            decoded = _decode_call(raw_call)
            if decoded is not None:
                calls.append(decoded)

    top_text = _field(response, "text") if isinstance(response, Mapping) else None
    text = top_text if isinstance(top_text, str) else "".join(text_chunks) or None

    return GenerationResponse(
        function_calls=tuple(calls),
        text=text,
        finish_reason=finish_reason,
    )


def to_uploaded_file(
    raw: Any, *, display_name: str | None = None, mime_type: str | None = None
) -> UploadedFile:
    """Convert an SDK ``File`` into an ``UploadedFile`` handle."""
    error = _field(raw, "error")
    return UploadedFile(
        name=str(_field(raw, "name")),
        mime_type=_field(raw, "mime_type") or mime_type or "application/octet-stream",
        display_name=_field(raw, "display_name") or display_name or "",
        state=FileState.from_provider(_field(raw, "state")),
        uri=_field(raw, "uri"),
        error_message=_field(error, "message") if error is not None else None,
    )


class GoogleGenAIAdapter:
    """Generation and Files API adapter backed by ``google-genai``."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        client: genai.Client | None = None,
    ) -> None:
        """Create an adapter from an API key or an existing client."""
        if client is None:
            if not api_key:
                raise ConfigurationError("api_key is required for GoogleGenAIAdapter")
            client = genai.Client(api_key=api_key)
        self._client = client
        self.model = model
        self.temperature = temperature

    def generation_config(self) -> types.GenerateContentConfig:
        """Build the request config shared by every attempt."""
        return types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=self.temperature,
            tools=generation_tools(),
            safety_settings=[
                types.SafetySetting(
                    category=category,
                    threshold=types.HarmBlockThreshold.BLOCK_ONLY_HIGH,
                )
                for category in _BLOCKED_CATEGORIES
            ],
        )

    def file_part(self, file: UploadedFile) -> types.Part:
        if file.inline_data is not None:
            return types.Part.from_bytes(data=file.inline_data, mime_type=file.mime_type)
        if not file.uri:
            raise ValueError(f"File {file.name!r} has neither a URI nor inline data")
        return types.Part.from_uri(file_uri=file.uri, mime_type=file.mime_type)

    async def generate(self, *, prompt: str, file: UploadedFile) -> GenerationResponse:
        """Issue one generation call.

        Raises:
            APIError: If the service rejects the call. The provider message is
                kept so it can be shown to the user.
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=types.Content(
                    role="user",
                    parts=[types.Part.from_text(text=prompt), self.file_part(file)],
                ),
                config=self.generation_config(),
            )
        except genai_errors.APIError as e:
            log.debug("Generation call failed with %s %s", e.code, e.status)
            raise APIError(e.message or str(e)) from e
        return decode_response(response)

    async def upload(
        self, *, data: bytes, mime_type: str, display_name: str
    ) -> UploadedFile:
        uploaded = await self._client.aio.files.upload(
            file=io.BytesIO(data),
            config=types.UploadFileConfig(
                display_name=display_name, mime_type=mime_type
            ),
        )
        return to_uploaded_file(uploaded, display_name=display_name, mime_type=mime_type)

    async def get_status(self, file: UploadedFile) -> UploadedFile:
        raw = await self._client.aio.files.get(name=file.name)
        return to_uploaded_file(
            raw, display_name=file.display_name, mime_type=file.mime_type
        )

    async def release(self, file: UploadedFile) -> None:
        """Delete a remote file. Inline payloads have nothing to release."""
        if file.is_inline:
            return
        await self._client.aio.files.delete(name=file.name)
        log.debug("Released remote file %s", file.name)
