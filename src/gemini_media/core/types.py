"""Core data types that flow between the upload pipeline and the supervisor.

Everything here is immutable. Requests are never mutated after creation; a
retry is a new call that shares the request's id and prompt. Provider
responses are decoded once, at the adapter boundary, into
``GenerationResponse`` so that classification works on a typed record rather
than on ad-hoc attribute probing.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from types import MappingProxyType
import typing

T = typing.TypeVar("T")


def _freeze_mapping(
    m: dict[str, T] | typing.Mapping[str, T] | None,
) -> typing.Mapping[str, T] | None:
    """Return an immutable mapping view or None."""
    if m is None or isinstance(m, MappingProxyType):
        return m
    return MappingProxyType(dict(m))


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result Monad ---

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful result."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed result, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

# --- Uploaded files ---


class FileState(str, Enum):
    """Lifecycle state of an uploaded file.

    Transitions are monotonic: PENDING -> PROCESSING (repeatable) -> READY or
    FAILED. A file never returns to PENDING.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (FileState.READY, FileState.FAILED)

    @classmethod
    def from_provider(cls, state: object) -> FileState:
        """Map a provider state (enum member or string) onto FileState.

        ``ACTIVE`` is the Files API name for a ready file. Unknown or
        unspecified states count as PENDING.
        """
        raw = getattr(state, "name", state)
        name = str(raw or "").upper()
        mapping = {
            "PROCESSING": cls.PROCESSING,
            "ACTIVE": cls.READY,
            "READY": cls.READY,
            "FAILED": cls.FAILED,
        }
        return mapping.get(name, cls.PENDING)


@dataclasses.dataclass(frozen=True, slots=True)
class UploadedFile:
    """A file accepted by the processing service, or an inline payload.

    Exactly one of ``uri`` (remote handle) or ``inline_data`` (self-contained
    payload) identifies the content once the file is READY.
    """

    name: str
    mime_type: str
    display_name: str
    state: FileState = FileState.PENDING
    uri: str | None = None
    inline_data: bytes | None = dataclasses.field(default=None, repr=False)
    error_message: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants for type safety."""
        _require(
            condition=isinstance(self.name, str) and self.name.strip() != "",
            message="must be a non-empty str",
            field_name="name",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.mime_type, str) and self.mime_type.strip() != "",
            message="must be a non-empty str",
            field_name="mime_type",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.state, FileState),
            message="must be a FileState",
            field_name="state",
            exc=TypeError,
        )

    @property
    def is_inline(self) -> bool:
        return self.inline_data is not None

    @property
    def is_ready(self) -> bool:
        return self.state is FileState.READY

    def with_state(self, state: FileState, **changes: typing.Any) -> UploadedFile:
        """Return a copy in a new state."""
        return dataclasses.replace(self, state=state, **changes)


# --- Requests ---


@dataclasses.dataclass(frozen=True, slots=True)
class AnalysisRequest:
    """One generation attempt-sequence.

    ``id`` is only ever compared against the supervisor's current token; it
    is never used for lookup.
    """

    id: int
    prompt: str
    file: UploadedFile

    def __post_init__(self) -> None:
        """Validate invariants for type safety."""
        _require(
            condition=isinstance(self.prompt, str) and self.prompt.strip() != "",
            message="must be a non-empty str",
            field_name="prompt",
            exc=TypeError,
        )
        _require(
            condition=self.file.is_ready,
            message=f"must be READY, got {self.file.state.value!r}",
            field_name="file",
        )


# --- Decoded provider responses ---


class FinishReason(str, Enum):
    """Finish reason reported on the first response candidate."""

    STOP = "STOP"
    MAX_TOKENS = "MAX_TOKENS"
    SAFETY = "SAFETY"
    RECITATION = "RECITATION"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: object) -> FinishReason | None:
        if value is None:
            return None
        raw = str(getattr(value, "name", value)).upper()
        if raw.startswith("FINISH_REASON_"):
            raw = raw.removeprefix("FINISH_REASON_")
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


@dataclasses.dataclass(frozen=True, slots=True)
class FunctionCall:
    """A function the model asked to invoke."""

    name: str
    args: typing.Mapping[str, typing.Any] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", _freeze_mapping(self.args))


@dataclasses.dataclass(frozen=True, slots=True)
class GenerationResponse:
    """A provider response decoded at the adapter boundary."""

    function_calls: tuple[FunctionCall, ...] = ()
    text: str | None = None
    finish_reason: FinishReason | None = None

    @property
    def first_call(self) -> FunctionCall | None:
        return self.function_calls[0] if self.function_calls else None


# --- Outcomes ---


@dataclasses.dataclass(frozen=True, slots=True)
class FunctionResult:
    """The model invoked one of the declared functions."""

    name: str
    args: typing.Mapping[str, typing.Any]


@dataclasses.dataclass(frozen=True, slots=True)
class TextResult:
    """The model answered with free text."""

    text: str


@dataclasses.dataclass(frozen=True, slots=True)
class SafetyBlocked:
    """The service refused to answer on safety grounds."""


@dataclasses.dataclass(frozen=True, slots=True)
class RecitationBlocked:
    """The service refused to answer on recitation grounds."""


@dataclasses.dataclass(frozen=True, slots=True)
class Inconclusive:
    """No usable signal after all attempts."""

    attempts: int = 0


@dataclasses.dataclass(frozen=True, slots=True)
class Failed:
    """A transport or programming error ended the request."""

    message: str


type GenerationOutcome = (
    FunctionResult | TextResult | SafetyBlocked | RecitationBlocked | Inconclusive | Failed
)


@dataclasses.dataclass(frozen=True, slots=True)
class Ambiguous:
    """Classifier verdict for an empty or unusable response. Never delivered."""


@dataclasses.dataclass(frozen=True, slots=True)
class Abandoned:
    """Returned instead of an outcome when a newer request superseded this one."""

    request_id: int


type Classification = FunctionResult | TextResult | SafetyBlocked | RecitationBlocked | Ambiguous

AMBIGUOUS = Ambiguous()
