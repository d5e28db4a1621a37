"""Typed rows for the three timecode function signatures.

A ``FunctionResult`` is interpreted only when its name starts with
``set_timecodes``. Text rows get escaped apostrophes (``\\'``) normalised,
which the model emits inside JSON-like arguments.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from gemini_media.core.exceptions import ValidationError
from gemini_media.core.types import FunctionResult
from gemini_media.functions import (
    SET_TIMECODES,
    SET_TIMECODES_WITH_NUMERIC_VALUES,
    SET_TIMECODES_WITH_OBJECTS,
)

log = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2})(?:\.\d+)?$")


def time_to_seconds(value: str) -> float:
    """Convert ``HH:MM:SS`` or ``MM:SS`` into seconds."""
    match = _TIME_RE.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid timecode: {value!r}")
    hours, minutes, seconds = match.groups()
    return int(hours or 0) * 3600 + int(minutes) * 60 + int(seconds)


def _unescape(text: str) -> str:
    return text.replace("\\'", "'")


class _Row(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    time: str

    @field_validator("time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        time_to_seconds(v)
        return v

    @property
    def seconds(self) -> float:
        return time_to_seconds(self.time)


class TextTimecode(_Row):
    text: str

    @field_validator("text")
    @classmethod
    def _normalise_text(cls, v: str) -> str:
        return _unescape(v)


class ObjectTimecode(TextTimecode):
    objects: list[str] = Field(default_factory=list)


class ValueTimecode(_Row):
    value: float


type Timecode = TextTimecode | ObjectTimecode | ValueTimecode

_ROW_TYPES: dict[str, type[_Row]] = {
    SET_TIMECODES: TextTimecode,
    SET_TIMECODES_WITH_OBJECTS: ObjectTimecode,
    SET_TIMECODES_WITH_NUMERIC_VALUES: ValueTimecode,
}


def is_timecode_call(result: FunctionResult) -> bool:
    return result.name.startswith(SET_TIMECODES)


def parse_timecodes(result: FunctionResult) -> list[Timecode]:
    """Parse the ``timecodes`` argument into typed rows.

    Unknown ``set_timecodes*`` variants fall back to text rows.

    Raises:
        ValidationError: If the call is not a timecode call or rows are malformed.
    """
    if not is_timecode_call(result):
        raise ValidationError(f"Not a timecode function: {result.name!r}")
    row_type = _ROW_TYPES.get(result.name, TextTimecode)
    rows: Any = result.args.get("timecodes", [])
    try:
        return list(TypeAdapter(list[row_type]).validate_python(rows))  # type: ignore[valid-type]
    except PydanticValidationError as e:
        log.debug("Malformed %s arguments: %s", result.name, e)
        raise ValidationError(f"Malformed {result.name} arguments: {e}") from e
