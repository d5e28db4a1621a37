"""Configuration data types: resolve once, freeze, then flow."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

from .schema import FIELD_ORDER, UploadStrategy

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]


@dataclass(frozen=True, slots=True)
class FrozenConfig:
    """Immutable configuration consumed by the session and its components."""

    api_key: str | None
    model: str
    temperature: float
    use_real_api: bool
    max_attempts: int
    retry_base_delay: float
    retry_max_jitter: float
    poll_interval: float
    max_poll_attempts: int
    upload_strategy: UploadStrategy
    inline_max_bytes: int

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={'[REDACTED]' if name == 'api_key' and self.api_key else getattr(self, name)!r}"
            for name in FIELD_ORDER
        )
        return f"FrozenConfig({fields})"


class ResolvedConfig(NamedTuple):
    """Configuration after merging all sources, with per-field origins."""

    api_key: str | None
    model: str
    temperature: float
    use_real_api: bool
    max_attempts: int
    retry_base_delay: float
    retry_max_jitter: float
    poll_interval: float
    max_poll_attempts: int
    upload_strategy: UploadStrategy
    inline_max_bytes: int
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        values = self._asdict()
        if values["api_key"]:
            values["api_key"] = "[REDACTED]"
        values["origin"] = dict(self.origin)
        body = ", ".join(f"{k}={v!r}" for k, v in values.items())
        return f"ResolvedConfig({body})"

    def __repr__(self) -> str:
        return self.__str__()

    def to_frozen(self) -> FrozenConfig:
        """Drop audit metadata and freeze."""
        values = self._asdict()
        values.pop("origin")
        return FrozenConfig(**values)

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Return a copy with programmatic overrides applied. Unknown keys are ignored."""
        values = self._asdict()
        origin = dict(self.origin)
        for field, value in overrides.items():
            if field in FIELD_ORDER:
                values[field] = value
                origin[field] = "programmatic"
        values["origin"] = origin
        return ResolvedConfig(**values)

    def audit(self) -> str:
        """Human-readable origin report with the API key redacted."""
        lines = []
        for field in FIELD_ORDER:
            value = getattr(self, field)
            if field == "api_key" and value:
                value = "[REDACTED]"
            lines.append(f"{field}: {value!r} ({self.origin.get(field, 'default')})")
        return "\n".join(lines)
