"""Configuration schema and validation using Pydantic.

Validates and coerces values from every source (environment, files,
programmatic) into the correct types with defaults. Environment variables use
the ``GEMINI_`` prefix.
"""

from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_media.constants import (
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    FILE_POLL_INTERVAL,
    INLINE_MAX_BYTES,
    MAX_ATTEMPTS,
    MAX_POLL_ATTEMPTS,
    RETRY_BASE_DELAY,
    RETRY_MAX_JITTER,
)

UploadStrategy = Literal["remote", "inline"]

FIELD_ORDER = (
    "api_key",
    "model",
    "temperature",
    "use_real_api",
    "max_attempts",
    "retry_base_delay",
    "retry_max_jitter",
    "poll_interval",
    "max_poll_attempts",
    "upload_strategy",
    "inline_max_bytes",
)


class MediaSettings(BaseSettings):
    """Pydantic settings schema for gemini_media configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Google Gemini API key")
    model: str = Field(default=DEFAULT_MODEL, min_length=1)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    use_real_api: bool = Field(
        default=False, description="Use the Google GenAI adapter instead of the mock"
    )

    # --- Supervisor ---
    max_attempts: int = Field(default=MAX_ATTEMPTS, ge=1)
    retry_base_delay: float = Field(default=RETRY_BASE_DELAY, ge=0.0)
    retry_max_jitter: float = Field(default=RETRY_MAX_JITTER, ge=0.0)

    # --- Upload pipeline ---
    poll_interval: float = Field(default=FILE_POLL_INTERVAL, gt=0.0)
    max_poll_attempts: int = Field(default=MAX_POLL_ATTEMPTS, ge=1)
    upload_strategy: UploadStrategy = Field(default="remote")
    inline_max_bytes: int = Field(default=INLINE_MAX_BYTES, ge=1)

    @model_validator(mode="after")
    def validate_api_key_requirement(self) -> "MediaSettings":
        """Ensure api_key is provided when use_real_api is True."""
        if self.use_real_api and not self.api_key:
            raise ValueError(
                "api_key is required when use_real_api=True. "
                "Set GEMINI_API_KEY, provide it in a config file, "
                "or pass it programmatically."
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary of every field, in display order."""
        return {name: getattr(self, name) for name in FIELD_ORDER}
