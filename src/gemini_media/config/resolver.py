"""Configuration resolution with precedence handling.

Precedence, highest first:
Programmatic > Environment > Project file > Home file > Defaults
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .env_loader import EnvironmentConfigLoader
from .file_loader import FileConfigLoader
from .schema import FIELD_ORDER, MediaSettings
from .types import ConfigOrigin, ResolvedConfig

log = logging.getLogger(__name__)


class ConfigResolver:
    """Merges configuration from every source and validates the result."""

    def __init__(self) -> None:
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources.

        Raises:
            ValueError: If the merged configuration fails validation.
            ConfigFileError: If the project file is malformed.
        """
        merged: dict[str, Any] = MediaSettings.model_construct().to_dict()
        origin: dict[str, ConfigOrigin] = dict.fromkeys(merged, "default")

        layers: list[tuple[ConfigOrigin, dict[str, Any]]] = [
            ("file", self.file_loader.load_home_config()),
            ("file", self.file_loader.load_project_config(project_root)),
            ("env", self.env_loader.load_env_config()),
            ("programmatic", dict(programmatic or {})),
        ]
        for source, values in layers:
            for field, value in values.items():
                if field not in FIELD_ORDER:
                    log.debug("Ignoring unknown config field %r from %s", field, source)
                    continue
                merged[field] = value
                origin[field] = source

        try:
            settings = MediaSettings(**merged)
        except PydanticValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

        return ResolvedConfig(**settings.to_dict(), origin=origin)


def resolve_config(
    overrides: dict[str, Any] | None = None,
    *,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from programmatic overrides, env, files and defaults."""
    return ConfigResolver().resolve(overrides, project_root=project_root)
