"""File-based configuration loading.

Reads ``[tool.gemini_media]`` from the project's ``pyproject.toml`` and the
top-level table of ``~/.config/gemini_media.toml``. Both paths can be
overridden with ``GEMINI_MEDIA_PYPROJECT_PATH`` and
``GEMINI_MEDIA_CONFIG_HOME``.
"""

import os
from pathlib import Path
import tomllib
from typing import Any

TOOL_SECTION = "gemini_media"


class ConfigFileError(Exception):
    """Raised when a configuration file cannot be loaded."""

    def __init__(
        self, file_path: Path, message: str, cause: Exception | None = None
    ) -> None:
        """Initialize with file path, message, and optional cause."""
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(f"Config file error in {file_path}: {message}")


class FileConfigLoader:
    """Loads configuration from the project and home TOML files."""

    def load_project_config(self, project_root: Path | None = None) -> dict[str, Any]:
        """Load ``[tool.gemini_media]`` from pyproject.toml, or ``{}`` if absent.

        Raises:
            ConfigFileError: If the file exists but is not valid TOML or the
                section is not a table.
        """
        path = self._find_pyproject_toml(project_root)
        if path is None:
            return {}
        data = self._read_toml(path)
        section = data.get("tool", {}).get(TOOL_SECTION, {})
        if not isinstance(section, dict):
            raise ConfigFileError(path, f"[tool.{TOOL_SECTION}] must be a table")
        return dict(section)

    def load_home_config(self) -> dict[str, Any]:
        """Load the home configuration file, or ``{}`` if absent."""
        path = self.home_config_path()
        if not path.is_file():
            return {}
        return self._read_toml(path)

    def home_config_path(self) -> Path:
        override = os.getenv("GEMINI_MEDIA_CONFIG_HOME")
        if override:
            return Path(override)
        return Path.home() / ".config" / "gemini_media.toml"

    def _find_pyproject_toml(self, project_root: Path | None) -> Path | None:
        override = os.getenv("GEMINI_MEDIA_PYPROJECT_PATH")
        if override:
            path = Path(override)
            return path if path.is_file() else None

        start = (project_root or Path.cwd()).resolve()
        for directory in (start, *start.parents):
            candidate = directory / "pyproject.toml"
            if candidate.is_file():
                return candidate
        return None

    def _read_toml(self, path: Path) -> dict[str, Any]:
        try:
            with path.open(mode="rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigFileError(path, f"Failed to parse TOML: {e}", cause=e) from e
