"""Configuration for gemini_media.

Resolve once from programmatic overrides, ``GEMINI_*`` environment variables,
``[tool.gemini_media]`` in pyproject.toml, ``~/.config/gemini_media.toml`` and
defaults, then freeze into a ``FrozenConfig`` that flows through the runtime.
"""

from .file_loader import ConfigFileError, FileConfigLoader
from .resolver import ConfigResolver, resolve_config
from .schema import MediaSettings, UploadStrategy
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [
    "ConfigFileError",
    "ConfigOrigin",
    "ConfigResolver",
    "FileConfigLoader",
    "FrozenConfig",
    "MediaSettings",
    "ResolvedConfig",
    "SourceMap",
    "UploadStrategy",
    "resolve_config",
]
