"""Tests for configuration resolution and precedence.

Precedence: programmatic > environment > project file > home file > defaults.
Every test runs with ``GEMINI_*`` cleared and config files redirected to an
empty temporary directory (see ``conftest.py``).
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from gemini_media.config import ConfigFileError, resolve_config

pytestmark = pytest.mark.unit


def _write_pyproject(path: Path, body: str) -> None:
    path.write_text(f"[tool.gemini_media]\n{body}\n", encoding="utf-8")


def test_defaults():
    config = resolve_config()

    assert config.api_key is None
    assert config.model == "gemini-3-pro-preview"
    assert config.temperature == 0.5
    assert config.use_real_api is False
    assert config.max_attempts == 3
    assert config.retry_base_delay == 1.0
    assert config.retry_max_jitter == 1.0
    assert config.poll_interval == 2.0
    assert config.max_poll_attempts == 60
    assert config.upload_strategy == "remote"
    assert set(config.origin.values()) == {"default"}


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("GEMINI_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("GEMINI_UPLOAD_STRATEGY", "inline")

    config = resolve_config()

    assert config.max_attempts == 5
    assert config.upload_strategy == "inline"
    assert config.origin["max_attempts"] == "env"
    assert config.origin["model"] == "default"


def test_project_file_is_read():
    pyproject = Path(os.environ["GEMINI_MEDIA_PYPROJECT_PATH"])
    _write_pyproject(pyproject, 'model = "gemini-file"\npoll_interval = 0.5')

    config = resolve_config()

    assert config.model == "gemini-file"
    assert config.poll_interval == 0.5
    assert config.origin["model"] == "file"


def test_project_file_beats_home_file():
    home = Path(os.environ["GEMINI_MEDIA_CONFIG_HOME"])
    home.write_text('model = "gemini-home"\ntemperature = 0.1\n', encoding="utf-8")
    _write_pyproject(
        Path(os.environ["GEMINI_MEDIA_PYPROJECT_PATH"]), 'model = "gemini-project"'
    )

    config = resolve_config()

    assert config.model == "gemini-project"
    assert config.temperature == 0.1


def test_env_beats_file_and_programmatic_beats_env(monkeypatch):
    _write_pyproject(
        Path(os.environ["GEMINI_MEDIA_PYPROJECT_PATH"]), 'model = "gemini-project"'
    )
    monkeypatch.setenv("GEMINI_MODEL", "gemini-env")

    assert resolve_config().model == "gemini-env"

    config = resolve_config({"model": "gemini-code"})
    assert config.model == "gemini-code"
    assert config.origin["model"] == "programmatic"


def test_unknown_fields_are_ignored():
    config = resolve_config({"not_a_field": 1})
    assert not hasattr(config, "not_a_field")


def test_real_api_requires_key():
    with pytest.raises(ValueError, match="api_key is required"):
        resolve_config({"use_real_api": True})


def test_real_api_with_key_from_env(monkeypatch, mock_api_key):
    monkeypatch.setenv("GEMINI_API_KEY", mock_api_key)
    monkeypatch.setenv("GEMINI_USE_REAL_API", "true")

    config = resolve_config()

    assert config.use_real_api is True
    assert config.api_key == mock_api_key


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_attempts": 0},
        {"poll_interval": 0},
        {"temperature": 3.0},
        {"upload_strategy": "carrier-pigeon"},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValueError, match="Configuration validation failed"):
        resolve_config(overrides)


def test_malformed_project_file_raises():
    Path(os.environ["GEMINI_MEDIA_PYPROJECT_PATH"]).write_text(
        "[tool.gemini_media\n", encoding="utf-8"
    )
    with pytest.raises(ConfigFileError):
        resolve_config()


def test_api_key_is_redacted(mock_api_key):
    config = resolve_config({"api_key": mock_api_key})

    assert mock_api_key not in str(config)
    assert mock_api_key not in repr(config)
    assert mock_api_key not in repr(config.to_frozen())
    assert mock_api_key not in config.audit()
    assert "[REDACTED]" in config.audit()


def test_with_overrides_updates_origin():
    config = resolve_config().with_overrides(max_attempts=1, bogus=True)

    assert config.max_attempts == 1
    assert config.origin["max_attempts"] == "programmatic"
    assert config.to_frozen().max_attempts == 1
