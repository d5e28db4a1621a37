"""Environment variable configuration loading (``GEMINI_*``)."""

import os
from typing import Any

from .schema import FIELD_ORDER


class EnvironmentConfigLoader:
    """Loads the configuration fields that are explicitly set in the environment.

    Values are returned as raw strings; type coercion and validation happen
    once, on the merged configuration, in ``MediaSettings``.
    """

    prefix = "GEMINI_"

    def env_var(self, field: str) -> str:
        return f"{self.prefix}{field.upper()}"

    def load_env_config(self) -> dict[str, Any]:
        """Return only the fields present in the environment."""
        return {
            field: os.environ[self.env_var(field)]
            for field in FIELD_ORDER
            if self.env_var(field) in os.environ
        }
