"""Boundary to the mode-resolution collaborator.

The supervisor treats prompts as opaque strings. Callers bring their own
catalog of modes; ``StaticPromptResolver`` only maps a mode name (and optional
free-text input) to a prompt.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Protocol

from gemini_media.core.exceptions import ValidationError

type PromptTemplate = str | Callable[[str], str]


class PromptResolver(Protocol):
    """Produces the prompt text for a mode."""

    def resolve(self, mode: str, user_input: str | None = None) -> str: ...


class StaticPromptResolver:
    """Resolve prompts from a fixed mapping of mode name to template.

    String templates are used verbatim. Callable templates receive the user's
    free-text input (an empty string when none was given).
    """

    def __init__(self, templates: Mapping[str, PromptTemplate]) -> None:
        self._templates = dict(templates)

    @property
    def modes(self) -> tuple[str, ...]:
        return tuple(self._templates)

    def resolve(self, mode: str, user_input: str | None = None) -> str:
        try:
            template = self._templates[mode]
        except KeyError:
            raise ValidationError(f"Unknown mode: {mode!r}") from None
        prompt = template(user_input or "") if callable(template) else template
        if not prompt.strip():
            raise ValidationError(f"Mode {mode!r} resolved to an empty prompt")
        return prompt
