import pytest

from gemini_media.core.exceptions import ValidationError
from gemini_media.prompts import StaticPromptResolver

pytestmark = pytest.mark.unit


@pytest.fixture
def resolver():
    return StaticPromptResolver(
        {
            "Paragraph": "Generate a paragraph that summarizes this video.",
            "Custom": lambda text: f"Call set_timecodes once using the following instructions: {text}",
            "Blank": "   ",
        }
    )


def test_static_prompt(resolver):
    assert resolver.resolve("Paragraph").startswith("Generate a paragraph")


def test_callable_prompt_receives_user_input(resolver):
    assert resolver.resolve("Custom", "find every goal").endswith("find every goal")


def test_callable_prompt_without_input(resolver):
    assert resolver.resolve("Custom").endswith("instructions: ")


def test_unknown_mode(resolver):
    with pytest.raises(ValidationError, match="Unknown mode"):
        resolver.resolve("Haiku")


def test_empty_prompt_is_rejected(resolver):
    with pytest.raises(ValidationError):
        resolver.resolve("Blank")


def test_modes_preserve_order(resolver):
    assert resolver.modes == ("Paragraph", "Custom", "Blank")
