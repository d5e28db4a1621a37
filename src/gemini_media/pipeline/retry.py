"""Retry policy for ambiguous generation responses."""

from __future__ import annotations

from dataclasses import dataclass
import random

from gemini_media.constants import MAX_ATTEMPTS, RETRY_BASE_DELAY, RETRY_MAX_JITTER
from gemini_media.core.types import Classification
from gemini_media.pipeline.classifier import is_terminal


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Exponential backoff with additive jitter and a hard attempt cap.

    ``delay(attempt) = base_delay * 2**attempt + jitter`` with jitter drawn
    uniformly from ``[0, max_jitter)``. Attempts are indexed from 0.
    """

    max_attempts: int = MAX_ATTEMPTS
    base_delay: float = RETRY_BASE_DELAY
    max_jitter: float = RETRY_MAX_JITTER

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay < 0 or self.max_jitter < 0:
            raise ValueError("base_delay and max_jitter must be >= 0")

    def delay(self, attempt: int, *, rng: random.Random | None = None) -> float:
        """Seconds to wait after the given attempt before the next one."""
        if attempt < 0:
            raise ValueError("attempt must be >= 0")
        draw = (rng or random).random()
        return self.base_delay * (2**attempt) + draw * self.max_jitter

    def should_retry(self, classification: Classification, attempt: int) -> bool:
        """Retry only ambiguous responses, and only while attempts remain."""
        if is_terminal(classification):
            return False
        return attempt < self.max_attempts - 1
