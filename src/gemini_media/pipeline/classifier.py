"""Outcome classification for decoded generation responses.

Decision order, first match wins:

1. ``finish_reason == SAFETY``      -> ``SafetyBlocked``
2. ``finish_reason == RECITATION``  -> ``RecitationBlocked``
3. first function call with a name and arguments -> ``FunctionResult``
4. non-empty text                   -> ``TextResult``
5. anything else                    -> ``Ambiguous`` (retry or exhaust)

A policy block pre-empts any partial text or function data in the same
response.
"""

from __future__ import annotations

import logging

from gemini_media.core.types import (
    AMBIGUOUS,
    Classification,
    FinishReason,
    FunctionResult,
    GenerationResponse,
    RecitationBlocked,
    SafetyBlocked,
    TextResult,
)

log = logging.getLogger(__name__)


def classify(response: GenerationResponse) -> Classification:
    """Map a decoded response onto exactly one classification."""
    if response.finish_reason is FinishReason.SAFETY:
        return SafetyBlocked()
    if response.finish_reason is FinishReason.RECITATION:
        return RecitationBlocked()

    call = response.first_call
    if call is not None and call.name and call.args is not None:
        return FunctionResult(name=call.name, args=call.args)

    if response.text:
        return TextResult(text=response.text)

    log.debug(
        "Ambiguous response: finish_reason=%s calls=%d",
        response.finish_reason,
        len(response.function_calls),
    )
    return AMBIGUOUS


def is_terminal(classification: Classification) -> bool:
    """True when no further attempt should be made for this classification."""
    return isinstance(
        classification, FunctionResult | TextResult | SafetyBlocked | RecitationBlocked
    )
