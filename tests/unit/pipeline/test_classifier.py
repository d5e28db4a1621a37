import pytest

from gemini_media.core.types import (
    AMBIGUOUS,
    FinishReason,
    FunctionCall,
    FunctionResult,
    GenerationResponse,
    RecitationBlocked,
    SafetyBlocked,
    TextResult,
)
from gemini_media.pipeline.classifier import classify, is_terminal
from tests.helpers import EMPTY, call_response, text_response

pytestmark = pytest.mark.unit


def test_safety_finish_reason_blocks():
    assert classify(GenerationResponse(finish_reason=FinishReason.SAFETY)) == SafetyBlocked()


def test_recitation_finish_reason_blocks():
    response = GenerationResponse(finish_reason=FinishReason.RECITATION)
    assert classify(response) == RecitationBlocked()


def test_policy_block_preempts_partial_text_and_calls():
    response = GenerationResponse(
        function_calls=(FunctionCall(name="set_timecodes", args={"timecodes": []}),),
        text="partial",
        finish_reason=FinishReason.SAFETY,
    )
    assert classify(response) == SafetyBlocked()


def test_function_call_beats_text():
    response = GenerationResponse(
        function_calls=(FunctionCall(name="set_timecodes", args={"timecodes": []}),),
        text="also text",
        finish_reason=FinishReason.STOP,
    )
    result = classify(response)
    assert isinstance(result, FunctionResult)
    assert result.name == "set_timecodes"
    assert dict(result.args) == {"timecodes": []}


def test_text_only():
    assert classify(text_response("summary")) == TextResult(text="summary")


def test_function_call_without_args_falls_through_to_text():
    response = GenerationResponse(
        function_calls=(FunctionCall(name="set_timecodes", args=None),),
        text="fallback",
    )
    assert classify(response) == TextResult(text="fallback")


def test_empty_function_args_still_count():
    result = classify(call_response("set_timecodes", {}))
    assert isinstance(result, FunctionResult)


@pytest.mark.parametrize(
    "response",
    [
        EMPTY,
        GenerationResponse(text=""),
        GenerationResponse(finish_reason=FinishReason.STOP),
        GenerationResponse(finish_reason=FinishReason.MAX_TOKENS),
    ],
)
def test_unusable_responses_are_ambiguous(response):
    assert classify(response) is AMBIGUOUS
    assert not is_terminal(classify(response))


def test_terminal_classifications():
    assert is_terminal(SafetyBlocked())
    assert is_terminal(RecitationBlocked())
    assert is_terminal(TextResult(text="x"))
    assert is_terminal(FunctionResult(name="f", args={}))
