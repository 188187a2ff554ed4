"""Domain model behavior: derived totals, predicates and vector helpers."""
from __future__ import annotations

import dataclasses

import pytest
from pydantic import ValidationError

from llm_providers.base.models import (
    CompletionResponse,
    ConnectionTestResult,
    EmbeddingResponse,
    Message,
    ToolCall,
    ToolSpec,
    UsageStatistics,
    VisionResponse,
)


def test_total_tokens_is_derived():
    usage = UsageStatistics(prompt_tokens=5, completion_tokens=2)
    assert usage.total_tokens == 7  # nosec B101 - asserts are appropriate in unit tests
    with pytest.raises(dataclasses.FrozenInstanceError):
        usage.total_tokens = 99  # type: ignore[misc]


def test_from_tokens_clamps_negative_counts():
    usage = UsageStatistics.from_tokens(-3, 4)
    assert (usage.prompt_tokens, usage.completion_tokens, usage.total_tokens) == (0, 4, 4)  # nosec B101


def test_usage_dict_includes_cost_only_when_known():
    assert "estimated_cost" not in UsageStatistics(1, 1).to_dict()  # nosec B101
    assert UsageStatistics(1, 1, 0.25).to_dict()["estimated_cost"] == 0.25  # nosec B101


@pytest.mark.parametrize(
    "reason, truncated, filtered, complete",
    [
        ("stop", False, False, True),
        ("length", True, False, False),
        ("content_filter", False, True, False),
        ("tool_calls", False, False, False),
    ],
)
def test_completion_predicates(reason, truncated, filtered, complete):
    response = CompletionResponse(content="x", model="m", finish_reason=reason)
    assert response.was_truncated() is truncated  # nosec B101
    assert response.was_filtered() is filtered  # nosec B101
    assert response.is_complete() is complete  # nosec B101


def test_completion_text_alias_and_tool_calls():
    call = ToolCall(id="c1", name="get_weather", arguments={"city": "Oslo"})
    response = CompletionResponse(content="", model="m", finish_reason="tool_calls", tool_calls=(call,))
    assert response.text == ""  # nosec B101
    assert response.has_tool_calls()  # nosec B101
    assert not CompletionResponse(content="hi", model="m").has_tool_calls()  # nosec B101


def test_embedding_accessors():
    response = EmbeddingResponse(embeddings=((0.1, 0.2, 0.3), (0.4, 0.5, 0.6)), model="e")
    assert response.vector == (0.1, 0.2, 0.3)  # nosec B101
    assert response.count == 2  # nosec B101
    assert response.dimensions == 3  # nosec B101
    empty = EmbeddingResponse(embeddings=(), model="e")
    assert empty.vector == () and empty.dimensions == 0  # nosec B101


def test_normalize_vector_unit_length_and_zero_vector():
    assert EmbeddingResponse.normalize_vector([3.0, 4.0]) == pytest.approx([0.6, 0.8])  # nosec B101
    assert EmbeddingResponse.normalize_vector([0.0, 0.0]) == [0.0, 0.0]  # nosec B101


def test_cosine_similarity():
    assert EmbeddingResponse.cosine_similarity([1, 0], [1, 0]) == pytest.approx(1.0)  # nosec B101
    assert EmbeddingResponse.cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)  # nosec B101
    assert EmbeddingResponse.cosine_similarity([1, 2], [-1, -2]) == pytest.approx(-1.0)  # nosec B101
    assert EmbeddingResponse.cosine_similarity([0, 0], [1, 1]) == 0.0  # nosec B101
    with pytest.raises(ValueError):
        EmbeddingResponse.cosine_similarity([1, 2, 3], [1, 2])


def test_vision_confidence_threshold():
    assert VisionResponse("a cat", "m", confidence=0.9).meets_confidence(0.8)  # nosec B101
    assert not VisionResponse("a cat", "m", confidence=0.5).meets_confidence(0.8)  # nosec B101
    assert not VisionResponse("a cat", "m").meets_confidence(0.0)  # nosec B101
    assert VisionResponse("a cat", "m").text == "a cat"  # nosec B101


def test_message_rejects_unknown_role():
    with pytest.raises(ValueError):
        Message("narrator", "hello")  # type: ignore[arg-type]


def test_message_helpers():
    msg = Message.user([{"type": "text", "text": "look"}, {"type": "image_url", "image_url": {"url": "u"}}])
    assert msg.is_structured()  # nosec B101
    assert msg.text_or_joined() == "look\n[image_url]"  # nosec B101
    assert Message.from_dict({"role": "assistant", "content": None}).content == ""  # nosec B101
    assert Message.system("s").to_dict() == {"role": "system", "content": "s"}  # nosec B101


def test_tool_spec_accepts_openai_shape():
    spec = ToolSpec.from_any(
        {"type": "function", "function": {"name": "lookup", "description": "d", "parameters": {"type": "object"}}}
    )
    assert spec.name == "lookup" and spec.parameters == {"type": "object"}  # nosec B101
    assert spec.to_openai()["function"]["name"] == "lookup"  # nosec B101
    assert ToolSpec.from_any(spec) is spec  # nosec B101


def test_tool_spec_requires_name():
    with pytest.raises(ValidationError):
        ToolSpec(name="")


def test_connection_result_dict():
    result = ConnectionTestResult(True, "ok", {"m": "Model"})
    assert result.to_dict() == {"success": True, "message": "ok", "models": {"m": "Model"}, "verified": False}  # nosec B101
