"""Claude adapter: system hoisting, headers, content blocks and stop reasons."""
from __future__ import annotations

import httpx
import pytest

from llm_providers.anthropic import ClaudeProvider
from llm_providers.anthropic.helpers import map_stop_reason, map_tool_choice
from llm_providers.base.errors import ErrorCode, UnsupportedFeatureError
from llm_providers.base.interfaces import ToolCapable, VisionCapable
from llm_providers.base.models import Message, ToolSpec
from llm_providers.tests.utils import Recorder, json_response, sse_body

MESSAGE_BODY = {
    "content": [{"type": "text", "text": "Bonjour"}, {"type": "text", "text": "!"}],
    "model": "claude-sonnet-4-5-20250929",
    "stop_reason": "end_turn",
    "usage": {"input_tokens": 12, "output_tokens": 3},
}


def _provider(rec: Recorder, **options) -> ClaudeProvider:
    options.setdefault("api_key", "sk-ant")
    return ClaudeProvider(options, http_client=rec.client())


def test_headers_and_endpoint():
    rec = Recorder(json_response(MESSAGE_BODY))
    _provider(rec).chat_completion([Message.user("Hi")])
    req = rec.last
    assert req.headers["x-api-key"] == "sk-ant"  # nosec B101 - asserts are appropriate in unit tests
    assert req.headers["anthropic-version"] == "2023-06-01"  # nosec B101
    assert "authorization" not in req.headers  # nosec B101
    assert str(req.url) == "https://api.anthropic.com/v1/messages"  # nosec B101


def test_system_messages_are_hoisted():
    rec = Recorder(json_response(MESSAGE_BODY))
    response = _provider(rec).chat_completion(
        [Message.system("Be brief."), Message.user("Hi"), Message.system("Use French.")]
    )
    body = rec.body()
    assert body["system"] == "Be brief.\n\nUse French."  # nosec B101
    assert body["messages"] == [{"role": "user", "content": "Hi"}]  # nosec B101
    assert body["max_tokens"] == 4096  # nosec B101
    assert "temperature" not in body and "top_p" not in body  # nosec B101
    assert response.content == "Bonjour!"  # nosec B101
    assert response.usage.total_tokens == 15  # nosec B101
    assert response.finish_reason == "stop" and response.provider == "claude"  # nosec B101


def test_sampling_options_only_when_given():
    rec = Recorder(json_response(MESSAGE_BODY))
    _provider(rec).complete("Hi", temperature=0.2, top_p=0.8, stop_sequences=("END",), max_tokens=10)
    body = rec.body()
    assert body["temperature"] == 0.2 and body["top_p"] == 0.8  # nosec B101
    assert body["stop_sequences"] == ["END"] and body["max_tokens"] == 10  # nosec B101
    assert "system" not in body  # nosec B101


@pytest.mark.parametrize(
    "reason, expected",
    [("end_turn", "stop"), ("max_tokens", "length"), ("stop_sequence", "stop"), ("tool_use", "tool_calls"), ("pause_turn", "pause_turn")],
)
def test_stop_reason_mapping(reason, expected):
    assert map_stop_reason(reason) == expected  # nosec B101


@pytest.mark.parametrize(
    "choice, expected",
    [
        ("auto", {"type": "auto"}),
        ("none", {"type": "none"}),
        ("required", {"type": "any"}),
        ("get_weather", {"type": "tool", "name": "get_weather"}),
        ({"type": "any"}, {"type": "any"}),
        (42, {"type": "auto"}),
    ],
)
def test_tool_choice_mapping(choice, expected):
    assert map_tool_choice(choice) == expected  # nosec B101


def test_tool_use_blocks_become_tool_calls():
    rec = Recorder(
        json_response(
            {
                "content": [
                    {"type": "text", "text": "Checking."},
                    {"type": "tool_use", "id": "toolu_1", "name": "get_weather", "input": {"city": "Paris"}},
                ],
                "stop_reason": "tool_use",
                "usage": {"input_tokens": 30, "output_tokens": 10},
            }
        )
    )
    tool = ToolSpec(name="get_weather", parameters={"type": "object", "properties": {"city": {"type": "string"}}})
    response = _provider(rec).chat_completion_with_tools([Message.user("Weather?")], [tool], tool_choice="required")
    body = rec.body()
    assert body["tools"] == [  # nosec B101
        {"name": "get_weather", "description": "", "input_schema": tool.parameters}
    ]
    assert body["tool_choice"] == {"type": "any"}  # nosec B101
    assert response.content == "Checking."  # nosec B101
    assert response.finish_reason == "tool_calls"  # nosec B101
    assert response.tool_calls[0].id == "toolu_1"  # nosec B101
    assert response.tool_calls[0].arguments == {"city": "Paris"}  # nosec B101


def test_embeddings_are_unsupported_without_network():
    rec = Recorder()
    with pytest.raises(UnsupportedFeatureError) as ei:
        _provider(rec).embeddings("text")
    assert ei.value.code is ErrorCode.UNSUPPORTED  # nosec B101
    assert rec.requests == []  # nosec B101


def test_analyze_image_blocks():
    rec = Recorder(json_response({"content": [{"type": "text", "text": "A red square."}]}))
    response = _provider(rec).analyze_image(
        [
            "Describe",
            {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
            {"type": "image_url", "image_url": "https://example.com/b.jpg"},
        ],
        system_prompt="Be precise.",
    )
    body = rec.body()
    assert body["system"] == "Be precise."  # nosec B101
    assert body["messages"][0]["content"] == [  # nosec B101
        {"type": "text", "text": "Describe"},
        {"type": "image", "source": {"type": "base64", "media_type": "image/png", "data": "AAAA"}},
        {"type": "image", "source": {"type": "url", "url": "https://example.com/b.jpg"}},
    ]
    assert response.description == "A red square."  # nosec B101


def test_streaming_stops_at_message_stop():
    frames = [
        {"type": "message_start", "message": {"id": "m"}},
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "Hi"}},
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "!"}},
        {"type": "message_stop"},
    ]
    rec = Recorder(httpx.Response(200, content=sse_body(frames, done=False)))
    assert list(_provider(rec).stream_chat_completion([Message.user("Hi")])) == ["Hi", "!"]  # nosec B101
    assert rec.body()["stream"] is True  # nosec B101


def test_capabilities():
    provider = _provider(Recorder())
    assert isinstance(provider, ToolCapable) and isinstance(provider, VisionCapable)  # nosec B101
    assert not provider.supports_feature("embeddings")  # nosec B101
