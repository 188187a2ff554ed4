"""OpenAI adapter: wire payloads and response normalization."""
from __future__ import annotations

import httpx
import pytest

from llm_providers.base.errors import ErrorCode, ProviderConnectionError, ProviderResponseError, ResponseDecodeError
from llm_providers.base.interfaces import StreamingCapable, ToolCapable, VisionCapable
from llm_providers.base.models import Message, ToolSpec
from llm_providers.openai import OPENAI_MODELS, OpenAiProvider
from llm_providers.tests.utils import Recorder, json_response, sse_body

CHAT_BODY = {
    "choices": [{"message": {"content": "Hello!"}, "finish_reason": "stop"}],
    "usage": {"prompt_tokens": 5, "completion_tokens": 2},
    "model": "gpt-5.2",
}


def _provider(rec: Recorder, **options) -> OpenAiProvider:
    options.setdefault("api_key", "sk-test")
    return OpenAiProvider(options, http_client=rec.client())


def test_chat_completion_round_trip():
    rec = Recorder(json_response(CHAT_BODY))
    response = _provider(rec).chat_completion([Message.system("Be kind."), Message.user("Hi")])

    body = rec.body()
    assert body["model"] == "gpt-5.2"  # nosec B101 - asserts are appropriate in unit tests
    assert body["messages"] == [  # nosec B101
        {"role": "system", "content": "Be kind."},
        {"role": "user", "content": "Hi"},
    ]
    assert body["temperature"] == 0.7 and body["max_tokens"] == 4096  # nosec B101
    assert "top_p" not in body and "stream" not in body  # nosec B101

    assert response.content == "Hello!"  # nosec B101
    assert response.model == "gpt-5.2"  # nosec B101
    assert response.provider == "openai"  # nosec B101
    assert response.finish_reason == "stop"  # nosec B101
    assert (response.usage.prompt_tokens, response.usage.completion_tokens, response.usage.total_tokens) == (5, 2, 7)  # nosec B101
    assert response.tool_calls is None  # nosec B101


def test_options_are_forwarded():
    rec = Recorder(json_response(CHAT_BODY))
    _provider(rec).complete("Hi", model="o3", temperature=0.1, max_tokens=50, top_p=0.9, stop=["\n"], seed=3)
    body = rec.body()
    assert body["model"] == "o3" and body["temperature"] == 0.1 and body["max_tokens"] == 50  # nosec B101
    assert body["top_p"] == 0.9 and body["stop"] == ["\n"]  # nosec B101
    assert "seed" not in body  # nosec B101
    assert body["messages"] == [{"role": "user", "content": "Hi"}]  # nosec B101


def test_missing_fields_fall_back():
    rec = Recorder(json_response({"choices": []}))
    response = _provider(rec, default_model="gpt-4.1").chat_completion([{"role": "user", "content": "Hi"}])
    assert response.content == "" and response.model == "gpt-4.1"  # nosec B101
    assert response.usage.total_tokens == 0 and response.finish_reason == "stop"  # nosec B101


def test_tool_calls_are_decoded():
    rec = Recorder(
        json_response(
            {
                "choices": [
                    {
                        "message": {
                            "content": None,
                            "tool_calls": [
                                {
                                    "id": "call_1",
                                    "type": "function",
                                    "function": {"name": "get_weather", "arguments": '{"city": "Oslo"}'},
                                },
                                {"id": "call_2", "function": {"name": "broken", "arguments": "{oops"}},
                                {"id": "call_3", "function": {}},
                            ],
                        },
                        "finish_reason": "tool_calls",
                    }
                ],
                "usage": {"prompt_tokens": 20, "completion_tokens": 8},
            }
        )
    )
    tool = ToolSpec(name="get_weather", description="Weather by city", parameters={"type": "object"})
    response = _provider(rec).chat_completion_with_tools([Message.user("Weather?")], [tool], tool_choice="auto")

    body = rec.body()
    assert body["tools"] == [  # nosec B101
        {"type": "function", "function": {"name": "get_weather", "description": "Weather by city", "parameters": {"type": "object"}}}
    ]
    assert body["tool_choice"] == "auto"  # nosec B101
    assert response.finish_reason == "tool_calls" and response.has_tool_calls()  # nosec B101
    assert [c.name for c in response.tool_calls] == ["get_weather", "broken"]  # nosec B101
    assert response.tool_calls[0].arguments == {"city": "Oslo"}  # nosec B101
    assert response.tool_calls[1].arguments == {}  # nosec B101


def test_embeddings_are_ordered_by_index():
    rec = Recorder(
        json_response(
            {
                "data": [
                    {"index": 1, "embedding": [0.4, 0.5]},
                    {"index": 0, "embedding": [0.1, 0.2]},
                ],
                "model": "text-embedding-3-small",
                "usage": {"prompt_tokens": 6},
            }
        )
    )
    response = _provider(rec).embeddings(["first", "second"], dimensions=2)
    assert rec.body() == {"model": "text-embedding-3-small", "input": ["first", "second"], "dimensions": 2}  # nosec B101
    assert response.embeddings == ((0.1, 0.2), (0.4, 0.5))  # nosec B101
    assert response.usage.prompt_tokens == 6 and response.usage.completion_tokens == 0  # nosec B101
    assert str(rec.last.url).endswith("/embeddings")  # nosec B101


def test_single_string_embedding_input():
    rec = Recorder(json_response({"data": [{"index": 0, "embedding": [1, 2, 3]}]}))
    response = _provider(rec).embeddings("only")
    assert rec.body()["input"] == ["only"]  # nosec B101
    assert response.dimensions == 3 and response.vector == (1.0, 2.0, 3.0)  # nosec B101



def test_embedding_count_must_match_inputs():
    rec = Recorder(json_response({"data": [{"index": 0, "embedding": [0.1]}]}))
    with pytest.raises(ResponseDecodeError) as ei:
        _provider(rec).embeddings(["first", "second"])
    assert ei.value.message == "Expected 2 embeddings, received 1"  # nosec B101
    assert ei.value.code is ErrorCode.DECODE  # nosec B101

def test_analyze_image_payload():
    rec = Recorder(json_response({"choices": [{"message": {"content": "A cat."}}], "model": "gpt-5.2"}))
    parts = [
        {"type": "text", "text": "What is this?"},
        {"type": "image_url", "image_url": {"url": "https://example.com/cat.png"}},
    ]
    response = _provider(rec).analyze_image(parts, system_prompt="You describe images.", max_tokens=300)
    body = rec.body()
    assert body["messages"][0] == {"role": "system", "content": "You describe images."}  # nosec B101
    assert body["messages"][1] == {"role": "user", "content": parts}  # nosec B101
    assert body["max_tokens"] == 300  # nosec B101
    assert response.description == "A cat." and response.provider == "openai"  # nosec B101


def test_streaming_sends_stream_flag_and_yields_text():
    frames = [
        {"choices": [{"delta": {"role": "assistant"}}]},
        {"choices": [{"delta": {"content": "Hel"}}]},
        {"choices": [{"delta": {"content": "lo"}}]},
    ]
    rec = Recorder(httpx.Response(200, content=sse_body(frames)))
    deltas = list(_provider(rec).stream_chat_completion([Message.user("Hi")]))
    assert deltas == ["Hel", "lo"]  # nosec B101
    assert rec.body()["stream"] is True  # nosec B101



class _ClosingStream(httpx.SyncByteStream):
    """SSE body delivered frame by frame that remembers being closed."""

    def __init__(self, frames):
        self.frames = frames
        self.closed = False

    def __iter__(self):
        for frame in self.frames:
            yield sse_body([frame], done=False)

    def close(self):
        self.closed = True


def test_abandoned_stream_closes_connection():
    body = _ClosingStream([{"choices": [{"delta": {"content": f"t{i}"}}]} for i in range(5)])
    rec = Recorder(lambda request: httpx.Response(200, stream=body))
    stream = _provider(rec).stream_chat_completion([Message.user("Hi")])
    assert next(stream) == "t0"  # nosec B101
    assert not body.closed  # nosec B101
    stream.close()
    assert body.closed  # nosec B101

def test_streaming_client_error_raises_before_first_delta():
    rec = Recorder(json_response({"error": {"message": "invalid key"}}, status=401))
    stream = _provider(rec).stream_chat_completion([Message.user("Hi")])
    with pytest.raises(ProviderResponseError) as ei:
        next(iter(stream))
    assert ei.value.message == "invalid key"  # nosec B101


def test_streaming_is_not_retried():
    rec = Recorder(json_response({}, status=503))
    with pytest.raises(ProviderConnectionError):
        list(_provider(rec, max_retries=3).stream_chat_completion([Message.user("Hi")]))
    assert len(rec.requests) == 1  # nosec B101


def test_capabilities_and_models():
    provider = OpenAiProvider({"api_key": "k"}, http_client=Recorder().client())
    assert isinstance(provider, ToolCapable)  # nosec B101
    assert isinstance(provider, VisionCapable)  # nosec B101
    assert isinstance(provider, StreamingCapable)  # nosec B101
    assert provider.get_available_models() == OPENAI_MODELS  # nosec B101
    assert "png" in provider.get_supported_image_formats()  # nosec B101
    result = provider.test_connection()
    assert result.success and not result.verified  # nosec B101
