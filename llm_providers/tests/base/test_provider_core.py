"""AbstractProvider request core: retry bound, error taxonomy, configuration."""
from __future__ import annotations

import httpx
import pytest

from llm_providers.base.errors import (
    ErrorCode,
    ProviderConfigurationError,
    ProviderConnectionError,
    ProviderResponseError,
)
from llm_providers.base.models import Message
from llm_providers.openai import OpenAiProvider
from llm_providers.tests.utils import Recorder, json_response

OK_BODY = {
    "choices": [{"message": {"content": "Hello!"}, "finish_reason": "stop"}],
    "usage": {"prompt_tokens": 5, "completion_tokens": 2},
    "model": "gpt-5.2",
}


def _provider(recorder: Recorder, **options) -> OpenAiProvider:
    options.setdefault("api_key", "sk-test")
    return OpenAiProvider(options, http_client=recorder.client())


def test_three_server_errors_exhaust_with_attempt_count(sleeps):
    rec = Recorder(json_response({"error": "down"}, status=503))
    provider = _provider(rec, max_retries=3)
    with pytest.raises(ProviderConnectionError) as ei:
        provider.chat_completion([Message.user("Hi")])
    assert "3 attempts" in str(ei.value)  # nosec B101 - asserts are appropriate in unit tests
    assert ei.value.message.startswith("Failed to connect to provider after 3 attempts")  # nosec B101
    assert len(rec.requests) == 3  # nosec B101
    assert ei.value.code is ErrorCode.UNAVAILABLE  # nosec B101


def test_backoff_doubles_between_attempts(sleeps):
    rec = Recorder(json_response({}, status=500))
    provider = _provider(rec, max_retries=4)
    with pytest.raises(ProviderConnectionError):
        provider.chat_completion([Message.user("Hi")])
    assert sleeps == pytest.approx([0.2, 0.4, 0.8])  # nosec B101
    assert len(rec.requests) == 4  # nosec B101


def test_client_error_is_not_retried(sleeps):
    rec = Recorder(json_response({"error": {"message": "bad model"}}, status=400))
    provider = _provider(rec, max_retries=5)
    with pytest.raises(ProviderResponseError) as ei:
        provider.chat_completion([Message.user("Hi")])
    assert len(rec.requests) == 1  # nosec B101
    assert sleeps == []  # nosec B101
    assert ei.value.status_code == 400  # nosec B101
    assert ei.value.message == "bad model"  # nosec B101


def test_client_error_without_json_body_uses_generic_message():
    rec = Recorder(httpx.Response(404, content=b"<html>nope</html>"))
    with pytest.raises(ProviderResponseError) as ei:
        _provider(rec).chat_completion([Message.user("Hi")])
    assert ei.value.message == "Unknown provider error"  # nosec B101
    assert ei.value.code is ErrorCode.NOT_FOUND  # nosec B101


def test_transient_failure_then_success():
    rec = Recorder(
        httpx.ConnectError("refused"),
        json_response({}, status=502),
        json_response(OK_BODY),
    )
    response = _provider(rec, max_retries=3).chat_completion([Message.user("Hi")])
    assert response.content == "Hello!"  # nosec B101
    assert len(rec.requests) == 3  # nosec B101


def test_undecodable_success_body_is_retried():
    rec = Recorder(httpx.Response(200, content=b"not json"), json_response(OK_BODY))
    response = _provider(rec).chat_completion([Message.user("Hi")])
    assert response.content == "Hello!"  # nosec B101
    assert len(rec.requests) == 2  # nosec B101


def test_undecodable_body_on_every_attempt_exhausts():
    rec = Recorder(httpx.Response(200, content=b"[1, 2"))
    with pytest.raises(ProviderConnectionError) as ei:
        _provider(rec, max_retries=2).chat_completion([Message.user("Hi")])
    assert ei.value.code is ErrorCode.DECODE  # nosec B101
    assert "2 attempts" in ei.value.message  # nosec B101


def test_max_retries_below_one_still_makes_one_attempt():
    rec = Recorder(json_response({}, status=500))
    with pytest.raises(ProviderConnectionError) as ei:
        _provider(rec, max_retries=0).chat_completion([Message.user("Hi")])
    assert len(rec.requests) == 1  # nosec B101
    assert "1 attempts" in ei.value.message  # nosec B101


def test_missing_key_fails_before_any_request():
    rec = Recorder(json_response(OK_BODY))
    provider = OpenAiProvider({}, http_client=rec.client())
    assert provider.is_available() is False  # nosec B101
    with pytest.raises(ProviderConfigurationError):
        provider.chat_completion([Message.user("Hi")])
    assert rec.requests == []  # nosec B101


def test_bearer_header_and_json_body():
    rec = Recorder(json_response(OK_BODY))
    _provider(rec, api_key="sk-abc").chat_completion([Message.user("Hi")])
    req = rec.last
    assert req.headers["Authorization"] == "Bearer sk-abc"  # nosec B101
    assert req.headers["Content-Type"] == "application/json"  # nosec B101
    assert str(req.url) == "https://api.openai.com/v1/chat/completions"  # nosec B101


def test_get_request_sends_no_body():
    rec = Recorder(json_response({"data": []}))
    provider = _provider(rec)
    provider.send_request("models", {"ignored": True}, method="GET")
    assert rec.last.method == "GET"  # nosec B101
    assert rec.last.content == b""  # nosec B101


def test_camel_case_options_and_key_identifier():
    rec = Recorder(json_response(OK_BODY))
    provider = OpenAiProvider(
        {"apiKeyIdentifier": "MY_SECRET", "baseUrl": "https://proxy.local/v1/", "maxRetries": 2, "timeoutSeconds": 5},
        http_client=rec.client(),
        key_resolver=lambda ident: "resolved-key" if ident == "MY_SECRET" else None,
    )
    provider.chat_completion([Message.user("Hi")])
    assert rec.last.headers["Authorization"] == "Bearer resolved-key"  # nosec B101
    assert str(rec.last.url) == "https://proxy.local/v1/chat/completions"  # nosec B101
    assert provider.max_retries == 2  # nosec B101
    assert provider.timeout == 5.0  # nosec B101


def test_invalid_timeout_falls_back_to_default():
    provider = OpenAiProvider({"api_key": "k", "timeout": -1})
    assert provider.timeout == 30.0  # nosec B101
    provider.configure({"api_key": "k", "timeout": "fast"})
    assert provider.timeout == 30.0  # nosec B101
    provider.close()


def test_configure_rebuilds_owned_client_on_timeout_change():
    provider = OpenAiProvider({"api_key": "k", "timeout": 10})
    first = provider._get_http_client()
    provider.configure({"api_key": "k", "timeout": 10})
    assert provider._get_http_client() is first  # nosec B101
    provider.configure({"api_key": "k", "timeout": 20})
    second = provider._get_http_client()
    assert second is not first  # nosec B101
    assert first.is_closed  # nosec B101
    provider.close()


def test_injected_client_survives_configure():
    rec = Recorder(json_response(OK_BODY))
    client = rec.client()
    provider = OpenAiProvider({"api_key": "k"}, http_client=client)
    provider.configure({"api_key": "k", "timeout": 99})
    assert provider._get_http_client() is client  # nosec B101
    provider.close()
    assert not client.is_closed  # nosec B101


def test_default_test_connection_is_not_network_verified():
    rec = Recorder(json_response(OK_BODY))
    result = _provider(rec).test_connection()
    assert result.success is True  # nosec B101
    assert result.verified is False  # nosec B101
    assert result.message == f"Connection successful. Found {len(result.models)} models."  # nosec B101
    assert rec.requests == []  # nosec B101


def test_supports_feature_accepts_strings_and_enum():
    provider = OpenAiProvider({"api_key": "k"})
    assert provider.supports_feature("vision")  # nosec B101
    assert provider.supports_feature("TOOLS")  # nosec B101
    assert not provider.supports_feature("audio")  # nosec B101
    assert not provider.supports_feature("teleport")  # nosec B101
    provider.close()
