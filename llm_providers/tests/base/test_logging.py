"""Structured logging: event shape, normalized keys and request lifecycle events."""
from __future__ import annotations

import json
import logging

import httpx
import pytest

from llm_providers.base.errors import ProviderConnectionError
from llm_providers.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from llm_providers.base.log_support import JsonFormatter
from llm_providers.base.models import Message
from llm_providers.openai import OpenAiProvider
from llm_providers.tests.utils import Recorder, json_response, sse_body


def test_child_loggers_nest_under_base():
    assert get_logger("openai").name == f"{BASE_LOGGER_NAME}.openai"  # nosec B101 - asserts are appropriate in unit tests
    assert get_logger(f"{BASE_LOGGER_NAME}.groq").name == f"{BASE_LOGGER_NAME}.groq"  # nosec B101
    assert get_logger().propagate is False  # nosec B101


def test_log_event_drops_none_and_merges_context(log_records):
    ctx = LogContext(provider="groq", model="llama", extra={"trace": None, "op": "chat"})
    log_event(get_logger("t"), "custom.event", ctx, status=None, size=3)
    event = log_records.first("custom.event")
    assert event == {"event": "custom.event", "provider": "groq", "model": "llama", "op": "chat", "size": 3}  # nosec B101


def test_normalized_event_always_has_required_keys(log_records):
    normalized_log_event(get_logger("t"), "n.event", None, phase="finalize", emitted=2, attempt=5, extra=None)
    event = log_records.first("n.event")
    for key in REQUIRED_NORMALIZED_KEYS:
        if key == "error_code":
            continue
        assert key in event  # nosec B101
    assert "error_code" not in event  # nosec B101
    assert event["structured"] is True and event["tokens"] is None  # nosec B101


def test_normalized_extras_never_override(log_records):
    normalized_log_event(get_logger("t"), "n.event", None, phase="request", attempt=1, **{"phase_extra": "x"})
    event = log_records.first("n.event")
    assert event["phase"] == "request" and event["phase_extra"] == "x"  # nosec B101


def test_json_formatter_hoists_payload():
    record = logging.LogRecord("llm_providers.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "a": 1}), None, None)
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "e" and line["a"] == 1 and line["level"] == "INFO"  # nosec B101


def test_configure_logger_attaches_and_removes_file_handler(tmp_path):
    path = tmp_path / "logs" / "adapters.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        log_event(get_logger("t"), "file.event", None, level=logging.WARNING)
        for handler in logger.handlers:
            handler.flush()
        assert "file.event" in path.read_text(encoding="utf-8")  # nosec B101
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers)  # nosec B101


def test_retry_attempts_and_exhaustion_are_logged(log_records):
    rec = Recorder(json_response({}, status=503))
    provider = OpenAiProvider({"api_key": "sk-test", "max_retries": 2}, http_client=rec.client())
    with pytest.raises(ProviderConnectionError):
        provider.chat_completion([Message.user("secret prompt")])

    attempts = log_records.named("request.attempt")
    assert [a["attempt"] for a in attempts] == [1, 2]  # nosec B101
    assert attempts[0]["error_code"] == "unavailable"  # nosec B101
    assert attempts[0]["provider"] == "openai"  # nosec B101
    assert attempts[0]["status_code"] == 503  # nosec B101
    exhausted = log_records.first("request.exhausted")
    assert exhausted is not None and exhausted["phase"] == "request"  # nosec B101
    assert all("secret prompt" not in json.dumps(e) for e in log_records.events)  # nosec B101
    assert all("sk-test" not in json.dumps(e) for e in log_records.events)  # nosec B101


def test_stream_finalize_counts_deltas(log_records):
    frames = [{"choices": [{"delta": {"content": c}}]} for c in ("a", "b", "c")]
    rec = Recorder(httpx.Response(200, content=sse_body(frames)))
    provider = OpenAiProvider({"api_key": "sk-test"}, http_client=rec.client())
    assert "".join(provider.stream_chat_completion([Message.user("Hi")])) == "abc"  # nosec B101
    final = log_records.first("stream.finalize")
    assert final["emitted"] == 3 and final["phase"] == "finalize"  # nosec B101
