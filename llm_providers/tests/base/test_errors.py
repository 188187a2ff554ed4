"""Status and exception classification into normalized error codes."""
from __future__ import annotations

import httpx
import pytest

from llm_providers.base.errors import (
    ErrorCode,
    ProviderConfigurationError,
    ProviderError,
    ProviderResponseError,
    UnsupportedFeatureError,
    classify_exception,
    classify_status,
)


@pytest.mark.parametrize(
    "status, code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (402, ErrorCode.PAYMENT_REQUIRED),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (408, ErrorCode.TIMEOUT),
        (418, ErrorCode.VALIDATION),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (502, ErrorCode.TRANSIENT),
        (503, ErrorCode.UNAVAILABLE),
        (504, ErrorCode.TIMEOUT),
        (599, ErrorCode.SERVER_ERROR),
    ],
)
def test_classify_status(status, code):
    assert classify_status(status) is code  # nosec B101 - asserts are appropriate in unit tests


def test_classify_exception_precedence():
    request = httpx.Request("GET", "https://example.invalid")
    assert classify_exception(httpx.ConnectError("refused", request=request)) is ErrorCode.CONNECTION  # nosec B101
    assert classify_exception(httpx.ReadTimeout("slow", request=request)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    err = ProviderResponseError(message="x", code=ErrorCode.RATE_LIMIT)
    assert classify_exception(err) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(ValueError("boom")) is ErrorCode.UNKNOWN  # nosec B101


def test_classify_exception_reads_status_attributes():
    class Fake(Exception):
        status_code = 429

    assert classify_exception(Fake()) is ErrorCode.RATE_LIMIT  # nosec B101


def test_error_kinds_default_codes():
    assert ProviderConfigurationError(message="m").code is ErrorCode.CONFIGURATION  # nosec B101
    assert UnsupportedFeatureError(message="m").code is ErrorCode.UNSUPPORTED  # nosec B101
    assert not ProviderResponseError(message="m").retryable  # nosec B101


def test_provider_error_string_form():
    err = ProviderError(message="boom", provider="groq", code=ErrorCode.TIMEOUT, model="llama")
    assert str(err) == "groq:llama timeout: boom"  # nosec B101
    assert err.args == ("boom",)  # nosec B101
