"""Concrete error kinds surfaced to callers.

Callers distinguish "wrong setup", "vendor rejected the request", "vendor is
unreachable" and "vendor cannot do this" by exception type; the ``code`` field
refines the category for logging.
"""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class ProviderConfigurationError(ProviderError):
    """Missing or invalid setup detected before any network call. Never retried."""

    code: ErrorCode = ErrorCode.CONFIGURATION


@dataclass(eq=False)
class ProviderResponseError(ProviderError):
    """Vendor answered with a 4xx status. Raised after a single attempt."""

    code: ErrorCode = ErrorCode.VALIDATION


@dataclass(eq=False)
class ProviderConnectionError(ProviderError):
    """Network failure or 5xx status, surfaced once retries are exhausted."""

    code: ErrorCode = ErrorCode.CONNECTION


@dataclass(eq=False)
class UnsupportedFeatureError(ProviderError):
    """The vendor has no such capability (e.g. embeddings on Claude)."""

    code: ErrorCode = ErrorCode.UNSUPPORTED


@dataclass(eq=False)
class ResponseDecodeError(ProviderError):
    """Response body was not a JSON object; eligible for retry."""

    code: ErrorCode = ErrorCode.DECODE
    retryable: bool = True


__all__ = [
    "ProviderConfigurationError",
    "ProviderResponseError",
    "ProviderConnectionError",
    "UnsupportedFeatureError",
    "ResponseDecodeError",
]
