"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llm_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.exceptions import (
    ProviderConfigurationError,
    ProviderConnectionError,
    ProviderResponseError,
    ResponseDecodeError,
    UnsupportedFeatureError,
)
from .errors_parts.classification import classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ProviderConfigurationError",
    "ProviderConnectionError",
    "ProviderResponseError",
    "ResponseDecodeError",
    "UnsupportedFeatureError",
    "classify_exception",
    "classify_status",
]
