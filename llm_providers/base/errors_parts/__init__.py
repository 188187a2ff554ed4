"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llm_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .exceptions import (
    ProviderConfigurationError,
    ProviderConnectionError,
    ProviderResponseError,
    ResponseDecodeError,
    UnsupportedFeatureError,
)
from .classification import classify_exception, classify_status

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
