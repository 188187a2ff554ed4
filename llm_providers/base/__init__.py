"""
Adapter base package.

Exports the provider-agnostic contracts used by every vendor adapter:

- Provider core: :class:`AbstractProvider` (configuration, retry, streaming)
- Interfaces: ``ProviderAdapter`` plus capability Protocols
- Models: normalized response objects, messages and tool DTOs
- Errors: the ``ProviderError`` taxonomy
"""

from ..config.options import normalize_options
from .capabilities import ModelCapability, detect_capabilities
from .errors import (
    ErrorCode,
    ProviderConfigurationError,
    ProviderConnectionError,
    ProviderError,
    ProviderResponseError,
    ResponseDecodeError,
    UnsupportedFeatureError,
)
from .interfaces import ProviderAdapter, StreamingCapable, ToolCapable, VisionCapable
from .models import (
    CompletionResponse,
    ConnectionTestResult,
    EmbeddingResponse,
    Message,
    ToolCall,
    ToolSpec,
    UsageStatistics,
    VisionResponse,
)
from .provider import AbstractProvider
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Core
    "AbstractProvider",
    "normalize_options",
    # Interfaces
    "ProviderAdapter",
    "StreamingCapable",
    "ToolCapable",
    "VisionCapable",
    "ModelCapability",
    "detect_capabilities",
    # Models
    "CompletionResponse",
    "ConnectionTestResult",
    "EmbeddingResponse",
    "Message",
    "ToolCall",
    "ToolSpec",
    "UsageStatistics",
    "VisionResponse",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ProviderConfigurationError",
    "ProviderConnectionError",
    "ProviderResponseError",
    "ResponseDecodeError",
    "UnsupportedFeatureError",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
