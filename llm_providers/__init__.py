"""llm_providers package

Uniform adapter layer over several LLM vendor HTTP APIs (OpenAI, Anthropic
Claude, Google Gemini, OpenRouter, Mistral, Groq, Ollama).

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create` and :class:`ProviderRegistry`
    - Base class: :class:`AbstractProvider`
    - Models: :class:`Message`, :class:`CompletionResponse`,
      :class:`EmbeddingResponse`, :class:`VisionResponse`,
      :class:`UsageStatistics`, :class:`ToolSpec`, :class:`ToolCall`
    - Exceptions: :class:`ProviderError` and its subclasses, :class:`ErrorCode`

Example::

    provider = create("openai", api_key="sk-...")
    reply = provider.chat_completion([Message.user("Hi")])
    print(reply.content, reply.usage.total_tokens)
"""

from typing import Any

from .base.errors import (
    ErrorCode,
    ProviderConfigurationError,
    ProviderConnectionError,
    ProviderError,
    ProviderResponseError,
    ResponseDecodeError,
    UnsupportedFeatureError,
)
from .base.models import (
    CompletionResponse,
    ConnectionTestResult,
    EmbeddingResponse,
    Message,
    ToolCall,
    ToolSpec,
    UsageStatistics,
    VisionResponse,
)
from .base.provider import AbstractProvider
from .base.registry import ProviderRegistry, default_registry

__version__ = "0.1.0"


def create(identifier: str, **options: Any) -> AbstractProvider:
    """Create a configured adapter; options accept snake_case or camelCase names.

    ``http_client`` and ``key_resolver`` are passed to the adapter constructor;
    every other keyword is configuration. Instances are not cached; use a
    :class:`ProviderRegistry` for keyed reuse.
    """
    adapter_kwargs = {k: options.pop(k) for k in ("http_client", "key_resolver") if k in options}
    return default_registry.create(identifier, options, use_cache=False, **adapter_kwargs)


__all__ = [
    # Version
    "__version__",
    # Factory
    "create",
    "ProviderRegistry",
    "AbstractProvider",
    # Models
    "CompletionResponse",
    "ConnectionTestResult",
    "EmbeddingResponse",
    "Message",
    "ToolCall",
    "ToolSpec",
    "UsageStatistics",
    "VisionResponse",
    # Exceptions
    "ErrorCode",
    "ProviderError",
    "ProviderConfigurationError",
    "ProviderConnectionError",
    "ProviderResponseError",
    "ResponseDecodeError",
    "UnsupportedFeatureError",
]
