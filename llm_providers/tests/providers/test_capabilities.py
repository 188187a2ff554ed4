"""Declared features agree with the capability Protocols each adapter satisfies."""
from __future__ import annotations

import pytest

from llm_providers.anthropic import ClaudeProvider
from llm_providers.base.capabilities import ModelCapability, coerce_capability, detect_capabilities
from llm_providers.base.interfaces import ProviderAdapter
from llm_providers.gemini import GeminiProvider
from llm_providers.groq import GroqProvider
from llm_providers.mistral import MistralProvider
from llm_providers.ollama import OllamaProvider
from llm_providers.openai import OpenAiProvider
from llm_providers.openrouter import OpenRouterProvider
from llm_providers.tests.utils import Recorder

ADAPTERS = [
    OpenAiProvider,
    ClaudeProvider,
    GeminiProvider,
    OpenRouterProvider,
    MistralProvider,
    GroqProvider,
    OllamaProvider,
]

PROTOCOL_CAPABILITIES = {ModelCapability.TOOLS, ModelCapability.VISION, ModelCapability.STREAMING}


@pytest.mark.parametrize("cls", ADAPTERS)
def test_declared_features_match_protocols(cls):
    provider = cls({"api_key": "k"}, http_client=Recorder().client())
    assert isinstance(provider, ProviderAdapter)  # nosec B101 - asserts are appropriate in unit tests
    declared = set(provider.supported_features) & PROTOCOL_CAPABILITIES
    assert detect_capabilities(provider) == declared  # nosec B101
    assert provider.supports_feature("chat")  # nosec B101


@pytest.mark.parametrize("cls", ADAPTERS)
def test_identity_and_repr(cls):
    provider = cls({"api_key": "k"}, http_client=Recorder().client())
    assert provider.identifier == provider.identifier.lower()  # nosec B101
    assert provider.name  # nosec B101
    assert cls.__name__ in repr(provider)  # nosec B101


def test_coerce_capability():
    assert coerce_capability(" Vision ") is ModelCapability.VISION  # nosec B101
    assert coerce_capability("telepathy") is None  # nosec B101
    assert coerce_capability(3) is None  # nosec B101
