"""Mistral AI adapter.

OpenAI-compatible wire format with two vendor spellings: ``seed`` is sent as
``random_seed`` and ``safe_prompt`` toggles Mistral's guardrail prompt.
Embeddings use ``mistral-embed`` and accept ``encoding_format``. Mistral has
no vision endpoint.
"""

from __future__ import annotations

from typing import Dict

from ..base.capabilities import ModelCapability
from ..base.openai_style_parts import OpenAIStyleMixin
from ..base.provider import AbstractProvider
from ..config.defaults import MISTRAL_DEFAULT_BASE_URL, MISTRAL_DEFAULT_EMBEDDING_MODEL, MISTRAL_DEFAULT_MODEL

MISTRAL_MODELS: Dict[str, str] = {
    "mistral-large-latest": "Mistral Large (Latest)",
    "mistral-large-2411": "Mistral Large 2411",
    "mistral-medium-latest": "Mistral Medium",
    "mistral-small-latest": "Mistral Small (Latest)",
    "mistral-small-2409": "Mistral Small 2409",
    "open-mistral-nemo": "Mistral Nemo (Open)",
    "codestral-latest": "Codestral (Code)",
    "codestral-2405": "Codestral 2405",
    "ministral-8b-latest": "Ministral 8B",
    "ministral-3b-latest": "Ministral 3B",
}


class MistralProvider(OpenAIStyleMixin, AbstractProvider):
    DEFAULT_MODEL = MISTRAL_DEFAULT_MODEL
    DEFAULT_EMBEDDING_MODEL = MISTRAL_DEFAULT_EMBEDDING_MODEL
    CHAT_PASSTHROUGH = ("top_p", "seed", "safe_prompt")
    OPTION_RENAMES = {"seed": "random_seed"}
    EMBEDDING_PASSTHROUGH = ("encoding_format",)
    supported_features = frozenset(
        {
            ModelCapability.CHAT,
            ModelCapability.COMPLETION,
            ModelCapability.EMBEDDINGS,
            ModelCapability.STREAMING,
            ModelCapability.TOOLS,
        }
    )

    @property
    def identifier(self) -> str:
        return "mistral"

    @property
    def name(self) -> str:
        return "Mistral AI"

    def get_default_base_url(self) -> str:
        return MISTRAL_DEFAULT_BASE_URL

    def get_available_models(self) -> Dict[str, str]:
        return dict(MISTRAL_MODELS)

    @staticmethod
    def get_code_model() -> str:
        return "codestral-latest"

    @staticmethod
    def get_small_model() -> str:
        """Cost-efficient general model."""
        return "mistral-small-latest"


__all__ = ["MistralProvider", "MISTRAL_MODELS"]
