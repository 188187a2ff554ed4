"""Groq adapter (OpenAI-compatible endpoint on LPU hardware).

Summary:
- Chat, tool calling (``parallel_tool_calls`` forwarded) and SSE streaming
  through ``OpenAIStyleMixin``
- ``seed`` passthrough for reproducible sampling
- No embeddings: ``embeddings`` raises ``UnsupportedFeatureError``
"""

from __future__ import annotations

from typing import Any, Dict, NoReturn, Sequence, Union

from ..base.capabilities import ModelCapability
from ..base.errors import UnsupportedFeatureError
from ..base.openai_style_parts import OpenAIStyleMixin
from ..base.provider import AbstractProvider
from ..config.defaults import GROQ_DEFAULT_BASE_URL, GROQ_DEFAULT_MODEL

GROQ_MODELS: Dict[str, str] = {
    "llama-3.3-70b-versatile": "Llama 3.3 70B Versatile",
    "llama-3.3-70b-specdec": "Llama 3.3 70B SpecDec (Fast)",
    "llama-3.1-70b-versatile": "Llama 3.1 70B Versatile",
    "llama-3.1-8b-instant": "Llama 3.1 8B Instant (Ultra-Fast)",
    "llama-3.2-90b-vision-preview": "Llama 3.2 90B Vision (Preview)",
    "llama-3.2-11b-vision-preview": "Llama 3.2 11B Vision (Preview)",
    "llama-3.2-3b-preview": "Llama 3.2 3B (Preview)",
    "llama-3.2-1b-preview": "Llama 3.2 1B (Preview)",
    "mixtral-8x7b-32768": "Mixtral 8x7B (32K context)",
    "gemma2-9b-it": "Gemma 2 9B Instruct",
    "whisper-large-v3": "Whisper Large V3 (Audio)",
    "whisper-large-v3-turbo": "Whisper Large V3 Turbo (Audio)",
}


class GroqProvider(OpenAIStyleMixin, AbstractProvider):
    """Groq provider implementation."""

    DEFAULT_MODEL = GROQ_DEFAULT_MODEL
    CHAT_PASSTHROUGH = ("top_p", "frequency_penalty", "presence_penalty", "stop", "seed")
    TOOL_PASSTHROUGH = ("parallel_tool_calls",)
    supported_features = frozenset(
        {
            ModelCapability.CHAT,
            ModelCapability.COMPLETION,
            ModelCapability.STREAMING,
            ModelCapability.TOOLS,
        }
    )

    @property
    def identifier(self) -> str:
        return "groq"

    @property
    def name(self) -> str:
        return "Groq"

    def get_default_base_url(self) -> str:
        return GROQ_DEFAULT_BASE_URL

    def get_available_models(self) -> Dict[str, str]:
        return dict(GROQ_MODELS)

    def embeddings(self, input: Union[str, Sequence[str]], **options: Any) -> NoReturn:
        raise UnsupportedFeatureError(
            message="Groq does not support embeddings. Use OpenAI or Mistral for embeddings.",
            provider=self.identifier,
        )

    @staticmethod
    def get_fast_model() -> str:
        return "llama-3.1-8b-instant"

    @staticmethod
    def get_quality_model() -> str:
        return "llama-3.3-70b-versatile"

    @staticmethod
    def get_vision_model() -> str:
        return "llama-3.2-90b-vision-preview"


__all__ = ["GroqProvider", "GROQ_MODELS"]
