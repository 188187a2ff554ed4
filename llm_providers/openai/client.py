"""OpenAI adapter (Chat Completions over HTTP).

Summary:
- Chat, tool calling, embeddings and vision via the shared
  ``OpenAIStyleMixin``; requests go through ``AbstractProvider.send_request``
  (bounded retry, error taxonomy, structured logging)
- SSE streaming with the ``data: [DONE]`` sentinel
- Bearer authentication; system messages stay inline
"""

from __future__ import annotations

from typing import Dict

from ..base.capabilities import ModelCapability
from ..base.openai_style_parts import OpenAIStyleMixin, OpenAIVisionMixin
from ..base.provider import AbstractProvider
from ..config.defaults import (
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_EMBEDDING_MODEL,
    OPENAI_DEFAULT_MODEL,
    OPENAI_MAX_IMAGE_BYTES,
)

OPENAI_MODELS: Dict[str, str] = {
    "gpt-5.2": "GPT-5.2 Thinking (Current)",
    "gpt-5.2-pro": "GPT-5.2 Pro (Most Capable)",
    "gpt-5.2-instant": "GPT-5.2 Instant (Fast)",
    "o3": "O3 (Advanced Reasoning)",
    "o4-mini": "O4 Mini (Reasoning)",
    "gpt-5": "GPT-5 (Legacy)",
    "gpt-4.1": "GPT-4.1 (Legacy)",
}


class OpenAiProvider(OpenAIVisionMixin, OpenAIStyleMixin, AbstractProvider):
    """OpenAI provider implementation.

    Options beyond the common set:
        ``chat_completion``: ``top_p``, ``frequency_penalty``,
            ``presence_penalty``, ``stop`` are forwarded when set.
        ``embeddings``: ``dimensions`` is forwarded when set.
        ``analyze_image``: ``system_prompt`` is sent as a leading system message.
    """

    DEFAULT_MODEL = OPENAI_DEFAULT_MODEL
    DEFAULT_EMBEDDING_MODEL = OPENAI_DEFAULT_EMBEDDING_MODEL
    DEFAULT_VISION_MODEL = OPENAI_DEFAULT_MODEL
    EMBEDDING_PASSTHROUGH = ("dimensions",)
    MAX_IMAGE_BYTES = OPENAI_MAX_IMAGE_BYTES
    supported_features = frozenset(
        {
            ModelCapability.CHAT,
            ModelCapability.COMPLETION,
            ModelCapability.EMBEDDINGS,
            ModelCapability.VISION,
            ModelCapability.STREAMING,
            ModelCapability.TOOLS,
        }
    )

    @property
    def identifier(self) -> str:
        return "openai"

    @property
    def name(self) -> str:
        return "OpenAI"

    def get_default_base_url(self) -> str:
        return OPENAI_DEFAULT_BASE_URL

    def get_available_models(self) -> Dict[str, str]:
        return dict(OPENAI_MODELS)


__all__ = ["OpenAiProvider", "OPENAI_MODELS"]
