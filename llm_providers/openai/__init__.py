"""OpenAI adapter package."""

from .client import OPENAI_MODELS, OpenAiProvider

__all__ = ["OpenAiProvider", "OPENAI_MODELS"]
