"""Ollama adapter package."""

from .client import FALLBACK_MODELS, OllamaProvider

__all__ = ["OllamaProvider", "FALLBACK_MODELS"]
