"""Groq adapter package."""

from .client import GROQ_MODELS, GroqProvider

__all__ = ["GroqProvider", "GROQ_MODELS"]
