"""Google Gemini adapter package."""

from .client import GEMINI_MODELS, GeminiProvider

__all__ = ["GeminiProvider", "GEMINI_MODELS"]
