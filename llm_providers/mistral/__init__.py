"""Mistral AI adapter package."""

from .client import MISTRAL_MODELS, MistralProvider

__all__ = ["MistralProvider", "MISTRAL_MODELS"]
