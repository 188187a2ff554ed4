"""OpenRouter adapter package."""

from .client import OPENROUTER_MODELS, OpenRouterProvider
from .routing import ROUTING_STRATEGIES

__all__ = ["OpenRouterProvider", "OPENROUTER_MODELS", "ROUTING_STRATEGIES"]
