"""OpenAI-compatible adapter parts (shared payload helpers and mixins)."""

from .style import OpenAIStyleMixin, OpenAIVisionMixin

__all__ = ["OpenAIStyleMixin", "OpenAIVisionMixin"]
