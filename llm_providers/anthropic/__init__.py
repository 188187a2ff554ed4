"""Anthropic Claude adapter package."""

from .client import CLAUDE_MODELS, ClaudeProvider

__all__ = ["ClaudeProvider", "CLAUDE_MODELS"]
