"""OpenRouter error messages.

OpenRouter answers with OpenAI-shaped error bodies but documents specific
meanings for a handful of statuses; those get fixed, actionable messages.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..base.parsing import get_nested_string

UNKNOWN_OPENROUTER_ERROR = "Unknown OpenRouter API error"

FIXED_MESSAGES = {
    401: "Invalid OpenRouter API key",
    402: "Insufficient OpenRouter credits",
    403: "Forbidden",
    429: "Rate limit exceeded",
    503: "Model or provider unavailable",
}


def openrouter_error_message(status: int, body: Mapping[str, Any]) -> str:
    message = get_nested_string(body, "error.message") or UNKNOWN_OPENROUTER_ERROR
    if status == 400:
        return f"Bad request: {message}"
    if status in FIXED_MESSAGES:
        return FIXED_MESSAGES[status]
    return f"OpenRouter API error ({status}): {message}"


__all__ = ["FIXED_MESSAGES", "UNKNOWN_OPENROUTER_ERROR", "openrouter_error_message"]
