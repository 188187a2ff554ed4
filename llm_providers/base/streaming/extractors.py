"""Per-vendor delta extraction from decoded stream frames.

Every extractor takes one decoded JSON frame and returns ``(text, done)``:
the text fragment carried by the frame (possibly empty) and whether the
frame terminates the stream. Missing or ill-typed fields yield ``("", False)``.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Tuple

from ..parsing import get_bool, get_nested_string, get_string

Extractor = Callable[[Dict[str, Any]], Tuple[str, bool]]


def openai_delta(frame: Dict[str, Any]) -> Tuple[str, bool]:
    """OpenAI-shaped chunks (OpenAI, OpenRouter, Mistral, Groq).

    Termination comes from the ``[DONE]`` sentinel, handled by the SSE decoder.
    """
    return get_nested_string(frame, "choices.0.delta.content"), False


def claude_delta(frame: Dict[str, Any]) -> Tuple[str, bool]:
    """Anthropic Messages events: text lives in ``text_delta`` content deltas."""
    event_type = get_string(frame, "type")
    if event_type == "message_stop":
        return "", True
    if event_type == "content_block_delta" and get_nested_string(frame, "delta.type") == "text_delta":
        return get_nested_string(frame, "delta.text"), False
    return "", False


def gemini_delta(frame: Dict[str, Any]) -> Tuple[str, bool]:
    """Gemini ``streamGenerateContent?alt=sse`` frames; the stream ends on EOF."""
    return get_nested_string(frame, "candidates.0.content.parts.0.text"), False


def ollama_delta(frame: Dict[str, Any]) -> Tuple[str, bool]:
    """Ollama NDJSON chat frames; ``done: true`` is the final frame."""
    return get_nested_string(frame, "message.content"), get_bool(frame, "done")


__all__ = [
    "Extractor",
    "claude_delta",
    "gemini_delta",
    "ollama_delta",
    "openai_delta",
]
