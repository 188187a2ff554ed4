"""Streaming decode package.

Turns chunked HTTP bodies (SSE or NDJSON) into lazy sequences of text deltas.
"""

from .decoder import SSE_DATA_PREFIX, SSE_DONE_SENTINEL, decode_ndjson, decode_sse
from .extractors import Extractor, claude_delta, gemini_delta, ollama_delta, openai_delta
from .lines import iter_lines

__all__ = [
    "Extractor",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "claude_delta",
    "decode_ndjson",
    "decode_sse",
    "gemini_delta",
    "iter_lines",
    "ollama_delta",
    "openai_delta",
]
