"""Streaming decoders: byte chunks in, lazy text deltas out.

Two framings are supported:

* Server-Sent Events (:func:`decode_sse`): only ``data: `` lines carry
  payloads; ``data: [DONE]`` ends the stream; every other data line is one
  JSON frame.
* Newline-delimited JSON (:func:`decode_ndjson`): every non-blank line is a
  JSON frame.

A frame that fails to decode is logged (``stream.decode_error``) and skipped;
it never aborts the stream. Empty text deltas are never yielded. Decoding is
pull-driven: nothing is read ahead of the caller beyond the current chunk, and
closing the returned generator stops reading.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Iterator, Optional

from ..log_support import LogContext
from ..logging import log_event
from .extractors import Extractor
from .lines import Chunk, iter_lines

SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"


def _decode_frame(
    payload: str,
    logger: Optional[logging.Logger],
    ctx: Optional[LogContext],
) -> Optional[Dict[str, Any]]:
    try:
        frame = json.loads(payload)
    except ValueError as exc:
        if logger is not None:
            log_event(logger, "stream.decode_error", ctx, level=logging.DEBUG, error=str(exc), size=len(payload))
        return None
    if not isinstance(frame, dict):
        return None
    return frame


def decode_sse(
    chunks: Iterable[Chunk],
    extractor: Extractor,
    *,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> Iterator[str]:
    """Yield non-empty text deltas from an SSE byte stream."""
    for line in iter_lines(chunks):
        if not line.startswith(SSE_DATA_PREFIX):
            continue
        payload = line[len(SSE_DATA_PREFIX):].strip()
        if payload == SSE_DONE_SENTINEL:
            return
        frame = _decode_frame(payload, logger, ctx)
        if frame is None:
            continue
        text, done = extractor(frame)
        if text:
            yield text
        if done:
            return


def decode_ndjson(
    chunks: Iterable[Chunk],
    extractor: Extractor,
    *,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> Iterator[str]:
    """Yield non-empty text deltas from a newline-delimited JSON byte stream."""
    for line in iter_lines(chunks):
        payload = line.strip()
        if not payload:
            continue
        frame = _decode_frame(payload, logger, ctx)
        if frame is None:
            continue
        text, done = extractor(frame)
        if text:
            yield text
        if done:
            return


__all__ = ["decode_ndjson", "decode_sse", "SSE_DATA_PREFIX", "SSE_DONE_SENTINEL"]
