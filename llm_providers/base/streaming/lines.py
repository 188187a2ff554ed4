"""Line framing over a chunked byte stream.

Holds at most one partial line between chunks; complete lines are handed
out as soon as their newline arrives.
"""
from __future__ import annotations

from typing import Iterable, Iterator, Union

Chunk = Union[bytes, bytearray, str]


def iter_lines(chunks: Iterable[Chunk]) -> Iterator[str]:
    """Yield decoded text lines from ``chunks``.

    A trailing ``\\r`` is stripped from each line; a final line without a
    newline is flushed when the stream ends. Invalid UTF-8 is replaced rather
    than raised, so a corrupt line becomes a malformed frame downstream.
    """
    buffer = bytearray()
    for chunk in chunks:
        if not chunk:
            continue
        buffer.extend(chunk.encode("utf-8") if isinstance(chunk, str) else chunk)
        while True:
            idx = buffer.find(b"\n")
            if idx < 0:
                break
            raw = bytes(buffer[:idx])
            del buffer[: idx + 1]
            yield raw.rstrip(b"\r").decode("utf-8", errors="replace")
    if buffer:
        yield bytes(buffer).rstrip(b"\r").decode("utf-8", errors="replace")


__all__ = ["iter_lines", "Chunk"]
