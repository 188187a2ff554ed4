"""StreamingCapable Protocol (single-class module).

Capability marker for adapters that can stream incremental text deltas.
"""

from __future__ import annotations

from typing import Any, Iterator, Protocol, Sequence, runtime_checkable

from .provider_adapter import MessageLike


@runtime_checkable
class StreamingCapable(Protocol):
    """Lazy text streaming.

    The returned iterator yields non-empty text fragments until the vendor
    signals completion. Closing it (or abandoning iteration) closes the
    underlying connection. Streams are never retried.
    """

    def stream_chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> Iterator[str]: ...


__all__ = ["StreamingCapable"]
