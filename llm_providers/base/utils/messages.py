"""Message normalization helpers shared across adapters.

Helpers here are side-effect free: they accept ``Message`` objects or plain
role/content mappings and return new lists, never mutating the input.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..models import Message

MessageLike = Union[Message, Mapping[str, Any]]


def coerce_messages(messages: Sequence[MessageLike]) -> List[Message]:
    """Return ``messages`` as validated :class:`Message` objects, in order.

    Raises:
        ValueError: an entry has an unknown role or is not a message at all.
    """
    out: List[Message] = []
    for m in messages:
        if isinstance(m, Message):
            out.append(m)
        elif isinstance(m, Mapping):
            out.append(Message.from_dict(m))
        else:
            raise ValueError(f"Unsupported message type: {type(m).__name__}")
    return out


def to_wire_messages(messages: Sequence[MessageLike]) -> List[Dict[str, Any]]:
    """OpenAI-style ``[{"role", "content"}]`` list with system messages kept inline."""
    return [m.to_dict() for m in coerce_messages(messages)]


def split_system(messages: Sequence[MessageLike]) -> Tuple[Optional[str], List[Message]]:
    """Hoist system messages out of a conversation.

    Returns ``(system_text, remaining)``. Multiple system messages are joined
    with blank lines in order; ``system_text`` is ``None`` when there were none.
    """
    system_parts: List[str] = []
    rest: List[Message] = []
    for m in coerce_messages(messages):
        if m.role == "system":
            text = m.text_or_joined()
            if text:
                system_parts.append(text)
        else:
            rest.append(m)
    return ("\n\n".join(system_parts) if system_parts else None), rest


__all__ = [
    "MessageLike",
    "coerce_messages",
    "split_system",
    "to_wire_messages",
]
