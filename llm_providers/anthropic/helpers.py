"""Anthropic Messages API helpers.

Pure translation functions between the neutral request/response shapes and
the Messages API: system hoisting, content blocks, tool declarations,
``tool_choice`` and stop reasons. No network I/O happens here.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..base.models import Message, ToolCall, ToolSpec
from ..base.parsing import as_mapping, get_list, get_mapping, get_string
from ..base.utils.images import image_url_of, normalize_parts, parse_data_url
from ..base.utils.messages import MessageLike, split_system

STOP_REASON_MAP: Dict[str, str] = {
    "end_turn": "stop",
    "max_tokens": "length",
    "stop_sequence": "stop",
    "tool_use": "tool_calls",
}


def map_stop_reason(reason: str) -> str:
    """Neutral finish reason; unknown stop reasons pass through unchanged."""
    return STOP_REASON_MAP.get(reason, reason)


def map_tool_choice(choice: Any) -> Dict[str, Any]:
    """``auto``/``none``/``required`` or a tool name -> Anthropic ``tool_choice``.

    A mapping is assumed to already be in Anthropic form.
    """
    if isinstance(choice, str):
        if choice in ("auto", "none"):
            return {"type": choice}
        if choice == "required":
            return {"type": "any"}
        return {"type": "tool", "name": choice}
    if isinstance(choice, Mapping):
        return dict(choice)
    return {"type": "auto"}


def to_claude_tool(tool: Any) -> Dict[str, Any]:
    spec = ToolSpec.from_any(tool)
    return {"name": spec.name, "description": spec.description, "input_schema": spec.parameters}


def image_block(url: str) -> Dict[str, Any]:
    """Base64 ``data:`` URLs become inline sources; anything else is passed by URL."""
    parsed = parse_data_url(url)
    if parsed is not None:
        media_type, data = parsed
        return {"type": "image", "source": {"type": "base64", "media_type": media_type, "data": data}}
    return {"type": "image", "source": {"type": "url", "url": url}}


def to_content_blocks(content: Any) -> List[Dict[str, Any]]:
    blocks: List[Dict[str, Any]] = []
    for part in normalize_parts(content):
        kind = part.get("type")
        if kind == "text":
            blocks.append({"type": "text", "text": get_string(part, "text")})
        elif kind == "image_url":
            url = image_url_of(part)
            if url:
                blocks.append(image_block(url))
        else:
            # already an Anthropic block (tool_use, tool_result, image)
            blocks.append(part)
    return blocks


def _wire_message(message: Message) -> Dict[str, Any]:
    if message.is_structured():
        return {"role": message.role, "content": to_content_blocks(message.content)}
    return message.to_dict()


def build_messages(messages: Sequence[MessageLike]) -> Tuple[Optional[str], List[Dict[str, Any]]]:
    """Return ``(system, messages)`` with every system message hoisted out."""
    system, rest = split_system(messages)
    return system, [_wire_message(m) for m in rest]


def parse_content(data: Mapping[str, Any]) -> Tuple[str, List[ToolCall]]:
    """Concatenated ``text`` blocks and ``tool_use`` blocks as tool calls."""
    text: List[str] = []
    calls: List[ToolCall] = []
    for raw in get_list(data, "content"):
        block = as_mapping(raw)
        kind = get_string(block, "type")
        if kind == "text":
            text.append(get_string(block, "text"))
        elif kind == "tool_use" and get_string(block, "name"):
            calls.append(
                ToolCall(
                    id=get_string(block, "id"),
                    name=get_string(block, "name"),
                    arguments=get_mapping(block, "input"),
                )
            )
    return "".join(text), calls


__all__ = [
    "STOP_REASON_MAP",
    "build_messages",
    "image_block",
    "map_stop_reason",
    "map_tool_choice",
    "parse_content",
    "to_claude_tool",
    "to_content_blocks",
]
