"""
Helper utilities for OpenAI-compatible Chat Completions adapters.

Pure functions only: payload assembly from neutral options and
interpretation of decoded response bodies. No network I/O happens here.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ...config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from ..models import ToolCall, ToolSpec
from ..parsing import (
    as_list,
    as_mapping,
    get_float,
    get_int,
    get_list,
    get_mapping,
    get_nested_int,
    get_nested_mapping,
    get_nested_string,
    get_string,
)


def build_chat_payload(
    model: str,
    messages: List[Dict[str, Any]],
    options: Mapping[str, Any],
    *,
    passthrough: Iterable[str] = (),
    renames: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Assemble a ``chat/completions`` body.

    ``temperature`` defaults to 0.7 and ``max_tokens`` to 4096. Each option
    named in ``passthrough`` is copied when set (not ``None``), under its
    ``renames`` spelling if it has one.
    """
    payload: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "temperature": get_float(options, "temperature", DEFAULT_TEMPERATURE),
        "max_tokens": get_int(options, "max_tokens", DEFAULT_MAX_TOKENS),
    }
    renames = renames or {}
    for key in passthrough:
        value = options.get(key)
        if value is not None:
            payload[renames.get(key, key)] = value
    return payload


def tools_to_openai(tools: Sequence[Any]) -> List[Dict[str, Any]]:
    return [ToolSpec.from_any(t).to_openai() for t in tools]


def decode_arguments(raw: Any) -> Dict[str, Any]:
    """Tool arguments arrive as a JSON string; anything undecodable becomes ``{}``."""
    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, str) or not raw.strip():
        return {}
    try:
        decoded = json.loads(raw)
    except ValueError:
        return {}
    return decoded if isinstance(decoded, dict) else {}


def parse_tool_calls(message: Mapping[str, Any]) -> List[ToolCall]:
    """Tool calls from an assistant ``message``, in order; malformed entries skipped."""
    calls: List[ToolCall] = []
    for raw in get_list(message, "tool_calls"):
        entry = as_mapping(raw)
        function = get_mapping(entry, "function")
        name = get_string(function, "name")
        if not name:
            continue
        calls.append(
            ToolCall(
                id=get_string(entry, "id"),
                name=name,
                arguments=decode_arguments(function.get("arguments")),
                type=get_string(entry, "type", "function"),
            )
        )
    return calls


def first_choice(data: Mapping[str, Any]) -> Dict[str, Any]:
    return get_nested_mapping(data, "choices.0")


def message_content(choice: Mapping[str, Any]) -> str:
    return get_nested_string(choice, "message.content")


def usage_tokens(data: Mapping[str, Any]) -> Tuple[int, int]:
    """``(prompt_tokens, completion_tokens)`` from an OpenAI ``usage`` block."""
    return (
        get_nested_int(data, "usage.prompt_tokens"),
        get_nested_int(data, "usage.completion_tokens"),
    )


def embedding_vectors(data: Mapping[str, Any]) -> List[List[float]]:
    """Vectors from ``data[]``, ordered by their ``index`` when every item has one."""
    items = [as_mapping(i) for i in get_list(data, "data")]
    if items and all(isinstance(i.get("index"), int) for i in items):
        items = sorted(items, key=lambda i: i["index"])
    return [
        [float(v) for v in as_list(i.get("embedding")) if isinstance(v, (int, float)) and not isinstance(v, bool)]
        for i in items
    ]


def vision_messages(content: List[Dict[str, Any]], system_prompt: Optional[str]) -> List[Dict[str, Any]]:
    messages: List[Dict[str, Any]] = [{"role": "user", "content": content}]
    if system_prompt:
        messages.insert(0, {"role": "system", "content": system_prompt})
    return messages


__all__ = [
    "build_chat_payload",
    "decode_arguments",
    "embedding_vectors",
    "first_choice",
    "message_content",
    "parse_tool_calls",
    "tools_to_openai",
    "usage_tokens",
    "vision_messages",
]
