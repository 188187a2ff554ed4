"""Gemini ``generateContent`` translation helpers.

Neutral messages become ``contents`` entries with ``parts``; the system
prompt is hoisted into ``systemInstruction`` and the ``assistant`` role is
renamed ``model``. Tool arguments arrive already structured in
``functionCall.args``, so no JSON decoding is needed on the way back.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..base.models import Message, ToolCall, ToolSpec
from ..base.parsing import as_mapping, get_mapping, get_nested_list, get_nested_mapping, get_nullable_string, get_string
from ..base.utils.images import guess_media_type, image_url_of, normalize_parts, parse_data_url
from ..base.utils.messages import MessageLike, split_system

FINISH_REASON_MAP: Dict[str, str] = {
    "STOP": "stop",
    "MAX_TOKENS": "length",
    "SAFETY": "content_filter",
    "RECITATION": "content_filter",
}


def map_finish_reason(reason: str) -> str:
    return FINISH_REASON_MAP.get(reason, reason.lower())


def image_part(url: str) -> Dict[str, Any]:
    """``inlineData`` for base64 ``data:`` URLs, ``fileData`` for anything else."""
    parsed = parse_data_url(url)
    if parsed is not None:
        mime, data = parsed
        return {"inlineData": {"mimeType": mime, "data": data}}
    return {"fileData": {"mimeType": guess_media_type(url), "fileUri": url}}


def to_parts(content: Any) -> List[Dict[str, Any]]:
    parts: List[Dict[str, Any]] = []
    for part in normalize_parts(content):
        kind = part.get("type")
        if kind == "text":
            text = get_string(part, "text")
            if text:
                parts.append({"text": text})
        elif kind == "image_url":
            url = image_url_of(part)
            if url:
                parts.append(image_part(url))
    return parts


def _content_entry(message: Message) -> Dict[str, Any]:
    role = "model" if message.role == "assistant" else "user"
    if message.is_structured():
        return {"role": role, "parts": to_parts(message.content)}
    return {"role": role, "parts": [{"text": message.content}]}


def build_contents(messages: Sequence[MessageLike]) -> Tuple[Optional[Dict[str, Any]], List[Dict[str, Any]]]:
    """Return ``(systemInstruction, contents)``; the instruction is ``None`` without system messages."""
    system, rest = split_system(messages)
    instruction = {"parts": [{"text": system}]} if system is not None else None
    return instruction, [_content_entry(m) for m in rest]


def generation_config(options: Mapping[str, Any], *, temperature: float, max_tokens: int) -> Dict[str, Any]:
    config: Dict[str, Any] = {"temperature": temperature, "maxOutputTokens": max_tokens}
    for option, field in (("top_p", "topP"), ("top_k", "topK"), ("stop_sequences", "stopSequences")):
        if options.get(option) is not None:
            config[field] = options[option]
    return config


def to_function_declarations(tools: Sequence[Any]) -> List[Dict[str, Any]]:
    declarations = []
    for tool in tools:
        spec = ToolSpec.from_any(tool)
        declarations.append({"name": spec.name, "description": spec.description, "parameters": spec.parameters})
    return [{"functionDeclarations": declarations}]


def new_call_id() -> str:
    return f"call_{uuid.uuid4().hex}"


def first_candidate(data: Mapping[str, Any]) -> Dict[str, Any]:
    return get_nested_mapping(data, "candidates.0")


def parse_candidate(candidate: Mapping[str, Any]) -> Tuple[str, List[ToolCall]]:
    """Concatenated text parts and ``functionCall`` parts, with generated call ids."""
    text: List[str] = []
    calls: List[ToolCall] = []
    for raw in get_nested_list(candidate, "content.parts"):
        part = as_mapping(raw)
        chunk = get_nullable_string(part, "text")
        if chunk is not None:
            text.append(chunk)
        call = get_mapping(part, "functionCall")
        if call and get_string(call, "name"):
            calls.append(ToolCall(id=new_call_id(), name=get_string(call, "name"), arguments=get_mapping(call, "args")))
    return "".join(text), calls


__all__ = [
    "FINISH_REASON_MAP",
    "build_contents",
    "first_candidate",
    "generation_config",
    "image_part",
    "map_finish_reason",
    "new_call_id",
    "parse_candidate",
    "to_function_declarations",
    "to_parts",
]
