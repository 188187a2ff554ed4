"""Typed field accessors and the JSON response decoder.

Vendor payloads are decoded into plain ``dict``/``list`` trees and read
defensively: every accessor takes a default and never raises on a missing
key or a value of the wrong type. ``bool`` is never accepted where a number
is expected, and numeric strings are not coerced.

Nested lookups take a dotted path; integer segments index into lists, so
``get_nested_string(data, "choices.0.message.content")`` walks
``data["choices"][0]["message"]["content"]``.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..config.defaults import UNKNOWN_ERROR_MESSAGE
from .errors import ResponseDecodeError

Path = Union[str, Sequence[Union[str, int]]]

_MISSING = object()


# ---- scalar coercion ---------------------------------------------------------

def as_string(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return default


def as_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    return default


def as_bool(value: Any, default: bool = False) -> bool:
    return value if isinstance(value, bool) else default


def as_mapping(value: Any) -> Dict[str, Any]:
    """Return ``value`` when it is a mapping, else an empty dict."""
    if isinstance(value, dict):
        return value
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def as_list(value: Any) -> List[Any]:
    """Return ``value`` when it is a list or tuple, else an empty list."""
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return []


# ---- single-key accessors ---------------------------------------------------

def _get(data: Any, key: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(key, _MISSING)
    return _MISSING


def get_string(data: Any, key: str, default: str = "") -> str:
    return as_string(_get(data, key), default)


def get_nullable_string(data: Any, key: str) -> Optional[str]:
    value = _get(data, key)
    return value if isinstance(value, str) else None


def get_int(data: Any, key: str, default: int = 0) -> int:
    return as_int(_get(data, key), default)


def get_float(data: Any, key: str, default: float = 0.0) -> float:
    return as_float(_get(data, key), default)


def get_bool(data: Any, key: str, default: bool = False) -> bool:
    return as_bool(_get(data, key), default)


def get_mapping(data: Any, key: str) -> Dict[str, Any]:
    return as_mapping(_get(data, key))


def get_list(data: Any, key: str) -> List[Any]:
    return as_list(_get(data, key))


# ---- nested accessors -----------------------------------------------------------

def _split(path: Path) -> List[Union[str, int]]:
    if isinstance(path, str):
        parts: List[Union[str, int]] = []
        for segment in path.split("."):
            parts.append(int(segment) if segment.isdigit() else segment)
        return parts
    return list(path)


def get_nested(data: Any, path: Path, default: Any = None) -> Any:
    """Walk ``path`` through mappings and lists, returning ``default`` on any miss."""
    current = data
    for segment in _split(path):
        if isinstance(segment, int) and isinstance(current, (list, tuple)):
            if -len(current) <= segment < len(current):
                current = current[segment]
                continue
            return default
        if isinstance(current, Mapping):
            current = current.get(str(segment), _MISSING)
            if current is _MISSING:
                return default
            continue
        return default
    return current


def get_nested_string(data: Any, path: Path, default: str = "") -> str:
    return as_string(get_nested(data, path), default)


def get_nested_int(data: Any, path: Path, default: int = 0) -> int:
    return as_int(get_nested(data, path), default)


def get_nested_float(data: Any, path: Path, default: float = 0.0) -> float:
    return as_float(get_nested(data, path), default)


def get_nested_mapping(data: Any, path: Path) -> Dict[str, Any]:
    return as_mapping(get_nested(data, path))


def get_nested_list(data: Any, path: Path) -> List[Any]:
    return as_list(get_nested(data, path))


# ---- decoding -------------------------------------------------------------------

def decode_json_response(body: Union[str, bytes], provider: str = "unknown") -> Dict[str, Any]:
    """Decode a response body that must be a JSON object.

    Raises:
        ResponseDecodeError: the body is not valid JSON, or its top level is
            not an object.
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ResponseDecodeError(
            message=f"Invalid JSON response: {exc}", provider=provider, raw=exc
        ) from exc
    if not isinstance(data, dict):
        raise ResponseDecodeError(
            message=f"Expected a JSON object response, got {type(data).__name__}",
            provider=provider,
        )
    return data


def decode_json_or_empty(body: Union[str, bytes]) -> Dict[str, Any]:
    """Best-effort variant used for error bodies: anything undecodable becomes ``{}``."""
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def extract_error_message(payload: Mapping[str, Any]) -> str:
    """Best-effort human-readable message from a vendor error body.

    Tries ``error.message``, then ``error`` as a plain string, then a
    top-level ``message``.
    """
    error = payload.get("error") if isinstance(payload, Mapping) else None
    if isinstance(error, Mapping):
        message = get_string(error, "message")
        if message:
            return message
    if isinstance(error, str) and error:
        return error
    message = get_string(payload, "message")
    return message or UNKNOWN_ERROR_MESSAGE


__all__ = [
    "as_bool",
    "as_float",
    "as_int",
    "as_list",
    "as_mapping",
    "as_string",
    "decode_json_or_empty",
    "decode_json_response",
    "extract_error_message",
    "get_bool",
    "get_float",
    "get_int",
    "get_list",
    "get_mapping",
    "get_nested",
    "get_nested_float",
    "get_nested_int",
    "get_nested_list",
    "get_nested_mapping",
    "get_nested_string",
    "get_nullable_string",
    "get_string",
]
