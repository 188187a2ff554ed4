"""Helpers for vendor-neutral vision content parts.

Callers describe an image request as a list of parts::

    [{"type": "text", "text": "What is shown?"},
     {"type": "image_url", "image_url": {"url": "data:image/png;base64,..."}}]

A bare string is treated as a single text part.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

_DATA_URL = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)


def normalize_parts(content: Any) -> List[Dict[str, Any]]:
    """Return ``content`` as a list of part dicts; unknown entries are dropped."""
    if isinstance(content, str):
        return [{"type": "text", "text": content}]
    parts: List[Dict[str, Any]] = []
    for item in content or ():
        if isinstance(item, str):
            parts.append({"type": "text", "text": item})
        elif isinstance(item, dict) and isinstance(item.get("type"), str):
            parts.append(item)
    return parts


def image_url_of(part: Dict[str, Any]) -> str:
    """URL of an ``image_url`` part; accepts the nested and flat spellings."""
    value = part.get("image_url")
    if isinstance(value, dict):
        url = value.get("url")
        return url if isinstance(url, str) else ""
    return value if isinstance(value, str) else ""


def parse_data_url(url: str) -> Optional[Tuple[str, str]]:
    """Split a base64 ``data:`` URL into ``(media_type, data)``; ``None`` otherwise."""
    match = _DATA_URL.match(url or "")
    if not match:
        return None
    return match.group("mime"), match.group("data")


def guess_media_type(url: str, default: str = "image/jpeg") -> str:
    """Media type from a URL's extension, for vendors that require one."""
    lowered = url.lower().split("?", 1)[0]
    for ext, mime in (
        (".png", "image/png"),
        (".gif", "image/gif"),
        (".webp", "image/webp"),
        (".heic", "image/heic"),
        (".heif", "image/heif"),
        (".jpg", "image/jpeg"),
        (".jpeg", "image/jpeg"),
    ):
        if lowered.endswith(ext):
            return mime
    return default


def split_text_and_images(parts: Sequence[Dict[str, Any]]) -> Tuple[List[str], List[str]]:
    texts = [p["text"] for p in parts if p.get("type") == "text" and isinstance(p.get("text"), str)]
    images = [image_url_of(p) for p in parts if p.get("type") == "image_url"]
    return texts, [u for u in images if u]


__all__ = [
    "guess_media_type",
    "image_url_of",
    "normalize_parts",
    "parse_data_url",
    "split_text_and_images",
]
