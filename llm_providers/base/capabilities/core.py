"""Capability enumeration & detection utilities.

Adapters declare what they support through ``supported_features``; the
Protocol checks in :func:`detect_capabilities` infer the same from which
capability methods an adapter implements, so the two can be cross-checked.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, FrozenSet, Optional

from ..interfaces import StreamingCapable, ToolCapable, VisionCapable


class ModelCapability(str, Enum):
    CHAT = "chat"
    COMPLETION = "completion"
    EMBEDDINGS = "embeddings"
    VISION = "vision"
    STREAMING = "streaming"
    TOOLS = "tools"
    JSON_MODE = "json_mode"
    AUDIO = "audio"


def coerce_capability(value: Any) -> Optional[ModelCapability]:
    """Return the matching :class:`ModelCapability`, or ``None`` if unknown."""
    if isinstance(value, ModelCapability):
        return value
    if isinstance(value, str):
        try:
            return ModelCapability(value.strip().lower())
        except ValueError:
            return None
    return None


def detect_capabilities(provider: Any) -> FrozenSet[ModelCapability]:
    """Infer capabilities from the capability Protocols an adapter satisfies."""
    caps = set()
    if isinstance(provider, ToolCapable):
        caps.add(ModelCapability.TOOLS)
    if isinstance(provider, VisionCapable):
        caps.add(ModelCapability.VISION)
    if isinstance(provider, StreamingCapable):
        caps.add(ModelCapability.STREAMING)
    return frozenset(caps)


__all__ = ["ModelCapability", "coerce_capability", "detect_capabilities"]
