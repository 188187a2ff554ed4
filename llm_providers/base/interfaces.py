"""
Provider-agnostic interfaces (Protocols) for the adapter layer.

Re-exports the single-class modules under
``llm_providers.base.interfaces_parts``. Capability Protocols are
``runtime_checkable`` so callers can test ``isinstance(adapter, ToolCapable)``.
"""

from __future__ import annotations

from .interfaces_parts import (
    MessageLike,
    ProviderAdapter,
    StreamingCapable,
    ToolCapable,
    ToolLike,
    VisionCapable,
)

__all__ = [
    "MessageLike",
    "ProviderAdapter",
    "StreamingCapable",
    "ToolCapable",
    "ToolLike",
    "VisionCapable",
]
