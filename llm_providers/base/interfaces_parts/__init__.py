"""Interface parts package; prefer importing from ``llm_providers.base.interfaces``."""

from .provider_adapter import MessageLike, ProviderAdapter
from .streaming_capable import StreamingCapable
from .tool_capable import ToolCapable, ToolLike
from .vision_capable import VisionCapable

__all__ = [
    "MessageLike",
    "ProviderAdapter",
    "StreamingCapable",
    "ToolCapable",
    "ToolLike",
    "VisionCapable",
]
