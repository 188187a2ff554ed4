"""VisionCapable Protocol (single-class module).

Capability marker for adapters that can describe images.
"""

from __future__ import annotations

from typing import Any, List, Protocol, Sequence, runtime_checkable

from ..models import VisionResponse


@runtime_checkable
class VisionCapable(Protocol):
    """Image analysis capability.

    ``content`` is a list of neutral parts: ``{"type": "text", "text": ...}`` and
    ``{"type": "image_url", "image_url": {"url": ...}}`` (``data:`` URLs allowed).
    """

    def analyze_image(self, content: Sequence[Any], **options: Any) -> VisionResponse: ...

    def get_supported_image_formats(self) -> List[str]: ...

    def get_max_image_size(self) -> int: ...


__all__ = ["VisionCapable"]
