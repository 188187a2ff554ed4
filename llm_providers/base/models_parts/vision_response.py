"""
VisionResponse: normalized result of an image analysis call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .usage_statistics import UsageStatistics


@dataclass(frozen=True)
class VisionResponse:
    description: str
    model: str
    usage: UsageStatistics = field(default_factory=UsageStatistics)
    provider: str = ""
    confidence: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.description

    def meets_confidence(self, threshold: float) -> bool:
        """True when a confidence was reported and is at least ``threshold``."""
        return self.confidence is not None and self.confidence >= threshold


__all__ = ["VisionResponse"]
