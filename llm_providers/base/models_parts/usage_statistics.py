"""
Token usage accounting attached to every normalized response.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UsageStatistics:
    """Prompt/completion token counts for one call.

    ``total_tokens`` is derived at construction and cannot be passed in or
    reassigned, so it always equals ``prompt_tokens + completion_tokens``.
    ``estimated_cost`` is filled only by vendors that report a cost.
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    estimated_cost: Optional[float] = None
    total_tokens: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_tokens", self.prompt_tokens + self.completion_tokens)

    @classmethod
    def from_tokens(cls, prompt_tokens: int, completion_tokens: int = 0) -> "UsageStatistics":
        return cls(prompt_tokens=max(0, prompt_tokens), completion_tokens=max(0, completion_tokens))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }
        if self.estimated_cost is not None:
            data["estimated_cost"] = self.estimated_cost
        return data


__all__ = ["UsageStatistics"]
