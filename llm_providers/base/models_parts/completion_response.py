"""
CompletionResponse: normalized result of a chat or completion call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .tool import ToolCall
from .usage_statistics import UsageStatistics

FINISH_STOP = "stop"
FINISH_LENGTH = "length"
FINISH_TOOL_CALLS = "tool_calls"
FINISH_CONTENT_FILTER = "content_filter"


@dataclass(frozen=True)
class CompletionResponse:
    """Provider-agnostic chat completion result.

    Attributes:
        content: Generated text; empty when the model only requested tools.
        model: Model reported by the vendor, or the requested one.
        usage: Token accounting.
        finish_reason: One of ``stop``, ``length``, ``tool_calls``,
            ``content_filter``; unmapped vendor values pass through.
        provider: Identifier of the adapter that produced the response.
        tool_calls: Tool invocations requested by the model, in order.
        metadata: Vendor extras (e.g. OpenRouter cost and routed provider).
    """

    content: str
    model: str
    usage: UsageStatistics = field(default_factory=UsageStatistics)
    finish_reason: str = FINISH_STOP
    provider: str = ""
    tool_calls: Optional[Tuple[ToolCall, ...]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.content

    def was_truncated(self) -> bool:
        return self.finish_reason == FINISH_LENGTH

    def was_filtered(self) -> bool:
        return self.finish_reason == FINISH_CONTENT_FILTER

    def is_complete(self) -> bool:
        return self.finish_reason == FINISH_STOP

    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)


__all__ = [
    "CompletionResponse",
    "FINISH_STOP",
    "FINISH_LENGTH",
    "FINISH_TOOL_CALLS",
    "FINISH_CONTENT_FILTER",
]
