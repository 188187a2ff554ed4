"""ToolCapable Protocol (single-class module).

Capability marker for adapters that accept tool declarations.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, Union, runtime_checkable

from ..models import CompletionResponse, ToolSpec
from .provider_adapter import MessageLike

ToolLike = Union[ToolSpec, Mapping[str, Any]]


@runtime_checkable
class ToolCapable(Protocol):
    def chat_completion_with_tools(
        self,
        messages: Sequence[MessageLike],
        tools: Sequence[ToolLike],
        **options: Any,
    ) -> CompletionResponse:
        """Chat completion that may answer with ``tool_calls`` instead of text."""
        ...


__all__ = ["ToolCapable", "ToolLike"]
