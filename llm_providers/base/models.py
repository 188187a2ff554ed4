"""
Provider-agnostic domain models public surface.

This module re-exports the one-class-per-file implementations under
``llm_providers.base.models_parts``.
"""

from .models_parts.usage_statistics import UsageStatistics
from .models_parts.tool import ToolCall, ToolSpec
from .models_parts.completion_response import (
    FINISH_CONTENT_FILTER,
    FINISH_LENGTH,
    FINISH_STOP,
    FINISH_TOOL_CALLS,
    CompletionResponse,
)
from .models_parts.embedding_response import EmbeddingResponse
from .models_parts.vision_response import VisionResponse
from .models_parts.message import VALID_ROLES, Message, Role
from .models_parts.connection_result import ConnectionTestResult

__all__ = [
    "UsageStatistics",
    "ToolCall",
    "ToolSpec",
    "CompletionResponse",
    "FINISH_STOP",
    "FINISH_LENGTH",
    "FINISH_TOOL_CALLS",
    "FINISH_CONTENT_FILTER",
    "EmbeddingResponse",
    "VisionResponse",
    "Message",
    "Role",
    "VALID_ROLES",
    "ConnectionTestResult",
]
