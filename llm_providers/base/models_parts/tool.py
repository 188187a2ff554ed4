"""
Vendor-neutral function-calling DTOs.

``ToolSpec`` declares a callable tool and ``ToolCall`` is a model's request to
invoke one. Adapters translate both to and from their vendor's schema.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field


class ToolSpec(BaseModel):
    """Declaration of a tool the model may call.

    Parameters
    ----------
    name:
        Function name exposed to the model.
    description:
        Natural-language description; may be empty.
    parameters:
        JSON Schema object describing the arguments.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})

    @classmethod
    def from_any(cls, tool: "ToolSpec | Mapping[str, Any]") -> "ToolSpec":
        """Accept a ``ToolSpec``, a neutral mapping or an OpenAI-shaped tool dict."""
        if isinstance(tool, ToolSpec):
            return tool
        function = tool.get("function")
        source = function if isinstance(function, Mapping) else tool
        params = source.get("parameters")
        return cls(
            name=str(source.get("name", "")),
            description=str(source.get("description") or ""),
            parameters=dict(params) if isinstance(params, Mapping) else {"type": "object", "properties": {}},
        )

    def to_openai(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolCall(BaseModel):
    """A model's request to invoke a tool, with decoded arguments."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)
    type: str = "function"


__all__ = ["ToolSpec", "ToolCall"]
