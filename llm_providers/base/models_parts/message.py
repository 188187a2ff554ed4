"""
Message DTO used across adapters.

Defines the `Message` dataclass and the `Role` literal. Content is either
plain text or a list of vendor-neutral content parts (``{"type": "text", ...}``
or ``{"type": "image_url", ...}``) for vision requests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Union

Role = Literal["system", "user", "assistant", "tool"]
VALID_ROLES = ("system", "user", "assistant", "tool")

Content = Union[str, List[Dict[str, Any]]]


@dataclass(frozen=True)
class Message:
    """A chat message in conversation order.

    Raises:
        ValueError: ``role`` is not one of system, user, assistant, tool.
    """

    role: Role
    content: Content

    def __post_init__(self) -> None:
        if self.role not in VALID_ROLES:
            raise ValueError(f"Invalid message role '{self.role}'; expected one of {', '.join(VALID_ROLES)}")

    @classmethod
    def system(cls, content: Content) -> "Message":
        return cls("system", content)

    @classmethod
    def user(cls, content: Content) -> "Message":
        return cls("user", content)

    @classmethod
    def assistant(cls, content: Content) -> "Message":
        return cls("assistant", content)

    @classmethod
    def tool(cls, content: Content) -> "Message":
        return cls("tool", content)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        content = data.get("content", "")
        if content is None:
            content = ""
        return cls(str(data.get("role", "")), content)  # type: ignore[arg-type]

    def is_structured(self) -> bool:
        return isinstance(self.content, list)

    def text_or_joined(self) -> str:
        """Flatten content to text; non-text parts become ``[type]`` tokens."""
        if isinstance(self.content, str):
            return self.content
        parts: List[str] = []
        for p in self.content:
            if not isinstance(p, Mapping):
                continue
            text = p.get("text")
            parts.append(text if isinstance(text, str) else f"[{p.get('type', 'part')}]")
        return "\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


__all__ = ["Message", "Role", "VALID_ROLES"]
