"""Structured logging context object for adapters.

:class:`LogContext` carries the fields common to every adapter log event
(provider identifier, model, request/response ids, endpoint) plus an
``extra`` mapping. ``to_dict`` merges ``extra`` and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for adapter logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    endpoint: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    def with_model(self, model: Optional[str]) -> "LogContext":
        return replace(self, model=model, extra=dict(self.extra))


__all__ = ["LogContext"]
