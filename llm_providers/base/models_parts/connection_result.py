"""
Outcome of ``test_connection()``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ConnectionTestResult:
    """Connection check result.

    Attributes:
        success: Whether the check passed.
        message: Human-readable summary.
        models: Model id -> display name, as listed during the check.
        verified: ``True`` only when the check reached the vendor over the
            network; static model lists report ``False``.
    """

    success: bool
    message: str
    models: Dict[str, str] = field(default_factory=dict)
    verified: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "models": dict(self.models),
            "verified": self.verified,
        }


__all__ = ["ConnectionTestResult"]
