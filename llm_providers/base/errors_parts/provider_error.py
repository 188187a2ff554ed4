"""
Structured provider error exception type.

Every failure surfaced by an adapter is a `ProviderError` (or one of the
subclasses in :mod:`.exceptions`) carrying a normalized `ErrorCode` for
consistent handling, retry decisions, and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        provider: Provider identifier where the error originated (e.g., ``"openai"``).
        code: Normalized :class:`ErrorCode` classification for the failure.
        model: Optional model name associated with the failure.
        retryable: Whether the retry loop may attempt the request again.
        status_code: HTTP status returned by the vendor, when there was one.
        raw: Optional original exception or payload for diagnostics.
    """

    message: str
    provider: str = "unknown"
    code: ErrorCode = ErrorCode.UNKNOWN
    model: Optional[str] = None
    retryable: bool = False
    status_code: Optional[int] = None
    raw: Any = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
