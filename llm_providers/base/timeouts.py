"""Timeout configuration for adapter HTTP calls.

A request's ``timeout`` bounds each attempt as a whole; the connect phase is
capped separately at ``min(timeout, connect_cap_seconds)``. Retries do not
share a budget: every attempt gets a fresh timeout.

get_timeout_config()
    Returns a process-cached :class:`TimeoutConfig`, re-read when one of the
    supported environment variables changes:
        LLM_PROVIDERS_CONNECT_TIMEOUT_CAP
        LLM_PROVIDERS_STREAM_READ_TIMEOUT

build_httpx_timeout(timeout, stream=False)
    Produces the ``httpx.Timeout`` used for a client or a single stream.

Deadline
    Wall-clock budget for one attempt. ``httpx.Timeout`` bounds each socket
    operation separately, so a body trickled in small pieces is checked
    against the deadline chunk by chunk.
"""
from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from ..config.defaults import CONNECT_TIMEOUT_CAP_SECONDS

CONNECT_CAP_ENV = "LLM_PROVIDERS_CONNECT_TIMEOUT_CAP"
STREAM_READ_ENV = "LLM_PROVIDERS_STREAM_READ_TIMEOUT"


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        connect_cap_seconds: Upper bound on connection establishment.
        stream_read_timeout_seconds: Idle read timeout between streamed
            chunks; ``None`` reuses the request timeout.
    """

    connect_cap_seconds: float = CONNECT_TIMEOUT_CAP_SECONDS
    stream_read_timeout_seconds: Optional[float] = None


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Read a positive float from the environment, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join([os.getenv(CONNECT_CAP_ENV, ""), os.getenv(STREAM_READ_ENV, "")])
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    cap = _parse_env_float(CONNECT_CAP_ENV, CONNECT_TIMEOUT_CAP_SECONDS)
    _CACHED = TimeoutConfig(
        connect_cap_seconds=float(cap),
        stream_read_timeout_seconds=_parse_env_float(STREAM_READ_ENV, None),
    )
    _ENV_GUARD = guard
    return _CACHED


def build_httpx_timeout(timeout: float, *, stream: bool = False) -> httpx.Timeout:
    """Build the per-attempt ``httpx.Timeout`` for a configured request timeout."""
    cfg = get_timeout_config()
    connect = min(float(timeout), cfg.connect_cap_seconds)
    read = float(timeout)
    if stream and cfg.stream_read_timeout_seconds is not None:
        read = cfg.stream_read_timeout_seconds
    return httpx.Timeout(float(timeout), connect=connect, read=read)


class Deadline:
    """Monotonic deadline ``seconds`` from construction."""

    def __init__(self, seconds: float) -> None:
        self.seconds = float(seconds)
        self._expires_at = time.monotonic() + self.seconds

    def expired(self) -> bool:
        return time.monotonic() >= self._expires_at


__all__ = [
    "Deadline",
    "TimeoutConfig",
    "build_httpx_timeout",
    "get_timeout_config",
]
