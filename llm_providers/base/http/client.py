"""HTTP client construction for adapters.

Purpose:
    Each adapter instance owns exactly one ``httpx.Client`` built for its
    configured timeout. This module builds those clients and tracks them so
    they can be closed together at interpreter exit or in test teardown.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Lifecycle & cleanup:
    - Clients are held in a weak set; a client dropped by its adapter is
      garbage collected normally.
    - :func:`close_all_clients` closes every live tracked client and runs at
      interpreter exit via ``atexit``.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
import weakref
from typing import Optional

import httpx

from ..timeouts import build_httpx_timeout

_CLIENTS: "weakref.WeakSet[httpx.Client]" = weakref.WeakSet()
_LOCK = threading.RLock()


def build_http_client(timeout: float, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """Return a new tracked ``httpx.Client`` for ``timeout`` seconds.

    Parameters:
        timeout: Whole-request timeout per attempt; the connect phase is
            capped by :func:`~llm_providers.base.timeouts.build_httpx_timeout`.
        transport: Optional transport (``httpx.MockTransport`` in tests).
    """
    kwargs = {"timeout": build_httpx_timeout(timeout)}
    if transport is not None:
        kwargs["transport"] = transport
    client = httpx.Client(**kwargs)
    with _LOCK:
        _CLIENTS.add(client)
    return client


def close_all_clients() -> None:
    """Close every tracked client; close errors during shutdown are ignored."""
    with _LOCK:
        clients = list(_CLIENTS)
        _CLIENTS.clear()
    for c in clients:
        with contextlib.suppress(Exception):  # nosec B110 - best-effort shutdown
            c.close()


atexit.register(close_all_clients)

__all__ = ["build_http_client", "close_all_clients"]
