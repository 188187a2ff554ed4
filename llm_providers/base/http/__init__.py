"""HTTP utilities package for adapters.

Exposes tracked httpx client construction.
"""

from .client import build_http_client, close_all_clients

__all__ = ["build_http_client", "close_all_clients"]
