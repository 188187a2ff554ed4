"""Resilience helpers (bounded retry with backoff)."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry

__all__ = ["DEFAULT_RETRY_CONFIG", "RetryConfig", "retry"]
