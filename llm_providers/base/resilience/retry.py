"""Bounded retry with exponential backoff.

The policy retries a call that raises a :class:`ProviderError` whose
``retryable`` flag is set; anything else propagates on the spot. The wait
after the k-th failed attempt is ``backoff_base * 2**k`` seconds (100ms,
200ms, 400ms, ... with the default base), and the calling thread sleeps
through it. When every attempt fails, the last error is re-raised, or
converted by ``on_exhausted`` when the config provides one.
"""
from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Protocol, TypeVar

from ...config.defaults import BACKOFF_BASE_SECONDS, DEFAULT_MAX_RETRIES
from ..errors import ProviderError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = DEFAULT_MAX_RETRIES
    backoff_base: float = BACKOFF_BASE_SECONDS
    attempt_logger: Optional[AttemptLogger] = None
    on_exhausted: Optional[Callable[[int, ProviderError], Exception]] = None

    def delay_for(self, failed_attempts: int) -> float:
        """Seconds to wait after ``failed_attempts`` consecutive failures."""
        return self.backoff_base * (2 ** failed_attempts)

    def delays(self) -> Iterator[float]:
        """Waits between attempts; one fewer than ``max_attempts``."""
        for failed in range(1, max(1, self.max_attempts)):
            yield self.delay_for(failed)


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator applying the bounded retry policy.

    - At least one attempt is always made, at most ``max_attempts``
    - Only ``ProviderError`` instances with ``retryable=True`` are retried
    - Preserves the wrapped function's signature
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            attempts = max(1, config.max_attempts)
            last_exc: ProviderError | None = None
            schedule = list(config.delays()) + [None]  # final attempt has delay None
            for attempt, delay in enumerate(schedule[:attempts], start=1):
                try:
                    return func(*args, **kwargs)
                except ProviderError as e:
                    last_exc = e
                    if not e.retryable:
                        raise
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=attempts,
                            delay=delay,
                            error=e,
                        )
                    if delay is not None:
                        time.sleep(delay)
            # Explicit check instead of assert (Bandit B101).
            if last_exc is None:  # pragma: no cover - defensive
                raise RuntimeError("retry: reached terminal state without captured exception")
            if config.on_exhausted is not None:
                raise config.on_exhausted(attempts, last_exc) from last_exc
            raise last_exc

        return wrapper

    return decorator


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
]
