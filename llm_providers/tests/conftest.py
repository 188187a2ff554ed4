"""Pytest configuration for the adapter test suite.

Every test runs with:
- ``time.sleep`` replaced by a recorder, so retry backoff is instant and the
  requested delays can be asserted through the ``sleeps`` fixture;
- vendor credential and configuration variables removed from the environment;
- the external config file cache cleared.
"""

from __future__ import annotations

import time
from typing import Iterator, List

import pytest

from llm_providers.base.logging import BASE_LOGGER_NAME, LOG_LEVEL_ENV, get_logger
from llm_providers.config import clear_config_cache
from llm_providers.tests.utils import ListHandler

_ENV_VARS = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "CLAUDE_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "OPENROUTER_API_KEY",
    "MISTRAL_API_KEY",
    "GROQ_API_KEY",
    "OLLAMA_BASE_URL",
    "LLM_PROVIDERS_CONFIG_FILE",
    "LLM_PROVIDERS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def sleeps(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Recorded backoff delays; nothing actually sleeps."""
    recorded: List[float] = []
    monkeypatch.setattr(time, "sleep", lambda seconds: recorded.append(seconds))
    return recorded


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture()
def log_records(monkeypatch: pytest.MonkeyPatch) -> Iterator[ListHandler]:
    """Collect every event emitted under the ``llm_providers`` logger at DEBUG.

    The level comes from the environment because adapters refresh it from
    there whenever they fetch their logger.
    """
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    logger = get_logger(BASE_LOGGER_NAME)
    handler = ListHandler()
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    get_logger(BASE_LOGGER_NAME)
