"""Unified configuration layer for provider adapters.

Goals
-----
* Centralize defaults (base URLs, default models, request limits).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by
       ``LLM_PROVIDERS_CONFIG_FILE``
    3. Environment variables (e.g. ``OPENAI_API_KEY``, ``GROQ_MODEL``)
    4. In-code overrides passed to the helper
* Return keys using the option names accepted by ``AbstractProvider.configure``.

Environment Variable Conventions
--------------------------------
``<IDENTIFIER>_API_KEY``, ``<IDENTIFIER>_BASE_URL``, ``<IDENTIFIER>_MODEL``,
``<IDENTIFIER>_TIMEOUT``, ``<IDENTIFIER>_MAX_RETRIES``; e.g. ``MISTRAL_MODEL``.
API keys additionally honour the aliases in :mod:`llm_providers.config.env`.

External Config File
--------------------
JSON is attempted first, then YAML. Structure example::

    openrouter:
      default_model: anthropic/claude-sonnet-4-5
      routing_strategy: cost_optimized
    ollama:
      base_url: http://gpu-box:11434
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    GROQ_DEFAULT_BASE_URL,
    GROQ_DEFAULT_MODEL,
    MISTRAL_DEFAULT_BASE_URL,
    MISTRAL_DEFAULT_MODEL,
    OLLAMA_DEFAULT_BASE_URL,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
)
from .env import resolve_provider_key
from .options import normalize_options

CONFIG_FILE_ENV = "LLM_PROVIDERS_CONFIG_FILE"

# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL, "default_model": OPENAI_DEFAULT_MODEL},
    "claude": {"base_url": ANTHROPIC_DEFAULT_BASE_URL, "default_model": ANTHROPIC_DEFAULT_MODEL},
    "gemini": {"base_url": GEMINI_DEFAULT_BASE_URL, "default_model": GEMINI_DEFAULT_MODEL},
    "openrouter": {"base_url": OPENROUTER_DEFAULT_BASE_URL, "default_model": OPENROUTER_DEFAULT_MODEL},
    "mistral": {"base_url": MISTRAL_DEFAULT_BASE_URL, "default_model": MISTRAL_DEFAULT_MODEL},
    "groq": {"base_url": GROQ_DEFAULT_BASE_URL, "default_model": GROQ_DEFAULT_MODEL},
    "ollama": {"base_url": OLLAMA_DEFAULT_BASE_URL, "default_model": OLLAMA_DEFAULT_MODEL},
}

COMMON_DEFAULTS: Dict[str, Any] = {
    "timeout": DEFAULT_TIMEOUT_SECONDS,
    "max_retries": DEFAULT_MAX_RETRIES,
}


def _as_float(raw: str) -> Optional[float]:
    try:
        return float(raw)
    except ValueError:
        return None


def _as_int(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except ValueError:
        return None


# option name -> (env suffix, converter)
ENV_FIELD_MAP: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "api_key": ("API_KEY", str),  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": ("BASE_URL", str),
    "default_model": ("MODEL", str),
    "timeout": ("TIMEOUT", _as_float),
    "max_retries": ("MAX_RETRIES", _as_int),
}


_FILE_CACHE: Dict[str, Dict[str, Any]] = {}


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the optional external config file.

    Unreadable, missing or non-mapping files yield an empty mapping; the cache
    is keyed by path so changing the environment variable takes effect.
    """
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    if path in _FILE_CACHE:
        return _FILE_CACHE[path]
    p = Path(path)
    data: Any = {}
    if p.is_file():
        text = p.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE[path] = data
    return data


def clear_config_cache() -> None:
    """Forget any previously loaded external config file."""
    _FILE_CACHE.clear()


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, (suffix, convert) in ENV_FIELD_MAP.items():
        raw = os.getenv(f"{prefix}_{suffix}")
        if raw is None or raw == "":
            continue
        value = convert(raw)
        if value is not None:
            out[field] = value
    if "api_key" not in out:
        key, _ = resolve_provider_key(provider)
        if key:
            out["api_key"] = key
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider identifier.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    Keys from the external file and ``overrides`` may use camelCase names;
    they are normalized before merging. ``None`` values in ``overrides`` are
    ignored.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(COMMON_DEFAULTS)

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= normalize_options(file_cfg)

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in normalize_options(overrides).items() if v is not None}

    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("default_model")


__all__ = [
    "CONFIG_FILE_ENV",
    "DEFAULTS",
    "clear_config_cache",
    "get_model",
    "get_provider_config",
]
