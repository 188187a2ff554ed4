"""Canonical option names shared by the config layer and the adapters."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

# camelCase names used by host applications -> canonical option names.
OPTION_ALIASES: Dict[str, str] = {
    "apiKey": "api_key",
    "apiKeyIdentifier": "api_key_identifier",
    "baseUrl": "base_url",
    "defaultModel": "default_model",
    "maxRetries": "max_retries",
    "timeoutSeconds": "timeout",
    "siteUrl": "site_url",
    "appName": "app_name",
    "routingStrategy": "routing_strategy",
    "autoFallback": "auto_fallback",
    "fallbackModels": "fallback_models",
    "embeddingModel": "embedding_model",
}


def normalize_options(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return ``options`` keyed by canonical snake_case names.

    When both spellings of an option are present the snake_case one wins.
    """
    out: Dict[str, Any] = {}
    if not options:
        return out
    for key, value in options.items():
        canonical = OPTION_ALIASES.get(key, key)
        if canonical != key and canonical in options:
            continue
        out[canonical] = value
    return out


__all__ = ["OPTION_ALIASES", "normalize_options"]
