"""llm_providers.config.env
========================

Environment variable mapping for provider credentials.

``ENV_MAP`` names the canonical variable for each provider identifier; some
vendors are commonly configured under a second name, listed in
``ENV_ALIASES`` with the canonical name first. Helpers return ``None`` when
nothing is set and never raise.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "groq": "GROQ_API_KEY",
}

ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "claude": ("ANTHROPIC_API_KEY", "CLAUDE_API_KEY"),
}


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a provider.

    The canonical name comes first, followed by any aliases.
    """
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first non-empty candidate.

    ``(None, None)`` when no candidate variable is set.
    """
    for name in get_env_var_candidates(provider):
        if val := os.environ.get(name):
            return val, name
    return None, None


def resolve_key_identifier(identifier: str) -> Optional[str]:
    """Default secret resolver for ``api_key_identifier`` options.

    The identifier is treated as the name of an environment variable. Host
    applications with a real secret store pass their own resolver to the
    provider constructor instead.
    """
    if not identifier:
        return None
    return os.environ.get(identifier) or None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "get_env_var_candidates",
    "resolve_provider_key",
    "resolve_key_identifier",
]
