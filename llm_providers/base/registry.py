"""Provider registry.

Purpose
-------
Map adapter types (``"openai"``, ``"claude"``, ``"custom"``...) to adapter
classes and hold configured instances keyed by a caller-chosen name.
Built-in adapters are imported lazily with ``importlib`` so importing the
registry does not import every vendor module.

Configuration
-------------
``create`` merges :func:`llm_providers.config.get_provider_config` (defaults,
config file, environment) with the caller's options, which win. Option names
may be snake_case or camelCase.

Fallback semantics
------------------
Unknown adapter types resolve to the OpenAI-compatible adapter with a warning
log, so any OpenAI-shaped endpoint works given a ``base_url``.
"""

from __future__ import annotations

import logging
import threading
from importlib import import_module
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from ..config import get_provider_config
from ..config.options import normalize_options
from .errors import ProviderConfigurationError
from .logging import get_logger, log_event
from .provider import AbstractProvider

# adapter type -> (module path, class name)
BUILTIN_ADAPTERS: Dict[str, Tuple[str, str]] = {
    "openai": ("llm_providers.openai.client", "OpenAiProvider"),
    "anthropic": ("llm_providers.anthropic.client", "ClaudeProvider"),
    "claude": ("llm_providers.anthropic.client", "ClaudeProvider"),
    "gemini": ("llm_providers.gemini.client", "GeminiProvider"),
    "openrouter": ("llm_providers.openrouter.client", "OpenRouterProvider"),
    "mistral": ("llm_providers.mistral.client", "MistralProvider"),
    "groq": ("llm_providers.groq.client", "GroqProvider"),
    "ollama": ("llm_providers.ollama.client", "OllamaProvider"),
    "azure_openai": ("llm_providers.openai.client", "OpenAiProvider"),
    "custom": ("llm_providers.openai.client", "OpenAiProvider"),
}

FALLBACK_ADAPTER = "openai"

# adapter types configured under another identifier's settings
CONFIG_ALIASES: Dict[str, str] = {"anthropic": "claude"}

_logger = get_logger("llm_providers.registry")


def _normalize_type(adapter_type: str) -> str:
    return (adapter_type or "").lower().strip()


def _load_builtin(adapter_type: str) -> Type[AbstractProvider]:
    module_path, class_name = BUILTIN_ADAPTERS[adapter_type]
    return getattr(import_module(module_path), class_name)


class ProviderRegistry:
    """Adapter-type lookup plus a cache of configured instances.

    Safe to share between threads: lookups, registration and the instance
    cache are guarded by one lock. Cached instances themselves follow the
    adapter concurrency rules (no ``configure`` during in-flight requests).
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._custom: Dict[str, Type[AbstractProvider]] = {}
        self._instances: Dict[str, AbstractProvider] = {}

    # ---- adapter classes -----------------------------------------------------

    def register_adapter(self, adapter_type: str, adapter_class: Type[AbstractProvider]) -> None:
        """Register (or replace) the class used for ``adapter_type``.

        Raises:
            ProviderConfigurationError: ``adapter_class`` is not an
                :class:`AbstractProvider` subclass or the type is empty.
        """
        name = _normalize_type(adapter_type)
        if not name:
            raise ProviderConfigurationError(message="Adapter type must not be empty", provider="registry")
        if not (isinstance(adapter_class, type) and issubclass(adapter_class, AbstractProvider)):
            raise ProviderConfigurationError(
                message=f"Adapter class for '{name}' must subclass AbstractProvider",
                provider="registry",
            )
        with self._lock:
            self._custom[name] = adapter_class

    def has_adapter(self, adapter_type: str) -> bool:
        name = _normalize_type(adapter_type)
        with self._lock:
            return name in self._custom or name in BUILTIN_ADAPTERS

    def registered_adapters(self) -> List[str]:
        """Sorted adapter types: built-ins plus registered ones."""
        with self._lock:
            return sorted(set(BUILTIN_ADAPTERS) | set(self._custom))

    def get_adapter_class(self, adapter_type: str) -> Type[AbstractProvider]:
        name = _normalize_type(adapter_type)
        with self._lock:
            custom = self._custom.get(name)
        if custom is not None:
            return custom
        if name in BUILTIN_ADAPTERS:
            return _load_builtin(name)
        log_event(
            _logger,
            "registry.unknown_adapter",
            None,
            level=logging.WARNING,
            adapter_type=adapter_type,
            fallback=FALLBACK_ADAPTER,
        )
        return _load_builtin(FALLBACK_ADAPTER)

    # ---- instances -----------------------------------------------------------

    def create(
        self,
        adapter_type: str,
        options: Optional[Mapping[str, Any]] = None,
        *,
        key: Optional[str] = None,
        use_cache: bool = True,
        **adapter_kwargs: Any,
    ) -> AbstractProvider:
        """Create and configure an adapter instance.

        Parameters:
            adapter_type: Registered or built-in adapter type.
            options: Configuration; overrides the values from
                :func:`get_provider_config`.
            key: Cache key; defaults to the normalized adapter type.
            use_cache: Return the cached instance for ``key`` if one exists
                and cache the new one otherwise.
            adapter_kwargs: Forwarded to the adapter constructor
                (``http_client``, ``key_resolver``).
        """
        name = _normalize_type(adapter_type)
        cache_key = key or name
        if use_cache:
            with self._lock:
                cached = self._instances.get(cache_key)
            if cached is not None:
                return cached

        adapter_class = self.get_adapter_class(name)
        merged = get_provider_config(CONFIG_ALIASES.get(name, name))
        merged |= normalize_options(options)
        instance = adapter_class(merged, **adapter_kwargs)
        log_event(
            _logger,
            "registry.created",
            None,
            level=logging.DEBUG,
            adapter_type=name,
            key=cache_key,
            provider=instance.identifier,
        )
        if use_cache:
            with self._lock:
                # another thread may have won the race; keep the first instance
                instance = self._instances.setdefault(cache_key, instance)
        return instance

    def get(self, key: str) -> Optional[AbstractProvider]:
        with self._lock:
            return self._instances.get(key)

    def clear_cache(self, key: Optional[str] = None) -> None:
        """Drop one cached instance, or all of them, closing their clients."""
        with self._lock:
            if key is None:
                dropped = list(self._instances.values())
                self._instances.clear()
            else:
                instance = self._instances.pop(key, None)
                dropped = [instance] if instance is not None else []
        for instance in dropped:
            instance.close()


default_registry = ProviderRegistry()


__all__ = [
    "BUILTIN_ADAPTERS",
    "FALLBACK_ADAPTER",
    "ProviderRegistry",
    "default_registry",
]
