"""OpenRouter adapter (OpenAI-compatible gateway to many vendors).

Summary:
- Bearer authentication plus the attribution headers ``HTTP-Referer``
  (``site_url``) and ``X-Title`` (``app_name``)
- Model routing when the caller names no model (see :mod:`.routing`)
- ``route: "fallback"`` with an optional ``models`` list when automatic
  fallback is on; ``transforms`` passthrough
- Response metadata: the upstream vendor that served the request, the
  billed cost and the native token counts
- Live catalog (``fetch_available_models``) cached per instance, and
  account credits (``get_credits``)

Vendor options (camelCase accepted) are applied only when present:
``site_url``, ``app_name``, ``routing_strategy`` (unknown values are
ignored), ``auto_fallback`` and ``fallback_models`` (list or comma-separated
string).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..base.capabilities import ModelCapability
from ..base.errors import ProviderError, ProviderResponseError, classify_status
from ..base.logging import log_event
from ..base.models import ConnectionTestResult
from ..base.openai_style_parts import OpenAIStyleMixin, OpenAIVisionMixin
from ..base.parsing import get_nested, get_string
from ..base.provider import AbstractProvider
from ..config.defaults import (
    OPENROUTER_DEFAULT_APP_NAME,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_EMBEDDING_MODEL,
    OPENROUTER_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_ROUTING_STRATEGY,
)
from .catalog import CatalogEntry, parse_catalog, parse_credits
from .errors import openrouter_error_message
from .routing import ROUTING_STRATEGIES, select_model, select_vision_model

MODELS_ENDPOINT = "models"
CREDITS_ENDPOINT = "auth/key"

OPENROUTER_MODELS: Dict[str, str] = {
    "anthropic/claude-opus-4-5": "Claude Opus 4.5 (Anthropic)",
    "anthropic/claude-sonnet-4-5": "Claude Sonnet 4.5 (Anthropic)",
    "anthropic/claude-opus-4-1": "Claude Opus 4.1 (Anthropic)",
    "openai/gpt-5.2": "GPT-5.2 (OpenAI)",
    "openai/gpt-5.2-pro": "GPT-5.2 Pro (OpenAI)",
    "openai/o3": "O3 Reasoning (OpenAI)",
    "openai/o4-mini": "O4 Mini (OpenAI)",
    "google/gemini-3-flash": "Gemini 3 Flash (Google)",
    "google/gemini-3-pro": "Gemini 3 Pro (Google)",
    "google/gemini-2.5-flash": "Gemini 2.5 Flash (Google)",
    "meta-llama/llama-3.3-70b-instruct": "Llama 3.3 70B (Meta)",
    "meta-llama/llama-3.1-405b-instruct": "Llama 3.1 405B (Meta)",
    "mistralai/mistral-large": "Mistral Large (Mistral AI)",
    "mistralai/pixtral-large": "Pixtral Large (Mistral AI)",
    "cohere/command-r-plus": "Command R+ (Cohere)",
}


def _fallback_list(value: Any) -> List[str]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [v for v in value if isinstance(v, str)]
    else:
        return []
    return [m.strip() for m in items if m.strip()]


class OpenRouterProvider(OpenAIVisionMixin, OpenAIStyleMixin, AbstractProvider):
    DEFAULT_MODEL = OPENROUTER_DEFAULT_MODEL
    DEFAULT_EMBEDDING_MODEL = OPENROUTER_DEFAULT_EMBEDDING_MODEL
    EMBEDDING_PASSTHROUGH = ("dimensions",)
    supported_features = frozenset(
        {
            ModelCapability.CHAT,
            ModelCapability.COMPLETION,
            ModelCapability.EMBEDDINGS,
            ModelCapability.VISION,
            ModelCapability.STREAMING,
            ModelCapability.TOOLS,
        }
    )

    _site_url = ""
    _app_name = OPENROUTER_DEFAULT_APP_NAME
    _routing_strategy = OPENROUTER_DEFAULT_ROUTING_STRATEGY
    _auto_fallback = True
    _fallback_models: List[str] = []
    _catalog: Optional[Dict[str, CatalogEntry]] = None

    @property
    def identifier(self) -> str:
        return "openrouter"

    @property
    def name(self) -> str:
        return "OpenRouter"

    def get_default_base_url(self) -> str:
        return OPENROUTER_DEFAULT_BASE_URL

    @property
    def routing_strategy(self) -> str:
        return self._routing_strategy

    @property
    def auto_fallback(self) -> bool:
        return self._auto_fallback

    @property
    def fallback_models(self) -> List[str]:
        return list(self._fallback_models)

    def _configure_extra(self, options: Dict[str, Any]) -> None:
        if isinstance(options.get("site_url"), str):
            self._site_url = options["site_url"]
        if isinstance(options.get("app_name"), str):
            self._app_name = options["app_name"]
        strategy = options.get("routing_strategy")
        if strategy in ROUTING_STRATEGIES:
            self._routing_strategy = strategy
        elif strategy is not None:
            log_event(
                self._logger,
                "config.ignored",
                None,
                level=logging.WARNING,
                provider=self.identifier,
                option="routing_strategy",
                value=strategy,
            )
        if options.get("auto_fallback") is not None:
            self._auto_fallback = bool(options["auto_fallback"])
        if "fallback_models" in options:
            self._fallback_models = _fallback_list(options["fallback_models"])
        self._catalog = None

    def add_provider_specific_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        headers = super().add_provider_specific_headers(headers)
        if self._site_url:
            headers["HTTP-Referer"] = self._site_url
        if self._app_name:
            headers["X-Title"] = self._app_name
        return headers

    def create_response_error(self, status: int, body: Dict[str, Any]) -> ProviderResponseError:
        return ProviderResponseError(
            message=openrouter_error_message(status, body),
            provider=self.identifier,
            code=classify_status(status),
            status_code=status,
            raw=body,
        )

    def server_error_message(self, status: int) -> str:
        if status == 503:
            return openrouter_error_message(status, {})
        return super().server_error_message(status)

    # ---- mixin hooks -------------------------------------------------------------

    def _resolve_model(self, options: Mapping[str, Any], purpose: str = "chat") -> str:
        model = get_string(options, "model")
        if model:
            return model
        if purpose == "vision":
            return select_vision_model(self.fetch_available_models(), self.get_default_model())
        if self._routing_strategy == "explicit":
            return self.get_default_model()
        return select_model(
            self._routing_strategy,
            self.fetch_available_models(),
            options,
            self.get_default_model(),
        )

    def _extend_chat_payload(self, payload: Dict[str, Any], options: Mapping[str, Any]) -> None:
        if self._auto_fallback:
            payload["route"] = "fallback"
            if self._fallback_models:
                payload["models"] = [payload["model"], *self._fallback_models]
        if options.get("transforms"):
            payload["transforms"] = options["transforms"]

    def _extend_vision_payload(self, payload: Dict[str, Any], options: Mapping[str, Any]) -> None:
        if self._auto_fallback:
            payload["route"] = "fallback"

    def _response_metadata(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "actual_provider": get_string(data, "provider", "unknown"),
            "cost": get_nested(data, "total_cost"),
            "native_tokens": {
                "prompt": get_nested(data, "native_tokens_prompt"),
                "completion": get_nested(data, "native_tokens_completion"),
            },
        }

    # ---- catalog and account -----------------------------------------------------

    def get_available_models(self) -> Dict[str, str]:
        """Curated static list; use :meth:`fetch_available_models` for the live catalog."""
        return dict(OPENROUTER_MODELS)

    def fetch_available_models(self, force_refresh: bool = False) -> Dict[str, CatalogEntry]:
        """Live catalog, cached on the instance after the first successful fetch.

        Failures are logged and yield an empty dict; they are never raised and
        never cached.
        """
        with self._lock:
            if self._catalog is not None and not force_refresh:
                return self._catalog
        try:
            catalog = parse_catalog(self.send_request(MODELS_ENDPOINT, method="GET"))
        except ProviderError as exc:
            log_event(
                self._logger,
                "models.fetch_failed",
                self._log_context(MODELS_ENDPOINT),
                level=logging.WARNING,
                error_code=exc.code.value,
                error=exc.message,
            )
            return {}
        with self._lock:
            self._catalog = catalog
        return catalog

    def get_credits(self) -> Dict[str, Any]:
        """Account balance and usage: ``{balance, usage, is_free_tier, rate_limit}``."""
        return parse_credits(self.send_request(CREDITS_ENDPOINT, method="GET"))

    def test_connection(self) -> ConnectionTestResult:
        """Fetch the live catalog, propagating any failure."""
        catalog = parse_catalog(self.send_request(MODELS_ENDPOINT, method="GET"))
        with self._lock:
            self._catalog = catalog
        models = {model_id: entry["name"] for model_id, entry in catalog.items()}
        return ConnectionTestResult(
            success=True,
            message=f"Connection successful. Found {len(models)} models.",
            models=models,
            verified=True,
        )


__all__ = ["OpenRouterProvider", "OPENROUTER_MODELS"]
