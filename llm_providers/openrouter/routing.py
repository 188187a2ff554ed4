"""Model routing for OpenRouter.

When the caller does not name a model, one is chosen from the live catalog:

``cost_optimized``
    Lowest average of prompt and completion price; the first model in
    catalog order wins ties.
``performance``
    First model whose id contains a fast-tier keyword.
``balanced``
    First model whose id contains a mid-tier keyword.
``explicit``
    Always the configured default model.

Candidates are first narrowed by ``min_context``, ``vision_required`` and
``function_calling``. An empty catalog, an empty candidate set or no keyword
match all fall back to the default model.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from ..base.parsing import as_int, get_nested
from .catalog import CatalogEntry, price

COST_OPTIMIZED = "cost_optimized"
PERFORMANCE = "performance"
BALANCED = "balanced"
EXPLICIT = "explicit"
ROUTING_STRATEGIES = (COST_OPTIMIZED, PERFORMANCE, BALANCED, EXPLICIT)

FAST_KEYWORDS = ("flash", "haiku", "turbo", "instant", "mini")
BALANCED_KEYWORDS = ("sonnet", "medium", "3.5", "pro")

VISION_MODELS = (
    "anthropic/claude-sonnet-4-5",
    "anthropic/claude-opus-4-5",
    "openai/gpt-5.2",
    "openai/gpt-5.2-pro",
    "google/gemini-3-flash",
)
VISION_FALLBACK_MODEL = "openai/gpt-5.2"


def average_cost(entry: Mapping[str, Any]) -> float:
    return (price(get_nested(entry, "pricing.prompt")) + price(get_nested(entry, "pricing.completion"))) / 2


def filter_candidates(models: Mapping[str, CatalogEntry], options: Mapping[str, Any]) -> Dict[str, CatalogEntry]:
    """Catalog entries meeting the caller's ``min_context``/capability requirements."""
    candidates = dict(models)
    min_context = as_int(options.get("min_context"))
    if min_context:
        candidates = {k: v for k, v in candidates.items() if as_int(v.get("context_length")) >= min_context}
    if options.get("vision_required"):
        candidates = {k: v for k, v in candidates.items() if get_nested(v, "capabilities.vision") is True}
    if options.get("function_calling"):
        candidates = {k: v for k, v in candidates.items() if get_nested(v, "capabilities.function_calling") is True}
    return candidates


def select_cheapest(candidates: Mapping[str, CatalogEntry]) -> Optional[str]:
    cheapest: Optional[str] = None
    lowest = float("inf")
    for model_id, entry in candidates.items():
        cost = average_cost(entry)
        if cost < lowest:
            lowest, cheapest = cost, model_id
    return cheapest


def select_by_keywords(candidates: Mapping[str, CatalogEntry], keywords: Tuple[str, ...]) -> Optional[str]:
    for model_id in candidates:
        lowered = model_id.lower()
        if any(k in lowered for k in keywords):
            return model_id
    return None


def select_model(
    strategy: str,
    models: Mapping[str, CatalogEntry],
    options: Mapping[str, Any],
    default_model: str,
) -> str:
    """Pick a model id for ``strategy``; see the module docstring for the rules."""
    if strategy == EXPLICIT or not models:
        return default_model
    candidates = filter_candidates(models, options)
    if not candidates:
        return default_model
    if strategy == COST_OPTIMIZED:
        chosen = select_cheapest(candidates)
    elif strategy == PERFORMANCE:
        chosen = select_by_keywords(candidates, FAST_KEYWORDS)
    elif strategy == BALANCED:
        chosen = select_by_keywords(candidates, BALANCED_KEYWORDS)
    else:
        chosen = None
    return chosen or default_model


def select_vision_model(models: Mapping[str, CatalogEntry], default_model: str) -> str:
    """Default model if the catalog marks it vision-capable, else the first known vision model.

    With an empty catalog the first known vision model is used unchecked.
    """
    if get_nested(models.get(default_model) or {}, "capabilities.vision") is True:
        return default_model
    for model_id in VISION_MODELS:
        if not models or model_id in models:
            return model_id
    return VISION_FALLBACK_MODEL


__all__ = [
    "BALANCED",
    "BALANCED_KEYWORDS",
    "COST_OPTIMIZED",
    "EXPLICIT",
    "FAST_KEYWORDS",
    "PERFORMANCE",
    "ROUTING_STRATEGIES",
    "VISION_MODELS",
    "average_cost",
    "filter_candidates",
    "select_by_keywords",
    "select_cheapest",
    "select_model",
    "select_vision_model",
]
