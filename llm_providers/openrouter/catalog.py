"""OpenRouter model catalog and account parsing.

``GET models`` returns every routable model with pricing and capability
flags; :func:`parse_catalog` reduces it to the entries the router needs::

    {"<vendor>/<model>": {"name", "context_length", "pricing": {"prompt",
     "completion"}, "capabilities": {"vision", "function_calling"},
     "provider"}}

Prices arrive as decimal strings (USD per token) and are read as floats.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from ..base.parsing import (
    as_mapping,
    get_bool,
    get_int,
    get_list,
    get_mapping,
    get_nested,
    get_nested_list,
    get_nested_mapping,
    get_nested_string,
    get_string,
)

CatalogEntry = Dict[str, Any]


def price(value: Any) -> float:
    """Numeric or numeric-string price; anything else is ``0.0``."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def provider_from_model_id(model_id: str) -> str:
    """``"anthropic/claude-3"`` -> ``"anthropic"``; ids without a vendor give ``"unknown"``."""
    if "/" in model_id:
        return model_id.split("/", 1)[0]
    return "unknown"


def _supports_vision(raw: Mapping[str, Any]) -> bool:
    modality = get_nested_string(raw, "architecture.modality")
    if modality == "multimodal":
        return True
    inputs = get_nested_list(raw, "architecture.input_modalities")
    return "image" in inputs or "image" in modality.split("->", 1)[0]


def _supports_tools(raw: Mapping[str, Any]) -> bool:
    return get_bool(raw, "supports_function_calling") or "tools" in get_list(raw, "supported_parameters")


def parse_catalog_entry(raw: Mapping[str, Any]) -> CatalogEntry:
    model_id = get_string(raw, "id")
    pricing = get_mapping(raw, "pricing")
    return {
        "name": get_string(raw, "name") or model_id,
        "context_length": get_int(raw, "context_length"),
        "pricing": {
            "prompt": price(pricing.get("prompt")),
            "completion": price(pricing.get("completion")),
        },
        "capabilities": {
            "vision": _supports_vision(raw),
            "function_calling": _supports_tools(raw),
        },
        "provider": provider_from_model_id(model_id),
    }


def parse_catalog(data: Mapping[str, Any]) -> Dict[str, CatalogEntry]:
    """Catalog keyed by model id, in API order; entries without an id are skipped."""
    catalog: Dict[str, CatalogEntry] = {}
    for raw in get_list(data, "data"):
        entry = as_mapping(raw)
        model_id = get_string(entry, "id")
        if model_id:
            catalog[model_id] = parse_catalog_entry(entry)
    return catalog


def parse_credits(data: Mapping[str, Any]) -> Dict[str, Any]:
    """``GET auth/key`` -> ``{balance, usage, is_free_tier, rate_limit}``."""
    return {
        "balance": price(get_nested(data, "data.limit")),
        "usage": price(get_nested(data, "data.usage")),
        "is_free_tier": get_nested(data, "data.is_free_tier") is True,
        "rate_limit": get_nested_mapping(data, "data.rate_limit"),
    }


__all__ = [
    "CatalogEntry",
    "parse_catalog",
    "parse_catalog_entry",
    "parse_credits",
    "price",
    "provider_from_model_id",
]
