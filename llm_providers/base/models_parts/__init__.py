"""Models parts package; prefer importing from ``llm_providers.base.models``."""
