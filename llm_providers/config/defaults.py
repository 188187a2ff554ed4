"""llm_providers.config.defaults
=============================

Central place for small, stable default values used across the adapters.
These defaults can be overridden via environment variables, an external
configuration file, or explicit ``configure()`` options.

Only plain constants live here; this module imports nothing from the rest of
the package so every layer can depend on it without cycles.
"""

from __future__ import annotations

# ---- Shared request defaults ----
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_MAX_RETRIES = 3
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096

# Connect phase never waits longer than this, whatever the request timeout.
CONNECT_TIMEOUT_CAP_SECONDS = 10.0

# First retry waits BACKOFF_BASE_SECONDS * 2, then doubles.
BACKOFF_BASE_SECONDS = 0.1

# Bytes read from a streaming response per iteration.
STREAM_CHUNK_SIZE = 1024

UNKNOWN_ERROR_MESSAGE = "Unknown provider error"

# ---- OpenAI ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-5.2"
OPENAI_DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
OPENAI_MAX_IMAGE_BYTES = 20 * 1024 * 1024

# ---- Anthropic / Claude ----
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
ANTHROPIC_API_VERSION = "2023-06-01"

# ---- Gemini ----
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_DEFAULT_MODEL = "gemini-3-flash-preview"
GEMINI_DEFAULT_EMBEDDING_MODEL = "text-embedding-004"

# ---- OpenRouter ----
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_MODEL = "anthropic/claude-sonnet-4-5"
OPENROUTER_DEFAULT_EMBEDDING_MODEL = "openai/text-embedding-3-small"
OPENROUTER_DEFAULT_APP_NAME = "llm-providers"
OPENROUTER_DEFAULT_ROUTING_STRATEGY = "balanced"

# ---- Mistral ----
MISTRAL_DEFAULT_BASE_URL = "https://api.mistral.ai/v1"
MISTRAL_DEFAULT_MODEL = "mistral-large-latest"
MISTRAL_DEFAULT_EMBEDDING_MODEL = "mistral-embed"

# ---- Groq ----
GROQ_DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_DEFAULT_MODEL = "llama-3.3-70b-versatile"

# ---- Ollama (local daemon) ----
OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434"
OLLAMA_DEFAULT_MODEL = "llama3.2"
OLLAMA_DEFAULT_EMBEDDING_MODEL = "nomic-embed-text"
