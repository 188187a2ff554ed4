"""Ollama adapter (local daemon, native ``/api`` endpoints).

Summary:
- No API key: the adapter is available whenever a base URL is configured
- Sampling options travel in an ``options`` sub-object (``temperature``,
  ``top_p``, ``num_predict``)
- ``api/chat`` for chat, ``api/embeddings`` once per input text
- Streaming is newline-delimited JSON ending with a ``done: true`` frame
- ``get_available_models`` lists local models via ``api/tags`` and falls back
  to a static list when the daemon is unreachable; ``test_connection`` does
  not fall back and lets the failure propagate
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Union

from ..base.capabilities import ModelCapability
from ..base.errors import ProviderError
from ..base.logging import log_event
from ..base.models import CompletionResponse, ConnectionTestResult, EmbeddingResponse
from ..base.parsing import as_float, as_mapping, get_float, get_int, get_list, get_mapping, get_string
from ..base.provider import AbstractProvider
from ..base.streaming import decode_ndjson, ollama_delta
from ..base.utils.messages import MessageLike, to_wire_messages
from ..config.defaults import OLLAMA_DEFAULT_BASE_URL, OLLAMA_DEFAULT_EMBEDDING_MODEL, OLLAMA_DEFAULT_MODEL

CHAT_ENDPOINT = "api/chat"
EMBEDDINGS_ENDPOINT = "api/embeddings"
TAGS_ENDPOINT = "api/tags"

FALLBACK_MODELS: Dict[str, str] = {
    "llama3.2": "Llama 3.2",
    "llama3.2:70b": "Llama 3.2 70B",
    "mistral": "Mistral",
    "codellama": "Code Llama",
    "phi3": "Phi-3",
}


def sampling_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Build the Ollama ``options`` object; only keys the caller set are sent.

    ``num_predict`` wins over ``max_tokens`` when both are given.
    """
    out: Dict[str, Any] = {}
    for key in ("temperature", "top_p"):
        if options.get(key) is not None:
            out[key] = get_float(options, key)
    if options.get("num_predict") is not None or options.get("max_tokens") is not None:
        out["num_predict"] = get_int(options, "num_predict", get_int(options, "max_tokens", 4096))
    return out


def model_names(data: Mapping[str, Any]) -> Dict[str, str]:
    names: Dict[str, str] = {}
    for raw in get_list(data, "models"):
        name = get_string(as_mapping(raw), "name")
        if name:
            names[name] = name
    return names


class OllamaProvider(AbstractProvider):
    DEFAULT_MODEL = OLLAMA_DEFAULT_MODEL
    requires_api_key = False
    supported_features = frozenset(
        {
            ModelCapability.CHAT,
            ModelCapability.COMPLETION,
            ModelCapability.EMBEDDINGS,
            ModelCapability.STREAMING,
        }
    )

    @property
    def identifier(self) -> str:
        return "ollama"

    @property
    def name(self) -> str:
        return "Ollama"

    def get_default_base_url(self) -> str:
        return OLLAMA_DEFAULT_BASE_URL

    def is_available(self) -> bool:
        return bool(self.base_url)

    def _payload(self, messages: Sequence[MessageLike], options: Mapping[str, Any], *, stream: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": get_string(options, "model", self.get_default_model()),
            "messages": to_wire_messages(messages),
            "stream": stream,
        }
        sampling = sampling_options(options)
        if sampling:
            payload["options"] = sampling
        return payload

    def chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> CompletionResponse:
        payload = self._payload(messages, options, stream=False)
        data = self.send_request(CHAT_ENDPOINT, payload)
        return self.create_completion_response(
            content=get_string(get_mapping(data, "message"), "content"),
            model=get_string(data, "model", payload["model"]),
            usage=self.create_usage_statistics(get_int(data, "prompt_eval_count"), get_int(data, "eval_count")),
            finish_reason=get_string(data, "done_reason", "stop"),
        )

    def embeddings(self, input: Union[str, Sequence[str]], **options: Any) -> EmbeddingResponse:
        inputs: List[str] = [input] if isinstance(input, str) else list(input)
        model = get_string(options, "model", OLLAMA_DEFAULT_EMBEDDING_MODEL)
        vectors: List[List[float]] = []
        prompt_tokens = 0
        for text in inputs:
            data = self.send_request(EMBEDDINGS_ENDPOINT, {"model": model, "prompt": text})
            vectors.append([as_float(v) for v in get_list(data, "embedding")])
            prompt_tokens += get_int(data, "prompt_eval_count")
        return self.create_embedding_response(
            embeddings=vectors,
            model=model,
            usage=self.create_usage_statistics(prompt_tokens, 0),
        )

    def stream_chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> Iterator[str]:
        self.validate_configuration()
        payload = self._payload(messages, options, stream=True)
        ctx = self._log_context(CHAT_ENDPOINT, payload)
        chunks = self.open_stream(CHAT_ENDPOINT, payload)
        return self._finalize_stream(ctx, decode_ndjson(chunks, ollama_delta, logger=self._logger, ctx=ctx))

    def get_available_models(self) -> Dict[str, str]:
        """Locally pulled models, or a static list when the daemon cannot be reached."""
        try:
            return model_names(self.send_request(TAGS_ENDPOINT, method="GET"))
        except ProviderError as exc:
            log_event(
                self._logger,
                "models.fallback",
                self._log_context(TAGS_ENDPOINT),
                level=logging.WARNING,
                error_code=exc.code.value,
                error=exc.message,
            )
            return dict(FALLBACK_MODELS)

    def test_connection(self) -> ConnectionTestResult:
        """Query ``api/tags`` and propagate any failure."""
        models = model_names(self.send_request(TAGS_ENDPOINT, method="GET"))
        return ConnectionTestResult(
            success=True,
            message=f"Connection successful. Found {len(models)} models.",
            models=models,
            verified=True,
        )


__all__ = ["OllamaProvider", "FALLBACK_MODELS"]
