"""Google Gemini adapter (Generative Language API, ``v1beta``).

Summary:
- The API key travels as the ``key`` query parameter; no ``Authorization``
  header is sent and the key is never written to logs
- ``systemInstruction``, ``contents`` with ``user``/``model`` roles and a
  ``generationConfig`` block
- Tools as ``functionDeclarations``; calls come back as structured
  ``functionCall`` parts and get generated ``call_<hex>`` ids
- Embeddings call ``embedContent`` once per input text
- Streaming uses ``streamGenerateContent`` with ``alt=sse``
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Sequence, Union

from ..base.capabilities import ModelCapability
from ..base.models import CompletionResponse, EmbeddingResponse, VisionResponse
from ..base.parsing import as_float, get_float, get_int, get_nested_int, get_nested_list, get_nullable_string, get_string
from ..base.provider import AbstractProvider
from ..base.streaming import decode_sse, gemini_delta
from ..base.utils.messages import MessageLike
from ..config.defaults import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_EMBEDDING_MODEL,
    GEMINI_DEFAULT_MODEL,
)
from .helpers import (
    build_contents,
    first_candidate,
    generation_config,
    map_finish_reason,
    parse_candidate,
    to_function_declarations,
    to_parts,
)

GEMINI_MODELS: Dict[str, str] = {
    "gemini-3-flash-preview": "Gemini 3 Flash (Latest)",
    "gemini-3-pro": "Gemini 3 Pro (Most Capable)",
    "gemini-2.5-flash": "Gemini 2.5 Flash",
    "gemini-2.5-pro": "Gemini 2.5 Pro",
    "gemini-2.5-flash-lite": "Gemini 2.5 Flash Lite (Fast)",
    "gemini-2.0-flash": "Gemini 2.0 Flash (Legacy)",
}


class GeminiProvider(AbstractProvider):
    """Google Gemini provider.

    Chat options map onto ``generationConfig``: ``temperature`` (0.7),
    ``max_tokens`` -> ``maxOutputTokens`` (4096), ``top_p`` -> ``topP``,
    ``top_k`` -> ``topK``, ``stop_sequences`` -> ``stopSequences``.
    """

    DEFAULT_MODEL = GEMINI_DEFAULT_MODEL
    DEFAULT_EMBEDDING_MODEL = GEMINI_DEFAULT_EMBEDDING_MODEL
    SUPPORTED_IMAGE_FORMATS = ("png", "jpeg", "jpg", "gif", "webp", "heic", "heif")
    MAX_IMAGE_BYTES = 20 * 1024 * 1024
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

    @property
    def identifier(self) -> str:
        return "gemini"

    @property
    def name(self) -> str:
        return "Google Gemini"

    def get_default_base_url(self) -> str:
        return GEMINI_DEFAULT_BASE_URL

    def get_available_models(self) -> Dict[str, str]:
        return dict(GEMINI_MODELS)

    def add_provider_specific_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        headers.pop("Authorization", None)
        return headers

    def _key_query(self) -> Dict[str, str]:
        return {"key": self._resolve_api_key()}

    # ---- payload -----------------------------------------------------------------

    def _payload(self, messages: Sequence[MessageLike], options: Mapping[str, Any]) -> Dict[str, Any]:
        instruction, contents = build_contents(messages)
        payload: Dict[str, Any] = {
            "contents": contents,
            "generationConfig": generation_config(
                options,
                temperature=get_float(options, "temperature", DEFAULT_TEMPERATURE),
                max_tokens=get_int(options, "max_tokens", DEFAULT_MAX_TOKENS),
            ),
        }
        if instruction is not None:
            payload["systemInstruction"] = instruction
        return payload

    def _generate(self, model: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.send_request(f"models/{model}:generateContent", payload, query=self._key_query())

    def _to_completion(self, data: Mapping[str, Any], model: str, *, with_tools: bool) -> CompletionResponse:
        candidate = first_candidate(data)
        content, calls = parse_candidate(candidate)
        return self.create_completion_response(
            content=content,
            model=model,
            usage=self.create_usage_statistics(
                get_nested_int(data, "usageMetadata.promptTokenCount"),
                get_nested_int(data, "usageMetadata.candidatesTokenCount"),
            ),
            finish_reason=map_finish_reason(get_string(candidate, "finishReason", "STOP")),
            tool_calls=calls if with_tools else None,
        )

    # ---- operations --------------------------------------------------------------

    def chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> CompletionResponse:
        model = get_string(options, "model", self.get_default_model())
        data = self._generate(model, self._payload(messages, options))
        return self._to_completion(data, model, with_tools=False)

    def chat_completion_with_tools(
        self,
        messages: Sequence[MessageLike],
        tools: Sequence[Any],
        **options: Any,
    ) -> CompletionResponse:
        model = get_string(options, "model", self.get_default_model())
        payload = self._payload(messages, options)
        payload["tools"] = to_function_declarations(tools)
        data = self._generate(model, payload)
        return self._to_completion(data, model, with_tools=True)

    def embeddings(self, input: Union[str, Sequence[str]], **options: Any) -> EmbeddingResponse:
        """One ``embedContent`` call per text; token usage is estimated as ``len(text) / 4``."""
        inputs: List[str] = [input] if isinstance(input, str) else list(input)
        model = get_string(options, "model", self.DEFAULT_EMBEDDING_MODEL)
        vectors: List[List[float]] = []
        estimated_tokens = 0.0
        for text in inputs:
            data = self.send_request(
                f"models/{model}:embedContent",
                {"model": f"models/{model}", "content": {"parts": [{"text": text}]}},
                query=self._key_query(),
            )
            vectors.append([as_float(v) for v in get_nested_list(data, "embedding.values")])
            estimated_tokens += len(text) / 4
        return self.create_embedding_response(
            embeddings=vectors,
            model=model,
            usage=self.create_usage_statistics(int(estimated_tokens), 0),
        )

    def analyze_image(self, content: Any, **options: Any) -> VisionResponse:
        model = get_string(options, "model", self.get_default_model())
        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": to_parts(content)}],
            "generationConfig": {"maxOutputTokens": get_int(options, "max_tokens", DEFAULT_MAX_TOKENS)},
        }
        system_prompt = get_nullable_string(options, "system_prompt")
        if system_prompt is not None:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        data = self._generate(model, payload)
        description, _ = parse_candidate(first_candidate(data))
        return self.create_vision_response(
            description=description,
            model=model,
            usage=self.create_usage_statistics(
                get_nested_int(data, "usageMetadata.promptTokenCount"),
                get_nested_int(data, "usageMetadata.candidatesTokenCount"),
            ),
        )

    def get_supported_image_formats(self) -> List[str]:
        return list(self.SUPPORTED_IMAGE_FORMATS)

    def get_max_image_size(self) -> int:
        return self.MAX_IMAGE_BYTES

    def stream_chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> Iterator[str]:
        self.validate_configuration()
        model = get_string(options, "model", self.get_default_model())
        endpoint = f"models/{model}:streamGenerateContent"
        payload = self._payload(messages, options)
        ctx = self._log_context(endpoint).with_model(model)
        chunks = self.open_stream(endpoint, payload, query={**self._key_query(), "alt": "sse"})
        return self._finalize_stream(ctx, decode_sse(chunks, gemini_delta, logger=self._logger, ctx=ctx))


__all__ = ["GeminiProvider", "GEMINI_MODELS"]
