"""OpenAI-compatible adapter behaviour shared by several vendors.

``OpenAIStyleMixin`` implements chat, tool calling, embeddings and
SSE streaming against the ``chat/completions`` and ``embeddings`` endpoints.
It is combined with :class:`~llm_providers.base.provider.AbstractProvider`;
vendors tune it through class attributes and these hooks:

- ``CHAT_PASSTHROUGH`` / ``OPTION_RENAMES``: which extra options are copied
  into the chat body and under which name;
- ``_resolve_model(options, purpose)``: model selection (OpenRouter routes);
- ``_extend_chat_payload(payload, options)``: vendor-only fields;
- ``_extend_vision_payload(payload, options)``: the same for image analysis;
- ``_response_metadata(data)``: extras attached to ``CompletionResponse``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ...config.defaults import DEFAULT_MAX_TOKENS
from ..errors import ResponseDecodeError, UnsupportedFeatureError
from ..models import CompletionResponse, EmbeddingResponse, VisionResponse
from ..parsing import get_int, get_nullable_string, get_string
from ..streaming import decode_sse, openai_delta
from ..utils.images import normalize_parts
from ..utils.messages import MessageLike, to_wire_messages
from .style_helpers import (
    build_chat_payload,
    embedding_vectors,
    first_choice,
    message_content,
    parse_tool_calls,
    tools_to_openai,
    usage_tokens,
    vision_messages,
)


class OpenAIStyleMixin:
    """Chat/tool/embedding/stream operations for OpenAI-shaped APIs."""

    CHAT_ENDPOINT = "chat/completions"
    EMBEDDINGS_ENDPOINT = "embeddings"
    DEFAULT_EMBEDDING_MODEL: Optional[str] = None
    DEFAULT_VISION_MODEL: Optional[str] = None
    CHAT_PASSTHROUGH: Tuple[str, ...] = ("top_p", "frequency_penalty", "presence_penalty", "stop")
    TOOL_PASSTHROUGH: Tuple[str, ...] = ()
    EMBEDDING_PASSTHROUGH: Tuple[str, ...] = ()
    OPTION_RENAMES: Dict[str, str] = {}

    # ---- hooks -------------------------------------------------------------------

    def _resolve_model(self, options: Mapping[str, Any], purpose: str = "chat") -> str:
        model = get_string(options, "model")
        if model:
            return model
        if purpose == "vision" and self.DEFAULT_VISION_MODEL:
            return self.DEFAULT_VISION_MODEL
        return self.get_default_model()  # type: ignore[attr-defined]

    def _extend_chat_payload(self, payload: Dict[str, Any], options: Mapping[str, Any]) -> None:
        """Add vendor-only fields to a chat body in place."""

    def _response_metadata(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {}

    def _extend_vision_payload(self, payload: Dict[str, Any], options: Mapping[str, Any]) -> None:
        """Add vendor-only fields to an image-analysis body in place."""

    # ---- payload -----------------------------------------------------------------

    def _chat_payload(
        self,
        messages: Sequence[MessageLike],
        options: Mapping[str, Any],
        *,
        stream: bool = False,
    ) -> Dict[str, Any]:
        payload = build_chat_payload(
            self._resolve_model(options),
            to_wire_messages(messages),
            options,
            passthrough=self.CHAT_PASSTHROUGH,
            renames=self.OPTION_RENAMES,
        )
        self._extend_chat_payload(payload, options)
        if stream:
            payload["stream"] = True
        return payload

    def _completion_from(self, data: Mapping[str, Any], payload: Mapping[str, Any], *, with_tools: bool) -> CompletionResponse:
        choice = first_choice(data)
        prompt, completion = usage_tokens(data)
        tool_calls = parse_tool_calls(choice.get("message") or {}) if with_tools else None
        return self.create_completion_response(  # type: ignore[attr-defined]
            content=message_content(choice),
            model=get_string(data, "model", payload["model"]),
            usage=self.create_usage_statistics(prompt, completion),  # type: ignore[attr-defined]
            finish_reason=get_string(choice, "finish_reason", "stop"),
            tool_calls=tool_calls,
            metadata=self._response_metadata(data),
        )

    # ---- operations --------------------------------------------------------------

    def chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> CompletionResponse:
        payload = self._chat_payload(messages, options)
        data = self.send_request(self.CHAT_ENDPOINT, payload)  # type: ignore[attr-defined]
        return self._completion_from(data, payload, with_tools=False)

    def chat_completion_with_tools(
        self,
        messages: Sequence[MessageLike],
        tools: Sequence[Any],
        **options: Any,
    ) -> CompletionResponse:
        """Chat with tool declarations; ``tool_calls`` arguments are JSON-decoded."""
        payload = self._chat_payload(messages, options)
        payload["tools"] = tools_to_openai(tools)
        if options.get("tool_choice") is not None:
            payload["tool_choice"] = options["tool_choice"]
        for key in self.TOOL_PASSTHROUGH:
            if options.get(key) is not None:
                payload[key] = options[key]
        data = self.send_request(self.CHAT_ENDPOINT, payload)  # type: ignore[attr-defined]
        return self._completion_from(data, payload, with_tools=True)

    def embeddings(self, input: Union[str, Sequence[str]], **options: Any) -> EmbeddingResponse:
        if not self.DEFAULT_EMBEDDING_MODEL:
            raise UnsupportedFeatureError(
                message=f"{self.name} does not support embeddings",  # type: ignore[attr-defined]
                provider=self.identifier,  # type: ignore[attr-defined]
            )
        inputs: List[str] = [input] if isinstance(input, str) else list(input)
        payload: Dict[str, Any] = {
            "model": get_string(options, "model", self.DEFAULT_EMBEDDING_MODEL),
            "input": inputs,
        }
        for key in self.EMBEDDING_PASSTHROUGH:
            if options.get(key) is not None:
                payload[key] = options[key]
        data = self.send_request(self.EMBEDDINGS_ENDPOINT, payload)  # type: ignore[attr-defined]
        vectors = embedding_vectors(data)
        if len(vectors) != len(inputs):
            raise ResponseDecodeError(
                message=f"Expected {len(inputs)} embeddings, received {len(vectors)}",
                provider=self.identifier,  # type: ignore[attr-defined]
            )
        return self.create_embedding_response(  # type: ignore[attr-defined]
            embeddings=vectors,
            model=get_string(data, "model", payload["model"]),
            usage=self.create_usage_statistics(get_int(data.get("usage") or {}, "prompt_tokens"), 0),  # type: ignore[attr-defined]
        )

    def stream_chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> Iterator[str]:
        """Lazily yield text deltas from an OpenAI-style SSE stream."""
        self.validate_configuration()  # type: ignore[attr-defined]
        payload = self._chat_payload(messages, options, stream=True)
        ctx = self._log_context(self.CHAT_ENDPOINT, payload)  # type: ignore[attr-defined]
        chunks = self.open_stream(self.CHAT_ENDPOINT, payload)  # type: ignore[attr-defined]
        return self._finalize_stream(  # type: ignore[attr-defined]
            ctx, decode_sse(chunks, openai_delta, logger=self._logger, ctx=ctx)  # type: ignore[attr-defined]
        )


class OpenAIVisionMixin:
    """``analyze_image`` over ``chat/completions`` for vendors with vision models.

    Combined with :class:`OpenAIStyleMixin`; kept separate so vendors without
    vision do not satisfy the ``VisionCapable`` protocol.
    """

    SUPPORTED_IMAGE_FORMATS: Tuple[str, ...] = ("png", "jpeg", "jpg", "gif", "webp")
    MAX_IMAGE_BYTES = 20 * 1024 * 1024

    def analyze_image(self, content: Any, **options: Any) -> VisionResponse:
        """Describe images given as neutral content parts (``text``/``image_url``)."""
        payload: Dict[str, Any] = {
            "model": self._resolve_model(options, "vision"),  # type: ignore[attr-defined]
            "messages": vision_messages(normalize_parts(content), get_nullable_string(options, "system_prompt")),
            "max_tokens": get_int(options, "max_tokens", DEFAULT_MAX_TOKENS),
        }
        self._extend_vision_payload(payload, options)  # type: ignore[attr-defined]
        data = self.send_request(self.CHAT_ENDPOINT, payload)  # type: ignore[attr-defined]
        prompt, completion = usage_tokens(data)
        return self.create_vision_response(  # type: ignore[attr-defined]
            description=message_content(first_choice(data)),
            model=get_string(data, "model", payload["model"]),
            usage=self.create_usage_statistics(prompt, completion),  # type: ignore[attr-defined]
            metadata=self._response_metadata(data),  # type: ignore[attr-defined]
        )

    def get_supported_image_formats(self) -> List[str]:
        return list(self.SUPPORTED_IMAGE_FORMATS)

    def get_max_image_size(self) -> int:
        return self.MAX_IMAGE_BYTES


__all__ = ["OpenAIStyleMixin", "OpenAIVisionMixin"]
