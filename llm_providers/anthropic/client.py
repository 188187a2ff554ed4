"""Anthropic Claude adapter (Messages API).

Summary:
- Authentication via ``x-api-key`` plus ``anthropic-version``; no
  ``Authorization`` header is sent
- System messages are hoisted into the top-level ``system`` field
- Responses are lists of typed content blocks (``text``, ``tool_use``);
  stop reasons are mapped to neutral finish reasons
- SSE streaming ends on the ``message_stop`` event
- Claude has no embedding model: ``embeddings`` raises
  ``UnsupportedFeatureError``
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, NoReturn, Sequence, Union

from ..base.capabilities import ModelCapability
from ..base.errors import UnsupportedFeatureError
from ..base.models import CompletionResponse, VisionResponse
from ..base.parsing import get_float, get_int, get_nested_int, get_nullable_string, get_string
from ..base.provider import AbstractProvider
from ..base.streaming import claude_delta, decode_sse
from ..base.utils.messages import MessageLike
from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    DEFAULT_MAX_TOKENS,
)
from .helpers import build_messages, map_stop_reason, map_tool_choice, parse_content, to_claude_tool, to_content_blocks

MESSAGES_ENDPOINT = "messages"

CLAUDE_MODELS: Dict[str, str] = {
    "claude-opus-4-5-20251124": "Claude Opus 4.5 (Most Capable)",
    "claude-sonnet-4-5-20250929": "Claude Sonnet 4.5 (Recommended)",
    "claude-opus-4-1-20250805": "Claude Opus 4.1",
    "claude-opus-4-20250514": "Claude Opus 4",
    "claude-sonnet-4-20250514": "Claude Sonnet 4",
    "claude-3-5-sonnet-20241022": "Claude 3.5 Sonnet (Legacy)",
    "claude-3-5-haiku-20241022": "Claude 3.5 Haiku (Legacy)",
}


class ClaudeProvider(AbstractProvider):
    """Anthropic Claude provider.

    Chat options: ``model``, ``max_tokens`` (default 4096) and, only when
    given, ``temperature``, ``top_p`` and ``stop_sequences``. Tool calls
    accept ``tool_choice`` as ``auto``/``none``/``required`` or a tool name.
    """

    DEFAULT_MODEL = ANTHROPIC_DEFAULT_MODEL
    SUPPORTED_IMAGE_FORMATS = ("png", "jpeg", "jpg", "gif", "webp")
    MAX_IMAGE_BYTES = 20 * 1024 * 1024
    supported_features = frozenset(
        {
            ModelCapability.CHAT,
            ModelCapability.COMPLETION,
            ModelCapability.VISION,
            ModelCapability.STREAMING,
            ModelCapability.TOOLS,
        }
    )

    @property
    def identifier(self) -> str:
        return "claude"

    @property
    def name(self) -> str:
        return "Anthropic Claude"

    def get_default_base_url(self) -> str:
        return ANTHROPIC_DEFAULT_BASE_URL

    def get_available_models(self) -> Dict[str, str]:
        return dict(CLAUDE_MODELS)

    def add_provider_specific_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        api_key = self._resolve_api_key()
        if api_key:
            headers["x-api-key"] = api_key
        headers["anthropic-version"] = ANTHROPIC_API_VERSION
        return headers

    # ---- payload -----------------------------------------------------------------

    def _payload(self, messages: Sequence[MessageLike], options: Mapping[str, Any]) -> Dict[str, Any]:
        system, wire = build_messages(messages)
        payload: Dict[str, Any] = {
            "model": get_string(options, "model", self.get_default_model()),
            "messages": wire,
            "max_tokens": get_int(options, "max_tokens", DEFAULT_MAX_TOKENS),
        }
        if system is not None:
            payload["system"] = system
        for key in ("temperature", "top_p"):
            if options.get(key) is not None:
                payload[key] = get_float(options, key)
        if options.get("stop_sequences") is not None:
            payload["stop_sequences"] = list(options["stop_sequences"])
        return payload

    def _to_completion(self, data: Mapping[str, Any], payload: Mapping[str, Any], *, with_tools: bool) -> CompletionResponse:
        content, calls = parse_content(data)
        return self.create_completion_response(
            content=content,
            model=get_string(data, "model", payload["model"]),
            usage=self.create_usage_statistics(
                get_nested_int(data, "usage.input_tokens"),
                get_nested_int(data, "usage.output_tokens"),
            ),
            finish_reason=map_stop_reason(get_string(data, "stop_reason", "end_turn")),
            tool_calls=calls if with_tools else None,
        )

    # ---- operations --------------------------------------------------------------

    def chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> CompletionResponse:
        payload = self._payload(messages, options)
        data = self.send_request(MESSAGES_ENDPOINT, payload)
        return self._to_completion(data, payload, with_tools=False)

    def chat_completion_with_tools(
        self,
        messages: Sequence[MessageLike],
        tools: Sequence[Any],
        **options: Any,
    ) -> CompletionResponse:
        payload = self._payload(messages, options)
        payload["tools"] = [to_claude_tool(t) for t in tools]
        if options.get("tool_choice") is not None:
            payload["tool_choice"] = map_tool_choice(options["tool_choice"])
        data = self.send_request(MESSAGES_ENDPOINT, payload)
        return self._to_completion(data, payload, with_tools=True)

    def embeddings(self, input: Union[str, Sequence[str]], **options: Any) -> NoReturn:
        raise UnsupportedFeatureError(
            message="Anthropic Claude does not support embeddings. Use OpenAI or a dedicated embedding provider.",
            provider=self.identifier,
        )

    def analyze_image(self, content: Any, **options: Any) -> VisionResponse:
        """Describe images; ``data:`` URLs are sent inline as base64 sources."""
        payload: Dict[str, Any] = {
            "model": get_string(options, "model", self.get_default_model()),
            "messages": [{"role": "user", "content": to_content_blocks(content)}],
            "max_tokens": get_int(options, "max_tokens", DEFAULT_MAX_TOKENS),
        }
        system_prompt = get_nullable_string(options, "system_prompt")
        if system_prompt is not None:
            payload["system"] = system_prompt
        data = self.send_request(MESSAGES_ENDPOINT, payload)
        description, _ = parse_content(data)
        return self.create_vision_response(
            description=description,
            model=get_string(data, "model", payload["model"]),
            usage=self.create_usage_statistics(
                get_nested_int(data, "usage.input_tokens"),
                get_nested_int(data, "usage.output_tokens"),
            ),
        )

    def get_supported_image_formats(self) -> List[str]:
        return list(self.SUPPORTED_IMAGE_FORMATS)

    def get_max_image_size(self) -> int:
        return self.MAX_IMAGE_BYTES

    def stream_chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> Iterator[str]:
        self.validate_configuration()
        payload = self._payload(messages, options)
        payload["stream"] = True
        ctx = self._log_context(MESSAGES_ENDPOINT, payload)
        chunks = self.open_stream(MESSAGES_ENDPOINT, payload)
        return self._finalize_stream(ctx, decode_sse(chunks, claude_delta, logger=self._logger, ctx=ctx))


__all__ = ["ClaudeProvider", "CLAUDE_MODELS"]
