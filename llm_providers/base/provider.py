"""AbstractProvider: shared request, retry and error-handling core.

Every vendor adapter subclasses :class:`AbstractProvider`. The base class
owns what is common to all vendors:

- configuration (``configure``) with snake_case or camelCase option names;
- the adapter's ``httpx.Client`` handle, rebuilt eagerly when the timeout
  changes;
- ``send_request``: URL joining, JSON encoding, authentication headers via
  the ``add_provider_specific_headers`` hook, and the bounded retry loop;
- ``open_stream``: a single, never-retried streaming request;
- response-object factories that stamp the adapter identifier.

Retry semantics
---------------
``max_retries`` bounds the number of attempts (at least one). A 2xx answer is
decoded and returned; a 4xx answer raises :class:`ProviderResponseError`
immediately; any other status, transport failure or undecodable body counts as
a failed attempt and is retried after ``0.1s * 2**attempt``. Exhaustion raises
:class:`ProviderConnectionError` naming the attempt count.

Each attempt has a wall-clock deadline of ``timeout`` seconds. The body is
read chunk by chunk and an attempt still receiving data past the deadline
fails with ``ErrorCode.TIMEOUT`` and is retried like a transport failure.

Concurrency
-----------
Concurrent requests on one configured instance are safe (``httpx.Client`` is
thread-safe). Replacing the client handle in ``configure``/``set_http_client``
is atomic under an internal lock, but calling ``configure`` while requests are
in flight on the same instance is unsupported: an in-flight request may finish
on the old client with the old settings.
"""
from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Dict, FrozenSet, Iterator, List, Mapping, Optional, Sequence, Union

import httpx

from ..config.defaults import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT_SECONDS, STREAM_CHUNK_SIZE
from ..config.env import resolve_key_identifier
from ..config.options import normalize_options
from .capabilities import ModelCapability, coerce_capability
from .errors import (
    ErrorCode,
    ProviderConfigurationError,
    ProviderConnectionError,
    ProviderError,
    ProviderResponseError,
    classify_exception,
    classify_status,
)
from .http import build_http_client
from .log_support import LogContext
from .logging import get_logger, log_event, normalized_log_event
from .models import (
    CompletionResponse,
    ConnectionTestResult,
    EmbeddingResponse,
    Message,
    ToolCall,
    UsageStatistics,
    VisionResponse,
)
from .parsing import (
    as_float,
    decode_json_or_empty,
    decode_json_response,
    extract_error_message,
    get_int,
    get_string,
)
from .resilience.retry import RetryConfig, retry
from .timeouts import Deadline, build_httpx_timeout
from .utils.messages import MessageLike

KeyResolver = Callable[[str], Optional[str]]


class AbstractProvider(ABC):
    """Base class for vendor adapters.

    Subclasses define ``identifier``/``name``, ``get_default_base_url``,
    ``DEFAULT_MODEL`` and the vendor operations. Construction never touches the
    network; ``options`` are applied through :meth:`configure`.

    Parameters:
        options: Initial configuration (see :meth:`configure`).
        http_client: Optional pre-built ``httpx.Client`` (e.g. wrapping
            ``httpx.MockTransport``); it is kept across ``configure`` calls.
        key_resolver: Maps an ``api_key_identifier`` to the secret. Defaults to
            reading the environment variable of that name.
    """

    DEFAULT_MODEL: str = ""
    supported_features: FrozenSet[ModelCapability] = frozenset()
    requires_api_key: bool = True

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        key_resolver: Optional[KeyResolver] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._key_resolver: KeyResolver = key_resolver or resolve_key_identifier
        self._logger = get_logger(f"llm_providers.{self.identifier}")
        self._api_key = ""
        self._api_key_identifier = ""
        self._base_url = self.get_default_base_url()
        self._default_model = self.DEFAULT_MODEL
        self._timeout: float = float(DEFAULT_TIMEOUT_SECONDS)
        self._max_retries = DEFAULT_MAX_RETRIES
        self._http_client: Optional[httpx.Client] = None
        self._client_timeout: Optional[float] = None
        self._client_injected = False
        if http_client is not None:
            self.set_http_client(http_client)
        self.configure(options or {})

    # ------------------------------------------------------------------ identity

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Stable lowercase adapter identifier used in logs and the registry."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable vendor name."""

    @abstractmethod
    def get_default_base_url(self) -> str: ...

    # ------------------------------------------------------------- configuration

    def configure(self, options: Mapping[str, Any]) -> None:
        """Apply configuration from a dynamic option mapping.

        Recognized options (camelCase aliases accepted): ``api_key``,
        ``api_key_identifier``, ``base_url``, ``default_model``, ``timeout``
        (seconds, default 30), ``max_retries`` (default 3, minimum 1), plus
        vendor options read by :meth:`_configure_extra`. Values of the wrong
        type fall back to their defaults. The API key is not validated here;
        that happens on the first request.

        The adapter's HTTP client is rebuilt immediately when the timeout
        changed, unless the client was injected with :meth:`set_http_client`.
        """
        opts = normalize_options(options)
        timeout = as_float(opts.get("timeout"), float(DEFAULT_TIMEOUT_SECONDS))
        if timeout <= 0:
            timeout = float(DEFAULT_TIMEOUT_SECONDS)
        with self._lock:
            self._api_key = get_string(opts, "api_key")
            self._api_key_identifier = get_string(opts, "api_key_identifier")
            self._base_url = get_string(opts, "base_url") or self.get_default_base_url()
            self._default_model = get_string(opts, "default_model") or self.DEFAULT_MODEL
            self._timeout = timeout
            self._max_retries = max(1, get_int(opts, "max_retries", DEFAULT_MAX_RETRIES))
            self._configure_extra(opts)
            if not self._client_injected and (self._http_client is None or self._client_timeout != timeout):
                self._replace_client(build_http_client(timeout), injected=False)

    def _configure_extra(self, options: Dict[str, Any]) -> None:
        """Hook for vendor-specific options; called under the configuration lock."""

    def set_http_client(self, client: httpx.Client) -> None:
        """Use ``client`` for all subsequent requests (tests, host-managed pools)."""
        with self._lock:
            self._replace_client(client, injected=True)

    def _replace_client(self, client: httpx.Client, *, injected: bool) -> None:
        old, old_injected = self._http_client, self._client_injected
        self._http_client = client
        self._client_timeout = self._timeout
        self._client_injected = injected
        if old is not None and old is not client and not old_injected:
            old.close()

    def _get_http_client(self) -> httpx.Client:
        with self._lock:
            if self._http_client is None:
                self._replace_client(build_http_client(self._timeout), injected=False)
            return self._http_client  # type: ignore[return-value]

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def base_url(self) -> str:
        return self._base_url

    def get_default_model(self) -> str:
        return self._default_model

    def _resolve_api_key(self) -> str:
        if self._api_key:
            return self._api_key
        if self._api_key_identifier:
            return self._key_resolver(self._api_key_identifier) or ""
        return ""

    def is_available(self) -> bool:
        """True when an API key (or a resolvable key identifier) is configured."""
        return bool(self._resolve_api_key())

    def supports_feature(self, feature: Union[str, ModelCapability]) -> bool:
        capability = coerce_capability(feature)
        return capability is not None and capability in self.supported_features

    def validate_configuration(self) -> None:
        """Raise :class:`ProviderConfigurationError` when a request cannot be made."""
        if self.requires_api_key and not self._resolve_api_key():
            raise ProviderConfigurationError(
                message=f"API key is required for provider {self.name}",
                provider=self.identifier,
            )
        if not self._base_url:
            raise ProviderConfigurationError(
                message=f"Base URL is required for provider {self.name}",
                provider=self.identifier,
            )

    # --------------------------------------------------------------- operations

    def complete(self, prompt: str, **options: Any) -> CompletionResponse:
        """Single-prompt convenience wrapper around :meth:`chat_completion`."""
        return self.chat_completion([Message.user(prompt)], **options)

    @abstractmethod
    def chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> CompletionResponse: ...

    @abstractmethod
    def embeddings(self, input: Union[str, Sequence[str]], **options: Any) -> EmbeddingResponse: ...

    def get_available_models(self) -> Dict[str, str]:
        """Model id -> display name. Static by default; vendors override."""
        return {}

    def test_connection(self) -> ConnectionTestResult:
        """Report the model list without a network round-trip.

        The result is marked ``verified=False``: for vendors with a static model
        list this checks configuration only. Adapters with a live model
        endpoint override this to hit the network and let failures propagate.
        """
        self.validate_configuration()
        models = self.get_available_models()
        return ConnectionTestResult(
            success=True,
            message=f"Connection successful. Found {len(models)} models.",
            models=models,
            verified=False,
        )

    # ------------------------------------------------------------------ transport

    def build_url(self, endpoint: str) -> str:
        return self._base_url.rstrip("/") + "/" + endpoint.lstrip("/")

    def add_provider_specific_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Authentication hook; the default sends ``Authorization: Bearer <key>``."""
        api_key = self._resolve_api_key()
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers

    def _build_headers(self) -> Dict[str, str]:
        return self.add_provider_specific_headers({"Content-Type": "application/json"})

    def _log_context(self, endpoint: str, payload: Optional[Mapping[str, Any]] = None) -> LogContext:
        model = payload.get("model") if isinstance(payload, Mapping) else None
        return LogContext(
            provider=self.identifier,
            model=model if isinstance(model, str) else None,
            endpoint=endpoint,
        )

    def send_request(
        self,
        endpoint: str,
        payload: Optional[Mapping[str, Any]] = None,
        method: str = "POST",
        *,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send one logical JSON request with bounded retry.

        Parameters:
            endpoint: Path relative to the configured base URL.
            payload: JSON body; only sent for non-empty POST requests.
            method: HTTP method.
            query: Extra query parameters (never logged).

        Returns:
            The decoded JSON object body of the first 2xx answer.

        Raises:
            ProviderConfigurationError: missing key or base URL (no request made).
            ProviderResponseError: vendor answered 4xx (single attempt).
            ProviderConnectionError: every attempt failed with a transport
                error, a non-2xx/4xx status, or an undecodable body.
        """
        self.validate_configuration()
        method = method.upper()
        url = self.build_url(endpoint)
        headers = self._build_headers()
        body = json.dumps(payload).encode("utf-8") if method == "POST" and payload else None
        ctx = self._log_context(endpoint, payload)

        config = RetryConfig(
            max_attempts=self._max_retries,
            attempt_logger=lambda **kw: self._log_attempt(ctx, **kw),
            on_exhausted=self._exhausted_error,
        )

        @retry(config)
        def _attempt() -> Dict[str, Any]:
            return self._send_once(method, url, headers, body, query)

        log_event(self._logger, "request.start", ctx, level=logging.DEBUG, method=method)
        try:
            result = _attempt()
        except ProviderResponseError as exc:
            log_event(
                self._logger,
                "request.client_error",
                ctx,
                level=logging.WARNING,
                status_code=exc.status_code,
                error_code=exc.code.value,
            )
            raise
        except ProviderConnectionError as exc:
            normalized_log_event(
                self._logger,
                "request.exhausted",
                ctx,
                phase="request",
                attempt=self._max_retries,
                error_code=exc.code.value,
                level=logging.ERROR,
                error=exc.message,
            )
            raise
        log_event(self._logger, "request.success", ctx, level=logging.DEBUG)
        return result

    def _send_once(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        query: Optional[Mapping[str, Any]],
    ) -> Dict[str, Any]:
        client = self._get_http_client()
        deadline = Deadline(self._timeout)
        try:
            request = client.build_request(method, url, headers=headers, content=body, params=query)
            response = client.send(request, stream=True)
            try:
                content = self._read_body(response, deadline)
            finally:
                response.close()
        except httpx.HTTPError as exc:
            raise ProviderConnectionError(
                message=f"Request failed: {exc}",
                provider=self.identifier,
                code=classify_exception(exc),
                retryable=True,
                raw=exc,
            ) from exc
        status = response.status_code
        if 200 <= status < 300:
            return decode_json_response(content, provider=self.identifier)
        if 400 <= status < 500:
            raise self.create_response_error(status, decode_json_or_empty(content))
        raise ProviderConnectionError(
            message=self.server_error_message(status),
            provider=self.identifier,
            code=classify_status(status),
            status_code=status,
            retryable=True,
        )

    def _read_body(self, response: httpx.Response, deadline: Deadline) -> bytes:
        """Read the whole body, failing the attempt once ``deadline`` passes."""
        chunks: List[bytes] = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if deadline.expired():
                raise ProviderConnectionError(
                    message=f"Request exceeded timeout of {deadline.seconds:g}s",
                    provider=self.identifier,
                    code=ErrorCode.TIMEOUT,
                    retryable=True,
                )
        return b"".join(chunks)

    def create_response_error(self, status: int, body: Dict[str, Any]) -> ProviderResponseError:
        """Build the error raised for a vendor 4xx answer."""
        return ProviderResponseError(
            message=extract_error_message(body),
            provider=self.identifier,
            code=classify_status(status),
            status_code=status,
            raw=body,
        )

    def server_error_message(self, status: int) -> str:
        """Message for a retryable non-2xx, non-4xx answer."""
        return f"Server returned status {status}"

    def _exhausted_error(self, attempts: int, last: ProviderError) -> ProviderConnectionError:
        return ProviderConnectionError(
            message=f"Failed to connect to provider after {attempts} attempts: {last.message}",
            provider=self.identifier,
            code=last.code,
            status_code=last.status_code,
            raw=last,
        )

    def _log_attempt(
        self,
        ctx: LogContext,
        *,
        attempt: int,
        max_attempts: int,
        delay: Optional[float],
        error: Optional[ProviderError],
    ) -> None:
        normalized_log_event(
            self._logger,
            "request.attempt",
            ctx,
            phase="request",
            attempt=attempt,
            error_code=error.code.value if error is not None else None,
            level=logging.WARNING,
            max_attempts=max_attempts,
            delay_seconds=delay,
            status_code=error.status_code if error is not None else None,
        )

    @contextmanager
    def _stream_response(
        self,
        endpoint: str,
        payload: Mapping[str, Any],
        query: Optional[Mapping[str, Any]] = None,
    ) -> Iterator[httpx.Response]:
        self.validate_configuration()
        client = self._get_http_client()
        ctx = self._log_context(endpoint, payload)
        try:
            with client.stream(
                "POST",
                self.build_url(endpoint),
                headers=self._build_headers(),
                content=json.dumps(payload).encode("utf-8"),
                params=query,
                timeout=build_httpx_timeout(self._timeout, stream=True),
            ) as response:
                status = response.status_code
                if 400 <= status < 500:
                    response.read()
                    raise self.create_response_error(status, decode_json_or_empty(response.content))
                if not 200 <= status < 300:
                    raise ProviderConnectionError(
                        message=self.server_error_message(status),
                        provider=self.identifier,
                        code=classify_status(status),
                        status_code=status,
                    )
                log_event(self._logger, "stream.start", ctx, level=logging.DEBUG)
                yield response
        except httpx.HTTPError as exc:
            raise ProviderConnectionError(
                message=f"Stream failed: {exc}",
                provider=self.identifier,
                code=classify_exception(exc),
                raw=exc,
            ) from exc

    def open_stream(
        self,
        endpoint: str,
        payload: Mapping[str, Any],
        query: Optional[Mapping[str, Any]] = None,
    ) -> Iterator[bytes]:
        """Open a streaming POST and yield raw body chunks.

        Streams are not retried: partial output cannot be replayed safely. The
        status is checked before the first chunk is yielded (4xx raises
        :class:`ProviderResponseError`, anything else non-2xx raises
        :class:`ProviderConnectionError`). Closing the generator closes the
        connection.
        """
        with self._stream_response(endpoint, payload, query) as response:
            yield from response.iter_bytes(chunk_size=STREAM_CHUNK_SIZE)

    def _finalize_stream(self, ctx: LogContext, deltas: Iterator[str]) -> Iterator[str]:
        """Pass deltas through, logging one ``stream.finalize`` event at the end.

        Closing the returned generator early closes ``deltas`` and with it the
        underlying connection.
        """
        emitted = 0
        error: Optional[ProviderError] = None
        try:
            for delta in deltas:
                emitted += 1
                yield delta
        except ProviderError as exc:
            error = exc
            raise
        finally:
            close = getattr(deltas, "close", None)
            if close is not None:
                close()
            normalized_log_event(
                self._logger,
                "stream.finalize",
                ctx,
                phase="finalize",
                emitted=emitted,
                error_code=error.code.value if error is not None else None,
                level=logging.DEBUG if error is None else logging.WARNING,
            )

    # ----------------------------------------------------------- response factories

    def create_usage_statistics(
        self,
        prompt_tokens: int,
        completion_tokens: int = 0,
        estimated_cost: Optional[float] = None,
    ) -> UsageStatistics:
        return UsageStatistics(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            estimated_cost=estimated_cost,
        )

    def create_completion_response(
        self,
        content: str,
        model: str,
        usage: UsageStatistics,
        finish_reason: Optional[str] = None,
        tool_calls: Optional[List[ToolCall]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> CompletionResponse:
        return CompletionResponse(
            content=content,
            model=model,
            usage=usage,
            finish_reason=finish_reason or "stop",
            provider=self.identifier,
            tool_calls=tuple(tool_calls) if tool_calls else None,
            metadata=metadata or {},
        )

    def create_embedding_response(
        self,
        embeddings: Sequence[Sequence[float]],
        model: str,
        usage: UsageStatistics,
    ) -> EmbeddingResponse:
        return EmbeddingResponse(
            embeddings=tuple(tuple(float(v) for v in vec) for vec in embeddings),
            model=model,
            usage=usage,
            provider=self.identifier,
        )

    def create_vision_response(
        self,
        description: str,
        model: str,
        usage: UsageStatistics,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> VisionResponse:
        return VisionResponse(
            description=description,
            model=model,
            usage=usage,
            provider=self.identifier,
            metadata=metadata or {},
        )

    def close(self) -> None:
        """Close the owned HTTP client; injected clients are left open."""
        with self._lock:
            if self._http_client is not None and not self._client_injected:
                self._http_client.close()
            self._http_client = None
            self._client_timeout = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r}, default_model={self._default_model!r})"


__all__ = [
    "AbstractProvider",
    "KeyResolver",
]
