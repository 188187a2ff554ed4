"""Shared testing utilities for adapter tests.

Purpose:
    Drive adapters against ``httpx.MockTransport`` instead of the network and
    capture what they send, so tests can assert on wire payloads, headers and
    retry counts.

Exports:
    - Recorder: request log plus scripted responses
    - json_response / sse_body / ndjson_body: response builders
    - ListHandler: collects log records emitted under ``llm_providers``
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import httpx

Handler = Callable[[httpx.Request], httpx.Response]
Scripted = Union[httpx.Response, Exception, Handler]


def json_response(payload: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(payload).encode("utf-8"))


def sse_body(frames: Iterable[Union[str, Dict[str, Any]]], done: bool = True) -> bytes:
    """Encode frames as ``data:`` lines; strings are sent verbatim."""
    lines = []
    for frame in frames:
        data = frame if isinstance(frame, str) else json.dumps(frame)
        lines.append(f"data: {data}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def ndjson_body(frames: Iterable[Union[str, Dict[str, Any]]]) -> bytes:
    return "".join((f if isinstance(f, str) else json.dumps(f)) + "\n" for f in frames).encode("utf-8")


class Recorder:
    """Scripted transport: answers requests in order and remembers them.

    Each scripted item is a response, an exception to raise, or a callable
    taking the request. The last item repeats once the script runs out.
    """

    def __init__(self, *script: Scripted) -> None:
        self.script: List[Scripted] = list(script) or [json_response({})]
        self.requests: List[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        index = min(len(self.requests), len(self.script)) - 1
        item = self.script[index]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return httpx.Response(item.status_code, content=item.content, headers=item.headers)
        return item(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self._handle))

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content or b"{}")


class ListHandler(logging.Handler):
    """Capture decoded JSON log payloads for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.events.append(json.loads(record.getMessage()))
        except ValueError:
            self.events.append({"message": record.getMessage()})

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]

    def first(self, event: str) -> Optional[Dict[str, Any]]:
        found = self.named(event)
        return found[0] if found else None
