"""Request/response primitives and per-request context helpers."""

from __future__ import annotations

import dataclasses
import functools
import json
import uuid
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Callable, Mapping

from slotter.errordata import with_error_data

NIL_UUID = uuid.UUID(int=0)

_SSE_DATA_KEY = "sse_data"
_REQUEST_DATA_KEY = "request_data"


@dataclass
class RequestData:
    """Identity of the authenticated caller."""

    user_id: uuid.UUID = NIL_UUID
    role_id: uuid.UUID = NIL_UUID


@dataclass
class SSEData:
    """Server-sent event messages queued during a request."""

    messages: list[Any] = field(default_factory=list)


@dataclass
class Request:
    """An incoming HTTP request with its per-request context."""

    method: str = "GET"
    path: str = "/"
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    context: dict[str, Any] = field(default_factory=dict)

    def json(self) -> dict[str, Any]:
        """Decode the body as a JSON object; raise ValueError otherwise."""
        try:
            data = json.loads(self.body)
        except (ValueError, UnicodeDecodeError) as exc:
            raise ValueError("invalid JSON body") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError("JSON body must be an object")
        return data

    def header(self, name: str) -> str:
        """Return a header value by case-insensitive name, or ''."""
        wanted = name.lower()
        return next((value for key, value in self.headers.items() if key.lower() == wanted), "")


@dataclass
class Response:
    """An HTTP response; a dict or list body is sent as JSON."""

    status: int
    body: Any = None
    content_type: str = "application/json"


Handler = Callable[[Request], Response]


def with_sse_data(ctx: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``ctx`` carrying a fresh, empty :class:`SSEData`."""
    return {**ctx, _SSE_DATA_KEY: SSEData()}


def get_sse_data(ctx: dict[str, Any]) -> SSEData | None:
    """Return the :class:`SSEData` stored in ``ctx``, or None."""
    value = ctx.get(_SSE_DATA_KEY)
    return value if isinstance(value, SSEData) else None


def get_request_data(ctx: dict[str, Any]) -> RequestData | None:
    """Return the :class:`RequestData` stored in ``ctx``, or None."""
    value = ctx.get(_REQUEST_DATA_KEY)
    return value if isinstance(value, RequestData) else None


def broadcast_pending(ctx: dict[str, Any], hub: Any) -> int:
    """Broadcast queued SSE messages in order, clear the queue, return the count."""
    sse_data = get_sse_data(ctx)
    if sse_data is None or not sse_data.messages:
        return 0
    pending = sse_data.messages
    for message in pending:
        hub.broadcast(message)
    sse_data.messages = []
    return len(pending)


def healthz(request: Request) -> Response:
    """Liveness probe."""
    return Response(HTTPStatus.OK, "ok", "text/plain; charset=utf-8")


def attach_request_context(handler: Handler) -> Handler:
    """Wrap ``handler`` so it sees fresh SSE and error holders in its context."""

    @functools.wraps(handler)
    def wrapped(request: Request) -> Response:
        ctx = with_error_data(with_sse_data(request.context))
        return handler(dataclasses.replace(request, context=ctx))

    return wrapped