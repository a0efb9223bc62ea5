"""Endpoints for server-sent event streams and channel subscriptions."""

from __future__ import annotations

import threading
import uuid
from http import HTTPStatus
from typing import Any

from slotter.logger import Logger
from slotter.web import NIL_UUID, Request, Response, get_request_data


def _unauthenticated() -> Response:
    return Response(HTTPStatus.UNAUTHORIZED, {"error": "not authenticated"})


class SSEHandler:
    """Keeps one live SSE client per user and manages its channels."""

    def __init__(self, log: Logger, hub: Any) -> None:
        self.log = log
        self.hub = hub
        self._lock = threading.Lock()
        self._clients: dict[uuid.UUID, Any] = {}

    @staticmethod
    def _user_id(request: Request) -> uuid.UUID | None:
        request_data = get_request_data(request.context)
        if request_data is None or request_data.user_id == NIL_UUID:
            return None
        return request_data.user_id

    def stream(self, request: Request, writer: Any) -> Response | None:
        """Serve an event stream; returns a response only when refused."""
        user_id = self._user_id(request)
        if user_id is None:
            return _unauthenticated()

        with self._lock:
            previous = self._clients.pop(user_id, None)
            if previous is not None:
                self.hub.close_client(previous)
            client = self.hub.new_sse_client(user_id)
            client.id = uuid.uuid4()
            client.logger = self.log.bind(SSEClientID=str(client.id))
            self._clients[user_id] = client

        try:
            self.hub.serve_http(writer, request, client)
        finally:
            with self._lock:
                self._clients.pop(user_id, None)
            self.hub.close_client(client)
        return None

    def _client_and_channel(self, request: Request) -> tuple[Any, str] | Response:
        user_id = self._user_id(request)
        if user_id is None:
            return _unauthenticated()
        try:
            channel = request.json().get("channel")
        except ValueError:
            channel = None
        if not isinstance(channel, str) or channel == "":
            return Response(HTTPStatus.BAD_REQUEST, {"error": "invalid channel"})
        with self._lock:
            client = self._clients.get(user_id)
        if client is None:
            return Response(
                HTTPStatus.CONFLICT, {"error": "no active SSE connection for this user"}
            )
        return client, channel

    def subscribe(self, request: Request) -> Response:
        """Add a channel to the caller's live SSE client."""
        found = self._client_and_channel(request)
        if isinstance(found, Response):
            return found
        client, channel = found
        self.hub.add_channel(client, channel)
        return Response(HTTPStatus.OK, {"message": "subscribed", "channel": channel})

    def unsubscribe(self, request: Request) -> Response:
        """Remove a channel from the caller's live SSE client."""
        found = self._client_and_channel(request)
        if isinstance(found, Response):
            return found
        client, channel = found
        self.hub.remove_channel(client, channel)
        return Response(HTTPStatus.OK, {"message": "unsubscribed", "channel": channel})