"""Authentication and permission checks wrapped around request handlers."""

from __future__ import annotations

import dataclasses
import functools
import json
from http import HTTPStatus
from typing import Any

from slotter.errordata import with_error_data
from slotter.logger import Logger
from slotter.web import (
    NIL_UUID,
    Handler,
    Request,
    Response,
    get_request_data,
    with_sse_data,
)

_BEARER_PREFIX = "bearer "


def extract_token(request: Request) -> str:
    """Find the caller's token: query ``token``, then a Bearer header, then the body.

    Returns '' when no token is present.
    """
    query_token = request.query.get("token", "")
    if query_token:
        return query_token
    auth_header = request.header("Authorization")
    prefix_len = len(_BEARER_PREFIX)
    if len(auth_header) > prefix_len and auth_header[:prefix_len].lower() == _BEARER_PREFIX:
        return auth_header[prefix_len:]
    try:
        body = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        return ""
    if isinstance(body, dict):
        token = body.get("token")
        if isinstance(token, str):
            return token
    return ""


def _forbidden(message: str) -> Response:
    return Response(HTTPStatus.FORBIDDEN, {"error": message})


class AuthMiddleware:
    """Wraps handlers so that they only run for authenticated callers."""

    def __init__(self, log: Logger, auth_service: Any, role_repo: Any) -> None:
        self.log = log.bind(Middleware="AuthMiddleware")
        self.auth_service = auth_service
        self.role_repo = role_repo

    def _authenticate(self, request: Request) -> Request | Response:
        """Return the request with an authenticated context, or a refusal."""
        token = extract_token(request)
        self.log.debug("TokenString:", tokenstring=token)
        if not token:
            return Response(HTTPStatus.UNAUTHORIZED, {"error": "missing or invalid token"})
        try:
            ctx = self.auth_service.set_context_from_token(request.context, token)
        except Exception as exc:  # any token failure is reported as unauthorised
            return Response(HTTPStatus.UNAUTHORIZED, {"error": str(exc)})
        ctx = with_error_data(with_sse_data(ctx))
        request = dataclasses.replace(request, context=ctx)
        request_data = get_request_data(ctx)
        if request_data is None or request_data.user_id == NIL_UUID:
            return _forbidden("forbidden - invalid user id")
        return request

    def require_auth(self, handler: Handler) -> Handler:
        """Wrap ``handler`` so it runs only with a valid token."""

        @functools.wraps(handler)
        def wrapped(request: Request) -> Response:
            outcome = self._authenticate(request)
            if isinstance(outcome, Response):
                return outcome
            return handler(outcome)

        return wrapped

    def require_permission(self, permission: str, handler: Handler) -> Handler:
        """Wrap ``handler`` so it runs only if the caller's role grants ``permission``.

        A permission matches by its name or by its permission type.
        """

        @functools.wraps(handler)
        def wrapped(request: Request) -> Response:
            outcome = self._authenticate(request)
            if isinstance(outcome, Response):
                return outcome
            request = outcome
            ctx = request.context
            request_data = get_request_data(ctx)
            if request_data is None:
                return _forbidden("request data missing")
            if request_data.role_id == NIL_UUID:
                return _forbidden("no role id in request data")
            try:
                roles = self.role_repo.get_by_ids(ctx, None, [request_data.role_id])
            except Exception:  # storage failures must not leak details
                return Response(HTTPStatus.INTERNAL_SERVER_ERROR, {"error": "failed to load role"})
            if not roles:
                return _forbidden("role not found")
            role = roles[0]
            granted = any(
                getattr(perm, "name", None) == permission
                or getattr(perm, "permission_type", None) == permission
                for perm in getattr(role, "permissions", None) or ()
            )
            if not granted:
                return _forbidden("insufficient permissions")
            return handler(request)

        return wrapped