"""Endpoints for creating, editing and deleting roles."""

from __future__ import annotations

import uuid
from http import HTTPStatus
from typing import Any, Callable

from slotter.errordata import get_error_data
from slotter.web import Request, Response, broadcast_pending

_INVALID_BODY = "Invalid request body"


class _BadRequest(Exception):
    """A request the handler refuses before reaching the service."""

    def response(self) -> Response:
        return Response(HTTPStatus.BAD_REQUEST, {"error": str(self)})


def _body(request: Request) -> dict[str, Any]:
    try:
        return request.json()
    except ValueError:
        raise _BadRequest(_INVALID_BODY) from None


def _string(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _BadRequest(_INVALID_BODY)
    return value


def _role_id(body: dict[str, Any]) -> uuid.UUID:
    role_id = _string(body, "role_id")
    if not role_id:
        raise _BadRequest("role_id is required")
    try:
        return uuid.UUID(role_id)
    except ValueError:
        raise _BadRequest("Invalid role_id format") from None


def _permissions(body: dict[str, Any]) -> list[dict[str, Any]]:
    value = body.get("permissions")
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(p, dict) for p in value):
        raise _BadRequest(_INVALID_BODY)
    return value


class RoleHandler:
    """Manages roles and their permissions."""

    def __init__(self, role_service: Any, sse_hub: Any) -> None:
        self.role_service = role_service
        self.sse_hub = sse_hub

    def _perform(
        self,
        request: Request,
        action: Callable[[], Any],
        message: str,
        failure_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
    ) -> Response:
        ctx = request.context
        try:
            action()
        except Exception as exc:  # service failures are reported to the client
            return Response(failure_status, {"error": str(exc)})
        error_data = get_error_data(ctx)
        if error_data is not None and error_data.has_message():
            return Response(HTTPStatus.BAD_REQUEST, {"error": error_data.message})
        broadcast_pending(ctx, self.sse_hub)
        return Response(HTTPStatus.OK, {"message": message})

    def create_role(self, request: Request) -> Response:
        """Create a role for the caller's organisation."""
        try:
            body = _body(request)
            name = _string(body, "name")
            description = _string(body, "description")
        except _BadRequest as refusal:
            return refusal.response()
        return self._perform(
            request,
            lambda: self.role_service.create_logged_in(
                request.context, None, name, description
            ),
            "Role created successfully",
        )

    def update_role_name_desc(self, request: Request) -> Response:
        """Change a role's name and description."""
        try:
            body = _body(request)
            role_uuid = _role_id(body)
            name = _string(body, "name")
            description = _string(body, "description")
        except _BadRequest as refusal:
            return refusal.response()
        return self._perform(
            request,
            lambda: self.role_service.update_role(
                request.context, None, role_uuid, name, description
            ),
            "Role name/description updated successfully",
        )

    def update_role_permissions(self, request: Request) -> Response:
        """Replace the permissions a role grants."""
        try:
            body = _body(request)
            role_uuid = _role_id(body)
            permissions = _permissions(body)
        except _BadRequest as refusal:
            return refusal.response()
        return self._perform(
            request,
            lambda: self.role_service.update_permissions(
                request.context, None, role_uuid, permissions
            ),
            "Role permissions updated successfully",
        )

    def delete_role(self, request: Request) -> Response:
        """Delete a role."""
        try:
            role_uuid = _role_id(_body(request))
        except _BadRequest as refusal:
            return refusal.response()
        return self._perform(
            request,
            lambda: self.role_service.delete_role(request.context, None, role_uuid),
            "Role deleted successfully",
            failure_status=HTTPStatus.BAD_REQUEST,
        )