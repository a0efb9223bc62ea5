"""Endpoints for sending and managing invitations."""

from __future__ import annotations

import uuid
from http import HTTPStatus
from typing import Any, Callable

from slotter.web import Request, Response, broadcast_pending

_INVALID_BODY = "Invalid request body"


class _BadRequest(Exception):
    """A request the handler refuses before reaching the service."""

    def response(self) -> Response:
        return Response(HTTPStatus.BAD_REQUEST, {"error": str(self)})


def _bind(request: Request, *keys: str) -> dict[str, str]:
    """Read string fields from the JSON body; missing or null fields become ''."""
    try:
        body = request.json()
    except ValueError:
        raise _BadRequest(_INVALID_BODY) from None
    fields: dict[str, str] = {}
    for key in keys:
        value = body.get(key)
        if value is None:
            fields[key] = ""
        elif isinstance(value, str):
            fields[key] = value
        else:
            raise _BadRequest(_INVALID_BODY)
    return fields


def _parse_uuid(text: str, malformed: str) -> uuid.UUID:
    try:
        return uuid.UUID(text)
    except ValueError:
        raise _BadRequest(malformed) from None


def _invitation_id(request: Request) -> uuid.UUID:
    invitation_id = _bind(request, "invitation_id")["invitation_id"]
    if not invitation_id:
        raise _BadRequest("invitation_id is required")
    return _parse_uuid(invitation_id, "invalid invitation_id format")


class InvitationHandler:
    """Sends, edits, cancels, resends, deletes and validates invitations."""

    def __init__(self, invitation_service: Any, sse_hub: Any) -> None:
        self.invitation_service = invitation_service
        self.sse_hub = sse_hub

    def _perform(
        self, request: Request, action: Callable[[], Any], message: str
    ) -> Response:
        try:
            action()
        except Exception as exc:  # service failures are reported to the client
            return Response(HTTPStatus.BAD_REQUEST, {"error": str(exc)})
        broadcast_pending(request.context, self.sse_hub)
        return Response(HTTPStatus.OK, {"message": message})

    def send_invitation(self, request: Request) -> Response:
        """Create and deliver a new invitation."""
        try:
            req = _bind(
                request, "email", "phone_number", "invitation_type", "name", "message"
            )
        except _BadRequest as refusal:
            return refusal.response()
        invitation = {
            "email": req["email"],
            "phone_number": req["phone_number"],
            "invitation_type": req["invitation_type"],
            "name": req["name"],
            "message": req["message"],
        }
        return self._perform(
            request,
            lambda: self.invitation_service.send_invitation(
                request.context, None, invitation
            ),
            "Invitation sent successfully",
        )

    def update_invitation_msg_name(self, request: Request) -> Response:
        """Change an invitation's name and message."""
        try:
            invitation_uuid = _invitation_id(request)
            req = _bind(request, "name", "message")
        except _BadRequest as refusal:
            return refusal.response()
        return self._perform(
            request,
            lambda: self.invitation_service.update_invitation(
                request.context, None, invitation_uuid, req["name"], req["message"]
            ),
            "Invitation updated successfully",
        )

    def update_invitation_role(self, request: Request) -> Response:
        """Change the role an invitation grants."""
        try:
            req = _bind(request, "invitation_id", "role_id")
            if not req["invitation_id"] or not req["role_id"]:
                raise _BadRequest("invitation_id and role_id are required")
            invitation_uuid = _parse_uuid(
                req["invitation_id"], "invalid invitation_id format"
            )
            role_uuid = _parse_uuid(req["role_id"], "invalid role_id format")
        except _BadRequest as refusal:
            return refusal.response()
        return self._perform(
            request,
            lambda: self.invitation_service.update_invitation_role(
                request.context, None, invitation_uuid, role_uuid
            ),
            "Invitation role updated successfully",
        )

    def cancel_invitation(self, request: Request) -> Response:
        """Cancel a pending invitation."""
        try:
            invitation_uuid = _invitation_id(request)
        except _BadRequest as refusal:
            return refusal.response()
        return self._perform(
            request,
            lambda: self.invitation_service.cancel_invitation(
                request.context, None, invitation_uuid
            ),
            "Invitation canceled successfully",
        )

    def resend_invitation(self, request: Request) -> Response:
        """Deliver an invitation again."""
        try:
            invitation_uuid = _invitation_id(request)
        except _BadRequest as refusal:
            return refusal.response()
        return self._perform(
            request,
            lambda: self.invitation_service.resend_invitation(
                request.context, None, invitation_uuid
            ),
            "Invitation resent successfully",
        )

    def delete_invitation(self, request: Request) -> Response:
        """Remove an invitation."""
        try:
            invitation_uuid = _invitation_id(request)
        except _BadRequest as refusal:
            return refusal.response()
        return self._perform(
            request,
            lambda: self.invitation_service.delete_invitation(
                request.context, None, invitation_uuid
            ),
            "Invitation deleted successfully",
        )

    def validate_invitation_token(self, request: Request) -> Response:
        """Look up the invitation an invitation token refers to."""
        try:
            token = _bind(request, "token")["token"]
            if not token:
                raise _BadRequest("token is required")
        except _BadRequest as refusal:
            return refusal.response()
        try:
            invitation = self.invitation_service.validate_invitation_token(
                request.context, None, token
            )
        except Exception as exc:  # service failures are reported to the client
            return Response(HTTPStatus.BAD_REQUEST, {"error": str(exc)})
        return Response(HTTPStatus.OK, {"invitation": invitation})