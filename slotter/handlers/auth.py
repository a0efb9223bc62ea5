"""Endpoints for registration, login, token refresh and logout."""

from __future__ import annotations

import uuid
from http import HTTPStatus
from typing import Any

from slotter.web import NIL_UUID, Request, Response, broadcast_pending

_INVALID_BODY = Response(HTTPStatus.BAD_REQUEST, {"error": "invalid request body"})


def _bind(request: Request, *keys: str) -> dict[str, str]:
    """Read string fields from the JSON body; missing or null fields become ''."""
    body = request.json()
    fields: dict[str, str] = {}
    for key in keys:
        value = body.get(key)
        if value is None:
            fields[key] = ""
        elif isinstance(value, str):
            fields[key] = value
        else:
            raise ValueError(f"{key} must be a string")
    return fields


def _uuid_or_nil(text: str) -> uuid.UUID:
    try:
        return uuid.UUID(text)
    except ValueError:
        return NIL_UUID


def _error(status: HTTPStatus, exc: Exception) -> Response:
    return Response(status, {"error": str(exc)})


class AuthHandler:
    """Handles account creation and session tokens."""

    def __init__(self, auth_service: Any, sse_hub: Any) -> None:
        self.auth_service = auth_service
        self.sse_hub = sse_hub

    def _token_response(self, tokens: tuple[str, str]) -> Response:
        access_token, refresh_token = tokens
        expires_in = int(self.auth_service.get_access_ttl().total_seconds())
        return Response(
            HTTPStatus.OK,
            {
                "access_token": access_token,
                "refresh_token": refresh_token,
                "expires_in": expires_in,
            },
        )

    def register(self, request: Request) -> Response:
        """Register a user, optionally founding a new WMS or company."""
        try:
            req = _bind(
                request,
                "email", "phone_number", "first_name", "last_name", "password",
                "new_wms_name", "new_company_name", "company_id", "wms_id",
            )
        except ValueError:
            return _INVALID_BODY
        user: dict[str, Any] = {
            "email": req["email"],
            "phone_number": req["phone_number"],
            "first_name": req["first_name"],
            "last_name": req["last_name"],
            "password": req["password"],
        }
        if req["new_wms_name"]:
            user["user_type"] = "wms"
        if req["new_company_name"]:
            user["user_type"] = "company"
        if req["wms_id"]:
            user["wms_id"] = _uuid_or_nil(req["wms_id"])
        if req["company_id"]:
            user["company_id"] = _uuid_or_nil(req["company_id"])
        try:
            self.auth_service.register_user(
                request.context, user, req["new_company_name"], req["new_wms_name"]
            )
        except Exception as exc:  # service failures are reported to the client
            return _error(HTTPStatus.BAD_REQUEST, exc)
        return Response(HTTPStatus.OK, {"success": True})

    def register_with_invitation(self, request: Request) -> Response:
        """Register a user from an invitation token."""
        try:
            req = _bind(
                request,
                "token", "email", "phone_number", "first_name", "last_name",
                "password", "new_company_name",
            )
        except ValueError:
            return _INVALID_BODY
        if not req["token"].strip():
            return Response(HTTPStatus.BAD_REQUEST, {"error": "missing invitation token"})
        user = {
            "email": req["email"],
            "phone_number": req["phone_number"],
            "first_name": req["first_name"],
            "last_name": req["last_name"],
            "password": req["password"],
        }
        ctx = request.context
        try:
            self.auth_service.register_user_with_invitation_token(
                ctx, user, req["token"], req["new_company_name"]
            )
        except Exception as exc:  # service failures are reported to the client
            return _error(HTTPStatus.BAD_REQUEST, exc)
        broadcast_pending(ctx, self.sse_hub)
        return Response(
            HTTPStatus.OK, {"message": "User successfully registered via invitation"}
        )

    def login(self, request: Request) -> Response:
        """Exchange credentials for an access and a refresh token."""
        try:
            req = _bind(request, "email", "password")
        except ValueError:
            return _INVALID_BODY
        try:
            tokens = self.auth_service.login(request.context, req["email"], req["password"])
        except Exception as exc:  # bad credentials and the like
            return _error(HTTPStatus.UNAUTHORIZED, exc)
        return self._token_response(tokens)

    def refresh(self, request: Request) -> Response:
        """Issue a fresh token pair for the current session."""
        try:
            tokens = self.auth_service.refresh(request.context)
        except Exception as exc:  # expired or revoked session
            return _error(HTTPStatus.UNAUTHORIZED, exc)
        return self._token_response(tokens)

    def logout(self, request: Request) -> Response:
        """End the current session."""
        try:
            self.auth_service.logout(request.context)
        except Exception as exc:  # service failures are reported to the client
            return _error(HTTPStatus.BAD_REQUEST, exc)
        return Response(HTTPStatus.OK, {"message": "logged out successfully"})