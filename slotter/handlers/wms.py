"""Endpoints listing what belongs to the caller's WMS."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Callable

from slotter.web import Request, Response


def _fetch(key: str, load: Callable[[], Any]) -> Response:
    try:
        value = load()
    except Exception as exc:  # service failures are reported to the client
        return Response(HTTPStatus.BAD_REQUEST, {"error": str(exc)})
    return Response(HTTPStatus.OK, {key: value})


class MyWmsHandler:
    """Lists the companies, users, roles, invitations and permissions of a WMS."""

    def __init__(self, my_wms_service: Any) -> None:
        self.my_wms_service = my_wms_service

    def get_my_companies(self, request: Request) -> Response:
        return _fetch(
            "myCompanies",
            lambda: self.my_wms_service.get_my_companies(request.context, None),
        )

    def get_my_users(self, request: Request) -> Response:
        return _fetch(
            "myUsers", lambda: self.my_wms_service.get_my_users(request.context, None)
        )

    def get_my_roles(self, request: Request) -> Response:
        return _fetch(
            "myRoles", lambda: self.my_wms_service.get_my_roles(request.context, None)
        )

    def get_my_invitations(self, request: Request) -> Response:
        return _fetch(
            "myInvitations",
            lambda: self.my_wms_service.get_my_invitations(request.context, None),
        )

    def get_my_permissions(self, request: Request) -> Response:
        return _fetch(
            "myPermissions",
            lambda: self.my_wms_service.get_all_permissions(request.context, None),
        )