"""Endpoints listing what belongs to the caller's company."""

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


class MyCompanyHandler:
    """Lists the warehouses, users, roles, invitations and permissions of a company."""

    def __init__(self, my_company_service: Any) -> None:
        self.my_company_service = my_company_service

    def get_my_warehouses(self, request: Request) -> Response:
        return _fetch(
            "myWarehouses",
            lambda: self.my_company_service.get_my_warehouses(request.context, None),
        )

    def get_my_users(self, request: Request) -> Response:
        return _fetch(
            "myUsers", lambda: self.my_company_service.get_my_users(request.context, None)
        )

    def get_my_roles(self, request: Request) -> Response:
        return _fetch(
            "myRoles", lambda: self.my_company_service.get_my_roles(request.context, None)
        )

    def get_my_invitations(self, request: Request) -> Response:
        return _fetch(
            "myInvitations",
            lambda: self.my_company_service.get_my_invitations(request.context, None),
        )

    def get_my_permissions(self, request: Request) -> Response:
        return _fetch(
            "myPermissions",
            lambda: self.my_company_service.get_all_permissions(request.context, None),
        )