"""Endpoints describing the authenticated caller."""

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


class MeHandler:
    """Returns the caller's user, WMS, company and role."""

    def __init__(self, me_service: Any) -> None:
        self.me_service = me_service

    def get_me(self, request: Request) -> Response:
        return _fetch("me", lambda: self.me_service.get_me(request.context, None))

    def get_my_wms(self, request: Request) -> Response:
        return _fetch("myWms", lambda: self.me_service.get_my_wms(request.context, None))

    def get_my_company(self, request: Request) -> Response:
        return _fetch(
            "myCompany", lambda: self.me_service.get_my_company(request.context, None)
        )

    def get_my_role(self, request: Request) -> Response:
        return _fetch("myRole", lambda: self.me_service.get_my_role(request.context, None))