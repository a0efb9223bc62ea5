"""Endpoint for creating warehouses."""

from __future__ import annotations

import uuid
from http import HTTPStatus
from typing import Any

from slotter.web import NIL_UUID, Request, Response


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


class WarehouseHandler:
    """Creates warehouses and announces them on the company channel."""

    def __init__(self, warehouse_service: Any, hub: Any) -> None:
        self.warehouse_service = warehouse_service
        self.hub = hub

    def create_warehouse(self, request: Request) -> Response:
        try:
            body = request.json()
            name = _string(body, "name")
            company_id = _string(body, "company_id")
        except ValueError:
            return Response(HTTPStatus.BAD_REQUEST, {"error": "invalid request body"})

        company_uuid = NIL_UUID
        if company_id:
            try:
                company_uuid = uuid.UUID(company_id)
            except ValueError:
                return Response(HTTPStatus.BAD_REQUEST, {"error": "invalid company_id UUID"})

        try:
            warehouse = self.warehouse_service.create_warehouse(
                request.context, name, company_uuid
            )
        except Exception as exc:  # service failures are reported to the client
            return Response(HTTPStatus.BAD_REQUEST, {"error": str(exc)})

        if warehouse.company_id not in (None, NIL_UUID):
            self.hub.broadcast_global(
                request.context,
                {
                    "channel": f"company:{warehouse.company_id}",
                    "data": {"action": "warehouse_created", "payload": warehouse},
                },
            )
        return Response(HTTPStatus.OK, {"success": True, "warehouse": warehouse})