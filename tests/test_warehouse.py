import json
import uuid
from http import HTTPStatus
from types import SimpleNamespace

from slotter.handlers.warehouse import WarehouseHandler
from slotter.web import Request


class FakeService:
    def __init__(self, company_id=None, error=None):
        self.company_id = company_id
        self.error = error
        self.calls = []

    def create_warehouse(self, ctx, name, company_id):
        self.calls.append((name, company_id))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(name=name, company_id=self.company_id or company_id)


class FakeHub:
    def __init__(self):
        self.messages = []

    def broadcast_global(self, ctx, message):
        self.messages.append(message)


def _request(body):
    return Request(body=json.dumps(body).encode())


def test_creates_and_broadcasts_to_company_channel():
    company_id = uuid.uuid4()
    service, hub = FakeService(), FakeHub()
    handler = WarehouseHandler(service, hub)
    response = handler.create_warehouse(
        _request({"name": "North", "company_id": str(company_id)})
    )
    assert response.status == HTTPStatus.OK
    assert response.body["success"] is True
    assert response.body["warehouse"].name == "North"
    assert service.calls == [("North", company_id)]
    (message,) = hub.messages
    assert message["channel"] == "company:" + str(company_id)
    assert message["data"]["action"] == "warehouse_created"
    assert message["data"]["payload"] is response.body["warehouse"]


def test_nil_company_is_not_broadcast():
    service, hub = FakeService(), FakeHub()
    response = WarehouseHandler(service, hub).create_warehouse(_request({"name": "Solo"}))
    assert response.status == HTTPStatus.OK
    assert service.calls == [("Solo", uuid.UUID(int=0))]
    assert hub.messages == []


def test_service_assigned_company_is_broadcast():
    company_id = uuid.uuid4()
    hub = FakeHub()
    WarehouseHandler(FakeService(company_id=company_id), hub).create_warehouse(
        _request({"name": "W"})
    )
    assert hub.messages[0]["channel"] == f"company:{company_id}"


def test_invalid_body():
    service, hub = FakeService(), FakeHub()
    handler = WarehouseHandler(service, hub)
    for request in (Request(body=b"not json"), _request({"name": 3})):
        response = handler.create_warehouse(request)
        assert response.status == HTTPStatus.BAD_REQUEST
        assert response.body == {"error": "invalid request body"}
    assert service.calls == []


def test_invalid_company_uuid():
    service = FakeService()
    response = WarehouseHandler(service, FakeHub()).create_warehouse(
        _request({"name": "W", "company_id": "not-a-uuid"})
    )
    assert response.status == HTTPStatus.BAD_REQUEST
    assert response.body == {"error": "invalid company_id UUID"}
    assert service.calls == []


def test_service_error_is_reported():
    hub = FakeHub()
    handler = WarehouseHandler(FakeService(error=RuntimeError("name already used")), hub)
    response = handler.create_warehouse(_request({"name": "W"}))
    assert response.status == HTTPStatus.BAD_REQUEST
    assert response.body == {"error": "name already used"}
    assert hub.messages == []