import json
import uuid
from http import HTTPStatus
from unittest.mock import Mock

import pytest

from slotter.errordata import get_error_data, with_error_data
from slotter.handlers.role import RoleHandler
from slotter.web import Request, get_sse_data, with_sse_data


def make_request(body):
    raw = body if isinstance(body, bytes) else json.dumps(body).encode()
    return Request(method="POST", body=raw, context=with_error_data(with_sse_data({})))


def queue_event(ctx, *args):
    get_sse_data(ctx).messages.append("event")


def set_error(ctx, *args):
    get_error_data(ctx).message = "duplicate"


@pytest.fixture
def service():
    return Mock()


@pytest.fixture
def hub():
    return Mock()


@pytest.fixture
def handler(service, hub):
    return RoleHandler(service, hub)


def test_create_role_success(handler, service, hub):
    service.create_logged_in.side_effect = queue_event
    request = make_request({"name": "Picker", "description": "Picks"})
    response = handler.create_role(request)
    assert response.status == HTTPStatus.OK
    assert response.body == {"message": "Role created successfully"}
    service.create_logged_in.assert_called_once_with(
        request.context, None, "Picker", "Picks"
    )
    hub.broadcast.assert_called_once_with("event")
    assert get_sse_data(request.context).messages == []


def test_create_role_invalid_body(handler, service):
    response = handler.create_role(make_request(b""))
    assert response.status == HTTPStatus.BAD_REQUEST
    assert response.body == {"error": "Invalid request body"}
    service.create_logged_in.assert_not_called()


def test_create_role_service_error_is_server_error(handler, service):
    service.create_logged_in.side_effect = RuntimeError("db down")
    response = handler.create_role(make_request({"name": "Picker"}))
    assert response.status == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.body == {"error": "db down"}


def test_create_role_error_data_wins_over_broadcast(handler, service, hub):
    def both(ctx, *args):
        queue_event(ctx)
        set_error(ctx)

    service.create_logged_in.side_effect = both
    response = handler.create_role(make_request({"name": "Picker"}))
    assert response.status == HTTPStatus.BAD_REQUEST
    assert response.body == {"error": "duplicate"}
    hub.broadcast.assert_not_called()


def test_update_name_desc_requires_role_id(handler):
    response = handler.update_role_name_desc(make_request({"name": "x"}))
    assert response.body == {"error": "role_id is required"}


def test_update_name_desc_rejects_bad_role_id(handler):
    response = handler.update_role_name_desc(make_request({"role_id": "bad"}))
    assert response.body == {"error": "Invalid role_id format"}


def test_update_name_desc_success(handler, service):
    role_id = uuid.uuid4()
    request = make_request({"role_id": str(role_id), "name": "Lead"})
    response = handler.update_role_name_desc(request)
    assert response.body == {"message": "Role name/description updated successfully"}
    service.update_role.assert_called_once_with(request.context, None, role_id, "Lead", "")


def test_update_permissions_success(handler, service):
    role_id = uuid.uuid4()
    permissions = [{"name": "view"}, {"name": "edit"}]
    request = make_request({"role_id": str(role_id), "permissions": permissions})
    response = handler.update_role_permissions(request)
    assert response.body == {"message": "Role permissions updated successfully"}
    service.update_permissions.assert_called_once_with(
        request.context, None, role_id, permissions
    )


def test_update_permissions_rejects_non_list(handler, service):
    request = make_request({"role_id": str(uuid.uuid4()), "permissions": "all"})
    response = handler.update_role_permissions(request)
    assert response.body == {"error": "Invalid request body"}
    service.update_permissions.assert_not_called()


def test_update_permissions_missing_list_is_empty(handler, service):
    role_id = uuid.uuid4()
    request = make_request({"role_id": str(role_id)})
    response = handler.update_role_permissions(request)
    assert response.status == HTTPStatus.OK
    assert response.body == {"message": "Role permissions updated successfully"}
    assert service.update_permissions.call_args.args[3] == []


def test_update_permissions_error_data(handler, service):
    service.update_permissions.side_effect = set_error
    response = handler.update_role_permissions(make_request({"role_id": str(uuid.uuid4())}))
    assert response.body == {"error": "duplicate"}


def test_delete_role_success(handler, service, hub):
    service.delete_role.side_effect = queue_event
    role_id = uuid.uuid4()
    request = make_request({"role_id": str(role_id)})
    response = handler.delete_role(request)
    assert response.body == {"message": "Role deleted successfully"}
    service.delete_role.assert_called_once_with(request.context, None, role_id)
    hub.broadcast.assert_called_once_with("event")


def test_delete_role_service_error_is_bad_request(handler, service):
    service.delete_role.side_effect = RuntimeError("in use")
    response = handler.delete_role(make_request({"role_id": str(uuid.uuid4())}))
    assert response.status == HTTPStatus.BAD_REQUEST
    assert response.body == {"error": "in use"}


def test_delete_role_requires_role_id(handler):
    response = handler.delete_role(make_request({}))
    assert response.body == {"error": "role_id is required"}