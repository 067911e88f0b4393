"""End-to-end tests for the websocket endpoint and presence queries."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from tasket.infrastructure.models import DepartmentModel, EmployeeModel
from tasket.infrastructure.security import create_access_token


@pytest.fixture()
def client(database, seed):
    seed(DepartmentModel(id=10, name="Engineering"))
    seed(
        EmployeeModel(id=1, name="Ana", email="ana@example.com", department_id=10),
        EmployeeModel(id=2, name="Bo", email="bo@example.com"),
    )

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def _token(user_id: int) -> str:
    return create_access_token({"sub": str(user_id)})


def test_authenticate_frame_acknowledges_user(client):
    with client.websocket_connect("/ws") as websocket:
        websocket.send_json({"type": "authenticate", "data": _token(1)})

        ack = websocket.receive_json()
        presence = websocket.receive_json()

    assert ack == {
        "type": "authenticated",
        "data": {
            "user": {
                "id": 1,
                "name": "Ana",
                "email": "ana@example.com",
                "role": "employee",
                "department": "Engineering",
            }
        },
    }
    assert presence["type"] == "user_presence"
    assert presence["data"]["status"] == "online"


def test_invalid_token_gets_auth_error_and_policy_close(client):
    with client.websocket_connect("/ws") as websocket:
        websocket.send_json({"type": "authenticate", "data": "forged"})

        assert websocket.receive_json() == {
            "type": "auth_error",
            "data": {"message": "Authentication failed"},
        }
        with pytest.raises(WebSocketDisconnect) as exc_info:
            websocket.receive_json()

    assert exc_info.value.code == 1008


def test_query_token_authenticates_on_connect_and_rooms_work(client):
    with client.websocket_connect(f"/ws?token={_token(2)}") as websocket:
        assert websocket.receive_json()["type"] == "authenticated"

        websocket.send_text("not json")
        websocket.send_json({"type": "join_room", "data": "task_5"})

        assert websocket.receive_json() == {"type": "joined_room", "data": {"room": "task_5"}}


def test_presence_endpoints_reflect_live_connections(client):
    headers = {"Authorization": f"Bearer {_token(2)}"}

    with client.websocket_connect(f"/ws?token={_token(1)}") as websocket:
        websocket.receive_json()
        websocket.receive_json()

        online = client.get("/realtime/departments/10/online", headers=headers)
        stats = client.get("/realtime/stats", headers=headers)

    assert online.status_code == 200
    assert online.json() == [{"id": 1, "name": "Ana", "role": "employee"}]
    assert stats.json() == {"connected_users": 1, "open_connections": 1}


def test_presence_endpoints_require_authentication(client):
    assert client.get("/realtime/stats").status_code == 401
