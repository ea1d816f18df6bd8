"""HTTP API 테스트 (health, presence, deliver)."""

from fastapi.testclient import TestClient

from app import create_app
from talksync import Settings


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_health_reports_counts(client):
    body = client.get("/api/health").json()
    assert body == {"status": "ok", "services": {"signaling": "ok"}, "connections": 0, "online_users": 0}

    with client.websocket_connect("/ws?uid=u1") as alice:
        alice.receive_json()
        body = client.get("/api/health").json()

    assert body["connections"] == 1
    assert body["online_users"] == 1


def test_online_users_and_user_presence(client):
    with client.websocket_connect("/ws?uid=u1") as alice:
        alice.receive_json()

        assert client.get("/api/presence/online").json() == {"online_users": ["u1"], "count": 1}
        assert client.get("/api/presence/u1").json() == {"user_id": "u1", "online": True}
        assert client.get("/api/presence/u2").json() == {"user_id": "u2", "online": False}


def test_deliver_to_online_user(client):
    with client.websocket_connect("/ws?uid=u1") as alice:
        alice.receive_json()

        response = client.post("/api/presence/deliver", json={
            "user_id": "u1",
            "event": "newMessage",
            "payload": {"senderId": "u2", "text": "hi"},
        })

        assert response.status_code == 200
        assert response.json() == {"delivered": True}
        assert alice.receive_json() == {"type": "newMessage", "data": {"senderId": "u2", "text": "hi"}}


def test_deliver_to_offline_user(client):
    response = client.post("/api/presence/deliver", json={
        "user_id": "u404",
        "event": "sessionRequested",
        "payload": {"sessionId": "s1"},
    })

    assert response.status_code == 200
    assert response.json() == {"delivered": False}


def test_deliver_validates_body(client):
    response = client.post("/api/presence/deliver", json={"user_id": "", "event": "newMessage"})

    assert response.status_code == 422


def test_deliver_requires_bearer_when_password_set(tmp_path):
    settings = Settings(LOG_FILE_ENABLED=False, LOG_DIR=str(tmp_path), ACCESS_PASSWORD="secret")
    body = {"user_id": "u1", "event": "newMessage", "payload": {}}

    with TestClient(create_app(settings)) as secured:
        assert secured.post("/api/presence/deliver", json=body).status_code == 401
        assert secured.post(
            "/api/presence/deliver", json=body, headers={"Authorization": "Token secret"}
        ).status_code == 401
        assert secured.post(
            "/api/presence/deliver", json=body, headers={"Authorization": "Bearer wrong"}
        ).status_code == 401

        response = secured.post(
            "/api/presence/deliver", json=body, headers={"Authorization": "Bearer secret"}
        )
        assert response.status_code == 200
        assert response.json() == {"delivered": False}
