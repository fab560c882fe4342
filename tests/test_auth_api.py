"""Integration tests for sign-up, password login, the current user and the admin RPC."""
from __future__ import annotations

from fastapi.testclient import TestClient

from citizenvoice.main import app

from .conftest import ANON_KEY, Account, create_account


def _signup(client: TestClient, email: str, password: str = "Password123", **metadata: object):
    return client.post(
        "/auth/signup",
        json={"email": email, "password": password, "user_metadata": dict(metadata)},
    )


def test_signup_returns_session_and_user(client: TestClient) -> None:
    response = _signup(client, "New.Citizen@Example.com", full_name="New Citizen")

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] > 0
    assert body["user"]["email"] == "new.citizen@example.com"
    assert body["user"]["user_metadata"] == {"full_name": "New Citizen"}

    me = client.get("/auth/user", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == body["user"]["id"]


def test_signup_rejects_duplicate_email(client: TestClient) -> None:
    assert _signup(client, "dup@example.com").status_code == 201

    again = _signup(client, "DUP@example.com")
    assert again.status_code == 409
    assert again.json()["detail"] == "User already registered"


def test_signup_rejects_weak_password(client: TestClient) -> None:
    response = _signup(client, "weak@example.com", password="weak")

    assert response.status_code == 422
    assert "at least 8 characters" in response.json()["detail"]


def test_password_login(client: TestClient, citizen: Account) -> None:
    ok = client.post("/auth/token", json={"email": "citizen@example.com", "password": citizen.password})
    assert ok.status_code == 200
    assert ok.json()["user"]["email"] == "citizen@example.com"

    bad = client.post("/auth/token", json={"email": "citizen@example.com", "password": "Wrong1234"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid login credentials"


def test_current_user_requires_bearer_token(client: TestClient) -> None:
    assert client.get("/auth/user").status_code == 401
    invalid = client.get("/auth/user", headers={"Authorization": "Bearer not-a-token"})
    assert invalid.status_code == 401


def test_update_user_metadata_merges_keys(client: TestClient) -> None:
    account = create_account("meta@example.com", user_metadata={"full_name": "Meta"})

    response = client.patch(
        "/auth/user",
        json={"user_metadata": {"phone": "555-0100"}},
        headers=account.headers,
    )

    assert response.status_code == 200, response.text
    assert response.json()["user_metadata"] == {"full_name": "Meta", "phone": "555-0100"}


def test_api_key_is_required() -> None:
    with TestClient(app) as bare:
        missing = bare.get("/news")
        assert missing.status_code == 401
        assert missing.json()["detail"] == "Invalid API key"

        wrong = bare.get("/news", headers={"apikey": "nope"})
        assert wrong.status_code == 401

        assert bare.get("/news", headers={"apikey": ANON_KEY}).status_code == 200
        assert bare.get("/health").json()["status"] == "ok"


def test_is_admin_rpc_uses_server_role(client: TestClient, admin: Account) -> None:
    assert client.post("/rpc/is_admin").json() is False
    assert client.post("/rpc/is_admin", headers=admin.headers).json() is True

    pretender = create_account("pretender@example.com", user_metadata={"role": "admin"})
    assert client.post("/rpc/is_admin", headers=pretender.headers).json() is False
