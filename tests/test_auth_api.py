from datetime import datetime, timedelta, timezone

from jose import jwt

from booknest.core.config import ALGORITHM, SECRET_KEY
from booknest.core.security import create_token
from booknest.db import crud
from tests.conftest import auth, register


def test_first_user_is_admin_then_users(client):
    first = register(client, "Admin", "admin@booknest.com")
    second = register(client, "Reader", "reader@example.com")
    assert first["user"]["role"] == "admin"
    assert second["user"]["role"] == "user"
    assert "password" not in second["user"]


def test_token_payload_carries_id_and_role(client):
    data = register(client, "Admin", "admin@booknest.com")
    payload = jwt.decode(data["token"], SECRET_KEY, algorithms=[ALGORITHM])
    assert payload["id"] == data["user"]["id"]
    assert payload["role"] == "admin"
    expires = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    assert timedelta(days=6, hours=23) < expires - datetime.now(timezone.utc) <= timedelta(days=7)


def test_duplicate_email_is_rejected(client):
    register(client, "Reader", "reader@example.com")
    res = client.post("/api/auth/register", json={"name": "Other", "email": "Reader@example.com", "password": "secret123"})
    assert res.status_code == 409


def test_duplicate_email_caught_by_unique_index(client, monkeypatch):
    register(client, "Reader", "reader@example.com")
    # a second request that passed the lookup before the first one was stored
    monkeypatch.setattr(crud, "get_user_by_email", lambda db, email: None)
    res = client.post("/api/auth/register", json={"name": "Other", "email": "reader@example.com", "password": "secret123"})
    assert res.status_code == 409
    assert res.json() == {"detail": "Email already registered"}


def test_login(client):
    register(client, "Reader", "reader@example.com")
    res = client.post("/api/auth/login", json={"email": "reader@example.com", "password": "secret123"})
    assert res.status_code == 200
    assert res.json()["user"]["email"] == "reader@example.com"


def test_login_wrong_password(client):
    register(client, "Reader", "reader@example.com")
    res = client.post("/api/auth/login", json={"email": "reader@example.com", "password": "nope-nope"})
    assert res.status_code == 401
    assert res.json() == {"detail": "Invalid credentials"}


def test_me_requires_token(client):
    assert client.get("/api/user/me").status_code == 401


def test_me_rejects_garbage_token(client):
    assert client.get("/api/user/me", headers=auth("not-a-jwt")).status_code == 401


def test_me_rejects_expired_token(client):
    data = register(client, "Reader", "reader@example.com")
    token = create_token(data["user"]["id"], "user", expires_minutes=-1)
    assert client.get("/api/user/me", headers=auth(token)).status_code == 401


def test_me_rejects_token_for_unknown_user(client):
    token = create_token("64b7f0c2a1b2c3d4e5f60718", "user")
    res = client.get("/api/user/me", headers=auth(token))
    assert res.status_code == 401
    assert res.json()["detail"] == "User not found"


def test_me(client):
    data = register(client, "Reader", "reader@example.com")
    res = client.get("/api/user/me", headers=auth(data["token"]))
    assert res.status_code == 200
    assert res.json()["name"] == "Reader"
    assert res.json()["wishlist"] == []
