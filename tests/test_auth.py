"""
Tests for staff registration, login and bearer token handling.

Run with: pytest tests/test_auth.py -v
"""
from datetime import timedelta

import pytest

from core.exceptions import BusinessLogicError
from services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    verify_token,
)

CREDENTIALS = {"email": "dispatcher@example.com", "password": "Secret123"}


# =============================================================================
# SERVICE
# =============================================================================

def test_create_user_hashes_password(db_session):
    user = create_user(db_session, "Ops@Example.com ", "Secret123", "Ops", "Lead")
    assert user.email == "ops@example.com"
    assert user.password_hash != "Secret123"
    assert authenticate_user(db_session, "OPS@example.com", "Secret123").id == user.id
    assert authenticate_user(db_session, "ops@example.com", "wrong") is None


def test_duplicate_email_is_rejected(db_session):
    create_user(db_session, "ops@example.com", "Secret123", "Ops", "Lead")
    with pytest.raises(BusinessLogicError):
        create_user(db_session, "OPS@example.com", "Secret123", "Other", "Person")


def test_token_round_trip():
    token = create_access_token({"sub": "ops@example.com", "user_id": "abc"})
    data = verify_token(token)
    assert data.email == "ops@example.com"
    assert data.user_id == "abc"


def test_expired_or_malformed_token_is_rejected():
    expired = create_access_token({"sub": "ops@example.com", "user_id": "abc"}, timedelta(seconds=-5))
    assert verify_token(expired) is None
    assert verify_token("garbage") is None
    assert verify_token(create_access_token({"sub": "ops@example.com"})) is None


# =============================================================================
# HTTP
# =============================================================================

def test_register_returns_token_and_user(client, auth_headers):
    me = client.get("/api/auth/user", headers=auth_headers)
    assert me.status_code == 200
    body = me.json()
    assert body["email"] == "dispatcher@example.com"
    assert body["firstName"] == "Dana"
    assert "passwordHash" not in body


def test_register_duplicate(client, auth_headers):
    response = client.post("/api/auth/register", json={
        **CREDENTIALS, "firstName": "Dana", "lastName": "Again",
    })
    assert response.status_code == 400
    assert response.json()["error_code"] == "BusinessLogicError"


def test_register_weak_password(client):
    response = client.post("/api/auth/register", json={
        "email": "new@example.com", "firstName": "New", "lastName": "User", "password": "password",
    })
    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_login(client, auth_headers):
    response = client.post("/api/auth/login", json=CREDENTIALS)
    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["lastLogin"] is not None

    me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {body['accessToken']}"})
    assert me.status_code == 200


def test_login_wrong_password(client, auth_headers):
    response = client.post("/api/auth/login", json={**CREDENTIALS, "password": "Wrong1234"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["error_code"] == "AuthenticationError"


def test_current_user_requires_token(client):
    assert client.get("/api/auth/user").status_code == 401
    response = client.get("/api/auth/user", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_health_and_response_headers(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers
    assert response.headers["X-Content-Type-Options"] == "nosniff"
