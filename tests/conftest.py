"""
Shared fixtures. The environment is configured before the application is
imported so the engine binds to a private in-memory SQLite database.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_CALLS"] = "0"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

import models  # noqa: F401
from database.base import Base
from database.connection import engine, SessionLocal
from main import app


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
def tables():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(tables):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def client(tables) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers(client) -> dict:
    """Register a staff user and return a bearer header for it."""
    response = client.post("/api/auth/register", json={
        "email": "dispatcher@example.com",
        "firstName": "Dana",
        "lastName": "Dispatcher",
        "password": "Secret123",
    })
    assert response.status_code == 201, response.text
    token = response.json()["accessToken"]
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# PAYLOADS
# =============================================================================

@pytest.fixture
def order_payload() -> dict:
    """Minimal valid order body in wire (camelCase) form."""
    return {
        "senderName": "Carlo Mendoza",
        "senderPhone": "09181230001",
        "senderEmail": "carlo@example.ph",
        "senderAddress": "12 Ayala Ave, Makati",
        "recipientName": "Liza Villanueva",
        "recipientAddress": "45 Osmena Blvd, Cebu City",
        "packageType": "parcel",
        "weight": 2,
        "serviceType": "economy",
        "fromRegion": "NCR",
        "toRegion": "VISAYAS",
    }


@pytest.fixture
def order_fields() -> dict:
    """Same order as ``order_payload`` using attribute names, for service calls."""
    return {
        "sender_name": "Carlo Mendoza",
        "sender_address": "12 Ayala Ave, Makati",
        "recipient_name": "Liza Villanueva",
        "recipient_address": "45 Osmena Blvd, Cebu City",
        "package_type": "parcel",
        "weight": "2",
        "service_type": "economy",
        "from_region": "NCR",
        "to_region": "VISAYAS",
    }
