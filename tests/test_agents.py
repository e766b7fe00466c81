"""
Tests for delivery agent management.

Run with: pytest tests/test_agents.py -v
"""
import pytest
from pydantic import ValidationError as SchemaValidationError

from core.exceptions import BusinessLogicError, ResourceNotFoundError, ValidationError
from models.order import Region
from schemas.agent import DeliveryAgentCreate, DeliveryAgentUpdate
from schemas.order import OrderCreate
from services import agent as agent_service
from services import order as order_service


def agent_fields(employee_id="EMP-001", **overrides):
    data = {
        "full_name": "Juan Dela Cruz",
        "phone": "0917-123-4501",
        "employee_id": employee_id,
        "region": "NCR",
    }
    data.update(overrides)
    return data


@pytest.fixture
def agent_payload() -> dict:
    return {
        "fullName": "Maria Santos",
        "email": "maria@example.ph",
        "phone": "+63 917 123 4502",
        "employeeId": "EMP-002",
        "region": "SOUTH LUZON",
    }


# =============================================================================
# SERVICE
# =============================================================================

def test_create_normalizes_phone_and_defaults_active(db_session):
    agent = agent_service.create_delivery_agent(db_session, DeliveryAgentCreate(**agent_fields()))
    assert agent.phone == "09171234501"
    assert agent.is_active is True
    assert agent.region == Region.NCR


def test_duplicate_employee_id_is_rejected(db_session):
    agent_service.create_delivery_agent(db_session, DeliveryAgentCreate(**agent_fields()))
    with pytest.raises(BusinessLogicError) as exc_info:
        agent_service.create_delivery_agent(
            db_session, DeliveryAgentCreate(**agent_fields(full_name="Someone Else"))
        )
    assert exc_info.value.status_code == 400
    assert len(agent_service.get_delivery_agents(db_session)) == 1


def test_update_to_taken_employee_id_is_rejected(db_session):
    agent_service.create_delivery_agent(db_session, DeliveryAgentCreate(**agent_fields("EMP-001")))
    second = agent_service.create_delivery_agent(db_session, DeliveryAgentCreate(**agent_fields("EMP-002")))

    with pytest.raises(BusinessLogicError):
        agent_service.update_delivery_agent(db_session, second.id, DeliveryAgentUpdate(employee_id="EMP-001"))

    # keeping its own id is fine
    updated = agent_service.update_delivery_agent(
        db_session, second.id, DeliveryAgentUpdate(employee_id="EMP-002", region="VISAYAS")
    )
    assert updated.region == Region.VISAYAS


def test_update_cannot_clear_required_field(db_session):
    agent = agent_service.create_delivery_agent(db_session, DeliveryAgentCreate(**agent_fields()))
    with pytest.raises(ValidationError):
        agent_service.update_delivery_agent(db_session, agent.id, DeliveryAgentUpdate(region=None))


@pytest.mark.parametrize("field", ["full_name", "employee_id"])
def test_update_rejects_blank_name_or_employee_id(field):
    with pytest.raises(SchemaValidationError):
        DeliveryAgentUpdate(**{field: "  "})
    assert getattr(DeliveryAgentUpdate(**{field: " EMP-9 "}), field) == "EMP-9"


def test_active_agents_sorted_by_name(db_session):
    agent_service.create_delivery_agent(db_session, DeliveryAgentCreate(**agent_fields("EMP-1", full_name="Zed")))
    agent_service.create_delivery_agent(db_session, DeliveryAgentCreate(**agent_fields("EMP-2", full_name="Amy")))
    agent_service.create_delivery_agent(
        db_session, DeliveryAgentCreate(**agent_fields("EMP-3", full_name="Bea", is_active=False))
    )

    active = agent_service.get_active_delivery_agents(db_session)

    assert [a.full_name for a in active] == ["Amy", "Zed"]
    assert len(agent_service.get_delivery_agents(db_session)) == 3


def test_delete_unassigns_orders(db_session, order_fields):
    agent = agent_service.create_delivery_agent(db_session, DeliveryAgentCreate(**agent_fields()))
    order = order_service.create_order(db_session, OrderCreate(**order_fields, assigned_agent_id=agent.id))
    order_id = order.id

    agent_service.delete_delivery_agent(db_session, agent.id)
    db_session.expire_all()

    remaining = order_service.get_order(db_session, order_id)
    assert remaining.assigned_agent_id is None
    assert remaining.assigned_agent is None
    with pytest.raises(ResourceNotFoundError):
        agent_service.get_delivery_agent(db_session, agent.id)


def test_delete_missing_agent(db_session):
    with pytest.raises(ResourceNotFoundError):
        agent_service.delete_delivery_agent(db_session, "nope")


# =============================================================================
# HTTP
# =============================================================================

def test_agent_endpoints_require_authentication(client, agent_payload):
    assert client.get("/api/agents").status_code == 401
    assert client.post("/api/agents", json=agent_payload).status_code == 401


def test_agent_crud_over_http(client, auth_headers, agent_payload):
    created = client.post("/api/agents", json=agent_payload, headers=auth_headers)
    assert created.status_code == 201, created.text
    body = created.json()
    assert body["employeeId"] == "EMP-002"
    assert body["phone"] == "639171234502"
    assert body["isActive"] is True
    agent_id = body["id"]

    duplicate = client.post("/api/agents", json=agent_payload, headers=auth_headers)
    assert duplicate.status_code == 400
    assert duplicate.json()["details"]["field"] == "employeeId"

    updated = client.put(f"/api/agents/{agent_id}", json={"isActive": False}, headers=auth_headers)
    assert updated.status_code == 200
    assert updated.json()["isActive"] is False

    assert client.get("/api/agents", params={"active": "true"}, headers=auth_headers).json() == []
    assert len(client.get("/api/agents", headers=auth_headers).json()) == 1

    assert client.delete(f"/api/agents/{agent_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/api/agents/{agent_id}", headers=auth_headers).status_code == 404


def test_agent_validation_over_http(client, auth_headers, agent_payload):
    response = client.post(
        "/api/agents",
        json={**agent_payload, "region": "LUZON", "phone": "123"},
        headers=auth_headers
    )
    assert response.status_code == 422
    fields = {e["field"] for e in response.json()["details"]["errors"]}
    assert {"body.region", "body.phone"} <= fields


def test_deleting_agent_keeps_order_over_http(client, auth_headers, agent_payload, order_payload):
    agent_id = client.post("/api/agents", json=agent_payload, headers=auth_headers).json()["id"]
    order = client.post(
        "/api/orders", json={**order_payload, "assignedAgentId": agent_id}, headers=auth_headers
    ).json()
    assert order["assignedAgentId"] == agent_id

    filtered = client.get("/api/orders", params={"agentId": agent_id}, headers=auth_headers).json()
    assert filtered["total"] == 1
    assert filtered["orders"][0]["assignedAgent"]["id"] == agent_id

    client.delete(f"/api/agents/{agent_id}", headers=auth_headers)

    detail = client.get(f"/api/orders/{order['id']}", headers=auth_headers).json()
    assert detail["assignedAgentId"] is None
    assert detail["assignedAgent"] is None


def test_unknown_agent_on_order_is_rejected(client, auth_headers, order_payload):
    response = client.post(
        "/api/orders", json={**order_payload, "assignedAgentId": "missing"}, headers=auth_headers
    )
    assert response.status_code == 422
    assert response.json()["details"]["field"] == "assignedAgentId"
