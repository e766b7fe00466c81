"""
Tests for dashboard order counts.

Run with: pytest tests/test_dashboard.py -v
"""
from schemas.order import OrderCreate, OrderUpdate
from services import order as order_service
from services.dashboard import get_order_stats


def test_empty_store(db_session):
    assert get_order_stats(db_session) == {
        "total_orders": 0,
        "pending_orders": 0,
        "in_transit_orders": 0,
        "delivered_orders": 0,
    }


def test_counts_follow_current_status(db_session, order_fields):
    statuses = ["pending", "pending", "in-transit", "delivered", "cancelled", "processing"]
    for status in statuses:
        order = order_service.create_order(db_session, OrderCreate(**order_fields))
        if status != "pending":
            order_service.update_order(db_session, order.id, OrderUpdate(status=status))

    stats = get_order_stats(db_session)

    assert stats == {
        "total_orders": 6,
        "pending_orders": 2,
        "in_transit_orders": 1,
        "delivered_orders": 1,
    }
    # cancelled and processing only count towards the total
    assert stats["total_orders"] >= stats["pending_orders"] + stats["in_transit_orders"] + stats["delivered_orders"]


def test_stats_endpoint(client, auth_headers, order_payload):
    order_id = client.post("/api/orders", json=order_payload, headers=auth_headers).json()["id"]
    client.put(f"/api/orders/{order_id}", json={"status": "delivered"}, headers=auth_headers)
    client.post("/api/orders", json=order_payload, headers=auth_headers)

    response = client.get("/api/dashboard/stats", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "totalOrders": 2,
        "pendingOrders": 1,
        "inTransitOrders": 0,
        "deliveredOrders": 1,
    }


def test_stats_endpoint_requires_authentication(client):
    assert client.get("/api/dashboard/stats").status_code == 401
