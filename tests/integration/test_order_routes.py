"""Integration tests for order status endpoints."""

import json
from uuid import uuid4

from fastapi.testclient import TestClient


def seed_order(db, status: str = "pending") -> dict:
    return db.table("orders").insert(
        {
            "external_id": "tribopay_1",
            "provider": "tribopay",
            "type": "whatsapp",
            "amount_cents": 15000,
            "status": status,
        }
    ).execute().data[0]


class TestGetOrder:
    """Tests for GET /api/v1/orders/{order_id}."""

    def test_returns_order(self, memory_client: TestClient, memory_db) -> None:
        order = seed_order(memory_db)

        response = memory_client.get(f"/api/v1/orders/{order['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == order["id"]
        assert data["status"] == "pending"
        assert data["type"] == "whatsapp"
        assert data["amount_cents"] == 15000
        assert data["external_id"] == "tribopay_1"
        assert data["provider"] == "tribopay"

    def test_unknown_order_returns_404(self, memory_client: TestClient, memory_db) -> None:
        response = memory_client.get(f"/api/v1/orders/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_invalid_id_returns_422(self, memory_client: TestClient, memory_db) -> None:
        response = memory_client.get("/api/v1/orders/not-a-uuid")
        assert response.status_code == 422


class TestStreamOrderEvents:
    """Tests for GET /api/v1/orders/{order_id}/events."""

    def test_settled_order_streams_snapshot_and_closes(self, memory_client: TestClient, memory_db) -> None:
        """Test that a paid order yields one status event and ends."""
        order = seed_order(memory_db, status="paid")

        response = memory_client.get(f"/api/v1/orders/{order['id']}/events")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"

        messages = [m for m in response.text.split("\n\n") if m]
        assert len(messages) == 1
        event_line, data_line = messages[0].split("\n")
        assert event_line == "event: status"
        assert json.loads(data_line.removeprefix("data: ")) == {
            "order_id": order["id"],
            "status": "paid",
            "type": "whatsapp",
            "amount_cents": 15000,
        }

    def test_unknown_order_returns_404(self, memory_client: TestClient, memory_db) -> None:
        response = memory_client.get(f"/api/v1/orders/{uuid4()}/events")
        assert response.status_code == 404
