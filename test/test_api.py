"""HTTP boundary: error mapping, table views and admin reload."""
import pytest
from fastapi.testclient import TestClient

from order_status.config import settings
from order_status.main import app


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_validate_allowed(client):
    resp = client.post(
        "/transitions/validate",
        json={"current_status": "CREATED", "requested_status": "CONFIRMED"},
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ok",
        "current_status": "CREATED",
        "requested_status": "CONFIRMED",
        "note": "Order confirmed by restaurant",
    }


def test_validate_rejected_maps_to_bad_request(client):
    resp = client.post(
        "/transitions/validate",
        json={"current_status": "DELIVERED", "requested_status": "PREPARING"},
    )
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "invalid_transition",
        "message": "Cannot transition order from DELIVERED to PREPARING",
        "current_status": "DELIVERED",
        "requested_status": "PREPARING",
    }


def test_unknown_status_is_validation_error(client):
    resp = client.post(
        "/transitions/validate",
        json={"current_status": "SHIPPED", "requested_status": "DELIVERED"},
    )
    assert resp.status_code == 422


def test_list_transitions(client):
    body = client.get("/transitions").json()
    assert body["transitions"]["CREATED"] == ["CONFIRMED", "CANCELLED"]
    assert body["terminal"] == ["DELIVERED", "CANCELLED"]
    assert body["allow_same_status"] is True


def test_next_statuses(client):
    assert client.get("/transitions/CONFIRMED").json() == {
        "status": "CONFIRMED",
        "next": ["PREPARING", "CANCELLED"],
        "terminal": False,
    }
    assert client.get("/transitions/DELIVERED").json()["terminal"] is True
    assert client.get("/transitions/SHIPPED").status_code == 422


def test_admin_reload(client, monkeypatch, write_table):
    monkeypatch.setattr(settings, "transition_table_path", write_table({"CREATED": ["DELIVERED"]}))
    resp = client.post("/admin/transitions/reload")
    assert resp.status_code == 200
    assert resp.json()["transitions"]["CREATED"] == ["DELIVERED"]

    resp = client.post(
        "/transitions/validate",
        json={"current_status": "CREATED", "requested_status": "DELIVERED"},
    )
    assert resp.status_code == 200


def test_admin_reload_failure_keeps_table(client, monkeypatch, write_table):
    monkeypatch.setattr(settings, "transition_table_path", write_table({"CREATED": ["SHIPPED"]}))
    resp = client.post("/admin/transitions/reload")
    assert resp.status_code == 500
    assert resp.json()["status"] == "error"
    assert client.get("/transitions").json()["transitions"]["CREATED"] == ["CONFIRMED", "CANCELLED"]


def test_metrics_endpoint(client):
    client.post(
        "/transitions/validate",
        json={"current_status": "CANCELLED", "requested_status": "CONFIRMED"},
    )
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "transitions_rejected_total" in resp.text
