from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from app.application.exceptions import BookingStoreError
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.use_cases.booking_ledger import BookingLedger
from app.application.use_cases.booking_service import BookingService
from app.application.use_cases.export_bookings import ExportBookingsUseCase
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from app.main import app
from app.wiring.dependencies import get_booking_service

from conftest import FIXED_NOW


class BrokenRepository(BookingRepositoryPort):
    def load(self):
        raise BookingStoreError("disk unavailable")

    def save(self, bookings):
        raise BookingStoreError("disk unavailable")


def _payload(**overrides):
    payload = {
        "date": "2024-01-10",
        "time": "10:00",
        "service": "classic",
        "name": "Anna",
        "phone": "+7 (912) 345-67-89",
        "email": "anna@example.com",
        "notes": "",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def client(booking_service):
    app.dependency_overrides[get_booking_service] = lambda: booking_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_services_listed(client):
    response = client.get("/api/v1/services")
    assert response.status_code == 200
    codes = {s["code"]: s for s in response.json()}
    assert set(codes) == {"classic", "apparatus", "gel", "design"}
    assert codes["design"]["duration"] == 60
    assert codes["design"]["price_is_minimum"] is True


def test_create_booking_and_slot_becomes_taken(client):
    response = client.post("/api/v1/bookings", json=_payload())
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "confirmed"
    assert body["duration"] == 60

    slots = client.get("/api/v1/slots", params={"date": "2024-01-10", "service": "classic"}).json()
    availability = {s["time"]: s["available"] for s in slots["slots"]}
    assert slots["closed"] is False
    assert availability["10:00"] is False
    assert availability["11:00"] is True


def test_conflict_returns_409(client):
    client.post("/api/v1/bookings", json=_payload())
    response = client.post("/api/v1/bookings", json=_payload(time="10:30", duration=30))
    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "slot_conflict"


def test_sunday_slots_are_closed(client):
    body = client.get("/api/v1/slots", params={"date": "2024-01-14", "duration": 30}).json()
    assert body["closed"] is True
    assert body["slots"] == []


def test_sunday_booking_rejected(client):
    response = client.post("/api/v1/bookings", json=_payload(date="2024-01-14"))
    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "closed_day"


def test_past_date_rejected(client):
    response = client.post("/api/v1/bookings", json=_payload(date="2020-01-08"))
    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "past_date"


def test_off_grid_time_rejected(client):
    response = client.post("/api/v1/bookings", json=_payload(time="10:17"))
    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "outside_working_hours"


def test_invalid_phone_rejected(client):
    response = client.post("/api/v1/bookings", json=_payload(phone="12345"))
    assert response.status_code == 422


def test_unknown_service_rejected(client):
    response = client.post("/api/v1/bookings", json=_payload(service="pedicure"))
    assert response.status_code == 422


def test_cancel_flow(client):
    booking_id = client.post("/api/v1/bookings", json=_payload()).json()["id"]

    first = client.post(f"/api/v1/bookings/{booking_id}/cancel")
    assert first.status_code == 200
    assert first.json()["status"] == "cancelled"
    assert first.json()["cancelled_at"] is not None

    again = client.post(f"/api/v1/bookings/{booking_id}/cancel")
    assert again.status_code == 409
    assert again.json()["detail"]["code"] == "already_cancelled"

    missing = client.post("/api/v1/bookings/nope/cancel")
    assert missing.status_code == 404

    assert client.get("/api/v1/bookings").json() == []


def test_list_is_ordered(client):
    for time in ("14:00", "09:30", "11:00"):
        client.post("/api/v1/bookings", json=_payload(time=time, duration=30))
    body = client.get("/api/v1/bookings", params={"date": "2024-01-10"}).json()
    assert [b["time"] for b in body] == ["09:30", "11:00", "14:00"]


def test_export_is_attachment_with_all_records(client):
    booking_id = client.post("/api/v1/bookings", json=_payload()).json()["id"]
    client.post(f"/api/v1/bookings/{booking_id}/cancel")

    response = client.get("/api/v1/bookings/export")
    assert response.status_code == 200
    assert 'filename="appointments-' in response.headers["content-disposition"]
    records = json.loads(response.text)
    assert [r["status"] for r in records] == ["cancelled"]


def test_clear_requires_confirmation(client):
    client.post("/api/v1/bookings", json=_payload())
    assert client.delete("/api/v1/bookings").status_code == 400
    response = client.delete("/api/v1/bookings", params={"confirm": "true"})
    assert response.json() == {"removed": 1}


def test_store_failure_is_503_not_conflict(config):
    repository = BrokenRepository()
    service = BookingService(
        ledger=BookingLedger(repository=repository),
        catalog=ServiceCatalogStore(),
        config=config,
        exporter=ExportBookingsUseCase(repository),
        clock=lambda: FIXED_NOW,
    )
    app.dependency_overrides[get_booking_service] = lambda: service
    try:
        client = TestClient(app)
        assert client.post("/api/v1/bookings", json=_payload()).status_code == 503
        assert client.get("/api/v1/slots", params={"date": "2024-01-10"}).status_code == 503
    finally:
        app.dependency_overrides.clear()
