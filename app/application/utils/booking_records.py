from __future__ import annotations

from datetime import date, datetime
from typing import Any

from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.service_catalog import DEFAULT_DURATION_MINUTES
from app.domain.entities.time_interval import TimeInterval


def booking_to_record(booking: Booking) -> dict[str, Any]:
    """Serialize a Booking to a JSON-ready dict."""
    return {
        "id": booking.id,
        "date": booking.day.isoformat(),
        "time": booking.interval.time,
        "duration": booking.interval.duration_minutes,
        "service": booking.service_code,
        "name": booking.client_name,
        "phone": booking.phone,
        "email": booking.email,
        "notes": booking.notes,
        "status": booking.status.value,
        "created_at": booking.created_at.isoformat(),
        "cancelled_at": booking.cancelled_at.isoformat() if booking.cancelled_at else None,
    }


def _duration(value: Any) -> int:
    # Records without a usable duration fall back to the default service length.
    try:
        duration = int(value)
    except (TypeError, ValueError):
        return DEFAULT_DURATION_MINUTES
    return duration if duration > 0 else DEFAULT_DURATION_MINUTES


def booking_from_record(data: dict[str, Any]) -> Booking:
    """Deserialize a stored record. Raises KeyError/ValueError on malformed data."""
    interval = TimeInterval.parse(
        date.fromisoformat(data["date"]),
        data["time"],
        _duration(data.get("duration")),
    )
    cancelled_at = data.get("cancelled_at")
    return Booking(
        id=str(data["id"]),
        interval=interval,
        service_code=data.get("service", ""),
        client_name=data.get("name", ""),
        phone=data.get("phone", ""),
        email=data.get("email") or None,
        notes=data.get("notes") or "",
        status=BookingStatus(data.get("status", BookingStatus.confirmed.value)),
        created_at=datetime.fromisoformat(data["created_at"]),
        cancelled_at=datetime.fromisoformat(cancelled_at) if cancelled_at else None,
    )
