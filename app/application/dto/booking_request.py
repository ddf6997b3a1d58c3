from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class BookingRequest:
    day: date | str
    time: str
    service_code: str
    client_name: str
    phone: str
    email: str | None = None
    notes: str = ""
    duration_minutes: int | None = None  # overrides the catalog duration when set
