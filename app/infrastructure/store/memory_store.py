from __future__ import annotations

import threading
from collections.abc import Sequence

from app.application.ports.booking_repository import BookingRepositoryPort
from app.domain.entities.booking import Booking


class MemoryBookingRepository(BookingRepositoryPort):
    def __init__(self, bookings: Sequence[Booking] | None = None) -> None:
        self._bookings: list[Booking] = list(bookings or [])
        self._lock = threading.Lock()

    def load(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings)

    def save(self, bookings: Sequence[Booking]) -> None:
        with self._lock:
            self._bookings = list(bookings)
