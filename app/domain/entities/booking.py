from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum

from app.application.exceptions import AlreadyCancelled, InvalidTransition
from app.domain.entities.time_interval import TimeInterval


class BookingStatus(str, Enum):
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


# confirmed is the only entry state; cancelled and completed are terminal.
ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.confirmed: frozenset({BookingStatus.cancelled, BookingStatus.completed}),
    BookingStatus.cancelled: frozenset(),
    BookingStatus.completed: frozenset(),
}


@dataclass(frozen=True)
class Booking:
    id: str
    interval: TimeInterval
    service_code: str
    client_name: str
    phone: str
    created_at: datetime
    email: str | None = None
    notes: str = ""
    status: BookingStatus = BookingStatus.confirmed
    cancelled_at: datetime | None = None

    @property
    def day(self) -> date:
        return self.interval.day

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.confirmed


def transition(booking: Booking, target: BookingStatus, at: datetime) -> Booking:
    """Return a copy of ``booking`` moved to ``target``.

    Raises AlreadyCancelled when cancelling a cancelled booking, and
    InvalidTransition for any other move the lifecycle does not allow.
    """
    if booking.status == BookingStatus.cancelled and target == BookingStatus.cancelled:
        raise AlreadyCancelled(f"booking {booking.id} is already cancelled")
    if target not in ALLOWED_TRANSITIONS[booking.status]:
        raise InvalidTransition(
            f"booking {booking.id} cannot move from {booking.status.value} to {target.value}"
        )
    if target == BookingStatus.cancelled:
        return replace(booking, status=target, cancelled_at=at)
    return replace(booking, status=target)
