from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import date, datetime

from app.application.exceptions import (
    BookingNotFound,
    DuplicateBooking,
    SchedulingError,
    SlotConflict,
)
from app.application.ports.booking_repository import BookingRepositoryPort
from app.domain.entities.booking import Booking, BookingStatus, transition
from app.domain.entities.time_interval import TimeInterval

BookingHook = Callable[[Booking], None]


@dataclass(frozen=True)
class LedgerResult:
    booking: Booking | None = None
    error: SchedulingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Booking:
        if self.error is not None:
            raise self.error
        assert self.booking is not None
        return self.booking


@dataclass
class _DateLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


def sort_bookings(bookings: Iterable[Booking]) -> list[Booking]:
    return sorted(bookings, key=lambda b: b.interval.sort_key)


class BookingLedger:
    """
    Owns the no-overlap invariant for confirmed bookings.

    Writers on the same date are serialized by a per-date lock held across the
    whole check-then-act. The reload/apply/save of the full collection runs
    under a single commit lock so writers on different dates never drop each
    other's updates. Business-rule failures come back as ``LedgerResult.error``;
    BookingStoreError from the repository propagates.
    """

    def __init__(
        self,
        repository: BookingRepositoryPort,
        hooks: Iterable[BookingHook] = (),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._repository = repository
        self._hooks = list(hooks)
        self._clock = clock
        self._date_locks: dict[date, _DateLock] = {}
        self._lock_lock = threading.Lock()  # guards _date_locks
        self._commit_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def add_hook(self, hook: BookingHook) -> None:
        self._hooks.append(hook)

    @contextmanager
    def _date_lock(self, day: date) -> Iterator[None]:
        # Entries live only while some writer holds or waits on them.
        with self._lock_lock:
            entry = self._date_locks.get(day)
            if entry is None:
                entry = self._date_locks[day] = _DateLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._lock_lock:
                entry.users -= 1
                if entry.users == 0:
                    del self._date_locks[day]

    def _commit(self, apply: Callable[[list[Booking]], list[Booking]]) -> None:
        with self._commit_lock:
            bookings = self._repository.load()
            self._repository.save(apply(bookings))

    # Reads

    def bookings_for(self, day: date) -> list[Booking]:
        return self.list_active(day)

    def list_active(self, day: date | None = None) -> list[Booking]:
        active = [
            b for b in self._repository.load() if b.is_active and (day is None or b.day == day)
        ]
        return sort_bookings(active)

    def list_all(self) -> list[Booking]:
        return list(self._repository.load())

    def find(self, booking_id: str) -> Booking | None:
        for booking in self._repository.load():
            if booking.id == booking_id:
                return booking
        return None

    def is_slot_free(self, day: date, start_minute: int, duration_minutes: int) -> bool:
        candidate = TimeInterval(day=day, start_minute=start_minute, duration_minutes=duration_minutes)
        return self._first_conflict(self._repository.load(), candidate) is None

    @staticmethod
    def _first_conflict(bookings: Iterable[Booking], candidate: TimeInterval) -> Booking | None:
        for booking in bookings:
            if booking.is_active and booking.interval.overlaps(candidate):
                return booking
        return None

    # Writes

    def insert(self, candidate: Booking) -> LedgerResult:
        day = candidate.day
        with self._date_lock(day):
            bookings = self._repository.load()
            if any(b.id == candidate.id for b in bookings):
                return LedgerResult(error=DuplicateBooking(f"booking id {candidate.id} already exists"))

            clash = self._first_conflict(bookings, candidate.interval)
            if clash is not None:
                self._logger.info(
                    "Slot conflict",
                    extra={
                        "date": day.isoformat(),
                        "time": candidate.interval.time,
                        "reason": f"overlaps {clash.id}",
                    },
                )
                return LedgerResult(
                    error=SlotConflict(
                        f"{day.isoformat()} {candidate.interval.time} overlaps an existing booking"
                    )
                )

            booking = replace(candidate, status=BookingStatus.confirmed, cancelled_at=None)
            self._commit(lambda current: [*current, booking])

        self._logger.info(
            "Booking confirmed",
            extra={
                "booking_id": booking.id,
                "date": day.isoformat(),
                "time": booking.interval.time,
                "service": booking.service_code,
            },
        )
        self._run_hooks(booking)
        return LedgerResult(booking=booking)

    def cancel(self, booking_id: str) -> LedgerResult:
        return self._transition(booking_id, BookingStatus.cancelled)

    def complete(self, booking_id: str) -> LedgerResult:
        return self._transition(booking_id, BookingStatus.completed)

    def _transition(self, booking_id: str, target: BookingStatus) -> LedgerResult:
        existing = self.find(booking_id)
        if existing is None:
            return LedgerResult(error=BookingNotFound(f"booking {booking_id} not found"))

        with self._date_lock(existing.day):
            # Re-read under the date lock, another writer may have moved it.
            current = self.find(booking_id)
            if current is None:
                return LedgerResult(error=BookingNotFound(f"booking {booking_id} not found"))
            try:
                updated = transition(current, target, self._clock())
            except SchedulingError as e:
                self._logger.info(
                    "Booking transition rejected",
                    extra={"booking_id": booking_id, "reason": e.code},
                )
                return LedgerResult(booking=current, error=e)

            self._commit(
                lambda bookings: [updated if b.id == booking_id else b for b in bookings]
            )

        self._logger.info(
            "Booking status changed",
            extra={"booking_id": booking_id, "reason": target.value},
        )
        return LedgerResult(booking=updated)

    def clear_all(self) -> int:
        """Drop every record. Bypasses the lifecycle."""
        with self._commit_lock:
            removed = len(self._repository.load())
            self._repository.save([])
        self._logger.warning("All bookings cleared", extra={"reason": f"removed={removed}"})
        return removed

    def _run_hooks(self, booking: Booking) -> None:
        for hook in self._hooks:
            try:
                hook(booking)
            except Exception as e:
                self._logger.exception(
                    "Post-commit hook failed", extra={"booking_id": booking.id, "error": str(e)}
                )
