from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import date, datetime

from app.application.dto.booking_request import BookingRequest
from app.application.exceptions import ClosedDay, OutsideWorkingHours, PastDate, SchedulingError
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.use_cases.booking_ledger import BookingLedger, LedgerResult
from app.application.use_cases.export_bookings import BookingExport, ExportBookingsUseCase
from app.application.use_cases.slot_generator import fits_working_hours, generate_slots, is_closed_day
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.calendar_config import CalendarConfig
from app.domain.entities.slot import SlotListing
from app.domain.entities.time_interval import TimeInterval


def new_booking_id(now: datetime) -> str:
    """Millisecond timestamp plus a random suffix: sorts by creation, never collides."""
    return f"{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:6]}"


class BookingService:
    def __init__(
        self,
        ledger: BookingLedger,
        catalog: ServiceCatalogPort,
        config: CalendarConfig,
        exporter: ExportBookingsUseCase,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        self._config = config
        self._exporter = exporter
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    @property
    def config(self) -> CalendarConfig:
        return self._config

    def resolve_duration(self, service_code: str | None, duration_minutes: int | None = None) -> int:
        if duration_minutes is not None:
            return duration_minutes
        return self._catalog.get_duration_minutes(service_code)

    def available_slots(
        self,
        day: date,
        service_code: str | None = None,
        duration_minutes: int | None = None,
    ) -> SlotListing:
        duration = self.resolve_duration(service_code, duration_minutes)
        bookings = [] if is_closed_day(day) else self._ledger.bookings_for(day)
        return generate_slots(day, duration, self._config, bookings)

    def book(self, request: BookingRequest) -> LedgerResult:
        try:
            entry = self._catalog.get_service(request.service_code)
            duration = (
                request.duration_minutes
                if request.duration_minutes is not None
                else entry.effective_duration
            )
            interval = TimeInterval.parse(request.day, request.time, duration)
        except SchedulingError as e:
            return LedgerResult(error=e)

        now = self._clock()
        if interval.day < now.date():
            return LedgerResult(error=PastDate(f"{interval.day.isoformat()} is in the past"))
        if is_closed_day(interval.day):
            return LedgerResult(error=ClosedDay(f"{interval.day.isoformat()} is a day off"))
        if not fits_working_hours(interval.start_minute, interval.duration_minutes, self._config):
            self._logger.info(
                "Requested time outside working hours",
                extra={"date": interval.day.isoformat(), "time": interval.time},
            )
            return LedgerResult(
                error=OutsideWorkingHours(
                    f"{interval.time} for {interval.duration_minutes} min does not fit the working day"
                )
            )

        candidate = Booking(
            id=new_booking_id(now),
            interval=interval,
            service_code=entry.code.value,
            client_name=request.client_name.strip(),
            phone=request.phone.strip(),
            email=(request.email or "").strip() or None,
            notes=(request.notes or "").strip(),
            status=BookingStatus.confirmed,
            created_at=now,
        )
        return self._ledger.insert(candidate)

    def cancel(self, booking_id: str) -> LedgerResult:
        return self._ledger.cancel(booking_id)

    def complete(self, booking_id: str) -> LedgerResult:
        return self._ledger.complete(booking_id)

    def list_active(self, day: date | None = None) -> list[Booking]:
        return self._ledger.list_active(day)

    def export(self, today: date | None = None) -> BookingExport:
        return self._exporter.execute(today)

    def clear_all(self) -> int:
        return self._ledger.clear_all()
