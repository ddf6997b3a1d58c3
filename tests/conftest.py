"""Pytest configuration and fixtures."""

from __future__ import annotations

from datetime import date, datetime
from itertools import count

import pytest

from app.application.use_cases.booking_ledger import BookingLedger
from app.application.use_cases.booking_service import BookingService
from app.application.use_cases.export_bookings import ExportBookingsUseCase
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.calendar_config import CalendarConfig
from app.domain.entities.time_interval import TimeInterval
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from app.infrastructure.store.memory_store import MemoryBookingRepository

WEDNESDAY = date(2024, 1, 10)
SUNDAY = date(2024, 1, 14)
FIXED_NOW = datetime(2024, 1, 9, 12, 0, 0)

_ids = count(1)


def make_booking(
    day: date = WEDNESDAY,
    time: str = "10:00",
    duration: int = 60,
    status: BookingStatus = BookingStatus.confirmed,
    booking_id: str | None = None,
    service_code: str = "classic",
) -> Booking:
    return Booking(
        id=booking_id or f"b{next(_ids)}",
        interval=TimeInterval.parse(day, time, duration),
        service_code=service_code,
        client_name="Anna",
        phone="+79123456789",
        created_at=FIXED_NOW,
        status=status,
    )


@pytest.fixture
def config() -> CalendarConfig:
    return CalendarConfig(work_start=9, work_end=21, break_start=13, break_end=14, slot_granularity_minutes=30)


@pytest.fixture
def repository() -> MemoryBookingRepository:
    return MemoryBookingRepository()


@pytest.fixture
def ledger(repository: MemoryBookingRepository) -> BookingLedger:
    return BookingLedger(repository=repository, clock=lambda: FIXED_NOW)


@pytest.fixture
def booking_service(ledger: BookingLedger, repository: MemoryBookingRepository, config: CalendarConfig) -> BookingService:
    return BookingService(
        ledger=ledger,
        catalog=ServiceCatalogStore(),
        config=config,
        exporter=ExportBookingsUseCase(repository),
        clock=lambda: FIXED_NOW,
    )
