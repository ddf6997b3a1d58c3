from __future__ import annotations

from datetime import date, datetime

import pytest

from app.application.dto.booking_request import BookingRequest
from app.application.exceptions import (
    AlreadyCancelled,
    ClosedDay,
    InvalidInterval,
    InvalidTransition,
    OutsideWorkingHours,
    PastDate,
    SlotConflict,
    UnknownService,
)
from app.domain.entities.booking import BookingStatus, transition
from app.domain.entities.service_catalog import DEFAULT_DURATION_MINUTES

from conftest import FIXED_NOW, SUNDAY, WEDNESDAY, make_booking


def _request(time: str = "10:00", service: str = "classic", day=WEDNESDAY, **kwargs) -> BookingRequest:
    return BookingRequest(
        day=day,
        time=time,
        service_code=service,
        client_name="  Anna ",
        phone="+7 912 345-67-89",
        **kwargs,
    )


def test_book_uses_catalog_duration(booking_service):
    booking = booking_service.book(_request(service="apparatus")).unwrap()
    assert booking.interval.duration_minutes == 90
    assert booking.status == BookingStatus.confirmed
    assert booking.created_at == FIXED_NOW
    assert booking.client_name == "Anna"


def test_service_without_duration_defaults_to_an_hour(booking_service):
    booking = booking_service.book(_request(service="design")).unwrap()
    assert booking.interval.duration_minutes == DEFAULT_DURATION_MINUTES == 60


def test_explicit_duration_overrides_catalog(booking_service):
    booking = booking_service.book(_request(duration_minutes=30)).unwrap()
    assert booking.interval.duration_minutes == 30


def test_zero_duration_is_rejected(booking_service):
    result = booking_service.book(_request(duration_minutes=0))
    assert isinstance(result.error, InvalidInterval)


def test_unknown_service_rejected(booking_service):
    result = booking_service.book(_request(service="pedicure"))
    assert isinstance(result.error, UnknownService)


def test_malformed_time_rejected(booking_service):
    result = booking_service.book(_request(time="25:99"))
    assert isinstance(result.error, InvalidInterval)


def test_sunday_booking_rejected(booking_service):
    result = booking_service.book(_request(day=SUNDAY))
    assert isinstance(result.error, ClosedDay)


@pytest.mark.parametrize("time", ["08:30", "13:00", "13:30", "20:30", "21:00", "10:17", "09:45"])
def test_outside_working_hours_rejected(booking_service, time):
    result = booking_service.book(_request(time=time))
    assert isinstance(result.error, OutsideWorkingHours)


def test_off_grid_start_leaves_grid_untouched(booking_service):
    assert not booking_service.book(_request(time="10:17")).ok
    listing = booking_service.available_slots(WEDNESDAY, service_code="classic")
    assert all(slot.available for slot in listing.slots)


def test_past_date_rejected(booking_service, repository):
    result = booking_service.book(_request(day=date(2020, 1, 8)))
    assert isinstance(result.error, PastDate)
    assert repository.load() == []


def test_booking_for_today_is_accepted(booking_service):
    assert booking_service.book(_request(day=FIXED_NOW.date())).ok


def test_booking_accepts_string_dates(booking_service):
    booking = booking_service.book(_request(day="2024-01-10")).unwrap()
    assert booking.day == WEDNESDAY


def test_conflicting_request_reported(booking_service):
    booking_service.book(_request(time="10:00")).unwrap()
    result = booking_service.book(_request(time="10:30", duration_minutes=30))
    assert isinstance(result.error, SlotConflict)


def test_available_slots_reflect_bookings(booking_service):
    booking_service.book(_request(time="10:00"))
    listing = booking_service.available_slots(WEDNESDAY, service_code="classic")
    availability = {slot.time: slot.available for slot in listing.slots}
    assert availability["09:00"] is True
    assert availability["09:30"] is False
    assert availability["10:00"] is False
    assert availability["11:00"] is True


def test_available_slots_on_sunday_are_closed(booking_service):
    listing = booking_service.available_slots(SUNDAY, service_code="classic")
    assert listing.closed
    assert listing.slots == []


def test_cancel_then_rebook_same_time(booking_service):
    first = booking_service.book(_request()).unwrap()
    assert booking_service.cancel(first.id).ok
    assert booking_service.book(_request()).ok
    assert len(booking_service.list_active(WEDNESDAY)) == 1


def test_booking_ids_are_unique(booking_service):
    ids = {booking_service.book(_request(time=t, duration_minutes=30)).unwrap().id for t in ("09:00", "09:30", "10:00")}
    assert len(ids) == 3


def test_lifecycle_has_no_way_back_from_cancelled():
    cancelled = transition(make_booking(), BookingStatus.cancelled, datetime(2024, 1, 9, 13, 0))
    with pytest.raises(AlreadyCancelled):
        transition(cancelled, BookingStatus.cancelled, datetime(2024, 1, 9, 14, 0))
    with pytest.raises(InvalidTransition):
        transition(cancelled, BookingStatus.confirmed, datetime(2024, 1, 9, 14, 0))
