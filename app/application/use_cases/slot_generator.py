from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from app.application.exceptions import InvalidInterval
from app.domain.entities.booking import Booking
from app.domain.entities.calendar_config import CLOSED_WEEKDAY, CalendarConfig
from app.domain.entities.slot import Slot, SlotListing
from app.domain.entities.time_interval import TimeInterval


def is_closed_day(day: date) -> bool:
    return day.weekday() == CLOSED_WEEKDAY


def fits_working_hours(start_minute: int, duration_minutes: int, config: CalendarConfig) -> bool:
    """True if a service starting at ``start_minute`` is a start the generator would emit."""
    if start_minute < config.opening_minute or start_minute >= config.closing_minute:
        return False
    if (start_minute - config.opening_minute) % config.slot_granularity_minutes:
        return False
    if config.in_break(start_minute):
        return False
    return start_minute + duration_minutes <= config.closing_minute


def generate_slots(
    day: date,
    duration_minutes: int,
    config: CalendarConfig,
    day_bookings: Iterable[Booking],
) -> SlotListing:
    """
    Enumerate candidate start times for ``day`` and mark each one available or taken.

    Candidates start at opening time and step by the configured granularity.
    Starts inside the break window, and starts whose service would end after
    closing, are omitted. Finishing exactly at closing is allowed. Only
    confirmed bookings on ``day`` occupy time. On the weekly day off the
    listing is empty and flagged ``closed``.
    """
    if duration_minutes <= 0:
        raise InvalidInterval(f"duration must be a positive number of minutes, got {duration_minutes!r}")

    if is_closed_day(day):
        return SlotListing(day=day, duration_minutes=duration_minutes, closed=True)

    occupied = [
        booking.interval for booking in day_bookings if booking.is_active and booking.day == day
    ]

    slots: list[Slot] = []
    for start in range(config.opening_minute, config.closing_minute, config.slot_granularity_minutes):
        if config.in_break(start):
            continue
        if start + duration_minutes > config.closing_minute:
            continue
        candidate = TimeInterval(day=day, start_minute=start, duration_minutes=duration_minutes)
        available = not any(candidate.overlaps(taken) for taken in occupied)
        slots.append(Slot(start_minute=start, duration_minutes=duration_minutes, available=available))

    return SlotListing(day=day, duration_minutes=duration_minutes, slots=slots)
