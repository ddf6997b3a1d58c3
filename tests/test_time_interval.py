from __future__ import annotations

from datetime import date

import pytest

from app.application.exceptions import InvalidCalendarConfig, InvalidInterval
from app.domain.entities.calendar_config import CalendarConfig
from app.domain.entities.time_interval import (
    TimeInterval,
    format_hhmm,
    overlaps,
    parse_hhmm,
    ranges_overlap,
)

DAY = date(2024, 1, 10)


def _interval(time: str, duration: int, day: date = DAY) -> TimeInterval:
    return TimeInterval.parse(day, time, duration)


def test_end_minute_is_start_plus_duration():
    interval = _interval("10:00", 90)
    assert interval.start_minute == 600
    assert interval.end_minute == 690
    assert interval.time == "10:00"


def test_partial_overlap_detected_both_ways():
    a = _interval("10:00", 60)
    b = _interval("10:30", 30)
    assert overlaps(a, b)
    assert overlaps(b, a)


def test_touching_endpoints_do_not_overlap():
    """An interval ending at 11:00 and one starting at 11:00 share no minute."""
    a = _interval("10:00", 60)
    b = _interval("11:00", 30)
    assert not overlaps(a, b)
    assert not overlaps(b, a)


def test_containment_overlaps():
    outer = _interval("09:00", 180)
    inner = _interval("10:00", 30)
    assert overlaps(outer, inner)
    assert overlaps(inner, outer)


def test_same_time_on_different_days_does_not_overlap():
    assert not overlaps(_interval("10:00", 60), _interval("10:00", 60, date(2024, 1, 11)))


def test_zero_length_ranges_never_overlap():
    assert not ranges_overlap(630, 630, 600, 660)
    assert not ranges_overlap(600, 660, 630, 630)
    assert not ranges_overlap(600, 600, 600, 600)


@pytest.mark.parametrize("duration", [0, -30])
def test_non_positive_duration_rejected(duration):
    with pytest.raises(InvalidInterval):
        TimeInterval(day=DAY, start_minute=600, duration_minutes=duration)


@pytest.mark.parametrize("value", ["25:00", "10:60", "ten", "", "10-30"])
def test_malformed_time_rejected(value):
    with pytest.raises(InvalidInterval):
        parse_hhmm(value)


def test_malformed_date_rejected():
    with pytest.raises(InvalidInterval):
        TimeInterval.parse("2024-13-45", "10:00", 60)


def test_invalid_interval_is_a_value_error():
    with pytest.raises(ValueError):
        TimeInterval(day=DAY, start_minute=24 * 60, duration_minutes=30)


def test_hhmm_formatting():
    assert format_hhmm(9 * 60 + 5) == "09:05"
    assert parse_hhmm(" 19:30 ") == 19 * 60 + 30


def test_calendar_config_rejects_break_outside_working_hours():
    with pytest.raises(InvalidCalendarConfig):
        CalendarConfig(work_start=9, work_end=21, break_start=8, break_end=10)


def test_calendar_config_rejects_inverted_hours():
    with pytest.raises(InvalidCalendarConfig):
        CalendarConfig(work_start=21, work_end=9, break_start=13, break_end=14)


def test_calendar_config_rejects_non_positive_granularity():
    with pytest.raises(InvalidCalendarConfig):
        CalendarConfig(slot_granularity_minutes=0)
