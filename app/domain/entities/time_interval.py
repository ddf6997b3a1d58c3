from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from app.application.exceptions import InvalidInterval

MINUTES_PER_DAY = 24 * 60


def ranges_overlap(start: int, end: int, other_start: int, other_end: int) -> bool:
    """Half-open [start, end) ranges intersect. Empty ranges never overlap anything."""
    if end <= start or other_end <= other_start:
        return False
    return start < other_end and other_start < end


def parse_hhmm(value: str) -> int:
    """Parse "HH:MM" into minute-of-day."""
    try:
        hours_str, minutes_str = value.strip().split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (AttributeError, ValueError):
        raise InvalidInterval(f"malformed time {value!r}, expected HH:MM") from None
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise InvalidInterval(f"time {value!r} is out of range")
    return hours * 60 + minutes


def format_hhmm(minute_of_day: int) -> str:
    return f"{minute_of_day // 60:02d}:{minute_of_day % 60:02d}"


@dataclass(frozen=True)
class TimeInterval:
    day: date
    start_minute: int
    duration_minutes: int

    def __post_init__(self) -> None:
        if not isinstance(self.start_minute, int) or not 0 <= self.start_minute < MINUTES_PER_DAY:
            raise InvalidInterval(f"start minute {self.start_minute!r} is not a valid time of day")
        if not isinstance(self.duration_minutes, int) or self.duration_minutes <= 0:
            raise InvalidInterval(f"duration must be a positive number of minutes, got {self.duration_minutes!r}")

    @classmethod
    def parse(cls, day: str | date, time: str, duration_minutes: int) -> TimeInterval:
        """Build an interval from boundary strings ("YYYY-MM-DD", "HH:MM")."""
        if isinstance(day, str):
            try:
                day = date.fromisoformat(day)
            except ValueError:
                raise InvalidInterval(f"malformed date {day!r}, expected YYYY-MM-DD") from None
        return cls(day=day, start_minute=parse_hhmm(time), duration_minutes=duration_minutes)

    @property
    def end_minute(self) -> int:
        return self.start_minute + self.duration_minutes

    @property
    def time(self) -> str:
        return format_hhmm(self.start_minute)

    @property
    def sort_key(self) -> tuple[date, int]:
        return (self.day, self.start_minute)

    def overlaps(self, other: TimeInterval) -> bool:
        if self.day != other.day:
            return False
        return ranges_overlap(self.start_minute, self.end_minute, other.start_minute, other.end_minute)


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    return a.overlaps(b)
