from __future__ import annotations

from dataclasses import dataclass

from app.application.exceptions import InvalidCalendarConfig

# date.weekday() value of the weekly day off (Sunday).
CLOSED_WEEKDAY = 6


@dataclass(frozen=True)
class CalendarConfig:
    work_start: int = 9
    work_end: int = 21
    break_start: int = 13
    break_end: int = 14
    slot_granularity_minutes: int = 30

    def __post_init__(self) -> None:
        if not 0 <= self.work_start < self.work_end <= 24:
            raise InvalidCalendarConfig(
                f"working hours must satisfy 0 <= start < end <= 24, got {self.work_start}-{self.work_end}"
            )
        if not self.work_start <= self.break_start <= self.break_end <= self.work_end:
            raise InvalidCalendarConfig(
                f"break {self.break_start}-{self.break_end} must lie within working hours "
                f"{self.work_start}-{self.work_end}"
            )
        if self.slot_granularity_minutes <= 0:
            raise InvalidCalendarConfig("slot granularity must be a positive number of minutes")

    @property
    def opening_minute(self) -> int:
        return self.work_start * 60

    @property
    def closing_minute(self) -> int:
        return self.work_end * 60

    @property
    def break_start_minute(self) -> int:
        return self.break_start * 60

    @property
    def break_end_minute(self) -> int:
        return self.break_end * 60

    def in_break(self, minute_of_day: int) -> bool:
        return self.break_start_minute <= minute_of_day < self.break_end_minute
