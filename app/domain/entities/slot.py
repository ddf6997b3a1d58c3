from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from app.domain.entities.time_interval import format_hhmm


@dataclass(frozen=True)
class Slot:
    start_minute: int
    duration_minutes: int
    available: bool

    @property
    def time(self) -> str:
        return format_hhmm(self.start_minute)


@dataclass(frozen=True)
class SlotListing:
    day: date
    duration_minutes: int
    slots: list[Slot] = field(default_factory=list)
    closed: bool = False  # weekly day off, nothing was generated

    @property
    def available_slots(self) -> list[Slot]:
        return [slot for slot in self.slots if slot.available]
