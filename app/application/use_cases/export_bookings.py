from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date

from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.utils.booking_records import booking_to_record


@dataclass(frozen=True)
class BookingExport:
    filename: str
    content: str


class ExportBookingsUseCase:
    def __init__(self, repository: BookingRepositoryPort) -> None:
        self._repository = repository

    def execute(self, today: date | None = None) -> BookingExport:
        """Serialize every booking, cancelled ones included, to a date-stamped JSON document."""
        today = today or date.today()
        records = [booking_to_record(booking) for booking in self._repository.load()]
        return BookingExport(
            filename=f"appointments-{today.isoformat()}.json",
            content=json.dumps(records, indent=2, ensure_ascii=False),
        )
