from __future__ import annotations

import json
import logging
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from app.application.exceptions import BookingStoreError
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.utils.booking_records import booking_from_record, booking_to_record
from app.domain.entities.booking import Booking


class JsonBookingRepository(BookingRepositoryPort):
    """Stores the whole booking collection in one JSON file, rewritten atomically on save."""

    def __init__(self, file_path: str = "./data/bookings.json") -> None:
        self._file_path = Path(file_path)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _load_records(self) -> list[dict[str, Any]]:
        """Load raw records from the JSON file, empty if the file does not exist yet."""
        if not self._file_path.exists():
            return []

        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self._logger.exception("Failed to read bookings file", extra={"error": str(e)})
            raise BookingStoreError(f"cannot read {self._file_path}: {e}") from e

        # Accept both a bare list and {"bookings": [...]}.
        if isinstance(data, dict):
            data = data.get("bookings", [])
        if not isinstance(data, list):
            raise BookingStoreError(f"{self._file_path} does not contain a booking list")
        return data

    def _save_records(self, records: list[dict[str, Any]]) -> None:
        """Save records to the JSON file atomically."""
        temp_path = self._file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except OSError as e:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass
            self._logger.exception("Failed to write bookings file", extra={"error": str(e)})
            raise BookingStoreError(f"cannot write {self._file_path}: {e}") from e

    def load(self) -> list[Booking]:
        with self._lock:
            records = self._load_records()
        try:
            return [booking_from_record(record) for record in records]
        except (KeyError, TypeError, ValueError) as e:
            raise BookingStoreError(f"malformed booking record in {self._file_path}: {e}") from e

    def save(self, bookings: Sequence[Booking]) -> None:
        records = [booking_to_record(booking) for booking in bookings]
        with self._lock:
            self._save_records(records)
