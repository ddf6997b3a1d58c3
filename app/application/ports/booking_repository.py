from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from app.domain.entities.booking import Booking


class BookingRepositoryPort(ABC):
    @abstractmethod
    def load(self) -> list[Booking]:
        """Return the full booking collection, including cancelled records.

        Raises BookingStoreError if the store cannot be read.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, bookings: Sequence[Booking]) -> None:
        """Replace the stored collection. Raises BookingStoreError on failure."""
        raise NotImplementedError
