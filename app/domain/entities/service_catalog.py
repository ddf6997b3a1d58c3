from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Used when a service (or a stored record) carries no duration.
DEFAULT_DURATION_MINUTES = 60


class ServiceCode(str, Enum):
    classic = "classic"
    apparatus = "apparatus"
    gel = "gel"
    design = "design"


@dataclass(frozen=True)
class ServiceCatalogEntry:
    code: ServiceCode
    display_name: str
    price: int
    duration_minutes: int | None = None
    price_is_minimum: bool = False

    @property
    def effective_duration(self) -> int:
        return self.duration_minutes or DEFAULT_DURATION_MINUTES
