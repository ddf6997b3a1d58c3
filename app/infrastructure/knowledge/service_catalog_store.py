from __future__ import annotations

from app.application.exceptions import UnknownService
from app.application.ports.service_catalog import ServiceCatalogPort
from app.domain.entities.service_catalog import (
    DEFAULT_DURATION_MINUTES,
    ServiceCatalogEntry,
    ServiceCode,
)
from app.infrastructure.knowledge.service_catalog_data import SERVICE_CATALOG


def parse_service_code(code: ServiceCode | str) -> ServiceCode:
    if isinstance(code, ServiceCode):
        return code
    try:
        return ServiceCode(code.lower().strip())
    except (AttributeError, ValueError):
        raise UnknownService(f"unknown service {code!r}") from None


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, catalog: dict[ServiceCode, ServiceCatalogEntry] | None = None) -> None:
        self._catalog = catalog or SERVICE_CATALOG

    def get_service(self, code: ServiceCode | str) -> ServiceCatalogEntry:
        entry = self._catalog.get(parse_service_code(code))
        if entry is None:
            raise UnknownService(f"service {code!r} is not offered")
        return entry

    def get_duration_minutes(self, code: ServiceCode | str | None) -> int:
        if not code:
            return DEFAULT_DURATION_MINUTES
        return self.get_service(code).effective_duration

    def list_services(self) -> list[ServiceCatalogEntry]:
        return list(self._catalog.values())
