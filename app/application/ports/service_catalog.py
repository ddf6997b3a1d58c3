from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.service_catalog import ServiceCatalogEntry, ServiceCode


class ServiceCatalogPort(ABC):
    @abstractmethod
    def get_service(self, code: ServiceCode | str) -> ServiceCatalogEntry:
        """Get service entry by code. Raises UnknownService for codes outside the catalog."""
        raise NotImplementedError

    @abstractmethod
    def get_duration_minutes(self, code: ServiceCode | str | None) -> int:
        """Get service duration in minutes, falling back to the default duration."""
        raise NotImplementedError

    @abstractmethod
    def list_services(self) -> list[ServiceCatalogEntry]:
        raise NotImplementedError
