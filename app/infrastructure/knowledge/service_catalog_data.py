from __future__ import annotations

from app.domain.entities.service_catalog import ServiceCatalogEntry, ServiceCode

SERVICE_CATALOG: dict[ServiceCode, ServiceCatalogEntry] = {
    ServiceCode.classic: ServiceCatalogEntry(
        code=ServiceCode.classic,
        display_name="Classic manicure",
        price=1500,
        duration_minutes=60,
    ),
    ServiceCode.apparatus: ServiceCatalogEntry(
        code=ServiceCode.apparatus,
        display_name="Apparatus manicure",
        price=2000,
        duration_minutes=90,
    ),
    ServiceCode.gel: ServiceCatalogEntry(
        code=ServiceCode.gel,
        display_name="Gel polish coating",
        price=1200,
        duration_minutes=90,
    ),
    # Design work varies per client; no fixed duration, the default applies.
    ServiceCode.design: ServiceCatalogEntry(
        code=ServiceCode.design,
        display_name="Nail design",
        price=500,
        duration_minutes=None,
        price_is_minimum=True,
    ),
}
