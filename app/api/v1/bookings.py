import datetime as dt
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.api.v1.schemas import (
    BookingCreateSchema,
    BookingSchema,
    ClearResponseSchema,
    ServiceSchema,
    SlotListingSchema,
)
from app.application.dto.booking_request import BookingRequest
from app.application.exceptions import (
    AlreadyCancelled,
    BookingNotFound,
    BookingStoreError,
    DuplicateBooking,
    InvalidTransition,
    SchedulingError,
    SlotConflict,
)
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.use_cases.booking_ledger import LedgerResult
from app.application.use_cases.booking_service import BookingService
from app.wiring.dependencies import get_booking_service, get_service_catalog

router = APIRouter()
logger = logging.getLogger(__name__)

STORE_UNAVAILABLE = "Booking storage is unavailable, try again later"


def _error_status(error: SchedulingError) -> int:
    if isinstance(error, BookingNotFound):
        return 404
    if isinstance(error, (SlotConflict, DuplicateBooking, AlreadyCancelled, InvalidTransition)):
        return 409
    return 422


def _unwrap(result: LedgerResult) -> BookingSchema:
    if result.error is not None:
        raise HTTPException(
            status_code=_error_status(result.error),
            detail={"code": result.error.code, "message": result.error.message},
        )
    return BookingSchema.from_booking(result.unwrap())


@router.get("/services", response_model=list[ServiceSchema])
def list_services(catalog: ServiceCatalogPort = Depends(get_service_catalog)):
    return [ServiceSchema.from_entry(entry) for entry in catalog.list_services()]


@router.get("/slots", response_model=SlotListingSchema)
def get_slots(
    date: dt.date,
    service: str | None = None,
    duration: int | None = Query(None, gt=0),
    uc: BookingService = Depends(get_booking_service),
):
    try:
        listing = uc.available_slots(date, service_code=service, duration_minutes=duration)
    except SchedulingError as e:
        raise HTTPException(status_code=422, detail={"code": e.code, "message": e.message})
    except BookingStoreError as e:
        logger.error("Slot lookup failed", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail=STORE_UNAVAILABLE)
    return SlotListingSchema.from_listing(listing)


@router.post("/bookings", response_model=BookingSchema, status_code=201)
def create_booking(
    req: BookingCreateSchema,
    uc: BookingService = Depends(get_booking_service),
):
    request = BookingRequest(
        day=req.date,
        time=req.time,
        service_code=req.service.value,
        client_name=req.name,
        phone=req.phone,
        email=req.email,
        notes=req.notes,
        duration_minutes=req.duration,
    )
    try:
        result = uc.book(request)
    except BookingStoreError as e:
        logger.error("Booking not stored", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail=STORE_UNAVAILABLE)
    return _unwrap(result)


@router.get("/bookings", response_model=list[BookingSchema])
def list_bookings(
    date: dt.date | None = None,
    uc: BookingService = Depends(get_booking_service),
):
    try:
        bookings = uc.list_active(date)
    except BookingStoreError as e:
        logger.error("Booking listing failed", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail=STORE_UNAVAILABLE)
    return [BookingSchema.from_booking(b) for b in bookings]


@router.get("/bookings/export")
def export_bookings(uc: BookingService = Depends(get_booking_service)) -> Response:
    try:
        export = uc.export()
    except BookingStoreError as e:
        logger.error("Export failed", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail=STORE_UNAVAILABLE)
    return Response(
        content=export.content,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post("/bookings/{booking_id}/cancel", response_model=BookingSchema)
def cancel_booking(booking_id: str, uc: BookingService = Depends(get_booking_service)):
    try:
        result = uc.cancel(booking_id)
    except BookingStoreError as e:
        logger.error("Cancellation not stored", extra={"booking_id": booking_id, "error": str(e)})
        raise HTTPException(status_code=503, detail=STORE_UNAVAILABLE)
    return _unwrap(result)


@router.delete("/bookings", response_model=ClearResponseSchema)
def clear_bookings(
    confirm: bool = False,
    uc: BookingService = Depends(get_booking_service),
):
    if not confirm:
        raise HTTPException(status_code=400, detail="Pass confirm=true to delete every booking")
    try:
        removed = uc.clear_all()
    except BookingStoreError as e:
        logger.error("Bulk clear failed", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail=STORE_UNAVAILABLE)
    return ClearResponseSchema(removed=removed)
