import re
import datetime as dt

from pydantic import BaseModel, Field, field_validator

from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.service_catalog import ServiceCatalogEntry, ServiceCode
from app.domain.entities.slot import SlotListing

# Russian mobile numbers: optional +, leading 7 or 8, ten more digits with optional separators.
PHONE_PATTERN = re.compile(r"^[+]?[78][-\s]?\(?\d{3}\)?[-\s]?\d{3}[-\s]?\d{2}[-\s]?\d{2}$")


class BookingCreateSchema(BaseModel):
    date: dt.date
    time: str = Field(pattern=r"^\d{2}:\d{2}$")
    service: ServiceCode
    name: str = Field(min_length=1, max_length=200)
    phone: str
    email: str | None = None
    notes: str = Field(default="", max_length=2000)
    duration: int | None = Field(default=None, gt=0)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: str) -> str:
        if not PHONE_PATTERN.match(re.sub(r"\s", "", value)):
            raise ValueError("invalid phone number")
        return value.strip()


class BookingSchema(BaseModel):
    id: str
    date: dt.date
    time: str
    duration: int
    service: str
    name: str
    phone: str
    email: str | None = None
    notes: str = ""
    status: BookingStatus
    created_at: dt.datetime
    cancelled_at: dt.datetime | None = None

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingSchema":
        return cls(
            id=booking.id,
            date=booking.day,
            time=booking.interval.time,
            duration=booking.interval.duration_minutes,
            service=booking.service_code,
            name=booking.client_name,
            phone=booking.phone,
            email=booking.email,
            notes=booking.notes,
            status=booking.status,
            created_at=booking.created_at,
            cancelled_at=booking.cancelled_at,
        )


class SlotSchema(BaseModel):
    time: str
    duration: int
    available: bool


class SlotListingSchema(BaseModel):
    date: dt.date
    duration: int
    closed: bool
    slots: list[SlotSchema] = Field(default_factory=list)

    @classmethod
    def from_listing(cls, listing: SlotListing) -> "SlotListingSchema":
        return cls(
            date=listing.day,
            duration=listing.duration_minutes,
            closed=listing.closed,
            slots=[
                SlotSchema(time=s.time, duration=s.duration_minutes, available=s.available)
                for s in listing.slots
            ],
        )


class ServiceSchema(BaseModel):
    code: ServiceCode
    name: str
    price: int
    price_is_minimum: bool
    duration: int

    @classmethod
    def from_entry(cls, entry: ServiceCatalogEntry) -> "ServiceSchema":
        return cls(
            code=entry.code,
            name=entry.display_name,
            price=entry.price,
            price_is_minimum=entry.price_is_minimum,
            duration=entry.effective_duration,
        )


class ClearResponseSchema(BaseModel):
    removed: int
