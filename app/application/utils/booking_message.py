from __future__ import annotations

from datetime import date, datetime

from app.application.exceptions import UnknownService
from app.application.ports.service_catalog import ServiceCatalogPort
from app.domain.entities.booking import Booking


def format_long_date(day: date) -> str:
    return day.strftime("%A, %d %B %Y")


def format_timestamp(moment: datetime) -> str:
    return moment.strftime("%d.%m.%Y, %H:%M:%S")


def service_display_name(service_code: str, catalog: ServiceCatalogPort) -> str:
    try:
        return catalog.get_service(service_code).display_name
    except UnknownService:
        return "Service"


def format_booking_message(booking: Booking, catalog: ServiceCatalogPort) -> str:
    """Build the new-booking summary sent to the studio."""
    lines = [
        "New appointment booked!",
        "",
        f"Client: {booking.client_name}",
        f"Phone: {booking.phone}",
    ]
    if booking.email:
        lines.append(f"Email: {booking.email}")
    lines += [
        f"Service: {service_display_name(booking.service_code, catalog)}",
        f"Date: {format_long_date(booking.day)}",
        f"Time: {booking.interval.time} ({booking.interval.duration_minutes} min)",
    ]
    if booking.notes:
        lines.append(f"Notes: {booking.notes}")
    lines += [
        f"Booking ID: {booking.id}",
        f"Created: {format_timestamp(booking.created_at)}",
    ]
    return "\n".join(lines)
