#!/usr/bin/env python3
"""
Local scheduling harness (no HTTP).

Usage:
  python3 scripts/schedule_local.py slots 2024-01-10 --service classic
  python3 scripts/schedule_local.py book 2024-01-10 10:00 classic "Anna" "+7 912 345-67-89"
  python3 scripts/schedule_local.py list [--date 2024-01-10]
  python3 scripts/schedule_local.py cancel <booking_id>
  python3 scripts/schedule_local.py export

Uses the same wiring as the API, so STORE_PROVIDER / BOOKINGS_FILE from .env apply.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv()

from app.application.dto.booking_request import BookingRequest  # noqa: E402
from app.application.use_cases.booking_ledger import LedgerResult  # noqa: E402
from app.wiring.dependencies import get_booking_service, get_notification_dispatcher  # noqa: E402


def _print_result(result: LedgerResult) -> int:
    if result.error is not None:
        print(f"ERROR [{result.error.code}]: {result.error.message}")
        return 1
    booking = result.unwrap()
    print(f"{booking.id}: {booking.day} {booking.interval.time} ({booking.interval.duration_minutes} min) -> {booking.status.value}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Local appointment scheduler")
    sub = parser.add_subparsers(dest="command", required=True)

    p_slots = sub.add_parser("slots", help="show slots for a date")
    p_slots.add_argument("date", type=date.fromisoformat)
    p_slots.add_argument("--service")
    p_slots.add_argument("--duration", type=int)

    p_book = sub.add_parser("book", help="create a booking")
    p_book.add_argument("date")
    p_book.add_argument("time")
    p_book.add_argument("service")
    p_book.add_argument("name")
    p_book.add_argument("phone")
    p_book.add_argument("--email")
    p_book.add_argument("--notes", default="")

    p_list = sub.add_parser("list", help="list active bookings")
    p_list.add_argument("--date", type=date.fromisoformat)

    p_cancel = sub.add_parser("cancel", help="cancel a booking")
    p_cancel.add_argument("booking_id")

    sub.add_parser("export", help="print the JSON export")

    args = parser.parse_args(argv)
    service = get_booking_service()

    try:
        if args.command == "slots":
            listing = service.available_slots(args.date, args.service, args.duration)
            if listing.closed:
                print(f"{args.date} is a day off")
                return 0
            for slot in listing.slots:
                print(f"{slot.time} ({slot.duration_minutes} min) {'free' if slot.available else 'taken'}")
            print(f"{len(listing.available_slots)} of {len(listing.slots)} slots free")
            return 0

        if args.command == "book":
            request = BookingRequest(
                day=args.date,
                time=args.time,
                service_code=args.service,
                client_name=args.name,
                phone=args.phone,
                email=args.email,
                notes=args.notes,
            )
            return _print_result(service.book(request))

        if args.command == "list":
            for booking in service.list_active(args.date):
                print(f"{booking.id}: {booking.day} {booking.interval.time} {booking.service_code} {booking.client_name}")
            return 0

        if args.command == "cancel":
            return _print_result(service.cancel(args.booking_id))

        export = service.export()
        print(f"# {export.filename}")
        print(export.content)
        return 0
    finally:
        get_notification_dispatcher().shutdown(wait=True)


if __name__ == "__main__":
    sys.exit(main())
