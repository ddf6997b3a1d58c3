class SchedulingError(Exception):
    """Base class for business-rule failures. Returned as result values by the ledger."""

    code = "scheduling_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidInterval(SchedulingError, ValueError):
    """Raised when a time interval has a non-positive duration or a malformed time."""

    code = "invalid_interval"


class InvalidCalendarConfig(SchedulingError, ValueError):
    """Raised when working hours, break window or granularity are inconsistent."""

    code = "invalid_calendar_config"


class UnknownService(SchedulingError, ValueError):
    code = "unknown_service"


class ClosedDay(SchedulingError):
    """The requested date falls on the weekly day off."""

    code = "closed_day"


class PastDate(SchedulingError):
    code = "past_date"


class OutsideWorkingHours(SchedulingError):
    """The requested start is off the slot grid, outside opening hours or inside the break."""

    code = "outside_working_hours"


class SlotConflict(SchedulingError):
    """The requested interval overlaps a confirmed booking. Re-query slots and retry."""

    code = "slot_conflict"


class DuplicateBooking(SchedulingError):
    code = "duplicate_booking"


class BookingNotFound(SchedulingError):
    code = "not_found"


class AlreadyCancelled(SchedulingError):
    code = "already_cancelled"


class InvalidTransition(SchedulingError):
    code = "invalid_transition"


class BookingStoreError(RuntimeError):
    """Raised when the booking repository cannot be read or written (try again later)."""
    pass


class NotificationDeliveryFailed(RuntimeError):
    """Raised by notifier adapters when a message could not be delivered."""
    pass
