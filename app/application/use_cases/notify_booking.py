from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from app.application.exceptions import NotificationDeliveryFailed
from app.application.ports.notifier import BookingNotifierPort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.utils.booking_message import format_booking_message
from app.domain.entities.booking import Booking


class NotifyBookingUseCase:
    def __init__(self, notifier: BookingNotifierPort, catalog: ServiceCatalogPort) -> None:
        self._notifier = notifier
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    def execute(self, booking: Booking) -> bool:
        """Send the booking summary. Returns True if delivered, False if delivery failed."""
        text = format_booking_message(booking, self._catalog)
        try:
            self._notifier.send(text)
        except NotificationDeliveryFailed as e:
            self._logger.warning(
                "Booking notification not delivered",
                extra={"booking_id": booking.id, "error": str(e)},
            )
            return False
        self._logger.info("Booking notification sent", extra={"booking_id": booking.id})
        return True


class NotificationDispatcher:
    """Post-commit hook that hands notifications to a worker pool."""

    def __init__(self, use_case: NotifyBookingUseCase, max_workers: int = 2) -> None:
        self._use_case = use_case
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify")
        self._logger = logging.getLogger(__name__)

    def __call__(self, booking: Booking) -> Future:
        future = self._executor.submit(self._use_case.execute, booking)
        future.add_done_callback(self._log_crash)
        return future

    def _log_crash(self, future: Future) -> None:
        error = future.exception()
        if error is not None:
            self._logger.error(
                "Notification worker crashed", extra={"error": f"{type(error).__name__}: {error}"}
            )

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
