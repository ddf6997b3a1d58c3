from __future__ import annotations

import logging

from app.application.ports.notifier import BookingNotifierPort


class MockNotifier(BookingNotifierPort):
    """Used when Telegram is not configured: nothing is sent or kept."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def send(self, text: str) -> None:
        self._logger.debug("Telegram not configured, notification skipped")
