from __future__ import annotations

from app.application.ports.notifier import BookingNotifierPort
from app.infrastructure.telegram.telegram_client import TelegramClient


class TelegramNotifier(BookingNotifierPort):
    def __init__(self, client: TelegramClient, chat_id: str) -> None:
        self._client = client
        self._chat_id = chat_id

    def send(self, text: str) -> None:
        self._client.send_message(chat_id=self._chat_id, text=text)
