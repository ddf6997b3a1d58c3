from __future__ import annotations

import logging

import httpx

from app.application.exceptions import NotificationDeliveryFailed


class TelegramClient:
    def __init__(
        self,
        bot_token: str,
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._send_endpoint = f"{api_base.rstrip('/')}/bot{bot_token}/sendMessage"
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    def send_message(self, chat_id: str, text: str) -> None:
        payload = {"chat_id": chat_id, "text": text}
        try:
            resp = self._client.post(self._send_endpoint, json=payload)
        except httpx.HTTPError as e:
            self._logger.error("Telegram request failed", extra={"error": str(e)})
            raise NotificationDeliveryFailed(f"Telegram request failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if resp.status_code >= 400 or not body.get("ok", False):
            error_code = body.get("error_code", resp.status_code)
            description = body.get("description") or resp.text
            self._logger.error(
                "Telegram send failed",
                extra={
                    "error": f"{error_code}: {description}",
                    "reason": f"status={resp.status_code} text_length={len(text)}",
                },
            )
            raise NotificationDeliveryFailed(f"Telegram rejected message ({error_code}): {description}")

    def close(self) -> None:
        self._client.close()
