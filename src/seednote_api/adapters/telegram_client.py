"""Telegram Bot API client adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class TelegramApiError(RuntimeError):
    """Telegram answered a request with ``ok: false``."""

    def __init__(self, method: str, payload: dict[str, object]) -> None:
        self.method = method
        self.payload = payload
        description = payload.get("description") or "unknown error"
        super().__init__(f"Telegram {method} failed: {description}")


class TelegramClient(Protocol):
    """Interface for Telegram API interactions."""

    async def send_message(
        self,
        chat_id: int | str,
        text: str,
        disable_web_page_preview: bool | None = None,
    ) -> dict[str, object]:
        """Send a text message to a Telegram chat."""

    async def send_document(
        self, chat_id: int | str, document: str, caption: str | None = None
    ) -> dict[str, object]:
        """Send a document by file id or URL to a Telegram chat."""


@dataclass
class HttpxTelegramClient:
    """Telegram client implemented with httpx."""

    bot_token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, bot_token: str) -> "HttpxTelegramClient":
        """Create a Telegram client with a managed httpx session."""
        return cls(bot_token=bot_token, http_client=httpx.AsyncClient())

    async def send_message(
        self,
        chat_id: int | str,
        text: str,
        disable_web_page_preview: bool | None = None,
    ) -> dict[str, object]:
        """Send a message using Telegram's sendMessage API."""
        payload: dict[str, object] = {"chat_id": chat_id, "text": text}
        if disable_web_page_preview is not None:
            payload["disable_web_page_preview"] = disable_web_page_preview
        return await self._call("sendMessage", payload, timeout=10)

    async def send_document(
        self, chat_id: int | str, document: str, caption: str | None = None
    ) -> dict[str, object]:
        """Send a document using Telegram's sendDocument API."""
        payload: dict[str, object] = {"chat_id": chat_id, "document": document}
        if caption is not None:
            payload["caption"] = caption
        return await self._call("sendDocument", payload, timeout=30)

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _call(
        self, method: str, payload: dict[str, object], timeout: float
    ) -> dict[str, object]:
        url = f"https://api.telegram.org/bot{self.bot_token}/{method}"
        response = await self.http_client.post(url, json=payload, timeout=timeout)
        if response.is_server_error:
            response.raise_for_status()
        # Telegram reports client errors as JSON with ok=false.
        body = response.json()
        if not body.get("ok"):
            raise TelegramApiError(method, body)
        return body.get("result") or {}
