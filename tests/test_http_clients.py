"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from seednote_api.adapters.telegram_client import HttpxTelegramClient, TelegramApiError


def test_telegram_client_send_message() -> None:
    seen: list[tuple[str, dict[str, object]]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.url.path, json.loads(request.content.decode())))
        return httpx.Response(200, json={"ok": True, "result": {"message_id": 5}})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxTelegramClient(bot_token="token", http_client=async_client)

    result = asyncio.run(
        client.send_message(chat_id=1, text="Hi", disable_web_page_preview=True)
    )

    assert result == {"message_id": 5}
    path, payload = seen[0]
    assert path == "/bottoken/sendMessage"
    assert payload == {"chat_id": 1, "text": "Hi", "disable_web_page_preview": True}


def test_telegram_client_send_document() -> None:
    seen: list[tuple[str, dict[str, object]]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.url.path, json.loads(request.content.decode())))
        return httpx.Response(200, json={"ok": True, "result": {"message_id": 6}})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxTelegramClient(bot_token="token", http_client=async_client)

    asyncio.run(client.send_document(chat_id=1, document="file-id", caption="memo"))

    path, payload = seen[0]
    assert path.endswith("/sendDocument")
    assert payload == {"chat_id": 1, "document": "file-id", "caption": "memo"}


def test_telegram_client_raises_on_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400, json={"ok": False, "description": "Bad Request: chat not found"}
        )

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxTelegramClient(bot_token="token", http_client=async_client)

    with pytest.raises(TelegramApiError, match="chat not found"):
        asyncio.run(client.send_message(chat_id=1, text="Hi"))


def test_telegram_client_raises_on_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxTelegramClient(bot_token="token", http_client=async_client)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.send_message(chat_id=1, text="Hi"))
