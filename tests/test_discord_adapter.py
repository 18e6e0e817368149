"""Tests for the :mod:`chatcache.adapters.discord` module."""

import asyncio
import json
from typing import Any

import httpx

from chatcache.adapters.discord import DiscordAdapter
from chatcache.core.cache import CacheRegistry
from chatcache.core.message import Message


def run(coro: Any) -> Any:
    """Run an async coroutine synchronously for tests."""
    return asyncio.run(coro)


def test_send_message_posts_built_json() -> None:
    """``send_message`` posts the built body and caches the response."""
    captured: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "id": "123",
                "channel_id": body["channel_id"],
                "content": body["content"],
                "author": {"id": "7", "username": "bot", "bot": True},
            },
        )

    caches = CacheRegistry()

    async def scenario() -> Message:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        adapter = DiscordAdapter("TOKEN", caches, client=client)
        try:
            return await adapter.send_message(Message.create(20, "hello"))
        finally:
            await adapter.close()

    sent = run(scenario())

    request = captured["request"]
    assert request.headers["Authorization"] == "Bot TOKEN"
    assert request.url.path.endswith("/channels/20/messages")
    assert json.loads(request.content)["content"] == "hello"
    assert sent.id == 123
    assert caches.messages.fetch(123) is sent
    assert caches.users.fetch(7).bot is True
