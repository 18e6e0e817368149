"""Discord adapter implementing the :class:`~chatcache.adapters.base.Adapter`.

The adapter only moves payloads: requests are built with
:meth:`Message.build_json` and responses are materialized through the
same ``fill_from_json`` path as gateway events, so whatever the platform
returns lands in the injected caches. Rate limiting and retries are left
to the caller.
"""

from __future__ import annotations

from typing import Any

import httpx

from ..core.cache import CacheRegistry
from ..core.message import CachePolicy, Message
from .base import Adapter


class DiscordAdapter(Adapter):
    """Adapter that sends requests directly to the Discord HTTP API."""

    api_base = "https://discord.com/api/v9"

    def __init__(
        self,
        token: str,
        caches: CacheRegistry,
        client: httpx.AsyncClient | None = None,
        policy: CachePolicy = CachePolicy.AGGRESSIVE,
    ) -> None:
        """Store authentication ``token``, target ``caches`` and HTTP ``client``."""
        self.token = token
        self.caches = caches
        self.policy = policy
        self.client = client or httpx.AsyncClient()

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bot {self.token}", "Content-Type": "application/json"}

    # ------------------------------------------------------------------
    async def send_message(self, message: Message) -> Message:
        """Post a message to its channel.

        Parameters
        ----------
        message:
            Message composed with the ``Message`` setters. Its
            ``channel_id`` selects the target channel.

        Returns the message object created by the platform, which is also
        stored in the message cache.

        """
        url = f"{self.api_base}/channels/{message.channel_id}/messages"
        response = await self.client.post(
            url, content=message.build_json(), headers=self._headers()
        )
        response.raise_for_status()
        data: dict[str, Any] = response.json()
        sent = Message().fill_from_json(data, self.caches, self.policy)
        self.caches.messages.store(sent)
        return sent

    async def close(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()
