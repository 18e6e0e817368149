"""Base adapter interface for the outbound transport."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.message import Message


class Adapter(ABC):
    """Abstract adapter handing built payloads to a platform."""

    @abstractmethod
    async def send_message(self, message: Message) -> Message:
        """Send ``message`` and return the message the platform created."""
