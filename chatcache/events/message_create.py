"""Materialize a message event into the message cache."""

from __future__ import annotations

import logging
from typing import Any

from ..core.cache import CacheRegistry
from ..core.message import CachePolicy, Message
from ..core.wire import object_or_none

log = logging.getLogger("chatcache.events.message_create")


def handle_message_create(
    caches: CacheRegistry,
    envelope: dict[str, Any],
    policy: CachePolicy = CachePolicy.AGGRESSIVE,
) -> Message:
    data = object_or_none(envelope, "d") or {}
    message = Message().fill_from_json(data, caches, policy)
    caches.messages.store(message)
    log.debug("message %d cached in channel %d", message.id, message.channel_id)
    return message
