"""Routing of gateway envelopes to the handlers that materialize them."""

from __future__ import annotations

import logging
from typing import Any

from ..core.cache import CacheRegistry
from ..core.errors import PayloadError
from ..core.message import CachePolicy
from .guild_create import handle_guild_create
from .message_create import handle_message_create

log = logging.getLogger("chatcache.events")

__all__ = ["dispatch", "handle_guild_create", "handle_message_create"]


def dispatch(
    caches: CacheRegistry,
    envelope: dict[str, Any],
    policy: CachePolicy = CachePolicy.AGGRESSIVE,
) -> object | None:
    """Hand ``envelope`` to the handler for its event name.

    Returns the materialized entity, or ``None`` when the event is not
    handled here or its payload could not be materialized. A bad event is
    logged and dropped so that later events keep flowing.
    """
    if not isinstance(envelope, dict):
        log.error("dropping envelope that is not a JSON object: %r", envelope)
        return None
    name = envelope.get("t")
    try:
        if name == "GUILD_CREATE":
            return handle_guild_create(caches, envelope)
        if name == "MESSAGE_CREATE":
            return handle_message_create(caches, envelope, policy)
    except PayloadError as exc:
        log.error("dropping %s event: %s", name, exc)
        return None
    log.debug("ignoring %s event", name)
    return None
