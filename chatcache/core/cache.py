"""In-memory entity caches keyed by snowflake.

Each :class:`EntityCache` is the sole owner of the entities stored in it.
Other entities refer to cached ones by ID and resolve them through the
cache at the point of use, so a replaced or removed entity never lingers
behind a stale reference.
"""

from __future__ import annotations

import logging
import threading
from typing import Generic, Protocol, TypeVar

from .message import Message
from .models import Channel, Guild, Role, User

log = logging.getLogger("chatcache.cache")


class Identified(Protocol):
    id: int


T = TypeVar("T", bound=Identified)


class EntityCache(Generic[T]):
    """Thread-safe mapping of snowflake to one kind of entity."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._entities: dict[int, T] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    def store(self, entity: T) -> None:
        """Insert ``entity`` under its own ID, replacing any previous entry."""
        with self._lock:
            replaced = entity.id in self._entities
            self._entities[entity.id] = entity
        log.debug("%s %d %s", self.kind, entity.id, "replaced" if replaced else "stored")

    def fetch(self, entity_id: int) -> T | None:
        """Return the entity stored under ``entity_id`` or ``None`` on a miss."""
        with self._lock:
            return self._entities.get(entity_id)

    def remove(self, entity_id: int) -> T | None:
        """Erase ``entity_id`` and hand the released entity back, if any."""
        with self._lock:
            return self._entities.pop(entity_id, None)

    # ------------------------------------------------------------------
    def ids(self) -> list[int]:
        """Snapshot of the IDs currently stored."""
        with self._lock:
            return list(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        with self._lock:
            return entity_id in self._entities

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)

    def __repr__(self) -> str:
        return f"<EntityCache {self.kind} size={len(self)}>"


class CacheRegistry:
    """One cache per entity kind, owned by a client session.

    The registry is passed explicitly to the event handlers and to
    :meth:`Message.fill_from_json` instead of living in module globals.
    """

    def __init__(self) -> None:
        self.guilds: EntityCache[Guild] = EntityCache("guild")
        self.roles: EntityCache[Role] = EntityCache("role")
        self.channels: EntityCache[Channel] = EntityCache("channel")
        self.users: EntityCache[User] = EntityCache("user")
        self.messages: EntityCache[Message] = EntityCache("message")

    def sizes(self) -> dict[str, int]:
        return {
            "guilds": len(self.guilds),
            "roles": len(self.roles),
            "channels": len(self.channels),
            "users": len(self.users),
            "messages": len(self.messages),
        }
