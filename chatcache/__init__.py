"""Entity materialization and caching for a chat-platform client.

The package exposes the entity models, the per-kind caches and the event
handlers so that consumers can simply import them from ``chatcache``.
"""

from .core.cache import CacheRegistry, EntityCache
from .core.component import Component, ComponentStyle, ComponentType
from .core.embed import Embed
from .core.errors import MalformedValueError, MissingFieldError, PayloadError
from .core.message import CachePolicy, Message, MessageFlags, MessageType
from .core.models import Channel, Guild, GuildMember, Role, User
from .events import dispatch, handle_guild_create, handle_message_create

__all__ = [
    "CacheRegistry",
    "EntityCache",
    "Component",
    "ComponentStyle",
    "ComponentType",
    "Embed",
    "MalformedValueError",
    "MissingFieldError",
    "PayloadError",
    "CachePolicy",
    "Message",
    "MessageFlags",
    "MessageType",
    "Channel",
    "Guild",
    "GuildMember",
    "Role",
    "User",
    "dispatch",
    "handle_guild_create",
    "handle_message_create",
]
