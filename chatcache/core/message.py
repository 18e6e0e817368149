"""Messages and the value records embedded in them.

A message is the one entity that is both parsed from inbound events and
built for outbound requests, so it carries ``fill_from_json`` and
``build_json`` plus chainable setters for composing a reply.
"""

from __future__ import annotations

import enum
import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from .component import Component, components_from_json
from .embed import Embed
from .models import GuildMember, User
from .wire import (
    bool_not_null,
    int_not_null,
    object_list,
    object_or_none,
    snowflake_list,
    snowflake_not_null,
    snowflake_required,
    string_not_null,
    ts_not_null,
)

if TYPE_CHECKING:
    from .cache import CacheRegistry

log = logging.getLogger("chatcache.message")


class MessageType(enum.IntEnum):
    DEFAULT = 0
    RECIPIENT_ADD = 1
    RECIPIENT_REMOVE = 2
    CALL = 3
    CHANNEL_NAME_CHANGE = 4
    CHANNEL_ICON_CHANGE = 5
    CHANNEL_PINNED_MESSAGE = 6
    GUILD_MEMBER_JOIN = 7
    USER_PREMIUM_GUILD_SUBSCRIPTION = 8
    USER_PREMIUM_GUILD_SUBSCRIPTION_TIER_1 = 9
    USER_PREMIUM_GUILD_SUBSCRIPTION_TIER_2 = 10
    USER_PREMIUM_GUILD_SUBSCRIPTION_TIER_3 = 11
    CHANNEL_FOLLOW_ADD = 12
    # 13 is reserved
    GUILD_DISCOVERY_DISQUALIFIED = 14
    GUILD_DISCOVERY_REQUALIFIED = 15
    GUILD_DISCOVERY_GRACE_PERIOD_INITIAL_WARNING = 16
    GUILD_DISCOVERY_GRACE_PERIOD_FINAL_WARNING = 17
    # 18 is reserved
    REPLY = 19
    APPLICATION_COMMAND = 20
    # 21 is reserved
    GUILD_INVITE_REMINDER = 22

    @classmethod
    def from_wire(cls, value: int) -> MessageType | None:
        """Return the variant for ``value``, ``None`` when reserved or unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


RESERVED_MESSAGE_TYPES = frozenset({13, 18, 21})


class MessageFlags(enum.IntFlag):
    CROSSPOSTED = 1 << 0
    IS_CROSSPOST = 1 << 1
    SUPPRESS_EMBEDS = 1 << 2
    SOURCE_MESSAGE_DELETED = 1 << 3
    URGENT = 1 << 4
    EPHEMERAL = 1 << 6
    LOADING = 1 << 7


# only an interaction response may carry these
INTERACTION_ONLY_FLAGS = MessageFlags.EPHEMERAL | MessageFlags.LOADING


class CachePolicy(enum.IntEnum):
    """How a message author relates to the shared user cache."""

    AGGRESSIVE = 0
    LAZY = 1
    NONE = 2


class Attachment(BaseModel):
    id: int = 0
    size: int = 0
    filename: str = ""
    url: str = ""
    proxy_url: str = ""
    width: int = 0
    height: int = 0
    content_type: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Attachment:
        return cls(
            id=snowflake_not_null(data, "id"),
            size=int_not_null(data, "size"),
            filename=string_not_null(data, "filename"),
            url=string_not_null(data, "url"),
            proxy_url=string_not_null(data, "proxy_url"),
            width=int_not_null(data, "width"),
            height=int_not_null(data, "height"),
            content_type=string_not_null(data, "content_type"),
        )


class Reaction(BaseModel):
    count: int = 0
    me: bool = False
    emoji_id: int = 0
    emoji_name: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Reaction:
        emoji = object_or_none(data, "emoji") or {}
        return cls(
            count=int_not_null(data, "count"),
            me=bool_not_null(data, "me"),
            emoji_id=snowflake_not_null(emoji, "id"),
            emoji_name=string_not_null(emoji, "name"),
        )


class MessageReference(BaseModel):
    """Origin of a reply or crosspost."""

    message_id: int = 0
    channel_id: int = 0
    guild_id: int = 0
    fail_if_not_exists: bool = True

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> MessageReference:
        return cls(
            message_id=snowflake_not_null(data, "message_id"),
            channel_id=snowflake_not_null(data, "channel_id"),
            guild_id=snowflake_not_null(data, "guild_id"),
            fail_if_not_exists=data.get("fail_if_not_exists", True) is not False,
        )

    def to_json_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"message_id": str(self.message_id)}
        if self.channel_id:
            out["channel_id"] = str(self.channel_id)
        if self.guild_id:
            out["guild_id"] = str(self.guild_id)
        out["fail_if_not_exists"] = self.fail_if_not_exists
        return out


class CachedAuthor(BaseModel):
    """Author held in the user cache; resolve it through the cache."""

    user_id: int


class OwnedAuthor(BaseModel):
    """Author built for this message alone and never placed in the cache."""

    user: User

    @property
    def user_id(self) -> int:
        return self.user.id


class Message(BaseModel):
    """A chat message.

    Attributes
    ----------
    author:
        :class:`CachedAuthor` when the author lives in the user cache,
        :class:`OwnedAuthor` when the message holds its own copy, or
        ``None`` for a message composed locally.
    type:
        Raw wire value. Use :attr:`message_type` for the enum variant.
    flags:
        Raw :class:`MessageFlags` bitmask.
    filename, file_content:
        Upload attached to an outbound message; never serialised into
        the JSON body.

    """

    id: int = 0
    channel_id: int = 0
    guild_id: int = 0
    author: CachedAuthor | OwnedAuthor | None = None
    member: GuildMember | None = None
    content: str = ""
    components: list[Component] = Field(default_factory=list)
    sent: int = 0
    edited: int = 0
    tts: bool = False
    mention_everyone: bool = False
    mentions: list[int] = Field(default_factory=list)
    mention_roles: list[int] = Field(default_factory=list)
    mention_channels: list[int] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    embeds: list[Embed] = Field(default_factory=list)
    reactions: list[Reaction] = Field(default_factory=list)
    nonce: str = ""
    pinned: bool = False
    webhook_id: int = 0
    flags: int = 0
    type: int = 0
    message_reference: MessageReference = Field(default_factory=MessageReference)
    filename: str = ""
    file_content: bytes = b""

    @classmethod
    def create(
        cls, channel_id: int = 0, content: str = "", type: MessageType = MessageType.DEFAULT
    ) -> Message:
        return cls(channel_id=channel_id, content=content, type=int(type))

    @classmethod
    def with_embed(cls, channel_id: int, embed: Embed) -> Message:
        return cls(channel_id=channel_id, embeds=[embed])

    # ------------------------------------------------------------------
    # Author
    @property
    def self_allocated(self) -> bool:
        return isinstance(self.author, OwnedAuthor)

    def resolve_author(self, caches: CacheRegistry) -> User | None:
        """Return the author, or ``None`` if the cache no longer holds it."""
        if isinstance(self.author, OwnedAuthor):
            return self.author.user
        if isinstance(self.author, CachedAuthor):
            return caches.users.fetch(self.author.user_id)
        return None

    def _author_from_json(
        self, data: dict[str, Any], caches: CacheRegistry, policy: CachePolicy
    ) -> tuple[CachedAuthor | OwnedAuthor | None, User | None]:
        """Return the author reference and the user still to be cached, if any."""
        fragment = object_or_none(data, "author")
        if fragment is None:
            return None, None
        if policy == CachePolicy.NONE or self.webhook_id:
            return OwnedAuthor(user=User().fill_from_json(fragment)), None
        author_id = snowflake_required(fragment, "id")
        if policy == CachePolicy.LAZY and author_id in caches.users:
            return CachedAuthor(user_id=author_id), None
        return CachedAuthor(user_id=author_id), User().fill_from_json(fragment)

    # ------------------------------------------------------------------
    def fill_from_json(
        self,
        data: dict[str, Any],
        caches: CacheRegistry,
        policy: CachePolicy = CachePolicy.AGGRESSIVE,
    ) -> Message:
        """Populate the message from a gateway or HTTP message object.

        ``policy`` decides whether the author is stored in and taken from
        ``caches.users`` or kept privately by this message. Messages sent
        by a webhook always keep their author privately. The user cache is
        only written once the whole message has parsed.
        """
        self.id = snowflake_required(data, "id")
        self.channel_id = snowflake_required(data, "channel_id")
        self.guild_id = snowflake_not_null(data, "guild_id")
        self.webhook_id = snowflake_not_null(data, "webhook_id")
        self.author, pending_user = self._author_from_json(data, caches, policy)
        member = object_or_none(data, "member")
        if member is not None and self.author is not None:
            self.member = GuildMember().fill_from_json(
                member, self.guild_id, self.author.user_id
            )
        self.content = string_not_null(data, "content")
        self.sent = ts_not_null(data, "timestamp")
        self.edited = ts_not_null(data, "edited_timestamp")
        self.tts = bool_not_null(data, "tts")
        self.mention_everyone = bool_not_null(data, "mention_everyone")
        self.mentions = [snowflake_not_null(m, "id") for m in object_list(data, "mentions")]
        self.mention_roles = snowflake_list(data, "mention_roles")
        self.mention_channels = [
            snowflake_not_null(c, "id") for c in object_list(data, "mention_channels")
        ]
        self.attachments = [Attachment.from_json(a) for a in object_list(data, "attachments")]
        self.embeds = [Embed().fill_from_json(e) for e in object_list(data, "embeds")]
        self.reactions = [Reaction.from_json(r) for r in object_list(data, "reactions")]
        self.components = components_from_json(object_list(data, "components"))
        nonce = data.get("nonce")
        self.nonce = "" if nonce is None else str(nonce)
        self.pinned = bool_not_null(data, "pinned")
        self.flags = int_not_null(data, "flags")
        self.type = int_not_null(data, "type")
        reference = object_or_none(data, "message_reference")
        self.message_reference = (
            MessageReference.from_json(reference) if reference is not None else MessageReference()
        )
        if pending_user is not None:
            caches.users.store(pending_user)
        return self

    def to_json_dict(
        self, with_id: bool = False, is_interaction_response: bool = False
    ) -> dict[str, Any]:
        flags = int(self.flags)
        if not is_interaction_response:
            flags &= ~int(INTERACTION_ONLY_FLAGS)
        out: dict[str, Any] = {
            "channel_id": str(self.channel_id),
            "content": self.content,
            "tts": self.tts,
            "type": self.type,
            "flags": flags,
        }
        if with_id:
            out["id"] = str(self.id)
        if self.nonce:
            out["nonce"] = self.nonce
        if self.message_reference.message_id:
            out["message_reference"] = self.message_reference.to_json_dict()
        if self.embeds:
            out["embeds"] = [e.to_json_dict() for e in self.embeds]
        if self.components:
            for component in self.components:
                for issue in component.validation_issues():
                    log.warning("message %d component: %s", self.id, issue)
            out["components"] = [c.to_json_dict() for c in self.components]
        return out

    def build_json(self, with_id: bool = False, is_interaction_response: bool = False) -> str:
        """Serialise the outbound fields of this message to a JSON document."""
        return json.dumps(self.to_json_dict(with_id, is_interaction_response))

    # ------------------------------------------------------------------
    # Flag predicates
    def _has_flag(self, flag: MessageFlags) -> bool:
        return bool(self.flags & int(flag))

    def is_crossposted(self) -> bool:
        return self._has_flag(MessageFlags.CROSSPOSTED)

    def is_crosspost(self) -> bool:
        return self._has_flag(MessageFlags.IS_CROSSPOST)

    def supress_embeds(self) -> bool:
        return self._has_flag(MessageFlags.SUPPRESS_EMBEDS)

    def is_source_message_deleted(self) -> bool:
        return self._has_flag(MessageFlags.SOURCE_MESSAGE_DELETED)

    def is_urgent(self) -> bool:
        return self._has_flag(MessageFlags.URGENT)

    def is_ephemeral(self) -> bool:
        return self._has_flag(MessageFlags.EPHEMERAL)

    def is_loading(self) -> bool:
        return self._has_flag(MessageFlags.LOADING)

    @property
    def message_type(self) -> MessageType | None:
        return MessageType.from_wire(self.type)

    # ------------------------------------------------------------------
    # Builders
    def set_reference(
        self,
        message_id: int,
        guild_id: int = 0,
        channel_id: int = 0,
        fail_if_not_exists: bool = False,
    ) -> Message:
        self.message_reference = MessageReference(
            message_id=message_id,
            channel_id=channel_id,
            guild_id=guild_id,
            fail_if_not_exists=fail_if_not_exists,
        )
        return self

    def add_component(self, component: Component) -> Message:
        self.components.append(component)
        return self

    def add_embed(self, embed: Embed) -> Message:
        self.embeds.append(embed)
        return self

    def set_flags(self, flags: int) -> Message:
        self.flags = int(flags)
        return self

    def set_type(self, type: MessageType) -> Message:
        self.type = int(type)
        return self

    def set_filename(self, filename: str) -> Message:
        self.filename = filename
        return self

    def set_file_content(self, content: bytes) -> Message:
        self.file_content = content
        return self

    def set_content(self, content: str) -> Message:
        self.content = content
        return self
