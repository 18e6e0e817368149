"""Data models for the independently cached chat entities.

The models are implemented using :mod:`pydantic`. Each one is created
empty and populated in place by ``fill_from_json`` from a gateway
fragment; absent optional keys keep the field defaults.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .wire import (
    bool_not_null,
    int_not_null,
    snowflake_list,
    snowflake_not_null,
    snowflake_required,
    string_list,
    string_not_null,
    ts_not_null,
)

CDN_BASE = "https://cdn.discordapp.com"


class User(BaseModel):
    """Represents a platform account.

    Attributes
    ----------
    id:
        Snowflake of the user.
    username:
        Account name, not unique on its own.
    discriminator:
        Four digit tag sent as a string; stored as an integer.
    avatar:
        Avatar hash, empty when the user has the default avatar.
    bot, system:
        Whether the account is a bot or an official system account.
    public_flags:
        Bitmask of public badges.

    """

    id: int = 0
    username: str = ""
    discriminator: int = 0
    avatar: str = ""
    bot: bool = False
    system: bool = False
    mfa_enabled: bool = False
    verified: bool = False
    public_flags: int = 0

    def fill_from_json(self, data: dict[str, Any]) -> User:
        self.id = snowflake_required(data, "id")
        self.username = string_not_null(data, "username")
        self.discriminator = int_not_null(data, "discriminator")
        self.avatar = string_not_null(data, "avatar")
        self.bot = bool_not_null(data, "bot")
        self.system = bool_not_null(data, "system")
        self.mfa_enabled = bool_not_null(data, "mfa_enabled")
        self.verified = bool_not_null(data, "verified")
        self.public_flags = int_not_null(data, "public_flags")
        return self

    def format_username(self) -> str:
        return f"{self.username}#{self.discriminator:04d}"

    def avatar_url(self) -> str:
        """CDN URL of the avatar, or an empty string without one."""
        if not self.avatar:
            return ""
        ext = "gif" if self.avatar.startswith("a_") else "png"
        return f"{CDN_BASE}/avatars/{self.id}/{self.avatar}.{ext}"


class Role(BaseModel):
    """A guild role. ``guild_id`` is bound by the guild that embeds it."""

    id: int = 0
    guild_id: int = 0
    name: str = ""
    color: int = 0
    position: int = 0
    permissions: int = 0
    hoist: bool = False
    managed: bool = False
    mentionable: bool = False

    def fill_from_json(self, data: dict[str, Any], guild_id: int = 0) -> Role:
        self.id = snowflake_required(data, "id")
        self.guild_id = guild_id or snowflake_not_null(data, "guild_id")
        self.name = string_not_null(data, "name")
        self.color = int_not_null(data, "color")
        self.position = int_not_null(data, "position")
        self.permissions = int_not_null(data, "permissions")
        self.hoist = bool_not_null(data, "hoist")
        self.managed = bool_not_null(data, "managed")
        self.mentionable = bool_not_null(data, "mentionable")
        return self


class Channel(BaseModel):
    """A text, voice or category channel."""

    id: int = 0
    type: int = 0
    guild_id: int = 0
    position: int = 0
    name: str = ""
    topic: str = ""
    nsfw: bool = False
    last_message_id: int = 0
    bitrate: int = 0
    user_limit: int = 0
    rate_limit_per_user: int = 0
    parent_id: int = 0
    owner_id: int = 0
    last_pin_timestamp: int = 0

    def fill_from_json(self, data: dict[str, Any], guild_id: int = 0) -> Channel:
        self.id = snowflake_required(data, "id")
        self.type = int_not_null(data, "type")
        self.guild_id = guild_id or snowflake_not_null(data, "guild_id")
        self.position = int_not_null(data, "position")
        self.name = string_not_null(data, "name")
        self.topic = string_not_null(data, "topic")
        self.nsfw = bool_not_null(data, "nsfw")
        self.last_message_id = snowflake_not_null(data, "last_message_id")
        self.bitrate = int_not_null(data, "bitrate")
        self.user_limit = int_not_null(data, "user_limit")
        self.rate_limit_per_user = int_not_null(data, "rate_limit_per_user")
        self.parent_id = snowflake_not_null(data, "parent_id")
        self.owner_id = snowflake_not_null(data, "owner_id")
        self.last_pin_timestamp = ts_not_null(data, "last_pin_timestamp")
        return self


class GuildMember(BaseModel):
    """Guild-scoped attributes of a user.

    Members are owned by :attr:`Guild.members` and never cached on their
    own; the user they describe lives in the user cache under ``user_id``.
    """

    guild_id: int = 0
    user_id: int = 0
    nick: str = ""
    roles: list[int] = Field(default_factory=list)
    joined_at: int = 0
    premium_since: int = 0
    deaf: bool = False
    mute: bool = False
    pending: bool = False

    def fill_from_json(
        self, data: dict[str, Any], guild_id: int, user_id: int
    ) -> GuildMember:
        self.guild_id = guild_id
        self.user_id = user_id
        self.nick = string_not_null(data, "nick")
        self.roles = snowflake_list(data, "roles")
        self.joined_at = ts_not_null(data, "joined_at")
        self.premium_since = ts_not_null(data, "premium_since")
        self.deaf = bool_not_null(data, "deaf")
        self.mute = bool_not_null(data, "mute")
        self.pending = bool_not_null(data, "pending")
        return self


class Guild(BaseModel):
    """A server and the IDs of the roles and channels it owns.

    Attributes
    ----------
    roles, channels:
        Ordered role and channel snowflakes; the entities themselves live
        in their own caches.
    members:
        Member records keyed by user snowflake.
    unavailable:
        True when the guild is an outage placeholder. Its embedded
        collections are never read.

    """

    id: int = 0
    name: str = ""
    icon: str = ""
    splash: str = ""
    owner_id: int = 0
    region: str = ""
    afk_channel_id: int = 0
    afk_timeout: int = 0
    verification_level: int = 0
    member_count: int = 0
    premium_tier: int = 0
    system_channel_id: int = 0
    features: list[str] = Field(default_factory=list)
    unavailable: bool = False
    roles: list[int] = Field(default_factory=list)
    channels: list[int] = Field(default_factory=list)
    members: dict[int, GuildMember] = Field(default_factory=dict)

    def fill_from_json(self, data: dict[str, Any]) -> Guild:
        """Populate the scalar fields; embedded collections are left alone."""
        self.id = snowflake_required(data, "id")
        self.name = string_not_null(data, "name")
        self.icon = string_not_null(data, "icon")
        self.splash = string_not_null(data, "splash")
        self.owner_id = snowflake_not_null(data, "owner_id")
        self.region = string_not_null(data, "region")
        self.afk_channel_id = snowflake_not_null(data, "afk_channel_id")
        self.afk_timeout = int_not_null(data, "afk_timeout")
        self.verification_level = int_not_null(data, "verification_level")
        self.member_count = int_not_null(data, "member_count")
        self.premium_tier = int_not_null(data, "premium_tier")
        self.system_channel_id = snowflake_not_null(data, "system_channel_id")
        self.features = string_list(data, "features")
        self.unavailable = bool_not_null(data, "unavailable")
        return self

    def is_unavailable(self) -> bool:
        return self.unavailable
