"""Materialize a guild snapshot and its embedded collections."""

from __future__ import annotations

import logging
from typing import Any

from ..core.cache import CacheRegistry
from ..core.errors import PayloadError
from ..core.models import Channel, Guild, GuildMember, Role, User
from ..core.wire import object_list, object_or_none

log = logging.getLogger("chatcache.events.guild_create")


def _parse_each(guild: Guild, kind: str, fragments: list[dict[str, Any]], parse) -> list:
    parsed = []
    for fragment in fragments:
        try:
            parsed.append(parse(fragment))
        except PayloadError as exc:
            log.warning("guild %d: skipping %s: %s", guild.id, kind, exc)
    return parsed


def _parse_member(guild: Guild, fragment: dict[str, Any]) -> tuple[User, GuildMember]:
    user = User().fill_from_json(object_or_none(fragment, "user") or {})
    return user, GuildMember().fill_from_json(fragment, guild.id, user.id)


def handle_guild_create(caches: CacheRegistry, envelope: dict[str, Any]) -> Guild:
    """Populate a :class:`Guild` from a GUILD_CREATE envelope and cache it.

    The whole payload is parsed before any cache is written, so a payload
    that fails at the guild level leaves every cache untouched. Malformed
    role, channel or member fragments are skipped individually. An
    unavailable guild is cached as a placeholder without looking at its
    embedded collections.
    """
    data = object_or_none(envelope, "d") or {}
    guild = Guild().fill_from_json(data)

    roles: list[Role] = []
    channels: list[Channel] = []
    members: list[tuple[User, GuildMember]] = []
    if not guild.is_unavailable():
        role_fragments = object_list(data, "roles")
        channel_fragments = object_list(data, "channels")
        member_fragments = object_list(data, "members")
        roles = _parse_each(
            guild, "role", role_fragments, lambda f: Role().fill_from_json(f, guild_id=guild.id)
        )
        channels = _parse_each(
            guild,
            "channel",
            channel_fragments,
            lambda f: Channel().fill_from_json(f, guild_id=guild.id),
        )
        members = _parse_each(guild, "member", member_fragments, lambda f: _parse_member(guild, f))

    # nothing below can raise a PayloadError
    for role in roles:
        caches.roles.store(role)
        guild.roles.append(role.id)
    for channel in channels:
        caches.channels.store(channel)
        guild.channels.append(channel.id)
    for user, member in members:
        guild.members[user.id] = member
        caches.users.store(user)
    caches.guilds.store(guild)

    log.info(
        "guild %d cached (%d roles, %d channels, %d members%s)",
        guild.id,
        len(guild.roles),
        len(guild.channels),
        len(guild.members),
        ", unavailable" if guild.is_unavailable() else "",
    )
    return guild
