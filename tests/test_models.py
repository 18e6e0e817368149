"""Tests for the independently cached pydantic models."""

import pytest

from chatcache.core.errors import MissingFieldError
from chatcache.core.models import Channel, Guild, GuildMember, Role, User


def test_user_fill_and_defaults() -> None:
    user = User().fill_from_json({"id": "30", "username": "alice", "discriminator": "0042"})
    assert user.id == 30
    assert user.discriminator == 42
    assert user.format_username() == "alice#0042"
    assert user.bot is False
    assert user.avatar_url() == ""


def test_user_avatar_url() -> None:
    user = User(id=5, avatar="abc")
    assert user.avatar_url() == "https://cdn.discordapp.com/avatars/5/abc.png"
    user.avatar = "a_abc"
    assert user.avatar_url().endswith("/a_abc.gif")


def test_user_requires_id() -> None:
    with pytest.raises(MissingFieldError):
        User().fill_from_json({"username": "ghost"})


def test_role_binds_owner_guild() -> None:
    role = Role().fill_from_json(
        {"id": "10", "name": "mods", "permissions": "8", "hoist": True}, guild_id=1
    )
    assert role.guild_id == 1
    assert role.permissions == 8
    assert role.hoist is True
    assert role.mentionable is False


def test_channel_fill() -> None:
    channel = Channel().fill_from_json(
        {
            "id": "20",
            "type": 0,
            "name": "general",
            "parent_id": "19",
            "last_pin_timestamp": "2021-01-01T00:00:00+00:00",
        },
        guild_id=1,
    )
    assert channel.name == "general"
    assert channel.parent_id == 19
    assert channel.topic == ""
    assert channel.last_pin_timestamp == 1609459200


def test_guild_member_binding() -> None:
    member = GuildMember().fill_from_json(
        {"nick": "al", "roles": ["10", "11"], "joined_at": "2021-01-01T00:00:00+00:00"},
        guild_id=1,
        user_id=30,
    )
    assert (member.guild_id, member.user_id) == (1, 30)
    assert member.roles == [10, 11]
    assert member.joined_at == 1609459200
    assert member.premium_since == 0


def test_guild_fill_leaves_collections_empty() -> None:
    guild = Guild().fill_from_json(
        {"id": "1", "name": "Test", "roles": [{"id": "10"}], "features": ["COMMUNITY"]}
    )
    assert guild.name == "Test"
    assert guild.features == ["COMMUNITY"]
    assert guild.roles == []
    assert guild.members == {}
    assert guild.is_unavailable() is False


def test_guild_unavailable_flag() -> None:
    guild = Guild().fill_from_json({"id": "1", "unavailable": True})
    assert guild.is_unavailable() is True
