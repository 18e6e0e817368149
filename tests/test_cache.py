"""Tests for :class:`EntityCache` and :class:`CacheRegistry`."""

import threading

from chatcache.core.cache import CacheRegistry, EntityCache
from chatcache.core.models import Role, User


def test_store_then_fetch_returns_equal_entity() -> None:
    cache: EntityCache[User] = EntityCache("user")
    user = User(id=30, username="alice", discriminator=7)
    cache.store(user)

    fetched = cache.fetch(30)
    assert fetched == user
    assert 30 in cache
    assert len(cache) == 1


def test_fetch_miss_returns_none() -> None:
    cache: EntityCache[User] = EntityCache("user")
    assert cache.fetch(123) is None
    assert 123 not in cache


def test_store_same_id_twice_keeps_latest() -> None:
    cache: EntityCache[Role] = EntityCache("role")
    cache.store(Role(id=10, name="old"))
    cache.store(Role(id=10, name="new"))

    assert len(cache) == 1
    assert cache.fetch(10).name == "new"


def test_remove_releases_entry() -> None:
    cache: EntityCache[Role] = EntityCache("role")
    role = Role(id=10)
    cache.store(role)

    assert cache.remove(10) is role
    assert cache.fetch(10) is None
    assert cache.remove(10) is None
    assert cache.ids() == []


def test_concurrent_stores_all_land() -> None:
    cache: EntityCache[User] = EntityCache("user")

    def writer(start: int) -> None:
        for i in range(start, start + 200):
            cache.store(User(id=i))

    threads = [threading.Thread(target=writer, args=(n * 200,)) for n in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 1000
    assert sorted(cache.ids()) == list(range(1000))


def test_registry_caches_are_independent() -> None:
    first = CacheRegistry()
    second = CacheRegistry()
    first.users.store(User(id=1))

    assert first.sizes()["users"] == 1
    assert second.users.fetch(1) is None
    assert first.roles.fetch(1) is None
