import logging

import pytest

from chatcache.config import load_settings
from chatcache.core.message import CachePolicy
from chatcache.logging_config import setup_logging


def test_load_settings(monkeypatch):
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "abc123")
    monkeypatch.delenv("CHATCACHE_CACHE_POLICY", raising=False)
    monkeypatch.delenv("CHATCACHE_LOG_LEVEL", raising=False)
    s = load_settings()
    assert s.token == "abc123"
    assert s.cache_policy == CachePolicy.AGGRESSIVE
    assert s.log_level == logging.INFO

    # empty token environment
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "")
    s2 = load_settings()
    assert s2.token == ""


def test_load_settings_policy_and_level(monkeypatch):
    monkeypatch.setenv("CHATCACHE_CACHE_POLICY", "Lazy")
    monkeypatch.setenv("CHATCACHE_LOG_LEVEL", "debug")
    s = load_settings()
    assert s.cache_policy == CachePolicy.LAZY
    assert s.log_level == logging.DEBUG

    monkeypatch.setenv("CHATCACHE_CACHE_POLICY", "sometimes")
    with pytest.raises(ValueError):
        load_settings()

    monkeypatch.setenv("CHATCACHE_CACHE_POLICY", "none")
    monkeypatch.setenv("CHATCACHE_LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError):
        load_settings()


def test_setup_logging_idempotent():
    logger1 = setup_logging(logging.DEBUG)
    logger2 = setup_logging(logging.DEBUG)
    assert logger1 is logger2
    assert logger1.handlers  # at least one handler installed


def test_setup_logging_levels_follow_latest_call():
    logger = setup_logging(logging.WARNING)
    assert logger.level == logging.WARNING
    assert all(h.level == logging.WARNING for h in logger.handlers)
    assert logging.getLogger("chatcache.cache").level == logging.WARNING

    setup_logging(logging.DEBUG)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)
    # store/replace chatter stays quiet unless requested
    assert logging.getLogger("chatcache.cache").level == logging.INFO

    setup_logging(logging.DEBUG, cache_level=logging.DEBUG)
    assert logging.getLogger("chatcache.cache").level == logging.DEBUG
    setup_logging(logging.INFO)
