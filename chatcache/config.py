import logging
import os
from dataclasses import dataclass

from .core.message import CachePolicy

_POLICIES = {
    "aggressive": CachePolicy.AGGRESSIVE,
    "lazy": CachePolicy.LAZY,
    "none": CachePolicy.NONE,
}

@dataclass(frozen=True)
class Settings:
    token: str
    # How message authors are cached; see CachePolicy
    cache_policy: CachePolicy = CachePolicy.AGGRESSIVE
    log_level: int = logging.INFO

def load_settings() -> Settings:
    token = os.getenv("DISCORD_BOT_TOKEN", "").strip()
    policy_name = os.getenv("CHATCACHE_CACHE_POLICY", "aggressive").strip().lower()
    if policy_name not in _POLICIES:
        raise ValueError(
            f"CHATCACHE_CACHE_POLICY must be one of {', '.join(_POLICIES)}, got {policy_name!r}"
        )
    level_name = os.getenv("CHATCACHE_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"CHATCACHE_LOG_LEVEL is not a logging level: {level_name!r}")
    return Settings(token=token, cache_policy=_POLICIES[policy_name], log_level=level)
