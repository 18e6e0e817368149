from __future__ import annotations

import argparse
import json
from pathlib import Path

from .config import load_settings
from .core.cache import CacheRegistry
from .events import dispatch
from .logging_config import setup_logging


def replay(path: Path, caches: CacheRegistry, policy) -> int:
    """Feed every envelope in the newline-delimited dump at ``path``."""
    count = 0
    with path.open(encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            dispatch(caches, json.loads(line), policy)
            count += 1
    return count


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="chatcache-replay",
        description="Replay a dump of gateway events into fresh caches.",
    )
    parser.add_argument("dump", type=Path, help="file with one JSON envelope per line")
    args = parser.parse_args(argv)

    settings = load_settings()
    log = setup_logging(settings.log_level)
    if not args.dump.exists():
        log.error("%s does not exist", args.dump)
        return 2

    caches = CacheRegistry()
    try:
        events = replay(args.dump, caches, settings.cache_policy)
    except json.JSONDecodeError as exc:
        log.error("%s is not newline-delimited JSON: %s", args.dump, exc)
        return 1
    log.info("replayed %d events: %s", events, caches.sizes())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
