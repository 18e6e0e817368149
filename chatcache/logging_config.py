import logging
import sys

# per-entity store/replace lines; only shown when asked for explicitly
CACHE_LOGGER = "chatcache.cache"


def setup_logging(level: int = logging.INFO, cache_level: int | None = None) -> logging.Logger:
    """Configure the ``chatcache`` logger once; later calls only adjust levels."""
    logger = logging.getLogger("chatcache")
    logger.setLevel(level)
    logging.getLogger(CACHE_LOGGER).setLevel(
        cache_level if cache_level is not None else max(level, logging.INFO)
    )
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger  # already configured
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    # timestamps are parsed with discord.utils; keep library chatter down
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
