"""Readers for fields of inbound JSON fragments.

Every reader takes the fragment and a key. Absent and ``null`` keys map to
the documented default of the field type; values of the wrong JSON type
raise :class:`~chatcache.core.errors.MalformedValueError`.
"""

from __future__ import annotations

import datetime
from typing import Any

from discord.utils import parse_time

from .errors import MalformedValueError, MissingFieldError

Fragment = dict[str, Any]


def _get(data: Fragment, key: str) -> Any:
    if not isinstance(data, dict):
        raise MalformedValueError(key, data)
    return data.get(key)


def snowflake_not_null(data: Fragment, key: str) -> int:
    """Return the snowflake stored under ``key`` (sent as a string) or 0."""
    value = _get(data, key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise MalformedValueError(key, value)
    try:
        snowflake = int(value)
    except ValueError:
        raise MalformedValueError(key, value) from None
    if snowflake < 0 or snowflake >= 1 << 64:
        raise MalformedValueError(key, value)
    return snowflake


def snowflake_required(data: Fragment, key: str) -> int:
    if _get(data, key) is None:
        raise MissingFieldError(key)
    return snowflake_not_null(data, key)


def snowflake_list(data: Fragment, key: str) -> list[int]:
    values = _get(data, key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise MalformedValueError(key, values)
    return [snowflake_not_null({key: v}, key) for v in values]


def string_not_null(data: Fragment, key: str) -> str:
    value = _get(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedValueError(key, value)
    return value


def int_not_null(data: Fragment, key: str) -> int:
    value = _get(data, key)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise MalformedValueError(key, value)
    if isinstance(value, str):
        # permissions and discriminators travel as numeric strings
        try:
            return int(value)
        except ValueError:
            raise MalformedValueError(key, value) from None
    if not isinstance(value, int):
        raise MalformedValueError(key, value)
    return value


def bool_not_null(data: Fragment, key: str) -> bool:
    value = _get(data, key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise MalformedValueError(key, value)
    return value


def ts_not_null(data: Fragment, key: str) -> int:
    """Convert an ISO-8601 timestamp to epoch seconds, 0 when absent."""
    value = _get(data, key)
    if value is None:
        return 0
    if not isinstance(value, str):
        raise MalformedValueError(key, value)
    if not value:
        return 0
    try:
        parsed = parse_time(value)
    except ValueError:
        raise MalformedValueError(key, value) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return int(parsed.timestamp())


def ts_to_iso(ts: int) -> str:
    """Render epoch seconds the way the platform expects outbound."""
    return datetime.datetime.fromtimestamp(ts, tz=datetime.timezone.utc).isoformat()


def object_list(data: Fragment, key: str) -> list[Fragment]:
    values = _get(data, key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise MalformedValueError(key, values)
    return values


def object_or_none(data: Fragment, key: str) -> Fragment | None:
    value = _get(data, key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise MalformedValueError(key, value)
    return value


def string_list(data: Fragment, key: str) -> list[str]:
    values = _get(data, key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise MalformedValueError(key, values)
    return [string_not_null({key: v}, key) for v in values]
