"""Conversions between datetimes, epoch seconds and HH:MM strings."""

import math
import re
from datetime import datetime, timezone
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from order_pacing.core.errors import ConfigurationError

TIME_STRING_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, leave aware ones untouched."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_seconds(value: Union[datetime, int, float]) -> int:
    """Floor a datetime or epoch timestamp to whole epoch seconds."""
    if isinstance(value, datetime):
        value = ensure_aware(value).timestamp()
    return math.floor(value)


def seconds_to_datetime(seconds: Union[int, float]) -> datetime:
    """Build a UTC datetime from epoch seconds."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def minutes_to_seconds(minutes: Union[int, float]) -> int:
    return int(minutes * 60)


def is_time_string(value: str) -> bool:
    """Check for ``HH:MM`` or ``HH:MM:SS`` (24-hour clock)."""
    return bool(TIME_STRING_PATTERN.match(value))


def time_string_to_minutes(value: str) -> int:
    """Convert ``HH:MM[:SS]`` to minutes since midnight (seconds ignored)."""
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def resolve_timezone(name: str) -> ZoneInfo:
    """Load an IANA timezone, rejecting unknown names as configuration errors."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone: {name!r}", field="timezone") from e
