from __future__ import annotations

from datetime import datetime, timedelta, timezone
import zoneinfo
from zoneinfo import ZoneInfoNotFoundError

DEFAULT_TZ = "UTC"
DISPLAY_FORMAT = "%a, %d %b %Y %H:%M"

# Raised by zoneinfo for unknown keys, malformed keys and unreadable tz files.
ZONE_ERRORS = (ZoneInfoNotFoundError, ValueError, OSError)


def get_zone(name: str) -> zoneinfo.ZoneInfo:
    return zoneinfo.ZoneInfo(name)


def now_in_tz(tz: str = DEFAULT_TZ) -> datetime:
    return datetime.now(tz=get_zone(tz))


def is_valid_zone(name: str) -> bool:
    """True when a current zoned time can be built for ``name``."""

    if not name or not isinstance(name, str):
        return False
    try:
        now_in_tz(name)
    except ZONE_ERRORS:
        return False
    return True


def project(moment: datetime, tz: str) -> datetime:
    return moment.astimezone(get_zone(tz))


def add_minutes(moment: datetime, minutes: int) -> datetime:
    """Shift an aware datetime by elapsed time, keeping its zone."""

    shifted = moment.astimezone(timezone.utc) + timedelta(minutes=minutes)
    return shifted.astimezone(moment.tzinfo)


def format_local(moment: datetime, tz: str) -> str:
    return f"{project(moment, tz).strftime(DISPLAY_FORMAT)} ({tz})"
