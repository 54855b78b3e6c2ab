from __future__ import annotations

import datetime as dt
import email.utils
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigError, PeriodParseError
from .models import PeriodWindow

DEFAULT_TIMEZONE = "Europe/Moscow"
DEFAULT_LOOKBACK_DAYS = 30

END_OF_DAY = dt.time(23, 59, 59)

# Each attempt returns the parsed instant or None when the string does not have its shape.
ParseAttempt = Callable[[str, ZoneInfo, bool], Optional[dt.datetime]]


def load_zone(name: str) -> ZoneInfo:
    key = (name or "").strip()
    if not key:
        raise ConfigError("empty --tz value")
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown --tz value {key!r}") from e


def _strptime(s: str, fmt: str) -> dt.datetime | None:
    try:
        return dt.datetime.strptime(s, fmt)
    except ValueError:
        return None


def _parse_rfc3339(s: str, zone: ZoneInfo, start_of_day: bool) -> dt.datetime | None:
    if "T" not in s:
        return None
    for fmt in ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S.%f%z"):
        t = _strptime(s, fmt)
        if t is not None and t.tzinfo is not None:
            return t
    return None


def _parse_date(s: str, zone: ZoneInfo, start_of_day: bool) -> dt.datetime | None:
    t = _strptime(s, "%Y-%m-%d")
    if t is None:
        return None
    if start_of_day:
        return t.replace(tzinfo=zone)
    return dt.datetime.combine(t.date(), END_OF_DAY, tzinfo=zone)


def _parse_date_minute(s: str, zone: ZoneInfo, start_of_day: bool) -> dt.datetime | None:
    t = _strptime(s, "%Y-%m-%d %H:%M")
    if t is None:
        return None
    return t.replace(tzinfo=zone)


def _parse_rfc1123(s: str, zone: ZoneInfo, start_of_day: bool) -> dt.datetime | None:
    if "," not in s:
        return None
    try:
        t = email.utils.parsedate_to_datetime(s)
    except (TypeError, ValueError, IndexError):
        return None
    if t is None:
        return None
    if t.tzinfo is None:
        t = t.replace(tzinfo=zone)
    return t


PARSE_ATTEMPTS: tuple[ParseAttempt, ...] = (
    _parse_rfc3339,
    _parse_date,
    _parse_date_minute,
    _parse_rfc1123,
)


def parse_instant(raw: str, zone: ZoneInfo, *, field: str) -> dt.datetime:
    """
    Parse an explicit period bound. The first matching format wins:
      - RFC 3339 with offset (2024-01-15T10:30:00+03:00, ...Z)
      - YYYY-MM-DD (00:00:00 for `since`, 23:59:59 for `until`)
      - YYYY-MM-DD HH:MM
      - RFC 1123 / RFC 2822 (Mon, 15 Jan 2024 10:30:00 +0300)
    Raises PeriodParseError naming the field when nothing matches.
    """
    s = (raw or "").strip()
    start_of_day = field == "since"
    for attempt in PARSE_ATTEMPTS:
        t = attempt(s, zone, start_of_day)
        if t is not None:
            return t.astimezone(zone)
    raise PeriodParseError(field, raw)


def default_since(now: dt.datetime, zone: ZoneInfo) -> dt.datetime:
    day = now.astimezone(zone).date() - dt.timedelta(days=DEFAULT_LOOKBACK_DAYS)
    return dt.datetime.combine(day, dt.time(0, 0), tzinfo=zone)


def resolve_period(
    since_raw: str | None,
    until_raw: str | None,
    zone: ZoneInfo,
    *,
    now: dt.datetime | None = None,
) -> PeriodWindow:
    if now is None:
        now = dt.datetime.now(zone)
    now = now.astimezone(zone)

    if since_raw and since_raw.strip():
        since = parse_instant(since_raw, zone, field="since")
    else:
        since = default_since(now, zone)

    if until_raw and until_raw.strip():
        until = parse_instant(until_raw, zone, field="until")
    else:
        until = now

    return PeriodWindow(since=since, until=until, zone=zone)


def format_instant(ts: dt.datetime, zone: ZoneInfo) -> str:
    return ts.astimezone(zone).isoformat(timespec="seconds")
