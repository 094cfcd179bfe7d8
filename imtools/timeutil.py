"""Timestamp helpers: current time, conversions, formatting and calendar cycles."""

from __future__ import annotations

import calendar
import re
import time
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

__all__ = [
    "TIME_OFFSET",
    "HALF_OFFSET",
    "TimezoneError",
    "get_current_timestamp_by_second",
    "unix_second_to_time",
    "unix_nano_second_to_time",
    "unix_mill_second_to_time",
    "get_current_timestamp_by_nano",
    "get_current_timestamp_by_mill",
    "get_cur_day_zero_timestamp",
    "get_cur_day_half_timestamp",
    "get_cur_day_zero_time_format",
    "get_cur_day_half_time_format",
    "get_timestamp_by_format",
    "time_string_format_time_unix",
    "time_string_to_time",
    "time_to_string",
    "get_current_time_formatted",
    "get_timestamp_by_timezone",
    "days_between_timestamps",
    "is_same_weekday",
    "is_same_day_of_month",
    "is_weekday",
    "is_nth_day_cycle",
    "is_nth_week_cycle",
    "is_nth_month_cycle",
]

TIME_OFFSET = 8 * 3600
HALF_OFFSET = 12 * 3600

_UTC = timezone.utc
_EPOCH = datetime(1970, 1, 1, tzinfo=_UTC)
# Unix time of the zero time value (January 1, year 1, 00:00:00 UTC).
_ZERO_TIME_UNIX = -62135596800
_NS_PER_SECOND = 10**9
_NS_PER_DAY = 86_400 * _NS_PER_SECOND
_DAY_FILE_FORMAT = "%Y-%m-%d_%H-%M-%S"
_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_FRACTION_RE = re.compile(r"[.,](?:0+|9+)(?![0-9])")

# Reference-layout elements and the strptime directives they stand for, longest first.
_LAYOUT_TOKENS = (
    ("January", "%B"),
    ("Monday", "%A"),
    ("Jan", "%b"),
    ("Mon", "%a"),
    ("2006", "%Y"),
    ("Z07:00", "%z"),
    ("Z0700", "%z"),
    ("-07:00", "%z"),
    ("-0700", "%z"),
    ("MST", "%Z"),
    ("15", "%H"),
    ("01", "%m"),
    ("02", "%d"),
    ("_2", "%d"),
    ("03", "%I"),
    ("04", "%M"),
    ("05", "%S"),
    ("06", "%y"),
    ("PM", "%p"),
    ("pm", "%p"),
    ("1", "%m"),
    ("2", "%d"),
    ("3", "%I"),
    ("4", "%M"),
    ("5", "%S"),
)


class TimezoneError(ValueError):
    """Raised when a time zone name cannot be loaded."""


def _load_location(name: str) -> tzinfo | None:
    """Resolve a zone name; ``None`` stands for the system's local zone."""
    if name in ("", "UTC"):
        return _UTC
    if name == "Local":
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise TimezoneError(f"error loading location: {name!r}: {exc}") from exc


def _now_in(location: tzinfo | None) -> datetime:
    if location is None:
        return datetime.now().astimezone()
    return datetime.now(location)


def _local_time(second: int) -> datetime:
    return (_EPOCH + timedelta(seconds=second)).astimezone()


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _days_since(start_timestamp: int) -> int:
    elapsed = time.time_ns() - start_timestamp * _NS_PER_SECOND
    return _trunc_div(elapsed, _NS_PER_DAY)


def get_current_timestamp_by_second() -> int:
    return int(time.time())


def unix_second_to_time(second: int) -> datetime:
    """Local-time datetime for a Unix timestamp in seconds."""
    return _local_time(second)


def unix_nano_second_to_time(nano_second: int) -> datetime:
    """Local-time datetime for a Unix timestamp in nanoseconds (microsecond precision)."""
    return (_EPOCH + timedelta(microseconds=nano_second // 1000)).astimezone()


def unix_mill_second_to_time(mill_second: int) -> datetime:
    """Local-time datetime for a Unix timestamp in milliseconds."""
    return (_EPOCH + timedelta(milliseconds=mill_second)).astimezone()


def get_current_timestamp_by_nano() -> int:
    return time.time_ns()


def get_current_timestamp_by_mill() -> int:
    return time.time_ns() // 1_000_000


def get_cur_day_zero_timestamp() -> int:
    """Midnight of today's local date taken as UTC, shifted back by eight hours."""
    return calendar.timegm(date.today().timetuple()) - TIME_OFFSET


def get_cur_day_half_timestamp() -> int:
    return get_cur_day_zero_timestamp() + HALF_OFFSET


def get_cur_day_zero_time_format() -> str:
    return _local_time(get_cur_day_zero_timestamp()).strftime(_DAY_FILE_FORMAT)


def get_cur_day_half_time_format() -> str:
    return _local_time(get_cur_day_zero_timestamp() + HALF_OFFSET).strftime(_DAY_FILE_FORMAT)


def get_timestamp_by_format(datetime_str: str) -> str:
    """Unix seconds, as a string, for a local "YYYY-MM-DD HH:MM:SS" time.

    Unparsable input yields the timestamp of the zero time.
    """
    if not _DATETIME_RE.fullmatch(datetime_str):
        return str(_ZERO_TIME_UNIX)
    try:
        parsed = datetime.strptime(datetime_str, _DATETIME_FORMAT)
        return str(int(parsed.timestamp()))
    except (ValueError, OverflowError, OSError):
        return str(_ZERO_TIME_UNIX)


def _layout_to_strptime(layout: str) -> str:
    parts = []
    position = 0
    while position < len(layout):
        fraction = _FRACTION_RE.match(layout, position)
        if fraction:
            parts.append(".%f")
            position = fraction.end()
            continue
        for token, directive in _LAYOUT_TOKENS:
            if layout.startswith(token, position):
                parts.append(directive)
                position += len(token)
                break
        else:
            ch = layout[position]
            parts.append("%%" if ch == "%" else ch)
            position += 1
    return "".join(parts)


def time_string_format_time_unix(time_format: str, time_src: str) -> int:
    """Parse ``time_src`` with a reference layout such as "2006-01-02 15:04:05".

    Times without a zone are taken as UTC; unparsable input yields the
    timestamp of the zero time.
    """
    try:
        parsed = datetime.strptime(time_src, _layout_to_strptime(time_format))
    except ValueError:
        return _ZERO_TIME_UNIX
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_UTC)
    return int(parsed.timestamp())


def time_string_to_time(time_string: str) -> datetime:
    """Parse a "YYYY-MM-DD" date as midnight UTC."""
    try:
        if not _DATE_RE.fullmatch(time_string):
            raise ValueError("expected YYYY-MM-DD")
        parsed = datetime.strptime(time_string, "%Y-%m-%d")
    except ValueError as exc:
        raise ValueError(f"timeStringToTime failed: {exc} (timeString={time_string!r})") from exc
    return parsed.replace(tzinfo=_UTC)


def time_to_string(t: datetime) -> str:
    return f"{t.year:04d}-{t.month:02d}-{t.day:02d}"


def get_current_time_formatted() -> str:
    return datetime.now().strftime(_DATETIME_FORMAT)


def get_timestamp_by_timezone(timezone: str) -> int:
    """Current Unix seconds, after checking that the zone exists."""
    _now_in(_load_location(timezone))
    return int(time.time())


def days_between_timestamps(timezone: str, timestamp: int) -> int:
    """Whole days elapsed from ``timestamp`` until now (truncated toward zero)."""
    _load_location(timezone)
    return _days_since(timestamp)


def is_same_weekday(timezone: str, timestamp: int) -> bool:
    """Whether today in the zone falls on the same weekday as the local ``timestamp``."""
    current = _now_in(_load_location(timezone)).weekday()
    return current == _local_time(timestamp).weekday()


def is_same_day_of_month(timezone: str, timestamp: int) -> bool:
    current = _now_in(_load_location(timezone)).day
    return current == _local_time(timestamp).day


def is_weekday(timestamp: int) -> bool:
    """Whether the local date of ``timestamp`` is Monday to Friday."""
    return _local_time(timestamp).weekday() < 5


def is_nth_day_cycle(timezone: str, start_timestamp: int, n: int) -> bool:
    _load_location(timezone)
    return _days_since(start_timestamp) % n == 0


def is_nth_week_cycle(timezone: str, start_timestamp: int, n: int) -> bool:
    _load_location(timezone)
    weeks = _trunc_div(_days_since(start_timestamp), 7)
    return weeks % n == 0


def is_nth_month_cycle(timezone: str, start_timestamp: int, n: int) -> bool:
    now = _now_in(_load_location(timezone))
    start = _local_time(start_timestamp)
    total_months = (now.year - start.year) * 12 + (now.month - start.month)
    return total_months % n == 0