import re
from datetime import datetime, timedelta, timezone

from cFish.exceptions import TimeParseError

# "2024-01-01 10:00:00 +0000 UTC", as printed by `docker ps` for CreatedAt
DOCKER_TIME_PATTERN = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2}) (?P<time>\d{2}:\d{2}:\d{2})(?:\.(?P<fraction>\d+))?"
    r" (?P<offset>[+-]\d{4}) (?P<zone>\S+)$"
)

# "2024-01-01T10:00:00.123456789Z" or "2024-01-01T10:00:00+02:00"
RFC3339_PATTERN = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt](?P<time>\d{2}:\d{2}:\d{2})(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)

MINUTE = timedelta(minutes=1)
HOUR = timedelta(hours=1)
DAY = timedelta(days=1)
MONTH = timedelta(days=30)


def _to_isoformat(date: str, time: str, fraction: str, offset: str) -> str:
    # datetime only keeps microseconds
    fraction = f".{(fraction or '')[:6].ljust(6, '0')}" if fraction else ''
    return f"{date}T{time}{fraction}{offset}"


def parse_docker_time(value: str) -> datetime:
    """
    Converts a creation timestamp reported by the runtime CLI into a timezone aware datetime.
    Both the CLI's default `YYYY-MM-DD HH:MM:SS ±ZZZZ ZONE` layout and RFC3339 (with up to nanosecond
    precision) are accepted. The zone abbreviation is ignored, the numeric offset is authoritative.

    :param value: timestamp string
    :return: corresponding datetime instance
    :raises TimeParseError: if the value matches neither layout
    """
    value = value.strip()

    match = DOCKER_TIME_PATTERN.match(value)
    if match:
        offset = match['offset']
        iso = _to_isoformat(match['date'], match['time'], match['fraction'], f"{offset[:3]}:{offset[3:]}")
        try:
            return datetime.fromisoformat(iso)
        except ValueError:
            pass

    match = RFC3339_PATTERN.match(value)
    if match:
        offset = match['offset']
        if offset in ('Z', 'z'):
            offset = '+00:00'
        iso = _to_isoformat(match['date'], match['time'], match['fraction'], offset)
        try:
            return datetime.fromisoformat(iso)
        except ValueError as e:
            raise TimeParseError(f"Failed to parse time '{value}': {e}", value) from e

    raise TimeParseError(f"Failed to parse time '{value}': unknown layout", value)


def _plural(count: int, unit: str) -> str:
    if count == 1:
        return f"1 {unit} ago"
    return f"{count} {unit}s ago"


def format_relative_time(timestamp: datetime, now: datetime) -> str:
    """
    Returns how long ago `timestamp` was, relative to `now`, in the coarsest fitting unit.
    Naive datetimes are treated as UTC. A month is 30 days.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    diff = now - timestamp

    if diff < MINUTE:
        return "just now"
    if diff < HOUR:
        return _plural(diff // MINUTE, "minute")
    if diff < DAY:
        return _plural(diff // HOUR, "hour")
    if diff < MONTH:
        return _plural(diff // DAY, "day")
    return _plural(diff // MONTH, "month")
