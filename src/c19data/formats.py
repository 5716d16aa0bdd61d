"""
Wire formats for calendar values.

Dates travel as 'YYYY-MM-DD', last-update stamps as 'YYYY/MM/DD HH:MM'
(naive local time) and summary entry stamps as RFC 3339 timestamps in UTC.
Calendar arithmetic is left to :mod:`datetime`; this module only pins the
textual form and rejects anything looser.
"""

import re
from datetime import date, datetime, timezone

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y/%m/%d %H:%M"

# strptime tolerates missing zero padding, so the shape is checked first
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATETIME_PATTERN = re.compile(r"^\d{4}/\d{2}/\d{2} \d{2}:\d{2}$")
_TIMESTAMP_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<zone>[Zz]|[+-]\d{2}:\d{2})$"
)


def parse_date(text: str) -> date:
    """
    Parse a 'YYYY-MM-DD' string into a date.

    Raises:
        ValueError: if the text is not exactly in that form or is not a real
            calendar date (e.g. '2020-13-40', '2021-02-29').
    """
    if not isinstance(text, str) or not _DATE_PATTERN.match(text):
        raise ValueError(f"Expected a date in YYYY-MM-DD form, got {text!r}")
    return datetime.strptime(text, DATE_FORMAT).date()


def format_date(value: date) -> str:
    # isoformat zero-pads years below 1000, strftime('%Y') does not on every platform
    return value.isoformat()


def parse_datetime(text: str) -> datetime:
    """Parse a 'YYYY/MM/DD HH:MM' string into a naive datetime."""
    if not isinstance(text, str) or not _DATETIME_PATTERN.match(text):
        raise ValueError(f"Expected a timestamp in YYYY/MM/DD HH:MM form, got {text!r}")
    return datetime.strptime(text, DATETIME_FORMAT)


def format_datetime(value: datetime) -> str:
    return (
        f"{value.year:04d}/{value.month:02d}/{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}"
    )


def parse_timestamp(text: str) -> datetime:
    """
    Parse an RFC 3339 timestamp ('2020-03-25T09:40:00.000Z', '2020-03-25T18:40:00+09:00')
    into an aware datetime in UTC. A zone designator is mandatory.

    Raises:
        ValueError: if the text is not an RFC 3339 date-time or names no zone.
    """
    match = _TIMESTAMP_PATTERN.match(text) if isinstance(text, str) else None
    if not match:
        raise ValueError(f"Expected an RFC 3339 timestamp, got {text!r}")
    # fromisoformat before 3.11 only takes 3 or 6 fraction digits and no 'Z'
    fraction = (match.group("fraction") or "").ljust(6, "0")[:6]
    zone = match.group("zone").upper()
    zone = "+00:00" if zone == "Z" else zone
    parsed = datetime.fromisoformat(f"{match.group('base').upper()}.{fraction}{zone}")
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render an aware datetime as UTC, e.g. '2020-03-25T09:40:00Z'."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
