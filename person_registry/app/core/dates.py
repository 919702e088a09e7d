"""
Birth date conversions.

The form shows and accepts dates as ``DD-MM-YYYY``.  The remote service
receives them as ISO‑8601 timestamps in UTC: the selected calendar day
at local midnight, converted to UTC and written with a ``Z`` suffix
(``1990-03-15T03:00:00.000Z`` for São Paulo).  Reading a stored value
converts it back to the local calendar day, so a date entered in the
form is displayed unchanged after a round trip through the service.
"""

from datetime import date, datetime, time, timezone, tzinfo
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DISPLAY_DATE_FORMAT = "%d-%m-%Y"


def get_timezone(name: str) -> tzinfo:
    """Resolve a timezone name from the settings."""
    if name.upper() in {"UTC", "Z"}:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone {name!r}") from exc


def parse_display_date(value: Union[str, date]) -> date:
    """Parse a ``DD-MM-YYYY`` string as typed in the form."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), DISPLAY_DATE_FORMAT).date()


def format_display_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def to_interchange(value: date, tz: tzinfo = timezone.utc) -> str:
    """Return the ISO‑8601 UTC timestamp of local midnight on ``value``."""
    local_midnight = datetime.combine(value, time.min, tzinfo=tz)
    utc = local_midnight.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def from_interchange(value: str, tz: tzinfo = timezone.utc) -> date:
    """Return the local calendar day of a stored ISO‑8601 value.

    Plain dates (``1990-03-15``) and naive timestamps are taken as they
    are; aware timestamps are converted to ``tz`` first.
    """
    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.date()
    return parsed.astimezone(tz).date()


def display_from_interchange(value: str, tz: tzinfo = timezone.utc) -> str:
    """Format a stored ISO‑8601 value for display (``DD-MM-YYYY``)."""
    return format_display_date(from_interchange(value, tz))
