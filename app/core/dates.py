"""Date of birth normalization.

Dates of birth arrive as ``YYYY-MM-DD`` strings entered in India Standard Time
and are stored as the UTC instant of that local midnight.
"""

import re
from datetime import UTC, date, datetime, time, timedelta, timezone

from app.core.exceptions import InvalidDateException

# Local timezone the submitted calendar dates are interpreted in (UTC+05:30)
DOB_LOCAL_TZ = timezone(timedelta(hours=5, minutes=30))

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


def parse_calendar_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string into a real calendar date."""
    match = _DATE_RE.fullmatch(value)
    if not match:
        raise InvalidDateException()

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateException() from e


def normalize_date_of_birth(
    value: str | datetime,
    local_tz: timezone = DOB_LOCAL_TZ,
) -> datetime:
    """
    Convert a date of birth to its stored UTC instant.

    Args:
        value: ``YYYY-MM-DD`` string, or an instant that was already normalized
        local_tz: Timezone the calendar date is interpreted in

    Returns:
        Timezone-aware UTC datetime

    Raises:
        InvalidDateException: If the string is not a real calendar date
    """
    if isinstance(value, datetime):
        # Already an instant: only make sure it is expressed in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    if not isinstance(value, str):
        raise InvalidDateException()

    local_midnight = datetime.combine(parse_calendar_date(value), time.min, tzinfo=local_tz)
    return local_midnight.astimezone(UTC)
