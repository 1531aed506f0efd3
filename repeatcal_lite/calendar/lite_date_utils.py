"""Calendar arithmetic primitives for repeatcal_lite.

All helpers work at UTC calendar-date granularity: values are ``datetime.date``
objects and two values compare equal iff they name the same calendar day.
"""

import calendar
import logging
from datetime import UTC, date, datetime, timedelta
from typing import Any, Optional, Union

from dateutil.parser import isoparser
from dateutil.relativedelta import relativedelta

from .lite_exceptions import LiteDateParseError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

_isoparser = isoparser()

DateLike = Union[date, datetime, str]


def parse_date(text: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date.

    Args:
        text: ISO calendar date string

    Returns:
        Parsed date

    Raises:
        LiteDateParseError: If the string is not a valid ISO calendar date
    """
    try:
        return _isoparser.parse_isodate(text)
    except (TypeError, ValueError) as e:
        raise LiteDateParseError(f"Invalid calendar date: {text!r}") from e


def format_date(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return value.strftime(DATE_FORMAT)


def to_date_only(value: DateLike) -> date:
    """Normalize a date, datetime or ISO date string to its UTC calendar date.

    Timezone-aware datetimes are converted to UTC before the time of day is
    dropped; naive datetimes are assumed to already be UTC.

    Args:
        value: Date-like value to normalize

    Returns:
        Calendar date at UTC-midnight granularity
    """
    if isinstance(value, str):
        return parse_date(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date()
    return value


def add_days(value: date, days: int) -> date:
    """Return ``value`` shifted by a whole number of days."""
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Return the first day of the month ``months`` after ``value``'s month.

    The result is always day 1 so month stepping never rolls over or clamps.
    """
    return value.replace(day=1) + relativedelta(months=months)


def month_index(value: date) -> int:
    """Absolute month number used for interval alignment (year * 12 + month)."""
    return value.year * 12 + (value.month - 1)


def is_leap_year(year: int) -> bool:
    """True iff divisible by 400, or divisible by 4 and not by 100."""
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def next_leap_year_at_or_after(year: int) -> int:
    """Return ``year`` when it is a leap year, otherwise the next leap year."""
    # Leap years are at most 8 years apart (e.g. 1896 -> 1904).
    while not is_leap_year(year):
        year += 1
    return year


def days_in_month(year: int, month_index: int) -> int:
    """Number of days in a month.

    Args:
        year: Calendar year
        month_index: Zero-based month (0 = January, 1 = February, ...)

    Returns:
        28-31 depending on the month and leap year
    """
    return calendar.monthrange(year, month_index + 1)[1]


def has_day(year: int, month_index: int, day: int) -> bool:
    """True if the given zero-based month contains ``day``."""
    return day <= days_in_month(year, month_index)


def clamp_end_date(end_date: Optional[date], cap: date) -> date:
    """Return the earlier of ``end_date`` and ``cap`` (``cap`` when no end date)."""
    if end_date is not None and end_date < cap:
        return end_date
    return cap


def sanitize_interval(interval: Any) -> int:
    """Coerce a repeat interval to a positive integer.

    Missing, non-positive and non-integer values become 1. Integral floats
    (``2.0``) are accepted as their integer value.
    """
    if isinstance(interval, bool):
        return 1
    if isinstance(interval, float) and interval.is_integer():
        interval = int(interval)
    if not isinstance(interval, int):
        if interval is not None:
            logger.debug("Non-integer repeat interval %r sanitized to 1", interval)
        return 1
    return max(1, interval)
