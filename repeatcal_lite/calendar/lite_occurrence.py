"""Next-occurrence calculators for repeatcal_lite.

Each calculator answers the same question for one recurrence kind: given the
anchor date (the event's stored date), a reference date and an interval, what is
the earliest occurrence that is on or after both the anchor and the reference
date while staying aligned to the interval?

Common contract:
    - ``from_date <= anchor`` returns ``anchor`` (the anchor always counts)
    - the interval is sanitized first, so degenerate values never raise
    - None means there is no further occurrence before ``date.max``
"""

import logging
from datetime import date
from typing import Any, Callable, Optional

from .lite_date_utils import (
    add_days,
    add_months,
    has_day,
    is_leap_year,
    month_index,
    next_leap_year_at_or_after,
    sanitize_interval,
)
from .lite_exceptions import LiteRepeatError
from .lite_models import RepeatType

logger = logging.getLogger(__name__)

# 400 years of months: every aligned month sequence revisits the anchor's
# calendar month in a year congruent to the anchor's modulo 400 within this many
# steps, so a month containing the anchor's day is always found.
MAX_MONTH_STEPS = 4800

# Raised by date arithmetic that leaves the representable range (years 1..9999)
DATE_RANGE_ERRORS = (OverflowError, ValueError)


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def is_feb_29(value: date) -> bool:
    """True for a February 29 date (which only exists in leap years)."""
    return value.month == 2 and value.day == 29 and is_leap_year(value.year)


def next_daily_occurrence(anchor: date, from_date: date, interval: Any) -> Optional[date]:
    """Earliest ``anchor + k * interval`` days that is on or after ``from_date``."""
    if from_date <= anchor:
        return anchor
    step = sanitize_interval(interval)
    elapsed = (from_date - anchor).days
    try:
        return add_days(anchor, _ceil_div(elapsed, step) * step)
    except DATE_RANGE_ERRORS:
        return None


def next_weekly_occurrence(anchor: date, from_date: date, interval: Any) -> Optional[date]:
    """Earliest date on the anchor's weekday, ``interval`` weeks apart, on/after ``from_date``."""
    if from_date <= anchor:
        return anchor
    step = sanitize_interval(interval)
    try:
        shift = (anchor.weekday() - from_date.weekday()) % 7
        candidate = add_days(from_date, shift)
        remainder = ((candidate - anchor).days // 7) % step
        if remainder:
            candidate = add_days(candidate, 7 * (step - remainder))
    except DATE_RANGE_ERRORS:
        return None
    return candidate


def add_months_until_has_day(cursor: date, interval: Any, day: int) -> Optional[date]:
    """Step ``interval`` months from ``cursor`` until a month contains ``day``.

    Months lacking the day (a 31st in April, a 29th in a common February) are
    skipped entirely; the result is never clamped to a month's last day.

    Args:
        cursor: Current occurrence; only its year and month are used
        interval: Months per step (sanitized)
        day: Required day-of-month

    Returns:
        First date at least one step after ``cursor`` carrying ``day``, or None
        when stepping runs past the last representable year
    """
    step = sanitize_interval(interval)
    month = cursor.replace(day=1)
    for _ in range(MAX_MONTH_STEPS):
        try:
            month = add_months(month, step)
        except DATE_RANGE_ERRORS:
            return None
        if has_day(month.year, month.month - 1, day):
            return month.replace(day=day)
    raise LiteRepeatError(f"No month with day {day} within {MAX_MONTH_STEPS} steps")


def next_monthly_occurrence(anchor: date, from_date: date, interval: Any) -> Optional[date]:
    """Earliest date on the anchor's day-of-month, in an aligned month, on/after ``from_date``."""
    if from_date <= anchor:
        return anchor
    step = sanitize_interval(interval)
    day = anchor.day

    # First aligned month at or after from_date's month
    offset = month_index(from_date) - month_index(anchor)
    try:
        month = add_months(anchor, _ceil_div(offset, step) * step)
        for _ in range(MAX_MONTH_STEPS):
            if has_day(month.year, month.month - 1, day):
                candidate = month.replace(day=day)
                if candidate >= from_date:
                    return candidate
            month = add_months(month, step)
    except DATE_RANGE_ERRORS:
        return None
    raise LiteRepeatError(f"No monthly occurrence within {MAX_MONTH_STEPS} steps")


def next_yearly_occurrence(anchor: date, from_date: date, interval: Any) -> Optional[date]:
    """Earliest anniversary of the anchor, ``interval`` years apart, on/after ``from_date``.

    Years are aligned to ``anchor.year + k * interval``, so with ``interval > 1``
    the result may be later than "from_date's year plus one interval".
    February 29 anchors ignore the interval and land on the next leap-year
    February 29 that is on or after ``from_date``.
    """
    if from_date <= anchor:
        return anchor
    step = sanitize_interval(interval)

    try:
        if is_feb_29(anchor):
            year = next_leap_year_at_or_after(from_date.year)
            candidate = date(year, 2, 29)
            if candidate < from_date:
                candidate = date(next_leap_year_at_or_after(year + 1), 2, 29)
            return candidate

        year = anchor.year + _ceil_div(from_date.year - anchor.year, step) * step
        candidate = anchor.replace(year=year)
        if candidate < from_date:
            candidate = anchor.replace(year=year + step)
    except DATE_RANGE_ERRORS:
        return None
    return candidate


NextOccurrenceFn = Callable[[date, date, Any], Optional[date]]

CALCULATORS: dict[RepeatType, NextOccurrenceFn] = {
    RepeatType.DAILY: next_daily_occurrence,
    RepeatType.WEEKLY: next_weekly_occurrence,
    RepeatType.MONTHLY: next_monthly_occurrence,
    RepeatType.YEARLY: next_yearly_occurrence,
}


def next_occurrence(kind: Any, anchor: date, from_date: date, interval: Any) -> Optional[date]:
    """Dispatch to the calculator for ``kind``.

    Returns:
        Next occurrence, or None for non-recurring and unrecognized kinds and
        when no occurrence fits before ``date.max``
    """
    calculator = CALCULATORS.get(RepeatType.resolve(kind))
    if calculator is None:
        logger.debug("No next-occurrence calculator for repeat type %r", kind)
        return None
    return calculator(anchor, from_date, interval)
