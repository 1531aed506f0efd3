"""Week and month view filtering for repeatcal_lite.

Builds the list of event rows a calendar view shows: non-recurring events by
their stored date, recurring events expanded into the visible window.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable

from repeatcal_lite.calendar.lite_date_utils import (
    DateLike,
    add_days,
    days_in_month,
    parse_date,
    to_date_only,
)
from repeatcal_lite.calendar.lite_exceptions import LiteViewError
from repeatcal_lite.calendar.lite_instance_expander import generate_instances
from repeatcal_lite.calendar.lite_models import Event

logger = logging.getLogger(__name__)

VIEW_WEEK = "week"
VIEW_MONTH = "month"


def get_week_range(current: DateLike) -> tuple[datetime.date, datetime.date]:
    """Sunday..Saturday week containing ``current``."""
    day = to_date_only(current)
    # weekday(): Monday=0 .. Sunday=6
    start = add_days(day, -((day.weekday() + 1) % 7))
    return start, add_days(start, 6)


def get_month_range(current: DateLike) -> tuple[datetime.date, datetime.date]:
    """First..last day of the month containing ``current``."""
    day = to_date_only(current)
    last = days_in_month(day.year, day.month - 1)
    return day.replace(day=1), day.replace(day=last)


def get_view_range(current: DateLike, view: str) -> tuple[datetime.date, datetime.date]:
    """Window shown by ``view`` around ``current``.

    Raises:
        LiteViewError: If the view is neither "week" nor "month"
    """
    if view == VIEW_WEEK:
        return get_week_range(current)
    if view == VIEW_MONTH:
        return get_month_range(current)
    raise LiteViewError(f"Unknown calendar view: {view!r}")


def search_events(events: Iterable[Event], term: str) -> list[Event]:
    """Case-insensitive substring match on title, description and location."""
    needle = term.strip().lower()
    if not needle:
        return list(events)
    return [
        e
        for e in events
        if needle in e.title.lower()
        or needle in e.description.lower()
        or needle in e.location.lower()
    ]


def get_filtered_events(
    events: Iterable[Event],
    search_term: str,
    current_date: DateLike,
    view: str,
    cap: DateLike | None = None,
) -> list[Event]:
    """Rows visible in a week or month view, optionally narrowed by a search term.

    Args:
        events: Stored events
        search_term: Free-text filter (empty for none)
        current_date: Any date inside the displayed week or month
        view: "week" or "month"
        cap: Global horizon override for recurring expansion

    Returns:
        Matching rows sorted by date then start time
    """
    range_start, range_end = get_view_range(current_date, view)

    visible: list[Event] = []
    for event in search_events(events, search_term):
        if event.repeat.is_recurring:
            visible.extend(generate_instances(event, range_start, range_end, cap))
        elif range_start <= parse_date(event.date) <= range_end:
            visible.append(event)

    logger.debug(
        "%s view %s..%s: %d rows (search=%r)",
        view,
        range_start,
        range_end,
        len(visible),
        search_term,
    )
    return sorted(visible, key=lambda e: (e.date, e.start_time))
