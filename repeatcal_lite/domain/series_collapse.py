"""Series collapse: one projected row per recurring event.

Listing consumers that want a single "next happening" per series, rather than a
full window expansion, rewrite each recurring event to its next occurrence on or
after "now". The projected row gets a distinct id so it can be told apart from
the stored base record, and editing/deletion layers can map it back.
"""

from __future__ import annotations

import datetime
import logging
import re
from collections.abc import Iterable

from repeatcal_lite.calendar.lite_date_utils import (
    DateLike,
    format_date,
    parse_date,
    to_date_only,
)
from repeatcal_lite.calendar.lite_exceptions import LiteDateParseError
from repeatcal_lite.calendar.lite_models import Event
from repeatcal_lite.calendar.lite_occurrence import next_occurrence

logger = logging.getLogger(__name__)

INSTANCE_ID_SEPARATOR = ":"

_OCCURRENCE_SUFFIX = re.compile(r"\d{4}-\d{2}-\d{2}")


def make_instance_id(base_id: str, occurrence: datetime.date) -> str:
    """Build the projected id ``"{base_id}:{YYYY-MM-DD}"``."""
    return f"{base_id}{INSTANCE_ID_SEPARATOR}{format_date(occurrence)}"


def split_instance_id(instance_id: str) -> tuple[str, datetime.date | None]:
    """Split a projected id into its base event id and occurrence date.

    Only a trailing ``:YYYY-MM-DD`` suffix is treated as an occurrence date, so
    base ids that themselves contain the separator are returned intact.

    Returns:
        (base_id, occurrence) where occurrence is None for plain ids
    """
    base_id, sep, suffix = instance_id.rpartition(INSTANCE_ID_SEPARATOR)
    if not sep or not _OCCURRENCE_SUFFIX.fullmatch(suffix):
        return instance_id, None
    try:
        return base_id, parse_date(suffix)
    except LiteDateParseError:
        return instance_id, None


def resolve_base_event_id(instance_id: str) -> str:
    """Return the stored event id behind a projected or plain id."""
    return split_instance_id(instance_id)[0]


def collapse_to_next_occurrence(events: Iterable[Event], now: DateLike) -> list[Event]:
    """Rewrite each recurring event to its next occurrence on or after ``now``.

    Non-recurring events and unrecognized repeat types pass through unchanged.
    Recurring rows keep every field of the base event except ``date`` (the next
    occurrence) and ``id`` (``"{id}:{date}"``). The rule's end date and the global
    cap are not applied here.

    Args:
        events: Stored events
        now: Reference instant; only its UTC calendar date is used

    Returns:
        One row per input event, in input order
    """
    today = to_date_only(now)
    rows: list[Event] = []
    for event in events:
        if not event.repeat.is_recurring:
            rows.append(event)
            continue

        anchor = parse_date(event.date)
        upcoming = next_occurrence(event.repeat.kind, anchor, today, event.repeat.interval)
        if upcoming is None:
            rows.append(event)
            continue

        rows.append(event.with_date(format_date(upcoming), make_instance_id(event.id, upcoming)))

    logger.debug("Collapsed %d events relative to %s", len(rows), today)
    return rows
