"""Range enumeration of recurring events for repeatcal_lite.

Expands an event's repeat rule into the occurrences that fall inside a closed
query window, never past the rule's end date or the global repeat cap.
"""

import itertools
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from repeatcal_lite.core.config_manager import (
    DEFAULT_MAX_OCCURRENCES_PER_RULE,
    get_config_value,
    get_global_repeat_cap,
)

from .lite_date_utils import (
    DateLike,
    add_days,
    clamp_end_date,
    format_date,
    parse_date,
    sanitize_interval,
    to_date_only,
)
from .lite_models import Event, RepeatRule, RepeatType
from .lite_occurrence import (
    DATE_RANGE_ERRORS,
    add_months_until_has_day,
    next_occurrence,
    next_yearly_occurrence,
)

logger = logging.getLogger(__name__)


def resolve_stop_date(rule: RepeatRule, cap: Optional[DateLike] = None) -> date:
    """Effective last date for a rule: ``min(rule.end_date or cap, cap)``.

    Args:
        rule: Repeat rule whose optional end date is honoured
        cap: Global horizon; None uses the configured global repeat cap

    Returns:
        Inclusive stop date
    """
    cap_date = to_date_only(cap) if cap is not None else get_global_repeat_cap()
    end_date = parse_date(rule.end_date) if rule.end_date else None
    return clamp_end_date(end_date, cap_date)


def _advance(kind: RepeatType, anchor: date, cursor: date, interval: int) -> Optional[date]:
    """Occurrence after ``cursor``, or None past the last representable date."""
    if kind is RepeatType.MONTHLY:
        return add_months_until_has_day(cursor, interval, anchor.day)
    try:
        if kind is RepeatType.DAILY:
            return add_days(cursor, interval)
        if kind is RepeatType.WEEKLY:
            return add_days(cursor, 7 * interval)
        return next_yearly_occurrence(anchor, add_days(cursor, 1), interval)
    except DATE_RANGE_ERRORS:
        return None


def iter_occurrence_dates(
    rule: RepeatRule,
    anchor: date,
    range_start: DateLike,
    range_end: Optional[DateLike] = None,
    cap: Optional[DateLike] = None,
) -> Iterator[date]:
    """Yield occurrence dates of ``rule`` inside ``[range_start, range_end]``.

    Iteration begins at the first aligned occurrence on or after ``range_start``
    rather than at the anchor, so the work done is proportional to the window
    size divided by the period. Every step re-checks the stop date, which is
    bounded by the global cap even when ``range_end`` is None.

    Args:
        rule: Repeat rule to expand
        anchor: The event's stored date
        range_start: Inclusive window start
        range_end: Inclusive window end, or None for "up to the stop date"
        cap: Global horizon override (None uses the configured cap)

    Yields:
        Strictly increasing, duplicate-free occurrence dates
    """
    kind = rule.kind
    if kind is RepeatType.NONE:
        return

    start = to_date_only(range_start)
    limit = resolve_stop_date(rule, cap)
    if range_end is not None:
        limit = min(limit, to_date_only(range_end))

    interval = sanitize_interval(rule.interval)
    cursor = next_occurrence(kind, anchor, start, interval)
    while cursor is not None and cursor <= limit:
        if cursor >= start:
            yield cursor
        cursor = _advance(kind, anchor, cursor, interval)


def generate_instances(
    event: Event,
    range_start: DateLike,
    range_end: Optional[DateLike] = None,
    cap: Optional[DateLike] = None,
) -> list[Event]:
    """Materialize the occurrences of ``event`` inside a closed date window.

    Non-recurring events (and unrecognized repeat types) expand to an empty list;
    they are displayed by their stored date elsewhere.

    Args:
        event: Event whose ``date`` is the recurrence anchor
        range_start: Inclusive window start
        range_end: Inclusive window end (None is bounded by the cap only)
        cap: Global horizon override (None uses the configured cap)

    Returns:
        Copies of ``event`` with ``date`` replaced, ascending by date
    """
    anchor = parse_date(event.date)
    dates = iter_occurrence_dates(event.repeat, anchor, range_start, range_end, cap)
    return [event.with_date(format_date(d)) for d in dates]


@dataclass
class RepeatExpanderConfig:
    """Configuration for repeat expansion.

    Consolidates expansion settings with explicit defaults.
    """

    global_repeat_cap: Optional[date] = None
    max_occurrences_per_rule: int = DEFAULT_MAX_OCCURRENCES_PER_RULE

    @classmethod
    def from_settings(cls, settings: Any) -> "RepeatExpanderConfig":
        """Extract expansion configuration from a settings object or dict.

        Args:
            settings: Configuration object (or dict) with expansion settings

        Returns:
            RepeatExpanderConfig with values from settings or defaults
        """
        cap = get_config_value(settings, "global_repeat_cap")
        max_occurrences = get_config_value(
            settings, "max_occurrences_per_rule", DEFAULT_MAX_OCCURRENCES_PER_RULE
        )
        if max_occurrences < 0:
            logger.warning(
                "Invalid max_occurrences_per_rule=%r; using default %d",
                max_occurrences,
                DEFAULT_MAX_OCCURRENCES_PER_RULE,
            )
            max_occurrences = DEFAULT_MAX_OCCURRENCES_PER_RULE
        return cls(
            global_repeat_cap=to_date_only(cap) if cap is not None else None,
            max_occurrences_per_rule=max_occurrences,
        )


class LiteRepeatExpander:
    """Expands recurring events with a fixed configuration.

    Wraps generate_instances() with a per-rule occurrence ceiling and
    multi-event helpers used by listing layers.
    """

    def __init__(self, settings: Any = None):
        """Initialize expander with settings.

        Args:
            settings: Object or dict carrying ``global_repeat_cap`` and
                ``max_occurrences_per_rule``; None uses the defaults
        """
        config = RepeatExpanderConfig.from_settings(settings or {})
        self.global_repeat_cap = config.global_repeat_cap
        self.max_occurrences = config.max_occurrences_per_rule

        logger.debug(
            "LiteRepeatExpander initialized: global_repeat_cap=%s, max_occurrences=%d",
            self.global_repeat_cap,
            self.max_occurrences,
        )

    @property
    def cap(self) -> date:
        """Cap in effect for this expander."""
        return self.global_repeat_cap or get_global_repeat_cap()

    def expand_dates(
        self,
        event: Event,
        range_start: DateLike,
        range_end: Optional[DateLike] = None,
    ) -> list[date]:
        """Return occurrence dates of ``event`` in the window, at most max_occurrences."""
        dates = iter_occurrence_dates(
            event.repeat, parse_date(event.date), range_start, range_end, self.cap
        )
        limited = list(itertools.islice(dates, self.max_occurrences + 1))
        if len(limited) > self.max_occurrences:
            logger.warning(
                "Expansion of event %s limited to %d occurrences",
                event.id,
                self.max_occurrences,
            )
            limited = limited[: self.max_occurrences]
        return limited

    def expand_event(
        self,
        event: Event,
        range_start: DateLike,
        range_end: Optional[DateLike] = None,
    ) -> list[Event]:
        """Materialize instances of a single event inside the window."""
        instances = [
            event.with_date(format_date(d))
            for d in self.expand_dates(event, range_start, range_end)
        ]
        logger.debug(
            "Expanded event %s (%s, interval=%d): %d instances",
            event.id,
            event.repeat.type,
            event.repeat.interval,
            len(instances),
        )
        return instances

    def expand_events(
        self,
        events: Iterable[Event],
        range_start: DateLike,
        range_end: Optional[DateLike] = None,
    ) -> list[Event]:
        """Expand many events and return all instances sorted by date then start time.

        Non-recurring events contribute nothing.
        """
        expanded: list[Event] = []
        for event in events:
            expanded.extend(self.expand_event(event, range_start, range_end))
        return sorted(expanded, key=lambda e: (e.date, e.start_time))
