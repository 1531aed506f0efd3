"""repeatcal_lite - recurrence expansion for calendar events.

Computes the next occurrence of a repeating event and the occurrences that fall
inside a date window, bounded by a configurable global horizon. The package is a
pure library: no I/O, no wall-clock reads, no shared mutable state.
"""

__version__ = "0.1.0"

from repeatcal_lite.calendar.lite_date_utils import (
    clamp_end_date,
    days_in_month,
    format_date,
    is_leap_year,
    next_leap_year_at_or_after,
    parse_date,
    sanitize_interval,
    to_date_only,
)
from repeatcal_lite.calendar.lite_exceptions import (
    LiteDateParseError,
    LiteRepeatError,
    LiteViewError,
)
from repeatcal_lite.calendar.lite_instance_expander import (
    LiteRepeatExpander,
    generate_instances,
)
from repeatcal_lite.calendar.lite_models import Event, RepeatRule, RepeatType
from repeatcal_lite.calendar.lite_occurrence import (
    next_daily_occurrence,
    next_monthly_occurrence,
    next_occurrence,
    next_weekly_occurrence,
    next_yearly_occurrence,
)
from repeatcal_lite.core.config_manager import (
    DEFAULT_GLOBAL_REPEAT_CAP,
    get_global_repeat_cap,
)
from repeatcal_lite.domain.event_filter import get_filtered_events
from repeatcal_lite.domain.series_collapse import (
    collapse_to_next_occurrence,
    resolve_base_event_id,
)

__all__ = [
    "DEFAULT_GLOBAL_REPEAT_CAP",
    "Event",
    "LiteDateParseError",
    "LiteRepeatError",
    "LiteRepeatExpander",
    "LiteViewError",
    "RepeatRule",
    "RepeatType",
    "clamp_end_date",
    "collapse_to_next_occurrence",
    "days_in_month",
    "format_date",
    "generate_instances",
    "get_filtered_events",
    "get_global_repeat_cap",
    "is_leap_year",
    "next_daily_occurrence",
    "next_leap_year_at_or_after",
    "next_monthly_occurrence",
    "next_occurrence",
    "next_weekly_occurrence",
    "next_yearly_occurrence",
    "parse_date",
    "resolve_base_event_id",
    "sanitize_interval",
    "to_date_only",
]
