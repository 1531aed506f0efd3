"""Data models for recurring calendar events - repeatcal_lite version."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .lite_date_utils import sanitize_interval


class RepeatType(str, Enum):
    """Supported recurrence kinds."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def resolve(cls, value: Any) -> "RepeatType":
        """Map a raw repeat type to a known kind, treating unknown kinds as NONE."""
        try:
            return cls(value)
        except ValueError:
            return cls.NONE


class RepeatRule(BaseModel):
    """Recurrence rule attached to an event."""

    # Kept as a plain string so unknown kinds survive a round trip untouched
    type: str = Field(default=RepeatType.NONE.value, description="Recurrence kind")
    interval: int = Field(default=1, description="Periods between occurrences (>= 1)")
    end_date: Optional[str] = Field(
        default=None, description="Inclusive last date (YYYY-MM-DD) chosen by the author"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> str:
        if isinstance(value, RepeatType):
            return value.value
        return RepeatType.NONE.value if value is None else str(value)

    @field_validator("interval", mode="before")
    @classmethod
    def _sanitize_interval(cls, value: Any) -> int:
        return sanitize_interval(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def _blank_end_date(cls, value: Any) -> Optional[str]:
        # Forms submit "" when no end date was chosen
        return value or None

    @property
    def kind(self) -> RepeatType:
        """Resolved recurrence kind (NONE for unrecognized types)."""
        return RepeatType.resolve(self.type)

    @property
    def is_recurring(self) -> bool:
        """True for the four periodic kinds."""
        return self.kind is not RepeatType.NONE


class Event(BaseModel):
    """Calendar event record exchanged with the persistence and UI layers.

    ``date`` is the recurrence anchor for repeating events. Instances produced by
    expansion are copies of the owning event with ``date`` (and, for series
    collapse, ``id``) replaced.
    """

    id: str = Field(..., description="Event ID")
    title: str = Field(default="", description="Event title")
    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    start_time: str = Field(default="", description="Local start time (HH:MM)")
    end_time: str = Field(default="", description="Local end time (HH:MM)")
    description: str = Field(default="", description="Free-form description")
    location: str = Field(default="", description="Location name")
    category: str = Field(default="", description="Category label")
    notification_time: int = Field(default=0, description="Reminder lead time in minutes")
    repeat: RepeatRule = Field(default_factory=RepeatRule, description="Recurrence rule")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def with_date(self, date_str: str, event_id: Optional[str] = None) -> "Event":
        """Return a copy for one occurrence, leaving this event untouched."""
        update: dict[str, Any] = {"date": date_str}
        if event_id is not None:
            update["id"] = event_id
        return self.model_copy(update=update)

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the camelCase field names of the JSON interface."""
        return self.model_dump(by_alias=True, exclude_none=True)
