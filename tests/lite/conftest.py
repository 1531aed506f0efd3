from collections.abc import Generator
from types import SimpleNamespace
from typing import Any, Callable

import pytest

from repeatcal_lite.calendar.lite_models import Event

CAP_ENV_VARS = ("REPEATCAL_GLOBAL_REPEAT_CAP", "REPEATCAL_MAX_OCCURRENCES")


@pytest.fixture
def simple_settings() -> SimpleNamespace:
    """Lightweight settings object used across lite tests.

    Pins the global repeat cap far in the future so expansion tests are only
    bounded by their own windows and end dates unless they say otherwise.
    Fields:
      - global_repeat_cap: absolute expansion ceiling
      - max_occurrences_per_rule: per-rule instance limit
    """
    from datetime import date

    return SimpleNamespace(
        global_repeat_cap=date(2099, 12, 31),
        max_occurrences_per_rule=500,
    )


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for Event records with sensible defaults.

    Keyword overrides replace top-level fields; ``repeat`` overrides are merged
    into the default non-recurring rule.
    """

    def _make_event(**overrides: Any) -> Event:
        base: dict[str, Any] = {
            "id": "e0",
            "title": "Test event",
            "date": "2025-01-01",
            "startTime": "09:00",
            "endTime": "10:00",
            "description": "",
            "location": "",
            "category": "",
            "notificationTime": 10,
            "repeat": {"type": "none", "interval": 1},
        }
        repeat = {**base["repeat"], **overrides.pop("repeat", {})}
        return Event.model_validate({**base, **overrides, "repeat": repeat})

    return _make_event


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Ensure cap-related environment variables do not leak between tests."""
    for name in CAP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
