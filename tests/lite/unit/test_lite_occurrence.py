"""
Unit tests for repeatcal_lite.calendar.lite_occurrence.

Covers:
- next_daily_occurrence() / next_weekly_occurrence()
- next_monthly_occurrence() and add_months_until_has_day()
- next_yearly_occurrence() including February 29 anchors
- next_occurrence() dispatch
"""
from datetime import date

import pytest

from repeatcal_lite.calendar import lite_occurrence
from repeatcal_lite.calendar.lite_exceptions import LiteRepeatError
from repeatcal_lite.calendar.lite_occurrence import (
    add_months_until_has_day,
    next_daily_occurrence,
    next_monthly_occurrence,
    next_occurrence,
    next_weekly_occurrence,
    next_yearly_occurrence,
)

pytestmark = pytest.mark.unit

CALCULATORS = [
    next_daily_occurrence,
    next_weekly_occurrence,
    next_monthly_occurrence,
    next_yearly_occurrence,
]


@pytest.mark.parametrize("calculator", CALCULATORS)
@pytest.mark.parametrize("from_date", [date(2024, 12, 1), date(2025, 1, 15)])
def test_from_on_or_before_anchor_returns_anchor(calculator, from_date: date) -> None:
    """The anchor itself always counts, whatever the interval."""
    anchor = date(2025, 1, 15)
    assert calculator(anchor, from_date, 3) == anchor


class TestDaily:
    def test_interval_one_returns_from(self) -> None:
        assert next_daily_occurrence(date(2025, 1, 1), date(2025, 1, 3), 1) == date(2025, 1, 3)

    def test_interval_rounds_up_to_aligned_step(self) -> None:
        assert next_daily_occurrence(date(2025, 1, 1), date(2025, 1, 5), 3) == date(2025, 1, 7)

    def test_exactly_aligned_from(self) -> None:
        assert next_daily_occurrence(date(2025, 1, 1), date(2025, 1, 7), 3) == date(2025, 1, 7)

    @pytest.mark.parametrize("interval", [0, -1, None, "x", 1.5])
    def test_degenerate_interval_behaves_like_one(self, interval: object) -> None:
        assert next_daily_occurrence(date(2025, 1, 1), date(2025, 1, 3), interval) == date(2025, 1, 3)


class TestWeekly:
    def test_next_same_weekday(self) -> None:
        # 2025-01-01 is a Wednesday, 2025-01-06 a Monday
        assert next_weekly_occurrence(date(2025, 1, 1), date(2025, 1, 6), 1) == date(2025, 1, 8)

    def test_from_on_anchor_weekday(self) -> None:
        assert next_weekly_occurrence(date(2025, 1, 1), date(2025, 1, 8), 1) == date(2025, 1, 8)

    def test_biweekly_skips_unaligned_week(self) -> None:
        assert next_weekly_occurrence(date(2025, 1, 1), date(2025, 1, 6), 2) == date(2025, 1, 15)

    def test_biweekly_aligned_week(self) -> None:
        assert next_weekly_occurrence(date(2025, 1, 1), date(2025, 1, 15), 2) == date(2025, 1, 15)

    def test_result_keeps_weekday(self) -> None:
        result = next_weekly_occurrence(date(2025, 1, 1), date(2025, 7, 19), 3)
        assert result.weekday() == date(2025, 1, 1).weekday()
        assert ((result - date(2025, 1, 1)).days // 7) % 3 == 0
        assert result >= date(2025, 7, 19)


class TestMonthly:
    def test_day_31_skips_february(self) -> None:
        assert next_monthly_occurrence(date(2025, 1, 31), date(2025, 2, 10), 1) == date(2025, 3, 31)

    def test_day_31_never_clamped_to_month_end(self) -> None:
        assert next_monthly_occurrence(date(2025, 3, 31), date(2025, 4, 1), 1) == date(2025, 5, 31)

    def test_same_month_past_day_moves_on(self) -> None:
        assert next_monthly_occurrence(date(2025, 1, 15), date(2025, 1, 16), 1) == date(2025, 2, 15)

    def test_day_30_skips_leap_february(self) -> None:
        assert next_monthly_occurrence(date(2024, 1, 30), date(2024, 2, 1), 1) == date(2024, 3, 30)

    def test_day_29_lands_on_leap_february(self) -> None:
        assert next_monthly_occurrence(date(2024, 1, 29), date(2024, 2, 1), 1) == date(2024, 2, 29)

    def test_interval_alignment(self) -> None:
        assert next_monthly_occurrence(date(2025, 1, 31), date(2025, 2, 1), 2) == date(2025, 3, 31)
        assert next_monthly_occurrence(date(2025, 1, 31), date(2025, 4, 1), 2) == date(2025, 5, 31)

    def test_quarterly_across_year_boundary(self) -> None:
        assert next_monthly_occurrence(date(2025, 11, 10), date(2025, 12, 1), 3) == date(2026, 2, 10)


class TestAddMonthsUntilHasDay:
    def test_skips_february_for_day_31(self) -> None:
        assert add_months_until_has_day(date(2025, 1, 31), 1, 31) == date(2025, 3, 31)

    def test_skips_april(self) -> None:
        assert add_months_until_has_day(date(2025, 3, 31), 1, 31) == date(2025, 5, 31)

    def test_plain_step(self) -> None:
        assert add_months_until_has_day(date(2025, 1, 15), 2, 15) == date(2025, 3, 15)


class TestYearly:
    def test_feb_29_goes_to_next_leap_year(self) -> None:
        assert next_yearly_occurrence(date(2024, 2, 29), date(2025, 2, 28), 1) == date(2028, 2, 29)

    def test_feb_29_same_leap_year_qualifies(self) -> None:
        assert next_yearly_occurrence(date(2024, 2, 29), date(2028, 2, 29), 1) == date(2028, 2, 29)

    def test_feb_29_after_leap_day_moves_to_following_leap_year(self) -> None:
        assert next_yearly_occurrence(date(2024, 2, 29), date(2028, 3, 1), 1) == date(2032, 2, 29)

    def test_feb_29_skips_non_leap_century(self) -> None:
        assert next_yearly_occurrence(date(2096, 2, 29), date(2097, 1, 1), 1) == date(2104, 2, 29)

    def test_feb_29_ignores_interval(self) -> None:
        assert next_yearly_occurrence(date(2024, 2, 29), date(2025, 1, 1), 3) == date(2028, 2, 29)

    def test_anniversary_in_from_year(self) -> None:
        assert next_yearly_occurrence(date(2020, 6, 15), date(2021, 1, 1), 1) == date(2021, 6, 15)

    def test_anniversary_passed_advances_interval(self) -> None:
        assert next_yearly_occurrence(date(2020, 6, 15), date(2021, 7, 1), 1) == date(2022, 6, 15)

    def test_interval_alignment(self) -> None:
        assert next_yearly_occurrence(date(2020, 6, 15), date(2021, 1, 1), 2) == date(2022, 6, 15)
        assert next_yearly_occurrence(date(2020, 6, 15), date(2022, 7, 1), 2) == date(2024, 6, 15)


class TestDispatch:
    def test_known_kind(self) -> None:
        assert next_occurrence("weekly", date(2025, 1, 1), date(2025, 1, 6), 1) == date(2025, 1, 8)

    @pytest.mark.parametrize("kind", ["none", "hourly", "", None])
    def test_non_recurring_or_unknown_returns_none(self, kind: object) -> None:
        assert next_occurrence(kind, date(2025, 1, 1), date(2025, 1, 6), 1) is None


class TestBeyondLastRepresentableDate:
    """Steps that would pass date.max mean there is no further occurrence."""

    @pytest.mark.parametrize(
        "calculator,anchor,from_date,interval",
        [
            (next_daily_occurrence, date(2025, 1, 1), date(2025, 6, 1), 10**7),
            (next_weekly_occurrence, date(2025, 1, 1), date(2025, 1, 6), 10**6),
            (next_monthly_occurrence, date(2025, 1, 15), date(2025, 2, 1), 10**6),
            (next_yearly_occurrence, date(2025, 1, 1), date(2025, 6, 1), 10000),
            (next_yearly_occurrence, date(2024, 2, 29), date(9997, 1, 1), 1),
            (next_yearly_occurrence, date(2020, 6, 15), date(9999, 7, 1), 1),
        ],
    )
    def test_returns_none(self, calculator, anchor: date, from_date: date, interval: int) -> None:
        assert calculator(anchor, from_date, interval) is None

    def test_add_months_until_has_day_returns_none(self) -> None:
        assert add_months_until_has_day(date(9999, 12, 15), 1, 15) is None

    def test_dispatch_returns_none(self) -> None:
        assert next_occurrence("yearly", date(2025, 1, 1), date(2025, 6, 1), 10000) is None


class TestMonthSearchBound:
    def test_add_months_until_has_day_raises_when_exhausted(self, monkeypatch) -> None:
        monkeypatch.setattr(lite_occurrence, "MAX_MONTH_STEPS", 1)
        with pytest.raises(LiteRepeatError):
            add_months_until_has_day(date(2025, 1, 31), 1, 31)

    def test_next_monthly_raises_when_exhausted(self, monkeypatch) -> None:
        monkeypatch.setattr(lite_occurrence, "MAX_MONTH_STEPS", 1)
        with pytest.raises(LiteRepeatError):
            next_monthly_occurrence(date(2025, 1, 31), date(2025, 2, 1), 1)
