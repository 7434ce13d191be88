"""Tests for the yearly recurrence generator"""
import pytest
from datetime import date

from prm.domain.recurrence import (
    generate_occurrence_dates, next_occurrence, yearly_rule, clipped_date,
)


class TestYearly:
    def test_occurrences_in_window(self):
        rule = yearly_rule(month=10, day=10, start_date=date(1980, 10, 10))
        dates = generate_occurrence_dates(rule, date(2025, 1, 1), date(2027, 12, 31))
        assert dates == [date(2025, 10, 10), date(2026, 10, 10), date(2027, 10, 10)]

    def test_nothing_before_start(self):
        rule = yearly_rule(month=10, day=10, start_date=date(2026, 10, 10))
        dates = generate_occurrence_dates(rule, date(2020, 1, 1), date(2026, 12, 31))
        assert dates == [date(2026, 10, 10)]

    def test_feb_29_clipped_in_common_years(self):
        rule = yearly_rule(month=2, day=29, start_date=date(2000, 2, 29))
        dates = generate_occurrence_dates(rule, date(2027, 1, 1), date(2028, 12, 31))
        assert dates == [date(2027, 2, 28), date(2028, 2, 29)]

    def test_interval(self):
        rule = yearly_rule(month=3, day=1, start_date=date(2020, 3, 1), interval=2)
        dates = generate_occurrence_dates(rule, date(2020, 1, 1), date(2025, 12, 31))
        assert dates == [date(2020, 3, 1), date(2022, 3, 1), date(2024, 3, 1)]

    def test_window_starts_mid_interval(self):
        rule = yearly_rule(month=5, day=5, start_date=date(2020, 5, 5), interval=3)
        dates = generate_occurrence_dates(rule, date(2024, 1, 1), date(2030, 1, 1))
        assert dates == [date(2026, 5, 5), date(2029, 5, 5)]


class TestNextOccurrence:
    def test_later_this_year(self):
        rule = yearly_rule(month=12, day=1, start_date=date(1990, 12, 1))
        assert next_occurrence(rule, date(2026, 10, 18)) == date(2026, 12, 1)

    def test_already_passed_this_year(self):
        rule = yearly_rule(month=10, day=10, start_date=date(1980, 10, 10))
        assert next_occurrence(rule, date(2026, 10, 18)) == date(2027, 10, 10)

    def test_today_counts(self):
        rule = yearly_rule(month=10, day=18, start_date=date(1980, 10, 18))
        assert next_occurrence(rule, date(2026, 10, 18)) == date(2026, 10, 18)

    def test_before_start_date(self):
        rule = yearly_rule(month=6, day=1, start_date=date(2029, 6, 1), interval=2)
        assert next_occurrence(rule, date(2026, 10, 18)) == date(2029, 6, 1)


class TestValidation:
    def test_invalid_interval(self):
        rule = yearly_rule(month=1, day=1, start_date=date(2020, 1, 1), interval=0)
        with pytest.raises(ValueError, match="interval"):
            generate_occurrence_dates(rule, date(2020, 1, 1), date(2021, 1, 1))

    def test_invalid_month(self):
        rule = yearly_rule(month=13, day=1, start_date=date(2020, 1, 1))
        with pytest.raises(ValueError, match="by_month"):
            generate_occurrence_dates(rule, date(2020, 1, 1), date(2021, 1, 1))

    def test_window_order(self):
        rule = yearly_rule(month=1, day=1, start_date=date(2020, 1, 1))
        with pytest.raises(ValueError, match="window_start"):
            generate_occurrence_dates(rule, date(2021, 1, 1), date(2020, 1, 1))


def test_clipped_date():
    assert clipped_date(2026, 2, 29) == date(2026, 2, 28)
    assert clipped_date(2028, 2, 29) == date(2028, 2, 29)
    assert clipped_date(2026, 4, 31) == date(2026, 4, 30)
