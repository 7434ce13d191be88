"""Tests for birthday state resolution (unknown / age-based / partial / complete)"""
from datetime import date

from prm.application.birthday_request import UpdateBirthdayRequest
from prm.domain.birthday import (
    resolve_birthday,
    UnknownBirthday, AgeBasedBirthday, PartialDateBirthday, CompleteDateBirthday,
)

TODAY = date(2026, 10, 18)


def _request(**fields) -> UpdateBirthdayRequest:
    base = {"account_id": 1, "contact_id": 1, "author_id": 1}
    base.update(fields)
    return UpdateBirthdayRequest(**base)


class TestUnknown:
    def test_date_not_known(self):
        state = resolve_birthday(_request(is_date_known=False), TODAY)
        assert state == UnknownBirthday()
        assert state.has_month_day is False

    def test_date_fields_ignored_when_unknown(self):
        state = resolve_birthday(
            _request(is_date_known=False, day=10, month=10, year=1980, add_reminder=True),
            TODAY,
        )
        assert isinstance(state, UnknownBirthday)


class TestAgeBased:
    def test_year_derived_from_age(self):
        state = resolve_birthday(_request(is_date_known=True, is_age_based=True, age=10), TODAY)
        assert state == AgeBasedBirthday(age=10, year=2016)
        fields = state.special_date_fields()
        assert fields["is_age_based"] is True
        assert fields["is_year_unknown"] is True
        assert fields["year"] == 2016
        assert fields["day"] is None
        assert fields["month"] is None

    def test_age_zero(self):
        state = resolve_birthday(_request(is_date_known=True, is_age_based=True, age=0), TODAY)
        assert state.year == 2026

    def test_age_wins_over_explicit_date(self):
        state = resolve_birthday(
            _request(is_date_known=True, is_age_based=True, age=30, day=10, month=10, year=1980),
            TODAY,
        )
        assert isinstance(state, AgeBasedBirthday)
        assert state.year == 1996


class TestPartialDate:
    def test_month_day_without_year(self):
        state = resolve_birthday(_request(is_date_known=True, day=29, month=2), TODAY)
        assert state == PartialDateBirthday(month=2, day=29)
        fields = state.special_date_fields()
        assert fields["is_age_based"] is False
        assert fields["is_year_unknown"] is True
        assert fields["year"] is None
        assert state.has_month_day is True


class TestCompleteDate:
    def test_literal_values_kept(self):
        state = resolve_birthday(
            _request(is_date_known=True, is_age_based=False, day=10, month=10, year=1980),
            TODAY,
        )
        assert state == CompleteDateBirthday(year=1980, month=10, day=10)
        fields = state.special_date_fields()
        assert fields == {
            "is_age_based": False,
            "is_year_unknown": False,
            "day": 10,
            "month": 10,
            "year": 1980,
        }
