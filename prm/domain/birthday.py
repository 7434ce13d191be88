"""
Birthday state - tagged union of the four ways a birthday can be known.

  UnknownBirthday       - no special date, no reminder
  AgeBasedBirthday      - only the age is known; year = today.year - age
  PartialDateBirthday   - month + day, year unknown
  CompleteDateBirthday  - day + month + year

Precedence: an age-based request wins over explicit day/month/year.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Union


@dataclass(frozen=True)
class UnknownBirthday:
    kind = "unknown"
    has_month_day = False


@dataclass(frozen=True)
class AgeBasedBirthday:
    age: int
    year: int

    kind = "age_based"
    has_month_day = False

    def special_date_fields(self) -> Dict[str, Any]:
        return {
            "is_age_based": True,
            "is_year_unknown": True,
            "day": None,
            "month": None,
            "year": self.year,
        }


@dataclass(frozen=True)
class PartialDateBirthday:
    month: int
    day: int

    kind = "partial_date"
    has_month_day = True

    def special_date_fields(self) -> Dict[str, Any]:
        return {
            "is_age_based": False,
            "is_year_unknown": True,
            "day": self.day,
            "month": self.month,
            "year": None,
        }


@dataclass(frozen=True)
class CompleteDateBirthday:
    year: int
    month: int
    day: int

    kind = "complete_date"
    has_month_day = True

    def special_date_fields(self) -> Dict[str, Any]:
        return {
            "is_age_based": False,
            "is_year_unknown": False,
            "day": self.day,
            "month": self.month,
            "year": self.year,
        }


BirthdayState = Union[UnknownBirthday, AgeBasedBirthday, PartialDateBirthday, CompleteDateBirthday]


def resolve_birthday(request, today: date) -> BirthdayState:
    """
    Map a validated birthday request onto one of the four birthday states.

    `request` is any object exposing is_date_known, is_age_based, age,
    day, month and year (see UpdateBirthdayRequest). Validation has already
    guaranteed the fields needed by the chosen mode are present.
    """
    if not request.is_date_known:
        return UnknownBirthday()

    if request.is_age_based:
        return AgeBasedBirthday(age=request.age, year=today.year - request.age)

    if request.year is None:
        return PartialDateBirthday(month=request.month, day=request.day)

    return CompleteDateBirthday(year=request.year, month=request.month, day=request.day)
