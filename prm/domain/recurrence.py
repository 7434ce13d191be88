"""
Deterministic yearly recurrence generator for reminders.

Uses date only (no timezone).

Frequencies:
- YEARLY: specific month+day every N years (day clipped to the month's last day,
  so Feb 29 falls on Feb 28 in non-leap years)
"""
import calendar
from dataclasses import dataclass
from datetime import date, timedelta


VALID_FREQ = frozenset({"YEARLY"})

# Reminder.frequency_type -> RuleSpec.freq
FREQUENCY_TYPES = {"year": "YEARLY"}


@dataclass(frozen=True)
class RuleSpec:
    freq: str
    interval: int
    start_date: date
    by_month: int  # 1..12
    by_monthday_for_year: int  # 1..31


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clipped_date(year: int, month: int, day: int) -> date:
    """date(year, month, day) with day clipped to the month's length."""
    return date(year, month, min(day, last_day_of_month(year, month)))


def yearly_rule(month: int, day: int, start_date: date, interval: int = 1) -> RuleSpec:
    return RuleSpec(
        freq="YEARLY",
        interval=interval,
        start_date=start_date,
        by_month=month,
        by_monthday_for_year=day,
    )


def _validate_rule(rule: RuleSpec, window_start: date, window_end: date) -> None:
    if rule.interval < 1:
        raise ValueError("interval must be >= 1")
    if window_start > window_end:
        raise ValueError("window_start must be <= window_end")
    if rule.freq not in VALID_FREQ:
        raise ValueError(f"invalid freq: {rule.freq}")
    if not 1 <= rule.by_month <= 12:
        raise ValueError("by_month must be in 1..12")
    if not 1 <= rule.by_monthday_for_year <= 31:
        raise ValueError("by_monthday_for_year must be in 1..31")


def _yearly(rule: RuleSpec, window_start: date, window_end: date) -> list[date]:
    out: list[date] = []
    # Skip whole periods that end before the window
    k = max(0, (window_start.year - rule.start_date.year) // rule.interval - 1)
    while True:
        y = rule.start_date.year + k * rule.interval
        d = clipped_date(y, rule.by_month, rule.by_monthday_for_year)
        if d < rule.start_date:
            k += 1
            continue
        if d > window_end:
            break
        if d >= window_start:
            out.append(d)
        k += 1
    return out


def generate_occurrence_dates(
    rule: RuleSpec,
    window_start: date,
    window_end: date,
) -> list[date]:
    """Generate occurrence dates in [window_start, window_end] (inclusive).
    Deterministic, sorted ascending."""
    _validate_rule(rule, window_start, window_end)
    if rule.freq == "YEARLY":
        return _yearly(rule, window_start, window_end)
    raise ValueError(f"unhandled freq: {rule.freq}")


def next_occurrence(rule: RuleSpec, on_or_after: date) -> date:
    """First occurrence on or after the given date (the window always spans one period)."""
    window_end = max(on_or_after, rule.start_date) + timedelta(days=366 * rule.interval)
    dates = generate_occurrence_dates(rule, on_or_after, window_end)
    return dates[0]
