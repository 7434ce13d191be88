"""
Date helpers
"""
from datetime import date, datetime
from zoneinfo import ZoneInfo

from prm.config import get_settings


def local_today() -> date:
    """Today in the configured TIMEZONE (used as "current year" for age-based birthdays)."""
    return datetime.now(ZoneInfo(get_settings().TIMEZONE)).date()
