"""Toll-free calendar rules."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from .models import RuleSet

_SATURDAY = 5


def is_toll_free_date(day: date | datetime, rules: RuleSet) -> bool:
    """Return True when no passage on ``day`` is charged.

    A day is toll-free when it is a weekend day, falls in a toll-free month,
    is a public holiday, or is the day before a public holiday.
    """
    if isinstance(day, datetime):
        day = day.date()
    if day.weekday() >= _SATURDAY:
        return True
    if day.month in rules.toll_free_months:
        return True
    if day in rules.public_holidays:
        return True
    return day + timedelta(days=1) in rules.public_holidays
