"""Single-charge window grouping and the daily cap."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .models import DailyWindow, RuleSet
from .schedule import fee_at
from .util import minutes_between


def split_windows(sorted_passages: Sequence[datetime], rules: RuleSet) -> list[DailyWindow]:
    """Group one day's ascending passages into single-charge windows.

    Membership is measured from the window's first passage, never from the
    previous one, and a passage exactly ``single_charge_window_minutes`` after
    the start still belongs to the window.
    """
    windows: list[DailyWindow] = []
    window_start: datetime | None = None
    members: list[datetime] = []
    window_max_fee = 0
    for passage in sorted_passages:
        fee = fee_at(passage, rules)
        if window_start is None:
            window_start = passage
            members = [passage]
            window_max_fee = fee
            continue
        if minutes_between(window_start, passage) <= rules.single_charge_window_minutes:
            members.append(passage)
            window_max_fee = max(window_max_fee, fee)
            continue
        windows.append(DailyWindow(window_start, tuple(members), window_max_fee))
        window_start = passage
        members = [passage]
        window_max_fee = fee
    if window_start is not None:
        windows.append(DailyWindow(window_start, tuple(members), window_max_fee))
    return windows


def charge_for_day(sorted_passages: Sequence[datetime], rules: RuleSet) -> int:
    if not sorted_passages:
        return 0
    daily_total = sum(window.max_fee for window in split_windows(sorted_passages, rules))
    return min(daily_total, rules.max_daily_charge)
