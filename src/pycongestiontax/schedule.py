"""Time-of-day fee lookup."""

from __future__ import annotations

from datetime import datetime, time

from .models import RuleSet


def fee_at(moment: time | datetime, rules: RuleSet) -> int:
    """Return the fee of the first configured range containing ``moment``.

    Ranges are scanned in declaration order and the first match wins, so
    overlapping ranges resolve the way the rule file lists them. Times not
    covered by any range are free.
    """
    if isinstance(moment, datetime):
        moment = moment.time()
    for time_range in rules.time_ranges:
        if time_range.contains(moment):
            return time_range.amount
    return 0
