"""Congestion tax calculation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from itertools import groupby

from .aggregator import charge_for_day
from .models import RuleSet, TaxResult, VehicleType
from .rules.loader import RuleRegistry
from .tollfree import is_toll_free_date
from .util import normalize_vehicle_type, parse_passages

_LOGGER = logging.getLogger(__name__)

DEFAULT_CITY = "gothenburg"


def is_toll_free_vehicle(vehicle_type: VehicleType | str, rules: RuleSet) -> bool:
    return normalize_vehicle_type(vehicle_type) in rules.toll_free_vehicle_types


def calculate(
    vehicle_type: VehicleType | str,
    timestamps: Iterable[str],
    rules: RuleSet,
) -> TaxResult:
    """Calculate the congestion tax for a vehicle's passages.

    Toll-free vehicles return before any timestamp is parsed. Otherwise every
    timestamp must parse, passages are sorted, grouped per calendar day and
    charged day by day; toll-free days are recorded with a zero charge.
    """
    if is_toll_free_vehicle(vehicle_type, rules):
        _LOGGER.debug("Vehicle type %s is toll-free in %s", vehicle_type, rules.city)
        return TaxResult(total_tax=0, tax_by_date={}, toll_free=True)

    passages = parse_passages(list(timestamps))
    total_tax = 0
    tax_by_date: dict[date, int] = {}
    for day, group in groupby(passages, key=datetime.date):
        if is_toll_free_date(day, rules):
            tax_by_date[day] = 0
            continue
        daily_tax = charge_for_day(list(group), rules)
        tax_by_date[day] = daily_tax
        total_tax += daily_tax
    return TaxResult(total_tax=total_tax, tax_by_date=tax_by_date, toll_free=False)


class TaxCalculator:
    """Calculates congestion tax against the rule sets of a registry."""

    def __init__(self, registry: RuleRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def calculate(
        self,
        vehicle_type: VehicleType | str,
        timestamps: Iterable[str],
        rules: RuleSet,
    ) -> TaxResult:
        return calculate(vehicle_type, timestamps, rules)

    def calculate_for_city(
        self,
        vehicle_type: VehicleType | str,
        timestamps: Iterable[str],
        city: str = DEFAULT_CITY,
    ) -> TaxResult:
        rules = self._registry.get(city)
        _LOGGER.debug("Calculation for %s in %s started", vehicle_type, rules.city)
        result = calculate(vehicle_type, timestamps, rules)
        _LOGGER.debug(
            "Calculation for %s in %s completed (total=%s)",
            vehicle_type,
            rules.city,
            result.total_tax,
        )
        return result
