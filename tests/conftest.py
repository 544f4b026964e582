from __future__ import annotations

import copy

import pytest

from pycongestiontax.models import RuleSet
from pycongestiontax.rules.loader import RuleRegistry, build_rule_set

BASE_RULES = {
    "city": "Testville",
    "year": 2013,
    "currency": "SEK",
    "maxDailyTax": 60,
    "singleChargeWindowMinutes": 60,
    "tollFreeVehicleTypes": ["EMERGENCY", "bus"],
    "tollFreeMonths": [7],
    "timeRanges": [
        {"from": "06:00", "to": "06:29", "amount": 8},
        {"from": "06:30", "to": "06:59", "amount": 13},
        {"from": "07:00", "to": "07:59", "amount": 18},
        {"from": "18:30", "to": "05:59", "amount": 0},
    ],
    "publicHolidays": ["2013-03-29", "2013-05-01"],
}


def rules_data(**overrides: object) -> dict:
    data = copy.deepcopy(BASE_RULES)
    data.update(overrides)
    return data


@pytest.fixture
def rules() -> RuleSet:
    return build_rule_set(rules_data())


@pytest.fixture
def gothenburg() -> RuleSet:
    return RuleRegistry.from_package().get("gothenburg")


@pytest.fixture
def make_rules():
    def _make(**overrides: object) -> RuleSet:
        return build_rule_set(rules_data(**overrides))

    return _make
