"""Public data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import StrEnum
from types import MappingProxyType


class VehicleType(StrEnum):
    CAR = "CAR"
    MOTORCYCLE = "MOTORCYCLE"
    BUS = "BUS"
    EMERGENCY = "EMERGENCY"
    DIPLOMAT = "DIPLOMAT"
    MILITARY = "MILITARY"
    FOREIGN = "FOREIGN"


@dataclass(frozen=True, slots=True)
class TimeRange:
    start: time
    end: time
    amount: int

    @property
    def wraps_midnight(self) -> bool:
        return self.end < self.start

    def contains(self, moment: time) -> bool:
        """Return True when ``moment`` falls inside the range, both ends inclusive."""
        if self.wraps_midnight:
            return moment >= self.start or moment <= self.end
        return self.start <= moment <= self.end


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Tax rules for one city and year.

    Built once by the loader with every derived set already normalized, so
    lookups during a calculation are exact-match and the instance can be
    shared freely between callers.
    """

    city: str
    display_name: str
    year: int
    currency: str
    max_daily_charge: int
    single_charge_window_minutes: int
    toll_free_vehicle_types: frozenset[VehicleType]
    toll_free_months: frozenset[int]
    time_ranges: tuple[TimeRange, ...]
    public_holidays: frozenset[date]


@dataclass(frozen=True, slots=True)
class DailyWindow:
    start: datetime
    passages: tuple[datetime, ...]
    max_fee: int


@dataclass(frozen=True, slots=True)
class TaxResult:
    total_tax: int
    tax_by_date: Mapping[date, int] = field(default_factory=dict)
    toll_free: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "tax_by_date", MappingProxyType(dict(self.tax_by_date)))

    def to_dict(self) -> dict:
        return {
            "totalTax": self.total_tax,
            "taxByDate": {day.isoformat(): amount for day, amount in self.tax_by_date.items()},
            "tollFree": self.toll_free,
        }
