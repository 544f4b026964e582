"""pyCongestionTax package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .calculator import TaxCalculator, calculate
from .exceptions import (
    ConfigError,
    NetworkError,
    PyCongestionTaxError,
    RuleNotFoundError,
    RuleSourceError,
    TimestampError,
    ValidationError,
)
from .models import DailyWindow, RuleSet, TaxResult, TimeRange, VehicleType
from .rules.loader import RuleRegistry

try:
    __version__ = version("pycongestiontax")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "ConfigError",
    "DailyWindow",
    "NetworkError",
    "PyCongestionTaxError",
    "RuleNotFoundError",
    "RuleRegistry",
    "RuleSet",
    "RuleSourceError",
    "TaxCalculator",
    "TaxResult",
    "TimeRange",
    "TimestampError",
    "ValidationError",
    "VehicleType",
    "__version__",
    "calculate",
]
