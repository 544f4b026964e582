"""Rule file discovery, validation and the per-city registry."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Iterator
from datetime import date
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from ..exceptions import ConfigError, RuleNotFoundError, ValidationError
from ..models import RuleSet, TimeRange, VehicleType
from ..util import normalize_vehicle_type, parse_iso_date, parse_time_of_day

_LOGGER = logging.getLogger(__name__)

RULES_FILENAME = "rules.json"
SCHEMA_FILENAME = "rules.schema.json"
_REQUIRED_KEYS = (
    "city",
    "year",
    "currency",
    "maxDailyTax",
    "singleChargeWindowMinutes",
    "tollFreeVehicleTypes",
    "tollFreeMonths",
    "timeRanges",
    "publicHolidays",
)
_RULE_CACHE: tuple[RuleSet, ...] | None = None


def _rules_root() -> Traversable:
    return resources.files("pycongestiontax.rules")


def load_rules_schema() -> dict:
    schema_path = _rules_root() / SCHEMA_FILENAME
    return json.loads(schema_path.read_text(encoding="utf-8"))


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_list(data: dict, key: str) -> list:
    value = data[key]
    if not isinstance(value, list):
        raise ConfigError(f"Rule file {key} must be a list.")
    return value


def _build_vehicle_types(values: list) -> frozenset[VehicleType]:
    try:
        return frozenset(normalize_vehicle_type(value) for value in values)
    except ValidationError as exc:
        raise ConfigError(f"Rule file tollFreeVehicleTypes is invalid: {exc}") from exc


def _build_months(values: list) -> frozenset[int]:
    for month in values:
        if not _is_int(month) or not 1 <= month <= 12:
            raise ConfigError("Rule file tollFreeMonths must contain month numbers 1-12.")
    return frozenset(values)


def _build_time_ranges(values: list) -> tuple[TimeRange, ...]:
    ranges: list[TimeRange] = []
    for entry in values:
        if not isinstance(entry, dict):
            raise ConfigError("Rule file timeRanges entries must be objects.")
        missing = [key for key in ("from", "to", "amount") if key not in entry]
        if missing:
            raise ConfigError(f"Rule file time range missing keys: {', '.join(missing)}.")
        amount = entry["amount"]
        if not _is_int(amount) or amount < 0:
            raise ConfigError("Rule file time range amount must be a non-negative integer.")
        try:
            start = parse_time_of_day(entry["from"])
            end = parse_time_of_day(entry["to"])
        except ValueError as exc:
            raise ConfigError(f"Rule file time range is invalid: {exc}") from exc
        ranges.append(TimeRange(start=start, end=end, amount=amount))
    return tuple(ranges)


def _build_holidays(values: list) -> frozenset[date]:
    try:
        return frozenset(parse_iso_date(value) for value in values)
    except ValueError as exc:
        raise ConfigError(f"Rule file publicHolidays is invalid: {exc}") from exc


def build_rule_set(data: dict, folder_name: str | None = None) -> RuleSet:
    """Validate a decoded rule document and build an immutable RuleSet."""
    if not isinstance(data, dict):
        raise ConfigError("Rule file must be a JSON object.")
    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise ConfigError(f"Rule file missing keys: {', '.join(missing)}.")
    city = data["city"]
    if not isinstance(city, str) or not city.strip():
        raise ConfigError("Rule file city must be a non-empty string.")
    if folder_name is not None and city.strip().lower() != folder_name:
        raise ConfigError("Rule file city must match its folder name.")
    if not _is_int(data["year"]):
        raise ConfigError("Rule file year must be an integer.")
    if not isinstance(data["currency"], str) or not data["currency"]:
        raise ConfigError("Rule file currency must be a non-empty string.")
    max_daily_tax = data["maxDailyTax"]
    if not _is_int(max_daily_tax) or max_daily_tax < 0:
        raise ConfigError("Rule file maxDailyTax must be a non-negative integer.")
    window = data["singleChargeWindowMinutes"]
    if not _is_int(window) or window < 0:
        raise ConfigError("Rule file singleChargeWindowMinutes must be a non-negative integer.")
    return RuleSet(
        city=city.strip().lower(),
        display_name=city.strip(),
        year=data["year"],
        currency=data["currency"],
        max_daily_charge=max_daily_tax,
        single_charge_window_minutes=window,
        toll_free_vehicle_types=_build_vehicle_types(_require_list(data, "tollFreeVehicleTypes")),
        toll_free_months=_build_months(_require_list(data, "tollFreeMonths")),
        time_ranges=_build_time_ranges(_require_list(data, "timeRanges")),
        public_holidays=_build_holidays(_require_list(data, "publicHolidays")),
    )


def parse_rule_text(text: str, folder_name: str | None = None) -> RuleSet:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError("Rule file is not valid JSON.") from exc
    return build_rule_set(data, folder_name)


def load_rule_file(path: str | os.PathLike[str]) -> RuleSet:
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Rule file {file_path} could not be read.") from exc
    rule_set = parse_rule_text(text)
    _LOGGER.info("Loaded tax rules for city %s from %s", rule_set.display_name, file_path)
    return rule_set


def iter_rule_files() -> Iterable[tuple[str, Traversable]]:
    root = _rules_root()
    for entry in root.iterdir():
        if not entry.is_dir():
            continue
        rules_path = entry / RULES_FILENAME
        if rules_path.is_file():
            yield entry.name, rules_path


def load_packaged_rule_sets() -> list[RuleSet]:
    global _RULE_CACHE
    if _RULE_CACHE is not None:
        return list(_RULE_CACHE)
    rule_sets = [
        parse_rule_text(rules_path.read_text(encoding="utf-8"), folder_name)
        for folder_name, rules_path in iter_rule_files()
    ]
    _RULE_CACHE = tuple(rule_sets)
    return list(_RULE_CACHE)


def clear_rule_cache() -> None:
    """Clear cached packaged rule sets (used in tests)."""
    global _RULE_CACHE
    _RULE_CACHE = None


class RuleRegistry:
    """Rule sets keyed by lower-cased city name.

    A rule set is inserted only once fully built, after which the registry is
    read-only in steady state and can be shared between concurrent callers.
    """

    def __init__(self, rule_sets: Iterable[RuleSet] = ()) -> None:
        self._rules: dict[str, RuleSet] = {}
        for rule_set in rule_sets:
            self.register(rule_set)

    @classmethod
    def from_package(cls) -> RuleRegistry:
        registry = cls(load_packaged_rule_sets())
        _LOGGER.info(
            "Loaded tax rules for %d city/cities: %s",
            len(registry),
            ", ".join(registry.cities()),
        )
        return registry

    def register(self, rule_set: RuleSet) -> None:
        self._rules[rule_set.city] = rule_set

    def load_file(self, path: str | os.PathLike[str]) -> RuleSet:
        rule_set = load_rule_file(path)
        self.register(rule_set)
        return rule_set

    def get(self, city: str) -> RuleSet:
        if not isinstance(city, str) or not city.strip():
            raise ValidationError("City must be a non-empty string.")
        try:
            return self._rules[city.strip().lower()]
        except KeyError:
            raise RuleNotFoundError(f"No tax rules found for city: {city}") from None

    def cities(self) -> list[str]:
        return sorted(self._rules)

    def __contains__(self, city: object) -> bool:
        return isinstance(city, str) and city.strip().lower() in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RuleSet]:
        return iter(list(self._rules.values()))
