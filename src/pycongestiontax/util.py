"""Shared utilities for validation and normalization."""

from __future__ import annotations

import re
from datetime import date, datetime, time

from .exceptions import TimestampError, ValidationError
from .models import VehicleType

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
TIMESTAMP_PATTERN = "yyyy-MM-dd HH:mm:ss"

_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", re.ASCII)
_TIME_OF_DAY_RE = re.compile(r"\d{2}:\d{2}(:\d{2})?", re.ASCII)
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def normalize_vehicle_type(value: VehicleType | str) -> VehicleType:
    if isinstance(value, VehicleType):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Vehicle type must be a non-empty string.")
    try:
        return VehicleType(value.strip().upper())
    except ValueError as exc:
        raise ValidationError(f"Unknown vehicle type: {value.strip()}.") from exc


def parse_passage(value: str) -> datetime:
    """Parse a ``yyyy-MM-dd HH:mm:ss`` passage timestamp into a naive datetime."""
    if not isinstance(value, str):
        raise TimestampError(f"Timestamp must be a string in format {TIMESTAMP_PATTERN}.")
    raw = value.strip()
    if not _TIMESTAMP_RE.fullmatch(raw):
        raise TimestampError(
            f"Invalid timestamp {raw!r}. Expected: {TIMESTAMP_PATTERN}.",
            detail=f"Invalid date format. Expected: {TIMESTAMP_PATTERN}",
        )
    try:
        return datetime.strptime(raw, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise TimestampError(
            f"Invalid timestamp {raw!r}. Expected: {TIMESTAMP_PATTERN}.",
            detail=f"Invalid date format. Expected: {TIMESTAMP_PATTERN}",
        ) from exc


def parse_passages(values: list[str]) -> list[datetime]:
    return sorted(parse_passage(value) for value in values)


def parse_time_of_day(value: str) -> time:
    if not isinstance(value, str) or not _TIME_OF_DAY_RE.fullmatch(value.strip()):
        raise ValueError(f"Invalid time of day: {value!r}.")
    return time.fromisoformat(value.strip())


def parse_iso_date(value: str) -> date:
    if not isinstance(value, str) or not _ISO_DATE_RE.fullmatch(value.strip()):
        raise ValueError(f"Invalid ISO date: {value!r}.")
    return date.fromisoformat(value.strip())


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end``, truncated toward zero."""
    return int((end - start).total_seconds() / 60)
