"""aiohttp web adapter exposing ``POST /api/tax/calculate``."""

from __future__ import annotations

import json
import logging

from aiohttp import web

from .calculator import DEFAULT_CITY, TaxCalculator
from .exceptions import PyCongestionTaxError, RuleNotFoundError, ValidationError
from .models import VehicleType
from .rules.loader import RuleRegistry
from .util import normalize_vehicle_type

_LOGGER = logging.getLogger(__name__)

CALCULATOR_KEY = web.AppKey("calculator", TaxCalculator)


def _error_response(exc: PyCongestionTaxError, status: int) -> web.Response:
    return web.json_response(
        {"error": exc.detail or str(exc), "errorCode": exc.error_code},
        status=status,
    )


def _validate_request(payload: object) -> tuple[VehicleType, list[str]]:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    vehicle_type = payload.get("vehicleType")
    if vehicle_type is None:
        raise ValidationError("vehicleType: vehicleType is required")
    dates = payload.get("dates")
    if not isinstance(dates, list) or not dates:
        raise ValidationError("dates: dates must contain at least one entry")
    if not all(isinstance(value, str) for value in dates):
        raise ValidationError("dates: every entry must be a string")
    return normalize_vehicle_type(vehicle_type), dates


async def calculate_tax(request: web.Request) -> web.Response:
    calculator = request.app[CALCULATOR_KEY]
    city = request.query.get("city", DEFAULT_CITY)
    try:
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValidationError("Request body is not valid JSON.") from exc
        vehicle_type, dates = _validate_request(payload)
        result = calculator.calculate_for_city(vehicle_type, dates, city)
    except ValidationError as exc:
        _LOGGER.debug("Rejected calculation request: %s", exc)
        return _error_response(exc, 400)
    except RuleNotFoundError as exc:
        return _error_response(exc, 404)
    return web.json_response({"vehicleType": vehicle_type.value, **result.to_dict()})


def create_app(registry: RuleRegistry | None = None) -> web.Application:
    app = web.Application()
    app[CALCULATOR_KEY] = TaxCalculator(
        registry if registry is not None else RuleRegistry.from_package()
    )
    app.router.add_post("/api/tax/calculate", calculate_tax)
    return app
