"""Command-line entry point.

Calculate a charge:
  python -m pycongestiontax calculate --vehicle-type CAR \
    "2013-02-08 06:27:00" "2013-02-08 14:35:00"

Serve the HTTP API:
  python -m pycongestiontax serve --port 8080

Extra rule files can be passed with `--rules` (repeatable) or through the
CONGESTION_TAX_RULES environment variable, a list of paths separated by the
platform path separator.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from aiohttp import web

from .calculator import DEFAULT_CITY, TaxCalculator
from .exceptions import PyCongestionTaxError
from .rules.loader import RuleRegistry
from .web import create_app

_LOGGER = logging.getLogger(__name__)
RULES_ENV = "CONGESTION_TAX_RULES"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pycongestiontax")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: INFO).",
    )
    parser.add_argument(
        "--rules",
        action="append",
        default=[],
        metavar="FILE",
        help="Additional rule file to load (repeatable).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    calculate = subparsers.add_parser("calculate", help="Calculate the tax for passages.")
    calculate.add_argument("--vehicle-type", required=True)
    calculate.add_argument("--city", default=DEFAULT_CITY)
    calculate.add_argument("timestamps", nargs="+", metavar="TIMESTAMP")

    serve = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8080)
    return parser.parse_args(argv)


def _rule_paths(cli_paths: list[str]) -> list[str]:
    env_value = os.getenv(RULES_ENV, "")
    env_paths = [path for path in env_value.split(os.pathsep) if path]
    return [*env_paths, *cli_paths]


def build_registry(rule_paths: list[str]) -> RuleRegistry:
    registry = RuleRegistry.from_package()
    for path in rule_paths:
        registry.load_file(path)
    return registry


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level)
    try:
        registry = build_registry(_rule_paths(args.rules))
        if args.command == "serve":
            _LOGGER.info("Serving congestion tax API on %s:%s", args.host, args.port)
            web.run_app(create_app(registry), host=args.host, port=args.port)
            return 0
        result = TaxCalculator(registry).calculate_for_city(
            args.vehicle_type,
            args.timestamps,
            args.city,
        )
    except PyCongestionTaxError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
