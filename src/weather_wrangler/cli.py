"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from weather_wrangler import __version__
from weather_wrangler.config import get_settings
from weather_wrangler.errors import WeatherWranglerError
from weather_wrangler.flows.check import check_today
from weather_wrangler.renderers.report import build_report_text

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather-wrangler",
        description="Should the Jeep's top and doors come off today?",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'check' command - today's recommendation
    check_parser = subparsers.add_parser("check", help="Recommend today's top/doors setup")
    check_parser.add_argument("--zip", dest="zip_code", type=str, default=None, help="ZIP code")
    check_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    check_parser.add_argument("--lon", type=float, default=None, help="Longitude")
    check_parser.add_argument(
        "--top-temp", type=float, default=None, help="Minimum °F for top off (default: 60)"
    )
    check_parser.add_argument(
        "--doors-temp", type=float, default=None, help="Minimum °F for doors off (default: 65)"
    )
    check_parser.add_argument(
        "--rain", type=float, default=None, help="Maximum rain chance %% (default: 10)"
    )
    check_parser.add_argument(
        "--wind", type=float, default=None, help="Maximum wind mph (default: 15)"
    )
    check_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON instead of a report"
    )
    check_parser.add_argument(
        "--no-cache", action="store_true", help="Always fetch a fresh forecast"
    )

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    return parser


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the 'check' command."""
    settings = get_settings()

    coords_given = args.lat is not None or args.lon is not None
    zip_code = args.zip_code or (None if coords_given else settings.zip_code)
    lat = args.lat if coords_given else settings.lat
    lon = args.lon if coords_given else settings.lon

    if not zip_code and (lat is None or lon is None):
        print(
            "No location given. Use --zip or --lat/--lon, or set WRANGLER_ZIP_CODE.",
            file=sys.stderr,
        )
        return 1

    thresholds = settings.thresholds(
        top_off_min_temp_f=args.top_temp,
        doors_off_min_temp_f=args.doors_temp,
        max_rain_chance_percent=args.rain,
        max_wind_mph=args.wind,
    )
    if args.debug:
        print(f"Debug mode enabled. Thresholds: {thresholds}")

    try:
        result = check_today(
            lat=None if zip_code else lat,
            lon=None if zip_code else lon,
            zip_code=zip_code,
            thresholds=thresholds,
            use_cache=not args.no_cache,
        )
    except WeatherWranglerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.as_dict(), indent=2, ensure_ascii=False))
    else:
        print(build_report_text(result), end="")
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    thresholds = settings.thresholds()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"API key configured: {'yes' if settings.openweather_api_key else 'no'}")
    print(f"Default ZIP: {settings.zip_code or '-'}")
    print(f"Data directory: {settings.data_dir}")
    print(
        f"Thresholds: top off >= {thresholds.top_off_min_temp_f:g}°F, "
        f"doors off >= {thresholds.doors_off_min_temp_f:g}°F, "
        f"rain < {thresholds.max_rain_chance_percent:g}%, "
        f"wind < {thresholds.max_wind_mph:g} mph"
    )
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "debug", False) else logging.WARNING,
        format=LOG_FORMAT,
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "check": cmd_check,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
