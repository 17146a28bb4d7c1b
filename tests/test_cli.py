"""
Tests for CLI functionality.

These tests verify the command-line interface logic; the check flow is
mocked out.
"""

from __future__ import annotations

import argparse
import json
from collections.abc import Iterator
from io import StringIO
from pathlib import Path
from typing import Any
from unittest.mock import Mock, patch

import pytest
from factories import NOON, day_points, make_feed

from weather_wrangler.analysis import RecommendationResult, evaluate_conditions
from weather_wrangler.cli import cmd_check, cmd_info, create_parser, main
from weather_wrangler.config import Settings
from weather_wrangler.errors import MissingApiKeyError
from weather_wrangler.schemas import ThresholdSettings


def _result() -> RecommendationResult:
    feed = make_feed(day_points([55, 58, 62, 66, 70, 68, 60, 56]))
    return evaluate_conditions(feed, ThresholdSettings(), now=NOON)


def _check_args(**overrides: Any) -> argparse.Namespace:
    values: dict[str, Any] = {
        "zip_code": None,
        "lat": None,
        "lon": None,
        "top_temp": None,
        "doors_temp": None,
        "rain": None,
        "wind": None,
        "json": False,
        "no_cache": False,
        "debug": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.fixture
def settings(tmp_path: Path) -> Iterator[Settings]:
    configured = Settings(openweather_api_key="secret", data_dir=tmp_path)
    with patch("weather_wrangler.cli.get_settings", return_value=configured):
        yield configured


@pytest.fixture
def mock_check() -> Iterator[Mock]:
    with patch("weather_wrangler.cli.check_today", return_value=_result()) as mocked:
        yield mocked


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "weather-wrangler"

    def test_parser_has_version(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        args = create_parser().parse_args(["--debug", "info"])
        assert args.debug is True

    def test_check_command(self) -> None:
        args = create_parser().parse_args(
            ["check", "--zip", "84532", "--top-temp", "55", "--wind", "20", "--json"]
        )
        assert args.command == "check"
        assert args.zip_code == "84532"
        assert args.top_temp == 55
        assert args.wind == 20
        assert args.json is True
        assert args.no_cache is False

    def test_check_defaults(self) -> None:
        args = create_parser().parse_args(["check"])
        assert args.zip_code is None
        assert args.lat is None
        assert args.rain is None


class TestCmdCheck:
    """Tests for cmd_check function."""

    def test_report_output(self, settings: Settings, mock_check: Mock) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            exit_code = cmd_check(_check_args(zip_code="84532"))

        assert exit_code == 0
        assert "Today's Weather Wrangler for Testville" in mock_stdout.getvalue()
        kwargs = mock_check.call_args.kwargs
        assert kwargs["zip_code"] == "84532"
        assert kwargs["lat"] is None
        assert kwargs["use_cache"] is True

    def test_json_output(self, settings: Settings, mock_check: Mock) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_check(_check_args(zip_code="84532", json=True))

        data = json.loads(mock_stdout.getvalue())
        assert data["cityName"] == "Testville"
        assert data["maxTemp"] == 70

    def test_threshold_overrides_clamped(self, settings: Settings, mock_check: Mock) -> None:
        cmd_check(_check_args(zip_code="84532", top_temp=150, wind=12, no_cache=True))

        kwargs = mock_check.call_args.kwargs
        thresholds = kwargs["thresholds"]
        assert thresholds.top_off_min_temp_f == 100
        assert thresholds.max_wind_mph == 12
        assert thresholds.doors_off_min_temp_f == 65
        assert kwargs["use_cache"] is False

    def test_coordinates_override_default_zip(self, settings: Settings, mock_check: Mock) -> None:
        configured = settings.model_copy(update={"zip_code": "10001"})
        with patch("weather_wrangler.cli.get_settings", return_value=configured):
            cmd_check(_check_args(lat=38.57, lon=-109.55))

        kwargs = mock_check.call_args.kwargs
        assert kwargs["zip_code"] is None
        assert (kwargs["lat"], kwargs["lon"]) == (38.57, -109.55)

    def test_default_zip_from_settings(self, settings: Settings, mock_check: Mock) -> None:
        configured = settings.model_copy(update={"zip_code": "10001"})
        with patch("weather_wrangler.cli.get_settings", return_value=configured):
            cmd_check(_check_args())
        assert mock_check.call_args.kwargs["zip_code"] == "10001"

    def test_no_location(self, settings: Settings, mock_check: Mock) -> None:
        with patch("sys.stderr", new=StringIO()) as mock_stderr:
            exit_code = cmd_check(_check_args())

        assert exit_code == 1
        assert "No location given" in mock_stderr.getvalue()
        mock_check.assert_not_called()

    def test_errors_return_one(self, settings: Settings, mock_check: Mock) -> None:
        mock_check.side_effect = MissingApiKeyError()
        with patch("sys.stderr", new=StringIO()) as mock_stderr:
            exit_code = cmd_check(_check_args(zip_code="84532"))

        assert exit_code == 1
        assert "API key not configured" in mock_stderr.getvalue()


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_returns_zero(self, settings: Settings) -> None:
        with patch("sys.stdout", new=StringIO()):
            assert cmd_info(argparse.Namespace()) == 0

    def test_prints_app_info(self, settings: Settings) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_info(argparse.Namespace())

        output = mock_stdout.getvalue()
        assert "Application: weather-wrangler" in output
        assert "API key configured: yes" in output
        assert "top off >= 60°F" in output
        assert "wind < 15 mph" in output


class TestMain:
    """Tests for main function."""

    def test_no_command_shows_help(self) -> None:
        with patch("sys.argv", ["weather-wrangler"]), patch("sys.stdout", new=StringIO()):
            assert main() == 0

    def test_info_command(self, settings: Settings) -> None:
        with (
            patch("sys.argv", ["weather-wrangler", "info"]),
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            assert main() == 0
        assert "Version" in mock_stdout.getvalue()

    def test_check_command(self, settings: Settings, mock_check: Mock) -> None:
        with (
            patch("sys.argv", ["weather-wrangler", "check", "--zip", "84532"]),
            patch("sys.stdout", new=StringIO()),
        ):
            assert main() == 0
        mock_check.assert_called_once()
