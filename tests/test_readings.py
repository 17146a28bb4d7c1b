"""Tests for per-point readings: rain chance, wind, rounding, time labels."""

from __future__ import annotations

import pytest
from factories import at, make_point

from weather_wrangler.analysis.readings import (
    hour_label,
    is_rainy_code,
    local_time,
    rain_chance,
    round_half_up,
    temperature,
    time_label,
    wind_mph,
)


class TestRoundHalfUp:
    """Rounding matches the display convention (halves go up)."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (2.4, 2), (3.5, 4), (-2.5, -2), (-2.6, -3), (0.0, 0)],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestRainChance:
    """Test the shared rain-chance rule."""

    def test_probability_wins_over_clear_code(self) -> None:
        """A pop of 0.35 with a clear-sky code gives 35."""
        point = make_point(at(12), code=800, pop=0.35)
        assert rain_chance(point) == pytest.approx(35)

    def test_rain_code_without_probability(self) -> None:
        """No pop and code 501 (moderate rain) gives 50."""
        point = make_point(at(12), code=501)
        assert rain_chance(point) == 50

    def test_zero_probability_wins_over_rain_code(self) -> None:
        point = make_point(at(12), code=501, pop=0.0)
        assert rain_chance(point) == 0

    def test_clear_code_without_probability(self) -> None:
        point = make_point(at(12), code=800)
        assert rain_chance(point) == 0

    def test_missing_weather(self) -> None:
        point = make_point(at(12), code=None)
        assert rain_chance(point) == 0

    def test_not_rounded(self) -> None:
        point = make_point(at(12), pop=0.125)
        assert rain_chance(point) == pytest.approx(12.5)


class TestIsRainyCode:
    """Test condition-code classification."""

    @pytest.mark.parametrize("code", [200, 232, 300, 321, 500, 531, 211, 502])
    def test_rainy(self, code: int) -> None:
        assert is_rainy_code(code) is True

    @pytest.mark.parametrize("code", [199, 233, 299, 322, 499, 532, 600, 800, 804])
    def test_not_rainy(self, code: int) -> None:
        assert is_rainy_code(code) is False

    def test_none(self) -> None:
        assert is_rainy_code(None) is False


class TestWindAndTemperature:
    """Test unit conversions."""

    def test_wind_converted_to_mph(self) -> None:
        """2 m/s is 4.474 mph, rounded to 4."""
        assert wind_mph(make_point(at(12), wind=2.0)) == 4

    def test_wind_rounds_up_near_half(self) -> None:
        """6.7 m/s is 14.988 mph, rounded to 15."""
        assert wind_mph(make_point(at(12), wind=6.7)) == 15

    def test_temperature_rounded(self) -> None:
        assert temperature(make_point(at(12), temp=69.5)) == 70
        assert temperature(make_point(at(12), temp=69.4)) == 69


class TestTimeLabels:
    """Test local-time labels."""

    def test_local_time_applies_offset(self) -> None:
        """20:00 UTC is 3 PM at UTC-5."""
        point = make_point(at(20))
        moment = local_time(point, -5 * 3600 * 1000)
        assert moment.hour == 15

    def test_time_label(self) -> None:
        moment = local_time(make_point(at(15, 30)), 0)
        assert time_label(moment) == "3:30 PM"

    def test_midnight_and_noon(self) -> None:
        assert time_label(local_time(make_point(at(0)), 0)) == "12:00 AM"
        assert time_label(local_time(make_point(at(12)), 0)) == "12:00 PM"

    def test_hour_label(self) -> None:
        assert hour_label(local_time(make_point(at(6)), 0)) == "6 AM"
        assert hour_label(local_time(make_point(at(21)), 0)) == "9 PM"
