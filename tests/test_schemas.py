"""Tests for the input schemas."""

from __future__ import annotations

import pytest
from factories import DAY_START, point_json
from pydantic import ValidationError

from weather_wrangler.schemas import (
    DEFAULT_THRESHOLDS,
    ForecastFeed,
    ForecastPoint,
    ThresholdSettings,
)


class TestForecastPoint:
    """Test parsing of OpenWeatherMap ``list`` items."""

    def test_parses_full_item(self) -> None:
        point = ForecastPoint.model_validate(point_json(DAY_START, temp=71.3, code=501, pop=0.4))
        assert point.main.temp == 71.3
        assert point.condition_code == 501
        assert point.pop == 0.4

    def test_missing_weather_array(self) -> None:
        data = point_json(DAY_START)
        del data["weather"]
        point = ForecastPoint.model_validate(data)
        assert point.condition_code is None
        assert point.pop is None

    def test_extra_fields_ignored(self) -> None:
        data = point_json(DAY_START)
        data["dt_txt"] = "2026-06-15 00:00:00"
        data["main"]["humidity"] = 40
        assert ForecastPoint.model_validate(data).dt == DAY_START

    def test_pop_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            ForecastPoint.model_validate(point_json(DAY_START, pop=1.5))

    def test_frozen(self) -> None:
        point = ForecastPoint.model_validate(point_json(DAY_START))
        with pytest.raises(ValidationError):
            point.dt = 0  # type: ignore[misc]


class TestForecastFeed:
    """Test the feed container and its aliases."""

    def test_openweather_shape(self) -> None:
        feed = ForecastFeed.model_validate(
            {
                "list": [point_json(DAY_START)],
                "city": {"name": "Moab", "timezone": -21600},
                "cacheTimestamp": 1_750_000_000_000,
            }
        )
        assert len(feed.points) == 1
        assert feed.location is not None
        assert feed.location.utc_offset_seconds == -21600
        assert feed.city_name == "Moab"
        assert feed.cache_timestamp == 1_750_000_000_000

    def test_engine_shape(self) -> None:
        feed = ForecastFeed.model_validate(
            {"points": [], "location": {"name": "Bend", "utcOffsetSeconds": -25200}}
        )
        assert feed.location is not None
        assert feed.location.utc_offset_seconds == -25200

    def test_unknown_location(self) -> None:
        assert ForecastFeed().city_name == "Unknown Location"
        feed = ForecastFeed.model_validate({"list": [], "city": {"name": ""}})
        assert feed.city_name == "Unknown Location"


class TestThresholdSettings:
    """Test threshold defaults and accepted key styles."""

    def test_defaults(self) -> None:
        assert DEFAULT_THRESHOLDS.top_off_min_temp_f == 60
        assert DEFAULT_THRESHOLDS.doors_off_min_temp_f == 65
        assert DEFAULT_THRESHOLDS.max_rain_chance_percent == 10
        assert DEFAULT_THRESHOLDS.max_wind_mph == 15

    def test_camel_case_keys(self) -> None:
        settings = ThresholdSettings.model_validate(
            {
                "topOffMinTempF": 55,
                "doorsOffMinTempF": 70,
                "maxRainChancePercent": 20,
                "maxWindMph": 25,
            }
        )
        assert settings.top_off_min_temp_f == 55
        assert settings.max_wind_mph == 25

    def test_legacy_keys(self) -> None:
        settings = ThresholdSettings.model_validate(
            {
                "tempThresholdTopOff": 58,
                "tempThresholdDoorsOff": 68,
                "rainChanceThreshold": 30,
                "windSpeedThreshold": 12,
            }
        )
        assert settings.doors_off_min_temp_f == 68
        assert settings.max_rain_chance_percent == 30
