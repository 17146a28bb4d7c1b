"""
Application configuration.

Settings come from environment variables (a ``.env`` file in the working
directory is loaded first). Threshold overrides are clamped to sane ranges
before they reach the engine, which does no validation of its own.

Environment variables::

    OPENWEATHER_API_KEY        API key (WEATHER_API_KEY also accepted)
    WRANGLER_ZIP_CODE          Default ZIP code for ``check``
    WRANGLER_LAT / WRANGLER_LON  Default coordinates for ``check``
    WRANGLER_DATA_DIR          Forecast cache directory (default: data)
    WRANGLER_CACHE_TTL_MINUTES Forecast cache lifetime (default: 10)
    WRANGLER_API_TIMEOUT       HTTP timeout in seconds (default: 10)
    WRANGLER_TOP_OFF_MIN_TEMP_F, WRANGLER_DOORS_OFF_MIN_TEMP_F,
    WRANGLER_MAX_RAIN_CHANCE_PERCENT, WRANGLER_MAX_WIND_MPH
    WRANGLER_ENV, WRANGLER_DEBUG
"""

from __future__ import annotations

import math
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from weather_wrangler.schemas import DEFAULT_THRESHOLDS, ThresholdSettings

ENV_PREFIX = "WRANGLER_"

# (min, max) accepted for each threshold
THRESHOLD_LIMITS: dict[str, tuple[float, float]] = {
    "top_off_min_temp_f": (20, 100),
    "doors_off_min_temp_f": (20, 100),
    "max_rain_chance_percent": (0, 100),
    "max_wind_mph": (0, 50),
}


def clamp_thresholds(values: dict[str, Any]) -> ThresholdSettings:
    """
    Coerce user-supplied thresholds into a valid ``ThresholdSettings``.

    Missing, zero or non-numeric values fall back to the defaults; numeric
    values are clamped to ``THRESHOLD_LIMITS``.

    Args:
        values: Mapping of snake_case threshold names to raw values.
    """
    clamped: dict[str, float] = {}
    for name, (low, high) in THRESHOLD_LIMITS.items():
        default = getattr(DEFAULT_THRESHOLDS, name)
        raw = values.get(name)
        try:
            number = float(raw) if raw is not None else default
        except (TypeError, ValueError):
            number = default
        if not number or math.isnan(number):
            number = default
        clamped[name] = max(low, min(high, number))
    return ThresholdSettings(**clamped)


class Settings(BaseModel):
    """Runtime configuration for the CLI and flows."""

    app_name: str = "weather-wrangler"
    app_env: str = "development"
    debug: bool = False

    openweather_api_key: str = ""
    zip_code: str | None = None
    lat: float | None = Field(default=None, ge=-90, le=90)
    lon: float | None = Field(default=None, ge=-180, le=180)

    data_dir: Path = Path("data")
    cache_ttl_minutes: int = Field(default=10, ge=0)
    api_timeout: float = Field(default=10.0, gt=0)

    top_off_min_temp_f: float = DEFAULT_THRESHOLDS.top_off_min_temp_f
    doors_off_min_temp_f: float = DEFAULT_THRESHOLDS.doors_off_min_temp_f
    max_rain_chance_percent: float = DEFAULT_THRESHOLDS.max_rain_chance_percent
    max_wind_mph: float = DEFAULT_THRESHOLDS.max_wind_mph

    def thresholds(self, **overrides: float | None) -> ThresholdSettings:
        """Configured thresholds, with any non-None overrides applied, clamped."""
        values: dict[str, Any] = {name: getattr(self, name) for name in THRESHOLD_LIMITS}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return clamp_thresholds(values)


def _env(name: str) -> str | None:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment (cached; call ``cache_clear`` to reload)."""
    load_dotenv(find_dotenv(usecwd=True))

    raw: dict[str, Any] = {
        "openweather_api_key": os.environ.get("OPENWEATHER_API_KEY")
        or os.environ.get("WEATHER_API_KEY", ""),
    }
    fields = {
        "app_env": "ENV",
        "debug": "DEBUG",
        "zip_code": "ZIP_CODE",
        "lat": "LAT",
        "lon": "LON",
        "data_dir": "DATA_DIR",
        "cache_ttl_minutes": "CACHE_TTL_MINUTES",
        "api_timeout": "API_TIMEOUT",
        "top_off_min_temp_f": "TOP_OFF_MIN_TEMP_F",
        "doors_off_min_temp_f": "DOORS_OFF_MIN_TEMP_F",
        "max_rain_chance_percent": "MAX_RAIN_CHANCE_PERCENT",
        "max_wind_mph": "MAX_WIND_MPH",
    }
    for field_name, env_name in fields.items():
        value = _env(env_name)
        if value is not None:
            raw[field_name] = value

    return Settings(**raw)
