"""Per-point derived readings shared by every analysis stage.

Pure conversion functions: rain chance, wind in mph, rounding and local
time labels. No I/O.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime

from weather_wrangler.schemas import ForecastPoint

MPS_TO_MPH = 2.237

# OpenWeatherMap condition code ranges that mean precipitation
THUNDERSTORM_CODES = (200, 232)
DRIZZLE_CODES = (300, 321)
RAIN_CODES = (500, 531)
RAINY_CODE_RANGES = (THUNDERSTORM_CODES, DRIZZLE_CODES, RAIN_CODES)

#: Rain chance assumed for a rainy condition code when no probability is given.
RAINY_CODE_CHANCE = 50.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def is_rainy_code(code: int | None) -> bool:
    """Whether a weather condition code is thunderstorm, drizzle or rain."""
    if code is None:
        return False
    return any(low <= code <= high for low, high in RAINY_CODE_RANGES)


def rain_chance(point: ForecastPoint) -> float:
    """
    Precipitation chance for one point, 0-100 (unrounded).

    A probability in the feed always wins, even when it is 0. Without one,
    a rainy condition code counts as 50% and anything else as 0%.
    """
    if point.pop is not None:
        return point.pop * 100
    return RAINY_CODE_CHANCE if is_rainy_code(point.condition_code) else 0.0


def wind_mph(point: ForecastPoint) -> int:
    """Wind speed converted from m/s to whole mph."""
    return round_half_up(point.wind.speed * MPS_TO_MPH)


def temperature(point: ForecastPoint) -> int:
    """Temperature in whole °F."""
    return round_half_up(point.main.temp)


def local_time(point: ForecastPoint, utc_offset_ms: int) -> datetime:
    """Wall-clock time at the forecast location.

    Returned as a UTC-tagged datetime whose fields read as local time.
    """
    return datetime.fromtimestamp((point.dt * 1000 + utc_offset_ms) / 1000, tz=UTC)


def _twelve_hour(hour: int) -> tuple[int, str]:
    suffix = "AM" if hour < 12 else "PM"
    return (hour % 12 or 12), suffix


def time_label(moment: datetime) -> str:
    """12-hour clock with minutes, e.g. ``3:00 PM``."""
    hour, suffix = _twelve_hour(moment.hour)
    return f"{hour}:{moment.minute:02d} {suffix}"


def hour_label(moment: datetime) -> str:
    """12-hour clock, hour only, e.g. ``3 PM``."""
    hour, suffix = _twelve_hour(moment.hour)
    return f"{hour} {suffix}"
