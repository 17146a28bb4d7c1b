"""Day-level worst-case conditions and the top/doors recommendation.

Every metric is the maximum across the day, not an average: a single
rainy or windy point anywhere in the day keeps the recommendation
conservative.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from weather_wrangler.analysis.readings import rain_chance, round_half_up, temperature, wind_mph
from weather_wrangler.errors import NoForecastDataError
from weather_wrangler.schemas import ForecastPoint, ThresholdSettings


@dataclass(frozen=True)
class DayConditions:
    """Peak temperature (°F), rain chance (%) and wind (mph) for the day."""

    max_temp: int
    max_rain_chance: int
    max_wind: int

    @property
    def min_rain(self) -> int:
        """Historical name for the peak rain chance, kept for consumers."""
        return self.max_rain_chance


@dataclass(frozen=True)
class Recommendation:
    """Whether the top and the doors can come off."""

    top_off: bool
    doors_off: bool


def analyze_conditions(points: Sequence[ForecastPoint]) -> DayConditions:
    """
    Reduce today's points to worst-case day conditions.

    Args:
        points: Today's forecast points.

    Returns:
        DayConditions with the maximum rounded temperature, rain chance and
        wind speed across all points.

    Raises:
        NoForecastDataError: If ``points`` is empty.
    """
    if not points:
        raise NoForecastDataError

    max_temp = max(temperature(p) for p in points)
    max_rain = max(rain_chance(p) for p in points)
    max_wind = max(wind_mph(p) for p in points)

    return DayConditions(
        max_temp=max_temp,
        max_rain_chance=round_half_up(max_rain),
        max_wind=max_wind,
    )


def is_top_off(temp: float, rain: float, settings: ThresholdSettings) -> bool:
    """Warm enough and dry enough for the top to come off."""
    return temp >= settings.top_off_min_temp_f and rain < settings.max_rain_chance_percent


def is_doors_off(temp: float, rain: float, wind: float, settings: ThresholdSettings) -> bool:
    """Warm, dry and calm enough for the doors to come off."""
    return (
        temp >= settings.doors_off_min_temp_f
        and rain < settings.max_rain_chance_percent
        and wind < settings.max_wind_mph
    )


def recommend(conditions: DayConditions, settings: ThresholdSettings) -> Recommendation:
    """Compare day conditions with the user's thresholds."""
    return Recommendation(
        top_off=is_top_off(conditions.max_temp, conditions.max_rain_chance, settings),
        doors_off=is_doors_off(
            conditions.max_temp, conditions.max_rain_chance, conditions.max_wind, settings
        ),
    )


def _num(value: float) -> str:
    return f"{value:g}"


def threshold_explanations(conditions: DayConditions, settings: ThresholdSettings) -> list[str]:
    """List every threshold the day's conditions fail, in display order."""
    explanations: list[str] = []
    temp = conditions.max_temp

    if temp < settings.top_off_min_temp_f:
        explanations.append(
            f"Temperature too low ({temp}°F < {_num(settings.top_off_min_temp_f)}°F)"
        )
    if temp < settings.doors_off_min_temp_f:
        explanations.append(
            f"Temperature too low for doors off ({temp}°F < {_num(settings.doors_off_min_temp_f)}°F)"
        )
    if conditions.max_rain_chance >= settings.max_rain_chance_percent:
        explanations.append(
            f"Rain chance too high ({conditions.max_rain_chance}% >= "
            f"{_num(settings.max_rain_chance_percent)}%)"
        )
    if conditions.max_wind >= settings.max_wind_mph:
        explanations.append(
            f"Wind too strong for doors off ({conditions.max_wind} mph >= "
            f"{_num(settings.max_wind_mph)} mph)"
        )
    return explanations
