"""Pipeline entry point: forecast feed + thresholds -> recommendation result.

Runs the stages in order::

    feed -> select_today -> analyze_conditions -> recommend
                         -> analyze_rain_timing
                         -> analyze_time_periods
         -> build_explanations

Nothing here performs I/O; the only impure input is the clock, which
callers can pin with ``now``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from weather_wrangler.analysis.conditions import (
    DayConditions,
    analyze_conditions,
    recommend,
    threshold_explanations,
)
from weather_wrangler.analysis.day_window import select_today
from weather_wrangler.analysis.rain_timing import RainPeriod, RainTiming, analyze_rain_timing
from weather_wrangler.analysis.segments import (
    SegmentConditions,
    TimeBasedRecommendations,
    analyze_time_periods,
)
from weather_wrangler.errors import NoForecastDataError
from weather_wrangler.schemas import ForecastFeed, ThresholdSettings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecommendationResult:
    """Everything a consumer needs to display today's recommendation."""

    city_name: str
    last_updated: datetime
    top_off: bool
    doors_off: bool
    conditions: DayConditions
    rain_timing: RainTiming
    time_based: TimeBasedRecommendations
    explanations: tuple[str, ...]

    @property
    def max_temp(self) -> int:
        return self.conditions.max_temp

    @property
    def min_rain(self) -> int:
        """Peak rain chance for the day (historical name)."""
        return self.conditions.min_rain

    @property
    def max_wind(self) -> int:
        return self.conditions.max_wind

    def as_dict(self) -> dict[str, Any]:
        """JSON-ready camelCase representation for rendering layers."""
        return {
            "cityName": self.city_name,
            "lastUpdated": self.last_updated.isoformat(),
            "topOff": self.top_off,
            "doorsOff": self.doors_off,
            "maxTemp": self.max_temp,
            "minRain": self.min_rain,
            "maxWind": self.max_wind,
            "rainTiming": {
                "periods": [_period_dict(p) for p in self.rain_timing.periods],
                "hasRain": self.rain_timing.has_rain,
                "summary": self.rain_timing.summary,
            },
            "timeBasedRecommendations": {
                "periods": {
                    segment.value: _segment_dict(c)
                    for segment, c in self.time_based.periods.items()
                },
                "pattern": self.time_based.pattern.value,
                "recommendations": list(self.time_based.recommendations),
            },
            "explanations": list(self.explanations),
        }


def _period_dict(period: RainPeriod) -> dict[str, Any]:
    return {
        "startTime": period.start_time,
        "endTime": period.end_time,
        "startHour": period.start_hour,
        "endHour": period.end_hour,
        "maxChance": period.peak_percent,
        "forecasts": [{"time": s.time, "chance": s.chance} for s in period.forecasts],
    }


def _segment_dict(conditions: SegmentConditions | None) -> dict[str, Any] | None:
    if conditions is None:
        return None
    return {
        "avgTemp": conditions.avg_temp,
        "maxRain": conditions.max_rain_chance,
        "maxWind": conditions.max_wind,
        "startTime": conditions.start_time,
        "endTime": conditions.end_time,
        "topOff": conditions.top_off,
        "doorsOff": conditions.doors_off,
    }


def _details_line(conditions: DayConditions, settings: ThresholdSettings) -> str:
    reasons = threshold_explanations(conditions, settings)
    if reasons:
        return "ℹ️ Details: " + "; ".join(reasons)
    return (
        f"ℹ️ Details: {conditions.max_temp}°F high, {conditions.max_rain_chance}% rain chance, "
        f"{conditions.max_wind} mph wind, all within your limits"
    )


def build_explanations(
    conditions: DayConditions,
    rain_timing: RainTiming,
    time_based: TimeBasedRecommendations,
    settings: ThresholdSettings,
) -> list[str]:
    """
    Display lines, in order: time-based advice, rain timing, details.

    The rain timing line only appears when rain is expected; the details
    line is always last.
    """
    explanations = list(time_based.recommendations)
    if rain_timing.has_rain:
        explanations.append(f"☔ Rain timing: {rain_timing.summary}")
    explanations.append(_details_line(conditions, settings))
    return explanations


def evaluate_conditions(
    feed: ForecastFeed,
    settings: ThresholdSettings,
    now: datetime | None = None,
) -> RecommendationResult:
    """
    Analyze a forecast feed and recommend a top/doors configuration for today.

    Args:
        feed: Forecast feed with points in chronological order.
        settings: User thresholds (used as given, never validated here).
        now: Current instant; defaults to the wall clock.

    Returns:
        A freshly built RecommendationResult.

    Raises:
        NoForecastDataError: If the feed has no points at all.
    """
    current = now if now is not None else datetime.now(UTC)
    window = select_today(feed, current)
    if not window.points:
        raise NoForecastDataError

    conditions = analyze_conditions(window.points)
    decision = recommend(conditions, settings)
    rain_timing = analyze_rain_timing(window.points, window.utc_offset_ms)
    time_based = analyze_time_periods(window.points, window.utc_offset_ms, settings)

    if feed.cache_timestamp is not None:
        last_updated = datetime.fromtimestamp(feed.cache_timestamp / 1000, tz=UTC)
    else:
        last_updated = current if current.tzinfo is not None else current.replace(tzinfo=UTC)

    log.debug(
        "%s: top_off=%s doors_off=%s pattern=%s",
        feed.city_name,
        decision.top_off,
        decision.doors_off,
        time_based.pattern,
    )

    return RecommendationResult(
        city_name=feed.city_name,
        last_updated=last_updated,
        top_off=decision.top_off,
        doors_off=decision.doors_off,
        conditions=conditions,
        rain_timing=rain_timing,
        time_based=time_based,
        explanations=tuple(build_explanations(conditions, rain_timing, time_based, settings)),
    )
