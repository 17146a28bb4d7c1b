"""Morning / afternoon / evening recommendations.

Buckets today's points into three fixed local-time segments, works out a
top/doors recommendation for each, then turns the segments into a short
list of advisory sentences:

  - consistent day (every segment agrees on the top): one sentence;
  - variable day: one sentence per run of consecutive segments with the
    same configuration, plus a note that conditions change.

Unlike the day-level conditions, a segment's temperature is the average of
its points. Rain and wind are still the segment's peaks.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from itertools import groupby

from weather_wrangler.analysis.conditions import is_doors_off, is_top_off
from weather_wrangler.analysis.readings import (
    hour_label,
    local_time,
    rain_chance,
    round_half_up,
    temperature,
    wind_mph,
)
from weather_wrangler.schemas import ForecastPoint, ThresholdSettings

log = logging.getLogger(__name__)


class DaySegment(StrEnum):
    """Fixed local-time buckets of the day."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


#: [start, end) local hours, in chronological order.
SEGMENT_HOURS: dict[DaySegment, tuple[int, int]] = {
    DaySegment.MORNING: (6, 12),
    DaySegment.AFTERNOON: (12, 18),
    DaySegment.EVENING: (18, 24),
}


class ConfigClass(StrEnum):
    """Jeep configuration a segment calls for."""

    BOTH_OFF = "both-off"
    TOP_OFF = "top-off"
    BOTH_ON = "both-on"


class DayPattern(StrEnum):
    """How the recommendation varies over the day."""

    CONSISTENT = "consistent"
    VARIABLE = "variable"
    NONE = "none"


NO_DETAIL_MESSAGE = "No detailed forecast available for today"

CONSISTENT_BOTH_OFF = "Perfect weather all day! Keep both top and doors off."
CONSISTENT_TOP_OFF = (
    "Great weather for the top off all day, but keep doors on due to wind or temperature."
)
CONSISTENT_BOTH_ON = "Weather conditions suggest keeping top and doors on today."

CONSISTENT_MESSAGES: dict[ConfigClass, str] = {
    ConfigClass.BOTH_OFF: CONSISTENT_BOTH_OFF,
    ConfigClass.TOP_OFF: CONSISTENT_TOP_OFF,
    ConfigClass.BOTH_ON: CONSISTENT_BOTH_ON,
}

TRANSITION_TIP = "Conditions change during the day, so plan to stop and adjust your Jeep."

ALL_DAY = "all day"

SINGLE_SEGMENT_PHRASES: dict[DaySegment, str] = {
    DaySegment.MORNING: "This morning",
    DaySegment.AFTERNOON: "This afternoon",
    DaySegment.EVENING: "This evening",
}

#: (configuration, covers all day) -> sentence template
MESSAGE_TEMPLATES: dict[tuple[ConfigClass, bool], str] = {
    (ConfigClass.BOTH_OFF, True): "Top and doors off all day!",
    (ConfigClass.BOTH_OFF, False): "{time}: top and doors off!",
    (ConfigClass.TOP_OFF, True): "Top off all day, but keep the doors on{reason}.",
    (ConfigClass.TOP_OFF, False): "{time}: top off, doors on{reason}.",
    (ConfigClass.BOTH_ON, True): "Keep the top and doors on all day{reason}.",
    (ConfigClass.BOTH_ON, False): "{time}: keep the top and doors on{reason}.",
}

#: Which failing factors explain each configuration.
REASON_FACTORS: dict[ConfigClass, tuple[str, ...]] = {
    ConfigClass.BOTH_OFF: (),
    ConfigClass.TOP_OFF: ("doors_temp", "wind"),
    ConfigClass.BOTH_ON: ("top_temp", "rain", "wind"),
}


def configuration_class(top_off: bool, doors_off: bool) -> ConfigClass:
    """Map a pair of recommendations to its configuration class."""
    if top_off and doors_off:
        return ConfigClass.BOTH_OFF
    if top_off:
        return ConfigClass.TOP_OFF
    return ConfigClass.BOTH_ON


@dataclass(frozen=True)
class SegmentConditions:
    """Aggregates and recommendation for one segment of the day."""

    avg_temp: int
    max_rain_chance: int
    max_wind: int
    start_time: str
    end_time: str
    top_off: bool
    doors_off: bool
    temps: tuple[int, ...]

    @property
    def config(self) -> ConfigClass:
        return configuration_class(self.top_off, self.doors_off)


@dataclass(frozen=True)
class RecommendationGroup:
    """A run of consecutive segments sharing one configuration."""

    segments: tuple[DaySegment, ...]
    config: ConfigClass
    message: str

    @property
    def top_off(self) -> bool:
        return self.config is not ConfigClass.BOTH_ON

    @property
    def doors_off(self) -> bool:
        return self.config is ConfigClass.BOTH_OFF


@dataclass(frozen=True)
class TimeBasedRecommendations:
    """Per-segment conditions plus the advisory sentences built from them."""

    periods: dict[DaySegment, SegmentConditions | None]
    pattern: DayPattern
    groups: tuple[RecommendationGroup, ...]
    recommendations: tuple[str, ...]


# =============================================================================
# Bucketing and per-segment aggregates
# =============================================================================


def segment_for_hour(hour: int) -> DaySegment | None:
    """First segment whose hour range contains ``hour``; None before 6 AM."""
    for segment, (start, end) in SEGMENT_HOURS.items():
        if start <= hour < end:
            return segment
    return None


def bucket_points(
    points: Sequence[ForecastPoint], utc_offset_ms: int
) -> dict[DaySegment, list[ForecastPoint]]:
    """Split points into segments by local hour, keeping their order."""
    buckets: dict[DaySegment, list[ForecastPoint]] = {segment: [] for segment in SEGMENT_HOURS}
    for point in points:
        segment = segment_for_hour(local_time(point, utc_offset_ms).hour)
        if segment is not None:
            buckets[segment].append(point)
    return buckets


def summarize_segment(
    points: Sequence[ForecastPoint], utc_offset_ms: int, settings: ThresholdSettings
) -> SegmentConditions | None:
    """
    Aggregate one segment's points.

    Returns:
        SegmentConditions, or None if the segment has no points.
    """
    if not points:
        return None

    temps = tuple(temperature(p) for p in points)
    avg_temp = round_half_up(sum(temps) / len(temps))
    max_rain = round_half_up(max(rain_chance(p) for p in points))
    max_wind = max(wind_mph(p) for p in points)

    return SegmentConditions(
        avg_temp=avg_temp,
        max_rain_chance=max_rain,
        max_wind=max_wind,
        start_time=hour_label(local_time(points[0], utc_offset_ms)),
        end_time=hour_label(local_time(points[-1], utc_offset_ms)),
        top_off=is_top_off(avg_temp, max_rain, settings),
        doors_off=is_doors_off(avg_temp, max_rain, max_wind, settings),
        temps=temps,
    )


# =============================================================================
# Sentence generation
# =============================================================================


def classify_pattern(valid: Sequence[SegmentConditions]) -> DayPattern:
    """Consistent if no segment or every segment allows the top off."""
    if not valid:
        return DayPattern.NONE
    top_off_count = sum(1 for s in valid if s.top_off)
    if top_off_count in (0, len(valid)):
        return DayPattern.CONSISTENT
    return DayPattern.VARIABLE


def consistent_config(valid: Sequence[SegmentConditions]) -> ConfigClass:
    """The one configuration for a day whose segments agree on the top."""
    if all(s.doors_off for s in valid):
        return ConfigClass.BOTH_OFF
    if all(s.top_off for s in valid):
        return ConfigClass.TOP_OFF
    return ConfigClass.BOTH_ON


def consistent_message(valid: Sequence[SegmentConditions]) -> str:
    return CONSISTENT_MESSAGES[consistent_config(valid)]


def time_phrase(segments: Sequence[DaySegment]) -> str:
    """``This morning``, ``morning and afternoon`` or ``all day``."""
    if len(segments) == 1:
        return SINGLE_SEGMENT_PHRASES[segments[0]]
    if len(segments) == 2:
        return f"{segments[0].value} and {segments[1].value}"
    return ALL_DAY


def reason_clause(
    run: Sequence[SegmentConditions], config: ConfigClass, settings: ThresholdSettings
) -> str:
    """
    Parenthetical listing the worst-case factors that keep parts on.

    Returns an empty string when nothing fails.
    """
    worst_temp = min(s.avg_temp for s in run)
    worst_rain = max(s.max_rain_chance for s in run)
    worst_wind = max(s.max_wind for s in run)

    failing = {
        "top_temp": worst_temp < settings.top_off_min_temp_f,
        "doors_temp": worst_temp < settings.doors_off_min_temp_f,
        "rain": worst_rain >= settings.max_rain_chance_percent,
        "wind": worst_wind >= settings.max_wind_mph,
    }
    fragments = {
        "top_temp": f"{worst_temp}°F is too cool",
        "doors_temp": f"{worst_temp}°F is too cool",
        "rain": f"{worst_rain}% rain chance",
        "wind": f"{worst_wind} mph wind",
    }

    parts = [fragments[factor] for factor in REASON_FACTORS[config] if failing[factor]]
    return f" ({', '.join(parts)})" if parts else ""


def compose_message(
    segments: Sequence[DaySegment],
    run: Sequence[SegmentConditions],
    settings: ThresholdSettings,
) -> str:
    """One sentence for a run of same-configuration segments."""
    config = run[0].config
    phrase = time_phrase(segments)
    template = MESSAGE_TEMPLATES[(config, phrase == ALL_DAY)]
    return template.format(
        time=phrase[:1].upper() + phrase[1:],
        reason=reason_clause(run, config, settings),
    )


def group_segments(
    valid: Sequence[tuple[DaySegment, SegmentConditions]], settings: ThresholdSettings
) -> list[RecommendationGroup]:
    """Merge consecutive segments with the same configuration into groups."""
    groups: list[RecommendationGroup] = []
    for config, items in groupby(valid, key=lambda item: item[1].config):
        run = list(items)
        segments = tuple(segment for segment, _ in run)
        groups.append(
            RecommendationGroup(
                segments=segments,
                config=config,
                message=compose_message(segments, [c for _, c in run], settings),
            )
        )
    return groups


def temperature_range(valid: Sequence[SegmentConditions]) -> str:
    """``58°F - 70°F``, or ``64°F`` when the day never changes."""
    temps = [t for s in valid for t in s.temps]
    low, high = min(temps), max(temps)
    return f"{low}°F" if low == high else f"{low}°F - {high}°F"


def _has_transition(groups: Sequence[RecommendationGroup]) -> bool:
    return any(
        (a.top_off, a.doors_off) != (b.top_off, b.doors_off)
        for a, b in zip(groups, groups[1:], strict=False)
    )


def analyze_time_periods(
    points: Sequence[ForecastPoint], utc_offset_ms: int, settings: ThresholdSettings
) -> TimeBasedRecommendations:
    """
    Build segment-by-segment recommendations for today.

    Args:
        points: Today's forecast points, sorted by time.
        utc_offset_ms: Location UTC offset, as resolved by the day window.
        settings: User thresholds.

    Returns:
        TimeBasedRecommendations with every segment (None when empty),
        the day pattern, the recommendation groups and the sentences.
    """
    buckets = bucket_points(points, utc_offset_ms)
    periods = {
        segment: summarize_segment(bucket, utc_offset_ms, settings)
        for segment, bucket in buckets.items()
    }
    valid = [(segment, c) for segment, c in periods.items() if c is not None]

    for segment, c in valid:
        log.debug(
            "%s: avg %d°F, rain %d%%, wind %d mph -> %s",
            segment,
            c.avg_temp,
            c.max_rain_chance,
            c.max_wind,
            c.config,
        )

    conditions = [c for _, c in valid]
    pattern = classify_pattern(conditions)

    if pattern is DayPattern.NONE:
        return TimeBasedRecommendations(
            periods=periods, pattern=pattern, groups=(), recommendations=(NO_DETAIL_MESSAGE,)
        )

    groups: list[RecommendationGroup]
    if pattern is DayPattern.CONSISTENT:
        segments = tuple(segment for segment, _ in valid)
        groups = [
            RecommendationGroup(
                segments=segments,
                config=consistent_config(conditions),
                message=consistent_message(conditions),
            )
        ]
        messages = [groups[0].message]
    else:
        groups = group_segments(valid, settings)
        messages = [group.message for group in groups]
        if len(groups) >= 2 and _has_transition(groups):
            messages.append(TRANSITION_TIP)

    if len(messages) == 1 and len(valid) > 1:
        messages = [messages[0].replace(ALL_DAY, temperature_range(conditions))]

    return TimeBasedRecommendations(
        periods=periods,
        pattern=pattern,
        groups=tuple(groups),
        recommendations=tuple(messages),
    )
