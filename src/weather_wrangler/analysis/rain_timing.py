"""Group today's rainy points into contiguous rain periods.

A rain period is a maximal run of consecutive points whose rain chance is
at least ``RAIN_PERIOD_MIN_CHANCE``. Periods are emitted in input order and
never overlap; the input must already be sorted by time.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from itertools import groupby

from weather_wrangler.analysis.readings import local_time, rain_chance, round_half_up, time_label
from weather_wrangler.schemas import ForecastPoint

RAIN_PERIOD_MIN_CHANCE = 10.0

NO_RAIN_SUMMARY = "No significant rain expected today"


@dataclass(frozen=True)
class RainSample:
    """One point inside a rain period."""

    timestamp: int
    time: str
    chance: float


@dataclass(frozen=True)
class RainPeriod:
    """A contiguous stretch of rainy forecast points."""

    start_time: str
    end_time: str
    start_hour: int
    end_hour: int
    max_chance: float
    forecasts: tuple[RainSample, ...] = ()

    @property
    def is_single_instant(self) -> bool:
        """True when the period is a single forecast step."""
        return self.start_time == self.end_time

    @property
    def peak_percent(self) -> int:
        return round_half_up(self.max_chance)


@dataclass(frozen=True)
class RainTiming:
    """Rain periods for the day and their one-line summary."""

    periods: tuple[RainPeriod, ...]
    summary: str

    @property
    def has_rain(self) -> bool:
        return bool(self.periods)


def _build_period(run: Sequence[tuple[ForecastPoint, float]], utc_offset_ms: int) -> RainPeriod:
    moments = [local_time(point, utc_offset_ms) for point, _ in run]
    samples = tuple(
        RainSample(timestamp=point.dt, time=time_label(moment), chance=chance)
        for (point, chance), moment in zip(run, moments, strict=True)
    )
    return RainPeriod(
        start_time=samples[0].time,
        end_time=samples[-1].time,
        start_hour=moments[0].hour,
        end_hour=moments[-1].hour,
        max_chance=max(sample.chance for sample in samples),
        forecasts=samples,
    )


def find_rain_periods(points: Sequence[ForecastPoint], utc_offset_ms: int) -> list[RainPeriod]:
    """
    Scan points in order and collect maximal runs of rainy points.

    Args:
        points: Today's forecast points, sorted by time.
        utc_offset_ms: Location UTC offset used for the time labels.

    Returns:
        Rain periods in chronological order.
    """
    chances = [(point, rain_chance(point)) for point in points]
    return [
        _build_period(list(run), utc_offset_ms)
        for rainy, run in groupby(chances, key=lambda item: item[1] >= RAIN_PERIOD_MIN_CHANCE)
        if rainy
    ]


def _period_fragment(period: RainPeriod) -> str:
    if period.is_single_instant:
        return f"{period.start_time} ({period.peak_percent}%)"
    return f"{period.start_time}-{period.end_time} ({period.peak_percent}%)"


def summarize_rain_periods(periods: Sequence[RainPeriod]) -> str:
    """Describe the day's rain periods in one sentence."""
    if not periods:
        return NO_RAIN_SUMMARY

    if len(periods) == 1:
        period = periods[0]
        if period.is_single_instant:
            return f"Rain expected around {period.start_time} ({period.peak_percent}% chance)"
        return (
            f"Rain expected from {period.start_time} to {period.end_time} "
            f"(up to {period.peak_percent}% chance)"
        )

    return "Rain expected: " + ", ".join(_period_fragment(p) for p in periods)


def analyze_rain_timing(points: Sequence[ForecastPoint], utc_offset_ms: int) -> RainTiming:
    """Find rain periods and summarize them."""
    periods = find_rain_periods(points, utc_offset_ms)
    return RainTiming(periods=tuple(periods), summary=summarize_rain_periods(periods))
