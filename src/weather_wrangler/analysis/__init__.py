"""Forecast analysis and recommendation engine.

Pure functions over a forecast feed and the user's thresholds. Each module
is one pipeline stage:

  - readings: per-point rain chance, wind mph, rounding, local time labels
  - day_window: today's points at the location's UTC offset
  - conditions: worst-case day conditions -> top/doors recommendation
  - rain_timing: contiguous rain periods and their summary sentence
  - segments: morning/afternoon/evening recommendations and advice
  - evaluate: runs the stages and assembles the RecommendationResult

Dependency rule: analysis/ imports schemas and errors only. It never
fetches data, touches the store, or formats output for a terminal.

Adding a stage
--------------
1. Create ``analysis/{name}.py`` with a pure function taking today's points
   (and ``utc_offset_ms`` if it needs local time)::

       def analyze_something(
           points: Sequence[ForecastPoint],
           utc_offset_ms: int,
       ) -> SomethingSummary:
           ...

2. Call it from ``evaluate_conditions`` and add its output to
   ``RecommendationResult`` (and ``as_dict``).

3. Re-export below and add tests in ``tests/test_{name}.py``.
"""

from weather_wrangler.analysis.conditions import (
    DayConditions,
    Recommendation,
    analyze_conditions,
    recommend,
    threshold_explanations,
)
from weather_wrangler.analysis.day_window import DayWindow, select_today
from weather_wrangler.analysis.evaluate import (
    RecommendationResult,
    build_explanations,
    evaluate_conditions,
)
from weather_wrangler.analysis.rain_timing import (
    RainPeriod,
    RainTiming,
    analyze_rain_timing,
    find_rain_periods,
)
from weather_wrangler.analysis.readings import rain_chance, wind_mph
from weather_wrangler.analysis.segments import (
    DayPattern,
    DaySegment,
    SegmentConditions,
    TimeBasedRecommendations,
    analyze_time_periods,
)

__all__ = [
    "DayConditions",
    "DayPattern",
    "DaySegment",
    "DayWindow",
    "RainPeriod",
    "RainTiming",
    "Recommendation",
    "RecommendationResult",
    "SegmentConditions",
    "TimeBasedRecommendations",
    "analyze_conditions",
    "analyze_rain_timing",
    "analyze_time_periods",
    "build_explanations",
    "evaluate_conditions",
    "find_rain_periods",
    "rain_chance",
    "recommend",
    "select_today",
    "threshold_explanations",
    "wind_mph",
]
