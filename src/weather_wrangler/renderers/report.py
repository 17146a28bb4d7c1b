"""Plain-text report of a recommendation result, for the terminal."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from weather_wrangler.analysis.readings import time_label
from weather_wrangler.renderers import render_template

if TYPE_CHECKING:
    from datetime import datetime

    from weather_wrangler.analysis import RecommendationResult, SegmentConditions


def on_off(value: bool) -> str:
    """``Off`` when the part can come off, else ``On``."""
    return "Off" if value else "On"


def updated_label(moment: datetime) -> str:
    """e.g. ``Oct 18, 3:05 PM UTC``."""
    return f"{moment:%b} {moment.day}, {time_label(moment)} {moment.tzname() or 'UTC'}"


def _segment_row(name: str, conditions: SegmentConditions | None) -> dict[str, Any]:
    if conditions is None:
        return {"name": name.capitalize(), "detail": "no forecast data"}
    span = (
        conditions.start_time
        if conditions.start_time == conditions.end_time
        else f"{conditions.start_time}-{conditions.end_time}"
    )
    return {
        "name": name.capitalize(),
        "detail": (
            f"{span}: avg {conditions.avg_temp}°F, {conditions.max_rain_chance}% rain, "
            f"{conditions.max_wind} mph wind -> top {on_off(conditions.top_off).lower()}, "
            f"doors {on_off(conditions.doors_off).lower()}"
        ),
    }


def build_report_text(result: RecommendationResult) -> str:
    """
    Render a recommendation result as a short text report.

    Sections: header, top/doors verdict, day conditions, per-segment
    breakdown, then the explanation lines in display order.
    """
    segments = [
        _segment_row(segment.value, conditions)
        for segment, conditions in result.time_based.periods.items()
    ]
    return render_template(
        "report.txt.j2",
        city=result.city_name,
        updated=updated_label(result.last_updated),
        top=on_off(result.top_off),
        doors=on_off(result.doors_off),
        max_temp=result.max_temp,
        rain=result.min_rain,
        max_wind=result.max_wind,
        segments=segments,
        explanations=result.explanations,
    )
