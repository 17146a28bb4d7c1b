"""Tests for the text report renderer."""

from __future__ import annotations

from datetime import UTC, datetime

from factories import NOON, day_points, make_feed

from weather_wrangler.analysis import evaluate_conditions
from weather_wrangler.renderers.report import build_report_text, on_off, updated_label
from weather_wrangler.schemas import ThresholdSettings


def _report(temps: list[float], hours: tuple[int, ...] | None = None) -> str:
    points = day_points(temps, hours=hours) if hours else day_points(temps)
    result = evaluate_conditions(make_feed(points), ThresholdSettings(), now=NOON)
    return build_report_text(result)


class TestHelpers:
    def test_on_off(self) -> None:
        assert on_off(True) == "Off"
        assert on_off(False) == "On"

    def test_updated_label(self) -> None:
        moment = datetime(2026, 10, 18, 15, 5, tzinfo=UTC)
        assert updated_label(moment) == "Oct 18, 3:05 PM UTC"


class TestBuildReportText:
    """Test the rendered report."""

    def test_header_and_verdict(self) -> None:
        text = _report([55, 58, 62, 66, 70, 68, 60, 56])

        assert text.startswith("Today's Weather Wrangler for Testville\n")
        assert "Updated Jun 15, 12:00 PM UTC" in text
        assert "  Top:   Off\n" in text
        assert "  Doors: Off\n" in text
        assert "Max temperature: 70°F" in text
        assert "Rain chance:     0%" in text
        assert "Max wind speed:  4 mph" in text

    def test_segment_rows(self) -> None:
        text = _report([55, 58, 62, 66, 70, 68, 60, 56])

        assert (
            "  Morning   6 AM-9 AM: avg 64°F, 0% rain, 4 mph wind -> top off, doors on\n" in text
        )
        assert "  Evening   6 PM-9 PM: avg 58°F, 0% rain, 4 mph wind -> top on, doors on\n" in text

    def test_empty_segment_row(self) -> None:
        text = _report([75], hours=(15,))
        assert "  Morning   no forecast data\n" in text
        assert "  Afternoon 3 PM: avg 75°F" in text

    def test_explanations_listed_in_order(self) -> None:
        text = _report([55, 58, 62, 66, 70, 68, 60, 56])
        lines = [line for line in text.splitlines() if line.startswith("- ")]

        assert lines[0] == "- This morning: top off, doors on (64°F is too cool)."
        assert lines[-1].startswith("- ℹ️ Details: ")
        assert text.endswith("\n")
