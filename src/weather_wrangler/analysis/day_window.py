"""Select the forecast points that fall on "today" at the forecast location."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from weather_wrangler.schemas import ForecastFeed, ForecastPoint

log = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000

#: Points used when the feed has nothing for today (one day of 3-hour steps).
FALLBACK_POINT_COUNT = 8


@dataclass(frozen=True)
class DayWindow:
    """Today's forecast points and the UTC offset used to select them."""

    points: tuple[ForecastPoint, ...]
    utc_offset_ms: int
    is_fallback: bool = False

    def __len__(self) -> int:
        return len(self.points)


def _as_utc(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(UTC)
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now


def caller_offset_ms(now: datetime) -> int:
    """UTC offset of the machine's local timezone at ``now``, east positive."""
    offset = now.astimezone().utcoffset()
    return int(offset.total_seconds() * 1000) if offset is not None else 0


def resolve_utc_offset_ms(feed: ForecastFeed, now: datetime | None = None) -> int:
    """
    UTC offset in milliseconds for the feed's location.

    Uses the location's own offset when the feed carries one; otherwise the
    caller's local offset, so the observer's day boundary is used instead.
    """
    if feed.location is not None and feed.location.utc_offset_seconds is not None:
        return feed.location.utc_offset_seconds * 1000
    return caller_offset_ms(_as_utc(now))


def select_today(feed: ForecastFeed, now: datetime | None = None) -> DayWindow:
    """
    Extract today's points from the feed, in feed order.

    "Today" is the calendar day containing ``now`` at the location's UTC
    offset. If no point falls on that day, the first
    ``FALLBACK_POINT_COUNT`` points are used as-is, without checking their
    date. Never raises; an empty feed gives an empty window.

    Args:
        feed: Forecast feed (points in chronological order).
        now: Current instant; defaults to the wall clock. Naive values are
            treated as UTC.
    """
    current = _as_utc(now)
    offset_ms = resolve_utc_offset_ms(feed, current)

    local_now_ms = int(current.timestamp() * 1000) + offset_ms
    day_start_ms = local_now_ms - local_now_ms % DAY_MS
    day_end_ms = day_start_ms + DAY_MS

    today = tuple(
        point
        for point in feed.points
        if day_start_ms <= point.dt * 1000 + offset_ms < day_end_ms
    )
    if today:
        log.debug(
            "Selected %d of %d points for today (offset %d ms)",
            len(today),
            len(feed.points),
            offset_ms,
        )
        return DayWindow(points=today, utc_offset_ms=offset_ms)

    fallback = feed.points[:FALLBACK_POINT_COUNT]
    if fallback:
        log.warning(
            "No forecast points for today; falling back to the first %d points", len(fallback)
        )
    return DayWindow(points=fallback, utc_offset_ms=offset_ms, is_fallback=True)
