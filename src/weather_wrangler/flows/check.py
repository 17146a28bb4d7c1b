"""
Prefect flow: fetch (or reuse) today's forecast and evaluate it.

Run locally:
    python -m weather_wrangler.flows.check

Run with Prefect dashboard:
    prefect server start &
    python -m weather_wrangler.flows.check
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path  # noqa: TC003 (used at runtime)
from typing import TYPE_CHECKING, Any

from prefect import flow, task

from weather_wrangler.analysis import RecommendationResult, evaluate_conditions
from weather_wrangler.config import get_settings
from weather_wrangler.datasources import openweather
from weather_wrangler.errors import LocationNotFoundError, MissingApiKeyError
from weather_wrangler.schemas import ForecastFeed, ThresholdSettings
from weather_wrangler.store import DataStore, forecast_cache_path

if TYPE_CHECKING:
    from prefect import Task
    from prefect.client.schemas.objects import TaskRun
    from prefect.states import State

FORECAST_SOURCE = "openweathermap.org"


def get_store() -> DataStore:
    """Forecast cache rooted at the configured data directory."""
    return DataStore(get_settings().data_dir)


def _retry_transient(task: Task[..., Any], task_run: TaskRun, state: State[Any]) -> bool:
    """Retry unless the failure is one a retry cannot fix."""
    try:
        state.result()
    except (MissingApiKeyError, LocationNotFoundError):
        return False
    except Exception:  # noqa: BLE001
        return True
    return False


@task(
    name="fetch-forecast",
    retries=2,
    retry_delay_seconds=5,
    retry_condition_fn=_retry_transient,
)
def fetch_forecast(
    lat: float | None = None,
    lon: float | None = None,
    zip_code: str | None = None,
) -> dict[str, Any]:
    """Fetch the 5-day / 3-hour forecast by ZIP code or coordinates."""
    settings = get_settings()
    api_key, timeout = settings.openweather_api_key, settings.api_timeout
    if zip_code:
        data = openweather.fetch_forecast_by_zip(zip_code, api_key=api_key, timeout=timeout)
    elif lat is not None and lon is not None:
        data = openweather.fetch_forecast(lat, lon, api_key=api_key, timeout=timeout)
    else:
        msg = "A ZIP code or both lat and lon are required"
        raise ValueError(msg)
    data["cacheTimestamp"] = int(datetime.now(UTC).timestamp() * 1000)
    return data


@task(name="save-forecast")
def save_forecast(forecast: dict[str, Any], path: Path) -> Path:
    """Save a raw forecast via store, fresh for the configured TTL."""
    ttl = timedelta(minutes=get_settings().cache_ttl_minutes)
    return get_store().write(
        path,
        forecast,
        source=FORECAST_SOURCE,
        valid_until=datetime.now(UTC) + ttl,
    )


@task(name="load-cached-forecast")
def load_cached_forecast(path: Path) -> dict[str, Any] | None:
    """Load a cached forecast if it is still fresh.

    The envelope's ``fetched_at`` becomes the feed's ``cacheTimestamp`` so
    the result shows when the data was actually retrieved.
    """
    store = get_store()
    if not store.is_fresh(path):
        return None
    data = store.read(path)
    if data is None:
        return None
    fetched_at = store.fetched_at(path)
    if fetched_at is not None:
        data["cacheTimestamp"] = int(fetched_at.timestamp() * 1000)
    return data


@task(name="evaluate-forecast")
def evaluate(
    forecast: dict[str, Any],
    thresholds: ThresholdSettings,
    now: datetime | None = None,
) -> RecommendationResult:
    """Parse the raw forecast and run the recommendation engine."""
    feed = ForecastFeed.model_validate(forecast)
    return evaluate_conditions(feed, thresholds, now=now)


@flow(name="check-today", log_prints=True)
def check_today(
    lat: float | None = None,
    lon: float | None = None,
    zip_code: str | None = None,
    thresholds: ThresholdSettings | None = None,
    use_cache: bool = True,
    now: datetime | None = None,
) -> RecommendationResult:
    """
    Recommend today's top/doors configuration for a location.

    Reuses a cached forecast while it is fresh; otherwise fetches one and
    caches it.
    """
    settings = thresholds if thresholds is not None else get_settings().thresholds()
    path = forecast_cache_path(lat=lat, lon=lon, zip_code=zip_code)

    forecast = load_cached_forecast(path) if use_cache else None
    if forecast is not None:
        print(f"Using cached forecast from {path}")
    else:
        where = f"ZIP {zip_code}" if zip_code else f"({lat}, {lon})"
        print(f"Fetching forecast for {where}...")
        forecast = fetch_forecast(lat=lat, lon=lon, zip_code=zip_code)
        saved = save_forecast(forecast, path)
        print(f"Saved {len(forecast.get('list', []))} forecast points to {saved}")

    return evaluate(forecast, settings, now=now)


if __name__ == "__main__":
    config = get_settings()
    result = check_today(lat=config.lat, lon=config.lon, zip_code=config.zip_code)
    print(f"Flow complete: top_off={result.top_off} doors_off={result.doors_off}")
