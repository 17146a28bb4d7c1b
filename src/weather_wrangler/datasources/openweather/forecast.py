"""5-day / 3-hour forecast from the OpenWeatherMap forecast API."""

from __future__ import annotations

import logging
from typing import Any

from weather_wrangler.datasources.openweather.client import (
    FORECAST_API,
    UNITS,
    request_json,
    require_api_key,
)
from weather_wrangler.datasources.openweather.geocoding import geocode_zip

log = logging.getLogger(__name__)


def fetch_forecast(
    lat: float, lon: float, *, api_key: str | None, timeout: float | None = None
) -> dict[str, Any]:
    """
    Fetch the 5-day / 3-hour forecast for a coordinate pair.

    Args:
        lat: Latitude.
        lon: Longitude.
        api_key: OpenWeatherMap API key.
        timeout: Request timeout in seconds (session default when None).

    Returns:
        Raw API response with ``list`` (forecast points) and ``city``
        (name and ``timezone`` offset in seconds).
    """
    key = require_api_key(api_key)
    log.info("Fetching forecast for (%s, %s)", lat, lon)
    params = {"lat": lat, "lon": lon, "appid": key, "units": UNITS}
    return request_json(FORECAST_API, params, timeout)


def fetch_forecast_by_zip(
    zip_code: str, *, api_key: str | None, timeout: float | None = None
) -> dict[str, Any]:
    """
    Geocode a ZIP code, then fetch its forecast.

    The geocoded place is attached as ``locationInfo``; ``city`` is left as
    the forecast API returned it.
    """
    place = geocode_zip(zip_code, api_key=api_key, timeout=timeout)
    data = fetch_forecast(place.lat, place.lon, api_key=api_key, timeout=timeout)

    data["locationInfo"] = {
        "lat": place.lat,
        "lon": place.lon,
        "name": place.name,
        "country": place.country,
    }
    return data
