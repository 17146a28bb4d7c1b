"""ZIP code -> coordinates via the OpenWeatherMap geocoding API."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from weather_wrangler.datasources.openweather.client import (
    GEOCODING_ZIP_API,
    request_json,
    require_api_key,
)
from weather_wrangler.errors import LocationNotFoundError, WeatherApiError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoLocation:
    """A resolved place."""

    lat: float
    lon: float
    name: str | None = None
    country: str | None = None


def geocode_zip(
    zip_code: str, *, api_key: str | None, timeout: float | None = None
) -> GeoLocation:
    """
    Resolve a ZIP (or ``zip,country``) code to coordinates.

    Raises:
        MissingApiKeyError: If no API key is configured.
        LocationNotFoundError: If the API does not know the code.
        WeatherApiError: On any other API failure.
    """
    key = require_api_key(api_key)
    log.info("Geocoding ZIP %s", zip_code)

    try:
        data = request_json(GEOCODING_ZIP_API, {"zip": zip_code, "appid": key}, timeout)
    except WeatherApiError as exc:
        if exc.status_code == 404:
            raise LocationNotFoundError(zip_code) from exc
        raise

    if data.get("lat") is None or data.get("lon") is None:
        raise LocationNotFoundError(zip_code)

    return GeoLocation(
        lat=float(data["lat"]),
        lon=float(data["lon"]),
        name=data.get("name"),
        country=data.get("country"),
    )
