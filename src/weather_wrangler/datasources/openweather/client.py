"""OpenWeatherMap API client constants and shared request helper.

API docs:
  - 5 day / 3 hour forecast: https://openweathermap.org/forecast5
  - Geocoding (ZIP): https://openweathermap.org/api/geocoding-api#direct_zip
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from weather_wrangler.errors import MissingApiKeyError, WeatherApiError
from weather_wrangler.services.http import session

log = logging.getLogger(__name__)

FORECAST_API = "https://api.openweathermap.org/data/2.5/forecast"
GEOCODING_ZIP_API = "https://api.openweathermap.org/geo/1.0/zip"

# Temperatures in °F; wind speed is m/s for both unit systems on /forecast
UNITS = "imperial"

# Placeholder written into deploy templates before a real key is injected
API_KEY_PLACEHOLDER = "WEATHER_API_KEY_PLACEHOLDER"


def require_api_key(api_key: str | None) -> str:
    """Return the key, or raise if it is empty or still the placeholder."""
    if not api_key or api_key == API_KEY_PLACEHOLDER:
        raise MissingApiKeyError
    return api_key


def request_json(
    url: str, params: dict[str, Any], timeout: float | None = None
) -> dict[str, Any]:
    """
    GET a JSON document from the OpenWeatherMap API.

    ``timeout`` (seconds) overrides the session default when given.

    Raises:
        WeatherApiError: On a non-2xx status (``status_code`` set), a
            timeout, a connection failure, or a body that is not JSON.
    """
    try:
        resp = session.get(url, params=params, timeout=timeout)
    except requests.Timeout as exc:
        msg = "Weather request timed out. Please try again."
        raise WeatherApiError(msg) from exc
    except requests.RequestException as exc:
        msg = f"Network error contacting weather service: {exc}"
        raise WeatherApiError(msg) from exc

    if not resp.ok:
        msg = f"Weather API error: {resp.status_code} {resp.reason}"
        raise WeatherApiError(msg, status_code=resp.status_code)

    try:
        result: dict[str, Any] = resp.json()
    except ValueError as exc:
        msg = "Weather API returned an invalid response"
        raise WeatherApiError(msg, status_code=resp.status_code) from exc
    return result
