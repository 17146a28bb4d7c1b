"""OpenWeatherMap forecast data source.

Fetches the 5-day / 3-hour forecast (requires an API key).

Public API:
  - forecast: fetch_forecast, fetch_forecast_by_zip
  - geocoding: geocode_zip, GeoLocation
  - client: API URLs, shared constants
"""

from weather_wrangler.datasources.openweather.client import FORECAST_API, GEOCODING_ZIP_API
from weather_wrangler.datasources.openweather.forecast import (
    fetch_forecast,
    fetch_forecast_by_zip,
)
from weather_wrangler.datasources.openweather.geocoding import GeoLocation, geocode_zip

__all__ = [
    "FORECAST_API",
    "GEOCODING_ZIP_API",
    "GeoLocation",
    "fetch_forecast",
    "fetch_forecast_by_zip",
    "geocode_zip",
]
