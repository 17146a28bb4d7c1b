"""Exception types raised by the engine and its collaborators."""

from __future__ import annotations


class WeatherWranglerError(Exception):
    """Base class for all weather-wrangler errors."""


class NoForecastDataError(WeatherWranglerError):
    """The forecast feed has no points to analyze for today."""

    def __init__(self, message: str = "No weather forecast data available for today") -> None:
        super().__init__(message)


class WeatherApiError(WeatherWranglerError):
    """The forecast provider returned an error or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingApiKeyError(WeatherApiError):
    """No OpenWeatherMap API key is configured."""

    def __init__(self) -> None:
        super().__init__(
            "Weather API key not configured. "
            "Set OPENWEATHER_API_KEY in your environment or .env file."
        )


class LocationNotFoundError(WeatherApiError):
    """A ZIP code could not be resolved to coordinates."""

    def __init__(self, zip_code: str) -> None:
        super().__init__(f"ZIP code not found: {zip_code}", status_code=404)
        self.zip_code = zip_code
