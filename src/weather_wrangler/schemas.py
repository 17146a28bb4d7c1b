"""
Input schemas for the recommendation engine.

Pydantic models for the forecast feed and the user's comfort thresholds.
The forecast models parse an OpenWeatherMap 5-day/3-hour ``/forecast``
response directly; the engine-facing keys (``location``,
``utcOffsetSeconds``, ``cacheTimestamp``) are accepted as well.

All models are frozen: the engine treats them as read-only snapshots.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# =============================================================================
# Forecast feed
# =============================================================================


class MainReadings(BaseModel):
    """The ``main`` block of a forecast point."""

    model_config = ConfigDict(frozen=True)

    temp: float = Field(..., description="Temperature in °F (imperial units)")


class WindReadings(BaseModel):
    """The ``wind`` block of a forecast point."""

    model_config = ConfigDict(frozen=True)

    speed: float = Field(..., ge=0, description="Wind speed in m/s")


class WeatherCondition(BaseModel):
    """One entry of the ``weather`` array (OpenWeatherMap condition code)."""

    model_config = ConfigDict(frozen=True)

    id: int
    main: str | None = None
    description: str | None = None


class ForecastPoint(BaseModel):
    """A single timestamped forecast sample."""

    model_config = ConfigDict(frozen=True)

    dt: int = Field(..., description="Seconds since epoch, UTC")
    main: MainReadings
    wind: WindReadings
    weather: tuple[WeatherCondition, ...] = ()
    pop: float | None = Field(default=None, ge=0, le=1, description="Probability of precipitation")

    @property
    def condition_code(self) -> int | None:
        """Primary weather condition code, or None if the feed omitted it."""
        return self.weather[0].id if self.weather else None


class FeedLocation(BaseModel):
    """Where the forecast is for."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    utc_offset_seconds: int | None = Field(
        default=None,
        validation_alias=AliasChoices("utcOffsetSeconds", "utc_offset_seconds", "timezone"),
    )


class ForecastFeed(BaseModel):
    """Chronological forecast points plus location and capture metadata."""

    model_config = ConfigDict(frozen=True)

    points: tuple[ForecastPoint, ...] = Field(
        default=(), validation_alias=AliasChoices("list", "points")
    )
    location: FeedLocation | None = Field(
        default=None, validation_alias=AliasChoices("location", "city")
    )
    cache_timestamp: int | None = Field(
        default=None,
        validation_alias=AliasChoices("cacheTimestamp", "cache_timestamp"),
        description="Epoch milliseconds when the feed was captured",
    )

    @property
    def city_name(self) -> str:
        """Display name of the forecast location."""
        if self.location is not None and self.location.name:
            return self.location.name
        return "Unknown Location"


# =============================================================================
# Thresholds
# =============================================================================


class ThresholdSettings(BaseModel):
    """User comfort thresholds for taking the top and doors off."""

    model_config = ConfigDict(frozen=True)

    top_off_min_temp_f: float = Field(
        default=60,
        validation_alias=AliasChoices(
            "topOffMinTempF", "tempThresholdTopOff", "top_off_min_temp_f"
        ),
    )
    doors_off_min_temp_f: float = Field(
        default=65,
        validation_alias=AliasChoices(
            "doorsOffMinTempF", "tempThresholdDoorsOff", "doors_off_min_temp_f"
        ),
    )
    max_rain_chance_percent: float = Field(
        default=10,
        validation_alias=AliasChoices(
            "maxRainChancePercent", "rainChanceThreshold", "max_rain_chance_percent"
        ),
    )
    max_wind_mph: float = Field(
        default=15,
        validation_alias=AliasChoices("maxWindMph", "windSpeedThreshold", "max_wind_mph"),
    )


DEFAULT_THRESHOLDS = ThresholdSettings()
