"""Weather Wrangler - should the Jeep's top and doors come off today?

Architecture::

    schemas.py     Forecast feed and threshold models (pydantic)
    analysis/      Pure recommendation engine (day window, conditions,
                   rain timing, morning/afternoon/evening advice)
    datasources/   External APIs (OpenWeatherMap forecast + ZIP geocoding)
    store.py       Forecast cache with TTL envelopes
    flows/         Prefect orchestration (fetch or reuse cache, evaluate)
    renderers/     Pure result -> text rendering
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources → store (cache) → analysis → renderers → CLI

Extension points (each package's docstring has a step-by-step guide):
  - New data source:   datasources/__init__.py
  - New analysis:      analysis/__init__.py
  - New output format: renderers/__init__.py
"""

__version__ = "0.1.0"

from weather_wrangler.config import Settings
from weather_wrangler.schemas import ForecastFeed, ThresholdSettings

__all__ = ["ForecastFeed", "Settings", "ThresholdSettings", "__version__"]
