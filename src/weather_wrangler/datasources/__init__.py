"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, shared request helper
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Currently only ``openweather/`` (forecast + ZIP geocoding).

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above.

2. Write fetch functions that return raw dicts shaped like the
   OpenWeatherMap ``/forecast`` response (``list`` of points plus ``city``),
   so ``ForecastFeed.model_validate`` can parse them::

       from weather_wrangler.services.http import session

       def fetch_something(lat, lon) -> dict[str, Any]:
           resp = session.get(API_URL, params={...})
           resp.raise_for_status()
           return resp.json()

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Wire into the pipeline (see ``flows/check.py``).

5. Add tests in ``tests/test_{name}.py``.
"""
