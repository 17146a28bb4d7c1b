"""
Prefect flows for the recommendation pipeline.

Flows:
- check: Fetch (or reuse a cached) forecast, then evaluate today's
  top/doors recommendation

Usage (local):
    python -m weather_wrangler.flows.check

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m weather_wrangler.flows.check
"""
