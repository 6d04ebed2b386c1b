"""
Prefect flows for the data pipeline.

Flows:
- traps: Reshape trap counts, total by season, append to trap history
- fetch: Download station daily weather files from the archive
- build: Normalize weather, summarize by season, merge into the analysis table
- pipeline: All of the above in order

Usage (local):
    python -m swd_weather.flows.pipeline
    swd-weather run

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m swd_weather.flows.pipeline
"""
