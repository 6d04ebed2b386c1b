"""Fetch station daily files from the weather archive.

Archive layout: ``<base>/<station><yy>.txt``, e.g. ``.../C509919.txt`` for
station C5099 in 2019. Fetches are independent and idempotent, so a batch
runs them on a small thread pool and records a ``FetchOutcome`` per station.
One failed station never stops the others.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING

import requests

from swd_weather.datasources.weather.models import FetchOutcome
from swd_weather.errors import RetrievalError
from swd_weather.services.http import POOL_SIZE, session
from swd_weather.store import raw_weather_path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from swd_weather.store import DataStore

DEFAULT_WORKERS = 4


def station_url(base_url: str, station: str, year: int) -> str:
    """Archive URL of a station's daily file for ``year``."""
    return f"{base_url.rstrip('/')}/{station}{year % 100:02d}.txt"


def fetch_station_file(
    station: str,
    year: int,
    base_url: str,
    *,
    timeout: float | None = None,
) -> bytes:
    """Download one station's raw daily file.

    Raises:
        RetrievalError: On any network failure, timeout or HTTP error status.
    """
    url = station_url(base_url, station, year)
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise RetrievalError(f"fetch failed: {e}", source=url) from e
    return resp.content


def fetch_stations(
    stations: Iterable[str],
    year: int,
    base_url: str,
    store: DataStore,
    *,
    max_workers: int = DEFAULT_WORKERS,
    timeout: float | None = None,
    overwrite: bool = False,
) -> dict[str, FetchOutcome]:
    """Fetch and persist each distinct station's file for ``year``.

    Files already in the store are reused unless ``overwrite`` is set.

    Args:
        stations: Station identifiers; duplicates and blanks are ignored.
        year: Archive year.
        base_url: Archive base URL.
        store: Destination store (``raw/weather/<year>/...``).
        max_workers: Concurrent fetches, at most the shared session's pool size.
        timeout: Per-request timeout in seconds.
        overwrite: Re-fetch even if a stored copy exists.

    Returns:
        Mapping of station -> outcome, sorted by station.
    """
    unique = sorted({s.strip() for s in stations if s and s.strip()})

    def _fetch_one(station: str) -> FetchOutcome:
        url = station_url(base_url, station, year)
        rel = raw_weather_path(year, station)
        existing = store.file_path(rel)
        if existing is not None and not overwrite:
            return FetchOutcome(station=station, year=year, url=url, path=existing)
        try:
            content = fetch_station_file(station, year, base_url, timeout=timeout)
            path = store.write_bytes(rel, content, source=url, station=station, year=year)
        except RetrievalError as e:
            return FetchOutcome(station=station, year=year, url=url, error=str(e))
        except OSError as e:
            msg = f"could not save {rel}: {e}"
            return FetchOutcome(station=station, year=year, url=url, error=msg)
        return FetchOutcome(station=station, year=year, url=url, path=path)

    outcomes: dict[str, FetchOutcome] = {}
    with ThreadPoolExecutor(max_workers=min(max_workers, POOL_SIZE)) as pool:
        futures = {pool.submit(_fetch_one, s): s for s in unique}
        for future in as_completed(futures):
            outcomes[futures[future]] = future.result()

    return dict(sorted(outcomes.items()))


def outcome_issue(outcome: FetchOutcome) -> RetrievalError:
    """Error describing a failed outcome, for the run report."""
    return RetrievalError(outcome.error or "not fetched", source=outcome.url)
