"""Data store for pipeline artifacts.

Files are organized into tiers by how they were produced:
  - raw/: Bytes exactly as fetched (station daily files)
  - normalized/: Parsed per-station tables with canonical column names
  - derived/: Pipeline outputs (trap history, analysis table, run report)

Tables are written as CSV with missing values as empty fields. Raw and
tabular files get a sidecar ``.meta.json`` with provenance; JSON documents
carry the same metadata in an envelope.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import Any

import pandas as pd


def raw_weather_path(year: int, station: str) -> Path:
    """Store path of a station's fetched daily file, keyed by (year, station)."""
    return Path("raw/weather") / str(year) / f"{station}{year % 100:02d}.txt"


def normalized_weather_path(year: int, station: str) -> Path:
    """Store path of a station's normalized daily table."""
    return Path("normalized/weather") / str(year) / f"{station}.csv"


HISTORY_PATH = Path("derived/historical_traps.csv")
ANALYSIS_PATH = Path("derived/analysis.csv")
REPORT_PATH = Path("derived/report.json")


class DataStore:
    """Manages read/write of pipeline files under one base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.raw = base_dir / "raw"
        self.normalized = base_dir / "normalized"
        self.derived = base_dir / "derived"

    def read(self, path: Path) -> Any | None:
        """Read data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            envelope: dict[str, Any] = json.load(f)
        return envelope.get("data", envelope)

    def write(self, path: Path, data: Any, source: str, **params: Any) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``derived/report.json``).
            data: JSON-compatible payload stored under the ``data`` key.
            source: Producer identifier (e.g. ``"swd-weather pipeline"``).
            **params: Extra metadata fields.

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        envelope = {"meta": self._meta(source, params), "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)
        return full

    def write_bytes(self, path: Path, content: bytes, source: str, **params: Any) -> Path:
        """Store raw bytes with sidecar metadata.

        Args:
            path: Relative destination path (e.g. ``raw/weather/2019/C509919.txt``).
            content: File content, stored verbatim.
            source: Where the bytes came from (usually a URL).
            **params: Extra metadata fields.

        Returns:
            Absolute path of the stored file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        full.write_bytes(content)
        self._write_sidecar(full, source, params)
        return full

    def write_table(self, path: Path, frame: pd.DataFrame, source: str, **params: Any) -> Path:
        """Write a DataFrame as CSV (missing values as empty fields) with sidecar metadata."""
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(full, index=False, na_rep="")
        self._write_sidecar(full, source, {"rows": len(frame), **params})
        return full

    def read_table(self, path: Path, **read_kwargs: Any) -> pd.DataFrame | None:
        """Read a CSV table, or None if the file doesn't exist."""
        full = self._resolve(path)
        if not full.exists():
            return None
        return pd.read_csv(full, **read_kwargs)

    def file_path(self, path: Path) -> Path | None:
        """Return the absolute path of a stored file, or None if missing."""
        full = self._resolve(path)
        return full if full.exists() else None

    def read_meta(self, path: Path) -> dict[str, Any]:
        """Read metadata from either a JSON envelope or a sidecar .meta.json."""
        full = self._resolve(path)
        sidecar = full.with_suffix(full.suffix + ".meta.json")
        if sidecar.exists():
            with sidecar.open() as f:
                result: dict[str, Any] = json.load(f)
            return result.get("meta", {})

        # Fall back to embedded metadata in JSON files
        if full.suffix == ".json" and full.exists():
            with full.open() as f:
                envelope: dict[str, Any] = json.load(f)
            return envelope.get("meta", {})

        return {}

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    @staticmethod
    def _meta(source: str, params: dict[str, Any]) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "source": source,
            "written_at": datetime.now(UTC).isoformat(),
        }
        meta.update(params)
        return meta

    def _write_sidecar(self, full: Path, source: str, params: dict[str, Any]) -> None:
        meta_path = full.with_suffix(full.suffix + ".meta.json")
        with meta_path.open("w") as f:
            json.dump({"meta": self._meta(source, params)}, f, indent=2)
