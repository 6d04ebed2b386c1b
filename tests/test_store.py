"""Tests for the DataStore module."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from swd_weather.store import (
    ANALYSIS_PATH,
    DataStore,
    normalized_weather_path,
    raw_weather_path,
)


class TestPaths:
    """Store layout helpers."""

    def test_raw_weather_path(self) -> None:
        assert raw_weather_path(2019, "C5099") == Path("raw/weather/2019/C509919.txt")
        assert raw_weather_path(2005, "E1234") == Path("raw/weather/2005/E123405.txt")

    def test_normalized_weather_path(self) -> None:
        assert normalized_weather_path(2019, "C5099") == Path("normalized/weather/2019/C5099.csv")

    def test_outputs_are_derived(self) -> None:
        assert ANALYSIS_PATH.parts[0] == "derived"


class TestDataStoreInit:
    """Test DataStore initialization."""

    def test_creates_tier_paths(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        assert store.base == tmp_path
        assert store.raw == tmp_path / "raw"
        assert store.normalized == tmp_path / "normalized"
        assert store.derived == tmp_path / "derived"


class TestDataStoreJson:
    """Test writing and reading metadata envelopes."""

    def test_write_envelope_format(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("derived/report.json"), {"issues": []}, source="pipeline", year=2019)

        data = json.loads((tmp_path / "derived" / "report.json").read_text())
        assert data["meta"]["source"] == "pipeline"
        assert data["meta"]["year"] == 2019
        assert "written_at" in data["meta"]
        assert data["data"] == {"issues": []}

    def test_write_creates_parent_dirs(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("derived/deep/nested.json"), {}, source="test")
        assert (tmp_path / "derived" / "deep" / "nested.json").exists()

    def test_read_returns_data_payload(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("derived/x.json"), [1, 2, 3], source="test")
        assert store.read(Path("derived/x.json")) == [1, 2, 3]

    def test_read_missing_file(self, tmp_path: Path) -> None:
        assert DataStore(tmp_path).read(Path("derived/nope.json")) is None

    def test_read_meta_from_envelope(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("derived/x.json"), {}, source="test")
        assert store.read_meta(Path("derived/x.json"))["source"] == "test"


class TestDataStoreFiles:
    """Test raw bytes and tables with sidecar metadata."""

    def test_write_bytes_verbatim_with_sidecar(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        rel = raw_weather_path(2019, "C5099")
        content = b"MO DY TMIN\r\n1 1 30\r\n"

        path = store.write_bytes(rel, content, source="https://x/C509919.txt", station="C5099")

        assert path.read_bytes() == content
        meta = store.read_meta(rel)
        assert meta["source"] == "https://x/C509919.txt"
        assert meta["station"] == "C5099"

    def test_write_table_missing_as_empty(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        frame = pd.DataFrame({"trap_id": [1, 2], "tmin_winter": [1.5, None]})

        path = store.write_table(ANALYSIS_PATH, frame, source="test")

        assert path.read_text().splitlines() == ["trap_id,tmin_winter", "1,1.5", "2,"]
        assert store.read_meta(ANALYSIS_PATH)["rows"] == 2

    def test_read_table(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write_table(ANALYSIS_PATH, pd.DataFrame({"a": [1, 2]}), source="test")
        frame = store.read_table(ANALYSIS_PATH)
        assert frame is not None
        assert frame["a"].tolist() == [1, 2]

    def test_read_table_missing(self, tmp_path: Path) -> None:
        assert DataStore(tmp_path).read_table(ANALYSIS_PATH) is None

    def test_file_path(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        rel = Path("raw/weather/2019/A19.txt")
        assert store.file_path(rel) is None
        store.write_bytes(rel, b"x", source="test")
        assert store.file_path(rel) == tmp_path / rel

    def test_rejects_paths_outside_base(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path / "data")
        with pytest.raises(ValueError, match="escapes"):
            store.write_bytes(Path("../outside.txt"), b"x", source="test")
