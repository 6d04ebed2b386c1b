"""
Application settings.

Values come from ``SWD_``-prefixed environment variables or a ``.env`` file.
Stages never read these directly; flows pass the relevant fields in.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from swd_weather.datasources.weather.parse import DEFAULT_COLUMNS, DEFAULT_MISSING_VALUES
from swd_weather.services.http import POOL_SIZE


class Settings(BaseSettings):
    """Pipeline configuration."""

    model_config = SettingsConfigDict(env_prefix="SWD_", env_file=".env", extra="ignore")

    app_name: str = "swd-weather"
    app_env: str = "development"
    debug: bool = False

    # Inputs and outputs
    data_dir: Path = Path("data")
    trap_counts_path: Path = Path("data/input/trap_counts.csv")
    metadata_path: Path = Path("data/input/historical_traps.csv")
    history_path: Path | None = Field(
        default=None, description="Defaults to metadata_path when unset"
    )

    # Years
    reference_year: int = 2018
    new_year: int = 2019
    weather_years: list[int] = Field(
        default_factory=list, description="Years to summarise weather for; defaults to new_year"
    )

    # Weather archive
    weather_base_url: str = "https://uspest.org/data"
    weather_columns: list[str] = Field(default_factory=lambda: list(DEFAULT_COLUMNS))
    weather_reference_path: Path | None = None
    missing_values: list[str] = Field(default_factory=lambda: list(DEFAULT_MISSING_VALUES))
    fetch_workers: int = Field(default=4, ge=1, le=POOL_SIZE)
    fetch_timeout: float = Field(default=30.0, gt=0)

    # Raw trap table layout (None = infer from the table)
    trap_delimiter: str = ","
    start_row: int = 2
    start_column: int = 4
    num_data_rows: int | None = None
    num_columns: int | None = None

    # Weather merge policy for the years being merged
    join_how: str = Field(default="inner", pattern="^(inner|left)$")

    @property
    def target_years(self) -> list[int]:
        return self.weather_years or [self.new_year]

    @property
    def history_source(self) -> Path:
        return self.history_path or self.metadata_path


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
