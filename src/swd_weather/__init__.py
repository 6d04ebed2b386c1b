"""SWD Weather - seasonal spotted wing drosophila counts vs. seasonal weather.

Architecture::

    units.py, seasons.py  Pure conversions and season boundaries
    datasources/   Trap count spreadsheets and the station weather archive
    analysis/      Cross-datasource joins (trap metadata, weather merge)
    store.py       Raw / normalized / derived artifacts on disk
    flows/         Prefect orchestration (traps -> fetch -> build)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources -> store -> analysis -> derived/analysis.csv
"""

__version__ = "0.1.0"

from swd_weather.config import Settings
from swd_weather.schemas import PipelineReport

__all__ = ["PipelineReport", "Settings", "__version__"]
