"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── models.py         # Dataclasses and constants
    └── {feature}.py      # Fetch / parse / summarize functions

Sources:
  - traps/    Weekly SWD trap count spreadsheets (dual header, male/female pairs)
  - weather/  Station daily files from the weather archive

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above.

2. Keep parsing and computation free of I/O where possible; raise the
   errors from ``swd_weather.errors`` with source/row context so flows
   can report them.

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Wire into the pipeline (see ``flows/``) and add tests in
   ``tests/test_{name}.py``.
"""
