"""
genrechart: interactive bar chart of average votes and scores per movie genre.

This package provides:
- aggregate(): group raw movie rows by genre and average votes/score
- GenreChartController: sort / filter / reset state plus a NiceGUI + Plotly view
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from genrechart.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from genrechart.utils.logging import configure_logging, get_logger

from genrechart.genre_chart import (
    ChartAction,
    ChartState,
    DatasetLoadError,
    GenreChartController,
    GenreSummary,
    aggregate,
)

# NullHandler keeps records from reaching root until configure_logging() is called.
_logger = logging.getLogger("genrechart")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ChartAction",
    "ChartState",
    "DatasetLoadError",
    "GenreChartController",
    "GenreSummary",
    "aggregate",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
