"""Genre bar chart: aggregation, chart state, and NiceGUI/Plotly view."""

from genrechart.genre_chart.aggregator import GenreSummary, aggregate, genre_filter_options
from genrechart.genre_chart.chart_config import ChartConfig
from genrechart.genre_chart.chart_controller import GenreChartController
from genrechart.genre_chart.chart_state import ChartAction, ChartState, apply_action
from genrechart.genre_chart.data_loader import DatasetLoadError, load_movies_csv

__all__ = [
    "ChartAction",
    "ChartConfig",
    "ChartState",
    "DatasetLoadError",
    "GenreChartController",
    "GenreSummary",
    "aggregate",
    "apply_action",
    "genre_filter_options",
    "load_movies_csv",
]
