"""Genre filter conventions for GenreChartController.

Single source of truth for the dropdown sentinel so the aggregator, chart
state and control row agree on what "no filter" means.
"""

# Sentinel dropdown value meaning "show every genre".
GENRE_FILTER_ALL = "all"

GENRE_FILTER_ALL_LABEL = "All Genres"


def is_filtered(selection: str) -> bool:
    """True if selection restricts the chart to one genre."""
    return selection != GENRE_FILTER_ALL


def format_filter_display(selection: str) -> str:
    """Short label for logs and the chart title: selected genre or 'All Genres'."""
    if not is_filtered(selection):
        return GENRE_FILTER_ALL_LABEL
    return selection
