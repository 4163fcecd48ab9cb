"""Genre chart app: standalone NiceGUI application for GenreChartController.

Runs in web (default) or native mode via env vars. Uses @ui.page("/") pattern.

Run:
    python -m genrechart.genre_chart_app.genre_chart_app

Env vars:
    GENRE_CHART_GUI_NATIVE: 1/0 (default 0)
    GENRE_CHART_GUI_RELOAD: 1/0 (default 0)
    GENRE_CHART_CSV: path to the movies CSV (default data/movies.csv)
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
"""

from __future__ import annotations

import os
import multiprocessing as mp
from multiprocessing import freeze_support
from typing import Optional

from nicegui import ui

from genrechart.utils import setUpGuiDefaults
from genrechart.utils.logging import configure_logging, get_logger
from genrechart.genre_chart_app import header
from genrechart.genre_chart.chart_controller import GenreChartController
from genrechart.genre_chart.data_loader import DatasetLoadError, load_movies_csv

logger = get_logger(__name__)

STORAGE_SECRET = "genrechart-session-secret"

APP_TITLE = "Movie Genres"


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def initialize(csv_path: Optional[str] = None) -> GenreChartController:
    """Load the dataset and return a controller ready to build.

    On DatasetLoadError one error is logged and an empty controller is
    returned, so the page still renders (empty dropdown, empty chart).
    """
    try:
        df = load_movies_csv(csv_path)
    except DatasetLoadError as e:
        logger.error(f"Error loading the CSV file: {e}")
        return GenreChartController.empty()
    return GenreChartController.from_rows(df)


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
def home() -> None:
    """Home page: header, genre dropdown, sort/reset buttons and the bar chart."""

    setUpGuiDefaults("text-sm")

    ui.page_title(APP_TITLE)

    header.build_genre_chart_header(title=APP_TITLE)

    with ui.column().classes("w-full gap-4 p-4"):
        main_container = ui.column().classes("w-full")
        ctrl = initialize()
        if not ctrl.has_data:
            with main_container:
                ui.label("Failed to load movie data, see log for details.").classes("text-negative")
        ctrl.build(container=main_container)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: Optional[bool] = None, native_bool: Optional[bool] = None) -> None:
    """Start the genre chart application.

    Defaults (no env vars, no args):
      - native=False
      - reload=False
    """
    configure_logging()

    native_bool = _env_bool("GENRE_CHART_GUI_NATIVE", False) if native_bool is None else native_bool
    reload = _env_bool("GENRE_CHART_GUI_RELOAD", False) if reload is None else reload

    if native_bool:
        from nicegui import native as native_module
        port = _env_int("PORT", native_module.find_open_port())
    else:
        port = _env_int("PORT", 8080)

    default_host = "127.0.0.1" if native_bool else "0.0.0.0"
    host = os.getenv("HOST", default_host)

    logger.info(
        "Starting genre chart app: host=%s port=%s reload=%s native=%s",
        host,
        port,
        reload,
        native_bool,
    )

    run_kwargs: dict = {
        "host": host,
        "port": port,
        "reload": reload,
        "native": native_bool,
        "storage_secret": STORAGE_SECRET,
        "title": APP_TITLE,
    }
    if native_bool:
        run_kwargs["window_size"] = (1000, 700)
    ui.run(**run_kwargs)


if __name__ == "__main__":
    freeze_support()
    if mp.current_process().name == "MainProcess":
        main()
    else:
        logger.debug("Skipping GUI startup in worker process: %s", mp.current_process().name)
