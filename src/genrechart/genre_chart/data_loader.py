"""CSV discovery and loading for the genre chart.

The dataset is a fixed relative file, ``data/movies.csv`` under the project
root, unless the GENRE_CHART_CSV env var points somewhere else.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from genrechart.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CSV = "movies.csv"

CSV_PATH_ENV = "GENRE_CHART_CSV"


class DatasetLoadError(Exception):
    """The movies CSV is missing, unreadable, or cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def get_data_dir() -> Path:
    """Resolve the project's data/ directory.

    Package layout: <root>/src/genrechart/genre_chart/data_loader.py
    Data: <root>/data/
    """
    # data_loader.py -> genre_chart -> genrechart -> src -> project root
    pkg_root = Path(__file__).resolve().parent.parent.parent.parent
    return pkg_root / "data"


def resolve_csv_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Explicit path, else GENRE_CHART_CSV, else data/movies.csv."""
    if path is not None:
        return Path(path)
    env_path = os.getenv(CSV_PATH_ENV)
    if env_path:
        return Path(env_path)
    return get_data_dir() / DEFAULT_CSV


def load_movies_csv(path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
    """Read the movies CSV as untyped strings.

    Every cell is read as text and empty cells stay empty strings; numeric
    coercion is left to the aggregator.

    Args:
        path: Optional path overriding resolve_csv_path().

    Returns:
        DataFrame with one row per movie.

    Raises:
        DatasetLoadError: If the file is missing, unreadable or unparseable.
    """
    csv_path = resolve_csv_path(path)
    logger.info(f"Loading movies from {csv_path}")
    try:
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    except FileNotFoundError as e:
        raise DatasetLoadError(csv_path, "file not found") from e
    except pd.errors.EmptyDataError as e:
        raise DatasetLoadError(csv_path, "file is empty") from e
    except pd.errors.ParserError as e:
        raise DatasetLoadError(csv_path, f"could not parse CSV: {e}") from e
    except UnicodeDecodeError as e:
        raise DatasetLoadError(csv_path, f"not valid text: {e}") from e
    except OSError as e:
        raise DatasetLoadError(csv_path, f"could not read file: {e}") from e
    logger.info(f"Loaded {len(df)} row(s) with columns {list(df.columns)}")
    return df
