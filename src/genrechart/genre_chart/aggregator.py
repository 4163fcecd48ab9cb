"""Per-genre aggregation of raw movie rows.

Groups rows by their ``genre`` value and averages ``votes`` and ``score``
within each group. Values that are not finite numbers (empty cells, "inf",
missing columns) count as 0 toward the mean.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

import numpy as np
import pandas as pd

from genrechart.utils.logging import get_logger
from genrechart.genre_chart.filter_conventions import GENRE_FILTER_ALL, GENRE_FILTER_ALL_LABEL

logger = get_logger(__name__)

GENRE_COL = "genre"
VOTES_COL = "votes"
SCORE_COL = "score"

Rows = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


@dataclass(frozen=True)
class GenreSummary:
    """Average votes and score for one genre."""
    genre: str
    average_votes: float
    average_scores: float


def _as_frame(rows: Rows) -> pd.DataFrame:
    if isinstance(rows, pd.DataFrame):
        return rows
    return pd.DataFrame.from_records(list(rows))


def coerce_numeric(df: pd.DataFrame, col: str) -> pd.Series:
    """Return ``df[col]`` as floats, with 0.0 wherever coercion fails.

    A missing column yields all zeros. The number of zero-filled values is
    logged as a warning so data-quality problems stay visible.
    """
    if col not in df.columns:
        if len(df):
            logger.warning(f"Column {col!r} missing, counting {len(df)} row(s) as 0")
        return pd.Series(0.0, index=df.index, dtype=float)

    values = pd.to_numeric(df[col], errors="coerce").astype(float)
    # "inf" and friends parse as numbers but count as failed coercion
    values = values.where(np.isfinite(values))
    n_bad = int(values.isna().sum())
    if n_bad:
        logger.warning(f"{n_bad} non-numeric or non-finite value(s) in column {col!r} counted as 0")
    return values.fillna(0.0).astype(float)


def aggregate(rows: Rows) -> list[GenreSummary]:
    """Group rows by genre and average votes and score per group.

    Args:
        rows: DataFrame or iterable of mappings with ``genre``, ``votes`` and
            ``score`` keys. Values are untyped; votes/score are coerced.

    Returns:
        One GenreSummary per distinct non-empty genre, in first-seen order.
    """
    df = _as_frame(rows)
    if GENRE_COL not in df.columns:
        if len(df):
            logger.warning(f"Column {GENRE_COL!r} missing, no genres to aggregate")
        return []

    # exact equality on the raw value; missing genre behaves like ""
    genres = df[GENRE_COL].where(df[GENRE_COL].notna(), "").astype(str)
    tmp = pd.DataFrame({
        "genre": genres,
        "votes": coerce_numeric(df, VOTES_COL),
        "score": coerce_numeric(df, SCORE_COL),
    })

    means = tmp.groupby("genre", sort=False)[["votes", "score"]].mean()
    summaries = [
        GenreSummary(
            genre=str(genre),
            average_votes=float(row["votes"]),
            average_scores=float(row["score"]),
        )
        for genre, row in means.iterrows()
        if genre
    ]
    logger.info(f"Aggregated {len(df)} row(s) into {len(summaries)} genre(s)")
    return summaries


def genre_filter_options(summaries: Iterable[GenreSummary]) -> dict[str, str]:
    """Dropdown options (value -> label): the 'all' sentinel first, then each genre."""
    options = {GENRE_FILTER_ALL: GENRE_FILTER_ALL_LABEL}
    for s in summaries:
        options[s.genre] = s.genre
    return options
