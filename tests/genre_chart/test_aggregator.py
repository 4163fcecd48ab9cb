"""Unit tests for per-genre aggregation and dropdown options."""

import logging

import pandas as pd
import pytest

from genrechart.genre_chart.aggregator import (
    GenreSummary,
    aggregate,
    coerce_numeric,
    genre_filter_options,
)
from genrechart.genre_chart.filter_conventions import GENRE_FILTER_ALL


@pytest.fixture
def sample_rows():
    """Raw rows as read from CSV (all strings)."""
    return [
        {"genre": "Action", "votes": "100", "score": "7"},
        {"genre": "Action", "votes": "200", "score": "9"},
        {"genre": "Drama", "votes": "", "score": "5"},
    ]


def test_aggregate_example_rows(sample_rows):
    """Two Action rows average to 150/8; empty votes count as 0 for Drama."""
    summaries = aggregate(sample_rows)
    assert summaries == [
        GenreSummary(genre="Action", average_votes=150.0, average_scores=8.0),
        GenreSummary(genre="Drama", average_votes=0.0, average_scores=5.0),
    ]


def test_aggregate_drops_empty_genre(sample_rows):
    """A row with an empty genre produces no summary."""
    rows = sample_rows + [{"genre": "", "votes": "50", "score": "5"}]
    summaries = aggregate(rows)
    assert [s.genre for s in summaries] == ["Action", "Drama"]


def test_aggregate_first_seen_order():
    """Groups come out in the order their genre first appears."""
    df = pd.DataFrame({
        "genre": ["Horror", "Comedy", "Horror", "Animation", "Comedy"],
        "votes": ["1", "2", "3", "4", "5"],
        "score": ["1", "1", "1", "1", "1"],
    })
    assert [s.genre for s in aggregate(df)] == ["Horror", "Comedy", "Animation"]


def test_aggregate_one_summary_per_distinct_genre():
    """Count of summaries equals count of distinct non-empty genres."""
    genres = ["A", "B", "", "A", "C", "", "B", "D"]
    df = pd.DataFrame({"genre": genres, "votes": ["1"] * 8, "score": ["2"] * 8})
    summaries = aggregate(df)
    assert len(summaries) == len({g for g in genres if g})


def test_aggregate_non_numeric_values_count_as_zero():
    """Non-numeric votes/score contribute 0 to the mean, not skipped."""
    rows = [
        {"genre": "Crime", "votes": "abc", "score": "6"},
        {"genre": "Crime", "votes": "300", "score": "n/a"},
    ]
    (s,) = aggregate(rows)
    assert s.average_votes == pytest.approx(150.0)
    assert s.average_scores == pytest.approx(3.0)


def test_aggregate_genre_is_not_normalized():
    """Grouping uses exact string equality: no trimming or case folding."""
    rows = [
        {"genre": "Drama", "votes": "10", "score": "1"},
        {"genre": "Drama ", "votes": "20", "score": "1"},
        {"genre": "drama", "votes": "30", "score": "1"},
    ]
    assert [s.genre for s in aggregate(rows)] == ["Drama", "Drama ", "drama"]


def test_aggregate_missing_genre_value_treated_as_empty():
    """NaN genre values are dropped like empty strings."""
    df = pd.DataFrame({
        "genre": ["Action", None, float("nan")],
        "votes": [10, 20, 30],
        "score": [1.0, 2.0, 3.0],
    })
    summaries = aggregate(df)
    assert [s.genre for s in summaries] == ["Action"]


def test_aggregate_missing_score_column_counts_as_zero():
    """A missing numeric column yields 0 averages for that field."""
    rows = [{"genre": "War", "votes": "10"}, {"genre": "War", "votes": "30"}]
    (s,) = aggregate(rows)
    assert s.average_votes == 20.0
    assert s.average_scores == 0.0


def test_aggregate_missing_genre_column_returns_empty():
    assert aggregate([{"votes": "1", "score": "2"}]) == []


def test_aggregate_empty_input():
    assert aggregate([]) == []
    assert aggregate(pd.DataFrame(columns=["genre", "votes", "score"])) == []


def test_coerce_numeric_logs_warning_for_bad_values(caplog):
    """Zero-filled values are reported once per column."""
    df = pd.DataFrame({"votes": ["1", "", "x"]})
    with caplog.at_level(logging.WARNING, logger="genrechart"):
        values = coerce_numeric(df, "votes")
    assert values.tolist() == [1.0, 0.0, 0.0]
    assert "2 non-numeric or non-finite value(s) in column 'votes'" in caplog.text


def test_coerce_numeric_clean_column_no_warning(caplog):
    df = pd.DataFrame({"votes": ["1", "2.5"]})
    with caplog.at_level(logging.WARNING, logger="genrechart"):
        values = coerce_numeric(df, "votes")
    assert values.tolist() == [1.0, 2.5]
    assert caplog.text == ""


def test_genre_summary_is_frozen():
    s = GenreSummary(genre="Action", average_votes=1.0, average_scores=2.0)
    with pytest.raises(Exception):  # FrozenInstanceError
        s.genre = "Drama"  # type: ignore[misc]


def test_genre_filter_options_all_first(sample_rows):
    """'all' sentinel leads, then each genre as value and label."""
    options = genre_filter_options(aggregate(sample_rows))
    assert list(options) == [GENRE_FILTER_ALL, "Action", "Drama"]
    assert options[GENRE_FILTER_ALL] == "All Genres"
    assert options["Drama"] == "Drama"


def test_genre_filter_options_no_genres():
    assert genre_filter_options([]) == {GENRE_FILTER_ALL: "All Genres"}


@pytest.mark.parametrize("raw", ["inf", "-inf", "Infinity", "-Infinity"])
def test_aggregate_infinite_values_count_as_zero(raw):
    """Infinite values are treated like any other failed coercion."""
    rows = [
        {"genre": "Action", "votes": raw, "score": raw},
        {"genre": "Action", "votes": "100", "score": "8"},
    ]
    (s,) = aggregate(rows)
    assert s.average_votes == pytest.approx(50.0)
    assert s.average_scores == pytest.approx(4.0)


def test_aggregate_mixed_infinities_give_finite_mean():
    """'inf' and '-inf' in one genre must not produce a NaN mean."""
    rows = [
        {"genre": "A", "votes": "5", "score": "1"},
        {"genre": "B", "votes": "inf", "score": "1"},
        {"genre": "B", "votes": "-inf", "score": "1"},
        {"genre": "C", "votes": "10", "score": "1"},
    ]
    votes = {s.genre: s.average_votes for s in aggregate(rows)}
    assert votes == {"A": 5.0, "B": 0.0, "C": 10.0}


def test_coerce_numeric_counts_infinite_values(caplog):
    df = pd.DataFrame({"votes": ["1", "inf", "-inf"]})
    with caplog.at_level(logging.WARNING, logger="genrechart"):
        values = coerce_numeric(df, "votes")
    assert values.tolist() == [1.0, 0.0, 0.0]
    assert "2 non-numeric or non-finite value(s) in column 'votes'" in caplog.text
