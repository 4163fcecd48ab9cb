"""Chart state and transitions for the genre bar chart.

ChartState pairs the immutable OriginalSet (every GenreSummary in aggregation
order) with the WorkingSet currently on screen. Every user action goes
through apply_action(), which returns a new ChartState and never touches
the OriginalSet.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence

from genrechart.genre_chart.aggregator import GenreSummary
from genrechart.genre_chart.filter_conventions import GENRE_FILTER_ALL


class ChartAction(Enum):
    """Enumeration of user actions on the chart."""
    SORT_BY_VOTES = "sort_by_votes"
    SORT_BY_SCORES = "sort_by_scores"
    RESET = "reset"
    FILTER = "filter"


@dataclass(frozen=True)
class ChartState:
    """Snapshot of the chart data.

    ``working`` is always a reordering or subset of ``original``.
    ``last_action`` and ``selection`` record how ``working`` was derived.
    """
    original: tuple[GenreSummary, ...]
    working: tuple[GenreSummary, ...]
    last_action: Optional[ChartAction] = None
    selection: Optional[str] = None

    @classmethod
    def initial(cls, summaries: Sequence[GenreSummary]) -> "ChartState":
        """Start with the WorkingSet equal to the OriginalSet."""
        original = tuple(summaries)
        return cls(original=original, working=original)

    @property
    def genres(self) -> list[str]:
        return [s.genre for s in self.working]


def sort_by_votes(original: Sequence[GenreSummary]) -> tuple[GenreSummary, ...]:
    """Descending by average votes; ties keep original order."""
    return tuple(sorted(original, key=lambda s: s.average_votes, reverse=True))


def sort_by_scores(original: Sequence[GenreSummary]) -> tuple[GenreSummary, ...]:
    """Descending by average score; ties keep original order."""
    return tuple(sorted(original, key=lambda s: s.average_scores, reverse=True))


def filter_by_genre(original: Sequence[GenreSummary], selection: str) -> tuple[GenreSummary, ...]:
    """Entries whose genre equals selection, or everything for the 'all' sentinel."""
    if selection == GENRE_FILTER_ALL:
        return tuple(original)
    return tuple(s for s in original if s.genre == selection)


def apply_action(
    state: ChartState,
    action: ChartAction,
    selection: Optional[str] = None,
) -> ChartState:
    """Return the state that results from applying action to state.

    Args:
        state: Current chart state.
        action: Action to apply.
        selection: Genre (or the 'all' sentinel) for ChartAction.FILTER.

    Returns:
        New ChartState with the derived WorkingSet.

    Raises:
        ValueError: If action is FILTER and selection is None.
    """
    if action == ChartAction.SORT_BY_VOTES:
        working = sort_by_votes(state.original)
    elif action == ChartAction.SORT_BY_SCORES:
        working = sort_by_scores(state.original)
    elif action == ChartAction.RESET:
        working = state.original
    elif action == ChartAction.FILTER:
        if selection is None:
            raise ValueError("ChartAction.FILTER requires a selection")
        working = filter_by_genre(state.original, selection)
    else:
        raise ValueError(f"Unknown chart action: {action!r}")

    return replace(
        state,
        working=working,
        last_action=action,
        selection=selection if action == ChartAction.FILTER else None,
    )
