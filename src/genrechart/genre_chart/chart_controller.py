"""Controller for the interactive genre bar chart.

Provides GenreChartController: owns the ChartState, exposes the four chart
actions (sort by votes, sort by scores, reset, filter by genre) and renders
the current WorkingSet into a NiceGUI Plotly element. See the class
docstring for the public API.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from nicegui import ui
from nicegui.events import GenericEventArguments

from genrechart.utils.logging import get_logger
from genrechart.genre_chart.aggregator import GenreSummary, Rows, aggregate, genre_filter_options
from genrechart.genre_chart.chart_config import ChartConfig
from genrechart.genre_chart.chart_state import ChartAction, ChartState, apply_action
from genrechart.genre_chart.figure_generator import FigureGenerator
from genrechart.genre_chart.filter_conventions import GENRE_FILTER_ALL, format_filter_display

logger = get_logger(__name__)


class GenreChartController:
    """Controller for the genre bar chart with NiceGUI.

    Holds the OriginalSet and the WorkingSet in a single ChartState, applies
    user actions through apply_action(), and hands every new WorkingSet to
    render(). Works headless: without build() the rendered figure is kept in
    ``figure`` and nothing is pushed to a browser.

    **Public API:**

    - **from_rows(rows, ...)** — Aggregate raw rows and create a controller.
    - **empty(...)** — Controller for the no-data state (load failure).
    - **build(container=None)** — Build the dropdown, buttons and plot, then
      wire the action handlers.
    - **dispatch(action, selection=None)** — Apply a ChartAction and re-render.
    - **sort_by_votes() / sort_by_scores() / reset() / filter_by_genre(g)**
    - **render(data, title=None)** — Draw a sequence (full reconcile, idempotent).
    """

    def __init__(
        self,
        summaries: Sequence[GenreSummary],
        *,
        config: Optional[ChartConfig] = None,
        has_data: bool = True,
        on_render: Optional[Callable[[tuple[GenreSummary, ...]], None]] = None,
    ) -> None:
        """Initialize controller with aggregated summaries.

        Args:
            summaries: OriginalSet, in aggregation order.
            config: Optional ChartConfig for presentation.
            has_data: False when the dataset failed to load; the genre
                dropdown is then left without options.
            on_render: Optional callback invoked with each rendered WorkingSet.
        """
        self.state = ChartState.initial(summaries)
        self.config = config if config is not None else ChartConfig()
        self.has_data = has_data
        self._on_render = on_render

        self.figure_generator = FigureGenerator(self.config)
        self.figure: dict = self.figure_generator.make_figure(self.state.working)
        self._highlight_genre: Optional[str] = None

        # UI handles
        self._plot: Optional[ui.plotly] = None
        self._genre_select: Optional[ui.select] = None

    @classmethod
    def from_rows(cls, rows: Rows, **kwargs: Any) -> "GenreChartController":
        """Aggregate raw rows (DataFrame or iterable of mappings) and return a controller."""
        return cls(aggregate(rows), **kwargs)

    @classmethod
    def empty(cls, **kwargs: Any) -> "GenreChartController":
        """Controller with no data: empty chart, empty dropdown."""
        return cls((), has_data=False, **kwargs)

    @property
    def original(self) -> tuple[GenreSummary, ...]:
        return self.state.original

    @property
    def working(self) -> tuple[GenreSummary, ...]:
        return self.state.working

    def filter_options(self) -> dict[str, str]:
        """Options for the genre dropdown; empty when no data was loaded."""
        if not self.has_data:
            return {}
        return genre_filter_options(self.state.original)

    # ----------------------------
    # Actions
    # ----------------------------

    def dispatch(self, action: ChartAction, selection: Optional[str] = None) -> tuple[GenreSummary, ...]:
        """Apply action, replace the state, and render the new WorkingSet.

        Args:
            action: ChartAction to apply.
            selection: Genre or 'all' sentinel, required for ChartAction.FILTER.

        Returns:
            The new WorkingSet.
        """
        self.state = apply_action(self.state, action, selection)
        logger.info(
            f"{action.value}: selection={selection}, n_bars={len(self.state.working)}"
        )
        self.render(self.state.working, title=self._state_title())
        return self.state.working

    def sort_by_votes(self) -> tuple[GenreSummary, ...]:
        return self.dispatch(ChartAction.SORT_BY_VOTES)

    def sort_by_scores(self) -> tuple[GenreSummary, ...]:
        return self.dispatch(ChartAction.SORT_BY_SCORES)

    def reset(self) -> tuple[GenreSummary, ...]:
        return self.dispatch(ChartAction.RESET)

    def filter_by_genre(self, selection: str) -> tuple[GenreSummary, ...]:
        return self.dispatch(ChartAction.FILTER, selection)

    # ----------------------------
    # Rendering
    # ----------------------------

    def _state_title(self) -> Optional[str]:
        """Chart title for the current state: the selected genre after a filter."""
        if self.state.last_action == ChartAction.FILTER and self.state.selection is not None:
            return format_filter_display(self.state.selection)
        return None

    def render(self, data: Sequence[GenreSummary], *, title: Optional[str] = None) -> None:
        """Draw data, replacing whatever the plot showed before.

        Args:
            data: Sequence to display, in display order.
            title: Optional chart title.
        """
        data = tuple(data)
        if self._highlight_genre is not None and all(s.genre != self._highlight_genre for s in data):
            self._highlight_genre = None
        self.figure = self.figure_generator.make_figure(
            data, highlight_genre=self._highlight_genre, title=title
        )
        if self._plot is not None:
            self._plot.update_figure(self.figure)
            self._plot.update()
        if self._on_render is not None:
            self._on_render(data)

    # ----------------------------
    # UI
    # ----------------------------

    def build(self, *, container: Optional[ui.element] = None) -> None:
        """Build the control row and the plot, then register the action handlers.

        Args:
            container: Optional NiceGUI container to build into. If None,
                widgets are created at the current top level.
        """
        def _build_content():
            with ui.row().classes("w-full items-center gap-3 flex-wrap"):
                options = self.filter_options()
                self._genre_select = ui.select(
                    options=options,
                    value=GENRE_FILTER_ALL if options else None,
                    label="Genre",
                ).classes("min-w-[200px]")
                sort_votes_btn = ui.button("Sort by Votes")
                sort_scores_btn = ui.button("Sort by Scores")
                reset_btn = ui.button("Reset")

            self._plot = ui.plotly(self.figure).classes("w-full")

            # handlers only after the plot exists
            self._genre_select.on_value_change(self._on_genre_selected)
            sort_votes_btn.on_click(lambda: self.sort_by_votes())
            sort_scores_btn.on_click(lambda: self.sort_by_scores())
            reset_btn.on_click(lambda: self.reset())
            self._plot.on("plotly_hover", self._on_plotly_hover)
            self._plot.on("plotly_unhover", self._on_plotly_unhover)

        if container is not None:
            with container:
                _build_content()
        else:
            _build_content()

    # ----------------------------
    # Events
    # ----------------------------

    def _on_genre_selected(self, e) -> None:
        value = getattr(e, "value", None)
        if not isinstance(value, str) or not value:
            logger.warning(f"Ignoring genre selection with value={value!r}")
            return
        self.filter_by_genre(value)

    def _on_plotly_hover(self, e: GenericEventArguments) -> None:
        points = (e.args or {}).get("points") or []
        if not points:
            return
        genre = points[0].get("x")
        if genre is None or str(genre) == self._highlight_genre:
            return
        self.set_highlight(str(genre))

    def _on_plotly_unhover(self, _e: Optional[GenericEventArguments] = None) -> None:
        self.set_highlight(None)

    def set_highlight(self, genre: Optional[str]) -> None:
        """Highlight the bar for genre (None clears) and re-render the WorkingSet."""
        self._highlight_genre = genre
        self.render(self.state.working, title=self._state_title())
