"""Plotly figure generation for the genre bar chart.

This module turns a WorkingSet (sequence of GenreSummary) into a Plotly
figure dictionary, keeping presentation out of the controller.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from genrechart.utils.logging import get_logger
from genrechart.genre_chart.aggregator import GenreSummary
from genrechart.genre_chart.chart_config import ChartConfig

logger = get_logger(__name__)


# target tick count for the y axis, as in a default linear scale
NICE_TICK_COUNT = 10


def tick_increment(value: float, count: int = NICE_TICK_COUNT) -> float:
    """Tick step (1, 2, 5 or 10 times a power of ten) giving about count ticks over [0, value]."""
    step = value / count
    power = np.floor(np.log10(step))
    error = step / 10.0 ** power
    if error >= np.sqrt(50):
        factor = 10.0
    elif error >= np.sqrt(10):
        factor = 5.0
    elif error >= np.sqrt(2):
        factor = 2.0
    else:
        factor = 1.0
    return float(factor * 10.0 ** power)


def nice_upper_bound(value: float, count: int = NICE_TICK_COUNT) -> float:
    """Round value up to the next multiple of its tick step.

    150 -> 160, 1_200_000 -> 1_200_000, 42 -> 45. The step is recomputed on
    the rounded value until it stops changing.

    Returns 1.0 for non-positive or non-finite input so an empty chart still
    has a usable y axis.
    """
    if not np.isfinite(value) or value <= 0:
        return 1.0
    prev_step = None
    upper = float(value)
    for _ in range(10):
        step = tick_increment(upper, count)
        if step == prev_step:
            break
        if step >= 1:
            upper = float(np.ceil(value / step) * step)
        else:
            # divide by the inverse step to avoid 0.1 * 3 style float noise
            inv = round(1.0 / step)
            upper = float(np.ceil(value * inv) / inv)
        prev_step = step
    return upper


class FigureGenerator:
    """Generates Plotly figure dictionaries for a sequence of genre summaries.

    Attributes:
        config: ChartConfig with the visual parameters.
    """

    def __init__(self, config: Optional[ChartConfig] = None) -> None:
        self.config = config if config is not None else ChartConfig()

    def bar_colors(self, data: Sequence[GenreSummary], highlight_genre: Optional[str] = None) -> list[str]:
        """One color per bar; the hovered genre (if any) gets the highlight color."""
        return [
            self.config.highlight_color if s.genre == highlight_genre else self.config.bar_color
            for s in data
        ]

    def make_figure(
        self,
        data: Sequence[GenreSummary],
        *,
        highlight_genre: Optional[str] = None,
        title: Optional[str] = None,
    ) -> dict:
        """Build the bar chart figure for data.

        The y range is recomputed from the maximum average votes in data on
        every call; bars are keyed by genre so Plotly can animate between
        orderings.

        Args:
            data: WorkingSet to draw, in display order.
            highlight_genre: Genre whose bar is drawn in the highlight color.
            title: Optional chart title.

        Returns:
            Plotly figure dictionary.
        """
        cfg = self.config
        genres = [s.genre for s in data]
        votes = [s.average_votes for s in data]
        scores = [s.average_scores for s in data]

        y_max = nice_upper_bound(max(votes)) if votes else 1.0
        logger.debug(f"make_figure: n_bars={len(genres)}, y_max={y_max}, highlight={highlight_genre}")

        fig = go.Figure()
        fig.add_trace(go.Bar(
            x=genres,
            y=votes,
            ids=genres,
            customdata=scores,
            marker_color=self.bar_colors(data, highlight_genre),
            hovertemplate=(
                "Genre: %{x}<br>"
                "Avg Votes: %{y:.0f}<br>"
                "Avg Score: %{customdata:.2f}"
                "<extra></extra>"
            ),
            name="average votes",
        ))
        fig.update_layout(
            width=cfg.width,
            height=cfg.height,
            margin=dict(cfg.margin),
            bargap=cfg.bar_gap,
            xaxis=dict(
                title=cfg.x_title,
                tickangle=cfg.tick_angle,
                categoryorder="array",
                categoryarray=genres,
            ),
            yaxis=dict(
                title=cfg.y_title,
                range=[0, y_max],
            ),
            hoverlabel=dict(
                bgcolor=cfg.tooltip_bgcolor,
                font=dict(color=cfg.tooltip_font_color, size=cfg.tooltip_font_size),
            ),
            transition=dict(duration=cfg.transition_ms, easing="cubic-in-out"),
            showlegend=False,
        )
        if title:
            fig.update_layout(title=title)
        return fig.to_dict()
