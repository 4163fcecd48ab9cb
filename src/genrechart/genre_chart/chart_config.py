"""Presentation settings for the genre bar chart."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChartConfig:
    """Visual parameters used by FigureGenerator.

    None of these affect which bars are shown, only how they look.
    """
    width: int = 800
    height: int = 500
    margin: dict[str, int] = field(
        default_factory=lambda: {"t": 40, "r": 20, "b": 70, "l": 80}
    )
    bar_color: str = "steelblue"
    highlight_color: str = "darkblue"
    transition_ms: int = 1000
    tick_angle: int = -45
    x_title: str = "Genres"
    y_title: str = "Average Votes"
    tooltip_bgcolor: str = "rgba(0, 0, 0, 0.8)"
    tooltip_font_color: str = "#fff"
    tooltip_font_size: int = 12
    bar_gap: float = 0.2  # fraction of band width left empty between bars
