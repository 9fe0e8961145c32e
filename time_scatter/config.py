"""
Configuration — Dataclasses for chart layout and styling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class YDomainMode(Enum):
    """Y-axis domain behavior."""
    FIXED = "fixed"          # Use ChartConfig.y_domain
    DATA = "data"            # Extent of the observations' y values


@dataclass(frozen=True)
class Margin:
    """Inset of the plot area from the surface edges, in pixels."""
    left: float = 120
    right: float = 30
    top: float = 20
    bottom: float = 120


@dataclass(frozen=True)
class PlotArea:
    """Margin-adjusted plotting rectangle of one surface."""
    x: float
    y: float
    width: float
    height: float


@dataclass
class ChartConfig:
    """
    Master configuration for the scatter chart.

    Layout diagram:
    ┌────────────────────────── width ──────────────────────────┐
    │                      margin.top                           │
    │ m ┌────────────────────────────────────────────────────┐ m │
    │ a │                                                    │ a │
    │ r │  y ticks          PLOT AREA                        │ r │
    │ g │  + label     (inner_width × inner_height)          │ g │
    │ i │                 circles, gridlines                 │ i │
    │ n │                                                    │ n │
    │ . ├────────────────────────────────────────────────────┤ . │
    │ l │                x ticks                             │ r │
    │   │                x label        margin.bottom        │   │
    └───┴────────────────────────────────────────────────────┴───┘
    """

    # ── Margins ──
    margin: Margin = field(default_factory=Margin)

    # ── Labels ──
    x_label: str = "Time"
    y_label: str = "Temperature"
    x_label_offset: float = 100       # below the x axis line
    y_label_offset: float = -60       # left of the y axis line (pre-rotation)
    label_class: str = "axis-label"

    # ── Y-axis ──
    y_domain: tuple[float, float] = (0.0, 4.0)
    y_domain_mode: YDomainMode = YDomainMode.FIXED
    y_ticks: int = 5

    # ── X-axis ──
    x_ticks: Optional[int] = None     # None = scale default (10)

    # ── Axes ──
    tick_padding: float = 15
    nice: bool = True

    # ── Points ──
    point_radius: float = 8
    fill_opacity: float = 0.6

    # ── Behavior ──
    clear_before_draw: bool = True    # False = append-only re-render

    # ── Computed properties ──
    def plot_area(self, width: float, height: float) -> PlotArea:
        m = self.margin
        return PlotArea(
            x=m.left,
            y=m.top,
            width=width - m.left - m.right,
            height=height - m.top - m.bottom,
        )
