"""
time_scatter v1.0 — Time/value scatter charts for SVG and raster surfaces
========================================================================

Quick Start:
    from time_scatter import SvgSurface, render

    surface = SvgSurface(960, 500)
    render(surface, [
        {"x": "2021-11-19", "y": 2},
        {"x": "2021-11-25T12:00:00", "y": 3},
    ])
    surface.save("chart.svg")

The same layout can be rasterized with OpenCV:
    from time_scatter import RasterSurface, ChartRenderer

    surface = RasterSurface(960, 500)
    ChartRenderer().render(surface, data)
    surface.save_png("chart.png")
"""

__version__ = "1.0.0"

# Core
from .renderer import ChartRenderer, ChartLayout, render

# Configuration
from .config import ChartConfig, Margin, PlotArea, YDomainMode

# Colors & themes
from .colors import (
    Theme, LIGHT_THEME, DARK_THEME, MIDNIGHT_THEME,
    get_theme, register_theme,
)

# Data
from .observations import Observation, ParsedData, parse_observations, parse_timestamp

# Scales & axes
from .scales import LinearScale, TimeScale
from .axis import AxisSpec, Orient, draw_axis

# Surfaces
from .surface import Group, Surface
from .svg import SvgSurface, SvgGroup
from .raster import RasterSurface, RasterGroup

# Errors
from .errors import ChartError, InvalidDataError, InvalidSurfaceError

__all__ = [
    # Core
    "ChartRenderer", "ChartLayout", "render",
    # Config
    "ChartConfig", "Margin", "PlotArea", "YDomainMode",
    # Colors
    "Theme", "LIGHT_THEME", "DARK_THEME", "MIDNIGHT_THEME",
    "get_theme", "register_theme",
    # Data
    "Observation", "ParsedData", "parse_observations", "parse_timestamp",
    # Scales & axes
    "LinearScale", "TimeScale", "AxisSpec", "Orient", "draw_axis",
    # Surfaces
    "Group", "Surface", "SvgSurface", "SvgGroup", "RasterSurface", "RasterGroup",
    # Errors
    "ChartError", "InvalidDataError", "InvalidSurfaceError",
]
