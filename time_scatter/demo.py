"""
time_scatter — Demo Scripts
===========================

Usage:
    python -m time_scatter.demo                    # default: svg
    python -m time_scatter.demo svg  [out.svg]     # temperature readings → SVG
    python -m time_scatter.demo png  [out.png]     # same chart rasterized
    python -m time_scatter.demo dark [out.png]     # dark theme, data-driven y axis
    python -m time_scatter.demo hours [out.svg]    # one day of hourly readings
"""

from __future__ import annotations

import logging
import math
import sys
from datetime import datetime, timedelta

import numpy as np

from .colors import get_theme
from .config import ChartConfig, YDomainMode
from .observations import Observation
from .raster import RasterSurface
from .renderer import ChartRenderer
from .svg import SvgSurface


def sample_observations(days: int = 150, seed: int = 7) -> list[Observation]:
    """Daily readings that wander between 0 and 4."""
    rng = np.random.default_rng(seed)
    start = datetime(2021, 11, 19)
    out = []
    for i in range(0, days, 3):
        value = 2 + 1.5 * math.sin(i / 12) + rng.normal(0, 0.3)
        out.append(Observation(x=(start + timedelta(days=i)).isoformat(), y=round(value, 2)))
    return out


def demo_svg(output: str = "chart.svg") -> str:
    """Classic 960×500 chart written as SVG."""
    surface = SvgSurface(960, 500, theme=get_theme("light"))
    ChartRenderer().render(surface, sample_observations())
    return surface.save(output)


def demo_png(output: str = "chart.png") -> str:
    """Same chart rasterized with OpenCV."""
    surface = RasterSurface(960, 500, theme=get_theme("light"))
    ChartRenderer().render(surface, sample_observations())
    return surface.save_png(output)


def demo_dark(output: str = "chart_dark.png") -> str:
    """Dark theme with the y axis fitted to the data."""
    config = ChartConfig(y_label="Severity", y_domain_mode=YDomainMode.DATA)
    surface = RasterSurface(960, 500, theme=get_theme("dark"))
    ChartRenderer(config).render(surface, sample_observations(days=60))
    return surface.save_png(output)


def demo_hours(output: str = "chart_hours.svg") -> str:
    """One day of hourly readings; ticks fall on hour boundaries."""
    start = datetime(2021, 12, 8, 0, 20)
    data = [
        {"x": (start + timedelta(hours=h)).isoformat(), "y": 2 + math.cos(h / 4)}
        for h in range(24)
    ]
    surface = SvgSurface(960, 500, theme=get_theme("light"))
    ChartRenderer().render(surface, data)
    return surface.save(output)


# ────────────────────────────────────────────────────────────
# Entry point
# ────────────────────────────────────────────────────────────
DEMOS = {
    "svg": demo_svg,
    "png": demo_png,
    "dark": demo_dark,
    "hours": demo_hours,
}


def main():
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = sys.argv[1:]
    if args and args[0] in DEMOS:
        path = DEMOS[args[0]](*args[1:2])
    else:
        print("time_scatter — Available demos:")
        print()
        for name, fn in DEMOS.items():
            doc = fn.__doc__.strip().split('\n')[0] if fn.__doc__ else ""
            print(f"  python -m time_scatter.demo {name:6s}  →  {doc}")
        print()
        print("Running default: svg demo...")
        path = demo_svg()
    print(f"Wrote {path}")


if __name__ == "__main__":
    main()
