"""
Renderer — Layout computation and drawing pipeline for the scatter chart.

Architecture:
=============
    layout(surface, data)                     pure, validates everything
        ├─ read surface size, compute plot area
        ├─ parse observations (all-or-nothing)
        └─ build x TimeScale, y LinearScale, AxisSpecs
                 │
    render(surface, data)                     mutates the surface
        1. clear prior content (unless append-only)
        2. root group      translate(margin.left, margin.top)
        3. x-axis group    translate(0, inner_height);  y-axis group at origin
        4. axis labels     (inner_width/2, 100)  and  (-inner_height/2, -60) rotate(-90)
        5. circles         (x_scale(x), y_scale(y)), r=8, fill-opacity=0.6
        6. draw_axis       x then y, reading the finished scales

Because layout() runs to completion before the first append, a rejected
render leaves the surface exactly as it was.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional

from .axis import AxisSpec, draw_axis
from .config import ChartConfig, PlotArea, YDomainMode
from .errors import InvalidDataError, InvalidSurfaceError
from .intervals import from_ms
from .observations import ParsedData, parse_observations
from .scales import LinearScale, TimeScale
from .surface import Surface


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartLayout:
    """Geometry of one render, computed before anything is drawn."""
    width: float
    height: float
    area: PlotArea
    x_scale: TimeScale
    y_scale: LinearScale
    x_axis: AxisSpec
    y_axis: AxisSpec
    data: ParsedData

    @property
    def inner_width(self) -> float:
        return self.area.width

    @property
    def inner_height(self) -> float:
        return self.area.height


def _read_dimension(surface: Any, name: str) -> float:
    try:
        value = float(getattr(surface, name))
    except InvalidSurfaceError:
        raise
    except (AttributeError, TypeError, ValueError) as e:
        raise InvalidSurfaceError(f"Surface {name} is not a number: {e}") from e
    if not math.isfinite(value) or value <= 0:
        raise InvalidSurfaceError(f"Surface {name} must be a positive number, got {value}")
    return value


class ChartRenderer:
    """Stateless scatter chart renderer; safe to reuse across surfaces."""

    def __init__(self, config: Optional[ChartConfig] = None):
        self._config = config or ChartConfig()

    @property
    def config(self) -> ChartConfig:
        return self._config

    # ──────────────────────────────────────────────────────
    # Layout
    # ──────────────────────────────────────────────────────
    def layout(self, surface: Surface, data: Iterable[Any]) -> ChartLayout:
        """Validate inputs and compute scales/axes. Draws nothing."""
        cfg = self._config

        try:
            width = _read_dimension(surface, "width")
            height = _read_dimension(surface, "height")
            area = cfg.plot_area(width, height)
            if area.width <= 0 or area.height <= 0:
                raise InvalidSurfaceError(
                    f"Surface {width:g}×{height:g} leaves no plot area inside margins "
                    f"(inner {area.width:g}×{area.height:g})"
                )
            parsed = parse_observations(data)
            x_scale = self._x_scale(parsed, area)
        except (InvalidSurfaceError, InvalidDataError) as e:
            logger.warning(f"Rejected render request: {e}")
            raise

        logger.debug(f"Received {len(parsed)} observation(s)")

        if cfg.y_domain_mode is YDomainMode.DATA:
            y_domain = parsed.y_extent()
        else:
            y_domain = (float(cfg.y_domain[0]), float(cfg.y_domain[1]))
        y_scale = LinearScale(y_domain, (area.height, 0.0))
        if cfg.nice:
            y_scale = y_scale.nice()

        x_axis = AxisSpec.bottom(
            x_scale,
            ticks=cfg.x_ticks,
            tick_padding=cfg.tick_padding,
            tick_size=-area.height,
        )
        y_axis = AxisSpec.left(
            y_scale,
            ticks=cfg.y_ticks,
            tick_padding=cfg.tick_padding,
            tick_size=-area.width,
        )

        logger.debug(
            f"Layout: surface={width:g}×{height:g} inner={area.width:g}×{area.height:g} "
            f"x_domain={x_scale.domain_datetimes} y_domain={y_scale.domain}"
        )
        return ChartLayout(
            width=width, height=height, area=area,
            x_scale=x_scale, y_scale=y_scale,
            x_axis=x_axis, y_axis=y_axis,
            data=parsed,
        )

    def _x_scale(self, parsed: ParsedData, area: PlotArea) -> TimeScale:
        """Time scale over the data, niced and checked to tick within datetime's range."""
        cfg = self._config
        x_scale = TimeScale(parsed.x_extent(), (0.0, area.width))
        try:
            if cfg.nice:
                x_scale = x_scale.nice()
            if cfg.x_ticks is None:
                x_scale.ticks()
            else:
                x_scale.ticks(cfg.x_ticks)
        except (ValueError, OverflowError) as e:
            lo, hi = (from_ms(ms) for ms in parsed.x_extent())
            raise InvalidDataError(
                f"x extent {lo.isoformat()} .. {hi.isoformat()} cannot be niced "
                f"to calendar boundaries ({e})"
            ) from e
        return x_scale

    # ──────────────────────────────────────────────────────
    # Drawing
    # ──────────────────────────────────────────────────────
    def render(self, surface: Surface, data: Iterable[Any]) -> None:
        """Draw the chart onto `surface`. Raises before drawing on bad input."""
        cfg = self._config
        layout = self.layout(surface, data)

        if cfg.clear_before_draw:
            surface.clear()

        g = surface.root().group(translate=(layout.area.x, layout.area.y))
        x_axis_g = g.group(translate=(0, layout.inner_height))
        y_axis_g = g.group()

        x_axis_g.text(
            cfg.x_label,
            x=layout.inner_width / 2,
            y=cfg.x_label_offset,
            class_=cfg.label_class,
        )
        y_axis_g.text(
            cfg.y_label,
            x=-layout.inner_height / 2,
            y=cfg.y_label_offset,
            rotate=-90,
            class_=cfg.label_class,
            style={"text_anchor": "middle"},
        )

        # Vectorized coordinate mapping
        cxs = layout.x_scale.apply(layout.data.x_ms)
        cys = layout.y_scale.apply(layout.data.y)
        for cx, cy in zip(cxs, cys):
            g.circle(float(cx), float(cy), cfg.point_radius, fill_opacity=cfg.fill_opacity)

        draw_axis(x_axis_g, layout.x_axis)
        draw_axis(y_axis_g, layout.y_axis)

        logger.debug(f"Rendered {len(layout.data)} point(s)")


def render(surface: Surface, data: Iterable[Any],
           config: Optional[ChartConfig] = None) -> None:
    """Render a scatter chart with a one-off ChartRenderer."""
    ChartRenderer(config).render(surface, data)
