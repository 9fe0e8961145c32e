"""
Surface — The drawing target contract shared by the SVG and raster backends.

A surface has a size and a root group. Groups nest, carry an optional
translate/rotate transform, and accept primitives:

    root = surface.root()
    g = root.group(translate=(120, 20))
    g.circle(10, 20, 8, fill_opacity=0.6)
    g.text("Time", x=225, y=100, class_="axis-label")

Attribute names are written pythonically (fill_opacity, class_) and
converted to their SVG spelling (fill-opacity, class) by svg_attr_name().
"""

from __future__ import annotations

import math
from typing import Any, Optional, Protocol, runtime_checkable


Point = tuple[float, float]


@runtime_checkable
class Group(Protocol):
    """A transformable container of drawing primitives."""

    def group(self, translate: Optional[Point] = None,
              rotate: Optional[float] = None, **attrs: Any) -> "Group": ...

    def circle(self, cx: float, cy: float, r: float, **attrs: Any) -> None: ...

    def line(self, x1: float = 0, y1: float = 0,
             x2: float = 0, y2: float = 0, **attrs: Any) -> None: ...

    def path(self, d: str, **attrs: Any) -> None: ...

    def text(self, content: str, x: float = 0, y: float = 0,
             rotate: Optional[float] = None, **attrs: Any) -> None: ...

    def set_attrs(self, **attrs: Any) -> None: ...


@runtime_checkable
class Surface(Protocol):
    """A sized drawing target."""

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    def root(self) -> Group: ...

    def clear(self) -> None: ...


def svg_attr_name(name: str) -> str:
    """fill_opacity → fill-opacity, class_ → class."""
    return name.rstrip("_").replace("_", "-")


def format_number(value: float) -> str:
    """Shortest decimal text: 260.0 → '260', 225.5 → '225.5'."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return str(value)
    value = float(value)
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


def format_attr(value: Any) -> str:
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def transform_attr(translate: Optional[Point] = None,
                   rotate: Optional[float] = None) -> Optional[str]:
    """SVG transform string, or None when there is nothing to apply."""
    parts = []
    if translate is not None:
        parts.append(f"translate({format_number(translate[0])},{format_number(translate[1])})")
    if rotate is not None:
        parts.append(f"rotate({format_number(rotate)})")
    return " ".join(parts) if parts else None
