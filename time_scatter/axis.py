"""
Axis — Immutable axis specs and the function that draws them.

    spec = AxisSpec.bottom(x_scale, tick_size=-inner_height, tick_padding=15)
    draw_axis(x_axis_group, spec)

Drawn structure (bottom orientation, k = +1; left uses k = -1 and swaps x/y):

    <g fill="none" font-size="10" font-family="sans-serif" text-anchor="middle">
      <path class="domain" stroke="currentColor"
            d="M{r0+o},{k*outer}V{o}H{r1+o}V{k*outer}"/>
      <g class="tick" opacity="1" transform="translate({scale(v)+o},0)">
        <line stroke="currentColor" y2="{k*inner}"/>
        <text fill="currentColor" y="{k*(max(inner,0)+padding)}" dy="0.71em">label</text>
      </g>
      ...
    </g>

A negative tick size turns tick marks into gridlines spanning the plot
area. o is the half-pixel offset that puts 1px strokes on pixel centers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union

from .scales import LinearScale, TimeScale
from .surface import Group, format_number


Scale = Union[LinearScale, TimeScale]


class Orient(Enum):
    """Which side of the axis line ticks and labels go."""
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def k(self) -> int:
        return -1 if self in (Orient.TOP, Orient.LEFT) else 1

    @property
    def vertical(self) -> bool:
        return self in (Orient.LEFT, Orient.RIGHT)


@dataclass(frozen=True)
class AxisSpec:
    """Everything needed to draw one axis."""

    orient: Orient
    scale: Scale
    tick_count: Optional[int] = None                # None = scale default
    tick_values: Optional[Sequence[Any]] = None     # explicit ticks override count
    tick_size_inner: float = 6
    tick_size_outer: float = 6
    tick_padding: float = 3
    tick_format: Optional[Callable[[Any], str]] = None
    offset: float = 0.5

    @classmethod
    def bottom(cls, scale: Scale, **options: Any) -> "AxisSpec":
        return cls.build(Orient.BOTTOM, scale, **options)

    @classmethod
    def left(cls, scale: Scale, **options: Any) -> "AxisSpec":
        return cls.build(Orient.LEFT, scale, **options)

    @classmethod
    def top(cls, scale: Scale, **options: Any) -> "AxisSpec":
        return cls.build(Orient.TOP, scale, **options)

    @classmethod
    def right(cls, scale: Scale, **options: Any) -> "AxisSpec":
        return cls.build(Orient.RIGHT, scale, **options)

    @classmethod
    def build(cls, orient: Orient, scale: Scale, *,
              ticks: Optional[int] = None,
              tick_values: Optional[Sequence[Any]] = None,
              tick_size: Optional[float] = None,
              tick_size_inner: float = 6,
              tick_size_outer: float = 6,
              tick_padding: float = 3,
              tick_format: Optional[Callable[[Any], str]] = None,
              offset: float = 0.5) -> "AxisSpec":
        """tick_size, when given, sets both inner and outer sizes."""
        if tick_size is not None:
            tick_size_inner = tick_size_outer = tick_size
        return cls(
            orient=orient,
            scale=scale,
            tick_count=ticks,
            tick_values=tuple(tick_values) if tick_values is not None else None,
            tick_size_inner=tick_size_inner,
            tick_size_outer=tick_size_outer,
            tick_padding=tick_padding,
            tick_format=tick_format,
            offset=offset,
        )

    def with_scale(self, scale: Scale) -> "AxisSpec":
        return replace(self, scale=scale)

    # ── Derived ──
    def values(self) -> list[Any]:
        if self.tick_values is not None:
            return list(self.tick_values)
        if self.tick_count is None:
            return self.scale.ticks()
        return self.scale.ticks(self.tick_count)

    def formatter(self) -> Callable[[Any], str]:
        if self.tick_format is not None:
            return self.tick_format
        if self.tick_count is None:
            return self.scale.tick_format()
        return self.scale.tick_format(self.tick_count)

    def domain_path(self) -> str:
        k, o = self.orient.k, self.offset
        r0 = self.scale.range[0] + o
        r1 = self.scale.range[-1] + o
        outer = self.tick_size_outer
        n = format_number
        if self.orient.vertical:
            if outer:
                return f"M{n(k * outer)},{n(r0)}H{n(o)}V{n(r1)}H{n(k * outer)}"
            return f"M{n(o)},{n(r0)}V{n(r1)}"
        if outer:
            return f"M{n(r0)},{n(k * outer)}V{n(o)}H{n(r1)}V{n(k * outer)}"
        return f"M{n(r0)},{n(o)}H{n(r1)}"


def draw_axis(group: Group, spec: AxisSpec) -> None:
    """Draw the domain line, tick marks/gridlines and tick labels into `group`."""
    orient = spec.orient
    k = orient.k
    values = spec.values()
    fmt = spec.formatter()
    spacing = max(spec.tick_size_inner, 0) + spec.tick_padding

    group.set_attrs(
        fill="none",
        font_size=10,
        font_family="sans-serif",
        text_anchor="start" if orient is Orient.RIGHT else "end" if orient is Orient.LEFT else "middle",
    )
    group.path(spec.domain_path(), class_="domain", stroke="currentColor")

    dy = "0em" if orient is Orient.TOP else "0.71em" if orient is Orient.BOTTOM else "0.32em"
    for value in values:
        position = spec.scale(value) + spec.offset
        if orient.vertical:
            tick = group.group(translate=(0, position), class_="tick", opacity=1)
            tick.line(x2=k * spec.tick_size_inner, stroke="currentColor")
            tick.text(fmt(value), x=k * spacing, fill="currentColor", dy=dy)
        else:
            tick = group.group(translate=(position, 0), class_="tick", opacity=1)
            tick.line(y2=k * spec.tick_size_inner, stroke="currentColor")
            tick.text(fmt(value), y=k * spacing, fill="currentColor", dy=dy)
