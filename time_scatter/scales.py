"""
Scales — Immutable domain → pixel mappings.

    t     = (value - d0) / (d1 - d0)        # normalize
    pixel = r0 * (1 - t) + r1 * t           # interpolate

The interpolation form keeps both range endpoints exact: value d0 maps
to r0 and d1 maps to r1 bit-for-bit, which matters for inverted ranges
such as [inner_height, 0]. A zero-width domain maps every value to the
middle of the range. Values outside the domain extrapolate (no clamping).

Scales never mutate; nice() returns a new scale. Axis specs hold the
scale they were built with, so the drawn ticks always agree with the
plotted points.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Union

import numpy as np

from . import intervals
from .intervals import from_ms, tick_interval, to_ms
from .ticks import nice_linear, precision_fixed, tick_step, ticks


def _normalize(value, d0: float, d1: float):
    span = d1 - d0
    if span == 0:
        return np.full_like(value, 0.5, dtype=np.float64) if isinstance(value, np.ndarray) else 0.5
    return (value - d0) / span


def _interpolate(t, r0: float, r1: float):
    return r0 * (1 - t) + r1 * t


def format_linear(value: float, precision: int) -> str:
    """Fixed-point with thousands separators and a typographic minus."""
    text = f"{abs(value):,.{precision}f}"
    if value < 0 and float(text.replace(",", "")) != 0:
        return "−" + text
    return text


@dataclass(frozen=True)
class LinearScale:
    """Continuous numeric scale."""

    domain: tuple[float, float] = (0.0, 1.0)
    range: tuple[float, float] = (0.0, 1.0)

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        return float(_interpolate(_normalize(float(value), d0, d1), r0, r1))

    def apply(self, values: np.ndarray) -> np.ndarray:
        """Vectorized mapping of a numpy array."""
        d0, d1 = self.domain
        r0, r1 = self.range
        return _interpolate(_normalize(np.asarray(values, dtype=np.float64), d0, d1), r0, r1)

    def nice(self, count: int = 10) -> "LinearScale":
        return replace(self, domain=nice_linear(self.domain[0], self.domain[1], count))

    def ticks(self, count: int = 10) -> list[float]:
        return ticks(self.domain[0], self.domain[1], count)

    def tick_format(self, count: int = 10) -> Callable[[float], str]:
        step = tick_step(self.domain[0], self.domain[1], count)
        precision = precision_fixed(step)
        return lambda value: format_linear(value, precision)


# ────────────────────────────────────────────────────────────
# Time
# ────────────────────────────────────────────────────────────
def format_multi(d: datetime) -> str:
    """Label at the coarsest calendar unit the timestamp is not aligned to."""
    if intervals.second.floor(d) < d:
        return f".{d.microsecond // 1000:03d}"
    if intervals.minute.floor(d) < d:
        return d.strftime(":%S")
    if intervals.hour.floor(d) < d:
        return d.strftime("%I:%M")
    if intervals.day.floor(d) < d:
        return d.strftime("%I %p")
    if intervals.month.floor(d) < d:
        if intervals.week.floor(d) < d:
            return d.strftime("%a %d")
        return d.strftime("%b %d")
    if intervals.year.floor(d) < d:
        return d.strftime("%B")
    return d.strftime("%Y")


TimeValue = Union[datetime, float]


def _as_ms(value: TimeValue) -> float:
    return to_ms(value) if isinstance(value, datetime) else float(value)


@dataclass(frozen=True)
class TimeScale:
    """Continuous time scale; domain stored as epoch milliseconds (UTC)."""

    domain: tuple[float, float] = (0.0, 86_400_000.0)
    range: tuple[float, float] = (0.0, 1.0)

    @classmethod
    def from_datetimes(cls, start: datetime, stop: datetime,
                       range: tuple[float, float] = (0.0, 1.0)) -> "TimeScale":
        return cls((to_ms(start), to_ms(stop)), range)

    @property
    def domain_datetimes(self) -> tuple[datetime, datetime]:
        return (from_ms(self.domain[0]), from_ms(self.domain[1]))

    def __call__(self, value: TimeValue) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        return float(_interpolate(_normalize(_as_ms(value), d0, d1), r0, r1))

    def apply(self, values_ms: np.ndarray) -> np.ndarray:
        """Vectorized mapping of epoch-millisecond values."""
        d0, d1 = self.domain
        r0, r1 = self.range
        return _interpolate(_normalize(np.asarray(values_ms, dtype=np.float64), d0, d1), r0, r1)

    def nice(self, count: int = 10) -> "TimeScale":
        """Floor/ceil the domain to the tick interval chosen for `count`."""
        d0, d1 = self.domain
        if not count > 0:
            return self
        interval = tick_interval(d0, d1, count)
        if interval is None:
            return self
        reverse = d1 < d0
        lo, hi = (d1, d0) if reverse else (d0, d1)
        lo = to_ms(interval.floor(from_ms(lo)))
        hi = to_ms(interval.ceil(from_ms(hi)))
        return replace(self, domain=(hi, lo) if reverse else (lo, hi))

    def ticks(self, count: int = 10) -> list[datetime]:
        d0, d1 = self.domain
        if not count > 0:
            return []
        reverse = d1 < d0
        lo, hi = (d1, d0) if reverse else (d0, d1)
        interval = tick_interval(lo, hi, count)
        if interval is None:
            return []
        # Inclusive stop
        out = interval.range(from_ms(lo), from_ms(hi + 1))
        return out[::-1] if reverse else out

    def tick_format(self, count: int = 10) -> Callable[[datetime], str]:
        return format_multi
