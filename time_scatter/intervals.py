"""
Intervals — Calendar time intervals for nicing and ticking time domains.

Every interval is a pair of pure functions over naive (UTC wall clock)
datetimes:

    floor(d)          latest boundary <= d
    offset(d, step)   d moved by `step` whole intervals

Everything else derives from those two:

    ceil(d)  = floor(offset(floor(d - 1ms), 1))
    range()  = ceil(start), then offset+floor until >= stop
    every(k) = boundaries whose calendar field is a multiple of k
               (every 15 minutes → minute ∈ {0, 15, 30, 45})

Tick interval table (target = span / count):
============================================
    1s 5s 15s 30s │ 1m 5m 15m 30m │ 1h 3h 6h 12h │ 1d 2d │ 1w │ 1mo 3mo │ 1y
    below 1s → millisecond multiples; above 1y → year multiples.

The entry closest to the target on a log scale wins.
"""

from __future__ import annotations

import calendar
import math
from bisect import bisect_right
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Optional

from .ticks import tick_step


EPOCH = datetime(1970, 1, 1)
MS = timedelta(milliseconds=1)

DURATION_SECOND = 1000.0
DURATION_MINUTE = DURATION_SECOND * 60
DURATION_HOUR = DURATION_MINUTE * 60
DURATION_DAY = DURATION_HOUR * 24
DURATION_WEEK = DURATION_DAY * 7
DURATION_MONTH = DURATION_DAY * 30
DURATION_YEAR = DURATION_DAY * 365


def to_ms(d: datetime) -> float:
    """Naive UTC datetime → milliseconds since the Unix epoch."""
    return (d - EPOCH) / MS


def from_ms(ms: float) -> datetime:
    """Milliseconds since the Unix epoch → naive UTC datetime."""
    return EPOCH + timedelta(milliseconds=ms)


class TimeInterval:
    """A calendar interval defined by its floor and offset functions."""

    def __init__(
        self,
        name: str,
        floor: Callable[[datetime], datetime],
        offset: Callable[[datetime, int], datetime],
        field: Optional[Callable[[datetime], int]] = None,
        count: Optional[Callable[[datetime, datetime], int]] = None,
    ):
        self.name = name
        self._floor = floor
        self._offset = offset
        self._field = field
        self._count = count

    def __repr__(self) -> str:
        return f"TimeInterval({self.name!r})"

    def floor(self, d: datetime) -> datetime:
        return self._floor(d)

    def offset(self, d: datetime, step: int = 1) -> datetime:
        return self._offset(d, step)

    def ceil(self, d: datetime) -> datetime:
        return self.floor(self.offset(self.floor(d - MS), 1))

    def count(self, start: datetime, end: datetime) -> int:
        """Number of boundaries after floor(start), up to and including floor(end)."""
        if self._count is None:
            raise TypeError(f"{self.name} interval does not support count()")
        return self._count(self.floor(start), self.floor(end))

    def range(self, start: datetime, stop: datetime, step: int = 1) -> list[datetime]:
        """Boundaries in [start, stop)."""
        out: list[datetime] = []
        current = self.ceil(start)
        step = math.floor(step)
        if not (current < stop) or not step > 0:
            return out
        while True:
            previous = current
            out.append(previous)
            current = self.floor(self.offset(current, step))
            if not (previous < current < stop):
                break
        return out

    def filter(self, test: Callable[[datetime], bool], name: str = "") -> "TimeInterval":
        """Subset of boundaries satisfying `test`."""
        base = self

        def floor(d: datetime) -> datetime:
            d = base.floor(d)
            while not test(d):
                d = base.floor(d - MS)
            return d

        def offset(d: datetime, step: int) -> datetime:
            direction = 1 if step > 0 else -1
            for _ in range(abs(step)):
                d = base.offset(d, direction)
                while not test(d):
                    d = base.offset(d, direction)
            return d

        return TimeInterval(name or f"{self.name}:filtered", floor, offset)

    def every(self, step: float) -> Optional["TimeInterval"]:
        """
        Interval whose boundaries are every `step`-th boundary of this one,
        aligned to the calendar field. None for non-positive steps.
        """
        if not math.isfinite(step):
            return None
        step = math.floor(step)
        if not step > 0:
            return None
        if step == 1:
            return self
        field = self._field
        name = f"{self.name}*{step}"
        if field is not None:
            return self.filter(lambda d: field(d) % step == 0, name)
        return self.filter(lambda d: self.count(EPOCH, d) % step == 0, name)


# ────────────────────────────────────────────────────────────
# Base intervals
# ────────────────────────────────────────────────────────────
def _add_months(d: datetime, months: int) -> datetime:
    total = d.year * 12 + (d.month - 1) + months
    year, month = divmod(total, 12)
    day = min(d.day, calendar.monthrange(year, month + 1)[1])
    return d.replace(year=year, month=month + 1, day=day)


def _week_floor(d: datetime) -> datetime:
    d = d.replace(hour=0, minute=0, second=0, microsecond=0)
    # Weeks start on Sunday; Python's weekday() has Monday = 0
    return d - timedelta(days=(d.weekday() + 1) % 7)


class _MillisecondInterval(TimeInterval):
    """Millisecond multiples are aligned to the epoch, not a calendar field."""

    def every(self, step: float) -> Optional[TimeInterval]:
        if not math.isfinite(step):
            return None
        k = math.floor(step)
        if not k > 0:
            return None
        if k == 1:
            return self
        return TimeInterval(
            f"millisecond*{k}",
            lambda d: from_ms(math.floor(to_ms(d) / k) * k),
            lambda d, n: d + n * k * MS,
        )


class _YearInterval(TimeInterval):
    """Year multiples are aligned to the calendar year number."""

    def every(self, step: float) -> Optional[TimeInterval]:
        if not math.isfinite(step):
            return None
        k = math.floor(step)
        if not k > 0:
            return None
        if k == 1:
            return self
        return TimeInterval(
            f"year*{k}",
            lambda d: datetime(max(1, d.year // k * k), 1, 1),
            lambda d, n: d.replace(year=d.year + n * k),
        )


millisecond = _MillisecondInterval(
    "millisecond",
    lambda d: d.replace(microsecond=d.microsecond // 1000 * 1000),
    lambda d, n: d + n * MS,
)

second = TimeInterval(
    "second",
    lambda d: d.replace(microsecond=0),
    lambda d, n: d + timedelta(seconds=n),
    field=lambda d: d.second,
)

minute = TimeInterval(
    "minute",
    lambda d: d.replace(second=0, microsecond=0),
    lambda d, n: d + timedelta(minutes=n),
    field=lambda d: d.minute,
)

hour = TimeInterval(
    "hour",
    lambda d: d.replace(minute=0, second=0, microsecond=0),
    lambda d, n: d + timedelta(hours=n),
    field=lambda d: d.hour,
)

day = TimeInterval(
    "day",
    lambda d: d.replace(hour=0, minute=0, second=0, microsecond=0),
    lambda d, n: d + timedelta(days=n),
    field=lambda d: d.day - 1,
)

week = TimeInterval(
    "week",
    _week_floor,
    lambda d, n: d + timedelta(weeks=n),
    count=lambda a, b: (b - a) // timedelta(weeks=1),
)

month = TimeInterval(
    "month",
    lambda d: d.replace(day=1, hour=0, minute=0, second=0, microsecond=0),
    _add_months,
    field=lambda d: d.month - 1,
)

year = _YearInterval(
    "year",
    lambda d: datetime(d.year, 1, 1),
    lambda d, n: d.replace(year=d.year + n),
    field=lambda d: d.year,
)


TICK_INTERVALS: tuple[tuple[TimeInterval, int, float], ...] = (
    (second, 1, DURATION_SECOND),
    (second, 5, 5 * DURATION_SECOND),
    (second, 15, 15 * DURATION_SECOND),
    (second, 30, 30 * DURATION_SECOND),
    (minute, 1, DURATION_MINUTE),
    (minute, 5, 5 * DURATION_MINUTE),
    (minute, 15, 15 * DURATION_MINUTE),
    (minute, 30, 30 * DURATION_MINUTE),
    (hour, 1, DURATION_HOUR),
    (hour, 3, 3 * DURATION_HOUR),
    (hour, 6, 6 * DURATION_HOUR),
    (hour, 12, 12 * DURATION_HOUR),
    (day, 1, DURATION_DAY),
    (day, 2, 2 * DURATION_DAY),
    (week, 1, DURATION_WEEK),
    (month, 1, DURATION_MONTH),
    (month, 3, 3 * DURATION_MONTH),
    (year, 1, DURATION_YEAR),
)

_TICK_DURATIONS = [duration for _, _, duration in TICK_INTERVALS]


def tick_interval(start_ms: float, stop_ms: float, count: float) -> Optional[TimeInterval]:
    """Interval giving roughly `count` ticks across [start_ms, stop_ms]."""
    target = abs(stop_ms - start_ms) / count
    i = bisect_right(_TICK_DURATIONS, target)
    if i == len(TICK_INTERVALS):
        return year.every(tick_step(start_ms / DURATION_YEAR, stop_ms / DURATION_YEAR, count))
    if i == 0:
        return millisecond.every(max(tick_step(start_ms, stop_ms, count), 1))
    lower, upper = TICK_INTERVALS[i - 1], TICK_INTERVALS[i]
    interval, step, _ = lower if target / lower[2] < upper[2] / target else upper
    return interval.every(step)
