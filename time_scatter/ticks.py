"""
Ticks — Round-number tick steps for linear domains.

Step selection:
===============
    raw step = (stop - start) / count
    step     = 10^floor(log10(raw)) × {1, 2, 5, 10}

The multiplier is picked by comparing the mantissa against the geometric
midpoints √2, √10 and √50, so the chosen step is the nearest "nice" value
on a log scale. Negative increments encode steps below 1 as an inverse
(-10 means 0.1) so tick values are computed by division and stay exact
decimals instead of accumulating float error.
"""

from __future__ import annotations

import math


E10 = math.sqrt(50)
E5 = math.sqrt(10)
E2 = math.sqrt(2)


def _factor(error: float) -> int:
    if error >= E10:
        return 10
    if error >= E5:
        return 5
    if error >= E2:
        return 2
    return 1


def _round(x: float) -> int:
    """Round half up (toward +inf), not half to even."""
    return math.floor(x + 0.5)


def _tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = _factor(error)

    if power < 0:
        inc = 10 ** -power / factor
        i1 = _round(start * inc)
        i2 = _round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = _round(start / inc)
        i2 = _round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def ticks(start: float, stop: float, count: float) -> list[float]:
    """Approximately `count` evenly spaced round values within [start, stop]."""
    if not count > 0:
        return []
    if start == stop:
        return [start]

    reverse = stop < start
    i1, i2, inc = _tick_spec(stop, start, count) if reverse else _tick_spec(start, stop, count)
    if not i2 >= i1:
        return []

    n = i2 - i1 + 1
    if reverse:
        if inc < 0:
            return [(i2 - i) / -inc for i in range(n)]
        return [(i2 - i) * inc for i in range(n)]
    if inc < 0:
        return [(i1 + i) / -inc for i in range(n)]
    return [(i1 + i) * inc for i in range(n)]


def tick_increment(start: float, stop: float, count: float) -> float:
    """
    Tick step for start <= stop, encoded like the tick spec:
    positive = the step itself, negative = -(1 / step).
    """
    step = (stop - start) / max(0, count)
    if step == 0:
        return -math.inf
    if not math.isfinite(step):
        return step
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = _factor(error)
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def tick_step(start: float, stop: float, count: float) -> float:
    """Signed tick step as a plain number."""
    reverse = stop < start
    inc = tick_increment(stop, start, count) if reverse else tick_increment(start, stop, count)
    step = 1 / -inc if inc < 0 else inc
    return -step if reverse else step


def nice_linear(start: float, stop: float, count: float = 10) -> tuple[float, float]:
    """
    Extend [start, stop] outward to multiples of the tick step.

    Repeats until the step stops changing (at most 10 rounds), since
    widening the domain can itself change the step.
    """
    if start == stop:
        return start, stop

    reverse = stop < start
    if reverse:
        start, stop = stop, start

    prestep = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == prestep:
            break
        if not math.isfinite(step):
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        prestep = step

    # Normalize -0.0 produced by the inverse-step branch
    start, stop = start + 0.0, stop + 0.0
    return (stop, start) if reverse else (start, stop)


def precision_fixed(step: float) -> int:
    """Decimal places needed to tell ticks `step` apart."""
    step = abs(step)
    if step == 0 or not math.isfinite(step):
        return 0
    return max(0, -math.floor(math.log10(step)))
