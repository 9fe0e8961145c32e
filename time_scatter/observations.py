"""
Observations — Input points and their validated numpy representation.

Accepted input shapes:
======================
    Observation(x="2020-01-01", y=2.0)
    {"x": "2020-01-01T12:30:00", "y": 2}
    ("2020-01-01", 2)

x may be an ISO-8601 string, a datetime, a date, or milliseconds since the
Unix epoch. Every timestamp is normalized to naive UTC, then stored as
float64 milliseconds so scale mapping is a single vectorized expression.

Parsing is all-or-nothing: the first bad value raises InvalidDataError
naming its index, and nothing is returned.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Union

import numpy as np

from .errors import InvalidDataError
from .intervals import from_ms, to_ms


Timestamp = Union[str, datetime, date, int, float]


@dataclass(frozen=True)
class Observation:
    """A single (time, value) point."""
    x: Timestamp
    y: float


def parse_timestamp(value: Any) -> datetime:
    """Parse one x value into a naive UTC datetime. Raises ValueError."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool):
        ms = float(value)
        if not math.isfinite(ms):
            raise ValueError(f"timestamp {value!r} is not finite")
        return from_ms(ms)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        return parse_timestamp(parsed)
    raise ValueError(f"unsupported timestamp type {type(value).__name__}")


def _unpack(item: Any) -> tuple[Any, Any]:
    if isinstance(item, Observation):
        return item.x, item.y
    if isinstance(item, Mapping):
        return item["x"], item["y"]
    x, y = item
    return x, y


class ParsedData:
    """Validated observations as parallel float64 arrays."""

    __slots__ = ('x_ms', 'y')

    def __init__(self, x_ms: np.ndarray, y: np.ndarray):
        self.x_ms = x_ms
        self.y = y

    def __len__(self) -> int:
        return len(self.x_ms)

    def x_extent(self) -> tuple[float, float]:
        """(min, max) timestamp in ms."""
        return (float(self.x_ms.min()), float(self.x_ms.max()))

    def y_extent(self) -> tuple[float, float]:
        return (float(self.y.min()), float(self.y.max()))

    def timestamps(self) -> list[datetime]:
        return [from_ms(ms) for ms in self.x_ms]


def parse_observations(data: Iterable[Any]) -> ParsedData:
    """
    Validate and convert every observation.

    Raises InvalidDataError for an empty sequence, a malformed item,
    an x that is not a timestamp, or a y that is not a finite number.
    """
    xs: list[float] = []
    ys: list[float] = []

    for i, item in enumerate(data):
        try:
            raw_x, raw_y = _unpack(item)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidDataError(
                f"Observation {i} is not an (x, y) pair: {item!r}"
            ) from e

        try:
            xs.append(to_ms(parse_timestamp(raw_x)))
        except (ValueError, TypeError, OverflowError) as e:
            raise InvalidDataError(
                f"Observation {i}: x={raw_x!r} is not a valid timestamp ({e})"
            ) from e

        try:
            y = float(raw_y)
        except (ValueError, TypeError) as e:
            raise InvalidDataError(
                f"Observation {i}: y={raw_y!r} is not a number"
            ) from e
        if not math.isfinite(y):
            raise InvalidDataError(f"Observation {i}: y={raw_y!r} is not finite")
        ys.append(y)

    if not xs:
        raise InvalidDataError("No observations to plot")

    return ParsedData(
        np.asarray(xs, dtype=np.float64),
        np.asarray(ys, dtype=np.float64),
    )
