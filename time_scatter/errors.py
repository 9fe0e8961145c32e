"""
Errors raised while validating a render request.

Both concrete errors subclass ValueError so callers that only care about
"bad input" can catch that.
"""

from __future__ import annotations


class ChartError(Exception):
    """Base class for chart rendering failures."""


class InvalidSurfaceError(ChartError, ValueError):
    """Surface has no usable width/height, or the plot area is empty."""


class InvalidDataError(ChartError, ValueError):
    """Observation sequence is empty or holds an unparseable value."""
