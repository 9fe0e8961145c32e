"""
Test Configuration
==================

Pytest fixtures shared by the time_scatter tests.
"""

import pytest


@pytest.fixture
def small_svg():
    """600×400 SVG surface: inner plot area is 450×260 with default margins."""
    from time_scatter.svg import SvgSurface

    return SvgSurface(600, 400)


@pytest.fixture
def small_raster():
    """600×400 raster surface with the light theme."""
    from time_scatter.raster import RasterSurface

    return RasterSurface(600, 400)


@pytest.fixture
def two_points():
    """One in-range point and one below the fixed y domain."""
    return [
        {"x": "2020-01-01", "y": 2},
        {"x": "2020-06-01", "y": -5},
    ]


@pytest.fixture
def readings():
    """A week of readings at mixed times of day."""
    return [
        {"x": "2021-11-19T08:00:00", "y": 1},
        {"x": "2021-11-20T12:00:00", "y": 2},
        {"x": "2021-11-21T18:30:00", "y": 3},
        {"x": "2021-11-23T07:15:00", "y": 2},
        {"x": "2021-11-25T11:30:00", "y": 4},
    ]
