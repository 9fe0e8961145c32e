"""Axis specs and the drawn axis structure."""

from __future__ import annotations

from datetime import datetime

import pytest

from time_scatter.axis import AxisSpec, Orient, draw_axis
from time_scatter.raster import RasterSurface
from time_scatter.scales import LinearScale, TimeScale
from time_scatter.svg import SvgSurface


@pytest.fixture
def y_scale():
    return LinearScale((0, 4), (260, 0))


@pytest.fixture
def x_scale():
    return TimeScale.from_datetimes(datetime(2020, 1, 1), datetime(2020, 6, 1), (0, 450))


def _tick_groups(surface: SvgSurface):
    return surface.find_all("g", class_="tick")


class TestOrient:

    def test_direction_sign(self):
        assert Orient.BOTTOM.k == 1
        assert Orient.RIGHT.k == 1
        assert Orient.TOP.k == -1
        assert Orient.LEFT.k == -1

    def test_vertical(self):
        assert Orient.LEFT.vertical
        assert not Orient.BOTTOM.vertical


class TestAxisSpec:
    """Builders and derived values."""

    def test_tick_size_sets_inner_and_outer(self, y_scale):
        spec = AxisSpec.left(y_scale, tick_size=-450)
        assert spec.tick_size_inner == -450
        assert spec.tick_size_outer == -450

    def test_defaults(self, y_scale):
        spec = AxisSpec.bottom(y_scale)
        assert spec.tick_size_inner == 6
        assert spec.tick_padding == 3
        assert spec.offset == 0.5

    def test_tick_values_override_count(self, y_scale):
        spec = AxisSpec.left(y_scale, ticks=5, tick_values=[1, 3])
        assert spec.values() == [1, 3]

    def test_count_is_passed_to_scale(self, y_scale):
        assert AxisSpec.left(y_scale, ticks=5).values() == [0, 1, 2, 3, 4]
        assert len(AxisSpec.left(y_scale).values()) == 9

    def test_domain_path_bottom_gridlines(self, x_scale):
        spec = AxisSpec.bottom(x_scale, tick_size=-260)
        assert spec.domain_path() == "M0.5,-260V0.5H450.5V-260"

    def test_domain_path_left_gridlines(self, y_scale):
        spec = AxisSpec.left(y_scale, tick_size=-450)
        assert spec.domain_path() == "M450,260.5H0.5V0.5H450"

    def test_domain_path_without_outer_ticks(self, y_scale):
        spec = AxisSpec.left(y_scale, tick_size_outer=0)
        assert spec.domain_path() == "M0.5,260.5V0.5"

    def test_with_scale(self, y_scale):
        spec = AxisSpec.left(y_scale, ticks=5)
        wider = spec.with_scale(LinearScale((0, 8), (260, 0)))
        assert wider.tick_count == 5
        assert wider.values()[-1] == 8
        assert spec.scale is y_scale


class TestDrawAxisSvg:
    """Elements appended by draw_axis into an SVG group."""

    def test_left_axis_structure(self, y_scale):
        surface = SvgSurface(600, 400)
        group = surface.root().group()
        draw_axis(group, AxisSpec.left(y_scale, ticks=5, tick_size=-450, tick_padding=15))

        assert group.element.get("fill") == "none"
        assert group.element.get("font-size") == "10"
        assert group.element.get("font-family") == "sans-serif"
        assert group.element.get("text-anchor") == "end"

        (domain,) = surface.find_all("path", class_="domain")
        assert domain.get("d") == "M450,260.5H0.5V0.5H450"
        assert domain.get("stroke") == "currentColor"

        ticks = _tick_groups(surface)
        assert [t.get("transform") for t in ticks] == [
            "translate(0,260.5)", "translate(0,195.5)", "translate(0,130.5)",
            "translate(0,65.5)", "translate(0,0.5)",
        ]
        assert all(t.get("opacity") == "1" for t in ticks)

        lines = surface.find_all("line")
        assert {line.get("x2") for line in lines} == {"450"}

        texts = surface.find_all("text")
        assert [t.text for t in texts] == ["0", "1", "2", "3", "4"]
        assert {t.get("x") for t in texts} == {"-15"}
        assert {t.get("dy") for t in texts} == {"0.32em"}
        assert {t.get("fill") for t in texts} == {"currentColor"}

    def test_bottom_axis_structure(self, x_scale):
        surface = SvgSurface(600, 400)
        group = surface.root().group()
        draw_axis(group, AxisSpec.bottom(x_scale, tick_size=-260, tick_padding=15))

        assert group.element.get("text-anchor") == "middle"
        (domain,) = surface.find_all("path", class_="domain")
        assert domain.get("d") == "M0.5,-260V0.5H450.5V-260"

        ticks = _tick_groups(surface)
        assert len(ticks) == 6
        assert ticks[0].get("transform") == "translate(0.5,0)"
        assert ticks[-1].get("transform") == "translate(450.5,0)"

        assert {line.get("y2") for line in surface.find_all("line")} == {"-260"}
        texts = surface.find_all("text")
        assert texts[0].text == "2020"
        assert {t.get("y") for t in texts} == {"15"}
        assert {t.get("dy") for t in texts} == {"0.71em"}

    def test_outward_ticks_offset_labels_by_tick_size(self, y_scale):
        surface = SvgSurface(600, 400)
        draw_axis(surface.root().group(), AxisSpec.bottom(y_scale.nice(), ticks=2))
        texts = surface.find_all("text")
        assert {t.get("y") for t in texts} == {"9"}
        assert {line.get("y2") for line in surface.find_all("line")} == {"6"}

    def test_top_axis_places_labels_above(self, x_scale):
        surface = SvgSurface(600, 400)
        group = surface.root().group()
        spec = AxisSpec.top(x_scale)
        draw_axis(group, spec)

        assert spec.domain_path() == "M0.5,-6V0.5H450.5V-6"
        assert group.element.get("text-anchor") == "middle"
        texts = surface.find_all("text")
        assert {t.get("y") for t in texts} == {"-9"}
        assert {t.get("dy") for t in texts} == {"0em"}
        assert {line.get("y2") for line in surface.find_all("line")} == {"-6"}

    def test_right_axis_places_labels_after(self, y_scale):
        surface = SvgSurface(600, 400)
        group = surface.root().group()
        spec = AxisSpec.right(y_scale, ticks=5)
        draw_axis(group, spec)

        assert spec.domain_path() == "M6,260.5H0.5V0.5H6"
        assert group.element.get("text-anchor") == "start"
        texts = surface.find_all("text")
        assert {t.get("x") for t in texts} == {"9"}
        assert {t.get("dy") for t in texts} == {"0.32em"}
        assert {line.get("x2") for line in surface.find_all("line")} == {"6"}

    def test_custom_tick_format(self, y_scale):
        surface = SvgSurface(600, 400)
        spec = AxisSpec.left(y_scale, ticks=5, tick_format=lambda v: f"{v:g}°C")
        draw_axis(surface.root().group(), spec)
        assert [t.text for t in surface.find_all("text")][-1] == "4°C"


def test_draw_axis_on_raster_surface(y_scale):
    surface = RasterSurface(600, 400)
    draw_axis(surface.root().group(translate=(120, 20)),
              AxisSpec.left(y_scale, ticks=5, tick_size=-450, tick_padding=15))

    assert len(surface.primitives("path", class_="domain")) == 1
    assert len(surface.primitives("line", class_="tick")) == 5
    labels = surface.primitives("text", class_="tick")
    assert [p.attrs["content"] for p in labels] == ["0", "1", "2", "3", "4"]
    assert labels[0].attr("text-anchor") == "end"
    assert labels[0].position(-15, 0) == pytest.approx((105.0, 280.5))
