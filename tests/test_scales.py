"""Linear and time scale mapping, nicing, ticks and tick labels."""

from __future__ import annotations

from datetime import datetime

import numpy as np
import pytest

from time_scatter.intervals import to_ms
from time_scatter.scales import LinearScale, TimeScale, format_linear, format_multi


class TestLinearScale:
    """Domain → range mapping for the value axis."""

    def test_inverted_range_endpoints_are_exact(self):
        y = LinearScale((0, 4), (260, 0))
        assert y(0) == 260
        assert y(4) == 0
        assert y(2) == 130

    def test_values_outside_domain_extrapolate(self):
        y = LinearScale((0, 4), (260, 0))
        assert y(-5) == 585
        assert y(-5) > 260

    def test_apply_matches_scalar_mapping(self):
        y = LinearScale((0, 4), (260, 0))
        mapped = y.apply(np.array([0.0, 1.0, 4.0]))
        np.testing.assert_allclose(mapped, [260.0, 195.0, 0.0])

    def test_zero_width_domain_maps_to_midpoint(self):
        scale = LinearScale((3, 3), (0, 100))
        assert scale(3) == 50
        np.testing.assert_allclose(scale.apply(np.array([3.0, 7.0])), [50.0, 50.0])

    def test_nice_returns_new_scale(self):
        scale = LinearScale((0.3, 9.7), (0, 100))
        niced = scale.nice()
        assert niced.domain == (0, 10)
        assert niced.range == (0, 100)
        assert scale.domain == (0.3, 9.7)

    def test_ticks_and_labels(self):
        scale = LinearScale((0, 4), (260, 0))
        values = scale.ticks(5)
        fmt = scale.tick_format(5)
        assert values == [0, 1, 2, 3, 4]
        assert [fmt(v) for v in values] == ["0", "1", "2", "3", "4"]

    def test_label_precision_follows_step(self):
        fmt = LinearScale((0, 1)).tick_format(10)
        assert fmt(0.5) == "0.5"
        assert fmt(1) == "1.0"


class TestFormatLinear:

    def test_thousands_separator(self):
        assert format_linear(12345, 0) == "12,345"

    def test_typographic_minus(self):
        assert format_linear(-1.5, 1) == "−1.5"

    def test_negative_zero_has_no_sign(self):
        assert format_linear(-0.04, 1) == "0.0"


class TestTimeScale:
    """Time axis over epoch milliseconds."""

    def test_maps_datetimes_and_milliseconds(self):
        x = TimeScale.from_datetimes(datetime(2020, 1, 1), datetime(2020, 6, 1), (0, 450))
        assert x(datetime(2020, 1, 1)) == 0
        assert x(datetime(2020, 6, 1)) == 450
        assert x(to_ms(datetime(2020, 6, 1))) == 450

    def test_nice_keeps_month_aligned_domain(self):
        x = TimeScale.from_datetimes(datetime(2020, 1, 1), datetime(2020, 6, 1), (0, 450)).nice()
        assert x.domain_datetimes == (datetime(2020, 1, 1), datetime(2020, 6, 1))

    def test_nice_extends_to_two_day_boundaries(self):
        x = TimeScale.from_datetimes(datetime(2020, 1, 3), datetime(2020, 1, 28)).nice()
        assert x.domain_datetimes == (datetime(2020, 1, 3), datetime(2020, 1, 29))

    def test_nice_extends_to_half_days(self):
        x = TimeScale.from_datetimes(datetime(2021, 11, 19, 8), datetime(2021, 11, 25, 11, 30)).nice()
        assert x.domain_datetimes == (datetime(2021, 11, 19), datetime(2021, 11, 25, 12))

    def test_nice_reversed_domain(self):
        x = TimeScale.from_datetimes(datetime(2020, 1, 28), datetime(2020, 1, 3)).nice()
        assert x.domain_datetimes == (datetime(2020, 1, 29), datetime(2020, 1, 3))

    def test_monthly_ticks_and_labels(self):
        x = TimeScale.from_datetimes(datetime(2020, 1, 1), datetime(2020, 6, 1), (0, 450))
        values = x.ticks()
        fmt = x.tick_format()
        assert values[0] == datetime(2020, 1, 1)
        assert values[-1] == datetime(2020, 6, 1)
        assert [fmt(v) for v in values] == ["2020", "February", "March", "April", "May", "June"]

    def test_ticks_include_stop(self):
        x = TimeScale.from_datetimes(datetime(2021, 11, 19), datetime(2021, 11, 25, 12))
        values = x.ticks()
        assert len(values) == 14
        assert values[-1] == datetime(2021, 11, 25, 12)

    def test_apply_is_vectorized(self):
        x = TimeScale.from_datetimes(datetime(2020, 1, 1), datetime(2020, 1, 11), (0, 100))
        ms = np.array([to_ms(datetime(2020, 1, 1)), to_ms(datetime(2020, 1, 6))])
        np.testing.assert_allclose(x.apply(ms), [0.0, 50.0])


@pytest.mark.parametrize("moment, label", [
    (datetime(2020, 1, 1), "2020"),
    (datetime(2020, 3, 1), "March"),
    (datetime(2020, 3, 8), "Mar 08"),
    (datetime(2020, 3, 10), "Tue 10"),
    (datetime(2020, 3, 10, 15), "03 PM"),
    (datetime(2020, 3, 10, 15, 45), "03:45"),
    (datetime(2020, 3, 10, 15, 45, 30), ":30"),
    (datetime(2020, 3, 10, 15, 45, 30, 250_000), ".250"),
])
def test_multi_scale_time_format(moment, label):
    assert format_multi(moment) == label
