"""Tick step, tick value and nicing behavior for numeric domains."""

from __future__ import annotations

import pytest

from time_scatter.ticks import nice_linear, precision_fixed, tick_increment, tick_step, ticks


class TestTicks:
    """Evenly spaced round tick values."""

    def test_unit_steps(self):
        assert ticks(0, 4, 5) == [0, 1, 2, 3, 4]

    def test_decimal_steps_are_exact(self):
        result = ticks(0, 1, 10)
        assert result == [0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0]

    def test_tens(self):
        assert ticks(0, 100, 10) == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100]

    def test_half_steps_across_zero(self):
        result = ticks(-5, 2, 10)
        assert result[0] == -5
        assert result[-1] == 2
        assert result[1] == -4.5
        assert len(result) == 15

    def test_reversed_domain_gives_descending_ticks(self):
        assert ticks(4, 0, 5) == [4, 3, 2, 1, 0]

    def test_degenerate_inputs(self):
        assert ticks(1, 1, 10) == [1]
        assert ticks(0, 1, 0) == []


class TestTickStep:

    def test_increment_encodes_small_steps_as_inverse(self):
        assert tick_increment(0, 4, 10) == -2
        assert tick_increment(0, 100, 10) == 10

    def test_step_is_signed(self):
        assert tick_step(0, 4, 10) == 0.5
        assert tick_step(4, 0, 10) == -0.5

    def test_zero_span(self):
        assert tick_step(3, 3, 10) == 0


class TestNiceLinear:
    """Domain extension to round boundaries."""

    def test_already_round_domain_is_unchanged(self):
        assert nice_linear(0, 4) == (0, 4)

    def test_extends_outward(self):
        assert nice_linear(0.3, 9.7) == (0, 10)

    def test_repeats_until_step_is_stable(self):
        assert nice_linear(1.1, 10.9) == (1, 11)

    def test_negative_domain(self):
        assert nice_linear(-5, 2) == (-5, 2)

    def test_reversed_domain_keeps_direction(self):
        assert nice_linear(9.7, 0.3) == (10, 0)

    def test_zero_span_is_left_alone(self):
        assert nice_linear(3, 3) == (3, 3)


@pytest.mark.parametrize("step, expected", [(1, 0), (20, 0), (0.5, 1), (0.2, 1), (0.01, 2)])
def test_precision_fixed(step, expected):
    assert precision_fixed(step) == expected
