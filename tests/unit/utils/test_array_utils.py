"""Tests for search and interpolation helpers."""

import numpy as np
import pytest

from simforcing.utils.array_utils import (
    is_uniformly_spaced,
    linear_interpolation,
    searchsorted_nearest,
    wrap_time,
)

pytestmark = [pytest.mark.unit, pytest.mark.quick]


class TestSearchsortedNearest:
    A = [0.0, 1.0, 2.0, 3.0]

    @pytest.mark.parametrize(
        "x, expected",
        [(-5.0, 0), (0.0, 0), (0.4, 0), (1.0, 1), (1.6, 2), (3.0, 3), (10.0, 3)],
    )
    def test_nearest(self, x, expected):
        assert searchsorted_nearest(self.A, x) == expected

    def test_ties_favor_earlier_index(self):
        assert searchsorted_nearest(self.A, 1.5) == 1
        assert searchsorted_nearest(self.A, 2.5) == 2


class TestLinearInterpolation:
    def test_between_samples(self):
        assert linear_interpolation([0.0, 2.0], [10.0, 20.0], 0.5) == pytest.approx(12.5)

    def test_exact_hit(self):
        values = [0.1, 0.2 + 0.1, 0.7]
        assert linear_interpolation([0.0, 1.0, 2.0], values, 1.0) == values[1]

    def test_clamps_outside(self):
        assert linear_interpolation([0.0, 1.0], [3.0, 4.0], -1.0) == 3.0
        assert linear_interpolation([0.0, 1.0], [3.0, 4.0], 5.0) == 4.0


class TestIsUniformlySpaced:
    @pytest.mark.parametrize(
        "values, expected",
        [
            ([1.0, 2.0, 3.0, 4.0], True),
            (np.linspace(0.0, 8 * np.pi, 100), True),
            ([1, 2, 4, 8], False),
            ([5.0], True),
            ([], True),
        ],
    )
    def test_spacing(self, values, expected):
        assert is_uniformly_spaced(values) is expected

    def test_tolerance(self):
        assert is_uniformly_spaced([0.0, 1.0, 2.05], tol=0.1)
        assert not is_uniformly_spaced([0.0, 1.0, 2.05], tol=0.01)


class TestWrapTime:
    def test_wraps_into_range(self):
        assert wrap_time(13.0, 0.0, 10.0) == pytest.approx(3.0)
        assert wrap_time(-3.0, 0.0, 10.0) == pytest.approx(7.0)
        assert wrap_time(10.0, 0.0, 10.0) == pytest.approx(0.0)

    def test_extend_past_t_end(self):
        assert wrap_time(10.5, 0.0, 10.0, extend_past_t_end=True, dt=1.0) == pytest.approx(10.5)
        assert wrap_time(11.0, 0.0, 10.0, extend_past_t_end=True, dt=1.0) == pytest.approx(0.0)
        assert wrap_time(12.0, 0.0, 10.0, extend_past_t_end=True, dt=1.0) == pytest.approx(1.0)

    def test_extend_requires_dt(self):
        with pytest.raises(ValueError, match="dt"):
            wrap_time(1.0, 0.0, 10.0, extend_past_t_end=True)
