"""Tests for the pure interpolation functions."""

import numpy as np
import pytest

from simforcing.core.exceptions import ConfigurationError, DomainError
from simforcing.interpolation import (
    Flat,
    LinearInterpolation,
    NearestNeighbor,
    PeriodicCalendar,
    Stencil,
    Throw,
    interpolate,
    resolve_stencil,
)

pytestmark = [pytest.mark.unit, pytest.mark.quick]

TIMES = np.array([0.0, 1.0, 2.0, 3.0])
VALS = 10 * TIMES


class TestLinear:
    def test_sin_scenario(self):
        times = np.linspace(0.0, 8 * np.pi, 100)
        vals = np.sin(times)
        t0, t1 = times[0], times[1]
        expected = vals[0] + (vals[1] - vals[0]) * (0.1 - t0) / (t1 - t0)

        assert interpolate(times, vals, 0.1, LinearInterpolation()) == pytest.approx(expected)

    def test_exact_at_samples(self):
        times = np.linspace(0.0, 8 * np.pi, 100)
        vals = np.sin(times) + 0.1
        method = LinearInterpolation()
        for t, v in zip(times, vals):
            assert interpolate(times, vals, t, method) == v

    def test_blends_arrays(self):
        vals = np.stack([VALS, -VALS], axis=1)
        result = interpolate(TIMES, vals, 0.5, LinearInterpolation())
        np.testing.assert_allclose(result, [5.0, -5.0])

    def test_non_uniform_times(self):
        times = [0.0, 1.0, 4.0]
        assert interpolate(times, [0.0, 1.0, 4.0], 2.5, LinearInterpolation()) == pytest.approx(2.5)


class TestNearest:
    @pytest.mark.parametrize("time, expected", [(1.4, 10.0), (1.5, 10.0), (1.6, 20.0), (3.0, 30.0)])
    def test_nearest(self, time, expected):
        assert interpolate(TIMES, VALS, time, NearestNeighbor()) == expected


class TestThrow:
    @pytest.mark.parametrize("method", [LinearInterpolation(Throw()), NearestNeighbor(Throw())])
    @pytest.mark.parametrize("time", [-1e-9, 3.0 + 1e-9, 100.0])
    def test_outside_raises(self, method, time):
        with pytest.raises(DomainError, match="outside"):
            interpolate(TIMES, VALS, time, method)

    def test_boundaries_are_inside(self):
        assert interpolate(TIMES, VALS, 0.0, LinearInterpolation()) == 0.0
        assert interpolate(TIMES, VALS, 3.0, LinearInterpolation()) == 30.0


class TestFlat:
    @pytest.mark.parametrize("method", [LinearInterpolation(Flat()), NearestNeighbor(Flat())])
    @pytest.mark.parametrize("x", [0.0, 0.5, 7.0, 1e6])
    def test_clamps_past_the_end(self, method, x):
        assert interpolate(TIMES, VALS, 3.0 + x, method) == 30.0

    def test_clamps_before_the_start(self):
        assert interpolate(TIMES, VALS, -2.0, LinearInterpolation(Flat())) == 0.0

    def test_interpolates_inside(self):
        assert interpolate(TIMES, VALS, 1.25, LinearInterpolation(Flat())) == pytest.approx(12.5)
        assert interpolate(TIMES, VALS, 1.6, NearestNeighbor(Flat())) == 20.0


class TestPeriodic:
    linear = LinearInterpolation(PeriodicCalendar())
    nearest = NearestNeighbor(PeriodicCalendar())

    def test_one_step_past_end_is_start(self):
        assert interpolate(TIMES, VALS, 4.0, self.linear) == pytest.approx(0.0)

    @pytest.mark.parametrize("k", [1, 2, 3, 4, 9])
    def test_wraparound(self, k):
        expected = interpolate(TIMES, VALS, 0.0 + (k - 1) % 4, self.linear)
        assert interpolate(TIMES, VALS, 3.0 + k, self.linear) == pytest.approx(expected)

    def test_linear_in_seam(self):
        assert interpolate(TIMES, VALS, 3.5, self.linear) == pytest.approx(15.0)
        assert interpolate(TIMES, VALS, 3.25, self.linear) == pytest.approx(22.5)

    def test_before_start_wraps(self):
        assert interpolate(TIMES, VALS, -0.5, self.linear) == pytest.approx(15.0)
        assert interpolate(TIMES, VALS, -3.0, self.linear) == pytest.approx(10.0)

    @pytest.mark.parametrize("time, expected", [(3.4, 30.0), (3.5, 0.0), (3.6, 0.0), (4.4, 0.0), (6.6, 30.0)])
    def test_nearest_across_seam(self, time, expected):
        assert interpolate(TIMES, VALS, time, self.nearest) == expected

    def test_needs_two_samples(self):
        with pytest.raises(ConfigurationError, match="two samples"):
            interpolate([0.0], [1.0], 0.5, self.linear)

    def test_explicit_period_requires_dates(self):
        method = LinearInterpolation(PeriodicCalendar("month", "1993-11-01"))
        with pytest.raises(ConfigurationError, match="gridded"):
            interpolate(TIMES, VALS, 1.0, method)


class TestResolveStencil:
    def test_exact_hit(self):
        stencil = resolve_stencil(TIMES, 2.0, LinearInterpolation())
        assert stencil == Stencil(2, 2, 0.0)
        assert stencil.is_exact

    def test_bracket(self):
        stencil = resolve_stencil(TIMES, 2.25, LinearInterpolation())
        assert (stencil.i0, stencil.i1) == (2, 3)
        assert stencil.coeff == pytest.approx(0.25)

    def test_seam_with_custom_width(self):
        stencil = resolve_stencil(TIMES, 4.0, LinearInterpolation(PeriodicCalendar()), dt=2.0)
        assert (stencil.i0, stencil.i1) == (3, 0)
        assert stencil.coeff == pytest.approx(0.5)
