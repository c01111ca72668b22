"""Tests for boundary policies and interpolation method objects."""

import dataclasses
from datetime import date, datetime

import pytest

from simforcing.core.exceptions import ConfigurationError
from simforcing.interpolation import (
    Flat,
    LinearInterpolation,
    NearestNeighbor,
    PeriodicCalendar,
    Throw,
)
from simforcing.utils.calendar import Period

pytestmark = [pytest.mark.unit, pytest.mark.quick]


class TestPeriodicCalendar:
    def test_inferred_period(self):
        bc = PeriodicCalendar()
        assert bc.period is None
        assert bc.repeat_date is None
        assert not bc.is_calendar_anchored

    def test_explicit_period(self):
        bc = PeriodicCalendar("1 month", date(1993, 11, 1))
        assert bc.period is Period.MONTH
        assert bc.repeat_date == datetime(1993, 11, 1)
        assert bc.is_calendar_anchored

    def test_equality(self):
        assert PeriodicCalendar("month", datetime(1993, 11, 1)) == PeriodicCalendar(
            Period.MONTH, "1993-11-01"
        )
        assert PeriodicCalendar() != PeriodicCalendar("year", datetime(1993, 1, 1))

    def test_period_requires_repeat_date(self):
        with pytest.raises(ConfigurationError, match="repeat_date"):
            PeriodicCalendar("month")

    def test_repeat_date_requires_period(self):
        with pytest.raises(ConfigurationError, match="repeat_date"):
            PeriodicCalendar(repeat_date=datetime(1993, 11, 1))

    def test_multiples_not_supported(self):
        with pytest.raises(ConfigurationError, match="simple periods"):
            PeriodicCalendar("2 months", datetime(1993, 11, 1))

    def test_frozen(self):
        bc = PeriodicCalendar()
        with pytest.raises(dataclasses.FrozenInstanceError):
            bc.period = Period.DAY


class TestMethods:
    @pytest.mark.parametrize("method_cls", [NearestNeighbor, LinearInterpolation])
    def test_default_boundary_is_throw(self, method_cls):
        assert method_cls().extrapolation_bc == Throw()

    @pytest.mark.parametrize("bc", [Throw(), Flat(), PeriodicCalendar()])
    def test_boundary_is_kept(self, bc):
        assert LinearInterpolation(bc).extrapolation_bc is bc

    def test_methods_are_immutable_and_hashable(self):
        method = NearestNeighbor(Flat())
        with pytest.raises(dataclasses.FrozenInstanceError):
            method.extrapolation_bc = Throw()
        assert hash(method) == hash(NearestNeighbor(Flat()))
