"""Tests for regridding rectilinear lon/lat(/z) data onto a target space."""

import numpy as np
import pytest

from simforcing.core.exceptions import ConfigurationError, DomainError
from simforcing.data.regridders import GridInterpolationRegridder, Regridder, TargetSpace

from fixtures.data_fixtures import LAT, LON

pytestmark = [pytest.mark.unit, pytest.mark.quick]

# Value lon / 90 everywhere: 0, 1, 2, 3 on the source longitudes
LON_FIELD = np.repeat((LON / 90.0)[:, None], len(LAT), axis=1)


def _points(lon, lat):
    return TargetSpace({"lon": np.asarray(lon, dtype=float), "lat": np.asarray(lat, dtype=float)})


class TestGridInterpolationRegridder:
    def test_satisfies_protocol(self):
        assert isinstance(GridInterpolationRegridder(_points([0.0], [0.0])), Regridder)

    def test_constant_field(self):
        space = TargetSpace.from_axes(lon=np.linspace(-180, 350, 7), lat=[-60.0, 0.0, 60.0])
        regridder = GridInterpolationRegridder(space)
        result = regridder.regrid(np.full((len(LON), len(LAT)), 7.0), (LON, LAT))
        assert result.shape == space.shape
        np.testing.assert_allclose(result, 7.0)

    def test_linear_in_longitude(self):
        regridder = GridInterpolationRegridder(_points([45.0, 135.0], [0.0, 10.0]))
        np.testing.assert_allclose(regridder.regrid(LON_FIELD, (LON, LAT)), [0.5, 1.5])

    @pytest.mark.parametrize("lon", [315.0, -45.0, 675.0])
    def test_longitude_is_periodic(self, lon):
        regridder = GridInterpolationRegridder(_points([lon], [0.0]))
        np.testing.assert_allclose(regridder.regrid(LON_FIELD, (LON, LAT)), [1.5])

    def test_latitude_is_clamped(self):
        lat_field = np.repeat(LAT[None, :], len(LON), axis=0)
        regridder = GridInterpolationRegridder(_points([0.0, 0.0], [80.0, -90.0]))
        np.testing.assert_allclose(regridder.regrid(lat_field, (LON, LAT)), [45.0, -45.0])

    def test_descending_latitude(self):
        lat_field = np.repeat(LAT[None, :], len(LON), axis=0)
        regridder = GridInterpolationRegridder(_points([0.0], [22.5]))
        result = regridder.regrid(lat_field[:, ::-1], (LON, LAT[::-1]))
        np.testing.assert_allclose(result, [22.5])

    def test_nearest(self):
        regridder = GridInterpolationRegridder(_points([100.0, 300.0], [0.0, 0.0]), "nearest")
        np.testing.assert_allclose(regridder.regrid(LON_FIELD, (LON, LAT)), [1.0, 3.0])

    def test_vertical_dimension(self):
        z = np.array([0.0, 1000.0])
        data = np.repeat(LON_FIELD[:, :, None], 2, axis=2) + np.array([0.0, 10.0])
        space = TargetSpace({"lon": [90.0], "lat": [0.0], "z": [500.0]})
        regridder = GridInterpolationRegridder(space)
        np.testing.assert_allclose(regridder.regrid(data, (LON, LAT, z)), [6.0])

    def test_vertical_out_of_range(self):
        z = np.array([0.0, 1000.0])
        data = np.zeros((len(LON), len(LAT), 2))
        space = TargetSpace({"lon": [90.0], "lat": [0.0], "z": [2000.0]})
        with pytest.raises(DomainError, match="vertical"):
            GridInterpolationRegridder(space).regrid(data, (LON, LAT, z))

    def test_reuses_prepared_points(self):
        regridder = GridInterpolationRegridder(_points([45.0], [0.0]))
        regridder.regrid(LON_FIELD, (LON, LAT))
        regridder.regrid(2 * LON_FIELD, (LON, LAT))
        assert len(regridder._prepared) == 1

    def test_unsupported_target(self):
        with pytest.raises(ConfigurationError, match="2D and 3D"):
            GridInterpolationRegridder(TargetSpace({"x": [0.0]}))

    def test_unknown_method(self):
        with pytest.raises(ConfigurationError, match="method"):
            GridInterpolationRegridder(_points([0.0], [0.0]), "cubic-spline")

    def test_shape_mismatch(self):
        regridder = GridInterpolationRegridder(_points([0.0], [0.0]))
        with pytest.raises(ConfigurationError, match="shape"):
            regridder.regrid(np.zeros((3, 3)), (LON, LAT))
