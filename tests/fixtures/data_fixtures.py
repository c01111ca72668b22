"""
Data Fixtures for simforcing Tests

Provides synthetic NetCDF files written to ``tmp_path`` and in-memory fakes
that count how often data is read and regridded.
"""

from collections import Counter
from datetime import datetime

import numpy as np
import pandas as pd
import pytest
import xarray as xr

from simforcing.data.data_handler import DataHandler
from simforcing.data.readers import ArrayDataSource

LON = np.array([0.0, 90.0, 180.0, 270.0])
LAT = np.array([-45.0, 0.0, 45.0])


def constant_field(index: int) -> np.ndarray:
    """Field equal to ``index + 1`` everywhere on the LON x LAT grid."""
    return np.full((len(LON), len(LAT)), float(index + 1))


def write_gridded_dataset(
    path,
    dates=None,
    *,
    varname="t2m",
    field=constant_field,
    date_dim=False,
):
    """
    Write a (time, lon, lat) variable to ``path`` and return the path.

    Without ``dates`` the variable is static, with dims (lon, lat) and value
    ``field(0)``. With ``date_dim=True`` dates are stored as YYYYMMDD integers
    in a ``date`` dimension instead of a decoded ``time`` coordinate.
    """
    coords = {"lon": LON, "lat": LAT}
    if not dates:
        ds = xr.Dataset({varname: (("lon", "lat"), field(0))}, coords=coords)
    else:
        data = np.stack([field(i) for i in range(len(dates))])
        if date_dim:
            coords["date"] = [int(d.strftime("%Y%m%d")) for d in dates]
            ds = xr.Dataset({varname: (("date", "lon", "lat"), data)}, coords=coords)
        else:
            coords["time"] = pd.DatetimeIndex(dates)
            ds = xr.Dataset({varname: (("time", "lon", "lat"), data)}, coords=coords)
    ds.to_netcdf(path)
    return path


class CountingSource(ArrayDataSource):
    """ArrayDataSource that records reads and closes."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads = Counter()
        self.close_calls = 0

    def read(self, date=None):
        self.reads[date] += 1
        return super().read(date)

    def close(self):
        self.close_calls += 1


class CountingRegridder:
    """Identity regridder that records how many times it was called."""

    def __init__(self):
        self.calls = 0

    def regrid(self, data, dimensions):
        self.calls += 1
        return np.array(data, dtype=float, copy=True)


def daily_dates(n, start=datetime(2000, 1, 1)):
    return list(pd.date_range(start, periods=n, freq="D").to_pydatetime())


@pytest.fixture
def netcdf_factory(tmp_path):
    """Factory writing synthetic NetCDF files into ``tmp_path``."""

    def _make(name="data.nc", dates=None, **kwargs):
        return write_gridded_dataset(tmp_path / name, dates, **kwargs)

    return _make


@pytest.fixture
def handler_factory():
    """Factory building DataHandlers over in-memory data with counting fakes.

    ``values`` holds one scalar per date; each snapshot is a 2x2 field equal
    to that scalar.
    """

    def _make(dates, values=None, *, reference_date=None, t_start=0.0, cache_max_size=128):
        if values is None:
            values = np.arange(1.0, len(dates) + 1.0)
        data = np.stack([np.full((2, 2), float(v)) for v in values]) if dates else values
        source = CountingSource(data, [np.array([0.0, 1.0]), np.array([0.0, 1.0])], dates)
        return DataHandler(
            source,
            CountingRegridder(),
            reference_date=reference_date or (dates[0] if dates else datetime(2000, 1, 1)),
            t_start=t_start,
            cache_max_size=cache_max_size,
        )

    return _make
