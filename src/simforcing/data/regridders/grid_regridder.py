# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Online regridding with scipy's :class:`~scipy.interpolate.RegularGridInterpolator`.

The source data lives on a rectilinear grid given by its dimension arrays.
The dimensions are interpreted positionally:

- the first is longitude, periodic with period 360;
- the second is latitude, clamped to the source range (flat extrapolation);
- the third, when present, is the vertical; target points outside of the
  source range raise :class:`DomainError`.
"""

from typing import Sequence, Tuple

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from simforcing.core.exceptions import ConfigurationError, DomainError
from simforcing.core.mixins import LoggingMixin, TimingMixin
from simforcing.data.cache import LRUCache
from simforcing.data.regridders.target_space import TargetSpace

LONGITUDE_PERIOD = 360.0
SUPPORTED_METHODS = ("linear", "nearest")


class GridInterpolationRegridder(LoggingMixin, TimingMixin):
    """
    Regrids data on a rectilinear lon/lat(/z) grid onto a :class:`TargetSpace`.

    Args:
        target_space: Where values are needed. Must have 2 (lon, lat) or 3
            (lon, lat, z) coordinates.
        method: ``"linear"`` or ``"nearest"``.
    """

    def __init__(self, target_space: TargetSpace, method: str = "linear"):
        if target_space.ndim not in (2, 3):
            raise ConfigurationError(
                f"Only 2D and 3D target spaces are supported, got {target_space.ndim} coordinates"
            )
        if method not in SUPPORTED_METHODS:
            raise ConfigurationError(
                f"Unknown regridding method {method!r}; expected one of {SUPPORTED_METHODS}"
            )
        self.target_space = target_space
        self.method = method
        # Sorted axes and query points only depend on the source grid
        self._prepared: LRUCache = LRUCache(max_size=16)

    def regrid(self, data, dimensions: Sequence) -> np.ndarray:
        """Interpolate ``data``, defined on ``dimensions``, onto the target space."""
        data = np.asarray(data)
        dimensions = tuple(np.asarray(d, dtype=float) for d in dimensions)
        if len(dimensions) != self.target_space.ndim or data.ndim != len(dimensions):
            raise ConfigurationError(
                f"Cannot regrid data of shape {data.shape} with {len(dimensions)} dimensions "
                f"onto a target space with {self.target_space.ndim} coordinates"
            )
        if data.shape != tuple(len(d) for d in dimensions):
            raise ConfigurationError(
                f"Data shape {data.shape} does not match the dimensions "
                f"{tuple(len(d) for d in dimensions)}"
            )

        key = (
            tuple(len(d) for d in dimensions),
            data.shape,
            tuple((float(d[0]), float(d[-1])) for d in dimensions),
        )
        axes, orders, append_lon, points = self._prepared.get_or_insert(
            key, lambda: self._prepare(dimensions)
        )

        with self.time_limit(f"regridding array of shape {data.shape}"):
            for axis, order in enumerate(orders):
                if order is not None:
                    data = np.take(data, order, axis=axis)
            if append_lon:
                data = np.concatenate([data, data[:1]], axis=0)
            interpolator = RegularGridInterpolator(
                axes, data, method=self.method, bounds_error=False, fill_value=None
            )
            return interpolator(points).reshape(self.target_space.shape)

    def _prepare(self, dimensions: Tuple[np.ndarray, ...]):
        orders = []
        axes = []
        for dim in dimensions:
            if len(dim) > 1 and np.any(np.diff(dim) < 0):
                order = np.argsort(dim, kind="stable")
                orders.append(order)
                axes.append(dim[order])
            else:
                orders.append(None)
                axes.append(dim)

        lon = axes[0]
        append_lon = lon[-1] < lon[0] + LONGITUDE_PERIOD
        if append_lon:
            axes[0] = np.append(lon, lon[0] + LONGITUDE_PERIOD)

        coords = [c.ravel() for c in self.target_space.coordinates()]
        target_lon = lon[0] + np.mod(coords[0] - lon[0], LONGITUDE_PERIOD)
        target_lat = np.clip(coords[1], axes[1][0], axes[1][-1])
        columns = [target_lon, target_lat]
        if len(coords) == 3:
            z = axes[2]
            if np.any(coords[2] < z[0]) or np.any(coords[2] > z[-1]):
                raise DomainError(
                    f"Target vertical coordinates outside of the data range [{z[0]}, {z[-1]}]"
                )
            columns.append(coords[2])
        shape = "x".join(str(len(a)) for a in axes)
        self.logger.debug(f"Prepared {len(target_lon)} target points for a {shape} grid")
        return tuple(axes), tuple(orders), append_lon, np.column_stack(columns)


__all__ = ["GridInterpolationRegridder", "LONGITUDE_PERIOD", "SUPPORTED_METHODS"]
