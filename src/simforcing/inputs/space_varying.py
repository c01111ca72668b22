# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Space-varying inputs: static fields on the target space.

A static field can come from a time independent dataset, from an analytic
function of the coordinates, or from a vertical profile interpolated at the
heights of the target space.
"""

from pathlib import Path

import numpy as np

from simforcing.core.exceptions import ConfigurationError, DomainError
from simforcing.data.data_handler import DataHandler
from simforcing.data.regridders import TargetSpace
from simforcing.utils.array_utils import linear_interpolation


def space_varying_input(*args, **kwargs) -> np.ndarray:
    """
    Return a static field on the target space.

    - ``space_varying_input(data_handler)``: regridded static dataset.
    - ``space_varying_input(file_path, varname, target_space, regridder_type=None, ...)``:
      the same, read from a NetCDF file. Extra keyword arguments go to
      :meth:`DataHandler.from_file`.
    - ``space_varying_input(func, target_space)``: ``func`` is called with the
      coordinate arrays of ``target_space`` (in order) and must work
      element-wise, like numpy functions do.

    Raises:
        DomainError: the dataset depends on time.
        TypeError: the arguments do not match any kind of input.
    """
    if len(args) == 1 and isinstance(args[0], DataHandler):
        return _static_snapshot(args[0])
    if len(args) == 2 and callable(args[0]) and isinstance(args[1], TargetSpace):
        func, target_space = args
        out = target_space.zeros()
        out[...] = func(*target_space.coordinates(), **kwargs)
        return out
    if len(args) == 3 and isinstance(args[0], (str, Path)):
        with DataHandler.from_file(*args, **kwargs) as data_handler:
            return _static_snapshot(data_handler)
    raise TypeError(
        "space_varying_input expects a DataHandler, (func, target_space), "
        "or (file_path, varname, target_space)"
    )


def _static_snapshot(data_handler: DataHandler) -> np.ndarray:
    if not data_handler.is_static:
        raise DomainError(
            f"{data_handler!r} depends on time, use a time-varying input instead"
        )
    return np.array(data_handler.regridded_snapshot(), copy=True)


def column_input(
    data_z,
    data_values,
    target_space: TargetSpace,
    coordinate: str = "z",
) -> np.ndarray:
    """
    Interpolate a vertical profile at the heights of ``target_space``.

    ``data_z`` must be strictly increasing. Heights outside of the profile
    take the value at the closest end.

    Args:
        data_z: Heights of the profile.
        data_values: Values of the profile at ``data_z``.
        target_space: Where the values are needed.
        coordinate: Name of the vertical coordinate in ``target_space``.
    """
    data_z = np.asarray(data_z, dtype=float)
    data_values = np.asarray(data_values, dtype=float)
    if data_z.shape != data_values.shape or data_z.ndim != 1:
        raise ConfigurationError("data_z and data_values must be 1D and of the same length")
    if np.any(np.diff(data_z) <= 0):
        raise ConfigurationError("data_z must be strictly increasing")
    if coordinate not in target_space.names:
        raise ConfigurationError(
            f"Target space has no coordinate {coordinate!r} (available: {target_space.names})"
        )
    heights = target_space[coordinate]
    out = target_space.zeros()
    for index, z in np.ndenumerate(heights):
        out[index] = linear_interpolation(data_z, data_values, z)
    return out


__all__ = ["column_input", "space_varying_input"]
