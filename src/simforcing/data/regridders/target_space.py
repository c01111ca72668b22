# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Target space of regridding: the points where the simulation needs values.

A target space is an ordered set of named coordinate fields of identical
shape, e.g. ``lon`` and ``lat`` of every column of the computational mesh.
"""

from typing import Dict, Mapping, Tuple

import numpy as np

from simforcing.core.exceptions import ConfigurationError


class TargetSpace:
    """
    Named coordinates of the target points.

    Example:
        >>> space = TargetSpace.from_axes(lon=[0.0, 90.0, 180.0], lat=[-45.0, 45.0])
        >>> space.names, space.shape
        (('lon', 'lat'), (3, 2))
    """

    def __init__(self, coordinates: Mapping[str, np.ndarray]):
        if not coordinates:
            raise ConfigurationError("A target space needs at least one coordinate")
        self._coordinates: Dict[str, np.ndarray] = {
            name: np.asarray(values, dtype=float) for name, values in coordinates.items()
        }
        shapes = {values.shape for values in self._coordinates.values()}
        if len(shapes) != 1:
            raise ConfigurationError(
                f"All target coordinates must have the same shape, got {sorted(shapes)}"
            )
        self._shape = shapes.pop()

    @classmethod
    def from_axes(cls, **axes) -> "TargetSpace":
        """Build the rectilinear mesh spanned by 1D ``axes`` (in the given order)."""
        names = list(axes)
        mesh = np.meshgrid(*(np.asarray(axes[n], dtype=float) for n in names), indexing="ij")
        return cls(dict(zip(names, mesh)))

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._coordinates)

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._shape

    @property
    def ndim(self) -> int:
        """Number of coordinates (not the number of axes of the fields)."""
        return len(self._coordinates)

    def __getitem__(self, name: str) -> np.ndarray:
        return self._coordinates[name]

    def coordinates(self) -> Tuple[np.ndarray, ...]:
        return tuple(self._coordinates.values())

    def zeros(self, dtype=float) -> np.ndarray:
        """Preallocated field with the shape of the target space."""
        return np.zeros(self._shape, dtype=dtype)

    def __repr__(self) -> str:
        return f"TargetSpace(names={self.names}, shape={self.shape})"


__all__ = ["TargetSpace"]
