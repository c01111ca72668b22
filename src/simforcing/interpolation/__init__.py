# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Interpolation methods and boundary policies for time-varying inputs."""

from .boundary import BoundaryPolicy, Flat, PeriodicCalendar, Throw
from .methods import (
    InterpolationMethod,
    LinearInterpolation,
    NearestNeighbor,
    Stencil,
    in_range,
    interpolate,
    resolve_stencil,
)

__all__ = [
    "BoundaryPolicy",
    "Flat",
    "InterpolationMethod",
    "LinearInterpolation",
    "NearestNeighbor",
    "PeriodicCalendar",
    "Stencil",
    "Throw",
    "in_range",
    "interpolate",
    "resolve_stencil",
]
