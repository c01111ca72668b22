# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Spatial regridders.

Regridders are registered in :data:`REGRIDDERS` under the ``regridder_type``
selector used in configuration files. Use :func:`build_regridder` to create
one for a given target space.
"""

from typing import Any, Optional

from simforcing.core.exceptions import ConfigurationError
from simforcing.core.registry import Registry

from .base import Regridder
from .grid_regridder import GridInterpolationRegridder
from .target_space import TargetSpace

DEFAULT_REGRIDDER = "linear"

REGRIDDERS: Registry[type] = Registry("regridders", protocol=Regridder)
REGRIDDERS.add("linear", GridInterpolationRegridder, method="linear")
REGRIDDERS.add("nearest", GridInterpolationRegridder, method="nearest")
REGRIDDERS.alias("interpolations", "linear")


def build_regridder(regridder_type: Optional[str], target_space: TargetSpace, **kwargs: Any):
    """
    Create the regridder registered as ``regridder_type`` (default ``"linear"``).

    Registration metadata provides default keyword arguments, which ``kwargs``
    override.

    Raises:
        ConfigurationError: ``regridder_type`` is not registered.
    """
    key = regridder_type or DEFAULT_REGRIDDER
    if key not in REGRIDDERS:
        raise ConfigurationError(
            f"Unknown regridder type {key!r}. Available: {REGRIDDERS.keys()}"
        )
    params = {**REGRIDDERS.meta(key), **kwargs}
    return REGRIDDERS[key](target_space, **params)


__all__ = [
    "DEFAULT_REGRIDDER",
    "GridInterpolationRegridder",
    "REGRIDDERS",
    "Regridder",
    "TargetSpace",
    "build_regridder",
]
