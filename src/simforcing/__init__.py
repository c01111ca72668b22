# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
simforcing: time- and space-varying external inputs for running simulations.

Public entry points:

- :func:`time_varying_input` / :func:`evaluate` for inputs evaluated in time
- :func:`space_varying_input` for static fields
- :class:`DataHandler` for cached, regridded snapshots of gridded datasets
- :class:`LRUCache` for bounded memoisation
"""

try:
    from .simforcing_version import __version__
except ImportError:
    try:
        from importlib.metadata import version, PackageNotFoundError
        __version__ = version("simforcing")
    except (ImportError, PackageNotFoundError):
        __version__ = "0.0.0"

from .data.cache import LRUCache
from .data.data_handler import DataHandler
from .inputs import evaluate, space_varying_input, time_varying_input
from .interpolation import (
    Flat,
    LinearInterpolation,
    NearestNeighbor,
    PeriodicCalendar,
    Throw,
)

__all__ = [
    "DataHandler",
    "Flat",
    "LRUCache",
    "LinearInterpolation",
    "NearestNeighbor",
    "PeriodicCalendar",
    "Throw",
    "__version__",
    "evaluate",
    "space_varying_input",
    "time_varying_input",
]
