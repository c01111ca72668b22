# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Data access: sources of raw snapshots, regridders, and the DataHandler that
combines them behind an LRU cache.
"""

from .cache import LRUCache
from .data_handler import DataHandler
from .readers import ArrayDataSource, DataSource, FileHandleRegistry, NetCDFFileReader
from .regridders import REGRIDDERS, GridInterpolationRegridder, TargetSpace, build_regridder

__all__ = [
    "ArrayDataSource",
    "DataHandler",
    "DataSource",
    "FileHandleRegistry",
    "GridInterpolationRegridder",
    "LRUCache",
    "NetCDFFileReader",
    "REGRIDDERS",
    "TargetSpace",
    "build_regridder",
]
