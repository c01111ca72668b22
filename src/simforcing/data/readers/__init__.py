# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Data sources: the raw snapshots that are regridded and interpolated."""

from .base import STATIC_DATE, ArrayDataSource, DataSource
from .handle_registry import FileHandleRegistry
from .netcdf_reader import NetCDFFileReader, read_available_dates, yyyymmdd_to_datetime

__all__ = [
    "ArrayDataSource",
    "DataSource",
    "FileHandleRegistry",
    "NetCDFFileReader",
    "STATIC_DATE",
    "read_available_dates",
    "yyyymmdd_to_datetime",
]
