# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
NetCDF file reader.

Reads one variable of a NetCDF file with xarray, one time slice at a time.
Slices are preprocessed and kept in an LRU cache, so reading the same date
twice does not touch the file again.

The time dimension of the variable is the one named ``time``, ``date`` or
``t``. Dates are taken from the ``time`` coordinate (decoded by xarray) or,
failing that, from a ``date`` variable holding ``YYYYMMDD`` values. A
variable without time dimension is static.
"""

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd
import xarray as xr

from simforcing.core.exceptions import (
    DomainError,
    ResourceError,
    UnavailableDateError,
    simforcing_error_handler,
)
from simforcing.core.mixins import LoggingMixin
from simforcing.data.cache import LRUCache
from simforcing.data.readers.base import STATIC_DATE, check_strictly_sorted
from simforcing.data.readers.handle_registry import FileHandleRegistry
from simforcing.utils.calendar import DateLike, to_datetime

TIME_DIMENSION_NAMES = ("time", "date", "t")


def yyyymmdd_to_datetime(value) -> datetime:
    """
    Convert a ``YYYYMMDD`` string or integer to a :class:`datetime`.

    Example:
        >>> yyyymmdd_to_datetime(19931101)
        datetime.datetime(1993, 11, 1, 0, 0)
    """
    if isinstance(value, bytes):
        value = value.decode()
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        value = int(value)
    if isinstance(value, (int, np.integer)):
        value = str(int(value))
    strdate = str(value).strip()
    if len(strdate) != 8 or not strdate.isdigit():
        raise ResourceError(f"{strdate!r} does not have the YYYYMMDD format")
    try:
        return pd.to_datetime(strdate, format="%Y%m%d").to_pydatetime()
    except ValueError as e:
        raise ResourceError(f"{strdate!r} is not a valid YYYYMMDD date") from e


def read_available_dates(dataset: xr.Dataset) -> List[datetime]:
    """
    Return all the dates in ``dataset``, or an empty list if it has none.

    Dates are read from the ``time`` dimension or, if missing, from the
    ``date`` dimension.
    """
    if "time" in dataset.dims:
        values = dataset["time"].values
        if not np.issubdtype(values.dtype, np.datetime64):
            raise ResourceError(
                "The time coordinate could not be decoded to dates "
                f"(dtype {values.dtype})"
            )
        return list(pd.DatetimeIndex(values).to_pydatetime())
    if "date" in dataset.dims:
        return [yyyymmdd_to_datetime(v) for v in np.asarray(dataset["date"].values).ravel()]
    return []


class NetCDFFileReader(LoggingMixin):
    """
    Reads and preprocesses one variable of a NetCDF file.

    Args:
        file_path: Path of the NetCDF file.
        varname: Name of the variable to read.
        preprocess_func: Function applied to every value that is read, e.g. to
            convert units or remove NaNs. It receives and returns a scalar.
        handle_registry: Registry shared by readers of the same files. A
            private registry is used when not given.
        cache_max_size: Number of slices kept in memory.

    Raises:
        ResourceError: The file cannot be opened, the variable or the
            coordinates of its dimensions are missing, or the dates are not
            sorted.

    Don't forget to :meth:`close` the reader (or use it as a context manager).
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        varname: str,
        *,
        preprocess_func: Optional[Callable[[float], float]] = None,
        handle_registry: Optional[FileHandleRegistry] = None,
        cache_max_size: int = 128,
    ):
        self.file_path = str(file_path)
        self.varname = varname
        self.preprocess_func = preprocess_func
        self._preprocess = (
            np.vectorize(preprocess_func, otypes=[np.float64])
            if preprocess_func is not None
            else None
        )
        self._registry = handle_registry if handle_registry is not None else FileHandleRegistry()
        self._cached_reads: LRUCache = LRUCache(max_size=cache_max_size)
        self._closed = False

        self._dataset = self._registry.acquire(self.file_path, varname)
        try:
            self._inspect()
        except Exception:
            self._registry.release(self.file_path, varname)
            raise

    def _inspect(self) -> None:
        if self.varname not in self._dataset.variables:
            raise ResourceError(f"{self.file_path} does not contain variable {self.varname!r}")

        dim_names = tuple(str(d) for d in self._dataset[self.varname].dims)
        self._available_dates = read_available_dates(self._dataset)
        self.time_dim: Optional[str] = None

        if self._available_dates:
            time_dims = [d for d in dim_names if d in TIME_DIMENSION_NAMES]
            if len(time_dims) != 1:
                raise ResourceError(
                    f"Could not find (unique) time dimension of {self.varname!r} "
                    f"in {self.file_path}"
                )
            self.time_dim = time_dims[0]
            if not check_strictly_sorted(self._available_dates):
                raise ResourceError(
                    f"Cannot process files that are not sorted in time ({self.file_path})"
                )
            dim_names = tuple(d for d in dim_names if d != self.time_dim)

        missing = [d for d in dim_names if d not in self._dataset.variables]
        if missing:
            raise ResourceError(
                f"{self.file_path} does not contain information about dimensions {missing}"
            )
        self._dimension_names = dim_names
        self._dimensions = tuple(np.asarray(self._dataset[d].values) for d in dim_names)
        self._date_index = {d: i for i, d in enumerate(self._available_dates)}
        self.logger.debug(
            f"Reading {self.varname!r} from {self.file_path}: dimensions {dim_names}, "
            f"{len(self._available_dates)} dates"
        )

    @property
    def available_dates(self) -> List[datetime]:
        return list(self._available_dates)

    @property
    def dimensions(self) -> Tuple[np.ndarray, ...]:
        return self._dimensions

    @property
    def dimension_names(self) -> Tuple[str, ...]:
        return self._dimension_names

    @property
    def is_static(self) -> bool:
        return self.time_dim is None

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, date: Optional[DateLike] = None) -> np.ndarray:
        """
        Read and preprocess the data at ``date``.

        Static data is read without a date (or with :data:`STATIC_DATE`).

        Raises:
            UnavailableDateError: ``date`` is not in the file.
            DomainError: no date was given for time-dependent data.
        """
        if self._closed:
            raise ResourceError(f"Reader of {self.varname!r} in {self.file_path} is closed")

        if self.is_static:
            if date is not None and to_datetime(date) != STATIC_DATE:
                raise UnavailableDateError(
                    f"{self.varname!r} in {self.file_path} is static and has no date {date}"
                )
            return self._cached_reads.get_or_insert(STATIC_DATE, lambda: self._read_slice(None))

        if date is None:
            raise DomainError(
                f"{self.varname!r} in {self.file_path} is time dependent, a date is required"
            )
        date = to_datetime(date)
        index = self._date_index.get(date)
        if index is None:
            raise UnavailableDateError(f"Problem with date {date} in {self.file_path}")
        return self._cached_reads.get_or_insert(date, lambda: self._read_slice(index))

    def _read_slice(self, index: Optional[int]) -> np.ndarray:
        with simforcing_error_handler(
            f"reading {self.varname!r} from {self.file_path}", self.logger, ResourceError
        ):
            var = self._dataset[self.varname]
            if index is not None:
                var = var.isel({self.time_dim: index})
            data = np.asarray(var.values)
            if self._preprocess is not None:
                data = self._preprocess(data)
        return data

    def close(self) -> None:
        """Release the file. Closing twice does nothing."""
        if self._closed:
            return
        self._closed = True
        self._cached_reads.clear()
        self._registry.release(self.file_path, self.varname)

    def __enter__(self) -> "NetCDFFileReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"NetCDFFileReader({self.file_path!r}, {self.varname!r})"


__all__ = [
    "NetCDFFileReader",
    "TIME_DIMENSION_NAMES",
    "read_available_dates",
    "yyyymmdd_to_datetime",
]
