# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
DataHandler: regridded snapshots of one variable, by date or simulation time.

A ``DataHandler`` combines a data source (e.g. :class:`NetCDFFileReader`) with
a regridder. It converts between simulation times and calendar dates, finds
the snapshots around a given time, and keeps the regridded snapshots in an LRU
cache so that every date is read and regridded at most once while it stays in
the cache.

Simulation time ``t`` (in seconds) corresponds to the date
``reference_date + t_start + t``.

The handler is not thread-safe: it is meant to be owned by one input and used
from one thread.
"""

import bisect
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np

from simforcing.core.exceptions import (
    ConfigurationError,
    DomainError,
    ResourceError,
    UnavailableDateError,
)
from simforcing.core.mixins import LoggingMixin, TimingMixin
from simforcing.data.cache import LRUCache
from simforcing.data.readers import STATIC_DATE, DataSource, NetCDFFileReader
from simforcing.data.regridders import Regridder, TargetSpace, build_regridder
from simforcing.utils.array_utils import is_uniformly_spaced
from simforcing.utils.calendar import DateLike, to_datetime

DEFAULT_REFERENCE_DATE = datetime(1979, 1, 1)

TimeOrDate = Union[float, int, DateLike]


class DataHandler(LoggingMixin, TimingMixin):
    """
    Provides regridded snapshots of a data source.

    Args:
        source: Where raw snapshots come from. The handler takes ownership and
            closes it in :meth:`close`.
        regridder: Maps raw snapshots onto the target space.
        reference_date: Calendar date of simulation time ``-t_start``.
        t_start: Offset of simulation time zero from ``reference_date``, in seconds.
        cache_max_size: Number of regridded snapshots kept in memory.
    """

    def __init__(
        self,
        source: DataSource,
        regridder: Regridder,
        *,
        reference_date: DateLike = DEFAULT_REFERENCE_DATE,
        t_start: float = 0.0,
        cache_max_size: int = 128,
    ):
        self.source = source
        self.regridder = regridder
        self.reference_date = to_datetime(reference_date)
        self.t_start = float(t_start)
        self._available_dates: List[datetime] = list(source.available_dates)
        self._available_times = np.array(
            [self.date_to_time(d) for d in self._available_dates], dtype=float
        )
        self._cached_regridded_fields: LRUCache = LRUCache(max_size=cache_max_size)
        self._closed = False

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path],
        varname: str,
        target_space: TargetSpace,
        *,
        reference_date: DateLike = DEFAULT_REFERENCE_DATE,
        t_start: float = 0.0,
        regridder_type: Optional[str] = None,
        regridder_kwargs: Optional[Dict[str, Any]] = None,
        file_reader_kwargs: Optional[Dict[str, Any]] = None,
        cache_max_size: int = 128,
    ) -> "DataHandler":
        """
        Create a handler reading ``varname`` from a NetCDF file.

        Args:
            regridder_type: Key in the regridder registry (default ``"linear"``).
            regridder_kwargs: Extra arguments for the regridder.
            file_reader_kwargs: Extra arguments for :class:`NetCDFFileReader`
                (e.g. ``preprocess_func`` or ``handle_registry``).
        """
        regridder = build_regridder(regridder_type, target_space, **(regridder_kwargs or {}))
        source = NetCDFFileReader(file_path, varname, **(file_reader_kwargs or {}))
        return cls(
            source,
            regridder,
            reference_date=reference_date,
            t_start=t_start,
            cache_max_size=cache_max_size,
        )

    # ------------------------------------------------------------------
    # Dates and times
    # ------------------------------------------------------------------

    @property
    def available_dates(self) -> List[datetime]:
        """Dates of the snapshots (empty for static data)."""
        return list(self._available_dates)

    @property
    def available_times(self) -> np.ndarray:
        """Simulation times of the snapshots, in seconds."""
        return self._available_times.copy()

    @property
    def is_static(self) -> bool:
        return not self._available_dates

    def dt(self) -> float:
        """
        Return the spacing of the snapshots, in seconds.

        Raises:
            ConfigurationError: fewer than two snapshots, or non uniform spacing.
        """
        if len(self._available_times) < 2:
            raise ConfigurationError("dt requires at least two available times")
        if not is_uniformly_spaced(self._available_times):
            raise ConfigurationError("dt not defined for non equispaced data")
        return float(self._available_times[1] - self._available_times[0])

    def time_to_date(self, time: float) -> datetime:
        """Convert simulation ``time`` (seconds) to a calendar date."""
        return self.reference_date + timedelta(seconds=self.t_start + float(time))

    def date_to_time(self, date: DateLike) -> float:
        """Convert a calendar date to simulation time (seconds)."""
        return (to_datetime(date) - self.reference_date).total_seconds() - self.t_start

    def _as_date(self, time_or_date: TimeOrDate) -> datetime:
        if isinstance(time_or_date, (int, float, np.number)):
            return self.time_to_date(time_or_date)
        return to_datetime(time_or_date)

    def previous_date(self, time_or_date: TimeOrDate) -> datetime:
        """
        Return the date of the snapshot at or before ``time_or_date``.

        Raises:
            UnavailableDateError: ``time_or_date`` is before the first snapshot.
        """
        date = self._as_date(time_or_date)
        index = bisect.bisect_right(self._available_dates, date) - 1
        if index < 0:
            raise UnavailableDateError(f"Date {date} is before available dates")
        return self._available_dates[index]

    def next_date(self, time_or_date: TimeOrDate) -> datetime:
        """
        Return the date of the snapshot strictly after ``time_or_date``.

        Raises:
            UnavailableDateError: ``time_or_date`` is at or after the last snapshot.
        """
        date = self._as_date(time_or_date)
        index = bisect.bisect_right(self._available_dates, date)
        if index >= len(self._available_dates):
            raise UnavailableDateError(f"Date {date} is after available dates")
        return self._available_dates[index]

    def previous_time(self, time_or_date: TimeOrDate) -> float:
        """Simulation time of :meth:`previous_date` (the same time if it is available)."""
        return self.date_to_time(self.previous_date(time_or_date))

    def next_time(self, time_or_date: TimeOrDate) -> float:
        """Simulation time of :meth:`next_date` (always after ``time_or_date``)."""
        return self.date_to_time(self.next_date(time_or_date))

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def regridded_snapshot(self, time_or_date: Optional[TimeOrDate] = None) -> np.ndarray:
        """
        Return the regridded snapshot at the given date or simulation time.

        The date has to be one of :attr:`available_dates`. Static data is
        requested without argument. The returned array is shared with the
        cache and must not be modified.

        Raises:
            DomainError: no argument for time-dependent data.
            ResourceError: the handler is closed.
            UnavailableDateError: the date is not available.
        """
        if self._closed:
            raise ResourceError("DataHandler is closed")
        if time_or_date is None:
            if not self.is_static:
                raise DomainError("DataHandler is function of time, a date or time is required")
            date = STATIC_DATE
        else:
            date = self._as_date(time_or_date)
            if self.is_static:
                if date != STATIC_DATE:
                    raise UnavailableDateError(f"DataHandler is static, date {date} is not available")
            elif not self._has_date(date):
                raise UnavailableDateError(
                    f"Date {date} not available in {self.source!r}"
                )
        return self._cached_regridded_fields.get_or_insert(date, lambda: self._regrid(date))

    def regridded_snapshot_into(
        self, out: np.ndarray, time_or_date: Optional[TimeOrDate] = None
    ) -> np.ndarray:
        """Write the regridded snapshot into the preallocated ``out`` and return it."""
        out[...] = self.regridded_snapshot(time_or_date)
        return out

    def _has_date(self, date: datetime) -> bool:
        index = bisect.bisect_left(self._available_dates, date)
        return index < len(self._available_dates) and self._available_dates[index] == date

    def _regrid(self, date: datetime) -> np.ndarray:
        raw = self.source.read(None if date == STATIC_DATE else date)
        with self.time_limit(f"regridding snapshot at {date}"):
            return self.regridder.regrid(raw, self.source.dimensions)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the data source and empty the cache. Closing twice does nothing."""
        if self._closed:
            return
        self._closed = True
        self._cached_regridded_fields.clear()
        self.source.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "DataHandler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        kind = "static" if self.is_static else f"{len(self._available_dates)} dates"
        return f"DataHandler({self.source!r}, {kind})"


__all__ = ["DEFAULT_REFERENCE_DATE", "DataHandler"]
