# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Data source contract and an in-memory implementation.

A data source exposes the calendar dates at which a variable is available,
the coordinates of its non-time dimensions, and reads one raw snapshot per
date. Static (time independent) sources have no dates and are read with
``read()`` or ``read(STATIC_DATE)``.
"""

from datetime import datetime
from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

from simforcing.core.exceptions import ConfigurationError, DomainError, UnavailableDateError
from simforcing.utils.calendar import DateLike, to_datetime

#: Key used for the single snapshot of static data sources.
STATIC_DATE = datetime(1, 1, 1)


@runtime_checkable
class DataSource(Protocol):
    """Structural contract for the providers of raw snapshots.

    ``available_dates`` is strictly sorted (empty for static data) and
    ``dimensions`` holds one 1D coordinate array per non-time dimension, in
    the order of the axes of the arrays returned by ``read``.
    """

    @property
    def available_dates(self) -> List[datetime]: ...

    @property
    def dimensions(self) -> Tuple[np.ndarray, ...]: ...

    @property
    def dimension_names(self) -> Tuple[str, ...]: ...

    def read(self, date: Optional[DateLike] = None) -> np.ndarray: ...

    def close(self) -> None: ...


def check_strictly_sorted(dates: Sequence[datetime]) -> bool:
    return all(a < b for a, b in zip(dates[:-1], dates[1:]))


class ArrayDataSource:
    """
    Data source backed by an in-memory array.

    Args:
        data: Array with time as first axis followed by one axis per
            dimension, or without the time axis when ``dates`` is empty.
        dimensions: Coordinates of the non-time dimensions.
        dates: Strictly increasing dates of the snapshots (empty for static data).
        dimension_names: Names of the dimensions, defaults to ``dim0, dim1, ...``.
    """

    def __init__(
        self,
        data,
        dimensions: Sequence,
        dates: Optional[Sequence[DateLike]] = None,
        dimension_names: Optional[Sequence[str]] = None,
    ):
        self._data = np.asarray(data)
        self._dimensions = tuple(np.asarray(d) for d in dimensions)
        self._dates = [to_datetime(d) for d in (dates or [])]
        if dimension_names is None:
            dimension_names = [f"dim{i}" for i in range(len(self._dimensions))]
        self._dimension_names = tuple(dimension_names)
        self._index = {d: i for i, d in enumerate(self._dates)}
        self._validate()

    def _validate(self) -> None:
        if len(self._dimension_names) != len(self._dimensions):
            raise ConfigurationError("One name is needed per dimension")
        if not check_strictly_sorted(self._dates):
            raise ConfigurationError("Dates have to be strictly increasing")
        expected = tuple(len(d) for d in self._dimensions)
        if self._dates:
            expected = (len(self._dates),) + expected
        if self._data.shape != expected:
            raise ConfigurationError(
                f"Data has shape {self._data.shape}, expected {expected} "
                "from dates and dimensions"
            )

    @property
    def available_dates(self) -> List[datetime]:
        return list(self._dates)

    @property
    def dimensions(self) -> Tuple[np.ndarray, ...]:
        return self._dimensions

    @property
    def dimension_names(self) -> Tuple[str, ...]:
        return self._dimension_names

    def read(self, date: Optional[DateLike] = None) -> np.ndarray:
        if not self._dates:
            if date is not None and to_datetime(date) != STATIC_DATE:
                raise UnavailableDateError(f"Static data has no date {date}")
            return self._data
        if date is None:
            raise DomainError("A date is required to read time-dependent data")
        date = to_datetime(date)
        if date not in self._index:
            raise UnavailableDateError(f"Date {date} is not available")
        return self._data[self._index[date]]

    def close(self) -> None:
        """Nothing to release for in-memory data."""


__all__ = ["ArrayDataSource", "DataSource", "STATIC_DATE", "check_strictly_sorted"]
