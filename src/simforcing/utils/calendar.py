# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Calendar period arithmetic.

Dates are plain :class:`datetime.datetime` objects (``pandas.Timestamp`` and
``numpy.datetime64`` values are converted with :func:`to_datetime`).
Periods are the simple calendar buckets of :class:`Period`; multiples such as
"two months" are not supported.

Weeks start on Monday. The end of a period is one second before the next
period starts.
"""

import re
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np
import pandas as pd

from simforcing.core.exceptions import ConfigurationError

DateLike = Union[datetime, date, np.datetime64, pd.Timestamp, str]


class Period(str, Enum):
    """Calendar period used to bucket dates."""

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


_PERIOD_RX = re.compile(r"^\s*(\d+)?\s*([a-zA-Z]+?)s?\s*$")


def parse_period(value: Union[Period, str]) -> Period:
    """
    Convert ``value`` to a :class:`Period`.

    Accepts a ``Period`` or strings such as ``"month"``, ``"Month"``,
    ``"1 month"`` or ``"1months"``. Multiples other than one raise
    :class:`ConfigurationError`, as do unknown units.
    """
    if isinstance(value, Period):
        return value
    match = _PERIOD_RX.match(str(value))
    if match is None:
        raise ConfigurationError(f"Cannot interpret {value!r} as a calendar period")
    count, unit = match.groups()
    if count is not None and int(count) != 1:
        raise ConfigurationError(
            f"Only simple periods are supported (e.g., '1 month'), got {value!r}"
        )
    try:
        return Period(unit.lower())
    except ValueError:
        valid = ", ".join(p.value for p in Period)
        raise ConfigurationError(
            f"Unsupported period {value!r}; expected one of: {valid}"
        ) from None


def to_datetime(value: DateLike) -> datetime:
    """Convert dates, timestamps and ISO strings to a naive :class:`datetime`."""
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return pd.Timestamp(value).to_pydatetime()


def beginning_of_period(value: DateLike, period: Union[Period, str]) -> datetime:
    """
    Return the first instant of the calendar ``period`` containing ``value``.

    Example:
        >>> beginning_of_period(datetime(1993, 11, 19), Period.YEAR)
        datetime.datetime(1993, 1, 1, 0, 0)
        >>> beginning_of_period(datetime(1993, 11, 19), Period.WEEK)
        datetime.datetime(1993, 11, 15, 0, 0)
    """
    period = parse_period(period)
    value = to_datetime(value)
    if period is Period.YEAR:
        return datetime(value.year, 1, 1)
    if period is Period.MONTH:
        return datetime(value.year, value.month, 1)
    midnight = datetime(value.year, value.month, value.day)
    if period is Period.WEEK:
        return midnight - timedelta(days=midnight.weekday())
    return midnight


def next_period_start(value: DateLike, period: Union[Period, str]) -> datetime:
    """Return the first instant of the period following the one containing ``value``."""
    period = parse_period(period)
    start = beginning_of_period(value, period)
    if period is Period.YEAR:
        return datetime(start.year + 1, 1, 1)
    if period is Period.MONTH:
        if start.month == 12:
            return datetime(start.year + 1, 1, 1)
        return datetime(start.year, start.month + 1, 1)
    if period is Period.WEEK:
        return start + timedelta(days=7)
    return start + timedelta(days=1)


def end_of_period(value: DateLike, period: Union[Period, str]) -> datetime:
    """
    Return the last second of the calendar ``period`` containing ``value``.

    Example:
        >>> end_of_period(datetime(1993, 11, 19), Period.MONTH)
        datetime.datetime(1993, 11, 30, 23, 59, 59)
        >>> end_of_period(datetime(1993, 11, 19), Period.WEEK)
        datetime.datetime(1993, 11, 21, 23, 59, 59)
    """
    return next_period_start(value, period) - timedelta(seconds=1)


def bounding_dates(
    dates: Sequence[DateLike],
    target_date: DateLike,
    period: Union[Period, str],
) -> Tuple[datetime, datetime]:
    """
    Return the first and last of ``dates`` that fall in the same ``period`` as ``target_date``.

    For example, with dates 1993-08-13, 1993-08-18, 1993-11-19, 1994-01-01,
    target date 1993-01-01 and period ``YEAR`` the result is
    ``(1993-08-13, 1993-11-19)``; with period ``MONTH`` and target date
    1993-08-01 it is ``(1993-08-13, 1993-08-18)``.

    ``dates`` must be sorted. Raises :class:`ConfigurationError` when fewer
    than two dates fall in the period.
    """
    period_start = beginning_of_period(target_date, period)
    period_end = end_of_period(target_date, period)
    in_period = [d for d in map(to_datetime, dates) if period_start <= d <= period_end]
    if len(in_period) < 2:
        raise ConfigurationError(
            f"Need at least two dates in the {parse_period(period).value} of "
            f"{to_datetime(target_date)}, found {len(in_period)}"
        )
    return in_period[0], in_period[-1]


__all__ = [
    "DateLike",
    "Period",
    "beginning_of_period",
    "bounding_dates",
    "end_of_period",
    "next_period_start",
    "parse_period",
    "to_datetime",
]
