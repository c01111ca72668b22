# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Boundary policies: what to do when a query falls outside the sampled range.

- :class:`Throw`: querying outside ``[t_min, t_max]`` raises ``DomainError``.
- :class:`Flat`: clamp to the value at the closest boundary.
- :class:`PeriodicCalendar`: repeat the data. ``t_max + dt`` is identified
  with ``t_min`` (not ``t_max`` with ``t_min``), so that one full cycle of
  ``n`` samples spans ``n * dt``.

``PeriodicCalendar`` has two modes. Without arguments the cycle is the whole
dataset, which must then be uniformly spaced in time. With a calendar
``period`` and a ``repeat_date``, only the data within that calendar period is
repeated (e.g. ``PeriodicCalendar("month", datetime(1993, 11, 1))`` repeats
November 1993). The second mode needs calendar dates, so it is only
available for gridded, file-backed data.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from simforcing.core.exceptions import ConfigurationError
from simforcing.utils.calendar import DateLike, Period, parse_period, to_datetime


@dataclass(frozen=True)
class Throw:
    """Raise an error when interpolating outside of range."""


@dataclass(frozen=True)
class Flat:
    """
    Use the boundary value when interpolating outside of range.

    With data from ``t0 = 0`` to ``t1 = 10``, evaluating at ``t = 13`` returns
    the value at ``t1``, and evaluating at ``t = -3`` returns the value at ``t0``.
    """


@dataclass(frozen=True, init=False)
class PeriodicCalendar:
    """
    Repeat data periodically.

    Args:
        period: Calendar period that is repeated ("year", "month", "week",
            "day" or a :class:`Period`). Only simple periods are supported.
        repeat_date: Any date within the period to repeat. Required when
            ``period`` is given, and only allowed together with it.
    """

    period: Optional[Period]
    repeat_date: Optional[datetime]

    def __init__(
        self,
        period: Optional[Union[Period, str]] = None,
        repeat_date: Optional[DateLike] = None,
    ):
        if (period is None) != (repeat_date is None):
            raise ConfigurationError(
                "PeriodicCalendar needs both a period and a repeat_date, or neither"
            )
        object.__setattr__(self, "period", None if period is None else parse_period(period))
        object.__setattr__(
            self, "repeat_date", None if repeat_date is None else to_datetime(repeat_date)
        )

    @property
    def is_calendar_anchored(self) -> bool:
        """Whether an explicit calendar period (and repeat date) was given."""
        return self.period is not None


BoundaryPolicy = Union[Throw, Flat, PeriodicCalendar]

__all__ = ["BoundaryPolicy", "Flat", "PeriodicCalendar", "Throw"]
