# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Time-varying inputs: values that a simulation needs at arbitrary times.

Three kinds of inputs share one evaluation contract,
``evaluate(dest, input, time, *args, **kwargs)``, which writes the value at
``time`` into the preallocated array ``dest``:

- :class:`AnalyticTimeVaryingInput` calls a function of time (extra
  arguments are forwarded to it);
- :class:`InterpolatingTimeVaryingInput0D` interpolates a scalar series held
  in memory;
- :class:`InterpolatingTimeVaryingInput23D` interpolates regridded snapshots
  of a gridded dataset, provided by a :class:`DataHandler`.

Use :func:`time_varying_input` to build the right one.

Example:
    >>> import numpy as np
    >>> tvi = time_varying_input([0.0, 10.0], [1.0, 3.0])
    >>> float(evaluate(np.zeros(()), tvi, 5.0))
    2.0
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

import numpy as np

from simforcing.core.exceptions import ConfigurationError, DomainError
from simforcing.core.mixins import LoggingMixin
from simforcing.data.data_handler import DataHandler
from simforcing.interpolation import (
    Flat,
    InterpolationMethod,
    LinearInterpolation,
    NearestNeighbor,
    PeriodicCalendar,
    Throw,
    in_range,
    interpolate,
)
from simforcing.utils.array_utils import is_uniformly_spaced, wrap_time
from simforcing.utils.calendar import (
    beginning_of_period,
    bounding_dates,
    end_of_period,
    next_period_start,
)

logger = logging.getLogger(__name__)


class TimeVaryingInput(ABC, LoggingMixin):
    """Base class of the inputs that can be evaluated at a simulation time."""

    @abstractmethod
    def evaluate(self, dest: np.ndarray, time: float, *args, **kwargs) -> np.ndarray:
        """Write the value at ``time`` into ``dest`` and return ``dest``."""

    def __contains__(self, time) -> bool:
        return True

    def close(self) -> None:
        """Release the resources held by the input."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AnalyticTimeVaryingInput(TimeVaryingInput):
    """
    Input given by a function ``func(time, *args, **kwargs)``.

    The function should be fast and avoid large allocations, as it is called
    at every evaluation.
    """

    def __init__(self, func: Callable):
        self.func = func

    def evaluate(self, dest, time, *args, **kwargs):
        dest[...] = self.func(time, *args, **kwargs)
        return dest

    def __repr__(self) -> str:
        return f"AnalyticTimeVaryingInput({self.func!r})"


class InterpolatingTimeVaryingInput0D(TimeVaryingInput):
    """
    Input interpolated from a series of ``(times, values)`` held in memory.

    Raises:
        ConfigurationError: ``times`` are not strictly increasing, the lengths
            differ, there are no samples, or the boundary policy cannot be
            used with this data.
    """

    def __init__(self, times, vals, method: Optional[InterpolationMethod] = None):
        self.times = np.asarray(times, dtype=float)
        self.vals = np.asarray(vals)
        self.method = method if method is not None else LinearInterpolation()
        self._validate()
        self.range: Tuple[float, float] = (float(self.times[0]), float(self.times[-1]))

    def _validate(self) -> None:
        if self.times.ndim != 1 or len(self.times) == 0:
            raise ConfigurationError("times must be a non empty 1D sequence")
        if len(self.times) != len(self.vals):
            raise ConfigurationError(
                f"times and vals have different lengths ({len(self.times)} and {len(self.vals)})"
            )
        if np.any(np.diff(self.times) <= 0):
            raise ConfigurationError("Can only interpolate with sorted times")
        bc = self.method.extrapolation_bc
        if isinstance(bc, PeriodicCalendar):
            if bc.is_calendar_anchored:
                raise ConfigurationError(
                    "PeriodicCalendar with an explicit period is not supported for 0D "
                    "inputs because they are not associated to dates"
                )
            if len(self.times) < 2:
                raise ConfigurationError("PeriodicCalendar requires at least two samples")
            if not is_uniformly_spaced(self.times):
                raise ConfigurationError(
                    "PeriodicCalendar() boundary condition cannot be used because data "
                    "is defined at non uniform intervals of time"
                )

    def __contains__(self, time) -> bool:
        return in_range(self.times, time)

    def evaluate(self, dest, time, *args, **kwargs):
        dest[...] = interpolate(self.times, self.vals, time, self.method)
        return dest

    def __repr__(self) -> str:
        return f"InterpolatingTimeVaryingInput0D({len(self.times)} samples, {self.method})"


class InterpolatingTimeVaryingInput23D(TimeVaryingInput):
    """
    Input interpolated from the regridded snapshots of a :class:`DataHandler`.

    The input owns the handler and closes it in :meth:`close`. Two buffers
    with the shape of the destination are allocated on first use and reused
    to hold the snapshots that are blended.

    With ``PeriodicCalendar(period, repeat_date)`` only the snapshots in the
    calendar period containing ``repeat_date`` are used: every query time is
    moved to the same offset within that period (clamped to its end) and
    interpolated there, wrapping from the last snapshot of the period to the
    first one across the seam.

    Raises:
        ConfigurationError: the handler has no temporal data, or the boundary
            policy cannot be used with its dates.
    """

    def __init__(self, data_handler: DataHandler, method: Optional[InterpolationMethod] = None):
        self.data_handler = data_handler
        self.method = method if method is not None else LinearInterpolation()
        self._buffers: Optional[Tuple[np.ndarray, np.ndarray]] = None

        times = data_handler.available_times
        if len(times) == 0:
            raise ConfigurationError("DataHandler does not contain temporal data")
        self.range: Tuple[float, float] = (float(times[0]), float(times[-1]))
        dates = data_handler.available_dates
        self._date_range: Tuple[datetime, datetime] = (dates[0], dates[-1])

        bc = self.method.extrapolation_bc
        self._dt: Optional[float] = None
        self._cycle: Optional[Tuple[datetime, datetime, datetime, datetime]] = None
        if isinstance(bc, PeriodicCalendar):
            if bc.is_calendar_anchored:
                date_min, date_max = bounding_dates(dates, bc.repeat_date, bc.period)
                self._cycle = (
                    beginning_of_period(bc.repeat_date, bc.period),
                    end_of_period(bc.repeat_date, bc.period),
                    date_min,
                    date_max,
                )
                self.logger.debug(
                    f"Repeating the {bc.period.value} of {bc.repeat_date:%Y-%m-%d}: "
                    f"snapshots from {date_min} to {date_max}"
                )
            else:
                if not is_uniformly_spaced(times):
                    raise ConfigurationError(
                        "PeriodicCalendar() boundary condition cannot be used because "
                        "data is defined at non uniform intervals of time"
                    )
                self._dt = data_handler.dt()

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path],
        varname: str,
        target_space,
        *,
        method: Optional[InterpolationMethod] = None,
        **handler_kwargs,
    ) -> "InterpolatingTimeVaryingInput23D":
        """Build the input and its :class:`DataHandler` from a NetCDF file."""
        data_handler = DataHandler.from_file(file_path, varname, target_space, **handler_kwargs)
        try:
            return cls(data_handler, method)
        except Exception:
            data_handler.close()
            raise

    def __contains__(self, time) -> bool:
        return self.range[0] <= time <= self.range[1]

    def evaluate(self, dest, time, *args, **kwargs):
        date0, date1, coeff = self._bracket(time)
        if coeff == 0.0 or date0 == date1:
            return self.data_handler.regridded_snapshot_into(dest, date0)
        field0, field1 = self._preallocated(dest)
        self.data_handler.regridded_snapshot_into(field0, date0)
        self.data_handler.regridded_snapshot_into(field1, date1)
        dest[...] = (1 - coeff) * field0 + coeff * field1
        return dest

    def _preallocated(self, dest) -> Tuple[np.ndarray, np.ndarray]:
        if self._buffers is None or self._buffers[0].shape != dest.shape:
            self._buffers = (np.zeros(dest.shape), np.zeros(dest.shape))
        return self._buffers

    def _bracket(self, time: float) -> Tuple[datetime, datetime, float]:
        """Dates of the snapshots to blend at ``time`` and the weight of the second one."""
        handler = self.data_handler
        bc = self.method.extrapolation_bc
        t_init, t_end = self.range
        first_date, last_date = self._date_range

        if isinstance(bc, Throw):
            if time not in self:
                raise DomainError(f"TimeVaryingInput does not cover time {time}")
        elif isinstance(bc, Flat):
            if time >= t_end:
                return last_date, last_date, 0.0
            if time <= t_init:
                return first_date, first_date, 0.0
        elif isinstance(bc, PeriodicCalendar):
            if self._cycle is not None:
                return self._bracket_in_repeat_period(handler.time_to_date(time))
            time = wrap_time(time, t_init, t_end, extend_past_t_end=True, dt=self._dt)
            if time > t_end:
                return self._seam(last_date, first_date, (time - t_end) / self._dt)
        else:
            raise TypeError(f"Unknown boundary policy {bc!r}")

        return self._bracket_date(handler.time_to_date(time))

    def _bracket_date(self, date: datetime) -> Tuple[datetime, datetime, float]:
        handler = self.data_handler
        date0 = handler.previous_date(date)
        if date0 == date:
            return date0, date0, 0.0
        date1 = handler.next_date(date)
        if isinstance(self.method, NearestNeighbor):
            # Ties go to the earlier snapshot
            closest = date0 if (date - date0) <= (date1 - date) else date1
            return closest, closest, 0.0
        return date0, date1, (date - date0) / (date1 - date0)

    def _seam(self, date_last: datetime, date_first: datetime, coeff: float):
        if isinstance(self.method, NearestNeighbor):
            closest = date_last if coeff < 0.5 else date_first
            return closest, closest, 0.0
        return date_last, date_first, float(coeff)

    def _bracket_in_repeat_period(self, date: datetime) -> Tuple[datetime, datetime, float]:
        period = self.method.extrapolation_bc.period
        period_start, period_end, date_min, date_max = self._cycle
        offset = date - beginning_of_period(date, period)
        mapped = min(period_start + offset, period_end)

        seam_after = next_period_start(period_start, period) - date_max
        seam = seam_after + (date_min - period_start)
        if mapped > date_max:
            return self._seam(date_max, date_min, (mapped - date_max) / seam)
        if mapped < date_min:
            return self._seam(date_max, date_min, (seam_after + (mapped - period_start)) / seam)
        return self._bracket_date(mapped)

    def close(self) -> None:
        self.data_handler.close()

    def __repr__(self) -> str:
        return f"InterpolatingTimeVaryingInput23D({self.data_handler!r}, {self.method})"


def time_varying_input(*args, method: Optional[InterpolationMethod] = None, **kwargs) -> TimeVaryingInput:
    """
    Build a time-varying input from a function, a series or gridded data.

    - ``time_varying_input(func)``: analytic input.
    - ``time_varying_input(times, vals, method=...)``: in-memory series.
    - ``time_varying_input(data_handler, method=...)``: gridded input.
    - ``time_varying_input(file_path, varname, target_space, method=..., **kwargs)``:
      gridded input read from a NetCDF file; ``kwargs`` go to
      :meth:`DataHandler.from_file` (``reference_date``, ``t_start``,
      ``regridder_type``, ...).

    The default method is ``LinearInterpolation(Throw())``.

    Raises:
        TypeError: the arguments do not match any kind of input.
    """
    if len(args) == 1 and isinstance(args[0], DataHandler):
        _reject_kwargs(kwargs)
        return InterpolatingTimeVaryingInput23D(args[0], method)
    if len(args) == 1 and callable(args[0]):
        if method is not None:
            logger.warning("Interpolation method is ignored for analytical functions")
        return AnalyticTimeVaryingInput(args[0])
    if len(args) == 2:
        _reject_kwargs(kwargs)
        return InterpolatingTimeVaryingInput0D(args[0], args[1], method)
    if len(args) == 3 and isinstance(args[0], (str, Path)):
        return InterpolatingTimeVaryingInput23D.from_file(*args, method=method, **kwargs)
    raise TypeError(
        "time_varying_input expects a function, (times, vals), a DataHandler, "
        "or (file_path, varname, target_space)"
    )


def _reject_kwargs(kwargs) -> None:
    if kwargs:
        raise TypeError(f"Unexpected keyword arguments: {sorted(kwargs)}")


def evaluate(dest: np.ndarray, input: TimeVaryingInput, time: float, *args, **kwargs) -> np.ndarray:
    """Write the value of ``input`` at ``time`` into ``dest`` and return ``dest``."""
    return input.evaluate(dest, time, *args, **kwargs)


__all__ = [
    "AnalyticTimeVaryingInput",
    "InterpolatingTimeVaryingInput0D",
    "InterpolatingTimeVaryingInput23D",
    "TimeVaryingInput",
    "evaluate",
    "time_varying_input",
]
