# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Interpolation methods and the pure functions that apply them.

A method (:class:`NearestNeighbor` or :class:`LinearInterpolation`) carries
its boundary policy. Evaluation is split in two steps so that in-memory and
file-backed inputs share the same logic:

1. :func:`resolve_stencil` maps a query time to the (at most two) samples it
   depends on, plus the blending coefficient, applying the boundary policy.
2. :meth:`Stencil.combine` blends the values of those samples.

:func:`interpolate` chains the two for in-memory arrays.
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Union

import numpy as np

from simforcing.core.exceptions import ConfigurationError, DomainError
from simforcing.interpolation.boundary import BoundaryPolicy, Flat, PeriodicCalendar, Throw
from simforcing.utils.array_utils import searchsorted_nearest, wrap_time


@dataclass(frozen=True)
class NearestNeighbor:
    """Return the value of the sample closest in time (ties go to the earlier one)."""

    extrapolation_bc: BoundaryPolicy = field(default_factory=Throw)


@dataclass(frozen=True)
class LinearInterpolation:
    """Linearly blend the two samples bracketing the query time."""

    extrapolation_bc: BoundaryPolicy = field(default_factory=Throw)


InterpolationMethod = Union[NearestNeighbor, LinearInterpolation]


class Stencil(NamedTuple):
    """
    Samples needed to evaluate an input at one time.

    The result is ``values[i0] + (values[i1] - values[i0]) * coeff``. When
    ``coeff`` is zero only ``values[i0]`` is needed and it is returned as is.
    """

    i0: int
    i1: int
    coeff: float

    @property
    def is_exact(self) -> bool:
        return self.coeff == 0.0

    def combine(self, values):
        if self.is_exact:
            return values[self.i0]
        v0 = values[self.i0]
        return v0 + (values[self.i1] - v0) * self.coeff


def _single(index: int) -> Stencil:
    return Stencil(index, index, 0.0)


def _bracket(times: np.ndarray, time: float, method: InterpolationMethod) -> Stencil:
    if isinstance(method, NearestNeighbor):
        return _single(searchsorted_nearest(times, time))
    idx = int(np.searchsorted(times, time, side="left"))
    if idx < len(times) and times[idx] == time:
        return _single(idx)
    if idx == 0:
        return _single(0)
    if idx == len(times):
        return _single(len(times) - 1)
    t0, t1 = times[idx - 1], times[idx]
    return Stencil(idx - 1, idx, float((time - t0) / (t1 - t0)))


def in_range(times, time) -> bool:
    """Whether ``time`` is within ``[times[0], times[-1]]``."""
    return bool(times[0] <= time <= times[-1])


def resolve_stencil(
    times,
    time: float,
    method: InterpolationMethod,
    *,
    dt: Optional[float] = None,
) -> Stencil:
    """
    Find the samples of ``times`` needed to evaluate at ``time`` with ``method``.

    Args:
        times: Sorted sample times.
        time: Query time.
        method: Interpolation method, with its boundary policy.
        dt: Width of the periodic seam between the last and the first sample.
            Only used with :class:`PeriodicCalendar`; defaults to the spacing of
            the first two samples.

    Raises:
        DomainError: ``time`` is outside of the range under :class:`Throw`.
    """
    times = np.asarray(times, dtype=float)
    n = len(times)
    t_init, t_end = times[0], times[-1]
    bc = method.extrapolation_bc

    if isinstance(bc, Throw):
        if not t_init <= time <= t_end:
            raise DomainError(
                f"Time {time} is outside of the range of the data [{t_init}, {t_end}]"
            )
    elif isinstance(bc, Flat):
        if time >= t_end:
            return _single(n - 1)
        if time <= t_init:
            return _single(0)
    elif isinstance(bc, PeriodicCalendar):
        if dt is None:
            if n < 2:
                raise ConfigurationError("PeriodicCalendar needs at least two samples")
            dt = float(times[1] - times[0])
        time = wrap_time(time, t_init, t_end, extend_past_t_end=True, dt=dt)
        if time > t_end:
            offset = time - t_end
            if isinstance(method, NearestNeighbor):
                return _single(n - 1 if offset < 0.5 * dt else 0)
            return Stencil(n - 1, 0, float(offset / dt))
    else:
        raise TypeError(f"Unknown boundary policy {bc!r}")

    return _bracket(times, time, method)


def interpolate(times, values, time: float, method: InterpolationMethod):
    """
    Evaluate the series ``(times, values)`` at ``time`` with ``method``.

    ``values`` may hold scalars or arrays along its first axis. Periodic
    policies with an explicit calendar period need dates and are rejected
    with :class:`ConfigurationError`.

    Example:
        >>> interpolate([0.0, 1.0, 2.0], [0.0, 10.0, 20.0], 1.5, LinearInterpolation())
        15.0
    """
    bc = method.extrapolation_bc
    if isinstance(bc, PeriodicCalendar) and bc.is_calendar_anchored:
        raise ConfigurationError(
            "PeriodicCalendar with an explicit period requires dates and "
            "is only supported for gridded data"
        )
    return resolve_stencil(times, time, method).combine(values)


__all__ = [
    "InterpolationMethod",
    "LinearInterpolation",
    "NearestNeighbor",
    "Stencil",
    "in_range",
    "interpolate",
    "resolve_stencil",
]
