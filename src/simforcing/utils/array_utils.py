# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Search and interpolation helpers over sorted 1D sample arrays.

All functions are pure and operate on numpy arrays (or anything
``numpy.asarray`` accepts). Indices returned are zero-based.
"""

from typing import Optional

import numpy as np


def searchsorted_nearest(a, x) -> int:
    """
    Return the index of the element of sorted ``a`` closest to ``x``.

    Values below the first element map to 0, values above the last element
    map to ``len(a) - 1``. Ties are broken toward the earlier index.

    Example:
        >>> searchsorted_nearest([0.0, 1.0, 2.0], 1.5)
        1
        >>> searchsorted_nearest([0.0, 1.0, 2.0], 1.6)
        2
    """
    a = np.asarray(a)
    i = int(np.searchsorted(a, x, side="left"))
    if i == 0:
        return 0
    if i == len(a):
        return len(a) - 1
    if a[i] == x:
        return i
    return i if abs(a[i] - x) < abs(a[i - 1] - x) else i - 1


def linear_interpolation(indep_vars, dep_vars, indep_value):
    """
    Linearly interpolate ``dep_vars`` (defined on sorted ``indep_vars``) at ``indep_value``.

    Exact hits return the stored sample unchanged. Values outside of the
    range of ``indep_vars`` return the closest endpoint value; boundary
    policies are expected to be applied by the caller beforehand.

    ``dep_vars`` may hold scalars or arrays along its first axis.
    """
    indep_vars = np.asarray(indep_vars)
    n = len(indep_vars)
    idx = int(np.searchsorted(indep_vars, indep_value, side="left"))
    if idx < n and indep_vars[idx] == indep_value:
        return dep_vars[idx]
    if idx == 0:
        return dep_vars[0]
    if idx == n:
        return dep_vars[n - 1]
    x0, x1 = indep_vars[idx - 1], indep_vars[idx]
    y0, y1 = dep_vars[idx - 1], dep_vars[idx]
    return y0 + (y1 - y0) * (indep_value - x0) / (x1 - x0)


def is_uniformly_spaced(values, tol: Optional[float] = None) -> bool:
    """
    Check whether consecutive differences of ``values`` are all equal within ``tol``.

    The default tolerance is ``sqrt(eps)`` for floating point data and exact
    comparison for integer data. Sequences with fewer than two elements are
    considered uniformly spaced.

    Example:
        >>> is_uniformly_spaced([1.0, 2.0, 3.0, 4.0])
        True
        >>> is_uniformly_spaced([1, 2, 4, 8])
        False
    """
    values = np.asarray(values)
    if len(values) < 2:
        return True
    diffs = np.diff(values)
    if tol is None:
        if np.issubdtype(values.dtype, np.floating):
            tol = float(np.sqrt(np.finfo(values.dtype).eps))
        else:
            tol = float(np.finfo(float).eps)
    return bool(np.all(np.abs(diffs - diffs[0]) < tol))


def wrap_time(time, t_init, t_end, *, extend_past_t_end: bool = False, dt=None):
    """
    Wrap ``time`` periodically into ``[t_init, t_end)``.

    With ``extend_past_t_end=True`` the window is ``[t_init, t_end + dt)``,
    i.e. ``t_end + dt`` is identified with ``t_init``. This is the
    convention used by periodic boundary policies, where the sample after
    the last one is the first one.

    Note: the result is subject to floating point rounding, e.g.
    ``wrap_time(1.9, 0.1, 1.0)`` is ``0.9999999999999998`` and not ``0.1``.

    Example:
        >>> wrap_time(13.0, 0.0, 10.0)
        3.0
        >>> wrap_time(12.0, 0.0, 10.0, extend_past_t_end=True, dt=1.0)
        1.0
    """
    if extend_past_t_end:
        if dt is None:
            raise ValueError("dt is required when extend_past_t_end is True")
        t_end = t_end + dt
    period = t_end - t_init
    return t_init + (time - t_init) % period


__all__ = [
    "is_uniformly_spaced",
    "linear_interpolation",
    "searchsorted_nearest",
    "wrap_time",
]
