# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Structural contract for spatial regridders."""

from typing import Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class Regridder(Protocol):
    """Maps raw data defined on ``dimensions`` to a fixed target space.

    Implementations are bound to their target space at construction and must
    be deterministic for identical inputs.
    """

    def regrid(self, data: np.ndarray, dimensions: Sequence[np.ndarray]) -> np.ndarray: ...


__all__ = ["Regridder"]
