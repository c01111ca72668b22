# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Inputs evaluated by a simulation: time-varying and static (space-varying)."""

from .space_varying import column_input, space_varying_input
from .time_varying import (
    AnalyticTimeVaryingInput,
    InterpolatingTimeVaryingInput0D,
    InterpolatingTimeVaryingInput23D,
    TimeVaryingInput,
    evaluate,
    time_varying_input,
)

__all__ = [
    "AnalyticTimeVaryingInput",
    "InterpolatingTimeVaryingInput0D",
    "InterpolatingTimeVaryingInput23D",
    "TimeVaryingInput",
    "column_input",
    "evaluate",
    "space_varying_input",
    "time_varying_input",
]
