# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Process exit codes of the simforcing CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by CLI command handlers."""

    SUCCESS = 0
    ERROR = 1
    USAGE_ERROR = 2  # raised by argparse
    INTERRUPTED = 130


__all__ = ['ExitCode']
