# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Command-line interface of simforcing."""

from .argument_parser import CLIParser
from .exit_codes import ExitCode

__all__ = ['CLIParser', 'ExitCode']
