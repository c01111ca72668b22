# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Command handlers for the simforcing CLI.

Each handler receives the parsed arguments and returns an exit code.
Errors are raised and turned into exit codes by :func:`simforcing.cli.main.main`.
"""

import logging
from argparse import Namespace

import numpy as np

from simforcing.core.config import InputConfig
from simforcing.data.readers import NetCDFFileReader
from simforcing.data.regridders import TargetSpace
from simforcing.inputs import evaluate, time_varying_input
from simforcing.utils.output_paths import (
    ActiveLinkStyle,
    RemovePreexistingStyle,
    generate_output_path,
)

from .exit_codes import ExitCode

logger = logging.getLogger(__name__)


class InputCommands:
    """Handlers for inspecting and evaluating input files."""

    @staticmethod
    def inspect(args: Namespace) -> int:
        """Print the dimensions and available dates of a variable."""
        with NetCDFFileReader(args.file, args.varname) as reader:
            print(f"{args.varname} in {args.file}")
            for name, values in zip(reader.dimension_names, reader.dimensions):
                print(f"  {name}: {len(values)} values in [{values.min()}, {values.max()}]")
            dates = reader.available_dates
            if dates:
                print(f"  {len(dates)} dates from {dates[0]} to {dates[-1]}")
            else:
                print("  static (no time dimension)")
        return ExitCode.SUCCESS

    @staticmethod
    def evaluate(args: Namespace) -> int:
        """Evaluate a variable on its native grid and print summary statistics."""
        config = InputConfig.from_file(args.config) if args.config else InputConfig()
        with NetCDFFileReader(args.file, args.varname) as reader:
            target_space = TargetSpace.from_axes(
                **dict(zip(reader.dimension_names, reader.dimensions))
            )
        logger.debug(f"Evaluating on {target_space} with {config.build_method()}")

        with time_varying_input(
            args.file,
            args.varname,
            target_space,
            method=config.build_method(),
            **config.handler_kwargs(),
        ) as tvi:
            dest = target_space.zeros()
            for time in args.time:
                evaluate(dest, tvi, time)
                print(
                    f"t={time:g}: min={np.nanmin(dest):.6g} "
                    f"mean={np.nanmean(dest):.6g} max={np.nanmax(dest):.6g}"
                )
        return ExitCode.SUCCESS


class OutputCommands:
    """Handlers for output directory bookkeeping."""

    @staticmethod
    def output_path(args: Namespace) -> int:
        """Prepare the output directory and print where to write."""
        style = RemovePreexistingStyle() if args.remove_preexisting else ActiveLinkStyle()
        print(generate_output_path(args.path, style))
        return ExitCode.SUCCESS


__all__ = ['InputCommands', 'OutputCommands']
