# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
simforcing CLI Argument Parser.

Commands:
    - inspect: Dimensions and available dates of a variable in a NetCDF file
    - evaluate: Evaluate a variable at simulation times on its native grid
    - output-path: Prepare a versioned output directory
"""

import argparse
from typing import List, Optional

from .commands import InputCommands, OutputCommands

try:
    from simforcing.simforcing_version import __version__
except ImportError:
    __version__ = "0+unknown"


class CLIParser:
    """
    Main CLI parser.

    Attributes:
        common_parser: Parent parser with global options (--debug)
        parser: Main argument parser with all subcommands registered
    """

    def __init__(self):
        """Initialize the CLI parser with common options and all subcommands."""
        self.common_parser = self._create_common_parser()
        self.parser = self._create_parser()

    def _create_common_parser(self) -> argparse.ArgumentParser:
        """Create a parent parser with common arguments."""
        # Use SUPPRESS to avoid overwriting global flags with subcommand defaults
        parser = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
        parser.add_argument('--debug', action='store_true',
                          help='Enable debug output')
        return parser

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main parser with global options and subparsers."""
        parser = argparse.ArgumentParser(
            prog='simforcing',
            description='simforcing - time- and space-varying inputs for simulations',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            parents=[self.common_parser],
            epilog="""
Examples:
  simforcing inspect era5.nc t2m
  simforcing evaluate era5.nc t2m --time 0 --time 3600 --config inputs.yaml
  simforcing output-path runs/my_simulation
"""
        )
        parser.add_argument('--version', action='version',
                          version=f'simforcing {__version__}')

        subparsers = parser.add_subparsers(
            dest='command',
            required=True,
            help='Command',
            metavar='<command>'
        )
        self._register_input_commands(subparsers)
        self._register_output_commands(subparsers)
        return parser

    def _register_input_commands(self, subparsers):
        """Register input file commands."""
        inspect_parser = subparsers.add_parser(
            'inspect',
            help='Show dimensions and dates of a variable',
            parents=[self.common_parser]
        )
        inspect_parser.add_argument('file', help='NetCDF file')
        inspect_parser.add_argument('varname', help='Variable to inspect')
        inspect_parser.set_defaults(func=InputCommands.inspect)

        evaluate_parser = subparsers.add_parser(
            'evaluate',
            help='Evaluate a variable at simulation times on its native grid',
            parents=[self.common_parser]
        )
        evaluate_parser.add_argument('file', help='NetCDF file')
        evaluate_parser.add_argument('varname', help='Variable to evaluate')
        evaluate_parser.add_argument('--time', type=float, action='append', required=True,
                                   help='Simulation time in seconds (repeatable)')
        evaluate_parser.add_argument('--config', type=str, default=None,
                                   help='YAML file with the input configuration')
        evaluate_parser.set_defaults(func=InputCommands.evaluate)

    def _register_output_commands(self, subparsers):
        """Register output directory commands."""
        output_parser = subparsers.add_parser(
            'output-path',
            help='Prepare a versioned output directory',
            parents=[self.common_parser]
        )
        output_parser.add_argument('path', help='Base output directory')
        output_parser.add_argument('--remove-preexisting', action='store_true',
                                 dest='remove_preexisting', default=False,
                                 help='Use PATH directly, deleting it if it exists')
        output_parser.set_defaults(func=OutputCommands.output_path)

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        return self.parser.parse_args(args)


__all__ = ['CLIParser']
