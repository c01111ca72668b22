# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
simforcing Command-Line Interface entry point.

Provides the main() function called by the ``simforcing`` console script:
it parses the arguments, configures logging, dispatches to the command
handler and turns errors into exit codes.
"""

import logging
import sys
from typing import List, Optional

from simforcing.core.exceptions import SimForcingError

from .argument_parser import CLIParser
from .exit_codes import ExitCode

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s'

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the simforcing CLI.

    Returns 0 on success and 1 when the command fails. Usage errors exit
    with status 2 through argparse.
    """
    parser = CLIParser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, 'debug', False) else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        return int(args.func(args))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return ExitCode.INTERRUPTED
    except (SimForcingError, FileNotFoundError) as e:
        logger.error(f"Error: {e}")
        return ExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
