# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Preparation of the output directory of a simulation.

Two styles are available:

- :class:`ActiveLinkStyle` (default, non-destructive): every run writes to a
  new ``output_path/output_NNNN`` folder and ``output_path/output_active`` is
  a symbolic link to the latest one.
- :class:`RemovePreexistingStyle`: ``output_path`` is used directly and
  removed first if it exists. No confirmation is asked.
"""

import logging
import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from simforcing.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ACTIVE_LINK_NAME = "output_active"
OUTPUT_FOLDER_RX = re.compile(r"output_(\d{4})")


@dataclass(frozen=True)
class RemovePreexistingStyle:
    """Use ``output_path`` directly, removing it first if it exists."""


@dataclass(frozen=True)
class ActiveLinkStyle:
    """Create a new numbered folder and point ``output_active`` at it."""


OutputPathStyle = Union[RemovePreexistingStyle, ActiveLinkStyle]


def generate_output_path(
    output_path: Union[str, Path],
    style: Optional[OutputPathStyle] = None,
) -> Path:
    """
    Prepare the output directory and return the path where output should be written.

    With :class:`ActiveLinkStyle`, ``output_path`` is created if needed and the
    returned path is the ``output_path/output_active`` link. The next folder
    number is one past the folder the link points to; without link, one past
    the highest existing ``output_NNNN`` folder; otherwise 0.

    Example:
        Assume ``output_path = dormouse`` and that ``dormouse/output_active``
        points to ``output_0005``. A new ``dormouse/output_0006`` folder is
        created, the link is moved to it, and ``dormouse/output_active`` is
        returned.

    Raises:
        ConfigurationError: the active link points to a folder with a name
            that is not ``output_NNNN``.
    """
    style = style if style is not None else ActiveLinkStyle()
    output_path = Path(output_path)
    if isinstance(style, RemovePreexistingStyle):
        return _remove_preexisting(output_path)
    if isinstance(style, ActiveLinkStyle):
        return _active_link(output_path)
    raise TypeError(f"Unknown output path style {style!r}")


def _remove_preexisting(output_path: Path) -> Path:
    if output_path.is_dir():
        logger.warning(f"Removing {output_path}")
        shutil.rmtree(output_path)
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


def _active_link(output_path: Path) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    active_link = output_path / ACTIVE_LINK_NAME

    if active_link.is_symlink():
        target = Path(os.readlink(active_link))
        match = OUTPUT_FOLDER_RX.fullmatch(target.name)
        if match is None:
            raise ConfigurationError(
                f"Link {active_link} points to {target}, a folder with a name we do not handle"
            )
        next_counter = int(match.group(1)) + 1
        active_link.unlink()
    else:
        counters = [
            int(m.group(1))
            for m in (OUTPUT_FOLDER_RX.fullmatch(p.name) for p in output_path.iterdir())
            if m is not None
        ]
        next_counter = max(counters) + 1 if counters else 0

    folder_name = f"output_{next_counter:04d}"
    (output_path / folder_name).mkdir(parents=True, exist_ok=True)
    active_link.symlink_to(folder_name, target_is_directory=True)
    logger.debug(f"{active_link} now points to {folder_name}")
    return active_link


__all__ = [
    "ACTIVE_LINK_NAME",
    "ActiveLinkStyle",
    "OutputPathStyle",
    "RemovePreexistingStyle",
    "generate_output_path",
]
