# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Reference-counted registry of open datasets.

Several readers of different variables in the same file share one open
:class:`xarray.Dataset`. Each reader claims ``(path, varname)`` when it is
created and releases the claim when it is closed; the dataset is closed when
its last claim is released.

A registry is meant to be owned by one simulation and passed explicitly to
the readers that should share handles.
"""

from collections import Counter
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

import xarray as xr

from simforcing.core.exceptions import ResourceError, simforcing_error_handler
from simforcing.core.mixins import LoggingMixin

PathLike = Union[str, Path]


class FileHandleRegistry(LoggingMixin):
    """
    Shares open datasets between readers of the same file.

    Args:
        opener: Function opening a path into an :class:`xarray.Dataset`.
            Defaults to :func:`xarray.open_dataset`.
    """

    def __init__(self, opener: Optional[Callable[[str], xr.Dataset]] = None):
        self._opener = opener or xr.open_dataset
        self._handles: Dict[str, Tuple[xr.Dataset, Counter]] = {}

    @staticmethod
    def _key(path: PathLike) -> str:
        return str(Path(path).resolve())

    def acquire(self, path: PathLike, varname: str) -> xr.Dataset:
        """Return the dataset for ``path``, opening it on first use, and claim ``varname``."""
        key = self._key(path)
        if key not in self._handles:
            with simforcing_error_handler(f"opening {path}", self.logger, ResourceError):
                dataset = self._opener(key)
            self.logger.debug(f"Opened {key}")
            self._handles[key] = (dataset, Counter())
        dataset, claims = self._handles[key]
        claims[varname] += 1
        return dataset

    def release(self, path: PathLike, varname: str) -> None:
        """
        Drop one claim on ``(path, varname)``, closing the dataset with the last claim.

        Releasing a path that is not open does nothing.
        """
        key = self._key(path)
        if key not in self._handles:
            return
        dataset, claims = self._handles[key]
        if claims[varname] > 1:
            claims[varname] -= 1
        else:
            claims.pop(varname, None)
        if not claims:
            dataset.close()
            del self._handles[key]
            self.logger.debug(f"Closed {key}")

    def close_all(self) -> None:
        """Close every dataset, regardless of outstanding claims."""
        for key, (dataset, _) in self._handles.items():
            dataset.close()
            self.logger.debug(f"Closed {key}")
        self._handles.clear()

    def is_open(self, path: PathLike) -> bool:
        return self._key(path) in self._handles

    def open_variables(self, path: PathLike) -> List[str]:
        """Variables currently claimed in ``path`` (empty if not open)."""
        entry = self._handles.get(self._key(path))
        return sorted(entry[1]) if entry else []

    def __len__(self) -> int:
        return len(self._handles)


__all__ = ["FileHandleRegistry"]
