# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Least-recently-used cache.

The cache is a bounded mapping plus an access-ordered priority list. When an
insertion pushes the cache over ``max_size``, the single least recently used
entry is evicted. Both :meth:`LRUCache.get_or_insert` and
:meth:`LRUCache.lookup` count as accesses.

The cache is not thread-safe. It is meant to be owned by a single object
(e.g. one :class:`~simforcing.data.data_handler.DataHandler`) and accessed
from one thread; callers sharing it across threads must synchronize
externally.
"""

import logging
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Iterator, List, TypeVar

from simforcing.core.exceptions import (
    CacheMissError,
    CapacityInvariantViolation,
    ConfigurationError,
    UnsupportedOperationError,
    require,
)

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class LRUCache(Generic[K, V]):
    """
    Bounded key/value store with least-recently-used eviction.

    Args:
        max_size: Maximum number of entries kept in the cache (at least 1).

    Example:
        >>> cache = LRUCache(max_size=2)
        >>> cache.get_or_insert("a", lambda: 1)
        1
        >>> cache.get_or_insert("a", lambda: 2)  # not recomputed
        1
    """

    def __init__(self, max_size: int = 128):
        require(
            isinstance(max_size, int) and max_size >= 1,
            f"max_size must be a positive integer, got {max_size!r}",
            ConfigurationError,
        )
        self._max_size = max_size
        # Insertion order of the OrderedDict is the priority list:
        # least recently used first, most recently used last.
        self._data: "OrderedDict[K, V]" = OrderedDict()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def priority(self) -> List[K]:
        """Keys ordered from least to most recently used."""
        return list(self._data.keys())

    def get_or_insert(self, key: K, compute_fn: Callable[[], V]) -> V:
        """
        Return the value for ``key``, computing and storing it on a miss.

        ``compute_fn`` is called at most once per miss; if it raises, nothing
        is stored. The key becomes the most recently used one, and if the
        insertion pushed the cache over ``max_size`` the least recently used
        entry is evicted.
        """
        if key in self._data:
            self._data.move_to_end(key)
            logger.debug(f"Cache hit for {key!r}")
            return self._data[key]

        logger.debug(f"Cache miss for {key!r}")
        value = compute_fn()
        self._data[key] = value
        self._enforce_size()
        return value

    def setdefault(self, key: K, default: V) -> V:
        """Like :meth:`get_or_insert`, with an already computed default."""
        return self.get_or_insert(key, lambda: default)

    def lookup(self, key: K, default=_MISSING) -> V:
        """
        Return the value for ``key`` and mark it as most recently used.

        On a miss, return ``default`` if given, otherwise raise
        :class:`CacheMissError`. A miss never inserts anything.
        """
        if key in self._data:
            self._data.move_to_end(key)
            return self._data[key]
        if default is _MISSING:
            raise CacheMissError(key)
        return default

    def __getitem__(self, key: K) -> V:
        return self.lookup(key)

    def __contains__(self, key: object) -> bool:
        # Membership tests do not count as accesses
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def keys(self) -> List[K]:
        return list(self._data.keys())

    def remove(self, key: K) -> None:
        """Remove ``key`` if present; missing keys are ignored."""
        self._data.pop(key, None)

    def pop(self, key: K) -> V:
        """Remove ``key`` and return its value; raise :class:`CacheMissError` if absent."""
        try:
            return self._data.pop(key)
        except KeyError:
            raise CacheMissError(key) from None

    def __delitem__(self, key: K) -> None:
        self.pop(key)

    def clear(self) -> None:
        self._data.clear()

    def merge(self, other: "LRUCache") -> "LRUCache":
        """Merging caches is not supported: keys of different sources would collide."""
        raise UnsupportedOperationError(
            "LRUCache instances cannot be merged; each cache belongs to a single data source"
        )

    __or__ = merge
    __ior__ = merge

    def __repr__(self) -> str:
        return f"LRUCache(size={len(self)}, max_size={self._max_size})"

    def _enforce_size(self) -> None:
        if len(self._data) > self._max_size:
            evicted, _ = self._data.popitem(last=False)
            logger.debug(f"Evicted {evicted!r} from cache (max_size={self._max_size})")
        if len(self._data) > self._max_size:
            raise CapacityInvariantViolation(
                f"Cache holds {len(self._data)} entries, more than max_size={self._max_size}"
            )
