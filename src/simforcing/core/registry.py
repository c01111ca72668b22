# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Name to class mapping used for configuration selectors.

``Registry[T]`` maps selectors such as ``regridder_type`` to implementation
classes. Names are case insensitive, can have aliases (e.g.
``"interpolations"`` for ``"linear"``) and carry keyword arguments that are
passed on when the class is instantiated.
"""

import warnings
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

T = TypeVar("T")


class Registry(Generic[T]):
    """
    Case insensitive registry of simforcing components.

    Args:
        name: Name used in error messages.
        normalize: Function applied to every name (``str.lower`` by default).
        protocol: Classes missing one of the public methods of this class
            trigger a warning when they are registered.
    """

    def __init__(
        self,
        name: str,
        *,
        normalize: Callable[[str], str] = str.lower,
        protocol: Optional[Type] = None,
    ) -> None:
        self.name = name
        self._normalize = normalize
        self._protocol = protocol
        self._entries: Dict[str, T] = {}
        self._meta: Dict[str, Dict[str, Any]] = {}
        self._aliases: Dict[str, str] = {}

    def add(self, key: str, value: T, **meta: Any) -> T:
        """Register ``value`` under ``key``; ``meta`` is returned by :meth:`meta`."""
        nkey = self._normalize(key)
        self._check_protocol(nkey, value)
        self._entries[nkey] = value
        self._meta[nkey] = dict(meta)
        return value

    def alias(self, alias_key: str, canonical_key: str) -> None:
        self._aliases[self._normalize(alias_key)] = self._normalize(canonical_key)

    def _lookup_key(self, key: str) -> str:
        nkey = self._normalize(key)
        return self._aliases.get(nkey, nkey)

    def __contains__(self, key: str) -> bool:
        return self._lookup_key(key) in self._entries

    def __getitem__(self, key: str) -> T:
        try:
            return self._entries[self._lookup_key(key)]
        except KeyError:
            raise KeyError(
                f"{self.name}: unknown key {key!r}, available: {self.keys()}"
            ) from None

    def meta(self, key: str) -> Dict[str, Any]:
        """Keyword arguments registered with ``key`` (empty if none)."""
        return dict(self._meta.get(self._lookup_key(key), {}))

    def keys(self) -> List[str]:
        """Sorted registered names, aliases excluded."""
        return sorted(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<Registry {self.name!r} ({len(self)} entries)>"

    def _check_protocol(self, nkey: str, value: Any) -> None:
        if self._protocol is None or not isinstance(value, type):
            return
        required = [
            attr for attr, member in vars(self._protocol).items()
            if not attr.startswith("_") and callable(member)
        ]
        missing = sorted(attr for attr in required if not hasattr(value, attr))
        if missing:
            warnings.warn(
                f"{self.name}: {value.__name__} registered as {nkey!r} "
                f"does not implement {missing}",
                stacklevel=3,
            )
