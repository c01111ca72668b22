# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Caching utilities for simforcing.

This module provides the bounded least-recently-used cache used to avoid
re-reading and re-regridding snapshots of external datasets.
"""

from .lru_cache import LRUCache

__all__ = ["LRUCache"]
