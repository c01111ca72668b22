# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Configuration of simforcing: Pydantic models and the YAML/environment loader.
"""

from .factories import ENV_PREFIX, from_file_factory
from .models import FROZEN_CONFIG, InputConfig

__all__ = ['ENV_PREFIX', 'FROZEN_CONFIG', 'InputConfig', 'from_file_factory']
