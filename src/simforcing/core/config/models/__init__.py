# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Pydantic configuration models."""

from .base import FROZEN_CONFIG
from .inputs import InputConfig

__all__ = ['FROZEN_CONFIG', 'InputConfig']
