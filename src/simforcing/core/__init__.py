# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Exceptions, registries, mixins and configuration shared across simforcing."""

from .exceptions import (
    CacheMissError,
    CapacityInvariantViolation,
    ConfigurationError,
    ConfigValidationError,
    DomainError,
    ResourceError,
    SimForcingError,
    UnavailableDateError,
    UnsupportedOperationError,
)
from .mixins import LoggingMixin, TimingMixin
from .registry import Registry

__all__ = [
    'CacheMissError',
    'CapacityInvariantViolation',
    'ConfigurationError',
    'ConfigValidationError',
    'DomainError',
    'LoggingMixin',
    'Registry',
    'ResourceError',
    'SimForcingError',
    'TimingMixin',
    'UnavailableDateError',
    'UnsupportedOperationError',
]
