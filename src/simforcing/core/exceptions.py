# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Custom exception hierarchy for simforcing.

This module defines a hierarchy of exceptions that provide clear, specific
error types for the failure modes of input evaluation: misconfiguration
caught at construction time, queries outside the domain of the data, and
failures of the external data sources.
"""

import logging
from contextlib import contextmanager
from typing import Optional


class SimForcingError(Exception):
    """
    Base exception for all simforcing-specific errors.

    All custom exceptions in simforcing should inherit from this class.
    This allows catching all simforcing errors with a single except clause.
    """
    pass


class ConfigurationError(SimForcingError):
    """
    Configuration-related errors.

    Raised when:
    - A boundary policy is incompatible with the kind of input
      (e.g. an explicit calendar period on in-memory 0D data)
    - PeriodicCalendar is requested on non uniformly spaced data
    - Fewer than two dates fall within a requested calendar period
    - Times/values passed to an input are unsorted or mismatched
    - An unknown regridder type is requested
    """
    pass


class ConfigValidationError(ConfigurationError):
    """
    Configuration file validation failures.

    Raised when:
    - A configuration file fails schema validation
    - Cross-field validation constraints are violated
    """
    pass


class DomainError(SimForcingError):
    """
    Query outside of the domain where the data is defined.

    Raised when:
    - An input with the Throw boundary policy is evaluated outside its range
    - A static snapshot is requested from temporal data (or vice versa)
    - Regridding targets fall outside a non-extrapolating dimension
    """
    pass


class UnavailableDateError(DomainError):
    """
    Lookup of a date or time that is not available in the data.

    Raised when:
    - A snapshot is requested for a date that is not in the data source
    - There is no available sample before/after the given time
    """
    pass


class ResourceError(SimForcingError):
    """
    External data source failures.

    Raised when:
    - A file cannot be opened or parsed
    - The requested variable or its dimensions are missing
    - The time axis of a file is not sorted
    """
    pass


class CacheMissError(SimForcingError, KeyError):
    """
    Read of a key that is not in a cache, without a default.
    """
    pass


class UnsupportedOperationError(SimForcingError):
    """
    Operation that is deliberately not supported (e.g. merging caches).
    """
    pass


class CapacityInvariantViolation(SimForcingError):
    """
    Internal consistency failure of a bounded container.

    This should be unreachable. Seeing it means there is a bug.
    """
    pass


# =============================================================================
# Validation Helpers
# =============================================================================

def require(condition: bool, message: str, error_type: type = None) -> None:
    """
    Validate a condition, raising an exception if it fails.

    This replaces assert statements with proper validation that cannot be
    disabled with python -O.

    Args:
        condition: The condition that must be True
        message: Error message if condition is False
        error_type: Exception type to raise (default: ConfigurationError)

    Raises:
        ConfigurationError (or specified error_type) if condition is False

    Example:
        >>> require(len(times) == len(values), "times and values differ in length")
        >>> require(date is not None, "a date is required", DomainError)
    """
    if error_type is None:
        error_type = ConfigurationError
    if not condition:
        raise error_type(message)


@contextmanager
def simforcing_error_handler(
    operation: str,
    logger: Optional[logging.Logger] = None,
    error_type: type = SimForcingError
):
    """
    Context manager for standardized error handling.

    Exceptions that are already simforcing errors pass through untouched;
    anything else is converted to ``error_type`` and chained to the original.

    Args:
        operation: Description of the operation being performed (for logging)
        logger: Logger instance for error messages. If None, errors are not logged.
        error_type: simforcing exception type to convert generic exceptions to

    Example:
        >>> with simforcing_error_handler("opening era5.nc", logger, error_type=ResourceError):
        ...     dataset = xr.open_dataset("era5.nc")
    """
    try:
        yield
    except SimForcingError:
        if logger:
            logger.error(f"Error during {operation}", exc_info=True)
        raise
    except Exception as e:
        if logger:
            logger.error(f"Error during {operation}: {e}", exc_info=True)
        raise error_type(f"Failed during {operation}: {e}") from e


# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Base
    'SimForcingError',
    # Domain exceptions
    'ConfigurationError',
    'ConfigValidationError',
    'DomainError',
    'UnavailableDateError',
    'ResourceError',
    'CacheMissError',
    'UnsupportedOperationError',
    'CapacityInvariantViolation',
    # Helpers
    'require',
    'simforcing_error_handler',
]
