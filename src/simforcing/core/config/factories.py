# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Factory functions for building configuration models.

Configuration is layered; from lowest to highest precedence:

1. Defaults of the Pydantic model
2. Config file (YAML, flat UPPER_CASE keys)
3. Environment variables (``SIMFORCING_*``)
4. Programmatic overrides (e.g. from the CLI)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from simforcing.core.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "SIMFORCING_"

M = TypeVar("M", bound=BaseModel)


def from_file_factory(
    cls: Type[M],
    path: Path,
    overrides: Optional[Dict[str, Any]] = None,
    *,
    use_env: bool = True,
) -> M:
    """
    Load a configuration model from a YAML file.

    Args:
        cls: Pydantic model class to build
        path: Path to configuration YAML file
        overrides: Dictionary of programmatic overrides
        use_env: Whether to load environment variables (default: True)

    Returns:
        Validated model instance

    Raises:
        ConfigValidationError: If configuration is invalid
        FileNotFoundError: If config file is missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        file_config = yaml.safe_load(f) or {}
    if not isinstance(file_config, dict):
        raise ConfigValidationError(f"{path} must contain a mapping of settings")

    config_dict = {_normalize_key(k): v for k, v in file_config.items()}

    if use_env:
        env_overrides = _load_env_overrides()
        if env_overrides:
            logger.debug(f"Environment overrides: {sorted(env_overrides)}")
        config_dict.update(env_overrides)

    if overrides:
        config_dict.update({_normalize_key(k): v for k, v in overrides.items()})

    # Filter out None values so Pydantic can use field defaults
    config_dict = {k: v for k, v in config_dict.items() if v is not None}

    try:
        return cls(**config_dict)
    except ValidationError as e:
        raise ConfigValidationError(_format_validation_error(e, path)) from e


def _load_env_overrides() -> Dict[str, Any]:
    """
    Load configuration overrides from environment variables.
    """
    env_overrides = {}
    for env_key, env_value in os.environ.items():
        if env_key.startswith(ENV_PREFIX):
            config_key = env_key[len(ENV_PREFIX):]
            env_overrides[_normalize_key(config_key)] = _coerce_value(env_value)
    return env_overrides


def _normalize_key(key: str) -> str:
    return str(key).strip().upper()


def _coerce_value(value: Any) -> Any:
    """Helper to attempt basic coercion for values."""
    if not isinstance(value, str):
        return value

    stripped = value.strip()
    lower = stripped.lower()

    if lower in ('true', 'yes'):
        return True
    if lower in ('false', 'no'):
        return False
    if lower in ('none', 'null', ''):
        return None

    # Try number
    try:
        if "." in stripped:
            return float(stripped)
        return int(stripped)
    except ValueError:
        pass

    return stripped


def _format_validation_error(error: ValidationError, path: Path) -> str:
    """
    Format Pydantic ValidationError as a readable, one problem per line message.
    """
    error_lines = [f"Configuration validation failed for {path}:"]
    for err in error.errors():
        field_name = ".".join(str(loc) for loc in err['loc']) or 'config'
        error_lines.append(f"  - {field_name}: {err['msg']}")
    return "\n".join(error_lines)


__all__ = ['ENV_PREFIX', 'from_file_factory']
