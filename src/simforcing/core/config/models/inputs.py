# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Input configuration model.

Contains InputConfig, the simulation-level settings of time-varying inputs:
calendar anchoring of simulation time, regridding, caching, and the
interpolation method with its boundary policy.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from simforcing.interpolation import (
    Flat,
    InterpolationMethod,
    LinearInterpolation,
    NearestNeighbor,
    PeriodicCalendar,
    Throw,
)

from .base import FROZEN_CONFIG


class InputConfig(BaseModel):
    """Settings of time-varying inputs"""
    model_config = FROZEN_CONFIG

    # Simulation time t corresponds to REFERENCE_DATE + T_START + t
    reference_date: datetime = Field(default=datetime(1979, 1, 1), alias='REFERENCE_DATE')
    t_start: float = Field(default=0.0, alias='T_START')

    regridder_type: str = Field(default='linear', alias='REGRIDDER_TYPE')
    cache_max_size: int = Field(default=128, ge=1, alias='CACHE_MAX_SIZE')

    interpolation_method: Literal['linear', 'nearest'] = Field(
        default='linear', alias='INTERPOLATION_METHOD'
    )
    extrapolation_bc: Literal['throw', 'flat', 'periodic_calendar'] = Field(
        default='throw', alias='EXTRAPOLATION_BC'
    )
    periodic_calendar_period: Optional[Literal['year', 'month', 'week', 'day']] = Field(
        default=None, alias='PERIODIC_CALENDAR_PERIOD'
    )
    periodic_calendar_repeat_date: Optional[datetime] = Field(
        default=None, alias='PERIODIC_CALENDAR_REPEAT_DATE'
    )

    @field_validator(
        'regridder_type', 'interpolation_method', 'extrapolation_bc',
        'periodic_calendar_period', mode='before'
    )
    @classmethod
    def normalize_selectors(cls, v):
        """Selectors are case insensitive"""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('reference_date', 'periodic_calendar_repeat_date', mode='before')
    @classmethod
    def promote_dates(cls, v):
        """YAML parses bare dates as datetime.date"""
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime(v.year, v.month, v.day)
        return v

    @field_validator('regridder_type')
    @classmethod
    def validate_regridder_type(cls, v):
        from simforcing.data.regridders import REGRIDDERS

        if v not in REGRIDDERS:
            raise ValueError(f"unknown regridder type {v!r}, available: {REGRIDDERS.keys()}")
        return v

    @model_validator(mode='after')
    def validate_periodic_calendar(self):
        """Explicit periods need a repeat date (and vice versa) and the periodic policy"""
        has_period = self.periodic_calendar_period is not None
        has_date = self.periodic_calendar_repeat_date is not None
        if has_period != has_date:
            raise ValueError(
                "PERIODIC_CALENDAR_PERIOD and PERIODIC_CALENDAR_REPEAT_DATE must be set together"
            )
        if has_period and self.extrapolation_bc != 'periodic_calendar':
            raise ValueError(
                "PERIODIC_CALENDAR_PERIOD requires EXTRAPOLATION_BC: periodic_calendar"
            )
        return self

    def build_method(self) -> InterpolationMethod:
        """Return the interpolation method (with boundary policy) described by this config."""
        if self.extrapolation_bc == 'throw':
            bc = Throw()
        elif self.extrapolation_bc == 'flat':
            bc = Flat()
        else:
            bc = PeriodicCalendar(
                self.periodic_calendar_period, self.periodic_calendar_repeat_date
            )
        if self.interpolation_method == 'nearest':
            return NearestNeighbor(bc)
        return LinearInterpolation(bc)

    def handler_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``DataHandler.from_file``."""
        return {
            'reference_date': self.reference_date,
            't_start': self.t_start,
            'regridder_type': self.regridder_type,
            'cache_max_size': self.cache_max_size,
        }

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        overrides: Optional[Dict[str, Any]] = None,
        *,
        use_env: bool = True,
    ) -> 'InputConfig':
        """
        Load configuration from a YAML file.

        Precedence (highest first): ``overrides``, ``SIMFORCING_*`` environment
        variables, the file, the model defaults.
        """
        from simforcing.core.config.factories import from_file_factory

        return from_file_factory(cls, Path(path), overrides, use_env=use_env)
