"""Tests for selecting regridders by name."""

import pytest

from simforcing.core.exceptions import ConfigurationError
from simforcing.data.regridders import (
    DEFAULT_REGRIDDER,
    REGRIDDERS,
    GridInterpolationRegridder,
    TargetSpace,
    build_regridder,
)

pytestmark = [pytest.mark.unit, pytest.mark.quick]

SPACE = TargetSpace({"lon": [0.0], "lat": [0.0]})


@pytest.mark.parametrize(
    "name, method",
    [("linear", "linear"), ("Nearest", "nearest"), ("interpolations", "linear"), (None, "linear")],
)
def test_build_regridder(name, method):
    regridder = build_regridder(name, SPACE)
    assert isinstance(regridder, GridInterpolationRegridder)
    assert regridder.method == method


def test_kwargs_override_registration_defaults():
    assert build_regridder("linear", SPACE, method="nearest").method == "nearest"


def test_unknown_regridder():
    with pytest.raises(ConfigurationError, match="Unknown regridder type"):
        build_regridder("conservative", SPACE)


def test_registered_names():
    assert DEFAULT_REGRIDDER in REGRIDDERS
    assert REGRIDDERS.keys() == ["linear", "nearest"]
