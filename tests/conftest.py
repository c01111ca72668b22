"""
Root conftest.py - shared test setup.

Puts tests/ on sys.path so test modules can import helpers from
``fixtures``, and loads the NetCDF fixture plugin.
"""

from pathlib import Path
import sys

import pytest

TESTS_DIR = Path(__file__).parent.resolve()
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

# Load additional fixtures from fixture modules
pytest_plugins = [
    "fixtures.data_fixtures",
]


@pytest.fixture(scope="session")
def tests_dir():
    """Path to tests directory."""
    return TESTS_DIR
