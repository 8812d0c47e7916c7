"""Configuration file for `pytest`."""

import pytest

from sqalgebra.index import OrbitalIndex
from sqalgebra.log import set_log_level


@pytest.fixture(autouse=True)
def _reset_log_level():
    """Restore the default logging level after each test."""
    yield
    set_log_level("WARNING")


@pytest.fixture
def indices():
    """Fixture for a set of indices of each orbital class."""
    return {
        "p": OrbitalIndex("p"),
        "q": OrbitalIndex("q"),
        "r": OrbitalIndex("r"),
        "s": OrbitalIndex("s"),
        "i": OrbitalIndex("i", "inactive"),
        "j": OrbitalIndex("j", "inactive"),
        "t": OrbitalIndex("t", "active"),
        "u": OrbitalIndex("u", "active"),
        "a": OrbitalIndex("a", "virtual"),
        "b": OrbitalIndex("b", "virtual"),
    }
