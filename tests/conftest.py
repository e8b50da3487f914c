"""
Pytest configuration and fixtures for Fuzzy VIKOR tests.
"""
import pytest

from fvikor.config import reset_config
from fvikor.mcdm.fuzzy_base import TriangularFuzzyNumber
from fvikor.mcdm.linguistic import TermDictionaries


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from the default package configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def low_high_dictionaries():
    """Two-term scale L/H shared by criteria and alternatives."""
    scale = {
        "L": TriangularFuzzyNumber(0.1, 0.3, 0.5),
        "H": TriangularFuzzyNumber(0.5, 0.7, 0.9),
    }
    return TermDictionaries(criteria=dict(scale), alternatives=dict(scale))


@pytest.fixture
def example_inputs():
    from fvikor.data_loader import example_inputs as build
    return build()
