"""Shared pytest fixtures for calcline tests."""

import pytest

from calcline.core.calculator import Calculator
from calcline.core.environment import Environment
from calcline.core.settings import CalculatorSettings


@pytest.fixture
def calculator() -> Calculator:
    """Return a calculator with default limits and no variables."""
    return Calculator(settings=CalculatorSettings())


@pytest.fixture
def environment() -> Environment:
    """Return an empty environment."""
    return Environment()
