"""
calcline - a line-oriented arithmetic calculator.

Evaluates integer and float expressions with +, -, *, / and parentheses,
and keeps named assignments that are re-evaluated every time they are used.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.calculator import Calculator
from .core.errors import CalculatorError, ParseError, SolveError, UndefinedVariableError
from .core.ir.numbers import Float, Integer, Number

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Calculator",
    "CalculatorError",
    "Float",
    "Integer",
    "Number",
    "ParseError",
    "SolveError",
    "UndefinedVariableError",
]
