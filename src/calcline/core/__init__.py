"""Core calcline functionality: IR, parser, evaluator, environment, calculator."""

from . import ir
from .calculator import Calculator
from .environment import Environment
from .errors import (
    CalculatorError,
    CyclicReferenceError,
    ErrorContext,
    ExpectedNumberOrGroupError,
    ExpectedOperatorError,
    GroupTooDeepError,
    InvalidNumberError,
    MisplacedAssignmentError,
    NestingTooDeepError,
    ParseError,
    SolveError,
    UndefinedVariableError,
    UnexpectedGroupCloseError,
    UnterminatedGroupError,
)
from .expression_lang import evaluate, parse
from .settings import CalculatorSettings, load_settings

__all__ = [
    "ir",
    "Calculator",
    "CalculatorSettings",
    "Environment",
    "evaluate",
    "load_settings",
    "parse",
    # Errors
    "CalculatorError",
    "CyclicReferenceError",
    "ErrorContext",
    "ExpectedNumberOrGroupError",
    "ExpectedOperatorError",
    "GroupTooDeepError",
    "InvalidNumberError",
    "MisplacedAssignmentError",
    "NestingTooDeepError",
    "ParseError",
    "SolveError",
    "UndefinedVariableError",
    "UnexpectedGroupCloseError",
    "UnterminatedGroupError",
]
