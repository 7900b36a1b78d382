"""
Calculator: runs one input line at a time.

Each line is either an assignment ("name = expression"), which is stored
unevaluated, or an expression, which is evaluated against the stored
assignments.

Usage:
    from calcline.core.calculator import Calculator

    calculator = Calculator()
    calculator.execute("a = 1 + 1")  # None
    calculator.execute("a * 3")      # Integer(value=6)
"""

from __future__ import annotations

import logging

from calcline.core.environment import Environment
from calcline.core.expression_lang.evaluator import evaluate
from calcline.core.expression_lang.parser import parse
from calcline.core.ir.numbers import Number
from calcline.core.ir.tokens import assignment_target, format_tokens
from calcline.core.settings import CalculatorSettings, load_settings

logger = logging.getLogger(__name__)


class Calculator:
    """Evaluates lines against its own set of variables."""

    def __init__(self, settings: CalculatorSettings | None = None) -> None:
        self.settings = settings if settings is not None else load_settings()
        self._environment = Environment()

    @property
    def environment(self) -> Environment:
        return self._environment

    def execute(self, line: str) -> Number | None:
        """Run one line.

        Args:
            line: An expression ("1 + 2") or an assignment ("a = 1 + 2")

        Returns:
            The result of an expression, or None for an assignment.

        Raises:
            CalculatorError: If the line cannot be parsed or evaluated. The
                stored variables are left unchanged.
        """
        tokens = parse(line, max_group_depth=self.settings.max_group_depth)

        name = assignment_target(tokens)
        if name is not None:
            self._environment.assign(name, tokens)
            logger.debug("Assigned %s: %s", name, format_tokens(tokens[2:]))
            return None

        result = evaluate(tokens, self._environment, max_depth=self.settings.max_evaluation_depth)
        logger.debug("Evaluated %s -> %s", format_tokens(tokens), result)
        return result
