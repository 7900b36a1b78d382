"""Tests for Calculator.execute."""

from __future__ import annotations

import logging

import pytest

from calcline.core.calculator import Calculator
from calcline.core.errors import (
    CalculatorError,
    ExpectedNumberOrGroupError,
    MisplacedAssignmentError,
    SolveError,
    UndefinedVariableError,
)
from calcline.core.ir.numbers import Float, Integer
from calcline.core.ir.tokens import Identifier
from calcline.core.settings import MAX_DEPTH_LIMIT, CalculatorSettings


class TestExecute:
    """Lines are either evaluated or stored."""

    def test_can_solve_calculations(self, calculator: Calculator) -> None:
        assert calculator.execute("1+1") == Integer(value=2)

    def test_precedence(self, calculator: Calculator) -> None:
        assert calculator.execute("2+3*4") == Integer(value=14)
        assert calculator.execute("(2+3)*4") == Integer(value=20)

    def test_float_promotion(self, calculator: Calculator) -> None:
        assert calculator.execute("1+1.5") == Float(value=2.5)

    def test_can_use_variables(self, calculator: Calculator) -> None:
        assert calculator.execute("a = 1+1") is None
        assert calculator.execute("a") == Integer(value=2)

    def test_assignment_stores_full_line(self, calculator: Calculator) -> None:
        calculator.execute("a = 1+1")
        stored = calculator.environment.lookup("a")
        assert stored[0] == Identifier(name="a")
        assert len(stored) == 5

    def test_assignment_is_not_evaluated(self, calculator: Calculator) -> None:
        # Defining in terms of an undefined variable is fine until it is used
        assert calculator.execute("a = later * 2") is None
        with pytest.raises(UndefinedVariableError):
            calculator.execute("a")
        calculator.execute("later = 21")
        assert calculator.execute("a") == Integer(value=42)

    def test_reassignment_overwrites(self, calculator: Calculator) -> None:
        calculator.execute("a = 1")
        calculator.execute("a = 2")
        assert calculator.execute("a") == Integer(value=2)

    def test_dependencies_follow_reassignment(self, calculator: Calculator) -> None:
        calculator.execute("rate = 2")
        calculator.execute("total = rate * 10")
        assert calculator.execute("total") == Integer(value=20)
        calculator.execute("rate = 2.5")
        assert calculator.execute("total") == Float(value=25.0)

    def test_crashes_on_infinite_loops(self, calculator: Calculator) -> None:
        assert calculator.execute("a = a + 1") is None
        with pytest.raises(SolveError):
            calculator.execute("a")

    def test_crashes_on_mutual_loops(self, calculator: Calculator) -> None:
        assert calculator.execute("a = b") is None
        assert calculator.execute("b = a") is None
        with pytest.raises(SolveError):
            calculator.execute("a")
        with pytest.raises(SolveError):
            calculator.execute("b")

    def test_crashes_on_undefined_variables(self, calculator: Calculator) -> None:
        with pytest.raises(UndefinedVariableError) as exc_info:
            calculator.execute("b + 1")
        assert exc_info.value.name == "b"

    def test_calculators_are_independent(self) -> None:
        first = Calculator(settings=CalculatorSettings())
        second = Calculator(settings=CalculatorSettings())
        first.execute("a = 1")
        with pytest.raises(UndefinedVariableError):
            second.execute("a")


class TestExecuteErrors:
    """Failing lines leave the stored variables untouched."""

    def test_parse_error_propagates(self, calculator: Calculator) -> None:
        with pytest.raises(ExpectedNumberOrGroupError):
            calculator.execute("1 +")

    def test_failed_assignment_is_not_stored(self, calculator: Calculator) -> None:
        calculator.execute("a = 1")
        with pytest.raises(CalculatorError):
            calculator.execute("a = (2 +")
        assert calculator.execute("a") == Integer(value=1)

    def test_misplaced_assignment_is_not_stored(self, calculator: Calculator) -> None:
        with pytest.raises(MisplacedAssignmentError):
            calculator.execute("a = b = 1")
        assert "a" not in calculator.environment
        assert len(calculator.environment) == 0

    def test_error_does_not_affect_next_line(self, calculator: Calculator) -> None:
        calculator.execute("a = a")
        with pytest.raises(SolveError):
            calculator.execute("a + 1")
        assert calculator.execute("2 * 2") == Integer(value=4)


class TestCalculatorSettings:
    def test_group_limit_applies(self) -> None:
        calculator = Calculator(settings=CalculatorSettings(max_group_depth=2))
        assert calculator.execute("((1))") == Integer(value=1)
        with pytest.raises(CalculatorError):
            calculator.execute("(((1)))")

    def test_evaluation_limit_applies(self) -> None:
        calculator = Calculator(settings=CalculatorSettings(max_evaluation_depth=3))
        calculator.execute("a = 1")
        calculator.execute("b = a")
        calculator.execute("c = b")
        assert calculator.execute("c") == Integer(value=1)
        calculator.execute("d = c")
        with pytest.raises(SolveError):
            calculator.execute("d")

    def test_defaults_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CALCLINE_MAX_GROUP_DEPTH", "1")
        calculator = Calculator()
        assert calculator.settings.max_group_depth == 1
        with pytest.raises(CalculatorError):
            calculator.execute("((1))")

    def test_deepest_allowed_line_evaluates(self) -> None:
        calculator = Calculator(
            settings=CalculatorSettings(
                max_group_depth=MAX_DEPTH_LIMIT, max_evaluation_depth=MAX_DEPTH_LIMIT
            )
        )
        nested = "(" * MAX_DEPTH_LIMIT + "1" + ")" * MAX_DEPTH_LIMIT
        assert calculator.execute(nested) == Integer(value=1)

        calculator.execute("v0 = 1")
        for i in range(1, MAX_DEPTH_LIMIT):
            calculator.execute(f"v{i} = 1 + 2 * v{i - 1}")
        # 2**150 - 1 wraps to -1
        assert calculator.execute(f"v{MAX_DEPTH_LIMIT - 1}") == Integer(value=-1)

    def test_deep_input_at_maximum_limits_fails_cleanly(self) -> None:
        calculator = Calculator(
            settings=CalculatorSettings(
                max_group_depth=MAX_DEPTH_LIMIT, max_evaluation_depth=MAX_DEPTH_LIMIT
            )
        )
        with pytest.raises(CalculatorError):
            calculator.execute("(" * 2_000 + "1" + ")" * 2_000)

        calculator.execute("v0 = 1")
        for i in range(1, 1_500):
            calculator.execute(f"v{i} = v{i - 1} + 1")
        with pytest.raises(SolveError):
            calculator.execute("v1499")
        assert calculator.execute("2 * 2") == Integer(value=4)

    def test_oversized_limit_from_environment_is_capped(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CALCLINE_MAX_EVALUATION_DEPTH", "2000")
        assert Calculator().settings.max_evaluation_depth == MAX_DEPTH_LIMIT


class TestExecuteLogging:
    def test_logs_assignment_and_result(
        self, calculator: Calculator, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="calcline.core.calculator"):
            calculator.execute("a = 2 * 3")
            calculator.execute("a + 1")
        assert "Assigned a: 2 * 3" in caplog.text
        assert "Evaluated a + 1 -> 7" in caplog.text
