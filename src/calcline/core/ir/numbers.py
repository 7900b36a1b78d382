"""
Numeric values and arithmetic operators for calcline.

Numbers follow 32-bit machine semantics:
- Integer: signed 32-bit, wraps on overflow (two's complement)
- Float: IEEE 754 single precision

Mixed Integer/Float operations promote the integer to Float first.
Same-type operations stay in that type.

Usage:
    from calcline.core.ir.numbers import Float, Integer, Operator

    Operator.ADD.apply(Integer(value=1), Float(value=1.5))
    # Float(value=2.5)
"""

from __future__ import annotations

import math
import struct
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from calcline.core.errors import SolveError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Enough significant digits to round-trip any single precision value
_FLOAT32_MAX_DIGITS = 9


def wrap_int32(value: int) -> int:
    """Wrap an arbitrary integer into the signed 32-bit range."""
    return (value - INT32_MIN) % 2**32 + INT32_MIN


def to_float32(value: float) -> float:
    """Round a double to the nearest single precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def format_float32(value: float) -> str:
    """Shortest decimal text that reads back as the same single precision value."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    text = repr(value)
    for digits in range(1, _FLOAT32_MAX_DIGITS + 1):
        candidate = f"{value:.{digits}g}"
        if to_float32(float(candidate)) == value:
            text = candidate
            break

    if "e" not in text and "." not in text:
        text += ".0"
    return text


class Integer(BaseModel):
    """A signed 32-bit integer."""

    value: int = Field(description="Integer value, wrapped to 32 bits")

    model_config = ConfigDict(frozen=True)

    @field_validator("value")
    @classmethod
    def wrap_value(cls, v: int) -> int:
        """Wrap out-of-range results like native 32-bit arithmetic."""
        return wrap_int32(v)

    def __str__(self) -> str:
        return str(self.value)

    def to_float(self) -> Float:
        return Float(value=float(self.value))


class Float(BaseModel):
    """A single precision float."""

    value: float = Field(description="Float value, rounded to single precision")

    model_config = ConfigDict(frozen=True)

    @field_validator("value")
    @classmethod
    def round_value(cls, v: float) -> float:
        """Round to single precision."""
        return to_float32(v)

    def __str__(self) -> str:
        return format_float32(self.value)

    def to_float(self) -> Float:
        return self


Number = Integer | Float


class Operator(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def precedence(self) -> int:
        """Binding strength: multiplication and division bind tighter."""
        if self in (Operator.MULTIPLY, Operator.DIVIDE):
            return 2
        return 1

    def apply(self, lhs: Number, rhs: Number) -> Number:
        """Combine two numbers, promoting to Float if either operand is a Float.

        Raises:
            SolveError: On integer division by zero.
        """
        if isinstance(lhs, Integer) and isinstance(rhs, Integer):
            return Integer(value=self._apply_int(lhs.value, rhs.value))
        return Float(value=self._apply_float(lhs.to_float().value, rhs.to_float().value))

    def _apply_int(self, a: int, b: int) -> int:
        if self == Operator.ADD:
            return a + b
        if self == Operator.SUBTRACT:
            return a - b
        if self == Operator.MULTIPLY:
            return a * b
        if b == 0:
            raise SolveError("division by zero")
        # Truncate toward zero
        quotient = abs(a) // abs(b)
        return quotient if (a < 0) == (b < 0) else -quotient

    def _apply_float(self, a: float, b: float) -> float:
        if self == Operator.ADD:
            return a + b
        if self == Operator.SUBTRACT:
            return a - b
        if self == Operator.MULTIPLY:
            return a * b
        if b == 0.0:
            # IEEE 754 division by zero
            if a == 0.0 or math.isnan(a):
                return math.nan
            return math.copysign(math.inf, a) * math.copysign(1.0, b)
        return a / b
