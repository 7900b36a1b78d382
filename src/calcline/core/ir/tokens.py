"""
Token types produced by the calcline parser.

A parsed line is a flat list of tokens. Parenthesized sub-expressions
become a single Group token that owns its own token list, so the
structure is a tree whose depth follows the nesting of parentheses.

Supports:
- Literals: 42, 1.5, -3
- Identifiers: a, total, x2
- Operators: +, -, *, /
- Assignment marker: =
- Groups: (1 + 2)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from calcline.core.ir.numbers import Number, Operator


class Value(BaseModel):
    """A numeric literal."""

    number: Number = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.number)


class Identifier(BaseModel):
    """Reference to a stored assignment."""

    name: str = Field(description="Variable name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class OperatorToken(BaseModel):
    """A binary arithmetic operator."""

    op: Operator

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.op.value


class Assignment(BaseModel):
    """The '=' marker of an assignment line."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "="


class Group(BaseModel):
    """A parenthesized sub-expression, evaluated as a single operand."""

    tokens: list[Token] = Field(default_factory=list, description="Tokens inside the parentheses")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({format_tokens(self.tokens)})"


Token = Value | Identifier | OperatorToken | Assignment | Group

# Rebuild models for recursive forward references
Group.model_rebuild()


def format_tokens(tokens: list[Token]) -> str:
    """Render a token list back to source text."""
    return " ".join(str(token) for token in tokens)


def assignment_target(tokens: list[Token]) -> str | None:
    """Return the variable name if ``tokens`` has the shape ``name = ...``."""
    if len(tokens) >= 2 and isinstance(tokens[0], Identifier) and isinstance(tokens[1], Assignment):
        return tokens[0].name
    return None
