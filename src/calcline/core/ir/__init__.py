"""
calcline Intermediate Representation (IR) types.

Numbers, operators, and the tokens a parsed line is made of.
"""

# Numbers and operators
from .numbers import (
    INT32_MAX,
    INT32_MIN,
    Float,
    Integer,
    Number,
    Operator,
)

# Tokens
from .tokens import (
    Assignment,
    Group,
    Identifier,
    OperatorToken,
    Token,
    Value,
    assignment_target,
    format_tokens,
)

__all__ = [
    # Numbers
    "INT32_MAX",
    "INT32_MIN",
    "Float",
    "Integer",
    "Number",
    "Operator",
    # Tokens
    "Assignment",
    "Group",
    "Identifier",
    "OperatorToken",
    "Token",
    "Value",
    "assignment_target",
    "format_tokens",
]
