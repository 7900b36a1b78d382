"""
Error types for calcline parsing and evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass


class CalculatorError(Exception):
    """Base exception for all calcline errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message} {self.context.format()}"
        return self.message


class ParseError(CalculatorError):
    """
    Raised when an input line cannot be turned into tokens.

    Examples:
    - Unexpected characters
    - Malformed numeric literals
    - Unbalanced parentheses
    - Assignments in the wrong place
    """

    pass


class ExpectedNumberOrGroupError(ParseError):
    """A value was expected but something else (or end of input) was found."""

    def __init__(self, found: str | None, context: ErrorContext | None = None):
        self.found = found
        what = "end of input" if found is None else repr(found)
        super().__init__(f"expected a number or group, got {what}", context)


class ExpectedOperatorError(ParseError):
    """An operator was expected after a value."""

    def __init__(self, found: str, context: ErrorContext | None = None):
        self.found = found
        super().__init__(f"expected an operator, got {found!r}", context)


class InvalidNumberError(ParseError):
    """Numeric literal text is not a valid integer or float."""

    def __init__(self, text: str, context: ErrorContext | None = None):
        self.text = text
        super().__init__(f"invalid number {text!r}", context)


class UnterminatedGroupError(ParseError):
    """Input ended inside a parenthesized group."""

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("unterminated group, expected ')'", context)


class UnexpectedGroupCloseError(ParseError):
    """A ')' appeared with no open group to close."""

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("unexpected ')' outside of a group", context)


class MisplacedAssignmentError(ParseError):
    """'=' used anywhere other than directly after a leading identifier."""

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("assignment is only allowed as 'name = expression'", context)


class GroupTooDeepError(ParseError):
    """Parentheses nested beyond the configured limit."""

    def __init__(self, limit: int, context: ErrorContext | None = None):
        self.limit = limit
        super().__init__(f"groups nested deeper than {limit} levels", context)


class UndefinedVariableError(CalculatorError):
    """An identifier has no assignment at evaluation time."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unable to find variable with name {name}")


class SolveError(CalculatorError):
    """
    Raised when a token sequence cannot be evaluated.

    Examples:
    - Missing operand after an operator
    - Empty token sequence
    - Self- or mutually-referential assignments
    - Integer division by zero
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class CyclicReferenceError(SolveError):
    """A variable was reached again while it was still being resolved."""

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__(f"circular variable reference: {' -> '.join(self.chain)}")


class NestingTooDeepError(SolveError):
    """Groups and variable lookups nested beyond the configured limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"evaluation nested deeper than {limit} levels")


@dataclass
class ErrorContext:
    """
    Location of an error inside the input line.

    Attributes:
        column: Column number (1-indexed)
        source: The line being parsed
    """

    column: int
    source: str

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "at column 3" followed by the marked source line
        """
        return f"at column {self.column}\n{self._format_snippet()}"

    def _format_snippet(self) -> str:
        """Format the source line with an error marker under the column."""
        line = self.source.rstrip("\r\n")
        prefix = "  | "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{prefix}{line}\n{marker}"


def make_parse_error(
    error_cls: type[ParseError],
    source: str,
    index: int,
    *args: object,
) -> ParseError:
    """
    Helper to create a ParseError subclass with context.

    Args:
        error_cls: The ParseError subclass to raise
        source: The line being parsed
        index: Zero-based offset into ``source`` where the error was found
        *args: Positional arguments for ``error_cls`` before the context

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(column=index + 1, source=source)
    return error_cls(*args, context=context)  # type: ignore[call-arg]
