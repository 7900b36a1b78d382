"""
Character-scanning parser for calcline input lines.

Converts a line into a token list. The scanner is a small state machine
that walks the line one character at a time:

    IDLE / AFTER_OPERATOR / AFTER_ASSIGNMENT    expecting a value
        digit, '.', '-'  -> NUMBER
        letter           -> IDENTIFIER
        '('              -> recurse into a group, then AFTER_NUMBER
    NUMBER                                      inside a numeric literal
        digit, '.'       -> stay
        anything else    -> emit Value, AFTER_NUMBER (character re-read)
    IDENTIFIER                                  inside a name
        letter, digit    -> stay
        anything else    -> emit Identifier, AFTER_IDENTIFIER (re-read)
    AFTER_NUMBER / AFTER_IDENTIFIER             expecting an operator
        '+' '-' '*' '/'  -> AFTER_OPERATOR
        '='              -> AFTER_ASSIGNMENT (only as 'name = ...')
        ')'              -> close the current group
        end of input     -> done

Whitespace is skipped wherever a value or operator is expected.

A '-' begins a negative literal only where a value is expected (start of
line, after '(', after an operator, after '='). Everywhere else it is the
subtraction operator, and a '-' never continues a literal. So "1-2" is a
subtraction and "2*-3" multiplies by a negative literal.
"""

from __future__ import annotations

from enum import StrEnum, auto

from calcline.core.errors import (
    ExpectedNumberOrGroupError,
    ExpectedOperatorError,
    GroupTooDeepError,
    InvalidNumberError,
    MisplacedAssignmentError,
    UnexpectedGroupCloseError,
    UnterminatedGroupError,
    make_parse_error,
)
from calcline.core.ir.numbers import INT32_MAX, INT32_MIN, Float, Integer, Number, Operator
from calcline.core.ir.tokens import Assignment, Group, Identifier, OperatorToken, Token, Value
from calcline.core.settings import DEFAULT_MAX_GROUP_DEPTH


class ScanState(StrEnum):
    """States of the character scanner."""

    IDLE = auto()
    NUMBER = auto()
    IDENTIFIER = auto()
    AFTER_OPERATOR = auto()
    AFTER_NUMBER = auto()
    AFTER_IDENTIFIER = auto()
    AFTER_ASSIGNMENT = auto()


_EXPECTING_VALUE = frozenset({ScanState.IDLE, ScanState.AFTER_OPERATOR, ScanState.AFTER_ASSIGNMENT})

_OPERATORS: dict[str, Operator] = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
}

_WHITESPACE = " \t\r\n"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_alpha(c: str) -> bool:
    return "a" <= c <= "z" or "A" <= c <= "Z"


def _starts_number(c: str) -> bool:
    return _is_digit(c) or c in ".-"


class _Scanner:
    """Walks one input line, producing tokens."""

    def __init__(self, source: str, max_group_depth: int) -> None:
        self.source = source
        self.max_group_depth = max_group_depth
        self.pos = 0

    @property
    def current(self) -> str | None:
        """Character under the cursor, or None at end of input."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def scan_sequence(self, depth: int = 0, group_start: int = 0) -> list[Token]:
        """Scan tokens until end of input, or until the ')' closing this group.

        Args:
            depth: Number of enclosing groups (0 at top level)
            group_start: Offset of the '(' that opened this group
        """
        in_group = depth > 0
        tokens: list[Token] = []
        state = ScanState.IDLE
        start = 0

        while True:
            c = self.current

            if state in _EXPECTING_VALUE:
                if c is None:
                    if in_group:
                        raise make_parse_error(UnterminatedGroupError, self.source, group_start)
                    raise make_parse_error(ExpectedNumberOrGroupError, self.source, self.pos, None)
                if c in _WHITESPACE:
                    self.pos += 1
                elif _starts_number(c):
                    state = ScanState.NUMBER
                    start = self.pos
                    self.pos += 1
                elif _is_alpha(c):
                    state = ScanState.IDENTIFIER
                    start = self.pos
                    self.pos += 1
                elif c == "(":
                    if depth >= self.max_group_depth:
                        raise make_parse_error(
                            GroupTooDeepError, self.source, self.pos, self.max_group_depth
                        )
                    open_pos = self.pos
                    self.pos += 1
                    tokens.append(Group(tokens=self.scan_sequence(depth + 1, open_pos)))
                    state = ScanState.AFTER_NUMBER
                else:
                    raise make_parse_error(ExpectedNumberOrGroupError, self.source, self.pos, c)

            elif state == ScanState.NUMBER:
                if c is not None and (_is_digit(c) or c == "."):
                    self.pos += 1
                else:
                    tokens.append(Value(number=self._read_number(start)))
                    state = ScanState.AFTER_NUMBER

            elif state == ScanState.IDENTIFIER:
                if c is not None and (_is_alpha(c) or _is_digit(c)):
                    self.pos += 1
                else:
                    tokens.append(Identifier(name=self.source[start : self.pos]))
                    state = ScanState.AFTER_IDENTIFIER

            else:
                # After a number, group, or identifier
                if c is None:
                    if in_group:
                        raise make_parse_error(UnterminatedGroupError, self.source, group_start)
                    return tokens
                if c in _WHITESPACE:
                    self.pos += 1
                elif c in _OPERATORS:
                    tokens.append(OperatorToken(op=_OPERATORS[c]))
                    state = ScanState.AFTER_OPERATOR
                    self.pos += 1
                elif c == ")":
                    if not in_group:
                        raise make_parse_error(UnexpectedGroupCloseError, self.source, self.pos)
                    self.pos += 1
                    return tokens
                elif c == "=":
                    if in_group or len(tokens) != 1 or not isinstance(tokens[0], Identifier):
                        raise make_parse_error(MisplacedAssignmentError, self.source, self.pos)
                    tokens.append(Assignment())
                    state = ScanState.AFTER_ASSIGNMENT
                    self.pos += 1
                else:
                    raise make_parse_error(ExpectedOperatorError, self.source, self.pos, c)

    def _read_number(self, start: int) -> Number:
        """Convert the literal text in source[start:pos] to a Number."""
        text = self.source[start : self.pos]
        try:
            if "." in text:
                return Float(value=float(text))
            value = int(text)
        except ValueError:
            raise make_parse_error(InvalidNumberError, self.source, start, text) from None

        if not INT32_MIN <= value <= INT32_MAX:
            raise make_parse_error(InvalidNumberError, self.source, start, text)
        return Integer(value=value)


def parse(source: str, max_group_depth: int = DEFAULT_MAX_GROUP_DEPTH) -> list[Token]:
    """Parse one input line into a token list.

    Args:
        source: Line to parse (e.g., "total = (a + b) * 1.2")
        max_group_depth: Deepest allowed parenthesis nesting

    Returns:
        Flat token list; parenthesized parts are nested as Group tokens.

    Raises:
        ParseError: If the line is malformed.
        GroupTooDeepError: If groups nest deeper than ``max_group_depth`` or
            than the interpreter stack allows.
    """
    scanner = _Scanner(source, max_group_depth)
    try:
        return scanner.scan_sequence()
    except RecursionError:
        raise make_parse_error(
            GroupTooDeepError, source, scanner.pos, max_group_depth
        ) from None
