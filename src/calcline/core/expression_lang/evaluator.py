"""
Token evaluator for calcline.

Evaluates a parsed token list against an Environment using precedence
climbing. Groups are evaluated recursively as single operands; identifiers
are looked up and their stored tokens are evaluated on every use.
Pure evaluation: the environment is only read.

Variables that refer back to themselves, directly or through other
variables, are rejected with CyclicReferenceError instead of recursing
forever. The names currently being resolved are kept in a list that is
passed explicitly through the recursive calls.
"""

from __future__ import annotations

from calcline.core.environment import Environment
from calcline.core.errors import CyclicReferenceError, NestingTooDeepError, SolveError
from calcline.core.ir.numbers import Number, Operator
from calcline.core.ir.tokens import (
    Group,
    Identifier,
    OperatorToken,
    Token,
    Value,
    assignment_target,
)
from calcline.core.settings import DEFAULT_MAX_EVALUATION_DEPTH

# Lower than any operator, so the outermost climb accepts every operator
_MIN_PRECEDENCE = 0


def evaluate(
    tokens: list[Token],
    environment: Environment,
    max_depth: int = DEFAULT_MAX_EVALUATION_DEPTH,
) -> Number:
    """Evaluate a token list.

    A leading ``name =`` is skipped, so a stored assignment can be
    evaluated directly.

    Args:
        tokens: Parsed tokens
        environment: Variables available to identifiers
        max_depth: Deepest allowed chain of groups and variable lookups

    Returns:
        The computed number.

    Raises:
        UndefinedVariableError: If an identifier has no assignment.
        SolveError: If the tokens cannot be evaluated.
        NestingTooDeepError: If nesting exceeds ``max_depth`` or the
            interpreter stack runs out first.
    """
    try:
        return _Solver(environment, max_depth).solve_sequence(tokens, [], 0)
    except RecursionError:
        raise NestingTooDeepError(max_depth) from None


class _TokenStream:
    """Cursor over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token | None:
        tok = self.peek()
        if tok is not None:
            self.pos += 1
        return tok

    def peek_operator(self) -> Operator | None:
        tok = self.peek()
        if isinstance(tok, OperatorToken):
            return tok.op
        return None


class _Solver:
    def __init__(self, environment: Environment, max_depth: int) -> None:
        self.environment = environment
        self.max_depth = max_depth

    def solve_sequence(self, tokens: list[Token], active: list[str], depth: int) -> Number:
        """Evaluate a whole token list (a line, a group, or a stored assignment)."""
        if depth > self.max_depth:
            raise NestingTooDeepError(self.max_depth)

        if assignment_target(tokens) is not None:
            tokens = tokens[2:]
            if not tokens:
                raise SolveError("expected token after assignment")
        if not tokens:
            raise SolveError("empty expression")

        stream = _TokenStream(tokens)
        stream.pos = 1
        lhs = self.solve_operand(tokens[0], active, depth)
        result = self.climb(lhs, stream, _MIN_PRECEDENCE, active, depth)

        leftover = stream.peek()
        if leftover is not None:
            raise SolveError(f"unexpected token '{leftover}'")
        return result

    def solve_operand(self, token: Token, active: list[str], depth: int) -> Number:
        """Evaluate a single operand token."""
        if isinstance(token, Value):
            return token.number
        if isinstance(token, Group):
            return self.solve_sequence(token.tokens, active, depth + 1)
        if isinstance(token, Identifier):
            return self.resolve(token.name, active, depth + 1)
        raise SolveError(f"expected a value, got '{token}'")

    def resolve(self, name: str, active: list[str], depth: int) -> Number:
        """Evaluate the tokens stored for ``name``."""
        if name in active:
            raise CyclicReferenceError(active[active.index(name) :] + [name])

        tokens = self.environment.lookup(name)
        active.append(name)
        try:
            return self.solve_sequence(tokens, active, depth)
        finally:
            active.pop()

    def climb(
        self,
        lhs: Number,
        stream: _TokenStream,
        min_precedence: int,
        active: list[str],
        depth: int,
    ) -> Number:
        """Apply operators of at least ``min_precedence``, left to right.

        Whenever the operator after the right operand binds tighter than the
        current one, that run is climbed first with the right operand as its
        left side, so "2 + 3 * 4" applies "*" before "+".
        """
        op = stream.peek_operator()
        while op is not None and op.precedence >= min_precedence:
            stream.advance()
            operand = stream.advance()
            if operand is None:
                raise SolveError("expected value after operator")
            rhs = self.solve_operand(operand, active, depth)

            lookahead = stream.peek_operator()
            while lookahead is not None and lookahead.precedence > op.precedence:
                rhs = self.climb(rhs, stream, op.precedence + 1, active, depth)
                lookahead = stream.peek_operator()

            lhs = op.apply(lhs, rhs)
            op = stream.peek_operator()
        return lhs
