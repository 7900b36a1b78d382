"""
Variable environment for calcline.

Maps each variable name to the raw token list of its latest assignment.
Nothing is evaluated when a variable is assigned: the stored tokens are
evaluated again on every use, so a variable follows later changes to the
variables it refers to.
"""

from __future__ import annotations

from collections.abc import Iterator

from calcline.core.errors import UndefinedVariableError
from calcline.core.ir.tokens import Token


class Environment:
    """Name -> defining tokens. Names are case-sensitive."""

    def __init__(self) -> None:
        self._assignments: dict[str, list[Token]] = {}

    def assign(self, name: str, tokens: list[Token]) -> None:
        """Store ``tokens`` under ``name``, replacing any earlier assignment."""
        self._assignments[name] = list(tokens)

    def lookup(self, name: str) -> list[Token]:
        """Return the tokens stored under ``name``.

        Raises:
            UndefinedVariableError: If ``name`` was never assigned.
        """
        try:
            return self._assignments[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def items(self) -> list[tuple[str, list[Token]]]:
        return list(self._assignments.items())

    def __contains__(self, name: object) -> bool:
        return name in self._assignments

    def __iter__(self) -> Iterator[str]:
        return iter(self._assignments)

    def __len__(self) -> int:
        return len(self._assignments)
