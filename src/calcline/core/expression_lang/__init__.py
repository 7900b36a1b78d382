"""
calcline expression language.

Parser and evaluator for single calculator lines.

Usage:
    from calcline.core.environment import Environment
    from calcline.core.expression_lang import evaluate, parse

    tokens = parse("(2 + 3) * 4")
    result = evaluate(tokens, Environment())
    # result == Integer(value=20)
"""

from calcline.core.expression_lang.evaluator import evaluate
from calcline.core.expression_lang.parser import parse

__all__ = ["evaluate", "parse"]
