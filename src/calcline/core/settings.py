"""
Runtime configuration for calcline.

Limits are read from environment variables so they can be tuned without
code changes. Both bound recursion: the parser recurses once per nested
group and the evaluator once per group or variable lookup. Neither may
exceed MAX_DEPTH_LIMIT, which keeps the deepest allowed line inside
Python's default recursion limit.

Environment variables:
    - CALCLINE_MAX_GROUP_DEPTH (default 100): deepest allowed '(' nesting
    - CALCLINE_MAX_EVALUATION_DEPTH (default 100): deepest allowed chain of
      groups and variable lookups during evaluation

Values above MAX_DEPTH_LIMIT are lowered to it with a warning.

Usage:
    from calcline.core.settings import load_settings

    settings = load_settings()
    settings.max_group_depth  # 100 unless overridden
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_MAX_GROUP_DEPTH = 100
DEFAULT_MAX_EVALUATION_DEPTH = 100

# Each level costs up to five interpreter frames in the evaluator
MAX_DEPTH_LIMIT = 150

MAX_GROUP_DEPTH_VAR = "CALCLINE_MAX_GROUP_DEPTH"
MAX_EVALUATION_DEPTH_VAR = "CALCLINE_MAX_EVALUATION_DEPTH"


class CalculatorSettings(BaseModel):
    """Limits applied while parsing and evaluating a line."""

    max_group_depth: int = Field(
        default=DEFAULT_MAX_GROUP_DEPTH,
        ge=1,
        le=MAX_DEPTH_LIMIT,
        description="Deepest allowed group nesting",
    )
    max_evaluation_depth: int = Field(
        default=DEFAULT_MAX_EVALUATION_DEPTH,
        ge=1,
        le=MAX_DEPTH_LIMIT,
        description="Deepest allowed chain of groups and variable lookups",
    )

    model_config = ConfigDict(frozen=True)


def _read_depth(var: str, default: int) -> int:
    """Read a depth limit from the environment, falling back to ``default``.

    Examples:
        >>> import os
        >>> os.environ["CALCLINE_MAX_GROUP_DEPTH"] = "20"
        >>> _read_depth("CALCLINE_MAX_GROUP_DEPTH", 100)
        20
    """
    raw = os.environ.get(var, "").strip()
    if raw == "":
        return default

    try:
        value = int(raw)
    except ValueError:
        value = 0

    if value < 1:
        # Unknown value - use the default with warning
        logger.warning(
            "Invalid %s value '%s'. Expected a positive integer. Defaulting to %d.",
            var,
            raw,
            default,
        )
        return default

    if value > MAX_DEPTH_LIMIT:
        logger.warning(
            "%s value %d exceeds the maximum of %d. Using the maximum.",
            var,
            value,
            MAX_DEPTH_LIMIT,
        )
        return MAX_DEPTH_LIMIT
    return value


def load_settings() -> CalculatorSettings:
    """Build settings from CALCLINE_* environment variables."""
    return CalculatorSettings(
        max_group_depth=_read_depth(MAX_GROUP_DEPTH_VAR, DEFAULT_MAX_GROUP_DEPTH),
        max_evaluation_depth=_read_depth(
            MAX_EVALUATION_DEPTH_VAR, DEFAULT_MAX_EVALUATION_DEPTH
        ),
    )
