# File: utils/math_utils.py
"""Point arithmetic and formatting utilities for orgboard.

Pure Python functions, safe to call on untrusted stored values.

Functions:
    - coerce_points: Convert a stored point value to an int, defaulting to 0
    - sum_points: Sum a sequence of coerced point values
    - ordinal_suffix: English ordinal suffix for a rank
    - format_ordinal: Rank with its ordinal suffix
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import math
from typing import Any

# Module-level logger
_LOGGER = logging.getLogger(__name__)

DEFAULT_POINTS = 0


# ==============================================================================
# Point Arithmetic
# ==============================================================================


def coerce_points(value: Any, default: int = DEFAULT_POINTS) -> int:
    """Convert a stored point value to an integer without raising.

    Accepts ints, finite floats (truncated toward zero) and numeric strings.
    Booleans, None, NaN/inf and anything else fall back to `default`.

    Examples:
        coerce_points(42) → 42
        coerce_points(12.9) → 12
        coerce_points("30") → 30
        coerce_points(None) → 0
        coerce_points(True) → 0
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return default
        return int(value)
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            _LOGGER.debug("Ignoring non-numeric point value %r", value)
            return default
        return int(parsed) if math.isfinite(parsed) else default
    return default


def sum_points(values: Iterable[Any]) -> int:
    """Sum point values after coercion."""
    return sum(coerce_points(value) for value in values)


# ==============================================================================
# Ordinal Formatting
# ==============================================================================


def ordinal_suffix(rank: int) -> str:
    """Return the English ordinal suffix for rank.

    11, 12 and 13 (and 111, 112, ...) take "th".

    Examples:
        ordinal_suffix(1) → "st"
        ordinal_suffix(12) → "th"
        ordinal_suffix(22) → "nd"
        ordinal_suffix(113) → "th"
    """
    if 11 <= rank % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(rank % 10, "th")


def format_ordinal(rank: int) -> str:
    """Return rank formatted with its ordinal suffix ("1st", "2nd", ...)."""
    return f"{rank}{ordinal_suffix(rank)}"
