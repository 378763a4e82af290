# File: utils/__init__.py
"""Pure Python utilities for orgboard.

Submodules:
    - dt_utils: Timestamp helpers for published snapshots
    - math_utils: Point coercion and ordinal formatting

Usage:
    from . import dt_utils
    from .math_utils import coerce_points
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
