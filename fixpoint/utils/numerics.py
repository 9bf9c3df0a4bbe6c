"""
Floating point constants and scalar checks shared across fixpoint.

The constants are read once from ``numpy.finfo`` at import time and never
change afterwards.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

_FLOAT_INFO = np.finfo(np.float64)

# Smallest value where 1 + eps/2 is still distinguishable from 1
MACHINE_EPSILON: float = float(_FLOAT_INFO.eps)

# Minimum positive normalized double, 2**-1022
MIN_NORMAL: float = float(_FLOAT_INFO.tiny)


def is_real_number(value: Any) -> bool:
    """Return True for Python or NumPy real scalars, excluding bools."""
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, float, np.integer, np.floating))


def is_finite_real(value: Any) -> bool:
    """Return True if ``value`` is a real scalar that is neither NaN nor infinite."""
    if not is_real_number(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


__all__ = ["MACHINE_EPSILON", "MIN_NORMAL", "is_finite_real", "is_real_number"]
