"""
Fixed-point iteration algorithms.

This module provides:

1. **Convergence Tests**:
   - absolute_error_test: |a - b| <= max_error
   - relative_error_test: relative error with a guard near zero
   - mixed_error_test: blended test over the last three values (default)

2. **Step-Size Schedules** for Mann/Ishikawa:
   - harmonic_schedule, sqrt_schedule, polynomial_schedule, constant_schedule

3. **Iteration Engine**:
   - run_iteration: generic loop with convergence, divergence and cycle checks

4. **Iteration Schemes**:
   - iterate, picard, krasnoselskii, mann, ishikawa
"""

from .convergence import (
    CONVERGENCE_TESTS,
    absolute_error_test,
    absolute_test,
    get_convergence_test,
    mixed_error_test,
    mixed_test,
    relative_error_test,
    relative_test,
)
from .engine import run_iteration
from .methods import METHODS, ishikawa, iterate, krasnoselskii, mann, picard
from .schedules import (
    STEP_SIZE_SCHEDULES,
    constant_schedule,
    get_schedule,
    harmonic_schedule,
    polynomial_schedule,
    sqrt_schedule,
    warmup_schedule,
)

__all__ = [
    # Convergence tests
    "CONVERGENCE_TESTS",
    "absolute_error_test",
    "absolute_test",
    "get_convergence_test",
    "mixed_error_test",
    "mixed_test",
    "relative_error_test",
    "relative_test",
    # Schedules
    "STEP_SIZE_SCHEDULES",
    "constant_schedule",
    "get_schedule",
    "harmonic_schedule",
    "polynomial_schedule",
    "sqrt_schedule",
    "warmup_schedule",
    # Engine and schemes
    "METHODS",
    "ishikawa",
    "iterate",
    "krasnoselskii",
    "mann",
    "picard",
    "run_iteration",
]
