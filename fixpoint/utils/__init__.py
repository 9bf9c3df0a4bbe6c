"""
fixpoint utilities.

Organization:
- exceptions: Structured error classes
- logger: Logging configuration and helpers
- numerics: Floating point constants and scalar checks
- reporting: Comparison tables for iteration runs
- result: Result objects returned by the iteration entry points
- validation: Argument validation
"""

from .exceptions import (
    ConvergenceError,
    CycleDetectedError,
    FixpointError,
    NumericalInstabilityError,
    ReportFormatError,
    ValidationError,
    ValidationKind,
)
from .logger import configure_logging, get_logger
from .numerics import MACHINE_EPSILON, MIN_NORMAL
from .result import IterationOutcome, IterationResult, IterationStatus, ValidationFailure

__all__ = [
    "MACHINE_EPSILON",
    "MIN_NORMAL",
    "ConvergenceError",
    "CycleDetectedError",
    "FixpointError",
    "IterationOutcome",
    "IterationResult",
    "IterationStatus",
    "NumericalInstabilityError",
    "ReportFormatError",
    "ValidationError",
    "ValidationFailure",
    "ValidationKind",
    "configure_logging",
    "get_logger",
]
