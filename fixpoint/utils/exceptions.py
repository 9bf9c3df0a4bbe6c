"""
Exception classes for fixpoint with structured, actionable error messages.

Public entry points never let these escape: validation errors are turned
into ``ValidationFailure`` values and run-termination conditions are
recorded on the ``IterationResult``. The exceptions are raised internally
and by ``IterationResult.raise_for_status()`` for callers that prefer them.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any


class ValidationKind(Enum):
    """Category of a validation failure."""

    NOT_A_FUNCTION = "not_a_function"
    WRONG_ARITY = "wrong_arity"
    NOT_FINITE = "not_finite"
    OUT_OF_RANGE = "out_of_range"
    WRONG_TYPE = "wrong_type"


class FixpointError(Exception):
    """
    Base exception for fixpoint errors with context and suggestions.

    The formatted message contains:
    - Clear error description
    - Method context
    - Suggested action for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        method_name: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.message = message
        self.method_name = method_name
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.method_name}] {message}" if self.method_name else message

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class ValidationError(FixpointError):
    """Raised when an argument or option is rejected before iteration starts."""

    def __init__(
        self,
        kind: ValidationKind,
        argument: str,
        message: str,
        provided_value: Any = None,
        method_name: str | None = None,
    ):
        self.kind = kind
        self.argument = argument

        diagnostic_data = {"argument": argument, "kind": kind.value}
        if provided_value is not None:
            diagnostic_data["provided_value"] = repr(provided_value)
            diagnostic_data["provided_type"] = type(provided_value).__name__

        super().__init__(
            message=message,
            method_name=method_name,
            suggested_action=_generate_validation_suggestion(kind, argument),
            error_code="INVALID_ARGUMENT",
            diagnostic_data=diagnostic_data,
        )


class ConvergenceError(FixpointError):
    """Raised when the step budget is exhausted without convergence."""

    def __init__(
        self,
        steps_used: int,
        last_values: list[float] | None = None,
        method_name: str | None = None,
    ):
        diagnostic_data: dict[str, Any] = {"steps_used": steps_used}

        if last_values:
            diagnostic_data["last_value"] = f"{last_values[-1]:.6e}"
            diagnostic_data["trend"] = _analyze_sequence_trend(last_values)

        super().__init__(
            message=f"Failed to converge after {steps_used} steps",
            method_name=method_name,
            suggested_action=_generate_convergence_suggestions(last_values),
            error_code="CONVERGENCE_FAILURE",
            diagnostic_data=diagnostic_data,
        )


class NumericalInstabilityError(FixpointError):
    """Raised when the sequence produced a NaN or infinite value."""

    def __init__(self, step: int, value: float, method_name: str | None = None):
        instability = "NaN value" if math.isnan(value) else "Infinite value"

        super().__init__(
            message=f"Numerical instability detected: {instability} at step {step}",
            method_name=method_name,
            suggested_action=(
                "Check for: 1) A map that is not contractive near x0, 2) A better initial approximation, "
                "3) A smaller lambda/alpha to damp the update"
            ),
            error_code="NUMERICAL_INSTABILITY",
            diagnostic_data={"step": step, "value": value},
        )


class CycleDetectedError(FixpointError):
    """Raised when the sequence repeated an earlier value exactly."""

    def __init__(self, first_index: int, second_index: int, method_name: str | None = None):
        self.first_index = first_index
        self.second_index = second_index

        super().__init__(
            message=f"Cycle detected between iterations #{first_index} and #{second_index}",
            method_name=method_name,
            suggested_action="Try a Krasnoselskii or Mann iteration to damp the oscillation",
            error_code="CYCLE_DETECTED",
            diagnostic_data={"period": second_index - first_index},
        )


class ReportFormatError(FixpointError):
    """Raised when a recognized report format has no renderer."""

    def __init__(self, report_format: str):
        self.report_format = report_format

        super().__init__(
            message="unimplemented",
            suggested_action="Use format='text' or format='latex'",
            error_code="UNIMPLEMENTED_FORMAT",
            diagnostic_data={"format": report_format},
        )


# Helper functions for generating specific suggestions


def _analyze_sequence_trend(values: list[float]) -> str:
    """Classify the tail of a sequence of approximations."""
    if len(values) < 3:
        return "insufficient_data"

    d1 = abs(values[-1] - values[-2])
    d2 = abs(values[-2] - values[-3])

    if d1 < d2:
        return "converging_slowly"
    elif d1 > d2 * 1.1:
        return "diverging"
    elif (values[-1] - values[-2]) * (values[-2] - values[-3]) < 0:
        return "oscillating"
    else:
        return "stagnating"


def _generate_convergence_suggestions(values: list[float] | None) -> str:
    """Generate suggestions for a run that ran out of steps."""
    base_suggestion = "Try: 1) Increase max_steps, 2) Relax max_error, 3) Improve the initial approximation"

    if values and len(values) > 3:
        trend = _analyze_sequence_trend(values)
        if trend == "oscillating":
            return base_suggestion + ", 4) Use a damped method (Krasnoselskii, Mann)"
        elif trend == "diverging":
            return base_suggestion + ", 4) Check that the map is contractive"

    return base_suggestion


def _generate_validation_suggestion(kind: ValidationKind, argument: str) -> str:
    """Generate a suggestion for a rejected argument."""
    if kind is ValidationKind.NOT_A_FUNCTION:
        return f"Pass a callable for '{argument}'"
    elif kind is ValidationKind.WRONG_ARITY:
        return f"Check the number of positional parameters '{argument}' accepts"
    elif kind is ValidationKind.NOT_FINITE:
        return f"Pass a finite real number for '{argument}'"
    elif kind is ValidationKind.OUT_OF_RANGE:
        return f"Move '{argument}' into its valid range"
    else:
        return f"Check the type of '{argument}'"


__all__ = [
    "ConvergenceError",
    "CycleDetectedError",
    "FixpointError",
    "NumericalInstabilityError",
    "ReportFormatError",
    "ValidationError",
    "ValidationKind",
]
