"""
Structured result objects returned by the fixed-point iteration entry points.

Every public entry point returns data rather than raising:

- ``IterationResult`` for a run that started (converged or not)
- ``ValidationFailure`` when an argument was rejected before the first step
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from fixpoint.utils.exceptions import (
    ConvergenceError,
    CycleDetectedError,
    NumericalInstabilityError,
    ValidationError,
    ValidationKind,
)


class IterationStatus(Enum):
    """Terminal state of an iteration run."""

    CONVERGED = "converged"
    CYCLE_DETECTED = "cycle_detected"
    DIVERGED = "diverged"
    BUDGET_EXHAUSTED = "budget_exhausted"

    @property
    def is_error(self) -> bool:
        return self is not IterationStatus.CONVERGED


@dataclass(frozen=True)
class IterationResult:
    """
    Outcome of one fixed-point iteration run.

    Attributes:
        values: Every approximation produced, starting with x0
        num_steps: Number of steps performed, always ``len(values) - 1``
        x0: Initial approximation
        status: Terminal state of the run
        xn: Final approximation, None unless the run converged
        warning_message: Set when an unknown option was supplied
        error_message: Set for divergence, cycles and budget exhaustion
        cycle: Indices ``(i, n)`` of the repeated values for a detected cycle
        method_name: Iteration scheme that produced the run
    """

    values: tuple[float, ...]
    num_steps: int
    x0: float
    status: IterationStatus
    xn: float | None = None
    warning_message: str | None = None
    error_message: str | None = None
    cycle: tuple[int, int] | None = None
    method_name: str = "iterate"

    @property
    def converged(self) -> bool:
        return self.status is IterationStatus.CONVERGED

    @property
    def error_argument(self) -> None:
        """Runs never fail on an argument; present for a uniform interface with ``ValidationFailure``."""
        return None

    def raise_for_status(self) -> IterationResult:
        """
        Raise the matching exception if the run did not converge.

        Returns:
            self, so the call can be chained

        Raises:
            NumericalInstabilityError: The sequence produced NaN or infinity
            CycleDetectedError: The sequence repeated an earlier value
            ConvergenceError: The step budget was exhausted
        """
        if self.status is IterationStatus.DIVERGED:
            raise NumericalInstabilityError(self.num_steps, self.values[-1], method_name=self.method_name)
        if self.status is IterationStatus.CYCLE_DETECTED:
            first, second = self.cycle or (-1, self.num_steps)
            raise CycleDetectedError(first, second, method_name=self.method_name)
        if self.status is IterationStatus.BUDGET_EXHAUSTED:
            raise ConvergenceError(self.num_steps, list(self.values[-4:]), method_name=self.method_name)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary, omitting unset optional fields."""
        data: dict[str, Any] = {
            "values": list(self.values),
            "num_steps": self.num_steps,
            "x0": self.x0,
            "status": self.status.value,
        }
        for key in ("xn", "warning_message", "error_message"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    def __repr__(self) -> str:
        return (
            f"IterationResult(method={self.method_name}, status={self.status.value}, "
            f"num_steps={self.num_steps}, xn={self.xn})"
        )


@dataclass(frozen=True)
class ValidationFailure:
    """
    An argument rejected before any iteration step ran.

    Attributes:
        error_message: Human readable description
        error_argument: Name of the offending argument, e.g. "f", "x0",
            "options.max_error"
        kind: Category of the failure
        method_name: Entry point that rejected the call
    """

    error_message: str
    error_argument: str
    kind: ValidationKind
    method_name: str = "iterate"

    @classmethod
    def from_error(cls, error: ValidationError, method_name: str) -> ValidationFailure:
        return cls(
            error_message=error.message,
            error_argument=error.argument,
            kind=error.kind,
            method_name=method_name,
        )

    @property
    def converged(self) -> bool:
        return False

    @property
    def xn(self) -> None:
        return None

    @property
    def warning_message(self) -> None:
        return None

    def raise_for_status(self) -> ValidationFailure:
        """Re-raise the failure as a ``ValidationError``."""
        raise ValidationError(self.kind, self.error_argument, self.error_message, method_name=self.method_name)

    def to_dict(self) -> dict[str, Any]:
        return {"error_message": self.error_message, "error_argument": self.error_argument}


IterationOutcome = IterationResult | ValidationFailure


__all__ = ["IterationOutcome", "IterationResult", "IterationStatus", "ValidationFailure"]
