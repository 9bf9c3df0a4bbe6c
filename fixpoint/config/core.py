"""
Run configuration for the fixed-point iteration engine.

Configurations specify HOW to iterate (tolerance, step budget, cycle
checking, convergence test), not WHAT to iterate (the map and the initial
approximation are call arguments).

Options may be passed as an ``IterationConfig`` or as a plain mapping:

>>> from fixpoint.config import IterationConfig, resolve_config
>>> config = IterationConfig(max_error=1e-10, max_steps=50)
>>> config, warning = resolve_config({"max_steps": 50, "verbose": True})
>>> warning
'Invalid optional argument found: verbose.'
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from fixpoint.alg.convergence import CONVERGENCE_TESTS, bind_convergence_test, get_convergence_test, mixed_error_test
from fixpoint.utils.exceptions import ValidationError, ValidationKind
from fixpoint.utils.numerics import MACHINE_EPSILON, is_finite_real, is_real_number
from fixpoint.utils.validation import validate_arity_range

# The engine supplies (max_error, x, x_prev1, x_prev2, values)
CONVERGENCE_TEST_MIN_ARGS = 3
CONVERGENCE_TEST_MAX_ARGS = 5


class _OptionRejected(ValueError):
    """Carries the validation kind through pydantic's error wrapping."""

    def __init__(self, kind: ValidationKind, message: str):
        self.kind = kind
        super().__init__(message)


class IterationConfig(BaseModel):
    """
    Configuration for one fixed-point iteration run.

    Attributes
    ----------
    max_error : float
        Accepted error passed to the convergence test (default: 1e-7).
        Must be finite, positive and not below machine epsilon.
    max_steps : int
        Step budget; the run stops after this many steps (default: 1000)
    check_cycles : bool
        Detect exact repetitions of earlier values (default: True).
        Costs O(n) per step, O(n^2) per run.
    convergence_test : Callable
        Predicate called with ``(max_error, x, x_prev1, x_prev2, values)``,
        truncated to the number of arguments it accepts (at least 3).
        Registered names "absolute", "relative" and "mixed" are accepted
        (default: mixed error test).
    """

    max_error: float = 1e-7
    max_steps: int = 1000
    check_cycles: bool = True
    convergence_test: Callable[..., bool] = mixed_error_test

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("max_error", mode="before")
    @classmethod
    def validate_max_error(cls, v: Any) -> float:
        """Validate the error objective."""
        if not is_finite_real(v):
            raise _OptionRejected(ValidationKind.NOT_FINITE, "A finite positive real number is expected.")
        if v <= 0:
            raise _OptionRejected(ValidationKind.OUT_OF_RANGE, "A positive real number is expected.")
        if v < MACHINE_EPSILON:
            raise _OptionRejected(
                ValidationKind.OUT_OF_RANGE,
                "A positive real number greater than machine epsilon is expected.",
            )
        return float(v)

    @field_validator("max_steps", mode="before")
    @classmethod
    def validate_max_steps(cls, v: Any) -> int:
        """Validate the step budget."""
        if not is_real_number(v):
            raise _OptionRejected(ValidationKind.NOT_FINITE, "A finite number is expected.")
        # Integers of any size are valid budgets; only floats need the finiteness check
        if not isinstance(v, (int, np.integer)):
            if not math.isfinite(v):
                raise _OptionRejected(ValidationKind.NOT_FINITE, "A finite number is expected.")
            if v != int(v):
                raise _OptionRejected(ValidationKind.WRONG_TYPE, "An integer number is expected.")
        if v < 1:
            raise _OptionRejected(ValidationKind.OUT_OF_RANGE, "A number greater than or equal to 1 is expected.")
        return int(v)

    @field_validator("check_cycles", mode="before")
    @classmethod
    def validate_check_cycles(cls, v: Any) -> bool:
        """Validate the cycle checking flag."""
        if not isinstance(v, bool):
            raise _OptionRejected(ValidationKind.WRONG_TYPE, "A boolean value is expected.")
        return v

    @field_validator("convergence_test", mode="before")
    @classmethod
    def validate_convergence_test(cls, v: Any) -> Callable[..., bool]:
        """Resolve registered names and check the test's arity."""
        if isinstance(v, str):
            try:
                return get_convergence_test(v)
            except ValueError as err:
                raise _OptionRejected(
                    ValidationKind.OUT_OF_RANGE,
                    f"One of {sorted(CONVERGENCE_TESTS)} or a function is expected.",
                ) from err

        try:
            validate_arity_range(v, CONVERGENCE_TEST_MIN_ARGS, CONVERGENCE_TEST_MAX_ARGS, "convergence_test")
        except ValidationError as err:
            raise _OptionRejected(err.kind, err.message) from err
        return v

    def bound_convergence_test(self) -> Callable[..., bool]:
        """Return the convergence test adapted to the engine's five-argument call."""
        nargs = validate_arity_range(
            self.convergence_test, CONVERGENCE_TEST_MIN_ARGS, CONVERGENCE_TEST_MAX_ARGS, "convergence_test"
        )
        return bind_convergence_test(self.convergence_test, nargs)


KNOWN_OPTIONS = frozenset(IterationConfig.model_fields)


def resolve_config(options: IterationConfig | Mapping[str, Any] | None = None) -> tuple[IterationConfig, str | None]:
    """
    Build an ``IterationConfig`` from user options.

    Keys whose value is None fall back to their default. Unknown keys are
    ignored; the first one found is reported in the returned warning.

    Args:
        options: Configuration object, mapping of option names, or None

    Returns:
        Tuple of (config, warning message or None)

    Raises:
        ValidationError: If a known option has a wrong type or value
    """
    if options is None:
        return IterationConfig(), None

    if isinstance(options, IterationConfig):
        return options, None

    if not isinstance(options, Mapping):
        raise ValidationError(
            ValidationKind.WRONG_TYPE,
            "options",
            "A mapping of options or an IterationConfig is expected.",
            provided_value=options,
        )

    warning = None
    for key in options:
        if key not in KNOWN_OPTIONS:
            warning = f"Invalid optional argument found: {key}."
            break

    known = {key: value for key, value in options.items() if key in KNOWN_OPTIONS and value is not None}

    try:
        config = IterationConfig(**known)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "options"
        cause = first.get("ctx", {}).get("error")
        kind = cause.kind if isinstance(cause, _OptionRejected) else ValidationKind.WRONG_TYPE
        message = str(cause) if cause is not None else first["msg"]
        raise ValidationError(kind, f"options.{field}", message, provided_value=known.get(field)) from exc

    return config, warning


__all__ = ["KNOWN_OPTIONS", "IterationConfig", "resolve_config"]
