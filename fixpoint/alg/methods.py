"""
Fixed-point iteration schemes.

Each scheme wraps the user's function into a transition ``T(x, n)`` and
hands it to the generic engine:

- ``iterate``:       x_{n+1} = f(x_n, n)
- ``picard``:        x_{n+1} = f(x_n)
- ``krasnoselskii``: x_{n+1} = (1 - lam) x_n + lam f(x_n)
- ``mann``:          x_{n+1} = (1 - a_n) x_n + a_n f(x_n)
- ``ishikawa``:      y_n = (1 - b_n) x_n + b_n f(x_n)
                     x_{n+1} = (1 - a_n) x_n + a_n f(y_n)

All entry points validate their arguments before the first step and return
a ``ValidationFailure`` instead of raising when an argument is rejected.

Example:
    >>> import math
    >>> from fixpoint import picard
    >>> result = picard(math.cos, 1.0)
    >>> result.converged, round(result.xn, 6)
    (True, 0.739085)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fixpoint.alg.engine import run_iteration
from fixpoint.alg.schedules import STEP_SIZE_SCHEDULES
from fixpoint.utils.exceptions import ValidationError, ValidationKind
from fixpoint.utils.logger import get_logger, log_validation_error
from fixpoint.utils.result import ValidationFailure
from fixpoint.utils.validation import validate_function, validate_initial_value, validate_unit_interval

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    from fixpoint.alg.schedules import StepSizeSchedule
    from fixpoint.config.core import IterationConfig
    from fixpoint.utils.result import IterationOutcome

    Options = IterationConfig | Mapping[str, Any] | None

logger = get_logger(__name__)


def _rejected(error: ValidationError, method_name: str) -> ValidationFailure:
    log_validation_error(logger, method_name, error.message, error.argument)
    return ValidationFailure.from_error(error, method_name)


def _resolve_sequence(sequence: Any, argument: str) -> StepSizeSchedule:
    """Resolve a schedule name and check the sequence is unary."""
    if isinstance(sequence, str):
        if sequence not in STEP_SIZE_SCHEDULES:
            raise ValidationError(
                ValidationKind.OUT_OF_RANGE,
                argument,
                f"One of {sorted(STEP_SIZE_SCHEDULES)} or a function is expected.",
                provided_value=sequence,
            )
        sequence = STEP_SIZE_SCHEDULES[sequence]

    validate_function(sequence, 1, argument)
    return sequence


def iterate(f: Callable[[float, int], float], x0: float, options: Options = None) -> IterationOutcome:
    """
    Compute a fixed point with a generic iteration formula ``x_{n+1} = f(x_n, n)``.

    Args:
        f: Transition taking the current approximation and the 0-based step index
        x0: Initial approximation
        options: ``IterationConfig`` or mapping with ``max_error``,
            ``max_steps``, ``check_cycles``, ``convergence_test``

    Returns:
        IterationResult, or ValidationFailure if an argument was rejected
    """
    try:
        validate_function(f, 2, "f")
        validate_initial_value(x0)
        return run_iteration(f, x0, options, method_name="iterate")
    except ValidationError as err:
        return _rejected(err, "iterate")


def picard(f: Callable[[float], float], x0: float, options: Options = None) -> IterationOutcome:
    """
    Compute a fixed point with the Picard (direct substitution) iteration.

    Args:
        f: Function whose fixed point is sought
        x0: Initial approximation
        options: Run configuration, see ``iterate``

    Returns:
        IterationResult, or ValidationFailure if an argument was rejected
    """

    def transition(x: float, n: int) -> float:
        return f(x)

    try:
        validate_function(f, 1, "f")
        validate_initial_value(x0)
        return run_iteration(transition, x0, options, method_name="picard")
    except ValidationError as err:
        return _rejected(err, "picard")


def krasnoselskii(f: Callable[[float], float], lam: float, x0: float, options: Options = None) -> IterationOutcome:
    """
    Compute a fixed point with the Krasnoselskii iteration.

    ``x_{n+1} = (1 - lam) x_n + lam f(x_n)``. ``lam = 1`` is the Picard
    iteration; ``lam = 0`` never moves from ``x0``.

    Args:
        f: Function whose fixed point is sought
        lam: Averaging constant in [0, 1]
        x0: Initial approximation
        options: Run configuration, see ``iterate``

    Returns:
        IterationResult, or ValidationFailure if an argument was rejected
    """

    def transition(x: float, n: int) -> float:
        return (1 - lam) * x + lam * f(x)

    try:
        validate_function(f, 1, "f")
        validate_initial_value(x0)
        validate_unit_interval(lam, "lambda")
        return run_iteration(transition, x0, options, method_name="krasnoselskii")
    except ValidationError as err:
        return _rejected(err, "krasnoselskii")


def mann(
    f: Callable[[float], float],
    alpha: StepSizeSchedule | str,
    x0: float,
    options: Options = None,
) -> IterationOutcome:
    """
    Compute a fixed point with the Mann iteration.

    ``x_{n+1} = (1 - a_n) x_n + a_n f(x_n)`` with ``a_n = alpha(n)``.

    Args:
        f: Function whose fixed point is sought
        alpha: Weight sequence ``n -> a_n`` or a schedule name
            ("harmonic", "sqrt", "polynomial", "constant")
        x0: Initial approximation
        options: Run configuration, see ``iterate``

    Returns:
        IterationResult, or ValidationFailure if an argument was rejected
    """
    try:
        validate_function(f, 1, "f")
        validate_initial_value(x0)
        alpha_n = _resolve_sequence(alpha, "alpha")
    except ValidationError as err:
        return _rejected(err, "mann")

    def transition(x: float, n: int) -> float:
        a = alpha_n(n)
        return (1 - a) * x + a * f(x)

    try:
        return run_iteration(transition, x0, options, method_name="mann")
    except ValidationError as err:
        return _rejected(err, "mann")


def ishikawa(
    f: Callable[[float], float],
    alpha: StepSizeSchedule | str,
    beta: StepSizeSchedule | str,
    x0: float,
    options: Options = None,
) -> IterationOutcome:
    """
    Compute a fixed point with the Ishikawa iteration.

    Two-step scheme with ``a_n = alpha(n)`` and ``b_n = beta(n)``::

        y_n     = (1 - b_n) x_n + b_n f(x_n)
        x_{n+1} = (1 - a_n) x_n + a_n f(y_n)

    Args:
        f: Function whose fixed point is sought
        alpha: Outer weight sequence or schedule name
        beta: Inner weight sequence or schedule name
        x0: Initial approximation
        options: Run configuration, see ``iterate``

    Returns:
        IterationResult, or ValidationFailure if an argument was rejected
    """
    try:
        validate_function(f, 1, "f")
        validate_initial_value(x0)
        alpha_n = _resolve_sequence(alpha, "alpha")
        beta_n = _resolve_sequence(beta, "beta")
    except ValidationError as err:
        return _rejected(err, "ishikawa")

    def transition(x: float, n: int) -> float:
        a = alpha_n(n)
        b = beta_n(n)
        y = (1 - b) * x + b * f(x)
        return (1 - a) * x + a * f(y)

    try:
        return run_iteration(transition, x0, options, method_name="ishikawa")
    except ValidationError as err:
        return _rejected(err, "ishikawa")


METHODS: dict[str, Callable[..., IterationOutcome]] = {
    "iterate": iterate,
    "picard": picard,
    "krasnoselskii": krasnoselskii,
    "mann": mann,
    "ishikawa": ishikawa,
}


__all__ = ["METHODS", "ishikawa", "iterate", "krasnoselskii", "mann", "picard"]
