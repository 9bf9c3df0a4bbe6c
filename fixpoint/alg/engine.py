"""
Generic fixed-point iteration engine.

Drives the sequence x0, x1, x2, ... by repeatedly applying a transition
function ``x_{n+1} = T(x_n, n)``. Every step, in order:

1. compute and store the next approximation
2. run the convergence test; otherwise stop if the step budget is spent
3. flag a NaN/infinite approximation as divergence, overriding step 2
4. otherwise, if the step did not converge and cycle checking is on, scan
   the earlier approximations for an exact repeat

The divergence check runs after the convergence test so that an infinite
value that passes the test's arithmetic is still reported as divergent. The
offending value is kept in the sequence for inspection.
"""

from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING

from fixpoint.config.core import resolve_config
from fixpoint.utils.logger import get_logger, log_run_completion, log_run_start, log_step
from fixpoint.utils.result import IterationResult, IterationStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    from fixpoint.config.core import IterationConfig

logger = get_logger(__name__)

BUDGET_EXHAUSTED_MESSAGE = "Maximum number of iterations was reached."
DIVERGED_MESSAGE = "Iteration is divergent (numerical error)."


def cycle_message(first: int, second: int) -> str:
    return f"Iteration is divergent (cycle detected between iterations #{first} and #{second})."


def find_repeat(values: list[float], x: float, stop: int) -> int | None:
    """Index of the first of ``values[:stop]`` exactly equal to ``x``, or None."""
    for i in range(stop):
        if values[i] == x:
            return i
    return None


def _apply(transition: Callable[[float, int], float], x: float, n: int) -> float:
    # Python signals a non-finite IEEE result by raising (1/0, math.sqrt(-1),
    # overflow in ** and math.exp) or by returning a complex (negative ** 0.5);
    # all of these end the run as divergent
    try:
        value = transition(x, n)
    except (OverflowError, ZeroDivisionError, ValueError) as e:
        logger.debug(f"Transition failed at step {n + 1}: {e}")
        return math.nan

    if isinstance(value, complex):
        logger.debug(f"Transition returned complex value {value!r} at step {n + 1}")
        return math.nan

    try:
        return float(value)
    except OverflowError:
        # int too large for a float
        logger.debug(f"Transition overflowed at step {n + 1}")
        return math.nan


def run_iteration(
    transition: Callable[[float, int], float],
    x0: float,
    options: IterationConfig | Mapping[str, Any] | None = None,
    method_name: str = "iterate",
) -> IterationResult:
    """
    Run a fixed-point iteration until convergence, divergence, a cycle, or the step budget.

    Args:
        transition: Update rule ``(x, n) -> x_next``; ``n`` is the 0-based step index
        x0: Initial approximation, assumed already validated
        options: ``IterationConfig`` or mapping of option names
        method_name: Name recorded on the result and in log messages

    Returns:
        IterationResult with the full sequence and the terminal status

    Raises:
        ValidationError: If ``options`` contains an invalid known option
    """
    config, warning = resolve_config(options)
    if warning is not None:
        logger.warning(warning)

    convergence_test = config.bound_convergence_test()
    x0 = float(x0)
    max_error = config.max_error
    max_steps = config.max_steps
    check_cycles = config.check_cycles

    log_run_start(
        logger,
        method_name,
        x0,
        {"max_error": max_error, "max_steps": max_steps, "check_cycles": check_cycles},
    )
    start_time = time.perf_counter()

    values = [x0]
    x = x_prev1 = x_prev2 = x0
    n = 0
    status = None
    error_message = None
    cycle = None

    while status is None:
        x = _apply(transition, x, n)
        values.append(x)
        n += 1
        log_step(logger, n, x, max_steps)

        if convergence_test(max_error, x, x_prev1, x_prev2, values):
            status = IterationStatus.CONVERGED
        elif n == max_steps:
            status = IterationStatus.BUDGET_EXHAUSTED
            error_message = BUDGET_EXHAUSTED_MESSAGE

        if not math.isfinite(x):
            status = IterationStatus.DIVERGED
            error_message = DIVERGED_MESSAGE
        elif check_cycles and status is not IterationStatus.CONVERGED:
            i = find_repeat(values, x, n)
            if i is not None:
                status = IterationStatus.CYCLE_DETECTED
                error_message = cycle_message(i, n)
                cycle = (i, n)

        x_prev2 = x_prev1
        x_prev1 = x

    log_run_completion(logger, method_name, status.value, n, x, time.perf_counter() - start_time)

    return IterationResult(
        values=tuple(values),
        num_steps=n,
        x0=x0,
        status=status,
        xn=x if error_message is None else None,
        warning_message=warning,
        error_message=error_message,
        cycle=cycle,
        method_name=method_name,
    )


__all__ = ["BUDGET_EXHAUSTED_MESSAGE", "DIVERGED_MESSAGE", "cycle_message", "find_repeat", "run_iteration"]
