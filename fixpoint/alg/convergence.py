"""
Convergence tests for scalar fixed-point iterations.

Each test is a pure predicate over a tolerance and the most recent
approximations. The iteration engine calls a test with
``(max_error, x, x_prev1, x_prev2, values)``, passing only as many leading
arguments as the test accepts, so the two-value tests below can be used
directly as ``convergence_test`` options.

NaN handling:
    Every comparison involving NaN is False, so a NaN approximation is always
    reported as non-convergent. Infinite values can satisfy the arithmetic
    branch (``inf <= inf``); rejecting them is the engine's divergence check.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fixpoint.utils.numerics import MIN_NORMAL

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


def absolute_error_test(max_error: float, a: float, b: float) -> bool:
    """
    Absolute error test: ``|a - b| <= max_error``.

    Args:
        max_error: Maximum accepted absolute error
        a: First value
        b: Second value

    Returns:
        True if the absolute difference does not exceed ``max_error``
    """
    return abs(a - b) <= max_error


def relative_error_test(max_error: float, a: float, b: float) -> bool:
    """
    Relative error test for two values.

    Equal values pass immediately (this also covers equal infinities).
    Differences smaller than ``max_error * MIN_NORMAL`` pass because a
    relative error is meaningless that close to zero. Otherwise the
    difference is compared against ``max_error * max(|a|, |b|)``.

    Args:
        max_error: Maximum accepted relative error
        a: First value
        b: Second value

    Returns:
        True if the relative error is smaller than ``max_error``

    Example:
        >>> relative_error_test(1e-3, 1000.0, 1000.5)
        True
        >>> relative_error_test(1e-3, 1.0, 1.5)
        False
    """
    if a == b:
        return True

    diff = abs(a - b)

    if diff < max_error * MIN_NORMAL:
        return True

    return diff < max_error * max(abs(a), abs(b))


def mixed_error_test(max_error: float, x: float, x_prev1: float, x_prev2: float) -> bool:
    """
    Mixed absolute/relative test using the last three approximations.

    The absolute error is estimated as
    ``|x - x_prev1| + |x_prev1 - x_prev2|`` and accepted when it does not
    exceed ``max_error * (1 + |x|)``. This behaves like an absolute test
    near zero and like a relative test for large magnitudes, which is why
    it is the default.

    Args:
        max_error: Maximum accepted error
        x: Current approximation
        x_prev1: Previous approximation
        x_prev2: Approximation before the previous one

    Returns:
        True if the estimated error is within tolerance
    """
    if x == x_prev1:
        return True

    err = abs(x - x_prev1) + abs(x_prev1 - x_prev2)
    return err <= max_error * (1 + abs(x))


# Short public names, usable directly as ``convergence_test`` values
absolute_test = absolute_error_test
relative_test = relative_error_test
mixed_test = mixed_error_test


CONVERGENCE_TESTS: dict[str, Callable[..., bool]] = {
    "absolute": absolute_error_test,
    "relative": relative_error_test,
    "mixed": mixed_error_test,
}


def get_convergence_test(name: str | Callable[..., bool]) -> Callable[..., bool]:
    """
    Get a convergence test by name or return a custom callable unchanged.

    Args:
        name: ``"absolute"``, ``"relative"``, ``"mixed"`` or a callable

    Returns:
        Convergence test function

    Raises:
        ValueError: If the named test is not registered
    """
    if callable(name):
        return name

    if name not in CONVERGENCE_TESTS:
        raise ValueError(f"Unknown convergence test: {name}. Available: {list(CONVERGENCE_TESTS.keys())}")

    return CONVERGENCE_TESTS[name]


def bind_convergence_test(test: Callable[..., bool], nargs: int) -> Callable[..., bool]:
    """
    Adapt a convergence test to the engine's five-argument call.

    Args:
        test: Convergence test accepting ``nargs`` leading arguments
        nargs: Number of positional arguments ``test`` takes (3 to 5)

    Returns:
        Callable taking ``(max_error, x, x_prev1, x_prev2, values)``
    """
    if nargs >= 5:
        return test

    def _bound(max_error: float, x: float, x_prev1: float, x_prev2: float, values: Sequence[float]) -> bool:
        return test(*(max_error, x, x_prev1, x_prev2, values)[:nargs])

    return _bound


__all__ = [
    "CONVERGENCE_TESTS",
    "absolute_error_test",
    "absolute_test",
    "bind_convergence_test",
    "get_convergence_test",
    "mixed_error_test",
    "mixed_test",
    "relative_error_test",
    "relative_test",
]
