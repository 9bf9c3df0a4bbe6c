"""
Argument validation for the public iteration entry points.

Functions here raise ``ValidationError`` and are called once per entry
point before any iteration step runs.

The arity contract: a function "has N arguments" when it can be called with
exactly N positional arguments. The signature is read with
``inspect.signature``; NumPy ufuncs, which have no introspectable signature,
are checked through ``ufunc.nin``. Callables whose signature cannot be
determined at all are accepted.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

import numpy as np

from fixpoint.utils.exceptions import ValidationError, ValidationKind
from fixpoint.utils.numerics import is_finite_real

if TYPE_CHECKING:
    from collections.abc import Callable

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def positional_arity(func: Callable) -> tuple[int, float] | None:
    """
    Return the range of positional argument counts ``func`` accepts.

    Args:
        func: Any callable

    Returns:
        ``(required, maximum)`` where ``maximum`` is ``inf`` for ``*args``,
        or None if the signature cannot be determined
    """
    if isinstance(func, np.ufunc):
        return func.nin, func.nin

    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    required = 0
    maximum: float = 0
    for param in signature.parameters.values():
        if param.kind in _POSITIONAL:
            maximum += 1
            if param.default is inspect.Parameter.empty:
                required += 1
        elif param.kind is inspect.Parameter.VAR_POSITIONAL:
            maximum = float("inf")
        elif param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is inspect.Parameter.empty:
            # Cannot be called positionally at all
            return 0, -1

    return required, maximum


def _arguments_phrase(nargs: int) -> str:
    return "exactly 1 argument" if nargs == 1 else f"exactly {nargs} arguments"


def validate_function(func: Any, nargs: int, argument: str) -> None:
    """
    Check that ``func`` is callable with exactly ``nargs`` positional arguments.

    Args:
        func: Value to validate
        nargs: Expected number of positional arguments
        argument: Name of the argument, used in the error

    Raises:
        ValidationError: ``NOT_A_FUNCTION`` or ``WRONG_ARITY``
    """
    if not callable(func):
        raise ValidationError(
            ValidationKind.NOT_A_FUNCTION,
            argument,
            "A function is expected.",
            provided_value=func,
        )

    arity = positional_arity(func)
    if arity is None:
        return

    required, maximum = arity
    if not required <= nargs <= maximum:
        raise ValidationError(
            ValidationKind.WRONG_ARITY,
            argument,
            f"The function should have {_arguments_phrase(nargs)}.",
        )


def validate_arity_range(func: Any, low: int, high: int, argument: str) -> int:
    """
    Check that ``func`` can be called with between ``low`` and ``high`` positional arguments.

    Args:
        func: Value to validate
        low: Fewest positional arguments the caller may pass
        high: Most positional arguments the caller can supply
        argument: Name of the argument, used in the error

    Returns:
        Number of positional arguments to call ``func`` with: the largest
        count in ``[low, high]`` it accepts, or ``high`` if the signature
        cannot be determined

    Raises:
        ValidationError: ``NOT_A_FUNCTION`` or ``WRONG_ARITY``
    """
    if not callable(func):
        raise ValidationError(
            ValidationKind.NOT_A_FUNCTION,
            argument,
            "A function is expected.",
            provided_value=func,
        )

    arity = positional_arity(func)
    if arity is None:
        return high

    required, maximum = arity
    count = int(min(maximum, high))
    if count < low or count < required:
        raise ValidationError(
            ValidationKind.WRONG_ARITY,
            argument,
            f"The function should have at least {low} arguments.",
        )

    return count


def validate_initial_value(x0: Any, argument: str = "x0") -> None:
    """
    Check that ``x0`` is a finite real number.

    Raises:
        ValidationError: ``NOT_FINITE``
    """
    if not is_finite_real(x0):
        raise ValidationError(
            ValidationKind.NOT_FINITE,
            argument,
            "A finite real number is expected.",
            provided_value=x0,
        )


def validate_unit_interval(value: Any, argument: str) -> None:
    """
    Check that ``value`` is a finite real number in ``[0, 1]``.

    Raises:
        ValidationError: ``NOT_FINITE`` or ``OUT_OF_RANGE``
    """
    if not is_finite_real(value):
        raise ValidationError(
            ValidationKind.NOT_FINITE,
            argument,
            "A finite real number is expected.",
            provided_value=value,
        )

    if value < 0 or value > 1:
        raise ValidationError(
            ValidationKind.OUT_OF_RANGE,
            argument,
            "A real number between 0 and 1 is expected.",
            provided_value=value,
        )


__all__ = [
    "positional_arity",
    "validate_function",
    "validate_initial_value",
    "validate_arity_range",
    "validate_unit_interval",
]
