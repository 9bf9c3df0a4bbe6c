"""
Step-size sequences for the Mann and Ishikawa iterations.

A schedule maps the 0-based step index n to a weight in [0, 1]. The Mann
iteration converges for nonexpansive maps when the weights stay away from
1 and their sum diverges, which the harmonic and power schedules satisfy.

Any schedule can be passed by name to ``mann``/``ishikawa``:

>>> from fixpoint import mann
>>> result = mann(lambda x: 1 - x, "harmonic", 0.0)
"""

from __future__ import annotations

from typing import Protocol

import numpy as np


class StepSizeSchedule(Protocol):
    """Protocol for step-size schedules."""

    def __call__(self, n: int) -> float:
        """
        Compute the weight for a step.

        Args:
            n: Step index (0-indexed)

        Returns:
            Weight in [0, 1]
        """
        ...


def harmonic_schedule(n: int) -> float:
    """
    Harmonic weights: a(n) = 1 / (n + 2).

    Shifted by one against the textbook 1/(n+1) so the first weight is 1/2
    instead of 1; a first weight of 1 makes the first Mann step a plain
    Picard step.

    Properties:
        - Sum diverges (ensures progress)
        - Weights decrease to 0

    Example:
        >>> [harmonic_schedule(n) for n in range(4)]
        [0.5, 0.333..., 0.25, 0.2]
    """
    return 1.0 / (n + 2)


def sqrt_schedule(n: int) -> float:
    """
    Square root weights: a(n) = 1 / sqrt(n + 2).

    Decays slower than harmonic, giving larger steps for longer.

    Example:
        >>> [sqrt_schedule(n) for n in range(3)]
        [0.707..., 0.577..., 0.5]
    """
    return float(1.0 / np.sqrt(n + 2))


def polynomial_schedule(n: int, power: float = 0.6) -> float:
    """
    Polynomial weights: a(n) = 1 / (n + 2)^power.

    Interpolates between constant (power=0), sqrt (power=0.5) and harmonic
    (power=1) schedules.

    Args:
        n: Step index (0-indexed)
        power: Decay exponent (default 0.6)
    """
    return 1.0 / (n + 2) ** power


def constant_schedule(alpha: float = 0.5) -> StepSizeSchedule:
    """
    Constant weights. With a constant schedule the Mann iteration is the
    Krasnoselskii iteration with lambda = alpha.

    Example:
        >>> schedule = constant_schedule(0.7)
        >>> [schedule(n) for n in range(3)]
        [0.7, 0.7, 0.7]
    """

    def _schedule(n: int) -> float:
        return alpha

    return _schedule


def warmup_schedule(
    warmup_steps: int = 10,
    base_schedule: StepSizeSchedule = harmonic_schedule,
) -> StepSizeSchedule:
    """
    Linear warmup followed by a base schedule.

    Starts with a small weight and increases it linearly to 1.0 over
    ``warmup_steps`` steps, then follows ``base_schedule``.

    Example:
        >>> schedule = warmup_schedule(4)
        >>> [schedule(n) for n in range(6)]
        [0.25, 0.5, 0.75, 1.0, 0.5, 0.333...]
    """

    def _schedule(n: int) -> float:
        if n < warmup_steps:
            return (n + 1) / warmup_steps
        return base_schedule(n - warmup_steps)

    return _schedule


def _polynomial_default(n: int) -> float:
    return polynomial_schedule(n, power=0.6)


# Registry of named schedules
STEP_SIZE_SCHEDULES: dict[str, StepSizeSchedule] = {
    "harmonic": harmonic_schedule,
    "sqrt": sqrt_schedule,
    "polynomial": _polynomial_default,
    "constant": constant_schedule(0.5),
}


def get_schedule(name: str | StepSizeSchedule) -> StepSizeSchedule:
    """
    Get a step-size schedule by name or return a custom callable unchanged.

    Args:
        name: Schedule name ("harmonic", "sqrt", "polynomial", "constant")
              or a custom callable

    Returns:
        Schedule function

    Raises:
        ValueError: If the named schedule is not registered

    Example:
        >>> get_schedule("harmonic")(0)
        0.5
        >>> get_schedule(lambda n: 0.1)(100)
        0.1
    """
    if callable(name):
        return name

    if name not in STEP_SIZE_SCHEDULES:
        raise ValueError(f"Unknown step-size schedule: {name}. Available: {list(STEP_SIZE_SCHEDULES.keys())}")

    return STEP_SIZE_SCHEDULES[name]


__all__ = [
    "STEP_SIZE_SCHEDULES",
    "StepSizeSchedule",
    "constant_schedule",
    "get_schedule",
    "harmonic_schedule",
    "polynomial_schedule",
    "sqrt_schedule",
    "warmup_schedule",
]
