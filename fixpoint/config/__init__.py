"""
Run configuration for fixpoint.

Configurations specify HOW to iterate (tolerance, step budget, cycle
checking, convergence test). Options are validated with Pydantic before
the first iteration step runs.

Quick Start
-----------
>>> from fixpoint import picard
>>> from fixpoint.config import IterationConfig
>>> config = IterationConfig(max_error=1e-10, convergence_test="relative")
>>> result = picard(lambda x: x / 2 + 1, 0.0, config)
"""

from .core import KNOWN_OPTIONS, IterationConfig, resolve_config

__all__ = ["KNOWN_OPTIONS", "IterationConfig", "resolve_config"]
