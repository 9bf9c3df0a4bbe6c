"""
fixpoint: fixed points of scalar real functions by iterative approximation.

>>> import math
>>> import fixpoint
>>> result = fixpoint.picard(math.cos, 1.0)
>>> result.converged
True
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fixpoint")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .alg import (  # noqa: E402
    absolute_test,
    get_schedule,
    ishikawa,
    iterate,
    krasnoselskii,
    mann,
    mixed_test,
    picard,
    relative_test,
)
from .config import IterationConfig  # noqa: E402
from .utils import (  # noqa: E402
    MACHINE_EPSILON,
    MIN_NORMAL,
    FixpointError,
    IterationResult,
    IterationStatus,
    ValidationError,
    ValidationFailure,
    configure_logging,
)
from .utils.reporting import compare  # noqa: E402

__all__ = [
    "MACHINE_EPSILON",
    "MIN_NORMAL",
    "FixpointError",
    "IterationConfig",
    "IterationResult",
    "IterationStatus",
    "ValidationError",
    "ValidationFailure",
    "__version__",
    "absolute_test",
    "compare",
    "configure_logging",
    "get_schedule",
    "ishikawa",
    "iterate",
    "krasnoselskii",
    "mann",
    "mixed_test",
    "picard",
    "relative_test",
]
