#!/usr/bin/env python3
"""
Unit tests for fixpoint/alg/convergence.py

Tests the convergence predicates and their registry:
- absolute_error_test
- relative_error_test (equality shortcut, subnormal floor)
- mixed_error_test
- get_convergence_test / bind_convergence_test
"""

import math

import pytest

from fixpoint.alg.convergence import (
    CONVERGENCE_TESTS,
    absolute_error_test,
    absolute_test,
    bind_convergence_test,
    get_convergence_test,
    mixed_error_test,
    mixed_test,
    relative_error_test,
    relative_test,
)
from fixpoint.utils.numerics import MACHINE_EPSILON, MIN_NORMAL

# =============================================================================
# Absolute Test
# =============================================================================


@pytest.mark.unit
def test_absolute_within_tolerance():
    """Test values closer than max_error pass."""
    assert absolute_error_test(1e-3, 1.0, 1.0005)


@pytest.mark.unit
def test_absolute_outside_tolerance():
    """Test values farther apart than max_error fail."""
    assert not absolute_error_test(1e-3, 1.0, 1.002)


@pytest.mark.unit
def test_absolute_boundary_is_inclusive():
    """Test a difference exactly equal to max_error passes."""
    assert absolute_error_test(0.5, 1.0, 1.5)


@pytest.mark.unit
def test_absolute_is_symmetric():
    """Test argument order does not matter."""
    assert absolute_error_test(0.1, 2.0, 2.05) == absolute_error_test(0.1, 2.05, 2.0)


@pytest.mark.unit
def test_absolute_nan_fails():
    """Test NaN never passes."""
    assert not absolute_error_test(1.0, math.nan, 0.0)


# =============================================================================
# Relative Test
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("value", [0.0, -3.5, 1e300, math.inf, -math.inf])
def test_relative_equal_values_pass(value):
    """Test equal values pass regardless of magnitude, including infinities."""
    assert relative_error_test(1e-7, value, value)


@pytest.mark.unit
def test_relative_nan_fails():
    """Test NaN is never equal to itself and fails."""
    assert not relative_error_test(1e-7, math.nan, math.nan)


@pytest.mark.unit
def test_relative_scales_with_magnitude():
    """Test the accepted difference grows with the values."""
    assert relative_error_test(1e-3, 1000.0, 1000.5)
    assert not relative_error_test(1e-3, 1.0, 1.5)


@pytest.mark.unit
def test_relative_below_subnormal_floor_passes():
    """Test differences below max_error * MIN_NORMAL pass near zero."""
    assert relative_error_test(1e-7, 0.0, 1e-320)
    assert 1e-320 < 1e-7 * MIN_NORMAL


@pytest.mark.unit
def test_relative_zero_against_tiny_normal_fails():
    """Test zero and a tiny normal value are relatively far apart."""
    assert not relative_error_test(1e-7, 0.0, 1e-300)


@pytest.mark.unit
def test_relative_boundary_is_strict():
    """Test a difference exactly at the relative bound fails."""
    assert not relative_error_test(0.5, 1.0, 2.0)


# =============================================================================
# Mixed Test
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("x", [0.0, 1.0, -7.25, 1e200])
def test_mixed_constant_sequence_passes(x):
    """Test a sequence that stopped moving passes even at machine epsilon."""
    assert mixed_error_test(MACHINE_EPSILON, x, x, x)


@pytest.mark.unit
def test_mixed_small_steps_pass():
    """Test two small consecutive differences pass."""
    assert mixed_error_test(1e-7, 1.0, 1.00000001, 1.00000002)


@pytest.mark.unit
def test_mixed_large_steps_fail():
    """Test large consecutive differences fail."""
    assert not mixed_error_test(1e-7, 1.0, 1.1, 1.2)


@pytest.mark.unit
def test_mixed_uses_second_previous_value():
    """Test a small last step does not pass when the step before was large."""
    assert not mixed_error_test(1e-3, 1.0, 1.0001, 2.0)
    assert mixed_error_test(1e-3, 1.0, 1.0001, 1.0002)


@pytest.mark.unit
def test_mixed_relative_for_large_values():
    """Test the bound scales with 1 + |x|."""
    assert mixed_error_test(1e-7, 1e9, 1e9 + 10, 1e9 + 20)
    assert not mixed_error_test(1e-7, 1.0, 11.0, 21.0)


@pytest.mark.unit
def test_mixed_nan_fails():
    """Test a NaN approximation is never accepted."""
    assert not mixed_error_test(1e-7, math.nan, math.nan, math.nan)
    assert not mixed_error_test(1e-7, math.nan, 1.0, 1.0)


@pytest.mark.unit
def test_mixed_infinity_passes_arithmetic():
    """Test an infinite value satisfies inf <= inf; divergence is the engine's job."""
    assert mixed_error_test(1e-7, math.inf, 1.0, 1.0)


# =============================================================================
# Registry and Binding
# =============================================================================


@pytest.mark.unit
def test_short_aliases():
    """Test public aliases point at the implementations."""
    assert absolute_test is absolute_error_test
    assert relative_test is relative_error_test
    assert mixed_test is mixed_error_test


@pytest.mark.unit
@pytest.mark.parametrize("name", ["absolute", "relative", "mixed"])
def test_get_convergence_test_by_name(name):
    """Test registered names resolve."""
    assert get_convergence_test(name) is CONVERGENCE_TESTS[name]


@pytest.mark.unit
def test_get_convergence_test_callable_passthrough():
    """Test custom callables are returned unchanged."""

    def custom(max_error, x, x_prev1):
        return True

    assert get_convergence_test(custom) is custom


@pytest.mark.unit
def test_get_convergence_test_unknown_name():
    """Test unknown names raise ValueError listing the choices."""
    with pytest.raises(ValueError, match="Unknown convergence test"):
        get_convergence_test("quadratic")


@pytest.mark.unit
def test_bind_three_argument_test():
    """Test a three-argument test receives only the leading arguments."""
    received = []

    def custom(max_error, x, x_prev1):
        received.append((max_error, x, x_prev1))
        return False

    bound = bind_convergence_test(custom, 3)
    assert bound(0.1, 2.0, 3.0, 4.0, [4.0, 3.0, 2.0]) is False
    assert received == [(0.1, 2.0, 3.0)]


@pytest.mark.unit
def test_bind_five_argument_test_unchanged():
    """Test a five-argument test is used as is."""

    def custom(max_error, x, x_prev1, x_prev2, values):
        return len(values) > 2

    assert bind_convergence_test(custom, 5) is custom


@pytest.mark.unit
def test_bind_mixed_test():
    """Test the four-argument mixed test works through the engine's call shape."""
    bound = bind_convergence_test(mixed_error_test, 4)
    assert bound(1e-7, 1.0, 1.0, 1.0, [1.0, 1.0, 1.0])
    assert not bound(1e-7, 1.0, 1.1, 1.2, [1.2, 1.1, 1.0])
