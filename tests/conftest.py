"""
Pytest configuration and shared fixtures for the fixpoint test suite.

This module provides common fixtures, test configuration, and utilities
used across the entire test suite.
"""

import math

import pytest

from fixpoint.utils.logger import configure_logging

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (slower, cross-component)")
    config.addinivalue_line("markers", "mathematical: Mathematical property validation tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/mathematical/" in test_path:
            item.add_marker(pytest.mark.mathematical)


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the default logging configuration after every test."""
    yield
    configure_logging(level="WARNING", use_colors=False)


# =============================================================================
# Map Fixtures
# =============================================================================


@pytest.fixture
def cosine_fixed_point():
    """Fixed point of cos, the Dottie number."""
    return 0.7390851332151607


@pytest.fixture
def affine_contraction():
    """Contraction x -> x/2 + 1 with fixed point 2."""
    return lambda x: x / 2 + 1


@pytest.fixture
def reflection():
    """Nonexpansive map x -> 1 - x; Picard oscillates, averaging converges to 0.5."""
    return lambda x: 1 - x


@pytest.fixture(params=[math.cos, math.sin, math.atan])
def contraction_near_fixed_point(request):
    """Maps that contract around their fixed point."""
    return request.param


@pytest.fixture
def tolerance_levels():
    """Different tolerance levels for testing convergence."""
    return {"strict": 1e-12, "normal": 1e-7, "relaxed": 1e-4, "loose": 1e-2}
