#!/usr/bin/env python3
"""
Pytest configuration and fixtures for precise summation tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import math
import pytest
import numpy as np
import torch
from fractions import Fraction
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from precise_sum.core import MAX_DOUBLE


@pytest.fixture(scope="session")
def random_seed():
    """Set random seed for reproducible tests."""
    seed = 42
    np.random.seed(seed)
    torch.manual_seed(seed)
    return seed


@pytest.fixture
def simple_data():
    """Simple test data for basic functionality tests."""
    return [1.0, 2.0, 3.0, 4.0, 5.0]


@pytest.fixture
def cancellation_data():
    """Large values that cancel around a small one."""
    return [1e308, 1.0, -1e308]


@pytest.fixture
def wide_range_data():
    """Random doubles spanning the full exponent range, subnormals included."""
    rng = np.random.RandomState(42)
    n = 2000

    mantissas = rng.uniform(-1.0, 1.0, n)
    exponents = rng.randint(-1074, 1024, n)
    data = np.ldexp(mantissas, exponents)

    # zeros (and underflowed -0.0) are outside the core's domain
    return [float(x) for x in data if x != 0.0]


@pytest.fixture
def near_overflow_data():
    """Values near MAX_DOUBLE whose running sum leaves the finite range."""
    rng = np.random.RandomState(7)
    n = 500

    data = rng.uniform(-1.0, 1.0, n) * MAX_DOUBLE
    # bias towards positive so partial sums climb past 2**1024
    data[: n // 4] = np.abs(data[: n // 4])

    return [float(x) for x in data if x != 0.0]


@pytest.fixture
def random_normal_data():
    """Random normal distribution data."""
    np.random.seed(42)
    return np.random.normal(0, 1, 10000)


@pytest.fixture
def ill_conditioned_data():
    """Ill-conditioned data spanning many orders of magnitude."""
    np.random.seed(42)
    n = 1000

    exponents = np.random.uniform(-200, 200, n)
    signs = np.random.choice([-1, 1], n)
    data = signs * 10.0 ** exponents

    # add exact negations of half the values to force heavy cancellation
    return np.concatenate([data, -data[: n // 2]])


@pytest.fixture(params=["cpu"] + (["cuda"] if torch.cuda.is_available() else []))
def device(request):
    """Parameterized fixture for different devices."""
    return torch.device(request.param)


class AccuracyChecker:
    """Utility class for checking numerical accuracy."""

    @staticmethod
    def exact_sum(values) -> Fraction:
        """Exact rational sum of the given doubles."""
        return sum((Fraction(float(v)) for v in values), Fraction(0))

    @staticmethod
    def rounded_sum(values) -> float:
        """Exact sum rounded once to the nearest double, ties to even."""
        total = AccuracyChecker.exact_sum(values)
        try:
            # int / int true division is correctly rounded
            return float(total)
        except OverflowError:
            return math.inf if total > 0 else -math.inf

    @staticmethod
    def expansion_value(partials, overflow) -> Fraction:
        """Exact value represented by an accumulator state."""
        total = sum((Fraction(p) for p in partials), Fraction(0))
        return total + overflow * Fraction(2) ** 1024

    @staticmethod
    def same_float(a: float, b: float) -> bool:
        """Bitwise equality, so that 0.0 and -0.0 differ and NaN matches NaN."""
        if math.isnan(a) or math.isnan(b):
            return math.isnan(a) and math.isnan(b)
        return a.hex() == b.hex()

    @staticmethod
    def assert_same(computed: float, expected: float):
        """Assert bitwise equality of two doubles with an informative message."""
        assert AccuracyChecker.same_float(computed, expected), (
            f"Computed {computed!r} ({computed.hex()}), "
            f"expected {expected!r} ({expected.hex()})"
        )


@pytest.fixture
def accuracy_checker():
    """Fixture providing accuracy checking utilities."""
    return AccuracyChecker()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Mark tests that take long time as slow
        if "large" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)

        # Mark integration tests
        if "integration" in item.name or "end_to_end" in item.name:
            item.add_marker(pytest.mark.integration)
