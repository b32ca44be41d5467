"""
Test suite for Precise Summation Library.

This package contains tests for all components of the precise summation
library, checked against exact rational arithmetic.

Test Structure:
- test_core.py: Tests for two_sum, the accumulator and the finalizer
- test_algorithms.py: Tests for the checked entry points and helpers
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run specific test file
    pytest tests/test_core.py

    # Run tests with coverage
    pytest --cov=precise_sum

    # Run only fast tests
    pytest -m "not slow"
"""

__version__ = "1.0.0"
