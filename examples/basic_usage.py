#!/usr/bin/env python3
"""
Basic usage examples for the Precise Summation Library.

This script demonstrates correctly rounded summation and where it differs
from ordinary floating-point addition.
"""

import math
import time
import numpy as np
import torch

# Import the precise summation library
import sys
sys.path.append('..')

from precise_sum import (
    sum_precise,
    sum_precise_axis,
    precise_mean,
    precise_variance,
    naive_sum,
    PreciseAccumulator,
    InvalidInputError,
    MAX_DOUBLE
)


def demonstrate_precision_loss():
    """Show how standard summation loses precision."""
    print("=" * 60)
    print("DEMONSTRATION: Precision Loss in Standard Summation")
    print("=" * 60)

    data = [1e308, 1.0, -1e308]

    print(f"Test data: {data}")
    print("Expected result: 1.0")
    print()
    print(f"Naive sum result:     {naive_sum(data)}")
    print(f"NumPy sum result:     {np.sum(data)}")
    print(f"Precise sum result:   {sum_precise(data)}")
    print()

    tenths = [0.1] * 10
    print(f"Ten copies of 0.1, naive:   {naive_sum(tenths)!r}")
    print(f"Ten copies of 0.1, precise: {sum_precise(tenths)!r}")
    print()


def demonstrate_overflow_boundary():
    """Show exact rounding at the edge of the finite range."""
    print("=" * 60)
    print("DEMONSTRATION: Overflow Boundary")
    print("=" * 60)

    half_ulp = 2.0 ** 970
    cases = [
        ("MAX + MAX - MAX", [MAX_DOUBLE, MAX_DOUBLE, -MAX_DOUBLE]),
        ("MAX + half ULP (tie)", [MAX_DOUBLE, half_ulp]),
        ("MAX + half ULP - tiny", [MAX_DOUBLE, half_ulp, -5e-324]),
        ("16 * 2**1020 - half ULP", [2.0 ** 1020] * 16 + [-half_ulp]),
    ]

    print(f"{'Case':<28} {'Naive':<25} {'Precise':<25}")
    print("-" * 78)

    for name, data in cases:
        print(f"{name:<28} {naive_sum(data)!r:<25} {sum_precise(data)!r:<25}")

    print()


def demonstrate_incremental_summation():
    """Show incremental summation with PreciseAccumulator."""
    print("=" * 60)
    print("DEMONSTRATION: Incremental Summation")
    print("=" * 60)

    acc = PreciseAccumulator()
    values = [1e16, 1.0, 2.0, 3.0, -1e16, 4.0, 5.0]

    print("Adding values incrementally:")
    print(f"{'Value':<15} {'Running Sum':<15} {'Partials':<10}")
    print("-" * 40)

    for value in values:
        acc.add(value)
        print(f"{value:<15.1f} {acc.get():<15.6f} {len(acc):<10}")

    print()
    print(f"Final sum: {acc.get()}")
    print(f"math.fsum: {math.fsum(values)}")
    print()


def demonstrate_array_inputs():
    """Show NumPy and PyTorch inputs and axis reductions."""
    print("=" * 60)
    print("DEMONSTRATION: Arrays and Tensors")
    print("=" * 60)

    np.random.seed(42)
    matrix = np.random.normal(0, 1e12, (4, 1000))
    matrix[:, 0] += 1e20
    matrix[:, -1] -= 1e20

    print(f"Row sums (precise): {sum_precise_axis(matrix, axis=1)}")
    print(f"Row sums (numpy):   {matrix.sum(axis=1)}")
    print()

    tensor = torch.tensor([1e300, 3.0, -1e300], dtype=torch.float64)
    print(f"Tensor input {tensor.tolist()} -> {sum_precise(tensor)}")
    print()


def demonstrate_statistical_functions():
    """Show statistics built on the precise sum."""
    print("=" * 60)
    print("DEMONSTRATION: Precise Statistics")
    print("=" * 60)

    data = np.array([1e9 + 4, 1e9 + 7, 1e9 + 13, 1e9 + 16])

    print(f"Data: {data.tolist()}")
    print(f"Mean:     {precise_mean(data)}")
    print(f"Variance: {precise_variance(data)}")
    print()


def demonstrate_input_validation():
    """Show how non-finite inputs are handled."""
    print("=" * 60)
    print("DEMONSTRATION: Input Validation")
    print("=" * 60)

    data = [1.0, math.inf, 2.0]

    try:
        sum_precise(data)
    except InvalidInputError as e:
        print(f"Rejected: {e}")

    print(f"Propagated: {sum_precise(data, nonfinite='propagate')}")
    print(f"inf + -inf: {sum_precise([math.inf, -math.inf], nonfinite='propagate')}")
    print()


def performance_comparison():
    """Compare performance across different array sizes."""
    print("=" * 60)
    print("PERFORMANCE COMPARISON")
    print("=" * 60)

    sizes = [1000, 10000, 100000]

    print(f"{'Size':<10} {'NumPy':<10} {'Naive':<10} {'fsum':<10} {'Precise':<10}")
    print("-" * 50)

    for size in sizes:
        np.random.seed(42)
        data = np.random.randn(size)
        values = data.tolist()

        times = {}

        start = time.perf_counter()
        np.sum(data)
        times['NumPy'] = (time.perf_counter() - start) * 1000

        start = time.perf_counter()
        naive_sum(values)
        times['Naive'] = (time.perf_counter() - start) * 1000

        start = time.perf_counter()
        math.fsum(values)
        times['fsum'] = (time.perf_counter() - start) * 1000

        start = time.perf_counter()
        sum_precise(values)
        times['Precise'] = (time.perf_counter() - start) * 1000

        print(f"{size:<10} {times['NumPy']:<10.2f} {times['Naive']:<10.2f} "
              f"{times['fsum']:<10.2f} {times['Precise']:<10.2f}")

    print("\nTimes in milliseconds")
    print()


def main():
    """Run all demonstrations."""
    print("PRECISE SUMMATION LIBRARY - BASIC USAGE EXAMPLES")
    print("=" * 60)
    print()

    demonstrate_precision_loss()
    demonstrate_overflow_boundary()
    demonstrate_incremental_summation()
    demonstrate_array_inputs()
    demonstrate_statistical_functions()
    demonstrate_input_validation()
    performance_comparison()

    print("=" * 60)
    print("All demonstrations completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
