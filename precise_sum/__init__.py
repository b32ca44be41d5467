"""
Precise Summation Library

Correctly rounded summation of IEEE-754 double-precision values: the result
is the double nearest to the exact mathematical sum, rounded once with ties
to even, with overflow to infinity detected exactly.

This library provides:
- Error-free two-sum transform
- Streaming expansion accumulator with overflow tracking
- Checked summation over lists, NumPy arrays and PyTorch tensors
- Axis reductions and compensated statistics built on the exact sum
"""

from .core import PreciseAccumulator, two_sum, finalize, MAX_DOUBLE
from .algorithms import (
    InvalidInputError,
    sum_precise,
    sum_precise_axis,
    precise_mean,
    precise_variance,
    naive_sum
)

__version__ = "1.0.0"
__author__ = "Precise Summation Contributors"

__all__ = [
    "PreciseAccumulator",
    "two_sum",
    "finalize",
    "MAX_DOUBLE",
    "InvalidInputError",
    "sum_precise",
    "sum_precise_axis",
    "precise_mean",
    "precise_variance",
    "naive_sum"
]
