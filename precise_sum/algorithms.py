"""
High-level entry points for exact summation.

This module wraps the core accumulator with input coercion and validation:
it accepts Python sequences, NumPy arrays and PyTorch tensors, rejects or
propagates non-finite values, and provides array reductions and simple
statistics built on the correctly rounded sum.
"""

import logging
import math
import numbers
from typing import Iterable, List, Optional, Union

import numpy as np
import torch

from .core import PreciseAccumulator

logger = logging.getLogger(__name__)

NONFINITE_MODES = ("raise", "propagate")

# dtype kinds that convert to float64 without losing their meaning
_REAL_KINDS = "biuf"


class InvalidInputError(ValueError):
    """Raised when a value outside the summable domain reaches the adapter."""


def _check_mode(nonfinite: str):
    if nonfinite not in NONFINITE_MODES:
        raise ValueError(f"Unknown nonfinite mode: {nonfinite}")


def _as_float_list(values: Union[Iterable[float], torch.Tensor, np.ndarray]) -> List[float]:
    """
    Flatten supported inputs into a list of Python floats.

    Args:
        values: Iterable of real numbers, NumPy array or PyTorch tensor

    Returns:
        List of floats in input order

    Raises:
        InvalidInputError: If an element is not a real number or cannot be
            represented as a double
    """
    if isinstance(values, torch.Tensor):
        if values.is_complex():
            raise InvalidInputError(f"Unsupported tensor dtype: {values.dtype}")
        return values.detach().cpu().to(torch.float64).flatten().tolist()

    if isinstance(values, np.ndarray):
        if values.dtype.kind not in _REAL_KINDS:
            raise InvalidInputError(f"Unsupported array dtype: {values.dtype}")
        return values.astype(np.float64).ravel().tolist()

    if isinstance(values, (str, bytes)):
        raise InvalidInputError(f"Expected a sequence of numbers, got {type(values).__name__}")

    try:
        iterator = iter(values)
    except TypeError:
        raise InvalidInputError(
            f"Expected a sequence of numbers, got {type(values).__name__}"
        ) from None

    floats = []
    for index, value in enumerate(iterator):
        if not isinstance(value, numbers.Real):
            logger.debug("Rejecting element %d of type %s", index, type(value).__name__)
            raise InvalidInputError(f"Element {index} is not a real number: {value!r}")
        try:
            floats.append(float(value))
        except OverflowError as e:
            raise InvalidInputError(f"Element {index} does not fit in a double: {value!r}") from e
    return floats


def _nonfinite_result(floats: List[float], nonfinite: str) -> Optional[float]:
    """
    Scan for NaN and infinities.

    Returns:
        The IEEE-754 sum when non-finite values decide it, otherwise None
    """
    saw_nan = saw_pos_inf = saw_neg_inf = False

    for index, x in enumerate(floats):
        if math.isfinite(x):
            continue
        if nonfinite == "raise":
            logger.debug("Rejecting non-finite element %d: %r", index, x)
            raise InvalidInputError(f"Element {index} is not finite: {x!r}")
        if math.isnan(x):
            saw_nan = True
        elif x > 0:
            saw_pos_inf = True
        else:
            saw_neg_inf = True

    if saw_nan or (saw_pos_inf and saw_neg_inf):
        result = math.nan
    elif saw_pos_inf:
        result = math.inf
    elif saw_neg_inf:
        result = -math.inf
    else:
        return None

    logger.debug("Non-finite input decides the sum: %r", result)
    return result


def sum_precise(values: Union[Iterable[float], torch.Tensor, np.ndarray],
                nonfinite: str = "raise") -> float:
    """
    Compute the correctly rounded sum of a sequence of doubles.

    The result is the double nearest to the exact mathematical sum (ties to
    even), or +/-inf when the exact sum rounds past the largest finite
    double. Ordinary float addition accumulates one rounding per step; this
    rounds exactly once.

    Args:
        values: Sequence of values to sum
        nonfinite: ``"raise"`` to reject NaN and infinities, ``"propagate"``
            to return what IEEE-754 addition would give for them

    Returns:
        Correctly rounded sum; ``0.0`` for empty input

    Raises:
        InvalidInputError: On non-numeric elements, or non-finite ones when
            ``nonfinite="raise"``
        ValueError: On an unknown ``nonfinite`` mode
    """
    _check_mode(nonfinite)
    floats = _as_float_list(values)

    special = _nonfinite_result(floats, nonfinite)
    if special is not None:
        return special

    acc = PreciseAccumulator()
    all_negative_zero = bool(floats)

    for x in floats:
        if x != 0.0:
            acc.add(x)
            all_negative_zero = False
        elif math.copysign(1.0, x) > 0:
            all_negative_zero = False

    if all_negative_zero:
        return -0.0
    return acc.get()


def sum_precise_axis(values: Union[np.ndarray, torch.Tensor],
                     axis: int = -1,
                     nonfinite: str = "raise") -> Union[np.ndarray, torch.Tensor]:
    """
    Correctly rounded sum along one axis of an array or tensor.

    Args:
        values: NumPy array, PyTorch tensor or nested sequence of numbers
        axis: Axis to reduce
        nonfinite: Non-finite handling, as in ``sum_precise``

    Returns:
        float64 array with ``axis`` removed; a tensor on the input's device
        when given a tensor
    """
    _check_mode(nonfinite)

    if isinstance(values, torch.Tensor):
        if values.is_complex():
            raise InvalidInputError(f"Unsupported tensor dtype: {values.dtype}")
        array = values.detach().cpu().to(torch.float64).numpy()
        result = sum_precise_axis(array, axis=axis, nonfinite=nonfinite)
        return torch.from_numpy(result).to(values.device)

    array = np.asarray(values)
    if array.dtype.kind not in _REAL_KINDS:
        raise InvalidInputError(f"Unsupported array dtype: {array.dtype}")
    if array.ndim == 0:
        raise ValueError("Cannot reduce a 0-dimensional array along an axis")
    if not -array.ndim <= axis < array.ndim:
        raise ValueError(f"axis {axis} is out of bounds for array of dimension {array.ndim}")

    moved = np.moveaxis(array.astype(np.float64), axis, -1)
    out = np.empty(moved.shape[:-1], dtype=np.float64)
    for index in np.ndindex(out.shape):
        out[index] = sum_precise(moved[index], nonfinite=nonfinite)

    return out


def precise_mean(values: Union[Iterable[float], torch.Tensor, np.ndarray],
                 nonfinite: str = "raise") -> float:
    """
    Compute mean using the correctly rounded sum.

    Args:
        values: Sequence of values

    Returns:
        Mean; ``0.0`` for empty input
    """
    _check_mode(nonfinite)
    floats = _as_float_list(values)
    if not floats:
        return 0.0
    return sum_precise(floats, nonfinite=nonfinite) / len(floats)


def precise_variance(values: Union[Iterable[float], torch.Tensor, np.ndarray],
                     ddof: int = 1,
                     nonfinite: str = "raise") -> float:
    """
    Compute variance using the correctly rounded sum.

    Args:
        values: Sequence of values
        ddof: Delta degrees of freedom (1 for sample variance, 0 for population)

    Returns:
        Variance; ``0.0`` when there are no more values than ``ddof``
    """
    _check_mode(nonfinite)
    floats = _as_float_list(values)
    n = len(floats)

    if n <= ddof:
        return 0.0

    # Two-pass algorithm
    mean = precise_mean(floats, nonfinite=nonfinite)
    squared_deviations = [(x - mean) * (x - mean) for x in floats]

    # inputs are already checked; an inf here is a genuine overflow
    return sum_precise(squared_deviations, nonfinite="propagate") / (n - ddof)


def naive_sum(values: Union[Iterable[float], torch.Tensor, np.ndarray]) -> float:
    """Left-to-right float addition, one rounding per step."""
    total = 0.0
    for x in _as_float_list(values):
        total += x
    return total
