"""
Core exact summation implementation.

This module contains the error-free two-sum transform, the expansion
accumulator that carries the exact running sum as non-overlapping partials
plus an overflow counter, and the finalizer that rounds the expansion once
to the nearest double (ties to even).

Nothing here validates input: every value handed to the accumulator must be
a finite, non-NaN float other than -0.0. Use ``precise_sum.algorithms`` for
checked entry points.
"""

import math
from typing import Iterable, List, Sequence, Tuple


# exponent 11111111110, significand all 1s: 2**1024 - 2**(1023 - 52)
MAX_DOUBLE = float.fromhex('0x1.fffffffffffffp+1023')

# exponent 11111111110, significand all 1s except the last
PENULTIMATE_DOUBLE = float.fromhex('0x1.ffffffffffffep+1023')

TWO_1023 = float.fromhex('0x1p+1023')

# exponent 11111001010, significand all 0s: 2**(1023 - 52)
MAX_ULP = MAX_DOUBLE - PENULTIMATE_DOUBLE

INF = math.inf


def two_sum(x: float, y: float) -> Tuple[float, float]:
    """
    Error-free addition of two doubles.

    Requires ``abs(x) >= abs(y)``. When ``hi`` is finite, ``hi + lo`` equals
    ``x + y`` exactly; when it is infinite ``lo`` carries no meaning.

    Args:
        x: Operand with the larger magnitude
        y: Operand with the smaller magnitude

    Returns:
        Tuple of (rounded_sum, rounding_error)
    """
    hi = x + y
    lo = y - (hi - x)
    return hi, lo


class PreciseAccumulator:
    """
    Exact running sum of doubles.

    Keeps the sum as a list of non-overlapping partials, least significant
    first, together with a count of how many multiples of 2**1024 the true
    sum has run past the finite range. ``get()`` rounds the whole expansion
    once, so the result is the double nearest to the exact sum.

    Attributes:
        overflow: Signed number of 2**1024 units carried outside the partials
    """

    def __init__(self):
        self._partials: List[float] = []
        self.overflow = 0

    @property
    def partials(self) -> Tuple[float, ...]:
        """Snapshot of the current partials, least significant first."""
        return tuple(self._partials)

    def add(self, value: float):
        """
        Fold one value into the expansion.

        Args:
            value: Finite float, not NaN and not -0.0
        """
        x = float(value)
        partials = self._partials
        used = 0

        for j in range(len(partials)):
            y = partials[j]
            if abs(x) < abs(y):
                x, y = y, x
            hi, lo = two_sum(x, y)
            if math.isinf(hi):
                sign = 1 if hi > 0 else -1
                self.overflow += sign

                # pull x back by exactly one overflow unit; 2**1024 itself
                # is not representable, hence two steps
                x = (x - sign * TWO_1023) - sign * TWO_1023
                if abs(x) < abs(y):
                    x, y = y, x
                hi, lo = two_sum(x, y)
            if lo != 0.0:
                partials[used] = lo
                used += 1
            x = hi

        del partials[used:]
        if x != 0.0:
            partials.append(x)

    def update(self, values: Iterable[float]):
        """Fold every value of an iterable, in order."""
        for value in values:
            self.add(value)

    def get(self) -> float:
        """Get the correctly rounded sum. The accumulator is left untouched."""
        return finalize(self._partials, self.overflow)

    def reset(self):
        """Reset the accumulator to zero."""
        self._partials.clear()
        self.overflow = 0

    def __len__(self) -> int:
        return len(self._partials)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(partials={self._partials!r}, "
                f"overflow={self.overflow})")


def finalize(partials: Sequence[float], overflow: int = 0) -> float:
    """
    Round an expansion to the nearest double.

    Args:
        partials: Non-overlapping partials, least significant first
        overflow: Signed count of 2**1024 units beyond the partials

    Returns:
        The double nearest to ``sum(partials) + overflow * 2**1024``,
        ties to even, or +/-inf when that rounds past MAX_DOUBLE
    """
    partials = list(partials)
    n = len(partials) - 1
    hi = 0.0
    lo = 0.0

    if overflow != 0:
        top = partials[n] if n >= 0 else 0.0
        n -= 1
        if (abs(overflow) > 1
                or (overflow > 0 and top > 0)
                or (overflow < 0 and top < 0)):
            return INF if overflow > 0 else -INF

        # abs(overflow) == 1 here; halve everything so the arithmetic stays finite
        hi, lo = two_sum(overflow * TWO_1023, top / 2)
        lo *= 2
        if math.isinf(2 * hi):
            # MAX_DOUBLE has an odd significand, so half an ULP below 2**1024
            # ties away to infinity unless the remaining partials pull the
            # true value under the midpoint
            if hi > 0:
                if (hi == TWO_1023 and lo == -(MAX_ULP / 2)
                        and n >= 0 and partials[n] < 0):
                    return MAX_DOUBLE
                return INF
            if (hi == -TWO_1023 and lo == (MAX_ULP / 2)
                    and n >= 0 and partials[n] > 0):
                return -MAX_DOUBLE
            return -INF

        if lo != 0.0:
            partials[n + 1] = lo
            n += 1
            lo = 0.0
        hi *= 2

    while n >= 0:
        hi, lo = two_sum(hi, partials[n])
        n -= 1
        if lo != 0.0:
            break

    # when lo is exactly half an ULP of hi, the next partial decides the
    # rounding direction
    if n >= 0 and ((lo < 0.0 and partials[n] < 0.0)
                   or (lo > 0.0 and partials[n] > 0.0)):
        y = lo * 2.0
        x = hi + y
        yr = x - hi
        if y == yr:
            hi = x

    return hi
