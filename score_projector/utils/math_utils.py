"""Numeric helpers shared by the projection engine"""

import math
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float) -> int:
    """Round to nearest integer, ties toward +infinity (0.5 -> 1, -0.5 -> 0)"""
    return int(math.floor(value + 0.5))


def round_to(value: float, places: int) -> float:
    """
    Round to a fixed number of decimal places, half-up on the exact binary value.

    Python's round() uses banker's rounding; projections are compared against
    reference outputs that round ties away from zero.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]"""
    return max(low, min(high, value))
