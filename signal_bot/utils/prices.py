"""Price rounding helpers."""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP


def round_price(price: float, decimals: int = 3) -> float:
    """
    Round half away from zero at `decimals` places.
    Goes through the float's shortest repr, so 1.0005 -> 1.001 and 2.0625 -> 2.063
    (builtin round() gives 1.0 and 2.062).
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(float(price))).quantize(quantum, rounding=ROUND_HALF_UP))
