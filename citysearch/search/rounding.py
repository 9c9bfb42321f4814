from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 1) -> float:
    """Round *value* to *places* decimals, ties away from zero.

    The float's exact binary value is rounded, so 0.35 (stored just below)
    rounds down while 0.25 rounds up.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
