from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0):
    """Round halves away from zero (2.5 -> 3), unlike the built-in round().

    Returns an int when digits == 0, otherwise a float.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def percentage(part: float, whole: float) -> int:
    """Rounded percentage clamped to [0, 100]; 0 when whole is zero."""
    if not whole:
        return 0
    return max(0, min(100, round_half_up(part / whole * 100)))
