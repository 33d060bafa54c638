"""Numeric helpers shared by pricing and plan generation"""

import math
from decimal import Decimal, ROUND_HALF_UP


def round_half_away(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Python's built-in round() uses banker's rounding (4.5 -> 4). Quotes use
    half-away-from-zero (4.5 -> 5, -2.5 -> -3), evaluated on the exact binary
    value of the float, so 0.8 * 1200 rounds the same way it is stored.

    Examples:
        round_half_away(4.5)  -> 5
        round_half_away(-2.5) -> -3
        round_half_away(79.2) -> 79
    """
    if not math.isfinite(value):
        return 0
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_int(raw) -> int:
    """Parse an integer from user input, falling back to 0 for anything unparseable"""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return 0


def parse_float(raw) -> float:
    """Parse a float from user input, falling back to 0.0 for anything unparseable or non-finite"""
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(str(raw).strip()) if not isinstance(raw, (int, float)) else float(raw)
    except (ValueError, OverflowError):
        return 0.0
    return value if math.isfinite(value) else 0.0
