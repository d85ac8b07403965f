"""
Guarded arithmetic shared by every engine stage.

The engine is total: a zero denominator is replaced by a small positive
fallback, and quantities with natural bounds are clamped.

Date: October 2026
License: MIT
"""

import numpy as np

EPSILON = 1.0e-6


def safe_divide(numerator: float, denominator: float, fallback: float = EPSILON) -> float:
    """
    Divide, substituting ``fallback`` when the denominator is exactly zero.

    Args:
        numerator: Dividend
        denominator: Divisor (replaced when == 0)
        fallback: Positive value used in place of a zero divisor

    Returns:
        numerator / denominator as a float

    Example:
        >>> safe_divide(1.0, 0.0, fallback=1e-3)
        1000.0
    """
    if denominator == 0:
        denominator = fallback
    with np.errstate(all="ignore"):
        return float(np.divide(numerator, denominator))


def guarded_log(value: float, floor: float = EPSILON) -> float:
    """Natural log with zero replaced by ``floor``."""
    if value == 0:
        value = floor
    with np.errstate(all="ignore"):
        return float(np.log(value))


def clamp(value: float, lower: float, upper: float) -> float:
    """Clip ``value`` into [lower, upper]."""
    return float(min(upper, max(lower, value)))


def bounded_or_worst(value: float, lower: float, upper: float, worst: float) -> float:
    """
    Clamp a bounded quantity, mapping non-finite values to ``worst``.

    Used for CoV (worst = upper bound) and dissolution (worst = 0 %).
    """
    if not np.isfinite(value):
        return float(worst)
    return clamp(value, lower, upper)


def is_finite(*values: float) -> bool:
    """True when every value is a finite real."""
    return bool(np.all(np.isfinite(values)))
