"""
Arithmetic over possibly-unknown numeric values.

Telemetry channels are frequently missing, so every value flowing through the
summary calculation is ``float | None`` where ``None`` means "unknown".
Addition and subtraction treat an unknown operand as the identity element;
division never divides by an unknown or zero denominator and returns unknown
instead of raising ``ZeroDivisionError``.

NaN and infinities are never returned: a non-finite result, e.g. from
overflowing sums of very large readings, is reported as unknown.

CHANGELOG:
- 2026-10-20: Map non-finite results to unknown (finite_or_none)
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations

import math


def finite_or_none(value: float | None) -> float | None:
    """Return *value* unless it is NaN or infinite, in which case ``None``."""
    if value is None or not math.isfinite(value):
        return None
    return value


def add_safely(a: float | None, b: float | None) -> float | None:
    """Add two values, ignoring whichever operand is unknown.

    Returns ``None`` only when both operands are unknown or the sum
    overflows.
    """
    if a is None:
        return finite_or_none(b)
    if b is None:
        return finite_or_none(a)
    return finite_or_none(a + b)


def subtract_safely(a: float | None, b: float | None) -> float | None:
    """Subtract *b* from *a*.

    An unknown minuend stays unknown; an unknown subtrahend is ignored.
    """
    if a is None:
        return None
    if b is None:
        return finite_or_none(a)
    return finite_or_none(a - b)


def divide_safely(
    numerator: float | None,
    denominator: float | None,
) -> float | None:
    """Divide *numerator* by *denominator*.

    Returns ``None`` if either operand is unknown or non-finite, or the
    denominator is exactly zero.
    """
    numerator = finite_or_none(numerator)
    denominator = finite_or_none(denominator)
    if numerator is None or denominator is None:
        return None
    if denominator == 0:
        return None
    return finite_or_none(numerator / denominator)
