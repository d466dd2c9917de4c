"""
Number formatting helpers for results and derivation traces.

``to_fixed`` and ``to_precision`` follow the rounding and notation rules of the
calculator's display (ties round away from zero, exponent notation only when the
decimal exponent is below -6 or at least the requested digits) so derivations read
the same across front ends.
"""

import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from .constants import FORMAT_DIGITS, FORMAT_LARGE_THRESHOLD, FORMAT_SMALL_THRESHOLD

# Wide enough to hold any double with its full decimal expansion
_CONTEXT = Context(prec=1100, rounding=ROUND_HALF_UP)


def _non_finite(value: float) -> Optional[str]:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return None


def to_fixed(value: float, digits: int) -> str:
    """Format with a fixed number of decimals, rounding half away from zero."""
    special = _non_finite(value)
    if special is not None:
        return special
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, context=_CONTEXT)
    if value == 0:
        rounded = abs(rounded)
    return f"{rounded:f}"


def _split_exponent(value: float, digits: int) -> Tuple[Decimal, int]:
    """Round to ``digits`` significant digits and return (mantissa, decimal exponent)."""
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-(digits - 1))
    exponent = exact.adjusted()
    mantissa = exact.scaleb(-exponent, context=_CONTEXT).quantize(quantum, context=_CONTEXT)
    if abs(mantissa) >= 10:
        # Rounding carried into a new leading digit (9.999996 -> 10.00000)
        exponent += 1
        mantissa = exact.scaleb(-exponent, context=_CONTEXT).quantize(quantum, context=_CONTEXT)
    return mantissa, exponent


def to_precision(value: float, digits: int) -> str:
    """Format with ``digits`` significant digits."""
    special = _non_finite(value)
    if special is not None:
        return special
    if value == 0:
        return to_fixed(0.0, digits - 1)
    mantissa, exponent = _split_exponent(value, digits)
    if exponent < -6 or exponent >= digits:
        sign = "+" if exponent >= 0 else "-"
        return f"{mantissa:f}e{sign}{abs(exponent)}"
    return to_fixed(value, digits - 1 - exponent)


def format_number(value: float) -> str:
    """Shortest plain rendering of a float (``5.0`` -> ``"5"``)."""
    special = _non_finite(value)
    if special is not None:
        return special
    if value == 0:
        return "0"
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_result_value(value: Optional[float], category_id: Optional[str] = None) -> str:
    """Render a calculation result for display.

    Returns an empty string for missing or NaN values. Reynolds numbers are whole numbers;
    very large or very small magnitudes use 6 significant digits, everything else is
    rounded to 6 decimals with trailing zeros removed.
    """
    if value is None or math.isnan(value):
        return ""
    if category_id == "reynolds":
        return to_fixed(value, 0)
    magnitude = abs(value)
    if magnitude > FORMAT_LARGE_THRESHOLD or 0 < magnitude < FORMAT_SMALL_THRESHOLD:
        return to_precision(value, FORMAT_DIGITS)
    return format_number(float(to_fixed(value, FORMAT_DIGITS)))
