# hydrocalc/core/formatting.py
"""Rendering of numeric results for display."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from ..domain.result import Failure, Ok, Result

PLACEHOLDER = "—"

Displayable = Union[Result[float], float, None]


def _round_sig(x: float, digits: int) -> Decimal:
    """Exact binary value of *x* rounded to *digits* figures, ties away from 0."""
    d = Decimal(x)
    step = Decimal(1).scaleb(d.adjusted() - digits + 1)
    return d.quantize(step, rounding=ROUND_HALF_UP)


def _scientific(x: float) -> str:
    """``1.235e+4`` style: three mantissa decimals, unpadded exponent."""
    r = _round_sig(x, 4)
    exp = r.adjusted()  # 9.9995e4 rounds up into the next decade
    mantissa = r.scaleb(-exp)
    return f"{mantissa:.3f}e{'+' if exp >= 0 else '-'}{abs(exp)}"


def format_sig(value: Displayable, digits: int = 4) -> str:
    """Format to *digits* significant figures, trailing zeros removed.

    Values below 0.001 or from 10 000 upwards switch to scientific
    notation. Failures and non-finite numbers render as a placeholder.
    """
    if isinstance(value, Failure) or value is None:
        return PLACEHOLDER
    if isinstance(value, Ok):
        value = value.value
    try:
        x = float(value)
    except (TypeError, ValueError):
        return PLACEHOLDER
    if not math.isfinite(x):
        return PLACEHOLDER

    if x == 0:
        return "0"
    if abs(x) < 0.001 or abs(x) >= 10000:
        return _scientific(x)

    rounded = float(_round_sig(x, digits))
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)


def format_quantity(value: Displayable, unit: str, digits: int = 4) -> str:
    """``"<number> <unit>"`` or the placeholder alone."""
    text = format_sig(value, digits)
    return text if text == PLACEHOLDER else f"{text} {unit}"
