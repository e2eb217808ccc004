# hydrocalc/core/manning.py
"""Manning equation for a circular pipe flowing full.

Formula: *Q* = (1/n) × A × R^(2/3) × √S, with A = πD²/4 and R = D/4.
"""

from __future__ import annotations

import logging
import math

from ..constants import (
    DIAMETER_HI_LIMIT,
    FULL_FLOW_D_HI,
    FULL_FLOW_D_LO,
    FULL_FLOW_GROWTH,
    FULL_FLOW_ITERATIONS,
    FULL_FLOW_MAX_GROWTH,
)
from ..domain.result import Result, invalid
from .bisection import solve_increasing
from .formulas import area, ensure_positive, finite, is_positive

logger = logging.getLogger(__name__)


def full_flow_discharge(d: float, n: float, s: float) -> Result[float]:
    """Full-pipe capacity (m³/s) for diameter *d*, roughness *n*, slope *s*."""
    if not is_positive(d, n, s):
        return invalid("D, n and S must be finite and > 0")
    a = area(d)
    r = d / 4.0
    try:
        q = (1.0 / n) * a * r ** (2.0 / 3.0) * math.sqrt(s)
    except OverflowError:
        return invalid("full-flow discharge is outside the floating-point range")
    # underflow to zero is as unusable as overflow
    return ensure_positive(finite(q, "full-flow discharge"), "full-flow discharge")


def full_flow_velocity(d: float, n: float, s: float) -> Result[float]:
    """Mean velocity of the full pipe, (1/n) × R^(2/3) × √S."""
    return full_flow_discharge(d, n, s).then(
        lambda q: finite(q / area(d), "full-flow velocity")
    )


def diameter_for_full_flow_discharge(
    q: float,
    n: float,
    s: float,
    *,
    lo: float = FULL_FLOW_D_LO,
    hi: float = FULL_FLOW_D_HI,
    growth: float = FULL_FLOW_GROWTH,
    max_attempts: int = FULL_FLOW_MAX_GROWTH,
    iterations: int = FULL_FLOW_ITERATIONS,
    hi_limit: float = DIAMETER_HI_LIMIT,
) -> Result[float]:
    """Smallest diameter (m) whose full-flow capacity equals *q*.

    Capacity grows strictly with D, so the root is found by bisection over
    ``[lo, hi]``; ``hi`` is stretched by ``growth`` until it carries *q* or passes
    ``hi_limit``.
    """
    if not is_positive(q, n, s):
        return invalid("Q, n and S must be finite and > 0")

    result = solve_increasing(
        lambda d: full_flow_discharge(d, n, s),
        q,
        lo,
        hi,
        iterations=iterations,
        growth=growth,
        max_attempts=max_attempts,
        hi_limit=hi_limit,
    )
    if not result:
        logger.debug("full-flow diameter for Q=%.6g failed: %s", q, result.reason)
    return result
