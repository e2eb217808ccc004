# hydrocalc/core/partial_flow.py
"""Circular conduit flowing partially full (gravity sewers, culverts).

The flow section is parameterised by the *wetted angle* θ, the central
angle subtending the water surface chord:

* θ = 0   – dry pipe, y/D = 0;
* θ = π   – half full, y/D = 0.5;
* θ = 2π  – full pipe, y/D = 1.

Geometry::

    A   = (D²/8) (θ − sin θ)
    P   = (D/2) θ
    R   = A / P
    y/D = (1 − cos(θ/2)) / 2

Manning discharge ``Q(θ)`` rises from zero to a maximum of about
1.076·Q_full at y/D ≈ 0.938 and then drops back to Q_full. Any target
below Q_full therefore has a single root on the rising branch, and the
bisection rule "below target → move ``lo``" converges to it. Targets at or
above Q_full are clamped to a full pipe.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..constants import (
    DEPTH_D_HI,
    DEPTH_D_LO,
    DEPTH_GROWTH,
    DEPTH_ITERATIONS,
    DEPTH_MAX_GROWTH,
    DIAMETER_HI_LIMIT,
    THETA_ITERATIONS,
    THETA_LO,
    TWO_PI,
)
from ..domain.result import Failure, Ok, Result, invalid
from .bisection import bisect, solve_increasing
from .formulas import finite, is_finite, is_positive
from .manning import full_flow_discharge

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def wetted_area(d: float, theta: float) -> float:
    return (d * d / 8.0) * (theta - math.sin(theta))


def wetted_perimeter(d: float, theta: float) -> float:
    return (d / 2.0) * theta


def hydraulic_radius(d: float, theta: float) -> Result[float]:
    a = wetted_area(d, theta)
    p = wetted_perimeter(d, theta)
    if not is_positive(a, p):
        return invalid("wetted area and perimeter must be > 0")
    return Ok(a / p)


def depth_ratio(theta: float) -> float:
    """y/D for wetted angle *theta*."""
    return (1.0 - math.cos(theta / 2.0)) / 2.0


def angle_from_depth_ratio(yd: float) -> Result[float]:
    """Inverse of :func:`depth_ratio`; ``yd >= 1`` gives exactly 2π."""
    if not is_finite(yd) or yd <= 0:
        return invalid("depth ratio must be > 0")
    if yd >= 1:
        return Ok(TWO_PI)
    return Ok(2.0 * math.acos(min(1.0, max(-1.0, 1.0 - 2.0 * yd))))


def partial_flow_discharge(d: float, n: float, s: float, theta: float) -> Result[float]:
    """Manning discharge (m³/s) at wetted angle *theta*."""
    if not is_positive(d, n, s) or not is_finite(theta):
        return invalid("D, n and S must be > 0 and theta finite")
    a = wetted_area(d, theta)
    p = wetted_perimeter(d, theta)
    if not is_positive(a, p):
        return invalid("wetted area and perimeter must be > 0")
    r = a / p
    try:
        q = (1.0 / n) * a * r ** (2.0 / 3.0) * math.sqrt(s)
    except OverflowError:
        return invalid("discharge is outside the floating-point range")
    return finite(q, "discharge")


# ---------------------------------------------------------------------------
# Solver A: depth for a given diameter
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PartialFlowState:
    """Solved flow section of one pipe."""

    theta: float        # rad
    depth_ratio: float  # y/D
    wetted_area: float  # m²
    qfull: float        # m³/s, full-pipe capacity
    discharge: float    # m³/s, target discharge that was solved for

    @property
    def velocity(self) -> float:
        """Mean velocity in the wetted section (m/s)."""
        return self.discharge / self.wetted_area

    @property
    def capacity_ratio(self) -> float:
        """Q / Q_full; above 1 when the pipe is surcharged."""
        return self.discharge / self.qfull

    @property
    def is_full(self) -> bool:
        return self.theta >= TWO_PI


def solve_theta_for_q(
    d: float,
    q: float,
    n: float,
    s: float,
    *,
    iterations: int = THETA_ITERATIONS,
    theta_lo: float = THETA_LO,
) -> Result[PartialFlowState]:
    """Wetted angle at which a pipe of diameter *d* carries *q*.

    When *q* reaches or exceeds the full-pipe capacity the result is
    clamped to θ = 2π, y/D = 1 (flow exceeds pipe capacity).
    """
    qfull = full_flow_discharge(d, n, s)
    if isinstance(qfull, Failure):
        return qfull
    if not is_positive(qfull.value):
        return invalid("full-flow capacity must be finite and > 0")
    if not is_finite(q):
        return invalid("Q must be finite")

    if q >= qfull.value:
        logger.debug("Q=%.6g >= Qfull=%.6g, pipe runs full", q, qfull.value)
        return Ok(PartialFlowState(TWO_PI, 1.0, wetted_area(d, TWO_PI), qfull.value, q))
    if q <= 0:
        return invalid("Q must be > 0")

    theta = bisect(
        lambda th: partial_flow_discharge(d, n, s, th),
        q,
        theta_lo,
        TWO_PI,
        iterations,
    )
    return theta.map(
        lambda th: PartialFlowState(th, depth_ratio(th), wetted_area(d, th), qfull.value, q)
    )


# ---------------------------------------------------------------------------
# Solver B: diameter for a design depth ratio
# ---------------------------------------------------------------------------


def solve_diameter_at_depth(
    q: float,
    n: float,
    s: float,
    yd: float,
    *,
    lo: float = DEPTH_D_LO,
    hi: float = DEPTH_D_HI,
    growth: float = DEPTH_GROWTH,
    max_attempts: int = DEPTH_MAX_GROWTH,
    iterations: int = DEPTH_ITERATIONS,
    hi_limit: float = DIAMETER_HI_LIMIT,
) -> Result[float]:
    """Diameter (m) that carries *q* at depth ratio *yd* (0 < yd ≤ 1).

    At fixed θ the discharge grows as D^(8/3), so D is bisected directly.
    """
    if not is_positive(q, n, s):
        return invalid("Q, n and S must be finite and > 0")
    if not is_finite(yd) or not 0 < yd <= 1:
        return invalid("depth ratio must be in (0, 1]")

    theta = angle_from_depth_ratio(yd)
    if isinstance(theta, Failure):
        return theta
    if not is_positive(theta.value):
        return invalid("wetted angle must be > 0")

    result = solve_increasing(
        lambda d: partial_flow_discharge(d, n, s, theta.value),
        q,
        lo,
        hi,
        iterations=iterations,
        growth=growth,
        max_attempts=max_attempts,
        hi_limit=hi_limit,
    )
    if not result:
        logger.debug("diameter at y/D=%.4g for Q=%.6g failed: %s", yd, q, result.reason)
    return result
