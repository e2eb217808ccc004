# hydrocalc/core/formulas.py
"""Closed-form hydraulics for circular pressure pipes.

Area/velocity/diameter algebra, Hazen-Williams friction loss, minor
losses, static head and the total dynamic head a pump has to deliver.
Everything returns a :data:`~hydrocalc.domain.result.Result`; only
:func:`area` is a bare float because it has no failure mode of its own.
"""

from __future__ import annotations

import math
from enum import Enum, auto
from typing import Any, Iterable, Optional, Union

from ..constants import (
    G,
    HW_COEFFICIENT,
    HW_DIAMETER_EXPONENT,
    HW_FLOW_EXPONENT,
    VELOCITY_HIGH,
    VELOCITY_LOW,
    VELOCITY_OK,
)
from ..domain.fittings import Fitting, sum_k
from ..domain.result import Failure, Ok, Result, invalid


def is_finite(*values: Any) -> bool:
    """True if every value is a finite real number."""
    try:
        return all(math.isfinite(v) for v in values)
    except TypeError:
        return False


def is_positive(*values: Any) -> bool:
    """True if every value is finite and strictly positive."""
    return is_finite(*values) and all(v > 0 for v in values)


def ensure_positive(value: Result[float], label: str) -> Result[float]:
    """Pass *value* through if it is a strictly positive number."""
    if value and not is_positive(value.value):
        return invalid(f"{label} must be > 0")
    return value


def finite(value: float, label: str) -> Result[float]:
    """``Ok(value)`` unless the arithmetic left the float range."""
    if not math.isfinite(value):
        return invalid(f"{label} is outside the floating-point range")
    return Ok(value)


# ---------------------------------------------------------------------------
# Geometry and continuity
# ---------------------------------------------------------------------------

def area(d: float) -> float:
    """Full cross-section area πD²/4 (m²)."""
    return math.pi * d * d / 4.0


def velocity_from_q_d(q: float, d: float) -> Result[float]:
    """Mean velocity Q/A (m/s) in a full pipe of diameter *d*."""
    if not is_finite(q, d):
        return invalid("flow and diameter must be finite")
    a = area(d)
    if not math.isfinite(a) or a <= 0:
        return invalid("pipe area must be positive")
    return finite(q / a, "velocity")


def diameter_from_q_v(q: float, v: float) -> Result[float]:
    """Diameter √(4Q/πV) that carries *q* at velocity *v*."""
    if not is_positive(q, v):
        return invalid("flow and velocity must be > 0")
    return finite(math.sqrt((4.0 * q) / (math.pi * v)), "diameter")


# ---------------------------------------------------------------------------
# Friction loss
# ---------------------------------------------------------------------------

def hazen_williams_headloss(length: float, q: float, c: float, d: float) -> Result[float]:
    """Hazen-Williams friction loss (m) of one conduit, SI form.

    Formula: *hf* = 10.67 × L × Q^1.852 / (C^1.852 × D^4.871).

    For *N* identical parallel pipes pass ``q = Q_total / N``: every pipe
    sees the same loss, so this value is also the system loss.
    """
    if not is_positive(length, q, c, d):
        return invalid("L, Q, C and D must be finite and > 0")
    try:
        hf = (
            HW_COEFFICIENT * length * q ** HW_FLOW_EXPONENT
            / (c ** HW_FLOW_EXPONENT * d ** HW_DIAMETER_EXPONENT)
        )
    except (OverflowError, ZeroDivisionError):
        return invalid("friction loss is outside the floating-point range")
    return finite(hf, "friction loss")


def headloss_per_km(hf: float, length: float) -> Result[float]:
    """Friction gradient in m per km of pipe."""
    if not is_finite(hf) or not is_positive(length):
        return invalid("headloss must be finite and length > 0")
    return finite(hf / (length / 1000.0), "headloss gradient")


# ---------------------------------------------------------------------------
# Minor losses
# ---------------------------------------------------------------------------

def minor_loss_percent(friction: float, percent: float) -> Result[float]:
    """Minor loss taken as *percent* % of the friction loss."""
    if not is_finite(friction, percent) or percent < 0:
        return invalid("friction loss must be finite and percent >= 0")
    return finite(friction * percent / 100.0, "minor loss")


def minor_loss_fittings(fittings: Iterable[Fitting], velocity: float) -> Result[float]:
    """ΣK · V² / 2g over the fitting table."""
    if not is_finite(velocity):
        return invalid("velocity must be finite")
    return finite(sum_k(fittings) * velocity * velocity / (2.0 * G), "minor loss")


# ---------------------------------------------------------------------------
# Static head and total dynamic head
# ---------------------------------------------------------------------------

def static_head_fixed(elevation_difference: float) -> Result[float]:
    if not is_finite(elevation_difference):
        return invalid("elevation difference must be finite")
    return Ok(float(elevation_difference))


def static_head_from_elevations(source: float, high_point: float) -> Result[float]:
    """Lift from the source level to the highest point; never negative."""
    if not is_finite(source, high_point):
        return invalid("elevations must be finite")
    return finite(max(0.0, high_point - source), "static head")


HeadTerm = Union[Result[float], float, None]


def _term(value: HeadTerm) -> Optional[float]:
    if isinstance(value, Ok):
        value = value.value
    elif isinstance(value, Failure):
        return None
    return float(value) if is_finite(value) else None


def required_pump_head(friction: HeadTerm, minor: HeadTerm, static: HeadTerm) -> Result[float]:
    """Total dynamic head = friction + minor + static.

    Missing or failed terms count as zero in the sum; the sum itself is a
    failure only when all three terms are missing.
    """
    terms = [_term(t) for t in (friction, minor, static)]
    present = [t for t in terms if t is not None]
    if not present:
        return invalid("no head term available")
    return finite(sum(present), "total dynamic head")


# ---------------------------------------------------------------------------
# Velocity bands
# ---------------------------------------------------------------------------

class VelocityClass(Enum):
    """Qualitative velocity band of a pressure pipe."""

    UNKNOWN = auto()
    LOW = auto()
    OK = auto()
    HIGH = auto()
    VERY_HIGH = auto()

    def __str__(self) -> str:
        return _VELOCITY_LABELS[self]


_VELOCITY_LABELS = {
    VelocityClass.UNKNOWN: "—",
    VelocityClass.LOW: "Low",
    VelocityClass.OK: "OK",
    VelocityClass.HIGH: "High",
    VelocityClass.VERY_HIGH: "Very High",
}


def classify_velocity(v: Union[Result[float], float]) -> VelocityClass:
    """Map a velocity (m/s) onto a :class:`VelocityClass` band."""
    x = _term(v)
    if x is None:
        return VelocityClass.UNKNOWN
    if x < VELOCITY_LOW:
        return VelocityClass.LOW
    if x <= VELOCITY_OK:
        return VelocityClass.OK
    if x <= VELOCITY_HIGH:
        return VelocityClass.HIGH
    return VelocityClass.VERY_HIGH
