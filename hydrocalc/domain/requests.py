# hydrocalc/domain/requests.py
"""Request and result containers for one calculation.

A request carries *every* input of a calculation – raw values with their
unit tags, the mode name and an immutable copy of the fitting table – so
the core never depends on ambient state. A result is just as immutable;
each numeric field is a :data:`~hydrocalc.domain.result.Result` so a
missing quantity is explicit instead of a NaN.

Modes
-----
* pressure – ``"D_from_V"`` (size the pipe for a target velocity) and
  ``"V_from_D"`` (check a given diameter);
* gravity  – ``"D_full_from_Q"`` (Manning, pipe running full),
  ``"DD_from_D"`` (depth ratio in a given pipe) and ``"D_from_DD"``
  (diameter for a design depth ratio).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .fittings import Fitting, freeze
from .result import Result
from ..core.formulas import VelocityClass

Raw = Any  # number or text straight from an input field


def normalize_pipe_count(raw: Raw) -> int:
    """``max(1, floor(raw))``; anything unparsable counts as one pipe."""
    try:
        x = float(raw)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(x):
        return 1
    return max(1, int(math.floor(x)))


# ---------------------------------------------------------------------------
# Optional head terms of a pressure system
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MinorLossSpec:
    """Minor loss as a percentage of friction *or* from a fitting table."""

    percent: Optional[float] = None
    fittings: Tuple[Fitting, ...] = ()

    def __post_init__(self) -> None:
        if self.percent is not None and self.fittings:
            raise ValueError("Give either a minor-loss percentage or fittings, not both.")
        # lists handed in by the caller are snapshotted
        object.__setattr__(self, "fittings", freeze(self.fittings))

    @property
    def is_set(self) -> bool:
        return self.percent is not None or bool(self.fittings)


@dataclass(frozen=True, slots=True)
class StaticHeadSpec:
    """Fixed elevation difference *or* source/high-point elevations (m)."""

    elevation_difference: Optional[float] = None
    source_elevation: Optional[float] = None
    high_point_elevation: Optional[float] = None

    def __post_init__(self) -> None:
        by_points = (
            self.source_elevation is not None or self.high_point_elevation is not None
        )
        if self.elevation_difference is not None and by_points:
            raise ValueError(
                "Give either an elevation difference or source/high-point elevations."
            )
        if by_points and (
            self.source_elevation is None or self.high_point_elevation is None
        ):
            raise ValueError("Source and high-point elevations must be given together.")

    @property
    def is_set(self) -> bool:
        return self.elevation_difference is not None or (
            self.source_elevation is not None and self.high_point_elevation is not None
        )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PressureRequest:
    """Inputs of a pressurised (pumped) pipe calculation."""

    flow: Raw
    flow_unit: str = "Lps"
    mode: str = "D_from_V"
    velocity: Raw = None           # D_from_V
    velocity_unit: str = "mps"
    diameter: Raw = None           # V_from_D
    diameter_unit: str = "mm"
    length: Raw = None
    length_unit: str = "m"
    c_factor: Raw = 130.0          # Hazen-Williams C
    pipe_count: Raw = 1            # identical pipes in parallel
    minor_loss: MinorLossSpec = field(default_factory=MinorLossSpec)
    static_head: StaticHeadSpec = field(default_factory=StaticHeadSpec)


@dataclass(frozen=True, slots=True)
class GravityRequest:
    """Inputs of a gravity (Manning) pipe calculation."""

    flow: Raw
    flow_unit: str = "Lps"
    mode: str = "DD_from_D"
    n: Raw = 0.013                 # Manning roughness
    slope: Raw = None
    slope_unit: str = "mperm"
    diameter: Raw = None           # DD_from_D
    diameter_unit: str = "mm"
    depth_ratio: Raw = None        # D_from_DD, y/D in (0, 1]
    pipe_count: Raw = 1


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PressureResult:
    mode: str
    pipe_count: int
    flow_total: Result[float]          # m³/s
    flow_per_pipe: Result[float]       # m³/s
    diameter: Result[float]            # m
    velocity: Result[float]            # m/s
    velocity_class: VelocityClass
    friction_headloss: Result[float]   # m, per pipe == system
    headloss_per_km: Result[float]     # m/km
    minor_loss: Result[float]          # m
    static_head: Result[float]         # m
    total_dynamic_head: Result[float]  # m


@dataclass(frozen=True, slots=True)
class GravityResult:
    mode: str
    pipe_count: int
    flow_total: Result[float]          # m³/s
    flow_per_pipe: Result[float]       # m³/s
    diameter: Result[float]            # m
    velocity: Result[float]            # m/s
    depth_ratio: Result[float]         # y/D
    theta: Result[float]               # rad
    qfull: Result[float]               # m³/s, per pipe
    capacity_ratio: Result[float]      # Q_pipe / Q_full
