# hydrocalc/facade/calculator.py
"""High-level *facade* for running calculations and building reports.

**HydraulicCalculator** hides the sequence of calls behind one object:
1. Pick the calculation mode named in the request (``sizing.get``).
2. Run it and hand back the immutable result.
3. (optional) Turn results into ``pandas`` tables and draw charts through
   *visualization.plots*.

The calculator keeps no state between calls apart from an optional
display precision and a frozen default fitting table, used by pressure
requests that do not specify a minor loss of their own. One instance can
serve any number of requests.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..core.formatting import format_quantity
from ..core.formulas import (
    classify_velocity,
    hazen_williams_headloss,
    headloss_per_km,
    velocity_from_q_d,
)
from ..core.manning import full_flow_discharge, full_flow_velocity
from ..core.partial_flow import (
    angle_from_depth_ratio,
    hydraulic_radius,
    partial_flow_discharge,
    wetted_area,
)
from ..core.units import m3s_to_lps, m_to_in, m_to_mm, mps_to_ftps
from ..domain.fittings import Fitting, freeze, sum_k
from ..domain.requests import (
    GravityRequest,
    GravityResult,
    MinorLossSpec,
    PressureRequest,
    PressureResult,
)
from ..domain.result import Failure, Result
from ..sizing import GRAVITY_MODES, PRESSURE_MODES, get as get_mode
from ..visualization import plots

logger = logging.getLogger(__name__)

NAN = float("nan")


def _to_percent(x: float) -> float:
    return x * 100.0


# (label, result attribute, unit, SI → display conversion, digits)
_PRESSURE_ROWS = [
    ("Flow (total)", "flow_total", "m³/s", None, 6),
    ("Flow (total, L/s)", "flow_total", "L/s", m3s_to_lps, 6),
    ("Flow per pipe", "flow_per_pipe", "m³/s", None, 6),
    ("Diameter", "diameter", "mm", m_to_mm, 5),
    ("Diameter (in)", "diameter", "in", m_to_in, 5),
    ("Velocity", "velocity", "m/s", None, 5),
    ("Velocity (ft/s)", "velocity", "ft/s", mps_to_ftps, 5),
    ("Friction headloss", "friction_headloss", "m", None, 6),
    ("Headloss gradient", "headloss_per_km", "m/km", None, 6),
    ("Minor loss", "minor_loss", "m", None, 6),
    ("Static head", "static_head", "m", None, 6),
    ("Total dynamic head", "total_dynamic_head", "m", None, 6),
]

_GRAVITY_ROWS = [
    ("Flow (total)", "flow_total", "m³/s", None, 6),
    ("Flow (total, L/s)", "flow_total", "L/s", m3s_to_lps, 6),
    ("Flow per pipe", "flow_per_pipe", "m³/s", None, 6),
    ("Diameter", "diameter", "mm", m_to_mm, 5),
    ("Diameter (in)", "diameter", "in", m_to_in, 5),
    ("Velocity", "velocity", "m/s", None, 5),
    ("Velocity (ft/s)", "velocity", "ft/s", mps_to_ftps, 5),
    ("Depth ratio y/D", "depth_ratio", "%", _to_percent, 5),
    ("Wetted angle", "theta", "rad", None, 5),
    ("Full-flow capacity", "qfull", "m³/s", None, 6),
    ("Q / Qfull", "capacity_ratio", "%", _to_percent, 5),
]


class HydraulicCalculator:
    """Single entry point for users of the ``hydrocalc`` library."""

    # ------------------------------------------------------------------
    # Constructor
    # ------------------------------------------------------------------

    def __init__(
        self, digits: Optional[int] = None, fittings: Iterable[Fitting] = ()
    ) -> None:
        # overrides the per-quantity precision of ``report`` when given
        self.digits = digits
        self.fittings: Tuple[Fitting, ...] = freeze(fittings)

    # ------------------------------------------------------------------
    # Calculations
    # ------------------------------------------------------------------

    def pressure(self, request: PressureRequest) -> PressureResult:
        """Run a pressure-pipe calculation in ``request.mode``."""
        if request.mode not in PRESSURE_MODES:
            raise ValueError(f"'{request.mode}' is not a pressure mode")
        logger.info("Pressure calculation (%s) …", request.mode)
        if self.fittings and not request.minor_loss.is_set:
            request = dataclasses.replace(
                request, minor_loss=MinorLossSpec(fittings=self.fittings)
            )
        result = get_mode(request.mode).compute(request)
        self._warn_if_unsized(result)
        return result

    def gravity(self, request: GravityRequest) -> GravityResult:
        """Run a gravity-pipe calculation in ``request.mode``."""
        if request.mode not in GRAVITY_MODES:
            raise ValueError(f"'{request.mode}' is not a gravity mode")
        logger.info("Gravity calculation (%s) …", request.mode)
        result = get_mode(request.mode).compute(request)
        self._warn_if_unsized(result)
        return result

    def calculate(
        self, request: Union[PressureRequest, GravityRequest]
    ) -> Union[PressureResult, GravityResult]:
        if isinstance(request, PressureRequest):
            return self.pressure(request)
        return self.gravity(request)

    @staticmethod
    def _warn_if_unsized(result: Union[PressureResult, GravityResult]) -> None:
        if isinstance(result.diameter, Failure):
            logger.warning(
                "No diameter for mode %s: %s (%s)",
                result.mode,
                result.diameter.reason,
                result.diameter.kind,
            )

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def report(self, result: Union[PressureResult, GravityResult]) -> pd.DataFrame:
        """Result as a ``Quantity | Value | Unit | Display`` table."""
        rows_spec = _PRESSURE_ROWS if isinstance(result, PressureResult) else _GRAVITY_ROWS
        records: List[dict] = [
            {"Quantity": "Mode", "Value": result.mode, "Unit": "", "Display": result.mode},
            {
                "Quantity": "Pipes in parallel",
                "Value": result.pipe_count,
                "Unit": "pcs",
                "Display": f"{result.pipe_count} pipe(s)",
            },
        ]
        for label, attr, unit, convert, digits in rows_spec:
            res: Result[float] = getattr(result, attr)
            scaled = res.map(convert) if convert else res
            records.append(
                {
                    "Quantity": label,
                    "Value": scaled.unwrap_or(NAN),
                    "Unit": unit,
                    "Display": format_quantity(scaled, unit, self.digits or digits),
                }
            )
        if isinstance(result, PressureResult):
            records.append(
                {
                    "Quantity": "Velocity class",
                    "Value": result.velocity_class.name,
                    "Unit": "",
                    "Display": str(result.velocity_class),
                }
            )
        return pd.DataFrame.from_records(records)

    def partial_flow_table(
        self, d: float, n: float, s: float, points: int = 21
    ) -> pd.DataFrame:
        """Hydraulic elements of a circular pipe from y/D ≈ 0 to full.

        Raises
        ------
        ValueError
            If the pipe itself is invalid (``D``, ``n`` or ``S`` not > 0).
        """
        qfull = full_flow_discharge(d, n, s)
        vfull = full_flow_velocity(d, n, s)
        for res in (qfull, vfull):
            if isinstance(res, Failure):
                raise ValueError(f"Cannot tabulate partial flow: {res.reason}")

        records = []
        # y/D = 0 is a dry pipe and has no flow section
        for yd in np.linspace(0.0, 1.0, points)[1:]:
            theta = angle_from_depth_ratio(float(yd)).value
            a = wetted_area(d, theta)
            q = partial_flow_discharge(d, n, s, theta).unwrap_or(NAN)
            records.append(
                {
                    "y/D": float(yd),
                    "theta, rad": theta,
                    "A, m²": a,
                    "R, m": hydraulic_radius(d, theta).unwrap_or(NAN),
                    "Q, m³/s": q,
                    "Q/Qfull": q / qfull.value,
                    "V/Vfull": (q / a) / vfull.value if a > 0 else NAN,
                }
            )
        return pd.DataFrame.from_records(records)

    def headloss_table(
        self, q: float, length: float, c: float, diameters: Iterable[float]
    ) -> pd.DataFrame:
        """Hazen-Williams loss and velocity for candidate diameters (m)."""
        records = []
        for d in diameters:
            hf = hazen_williams_headloss(length, q, c, d)
            v = velocity_from_q_d(q, d)
            records.append(
                {
                    "D, mm": m_to_mm(d),
                    "V, m/s": v.unwrap_or(NAN),
                    "Velocity class": str(classify_velocity(v)),
                    "hf, m": hf.unwrap_or(NAN),
                    "hf, m/km": hf.then(lambda h: headloss_per_km(h, length)).unwrap_or(NAN),
                }
            )
        return pd.DataFrame.from_records(records)

    @staticmethod
    def fitting_table(fittings: Sequence[Fitting]) -> Tuple[pd.DataFrame, float]:
        """Fitting list as a table plus ΣK."""
        df = pd.DataFrame.from_records(
            [
                {"Fitting": f.name, "Qty": f.quantity, "K": f.k, "Qty × K": f.total_k}
                for f in fittings
            ],
            columns=["Fitting", "Qty", "K", "Qty × K"],
        )
        return df, sum_k(fittings)

    # ------------------------------------------------------------------
    # Quick chart wrappers
    # ------------------------------------------------------------------

    def plot_partial_flow(self, df: pd.DataFrame) -> None:
        """Partial-flow diagram (Q/Qfull and V/Vfull against y/D)."""
        plots.plot_partial_flow(df)

    def plot_headloss(self, df: pd.DataFrame) -> None:
        """Headloss and velocity against candidate diameter."""
        plots.plot_headloss(df)
