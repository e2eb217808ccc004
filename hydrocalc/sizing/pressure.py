# hydrocalc/sizing/pressure.py
"""Pressurised pipe modes (Hazen-Williams).

Both modes share one pipeline and differ only in how the diameter and
velocity are obtained:

* **D_from_V** – the diameter is sized for a target velocity;
* **V_from_D** – the velocity follows from a given diameter.

The total flow is split evenly over ``pipe_count`` identical parallel
pipes. Friction loss is evaluated for one pipe with its share of the flow
and equals the loss of the whole parallel system. The minor loss and the
static head are optional; the total dynamic head sums whatever is
available.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Tuple

from . import AbstractSizingMode
from ..core.formulas import (
    classify_velocity,
    diameter_from_q_v,
    ensure_positive,
    hazen_williams_headloss,
    headloss_per_km,
    minor_loss_fittings,
    minor_loss_percent,
    required_pump_head,
    static_head_fixed,
    static_head_from_elevations,
    velocity_from_q_d,
)
from ..core.units import flow_to_m3s, length_to_m, parse_number, velocity_to_mps
from ..domain.requests import (
    MinorLossSpec,
    PressureRequest,
    PressureResult,
    StaticHeadSpec,
    normalize_pipe_count,
)
from ..domain.result import Result, collect, invalid

logger = logging.getLogger(__name__)


class PressureSizingMode(AbstractSizingMode):
    """Common pipeline of the pressure modes."""

    @abstractmethod
    def _size(
        self, request: PressureRequest, q_pipe: Result[float]
    ) -> Tuple[Result[float], Result[float]]:
        """Return ``(diameter, velocity)`` for one pipe."""

    def compute(self, request: PressureRequest) -> PressureResult:
        count = normalize_pipe_count(request.pipe_count)
        q_total = flow_to_m3s(request.flow, request.flow_unit)
        q_pipe = q_total.map(lambda q: q / count)

        diameter, velocity = self._size(request, q_pipe)

        length = length_to_m(request.length, request.length_unit)
        c = parse_number(request.c_factor)
        hf = collect(length, q_pipe, c, diameter).then(
            lambda args: hazen_williams_headloss(*args)
        )
        per_km = collect(hf, length).then(lambda args: headloss_per_km(*args))

        minor = self._minor_loss(request.minor_loss, hf, velocity)
        static = self._static_head(request.static_head)
        tdh = required_pump_head(hf, minor, static)

        logger.debug(
            "mode=%s pipes=%d D=%s V=%s hf=%s tdh=%s",
            self.name,
            count,
            diameter,
            velocity,
            hf,
            tdh,
        )

        return PressureResult(
            mode=self.name,
            pipe_count=count,
            flow_total=q_total,
            flow_per_pipe=q_pipe,
            diameter=diameter,
            velocity=velocity,
            velocity_class=classify_velocity(velocity),
            friction_headloss=hf,
            headloss_per_km=per_km,
            minor_loss=minor,
            static_head=static,
            total_dynamic_head=tdh,
        )

    # ------------------------------------------------------------------
    # Optional head terms
    # ------------------------------------------------------------------

    @staticmethod
    def _minor_loss(
        cfg: MinorLossSpec, hf: Result[float], velocity: Result[float]
    ) -> Result[float]:
        if cfg.percent is not None:
            return hf.then(lambda h: minor_loss_percent(h, cfg.percent))
        if cfg.fittings:
            return velocity.then(lambda v: minor_loss_fittings(cfg.fittings, v))
        return invalid("minor loss not specified")

    @staticmethod
    def _static_head(cfg: StaticHeadSpec) -> Result[float]:
        if cfg.elevation_difference is not None:
            return static_head_fixed(cfg.elevation_difference)
        if cfg.is_set:
            return static_head_from_elevations(
                cfg.source_elevation, cfg.high_point_elevation
            )
        return invalid("static head not specified")


class DiameterFromVelocity(PressureSizingMode):
    """Size the pipe so that its share of the flow runs at a target velocity."""

    name = "D_from_V"

    def _size(self, request, q_pipe):
        target = velocity_to_mps(request.velocity, request.velocity_unit)
        diameter = collect(q_pipe, target).then(lambda args: diameter_from_q_v(*args))
        velocity = diameter.then(lambda _: target)
        return diameter, velocity


class VelocityFromDiameter(PressureSizingMode):
    """Check the velocity in a pipe of given diameter."""

    name = "V_from_D"

    def _size(self, request, q_pipe):
        diameter = ensure_positive(
            length_to_m(request.diameter, request.diameter_unit), "diameter"
        )
        velocity = collect(q_pipe, diameter).then(lambda args: velocity_from_q_d(*args))
        return diameter, velocity
