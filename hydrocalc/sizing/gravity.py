# hydrocalc/sizing/gravity.py
"""Gravity pipe modes (Manning).

* **D_full_from_Q** – smallest diameter that carries the flow running
  full; the depth ratio is 1 by construction.
* **DD_from_D** – depth ratio y/D reached by the flow in a given pipe,
  clamped to a full pipe when the flow exceeds capacity.
* **D_from_DD** – diameter that carries the flow at a design depth ratio.

As in the pressure modes the total flow is split over ``pipe_count``
identical parallel pipes and every per-pipe quantity refers to one pipe.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass

from . import AbstractSizingMode
from ..constants import TWO_PI
from ..core.formulas import ensure_positive, finite, velocity_from_q_d
from ..core.manning import diameter_for_full_flow_discharge, full_flow_discharge
from ..core.partial_flow import (
    angle_from_depth_ratio,
    solve_diameter_at_depth,
    solve_theta_for_q,
    wetted_area,
)
from ..core.units import flow_to_m3s, length_to_m, parse_number, slope_to_m_per_m
from ..domain.requests import GravityRequest, GravityResult, normalize_pipe_count
from ..domain.result import Result, collect

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Section:
    """Solved quantities of one pipe, before assembly into a result."""

    diameter: Result[float]
    velocity: Result[float]
    depth_ratio: Result[float]
    theta: Result[float]
    qfull: Result[float]


class GravitySizingMode(AbstractSizingMode):
    """Common pipeline of the gravity modes."""

    @abstractmethod
    def _solve(
        self,
        request: GravityRequest,
        q_pipe: Result[float],
        n: Result[float],
        s: Result[float],
    ) -> _Section:
        """Solve one pipe of the parallel set."""

    def compute(self, request: GravityRequest) -> GravityResult:
        count = normalize_pipe_count(request.pipe_count)
        q_total = flow_to_m3s(request.flow, request.flow_unit)
        q_pipe = q_total.map(lambda q: q / count)
        n = parse_number(request.n)
        s = slope_to_m_per_m(request.slope, request.slope_unit)

        sec = self._solve(request, q_pipe, n, s)
        ratio = collect(q_pipe, sec.qfull).map(lambda args: args[0] / args[1])

        logger.debug(
            "mode=%s pipes=%d D=%s y/D=%s Qfull=%s",
            self.name,
            count,
            sec.diameter,
            sec.depth_ratio,
            sec.qfull,
        )

        return GravityResult(
            mode=self.name,
            pipe_count=count,
            flow_total=q_total,
            flow_per_pipe=q_pipe,
            diameter=sec.diameter,
            velocity=sec.velocity,
            depth_ratio=sec.depth_ratio,
            theta=sec.theta,
            qfull=sec.qfull,
            capacity_ratio=ratio,
        )


class FullFlowDiameter(GravitySizingMode):
    name = "D_full_from_Q"

    def _solve(self, request, q_pipe, n, s):
        d = collect(q_pipe, n, s).then(
            lambda args: diameter_for_full_flow_discharge(*args)
        )
        return _Section(
            diameter=d,
            velocity=collect(q_pipe, d).then(lambda args: velocity_from_q_d(*args)),
            depth_ratio=d.map(lambda _: 1.0),
            theta=d.map(lambda _: TWO_PI),
            qfull=collect(d, n, s).then(lambda args: full_flow_discharge(*args)),
        )


class DepthRatioFromDiameter(GravitySizingMode):
    name = "DD_from_D"

    def _solve(self, request, q_pipe, n, s):
        d = ensure_positive(
            length_to_m(request.diameter, request.diameter_unit), "diameter"
        )
        state = collect(d, q_pipe, n, s).then(lambda args: solve_theta_for_q(*args))
        if state and state.value.is_full:
            logger.info("Flow exceeds the full-pipe capacity; the pipe runs full")
        return _Section(
            diameter=d,
            velocity=state.map(lambda st: st.velocity),
            depth_ratio=state.map(lambda st: st.depth_ratio),
            theta=state.map(lambda st: st.theta),
            qfull=state.map(lambda st: st.qfull),
        )


class DiameterFromDepthRatio(GravitySizingMode):
    name = "D_from_DD"

    def _solve(self, request, q_pipe, n, s):
        yd = parse_number(request.depth_ratio)
        d = collect(q_pipe, n, s, yd).then(lambda args: solve_diameter_at_depth(*args))
        theta = d.then(lambda _: yd).then(angle_from_depth_ratio)
        velocity = collect(q_pipe, d, theta).then(
            lambda args: finite(args[0] / wetted_area(args[1], args[2]), "velocity")
        )
        return _Section(
            diameter=d,
            velocity=velocity,
            depth_ratio=d.then(lambda _: yd),
            theta=theta,
            qfull=collect(d, n, s).then(lambda args: full_flow_discharge(*args)),
        )
