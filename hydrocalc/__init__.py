# hydrocalc/__init__.py
"""**hydrocalc** package: hydraulic sizing of pressure and gravity pipes.

The init module gathers the library's key entities for external users:

--- from hydrocalc import HydraulicCalculator, PressureRequest, GravityRequest ---

The objects listed in ``__all__`` form the *public API* of the package:
the facade, request/result containers, the result type and the numeric
core functions.
"""

from __future__ import annotations

from .core.formatting import format_quantity, format_sig
from .core.formulas import (
    VelocityClass,
    hazen_williams_headloss,
    required_pump_head,
)
from .core.manning import diameter_for_full_flow_discharge, full_flow_discharge
from .core.partial_flow import (
    PartialFlowState,
    angle_from_depth_ratio,
    depth_ratio,
    partial_flow_discharge,
    solve_diameter_at_depth,
    solve_theta_for_q,
)
from .core.units import convert
from .domain.fittings import Fitting
from .domain.requests import (
    GravityRequest,
    GravityResult,
    MinorLossSpec,
    PressureRequest,
    PressureResult,
    StaticHeadSpec,
)
from .domain.result import Failure, FailureKind, Ok, Result
from .facade.calculator import HydraulicCalculator

__all__ = [
    "HydraulicCalculator",  # facade for calculations, tables and charts
    # requests / results
    "PressureRequest",
    "PressureResult",
    "GravityRequest",
    "GravityResult",
    "MinorLossSpec",
    "StaticHeadSpec",
    "Fitting",
    # result type
    "Ok",
    "Failure",
    "FailureKind",
    "Result",
    # numeric core
    "convert",
    "hazen_williams_headloss",
    "full_flow_discharge",
    "diameter_for_full_flow_discharge",
    "partial_flow_discharge",
    "depth_ratio",
    "angle_from_depth_ratio",
    "solve_theta_for_q",
    "solve_diameter_at_depth",
    "PartialFlowState",
    "required_pump_head",
    "VelocityClass",
    "format_sig",
    "format_quantity",
]
