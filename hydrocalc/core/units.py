# hydrocalc/core/units.py
"""Conversion of user-facing units to SI.

Every function accepts a raw value (number or text typed into a form)
plus a unit tag and returns ``Ok(si_value)`` or an INVALID_INPUT
``Failure`` when the value does not parse to a finite number or the tag
is not recognised.

Unit tags
---------
* discharge – ``Lps``, ``m3ps``, ``Lpm``, ``m3ph``, ``gpm``, ``cfs`` → m³/s
* velocity  – ``ftps``, ``mps`` → m/s
* length    – ``mm``, ``in``, ``ft``, ``km``, ``m`` → m
* slope     – ``percent``, ``permil``, ``mperm`` → m/m
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict

from ..domain.result import Ok, Result, invalid

Converter = Callable[[float], float]

FLOW_UNITS: Dict[str, Converter] = {
    "Lps": lambda q: q / 1000.0,
    "m3ps": lambda q: q,
    "Lpm": lambda q: q / 60000.0,
    "m3ph": lambda q: q / 3600.0,
    "gpm": lambda q: q * 0.003785411784 / 60.0,  # US gallon/min
    "cfs": lambda q: q * 0.028316846592,         # ft³/s
}

VELOCITY_UNITS: Dict[str, Converter] = {
    "ftps": lambda v: v * 0.3048,
    "mps": lambda v: v,
}

LENGTH_UNITS: Dict[str, Converter] = {
    "mm": lambda x: x / 1000.0,
    "in": lambda x: x * 0.0254,
    "ft": lambda x: x * 0.3048,
    "km": lambda x: x * 1000.0,
    "m": lambda x: x,
}

SLOPE_UNITS: Dict[str, Converter] = {
    "percent": lambda s: s / 100.0,
    "permil": lambda s: s / 1000.0,
    "mperm": lambda s: s,
}

ALL_UNITS: Dict[str, Converter] = {
    **FLOW_UNITS,
    **VELOCITY_UNITS,
    **LENGTH_UNITS,
    **SLOPE_UNITS,
}


def parse_number(value: Any) -> Result[float]:
    """Parse a form value into a finite float."""
    if value is None or isinstance(value, bool):
        return invalid(f"not a number: {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return invalid("empty value")
    try:
        x = float(value)
    except (TypeError, ValueError):
        return invalid(f"not a number: {value!r}")
    if not math.isfinite(x):
        return invalid(f"not finite: {value!r}")
    return Ok(x)


def _convert(value: Any, unit: str, table: Dict[str, Converter], family: str) -> Result[float]:
    converter = table.get(unit)
    if converter is None:
        label = f"{family} unit" if family else "unit"
        return invalid(f"unknown {label} '{unit}'")
    return parse_number(value).map(converter)


def convert(value: Any, unit: str) -> Result[float]:
    """Convert *value* in *unit* to its SI equivalent (any family)."""
    return _convert(value, unit, ALL_UNITS, "")


def flow_to_m3s(value: Any, unit: str) -> Result[float]:
    return _convert(value, unit, FLOW_UNITS, "flow")


def velocity_to_mps(value: Any, unit: str) -> Result[float]:
    return _convert(value, unit, VELOCITY_UNITS, "velocity")


def length_to_m(value: Any, unit: str) -> Result[float]:
    return _convert(value, unit, LENGTH_UNITS, "length")


def slope_to_m_per_m(value: Any, unit: str) -> Result[float]:
    return _convert(value, unit, SLOPE_UNITS, "slope")


# ---------------------------------------------------------------------------
# SI → display units
# ---------------------------------------------------------------------------

def m_to_mm(m: float) -> float:
    return m * 1000.0


def m_to_in(m: float) -> float:
    return m / 0.0254


def mps_to_ftps(v: float) -> float:
    return v / 0.3048


def m3s_to_lps(q: float) -> float:
    return q * 1000.0
