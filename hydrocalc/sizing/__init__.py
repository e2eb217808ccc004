# hydrocalc/sizing/__init__.py
"""Calculation modes and their factory.

*The module combines:*
1. **AbstractSizingMode** – abstract base class defining the single
   ``compute(request)`` entry point of every calculation mode.
2. The factory **get(name)** returning a mode object by its alias
   (``"D_from_V"``, ``"DD_from_D"``, ...). Requests carry the alias, so the
   facade never has to branch on it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Tuple

# ---------------------------------------------------------------------------
# Abstract base class
# ---------------------------------------------------------------------------


class AbstractSizingMode(ABC):
    """Interface of a calculation mode.

    ``compute`` takes a request dataclass and returns the matching result
    dataclass. It must never raise for bad numbers: invalid or missing
    inputs surface as ``Failure`` fields of the result.
    """

    name: str = ""

    @abstractmethod
    def compute(self, request: Any) -> Any:
        """Run the calculation for *request*."""
        ...


# ---------------------------------------------------------------------------
# Factory by alias
# ---------------------------------------------------------------------------

PRESSURE_MODES: Tuple[str, ...] = ("D_from_V", "V_from_D")
GRAVITY_MODES: Tuple[str, ...] = ("D_full_from_Q", "DD_from_D", "D_from_DD")


def get(name: str) -> AbstractSizingMode:
    """Return a ready mode object for alias *name*.

    Raises
    ------
    ValueError
        If the alias is unknown.
    """
    if name == "D_from_V":
        from .pressure import DiameterFromVelocity

        return DiameterFromVelocity()
    if name == "V_from_D":
        from .pressure import VelocityFromDiameter

        return VelocityFromDiameter()
    if name == "D_full_from_Q":
        from .gravity import FullFlowDiameter

        return FullFlowDiameter()
    if name == "DD_from_D":
        from .gravity import DepthRatioFromDiameter

        return DepthRatioFromDiameter()
    if name == "D_from_DD":
        from .gravity import DiameterFromDepthRatio

        return DiameterFromDepthRatio()

    raise ValueError(f"Unknown calculation mode '{name}'")
