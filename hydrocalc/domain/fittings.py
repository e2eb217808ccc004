# hydrocalc/domain/fittings.py
"""Minor-loss fitting records.

The caller keeps an editable list of fittings (name, quantity, K-factor)
between calculations; each request receives an immutable ``tuple`` copy,
so the core only ever reads it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from ..constants import FITTING_K


@dataclass(frozen=True, slots=True)
class Fitting:
    """One line of the fitting table."""

    name: str
    quantity: float  # pcs
    k: float         # K-factor, dimensionless

    def __post_init__(self) -> None:
        if not (math.isfinite(self.quantity) and self.quantity >= 0):
            raise ValueError(f"Fitting '{self.name}': quantity must be >= 0.")
        if not (math.isfinite(self.k) and self.k >= 0):
            raise ValueError(f"Fitting '{self.name}': K-factor must be >= 0.")

    @property
    def total_k(self) -> float:
        return self.quantity * self.k

    @classmethod
    def standard(cls, name: str, quantity: float = 1) -> "Fitting":
        """Build a fitting with the tabulated K from ``FITTING_K``.

        Raises
        ------
        ValueError
            If *name* is not in the table.
        """
        try:
            k = FITTING_K[name]
        except KeyError:
            raise ValueError(f"Unknown fitting '{name}'") from None
        return cls(name=name, quantity=quantity, k=k)


def freeze(fittings: Iterable[Fitting]) -> Tuple[Fitting, ...]:
    """Snapshot a caller-owned fitting list for one request."""
    return tuple(fittings)


def sum_k(fittings: Iterable[Fitting]) -> float:
    """ΣK = Σ quantity × K over the table."""
    return sum(f.total_k for f in fittings)
