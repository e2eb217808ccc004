# hydrocalc/core/bisection.py
"""Bounded bisection on monotonically increasing discharge functions.

All inverse solvers in the package (diameter from full-flow discharge,
wetted angle from discharge, diameter at a fixed depth ratio) share the
same two steps:

1. **Bracket growth** – starting from ``[lo, hi]`` the upper bound is
   multiplied by ``growth`` until ``f(hi) >= target`` or the attempt cap /
   ``hi_limit`` is reached.
2. **Bisection** – a *fixed* number of halvings, without a tolerance
   check, so every call costs the same and results are reproducible.

The function being inverted returns a ``Result``; a failed evaluation
anywhere aborts the search with that failure.
"""

from __future__ import annotations

import logging
from typing import Protocol

from ..domain.result import Failure, Ok, Result, out_of_range

logger = logging.getLogger(__name__)


class IncreasingFunction(Protocol):
    """Any ``__call__(x) -> Result[float]`` that increases with *x*."""

    def __call__(self, x: float) -> Result[float]:
        ...


def grow_bracket(
    fn: IncreasingFunction,
    target: float,
    hi: float,
    growth: float,
    max_attempts: int,
    hi_limit: float,
) -> float:
    """Return an upper bound with ``fn(hi) >= target`` if one is in reach."""
    for attempt in range(max_attempts):
        f_hi = fn(hi)
        if f_hi and f_hi.value >= target:
            break
        hi *= growth
        logger.debug("bracket growth #%d: hi=%.6g", attempt + 1, hi)
        if hi > hi_limit:
            break
    return hi


def bisect(
    fn: IncreasingFunction,
    target: float,
    lo: float,
    hi: float,
    iterations: int,
) -> Result[float]:
    """Fixed-count bisection for ``fn(x) == target``; returns the midpoint."""
    for _ in range(iterations):
        mid = 0.5 * (lo + hi)
        f_mid = fn(mid)
        if isinstance(f_mid, Failure):
            logger.debug("bisection aborted at x=%.6g: %s", mid, f_mid.reason)
            return f_mid
        if f_mid.value < target:
            lo = mid
        else:
            hi = mid
    return Ok(0.5 * (lo + hi))


def solve_increasing(
    fn: IncreasingFunction,
    target: float,
    lo: float,
    hi: float,
    *,
    iterations: int,
    growth: float,
    max_attempts: int,
    hi_limit: float,
) -> Result[float]:
    """Grow the bracket, check that it contains *target*, then bisect."""
    hi = grow_bracket(fn, target, hi, growth, max_attempts, hi_limit)

    f_hi = fn(hi)
    if isinstance(f_hi, Failure):
        return f_hi
    if f_hi.value < target:
        logger.debug("target %.6g above f(hi=%.6g)=%.6g", target, hi, f_hi.value)
        return out_of_range(f"target exceeds search range (x <= {hi:.4g})")

    f_lo = fn(lo)
    if isinstance(f_lo, Failure):
        return f_lo
    if f_lo.value > target:
        logger.debug("target %.6g below f(lo=%.6g)=%.6g", target, lo, f_lo.value)
        return out_of_range(f"target below search range (x >= {lo:.4g})")

    return bisect(fn, target, lo, hi, iterations)
