# hydrocalc/visualization/plots.py
"""Thin matplotlib wrappers for the key charts.

The functions draw *interactive* charts (``plt.show()``) and return
nothing, keeping the API as small as possible. They take the tables
produced by :class:`~hydrocalc.facade.calculator.HydraulicCalculator`.
"""

from __future__ import annotations

import matplotlib.pyplot as plt
import pandas as pd

# ---------------------------------------------------------------------------
# 1) Partial-flow diagram
# ---------------------------------------------------------------------------

def plot_partial_flow(df: pd.DataFrame) -> None:
    """Q/Qfull and V/Vfull against depth ratio y/D."""
    plt.plot(df["Q/Qfull"], df["y/D"], label="Q / Qfull")
    plt.plot(df["V/Vfull"], df["y/D"], ls="--", label="V / Vfull")
    plt.axvline(1.0, color="grey", lw=0.8)

    plt.title("Hydraulic elements of a circular pipe")
    plt.xlabel("Ratio to full-flow value")
    plt.ylabel("y/D")
    plt.ylim(0, 1)
    plt.grid(True)
    plt.legend()
    plt.show()

# ---------------------------------------------------------------------------
# 2) Headloss against diameter
# ---------------------------------------------------------------------------

def plot_headloss(df: pd.DataFrame) -> None:
    """Hazen-Williams gradient (m/km) for each candidate diameter."""
    plt.plot(df["D, mm"], df["hf, m/km"], marker="o")
    plt.yscale("log")

    plt.title("Friction gradient by diameter")
    plt.xlabel("D, mm")
    plt.ylabel("hf, m/km")
    plt.grid(True)
    plt.show()
