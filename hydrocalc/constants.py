# hydrocalc/constants.py
"""Physical constants and fixed solver settings shared by every module."""

import math

# ---------------------------------------------------------------------------
# Physics
# ---------------------------------------------------------------------------

G = 9.80665  # standard gravity, m/s²

TWO_PI = 2.0 * math.pi

# Hazen-Williams (SI form): hf = 10.67 · L · Q^1.852 / (C^1.852 · D^4.871)
HW_COEFFICIENT = 10.67
HW_FLOW_EXPONENT = 1.852
HW_DIAMETER_EXPONENT = 4.871

# ---------------------------------------------------------------------------
# Bisection settings (fixed iteration counts, no tolerance exit)
# ---------------------------------------------------------------------------

# Manning full flow: diameter from discharge
FULL_FLOW_D_LO = 0.01          # m
FULL_FLOW_D_HI = 5.0           # m, initial upper bound
FULL_FLOW_GROWTH = 1.4
FULL_FLOW_MAX_GROWTH = 40
FULL_FLOW_ITERATIONS = 80

# Partial flow: wetted angle from discharge at fixed diameter
THETA_LO = 1e-6                # rad
THETA_ITERATIONS = 120

# Partial flow: diameter from discharge at fixed depth ratio
DEPTH_D_LO = 0.05              # m
DEPTH_D_HI = 5.0               # m
DEPTH_GROWTH = 1.35
DEPTH_MAX_GROWTH = 50
DEPTH_ITERATIONS = 110

# Upper bound growth stops once hi exceeds this value (m)
DIAMETER_HI_LIMIT = 50.0

# ---------------------------------------------------------------------------
# Velocity bands for pressure pipes (m/s)
# ---------------------------------------------------------------------------

VELOCITY_LOW = 1.0
VELOCITY_OK = 2.5
VELOCITY_HIGH = 3.5

# ---------------------------------------------------------------------------
# Typical minor-loss K-factors (turbulent flow, fully open)
# ---------------------------------------------------------------------------

FITTING_K = {
    "entrance": 0.5,
    "exit": 1.0,
    "elbow_90": 0.9,
    "elbow_90_long": 0.6,
    "elbow_45": 0.4,
    "tee_run": 0.6,
    "tee_branch": 1.8,
    "gate_valve": 0.2,
    "butterfly_valve": 0.9,
    "globe_valve": 10.0,
    "check_valve": 2.5,
    "reducer": 0.5,
}
