import importlib
import os
import sys
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

Fitting = importlib.import_module('hydrocalc.domain.fittings').Fitting
HydraulicCalculator = importlib.import_module('hydrocalc.facade.calculator').HydraulicCalculator

# Concrete sewer used across the gravity tests:
# D = 0.3 m, n = 0.013, S = 0.01 -> Qfull = 0.0967007585336 m³/s
SEWER_D = 0.3
SEWER_N = 0.013
SEWER_S = 0.01
SEWER_QFULL = 0.0967007585336


@pytest.fixture
def sewer():
    return {'d': SEWER_D, 'n': SEWER_N, 's': SEWER_S, 'qfull': SEWER_QFULL}


@pytest.fixture
def fittings():
    return [
        Fitting.standard('elbow_90', 6),
        Fitting.standard('gate_valve', 2),
        Fitting.standard('check_valve', 1),
    ]


@pytest.fixture
def calculator():
    return HydraulicCalculator()
