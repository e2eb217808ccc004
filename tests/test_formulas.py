import importlib
import math

import pytest

formulas = importlib.import_module('hydrocalc.core.formulas')
result = importlib.import_module('hydrocalc.domain.result')

Ok = result.Ok
VelocityClass = formulas.VelocityClass


def test_area_and_velocity():
    assert formulas.area(0.3) == pytest.approx(0.0706858347058)
    assert formulas.velocity_from_q_d(0.02, 0.2).value == pytest.approx(0.636619772368)


def test_velocity_needs_positive_area():
    assert not formulas.velocity_from_q_d(0.02, 0.0)
    assert not formulas.velocity_from_q_d(0.02, float('nan'))


def test_diameter_from_flow_and_velocity():
    d = formulas.diameter_from_q_v(0.05, 1.5)
    assert d.value == pytest.approx(0.206012907746)
    # inverse of the continuity equation
    assert formulas.velocity_from_q_d(0.05, d.value).value == pytest.approx(1.5)


@pytest.mark.parametrize('q, v', [(0, 1.5), (0.05, 0), (-1, 1), (0.05, float('inf'))])
def test_diameter_from_flow_and_velocity_invalid(q, v):
    assert not formulas.diameter_from_q_v(q, v)


def test_hazen_williams_regression():
    hf = formulas.hazen_williams_headloss(1000.0, 0.02, 130.0, 0.2)
    assert hf.value == pytest.approx(2.35142848036, rel=1e-9)


def test_parallel_pipes_share_the_same_headloss():
    q_total, count = 0.06, 3
    per_pipe = formulas.hazen_williams_headloss(500.0, q_total / count, 120.0, 0.15)
    single = formulas.hazen_williams_headloss(500.0, 0.02, 120.0, 0.15)
    assert per_pipe.value == pytest.approx(single.value)


@pytest.mark.parametrize('args', [
    (0, 0.02, 130, 0.2),
    (1000, 0, 130, 0.2),
    (1000, 0.02, 0, 0.2),
    (1000, 0.02, 130, 0),
    (1000, -0.02, 130, 0.2),
    (1000, 0.02, 130, float('nan')),
    (1000, '0.02', 130, 0.2),
])
def test_hazen_williams_invalid_input(args):
    hf = formulas.hazen_williams_headloss(*args)
    assert isinstance(hf, result.Failure)
    assert hf.kind is result.FailureKind.INVALID_INPUT


def test_headloss_per_km():
    assert formulas.headloss_per_km(3.0, 1500.0).value == pytest.approx(2.0)
    assert not formulas.headloss_per_km(3.0, 0.0)


def test_minor_loss_percent():
    assert formulas.minor_loss_percent(2.0, 10).value == pytest.approx(0.2)
    assert not formulas.minor_loss_percent(2.0, -5)


def test_minor_loss_from_fittings(fittings):
    # ΣK = 6·0.9 + 2·0.2 + 1·2.5 = 8.3
    loss = formulas.minor_loss_fittings(fittings, 1.5)
    assert loss.value == pytest.approx(8.3 * 1.5 ** 2 / (2 * 9.80665))
    assert formulas.minor_loss_fittings([], 1.5).value == 0.0


def test_static_head():
    assert formulas.static_head_fixed(12.5).value == 12.5
    assert formulas.static_head_from_elevations(102.0, 131.5).value == pytest.approx(29.5)
    # high point below the source never yields negative lift
    assert formulas.static_head_from_elevations(131.5, 102.0).value == 0.0
    assert not formulas.static_head_fixed(float('nan'))


def test_required_pump_head_sums_available_terms():
    missing = result.invalid('not given')
    assert formulas.required_pump_head(Ok(2.0), Ok(0.5), Ok(10.0)).value == pytest.approx(12.5)
    assert formulas.required_pump_head(Ok(2.0), missing, Ok(10.0)).value == pytest.approx(12.0)
    assert formulas.required_pump_head(2.0, None, float('nan')).value == pytest.approx(2.0)


def test_required_pump_head_fails_without_any_term():
    missing = result.invalid('not given')
    tdh = formulas.required_pump_head(missing, missing, None)
    assert isinstance(tdh, result.Failure)


@pytest.mark.parametrize('v, expected', [
    (0.5, VelocityClass.LOW),
    (1.0, VelocityClass.OK),
    (2.5, VelocityClass.OK),
    (3.0, VelocityClass.HIGH),
    (4.2, VelocityClass.VERY_HIGH),
    (math.nan, VelocityClass.UNKNOWN),
])
def test_classify_velocity(v, expected):
    assert formulas.classify_velocity(v) is expected


def test_velocity_class_labels():
    assert str(VelocityClass.OK) == 'OK'
    assert str(VelocityClass.VERY_HIGH) == 'Very High'
    assert formulas.classify_velocity(result.invalid('x')) is VelocityClass.UNKNOWN


# ---------------------------------------------------------------------------
# float range
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('length, q, c, d', [
    (1000.0, 0.02, 130.0, 1e-70),   # D^4.871 underflows to zero
    (1000.0, 1e200, 130.0, 0.2),    # Q^1.852 overflows
    (1e300, 1e10, 130.0, 0.2),      # product overflows to inf
])
def test_hazen_williams_out_of_float_range(length, q, c, d):
    hf = formulas.hazen_williams_headloss(length, q, c, d)
    assert isinstance(hf, result.Failure)
    assert hf.kind is result.FailureKind.INVALID_INPUT


def test_continuity_out_of_float_range():
    d = formulas.diameter_from_q_v(1.0, 1e-320)
    v = formulas.velocity_from_q_d(1e300, 1e-10)
    for res in (d, v):
        assert isinstance(res, result.Failure)
        assert res.kind is result.FailureKind.INVALID_INPUT


def test_head_terms_out_of_float_range(fittings):
    assert not formulas.minor_loss_fittings(fittings, 1e160)
    assert not formulas.minor_loss_percent(1e308, 1000.0)
    assert not formulas.static_head_from_elevations(-1e308, 1e308)
    assert not formulas.required_pump_head(1e308, 1e308, 0.0)
