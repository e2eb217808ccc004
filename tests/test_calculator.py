import importlib
import logging

import pytest

requests = importlib.import_module('hydrocalc.domain.requests')
hydrocalc = importlib.import_module('hydrocalc')

PressureRequest = requests.PressureRequest
GravityRequest = requests.GravityRequest


def test_public_api_exports():
    for name in hydrocalc.__all__:
        assert hasattr(hydrocalc, name)


def test_calculate_dispatches_on_request_type(calculator):
    p = calculator.calculate(PressureRequest(flow=20, mode='V_from_D', diameter=200, length=1000))
    g = calculator.calculate(GravityRequest(flow=50, mode='DD_from_D', slope=0.01, diameter=300))
    assert isinstance(p, requests.PressureResult)
    assert isinstance(g, requests.GravityResult)


def test_mode_must_match_request_kind(calculator):
    with pytest.raises(ValueError):
        calculator.pressure(PressureRequest(flow=20, mode='DD_from_D'))
    with pytest.raises(ValueError):
        calculator.gravity(GravityRequest(flow=20, mode='D_from_V'))


def test_pressure_report(calculator):
    res = calculator.pressure(
        PressureRequest(flow=20, mode='V_from_D', diameter=200, length=1000, c_factor=130)
    )
    df = calculator.report(res).set_index('Quantity')

    assert df.loc['Friction headloss', 'Value'] == pytest.approx(2.35142848036, rel=1e-9)
    assert df.loc['Friction headloss', 'Display'] == '2.35143 m'
    assert df.loc['Diameter', 'Display'] == '200 mm'
    assert df.loc['Velocity class', 'Display'] == 'Low'
    # not requested -> placeholder
    assert df.loc['Minor loss', 'Display'] == '—'
    assert df.loc['Total dynamic head', 'Value'] == pytest.approx(2.35142848036, rel=1e-9)


def test_gravity_report(calculator, sewer):
    res = calculator.gravity(
        GravityRequest(flow=sewer['qfull'] / 2, flow_unit='m3ps', mode='DD_from_D',
                       n=sewer['n'], slope=sewer['s'], diameter=0.3, diameter_unit='m')
    )
    df = calculator.report(res).set_index('Quantity')

    assert df.loc['Depth ratio y/D', 'Display'] == '50 %'
    assert df.loc['Full-flow capacity', 'Value'] == pytest.approx(sewer['qfull'], rel=1e-9)


def test_report_precision_override():
    calc = hydrocalc.HydraulicCalculator(digits=3)
    res = calc.pressure(PressureRequest(flow=20, mode='V_from_D', diameter=200, length=1000))
    df = calc.report(res).set_index('Quantity')
    assert df.loc['Friction headloss', 'Display'] == '2.35 m'


def test_missing_diameter_is_logged(calculator, caplog):
    with caplog.at_level(logging.WARNING, logger='hydrocalc.facade.calculator'):
        calculator.gravity(GravityRequest(flow=1e6, flow_unit='m3ps', mode='D_full_from_Q', slope=0.01))
    assert 'No diameter' in caplog.text


def test_partial_flow_table(calculator, sewer):
    df = calculator.partial_flow_table(sewer['d'], sewer['n'], sewer['s'], points=21)

    assert len(df) == 20
    assert df['y/D'].iloc[-1] == pytest.approx(1.0)
    assert df['Q/Qfull'].iloc[-1] == pytest.approx(1.0)
    assert df['Q/Qfull'].iloc[9] == pytest.approx(0.5)
    assert df['V/Vfull'].iloc[9] == pytest.approx(1.0)
    assert 1.07 < df['Q/Qfull'].max() < 1.08


def test_partial_flow_table_rejects_invalid_pipe(calculator):
    with pytest.raises(ValueError):
        calculator.partial_flow_table(0.3, 0.0, 0.01)


def test_headloss_table(calculator):
    df = calculator.headloss_table(0.02, 1000.0, 130.0, [0.1, 0.2, 0.3])

    assert list(df['D, mm']) == pytest.approx([100.0, 200.0, 300.0])
    assert df['hf, m'].iloc[1] == pytest.approx(2.35142848036, rel=1e-9)
    assert df['hf, m/km'].iloc[1] == pytest.approx(2.35142848036, rel=1e-9)
    assert df['hf, m'].is_monotonic_decreasing


def test_fitting_table(calculator, fittings):
    df, total_k = calculator.fitting_table(fittings)
    assert len(df) == 3
    assert total_k == pytest.approx(8.3)
    assert df['Qty × K'].sum() == pytest.approx(8.3)


def test_report_imperial_and_litre_rows(calculator):
    res = calculator.pressure(PressureRequest(flow=20, mode='V_from_D', diameter=200, length=1000))
    df = calculator.report(res).set_index('Quantity')
    assert df.loc['Diameter (in)', 'Value'] == pytest.approx(7.87401574803)
    assert df.loc['Velocity (ft/s)', 'Value'] == pytest.approx(2.08864754714)
    assert df.loc['Flow (total, L/s)', 'Display'] == '20 L/s'


def test_default_fittings_apply_to_requests_without_minor_loss(fittings):
    table = list(fittings)
    calc = hydrocalc.HydraulicCalculator(fittings=table)
    table.clear()  # the calculator keeps its own copy
    assert len(calc.fittings) == 3

    res = calc.pressure(PressureRequest(flow=20, mode='V_from_D', diameter=200, length=1000))
    assert res.minor_loss.value == pytest.approx(0.171509297106, rel=1e-9)
    assert res.total_dynamic_head.value == pytest.approx(2.52293777747, rel=1e-9)


def test_request_minor_loss_wins_over_default_fittings(fittings):
    calc = hydrocalc.HydraulicCalculator(fittings=fittings)
    res = calc.pressure(
        PressureRequest(flow=20, mode='V_from_D', diameter=200, length=1000,
                        minor_loss=requests.MinorLossSpec(percent=10))
    )
    assert res.minor_loss.value == pytest.approx(0.235142848036, rel=1e-9)


def test_surcharged_pipe_is_logged(calculator, sewer, caplog):
    with caplog.at_level(logging.INFO, logger='hydrocalc.sizing.gravity'):
        res = calculator.gravity(
            GravityRequest(flow=sewer['qfull'] * 1.2, flow_unit='m3ps', mode='DD_from_D',
                           n=sewer['n'], slope=sewer['s'], diameter=0.3, diameter_unit='m')
        )
    assert res.depth_ratio.value == 1.0
    assert 'runs full' in caplog.text


def test_tiny_diameter_renders_placeholders(calculator):
    res = calculator.pressure(PressureRequest(flow=20, mode='V_from_D', diameter='1e-67', length=100))
    df = calculator.report(res).set_index('Quantity')
    assert df.loc['Friction headloss', 'Display'] == '—'
