import importlib

import pytest

result = importlib.import_module('hydrocalc.domain.result')
fittings = importlib.import_module('hydrocalc.domain.fittings')

Ok = result.Ok
Failure = result.Failure
FailureKind = result.FailureKind


def test_ok_and_failure_truthiness():
    assert Ok(0.0)
    assert not result.invalid('bad')
    assert not result.out_of_range('far')


def test_map_and_then_short_circuit_on_failure():
    fail = result.invalid('bad')
    assert Ok(2.0).map(lambda x: x * 3).value == 6.0
    assert fail.map(lambda x: x * 3) is fail
    assert Ok(2.0).then(lambda x: result.invalid('neg')).kind is FailureKind.INVALID_INPUT
    assert fail.unwrap_or(-1.0) == -1.0


def test_collect_returns_first_failure():
    first = result.out_of_range('first')
    combined = result.collect(Ok(1), first, result.invalid('second'))
    assert combined is first
    assert result.collect(Ok(1), Ok(2)).value == (1, 2)


def test_failure_kind_text():
    assert str(FailureKind.OUT_OF_BRACKET_RANGE) == 'out of bracket range'


def test_standard_fitting_and_total_k():
    elbow = fittings.Fitting.standard('elbow_90', 4)
    assert elbow.k == pytest.approx(0.9)
    assert elbow.total_k == pytest.approx(3.6)


def test_fitting_validation():
    with pytest.raises(ValueError):
        fittings.Fitting('elbow', -1, 0.9)
    with pytest.raises(ValueError):
        fittings.Fitting('elbow', 1, float('nan'))
    with pytest.raises(ValueError):
        fittings.Fitting.standard('warp_drive')


def test_frozen_fitting_table_is_a_snapshot():
    table = [fittings.Fitting('tee', 1, 1.8)]
    frozen = fittings.freeze(table)
    table.append(fittings.Fitting('exit', 1, 1.0))
    assert len(frozen) == 1
    assert fittings.sum_k(frozen) == pytest.approx(1.8)
