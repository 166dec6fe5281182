"""Tests for the persistence records."""

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from curves.core.records import LinearVariableRecord, PolynomialRecord
from curves.core.exceptions import InvariantViolation
from curves.planning.polynomial import PolynomialCurve
from curves.core.linear_variable import LinearVariable


@pytest.fixture
def curve():
    return PolynomialCurve.from_boundary_c1([0.0, 1.0], [1.0, 0.0], [2.0, -1.0], [0.0, 1.0], 0.5, 1.5)


def test_polynomial_record_fields(curve):
    record = curve.to_record()
    assert record.dimension == 2
    assert record.degree == 3
    assert record.t_min == 0.5
    assert record.t_max == 1.5
    assert np.allclose(record.coefficients, curve.coeff())


def test_polynomial_json_round_trip(curve):
    """Curves survive an encode/decode cycle through JSON."""
    encoded = curve.to_record().to_json()
    decoded = PolynomialCurve.from_record(PolynomialRecord.from_json(encoded))
    assert decoded == curve
    assert decoded.safe == curve.safe


def test_polynomial_dict_round_trip(curve):
    as_dict = curve.to_record().to_dict()
    assert set(as_dict) == {'dimension', 'coefficients', 'degree', 't_min', 't_max', 'safe'}
    assert PolynomialCurve.from_record(PolynomialRecord.from_dict(as_dict)) == curve


def test_inconsistent_record():
    record = PolynomialRecord(dimension=3, coefficients=[[1.0, 2.0]], degree=1, t_min=0.0, t_max=1.0)
    with pytest.raises(InvariantViolation):
        PolynomialCurve.from_record(record)


def test_empty_curve_record():
    record = PolynomialCurve.empty().to_record()
    assert record.coefficients == []
    restored = PolynomialCurve.from_record(record)
    assert restored.dimension == 0


def test_linear_variable_json_round_trip():
    variable = LinearVariable([[1.0, 0.0, 2.0], [0.0, -1.0, 0.5]], [3.0, 4.0])
    encoded = variable.to_record().to_json()
    decoded = LinearVariable.from_record(LinearVariableRecord.from_json(encoded))
    assert decoded.is_approx(variable)
    assert set(variable.to_record().to_dict()) == {'B', 'c', 'is_zero'}


def test_empty_curve_record_keeps_dimension():
    curve = PolynomialCurve(np.zeros((3, 0)), 0.0, 1.0)
    assert curve.coeff().shape == (3, 0)
    record = curve.to_record()
    assert record.dimension == 3
    restored = PolynomialCurve.from_record(PolynomialRecord.from_json(record.to_json()))
    assert restored.dimension == 3
    assert restored.t_max == 1.0
    assert curve.is_approx(restored)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
