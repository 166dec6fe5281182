"""Tests for curves of affine variables and their specialization."""

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from curves.core.linear_variable import LinearVariable
from curves.optimization.specialize import specialize
from curves.planning.polynomial import PolynomialCurve
from curves.core.exceptions import DimensionError, EmptyCurveError


def selector(start: int, dim: int, n: int) -> LinearVariable:
    """Variable equal to x[start:start + dim] for a decision vector of size n."""
    B = np.zeros((dim, n))
    B[:, start:start + dim] = np.eye(dim)
    return LinearVariable(B, np.zeros(dim))


@pytest.fixture
def x():
    return np.array([1.0, -2.0, 3.0, 0.5])


@pytest.fixture
def affine_c1():
    """C1 curve whose end points are decision variables and velocities constant."""
    init = selector(0, 2, 4)
    end = selector(2, 2, 4)
    d_init = LinearVariable.constant([1.0, 0.0], n=4)
    d_end = LinearVariable.constant([0.0, -1.0], n=4)
    return PolynomialCurve.from_boundary_c1(init, d_init, end, d_end, 0.0, 2.0)


def test_affine_curve_structure(affine_c1):
    assert affine_c1.is_affine
    assert affine_c1.degree == 3
    assert affine_c1.dimension == 2
    with pytest.raises(TypeError):
        affine_c1.coeff()


def test_affine_evaluation_is_affine(affine_c1, x):
    """Evaluating at t gives a variable whose value is the numeric curve value."""
    numeric = specialize(affine_c1, x)
    for t in np.linspace(0.0, 2.0, 5):
        point = affine_c1.evaluate(t)
        assert isinstance(point, LinearVariable)
        assert np.allclose(point.evaluate(x), numeric.evaluate(t))
        assert np.allclose(affine_c1.derivative_at(t, 1).evaluate(x), numeric.derivative_at(t, 1))


def test_specialize_matches_numeric_construction(affine_c1, x):
    """Specializing equals building the curve from the evaluated boundary values."""
    numeric = specialize(affine_c1, x)
    expected = PolynomialCurve.from_boundary_c1(
        [1.0, -2.0], [1.0, 0.0], [3.0, 0.5], [0.0, -1.0], 0.0, 2.0
    )
    assert isinstance(numeric, PolynomialCurve)
    assert not numeric.is_affine
    assert numeric.time_range() == (0.0, 2.0)
    assert numeric.is_approx(expected, precision=1e-9)
    assert np.allclose(numeric.evaluate(2.0), [3.0, 0.5])


def test_specialize_c0_and_c2(x):
    init = selector(0, 2, 4)
    end = selector(2, 2, 4)
    line = specialize(PolynomialCurve.from_boundary_c0(init, end, 1.0, 3.0), x)
    assert np.allclose(line.evaluate(2.0), [2.0, -0.75])

    zero = LinearVariable.constant([0.0, 0.0], n=4)
    quintic = PolynomialCurve.from_boundary_c2(init, zero, zero, end, zero, zero, 0.0, 1.0)
    numeric = specialize(quintic, x)
    assert np.allclose(numeric.evaluate(0.0), [1.0, -2.0], atol=1e-10)
    assert np.allclose(numeric.evaluate(1.0), [3.0, 0.5], atol=1e-10)
    assert np.allclose(numeric.derivative_at(1.0, 2), [0.0, 0.0], atol=1e-9)


def test_affine_derivatives(affine_c1, x):
    """Derivative curves of affine curves stay affine and specialize consistently."""
    numeric = specialize(affine_c1, x)
    for order in range(affine_c1.degree + 2):
        derivative = specialize(affine_c1.derivative_curve(order), x)
        assert derivative.is_approx(numeric.derivative_curve(order), precision=1e-9)

    beyond = affine_c1.derivative_at(1.0, 5)
    assert beyond.is_zero
    assert np.array_equal(beyond.evaluate(x), np.zeros(2))


def test_affine_curve_equality(affine_c1):
    assert affine_c1 == affine_c1.copy()
    shifted = PolynomialCurve.from_points(
        [p + LinearVariable.constant([1.0, 0.0], n=4) for p in affine_c1.coefficients], 0.0, 2.0
    )
    assert affine_c1 != shifted


def test_specialize_errors(affine_c1):
    with pytest.raises(DimensionError):
        specialize(affine_c1, [1.0, 2.0])
    with pytest.raises(TypeError):
        specialize(PolynomialCurve([[1.0, 2.0]], 0.0, 1.0), [1.0])
    with pytest.raises(EmptyCurveError):
        specialize(PolynomialCurve.empty(), [1.0])


def test_mixed_points_rejected():
    with pytest.raises(TypeError):
        PolynomialCurve.from_boundary_c0(LinearVariable.variable(2), [1.0, 1.0], 0.0, 1.0)


def test_variable_size_mismatch():
    """Linear variables over decision vectors of different sizes are rejected in checked mode."""
    points = [LinearVariable(np.eye(2)), LinearVariable(np.ones((2, 3)))]
    with pytest.raises(DimensionError):
        PolynomialCurve.from_points(points, 0.0, 1.0)
    with pytest.raises(DimensionError):
        PolynomialCurve.from_boundary_c0(points[0], points[1], 0.0, 1.0)
    curve = PolynomialCurve.from_points(points, 0.0, 1.0, safe=False)
    assert curve.degree == 1


def test_zero_variable_fits_any_size():
    points = [LinearVariable.zero(2), selector(0, 2, 4)]
    curve = PolynomialCurve.from_points(points, 0.0, 1.0)
    assert np.allclose(specialize(curve, [1.0, 2.0, 3.0, 4.0]).evaluate(1.0), [1.0, 2.0])


@pytest.mark.parametrize("safe", [True, False])
def test_affine_coefficients_follow_curve_mode(safe):
    init = selector(0, 2, 4)
    end = selector(2, 2, 4)
    velocity = LinearVariable.constant([1.0, 0.0], n=4)
    curves = [
        PolynomialCurve.from_boundary_c0(init, end, 0.0, 1.0, safe=safe),
        PolynomialCurve.from_boundary_c1(init, velocity, end, velocity, 0.0, 1.0, safe=safe),
        PolynomialCurve.from_points([init, end], 0.0, 1.0, safe=safe),
    ]
    for curve in curves:
        assert curve.safe is safe
        assert all(c.safe is safe for c in curve.coefficients)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
