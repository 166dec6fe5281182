"""Dense polynomial curves of arbitrary dimension and degree.

A polynomial curve is defined on [t_min, t_max] by

    x(t) = c0 + c1*(t - t_min) + ... + cN*(t - t_min)^N

The coefficients ``ci`` are points: numeric vectors, or linear variables
when the curve is assembled inside an optimization problem.
"""

from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

import numpy as np
from loguru import logger

from ..config import get_default_config, resolve_safe
from ..core.curve_abc import CurveABC
from ..core.exceptions import DimensionError, DomainError, EmptyCurveError, InvariantViolation
from ..core.points import (
    as_point,
    copy_point,
    is_affine,
    point_dim,
    points_approx,
    points_are_affine,
    zero_point_like,
)
from ..core.records import PolynomialRecord
from ..core.linear_variable import LinearVariable
from .boundary_solver import BoundaryConditionSolver, falling_factorial

P = TypeVar('P', np.ndarray, LinearVariable)


class PolynomialCurve(CurveABC, Generic[P]):
    """Polynomial curve with coefficients relative to t_min.

    Args:
        coefficients: Coefficient matrix [dim, degree + 1], column i holding
            the coefficient of (t - t_min)^i
        t_min: Lower bound of the time interval
        t_max: Upper bound of the time interval
        safe: Checked (True) or unchecked (False) mode.
            None uses the configured default.

    Use ``from_points`` for a sequence of coefficient columns (including
    linear variables) and the ``from_boundary_*`` constructors to build a
    curve from boundary conditions.
    """

    def __init__(self, coefficients, t_min: float, t_max: float, safe: Optional[bool] = None):
        matrix = np.array(coefficients, dtype=float, ndmin=2)
        if matrix.ndim != 2:
            raise DimensionError(
                f"coefficients must be a [dim, degree + 1] matrix, got shape {matrix.shape}"
            )
        columns = [matrix[:, i].copy() for i in range(matrix.shape[1])]
        self._init(columns, matrix.shape[0], t_min, t_max, resolve_safe(safe))

    def _init(self, columns: List[P], dim: int, t_min: float, t_max: float, safe: bool) -> None:
        if columns and is_affine(columns[0]):
            columns = [c.with_safe(safe) for c in columns]
        self._coefficients: Tuple[P, ...] = tuple(columns)
        self._dim = dim
        self._degree = max(len(columns) - 1, 0)
        self._t_min = float(t_min)
        self._t_max = float(t_max)
        self.safe = safe
        self._safe_check()

    @classmethod
    def _from_columns(
        cls,
        columns: Sequence[P],
        t_min: float,
        t_max: float,
        safe: bool
    ) -> 'PolynomialCurve':
        curve = cls.__new__(cls)
        dim = point_dim(columns[0]) if columns else 0
        curve._init(list(columns), dim, t_min, t_max, safe)
        return curve

    @classmethod
    def from_points(
        cls,
        points: Sequence,
        t_min: float,
        t_max: float,
        safe: Optional[bool] = None
    ) -> 'PolynomialCurve':
        """Build a curve from its coefficient columns, lowest degree first.

        Args:
            points: Coefficient columns (vectors or linear variables)
            t_min: Lower bound of the time interval
            t_max: Upper bound of the time interval
            safe: Checked or unchecked mode, None for the configured default

        Raises:
            DimensionError: If the columns do not all have the same length, or
                in safe mode if linear variables act on vectors of different sizes
        """
        columns = [as_point(p) for p in points]
        points_are_affine(columns)
        _check_same_dimension(columns, [f"coefficient {i}" for i in range(len(columns))])
        safe = resolve_safe(safe)
        if safe:
            _check_same_variable_size(columns)
        return cls._from_columns(columns, t_min, t_max, safe)

    @classmethod
    def empty(cls) -> 'PolynomialCurve':
        """Curve without coefficients. Evaluating it raises ``EmptyCurveError``."""
        return cls._from_columns([], 0.0, 0.0, resolve_safe(None))

    @classmethod
    def from_boundary_c0(
        cls,
        init,
        end,
        t_min: float,
        t_max: float,
        safe: Optional[bool] = None
    ) -> 'PolynomialCurve':
        """Degree 1 curve joining ``init`` at t_min to ``end`` at t_max."""
        init, end = as_point(init), as_point(end)
        points_are_affine([init, end])
        _check_same_dimension([init, end], ["init", "end"])
        safe = resolve_safe(safe)
        if safe:
            _check_same_variable_size([init, end])
        _check_interval_length(t_min, t_max, safe)
        columns = [copy_point(init), (end - init) / (t_max - t_min)]
        return cls._from_columns(columns, t_min, t_max, safe)

    @classmethod
    def from_boundary_c1(
        cls,
        init,
        d_init,
        end,
        d_end,
        t_min: float,
        t_max: float,
        safe: Optional[bool] = None
    ) -> 'PolynomialCurve':
        """Degree 3 curve matching position and velocity at both ends.

        Raises:
            InvariantViolation: In safe mode, if t_max <= t_min
            scipy.linalg.LinAlgError: In unchecked mode, if t_max == t_min
                (the boundary system is singular)
        """
        points = [as_point(p) for p in (init, end, d_init, d_end)]
        points_are_affine(points)
        _check_same_dimension(points, ["init", "end", "d_init", "d_end"])
        safe = resolve_safe(safe)
        if safe:
            _check_same_variable_size(points)
        _check_interval_length(t_min, t_max, safe)
        T = t_max - t_min
        columns = BoundaryConditionSolver.solve(BoundaryConditionSolver.c1_matrix(T), points, safe)
        logger.debug(f"Built C1 polynomial of dimension {point_dim(points[0])} on [{t_min}, {t_max}]")
        return cls._from_columns(columns, t_min, t_max, safe)

    @classmethod
    def from_boundary_c2(
        cls,
        init,
        d_init,
        dd_init,
        end,
        d_end,
        dd_end,
        t_min: float,
        t_max: float,
        safe: Optional[bool] = None
    ) -> 'PolynomialCurve':
        """Degree 5 curve matching position, velocity and acceleration at both ends.

        Raises:
            InvariantViolation: In safe mode, if t_max <= t_min
            scipy.linalg.LinAlgError: In unchecked mode, if t_max == t_min
                (the boundary system is singular)
        """
        points = [as_point(p) for p in (init, end, d_init, d_end, dd_init, dd_end)]
        points_are_affine(points)
        _check_same_dimension(points, ["init", "end", "d_init", "d_end", "dd_init", "dd_end"])
        safe = resolve_safe(safe)
        if safe:
            _check_same_variable_size(points)
        _check_interval_length(t_min, t_max, safe)
        T = t_max - t_min
        columns = BoundaryConditionSolver.solve(BoundaryConditionSolver.c2_matrix(T), points, safe)
        logger.debug(f"Built C2 polynomial of dimension {point_dim(points[0])} on [{t_min}, {t_max}]")
        return cls._from_columns(columns, t_min, t_max, safe)

    def _safe_check(self) -> None:
        if not self.safe:
            return
        if self._t_min > self._t_max:
            raise InvariantViolation(
                f"t_min ({self._t_min}) should be inferior to t_max ({self._t_max})"
            )
        if self._coefficients and len(self._coefficients) != self._degree + 1:
            raise InvariantViolation("Polynomial degree and coefficients do not match")

    def _check_if_not_empty(self) -> None:
        if not self._coefficients:
            raise EmptyCurveError(
                "Polynomial has no coefficients set, was it built with PolynomialCurve.empty()?"
            )

    def _check_time(self, t: float, what: str) -> None:
        if self.safe and (t < self._t_min or t > self._t_max):
            raise DomainError(t, self._t_min, self._t_max, what)

    def evaluate(self, t: float) -> P:
        """Evaluate the curve at ``t`` with Horner's scheme.

        Raises:
            EmptyCurveError: If the curve has no coefficients
            DomainError: In safe mode, if ``t`` is outside [t_min, t_max]
        """
        self._check_if_not_empty()
        self._check_time(t, "evaluate")
        dt = float(t) - self._t_min
        h = copy_point(self._coefficients[self._degree])
        for i in range(self._degree - 1, -1, -1):
            h = dt * h + self._coefficients[i]
        return h

    def evaluate_many(self, times, order: int = 0) -> np.ndarray:
        """Vectorized evaluation of a numeric curve.

        Args:
            times: Times to evaluate [N]
            order: Derivative order

        Returns:
            Values [N, dim]
        """
        self._check_if_not_empty()
        times = np.asarray(times, dtype=float).reshape(-1)
        if self.safe:
            outside = (times < self._t_min) | (times > self._t_max)
            if np.any(outside):
                raise DomainError(float(times[outside][0]), self._t_min, self._t_max, "evaluate")
        return BoundaryConditionSolver.evaluate_batch(self.coeff(), times - self._t_min, order)

    def derivative_at(self, t: float, order: int) -> P:
        """Evaluate the derivative of order ``order`` at ``t``.

        Orders above the degree give the zero point.

        Raises:
            EmptyCurveError: If the curve has no coefficients
            DomainError: In safe mode, if ``t`` is outside [t_min, t_max]
        """
        self._check_if_not_empty()
        _check_order(order)
        self._check_time(t, "evaluate derivative")
        dt = float(t) - self._t_min
        cdt = 1.0
        current = zero_point_like(self._coefficients[0])
        for i in range(order, self._degree + 1):
            current = current + self._coefficients[i] * (cdt * falling_factorial(i, order))
            cdt *= dt
        return current

    def derivative_curve(self, order: int) -> 'PolynomialCurve':
        """New curve for the derivative of order ``order`` on the same interval."""
        self._check_if_not_empty()
        _check_order(order)
        columns = list(self._coefficients)
        for _ in range(order):
            columns = _derivative_columns(columns)
        return self._from_columns(
            [copy_point(c) for c in columns], self._t_min, self._t_max, self.safe
        )

    def copy(self) -> 'PolynomialCurve':
        return self._from_columns(
            [copy_point(c) for c in self._coefficients], self._t_min, self._t_max, self.safe
        )

    def coeff(self) -> np.ndarray:
        """Copy of the coefficient matrix [dim, degree + 1] of a numeric curve."""
        if self.is_affine:
            raise TypeError("coeff() is only defined for numeric curves, use coefficients")
        if not self._coefficients:
            return np.zeros((self._dim, 0))
        return np.column_stack(self._coefficients)

    def coeff_at_degree(self, degree: int) -> Optional[P]:
        """Coefficient of (t - t_min)^degree, or None above the curve degree."""
        if degree < 0 or degree > self._degree or not self._coefficients:
            return None
        return copy_point(self._coefficients[degree])

    @property
    def coefficients(self) -> Tuple[P, ...]:
        """Coefficient columns, lowest degree first."""
        return tuple(copy_point(c) for c in self._coefficients)

    @property
    def is_affine(self) -> bool:
        """True if the coefficients are linear variables."""
        return bool(self._coefficients) and is_affine(self._coefficients[0])

    @property
    def dimension(self) -> int:
        return self._dim

    @property
    def t_min(self) -> float:
        return self._t_min

    @property
    def t_max(self) -> float:
        return self._t_max

    @property
    def degree(self) -> int:
        return self._degree

    def is_approx(
        self,
        other: CurveABC,
        precision: Optional[float] = None,
        order: Optional[int] = None
    ) -> bool:
        """Approximate equality.

        Against another polynomial the interval, dimension, degree and
        coefficients are compared directly; ``order`` is unused since equal
        coefficients imply equal derivatives. Any other curve is compared by
        sampling (see ``CurveABC.is_approx``).
        """
        if not isinstance(other, PolynomialCurve):
            return super().is_approx(other, precision, order)
        if precision is None:
            precision = get_default_config().approx_precision

        if not (self._t_min == other._t_min
                and self._t_max == other._t_max
                and self._dim == other._dim
                and self._degree == other._degree
                and len(self._coefficients) == len(other._coefficients)):
            return False
        if not self._coefficients:
            return True
        if self.is_affine != other.is_affine:
            return False
        if self.is_affine:
            return all(
                points_approx(a, b, precision)
                for a, b in zip(self._coefficients, other._coefficients)
            )
        return points_approx(self.coeff().ravel(), other.coeff().ravel(), precision)

    def to_record(self) -> PolynomialRecord:
        """Named fields of a numeric curve for persistence layers."""
        return PolynomialRecord(
            dimension=self._dim,
            coefficients=self.coeff().tolist(),
            degree=self._degree,
            t_min=self._t_min,
            t_max=self._t_max,
            safe=self.safe,
        )

    @classmethod
    def from_record(cls, record: PolynomialRecord) -> 'PolynomialCurve':
        if not record.coefficients or not record.coefficients[0]:
            return cls(np.zeros((record.dimension, 0)), record.t_min, record.t_max, safe=record.safe)
        curve = cls(record.coefficients, record.t_min, record.t_max, safe=record.safe)
        if record.safe and (curve.dimension != record.dimension or curve.degree != record.degree):
            raise InvariantViolation(
                f"Record declares dimension {record.dimension} and degree {record.degree}, "
                f"coefficients give {curve.dimension} and {curve.degree}"
            )
        return curve

    def __repr__(self) -> str:
        kind = "affine" if self.is_affine else "numeric"
        return (f"PolynomialCurve(degree={self._degree}, dimension={self._dim}, "
                f"t_min={self._t_min}, t_max={self._t_max}, {kind})")


def _check_same_dimension(points: Sequence, names: Sequence[str]) -> None:
    if not points:
        return
    dim = point_dim(points[0])
    for point, name in zip(points[1:], names[1:]):
        if point_dim(point) != dim:
            raise DimensionError(
                f"{names[0]} and {name} points must have the same dimensions "
                f"({dim} != {point_dim(point)})"
            )


def _check_interval_length(t_min: float, t_max: float, safe: bool) -> None:
    if safe and not t_max > t_min:
        raise InvariantViolation(
            f"Boundary conditions need t_min < t_max, got [{t_min}, {t_max}]"
        )


def _check_order(order: int) -> None:
    if order < 0:
        raise ValueError(f"Derivative order must be non-negative, got {order}")


def _derivative_columns(columns: List[P]) -> List[P]:
    # only the constant part is left, the derivative is zero
    if len(columns) == 1:
        return [zero_point_like(columns[0])]
    return [columns[i + 1] * float(i + 1) for i in range(len(columns) - 1)]


def _check_same_variable_size(points: Sequence) -> None:
    # affine points must share the size of the decision vector; zero variables fit any size
    sizes = {p.B.shape[1] for p in points if is_affine(p) and not p.is_zero}
    if len(sizes) > 1:
        raise DimensionError(
            f"Linear variables must act on decision vectors of the same size, got sizes {sorted(sizes)}"
        )
