"""Boundary-value systems and vectorized evaluation for polynomial curves.

Coefficients are expressed in the local time ``dt = t - t_min``:

    x(dt) = c0 + c1*dt + c2*dt^2 + ... + cN*dt^N
"""

from typing import List, Optional, Sequence

import numpy as np
from scipy import linalg
from scipy.special import perm

from ..core.exceptions import DimensionError
from ..core.points import Point, points_are_affine
from ..core.linear_variable import LinearVariable


def falling_factorial(n: int, k: int) -> int:
    """n * (n-1) * ... * (n-k+1), i.e. the factor of d^k/dt^k t^n. Zero when k > n."""
    return int(perm(n, k, exact=True))


class BoundaryConditionSolver:
    """Fixed linear systems mapping boundary conditions to coefficients.

    Rows of the systems are ordered value at 0, value at T, derivative at 0,
    derivative at T (and second derivative at 0, at T for the quintic case),
    where T is the length of the time interval.
    """

    @staticmethod
    def c1_matrix(T: float) -> np.ndarray:
        """4x4 system of a cubic matching position and velocity at both ends.

        [1  0  0   0   ]   [c0]   [ init ]
        [1  T  T^2 T^3 ] x [c1] = [ end  ]
        [0  1  0   0   ]   [c2]   [d_init]
        [0  1  2T  3T^2]   [c3]   [d_end ]
        """
        T2 = T * T
        T3 = T2 * T
        return np.array([
            [1.0, 0.0, 0.0, 0.0],
            [1.0, T, T2, T3],
            [0.0, 1.0, 0.0, 0.0],
            [0.0, 1.0, 2.0 * T, 3.0 * T2],
        ])

    @staticmethod
    def c2_matrix(T: float) -> np.ndarray:
        """6x6 system of a quintic matching position, velocity and acceleration.

        [1  0  0   0    0     0    ]   [c0]   [ init  ]
        [1  T  T^2 T^3  T^4   T^5  ]   [c1]   [ end   ]
        [0  1  0   0    0     0    ]   [c2]   [d_init ]
        [0  1  2T  3T^2 4T^3  5T^4 ] x [c3] = [d_end  ]
        [0  0  2   0    0     0    ]   [c4]   [dd_init]
        [0  0  2   6T   12T^2 20T^3]   [c5]   [dd_end ]
        """
        T2 = T * T
        T3 = T2 * T
        T4 = T3 * T
        T5 = T4 * T
        return np.array([
            [1.0, 0.0, 0.0, 0.0, 0.0, 0.0],
            [1.0, T, T2, T3, T4, T5],
            [0.0, 1.0, 0.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 2.0 * T, 3.0 * T2, 4.0 * T3, 5.0 * T4],
            [0.0, 0.0, 2.0, 0.0, 0.0, 0.0],
            [0.0, 0.0, 2.0, 6.0 * T, 12.0 * T2, 20.0 * T3],
        ])

    @staticmethod
    def solve(
        matrix: np.ndarray,
        boundary_points: Sequence[Point],
        safe: Optional[bool] = None
    ) -> List[Point]:
        """Solve the boundary system for every output dimension at once.

        Coefficient ``j`` is ``sum_k inv(matrix)[j, k] * boundary_points[k]``.
        For vectors this is the per-dimension solve ``inv(matrix) @ bc``; for
        linear variables it yields affine coefficients.

        Args:
            matrix: Square system of size len(boundary_points)
            boundary_points: Right-hand side points in row order of ``matrix``
            safe: Safety mode of affine coefficients. None keeps checks on if
                any boundary point has them on.

        Returns:
            Coefficient columns from degree 0 upward

        Raises:
            DimensionError: If the number of points does not match ``matrix``
            scipy.linalg.LinAlgError: If ``matrix`` is singular, e.g. for an
                empty time interval
        """
        n = matrix.shape[0]
        if len(boundary_points) != n:
            raise DimensionError(
                f"Expected {n} boundary points for a {n}x{n} system, got {len(boundary_points)}"
            )
        m_inv = linalg.inv(matrix)

        if points_are_affine(boundary_points):
            dim = boundary_points[0].dim
            if safe is None:
                safe = any(p.safe for p in boundary_points)
            boundary_points = [p.with_safe(safe) for p in boundary_points]
            columns = []
            for j in range(n):
                column = LinearVariable.zero(dim, safe=safe)
                for k in range(n):
                    column = column + float(m_inv[j, k]) * boundary_points[k]
                columns.append(column)
            return columns

        # bc: [n_conditions, dim] -> coefficients: [n_conditions, dim]
        bc = np.vstack(boundary_points)
        coefficients = m_inv @ bc
        return [coefficients[j].copy() for j in range(n)]

    @staticmethod
    def evaluate_batch(
        coefficients: np.ndarray,
        dt: np.ndarray,
        order: int = 0
    ) -> np.ndarray:
        """Evaluate a coefficient matrix at many local times.

        Args:
            coefficients: Coefficient matrix [dim, degree + 1]
            dt: Local times t - t_min [N]
            order: Derivative order (0 = position)

        Returns:
            Values [N, dim]
        """
        if coefficients.ndim != 2:
            raise ValueError("coefficients must have shape [dim, degree + 1]")
        if order < 0:
            raise ValueError(f"order must be non-negative, got {order}")

        dt = np.asarray(dt, dtype=float).reshape(-1)
        dim, num_coeffs = coefficients.shape
        degree = num_coeffs - 1

        if order > degree:
            return np.zeros((dt.shape[0], dim))

        if order == 0:
            # Horner
            values = np.tile(coefficients[:, degree], (dt.shape[0], 1))
            for i in range(degree - 1, -1, -1):
                values = values * dt[:, np.newaxis] + coefficients[:, i]
            return values

        values = np.zeros((dt.shape[0], dim))
        cdt = np.ones_like(dt)
        for i in range(order, degree + 1):
            values += (cdt * falling_factorial(i, order))[:, np.newaxis] * coefficients[:, i]
            cdt = cdt * dt
        return values
