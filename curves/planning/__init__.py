"""Polynomial curves and their boundary-value solver."""

from .boundary_solver import BoundaryConditionSolver, falling_factorial
from .polynomial import PolynomialCurve

__all__ = [
    'BoundaryConditionSolver',
    'falling_factorial',
    'PolynomialCurve',
]
