"""Core module for the curve interface, affine variables, point helpers and errors."""

from .exceptions import (
    CurveError,
    DomainError,
    DimensionError,
    EmptyCurveError,
    InvariantViolation,
)
from .records import PolynomialRecord, LinearVariableRecord
from .linear_variable import LinearVariable
from .points import Point, as_point, is_affine, point_dim, zero_point_like
from .curve_abc import CurveABC

__all__ = [
    'CurveError',
    'DomainError',
    'DimensionError',
    'EmptyCurveError',
    'InvariantViolation',
    'PolynomialRecord',
    'LinearVariableRecord',
    'LinearVariable',
    'Point',
    'as_point',
    'is_affine',
    'point_dim',
    'zero_point_like',
    'CurveABC',
]
