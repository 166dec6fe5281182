"""Helpers over the two point kinds a curve can hold.

A point is either a 1-D float ``numpy.ndarray`` or a ``LinearVariable``.
Both support addition and scaling by a real number, which is all the
polynomial machinery needs.
"""

from typing import Sequence, Union

import numpy as np

from .exceptions import DimensionError
from .linear_variable import LinearVariable

Point = Union[np.ndarray, LinearVariable]


def is_affine(point) -> bool:
    """True if ``point`` is a linear variable."""
    return isinstance(point, LinearVariable)


def as_point(value) -> Point:
    """Coerce ``value`` to a point.

    Linear variables are passed through; anything else becomes a fresh 1-D
    float array.
    """
    if is_affine(value):
        return value
    arr = np.array(value, dtype=float, ndmin=1)
    if arr.ndim != 1:
        raise DimensionError(f"A point must be a 1-D vector, got shape {arr.shape}")
    return arr


def copy_point(point: Point) -> Point:
    # Linear variables are immutable
    if is_affine(point):
        return point
    return point.copy()


def point_dim(point: Point) -> int:
    if is_affine(point):
        return point.dim
    return point.shape[0]


def zero_point_like(point: Point) -> Point:
    """Zero of the same kind and dimension as ``point``."""
    if is_affine(point):
        return LinearVariable.zero(point.dim, safe=point.safe)
    return np.zeros_like(point)


def points_are_affine(points: Sequence[Point]) -> bool:
    """True if all points are linear variables, False if none is.

    Raises:
        TypeError: If numeric and affine points are mixed
    """
    flags = {is_affine(p) for p in points}
    if len(flags) > 1:
        raise TypeError("Cannot mix numeric vectors and linear variables in one curve")
    return flags == {True}


def points_approx(a: Point, b: Point, precision: float) -> bool:
    """Approximate equality of two points.

    Vectors use the relative test ``||a - b|| <= precision * min(||a||, ||b||)``;
    linear variables use ``LinearVariable.is_approx``.
    """
    if is_affine(a) or is_affine(b):
        if not (is_affine(a) and is_affine(b)):
            return False
        return a.is_approx(b, precision)
    if a.shape != b.shape:
        return False
    diff = np.linalg.norm(a - b)
    return bool(diff <= precision * min(np.linalg.norm(a), np.linalg.norm(b)))
