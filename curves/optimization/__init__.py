"""Affine variables and their specialization to numeric curves."""

from ..core.linear_variable import LinearVariable
from .specialize import specialize

__all__ = [
    'LinearVariable',
    'specialize',
]
