"""Time-parameterized curves with numeric or affine control points."""

from .config import CurveConfig, get_default_config, set_default_config, load_config, save_config
from .core import (
    CurveABC,
    CurveError,
    DomainError,
    DimensionError,
    EmptyCurveError,
    InvariantViolation,
)
from .optimization import LinearVariable, specialize
from .planning import PolynomialCurve

__version__ = "0.1.0"

__all__ = [
    'CurveConfig',
    'get_default_config',
    'set_default_config',
    'load_config',
    'save_config',
    'CurveABC',
    'CurveError',
    'DomainError',
    'DimensionError',
    'EmptyCurveError',
    'InvariantViolation',
    'LinearVariable',
    'specialize',
    'PolynomialCurve',
]
