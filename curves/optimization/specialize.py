"""Turn a curve of linear variables into a numeric curve."""

import numpy as np
from loguru import logger

from ..core.exceptions import EmptyCurveError


def specialize(curve, x):
    """Substitute a solved decision vector into every coefficient of ``curve``.

    Args:
        curve: Curve whose coefficients are linear variables. It must expose
            ``coefficients``, ``is_affine``, ``t_min``, ``t_max``, ``safe``
            and a ``from_points`` constructor.
        x: Decision vector, e.g. the solution of the optimization problem
            the curve was part of

    Returns:
        Curve of the same kind on the same interval, with coefficients
        ``p_i(x)``

    Raises:
        EmptyCurveError: If the curve has no coefficients
        TypeError: If the curve is not made of linear variables
        DimensionError: In safe mode, if ``x`` has the wrong length
    """
    coefficients = curve.coefficients
    if not coefficients:
        raise EmptyCurveError("Cannot specialize a curve without coefficients")
    if not curve.is_affine:
        raise TypeError("specialize() expects a curve whose coefficients are linear variables")

    x = np.asarray(x, dtype=float)
    fixed = [p.evaluate(x) for p in coefficients]
    logger.debug(f"Specialized {type(curve).__name__} with {len(fixed)} coefficients "
                 f"for a decision vector of size {x.shape[0]}")
    return type(curve).from_points(fixed, curve.t_min, curve.t_max, safe=curve.safe)
