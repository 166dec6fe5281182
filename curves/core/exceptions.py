"""Exception types raised by curve construction and evaluation."""


class CurveError(Exception):
    """Base class for all curve errors."""
    pass


class DomainError(CurveError, ValueError):
    """Raised when a time argument lies outside [t_min, t_max]."""

    def __init__(self, t: float, t_min: float, t_max: float, what: str = "evaluate"):
        self.t = t
        self.t_min = t_min
        self.t_max = t_max
        super().__init__(
            f"time t={t} to {what} should be in range [{t_min}, {t_max}] of the curve"
        )


class DimensionError(CurveError, ValueError):
    """Raised when vector or matrix sizes do not match."""
    pass


class EmptyCurveError(CurveError, RuntimeError):
    """Raised when a curve without coefficients is evaluated."""
    pass


class InvariantViolation(CurveError, ValueError):
    """Raised when a curve is built from inconsistent parameters."""
    pass
