"""Abstract interface of a time-parameterized curve of arbitrary dimension."""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..config import get_default_config
from .points import Point, points_approx


class CurveABC(ABC):
    """Curve defined on a closed time interval [t_min, t_max].

    Concrete curves implement evaluation, derivatives and the accessors.
    Curves are immutable: derivative curves are new objects.

    Safety mode is carried by each instance (``safe``). In checked mode a
    time outside the interval raises ``DomainError``; in unchecked mode the
    check is skipped and the result outside the interval is unspecified.
    """

    safe: bool = True

    @abstractmethod
    def evaluate(self, t: float) -> Point:
        """Point of the curve at time ``t``."""

    def __call__(self, t: float) -> Point:
        return self.evaluate(t)

    @abstractmethod
    def derivative_curve(self, order: int) -> 'CurveABC':
        """New curve for the derivative of order ``order`` (0 gives a copy)."""

    @abstractmethod
    def derivative_at(self, t: float, order: int) -> Point:
        """Derivative of order ``order`` at ``t`` without building a derivative curve."""

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Output dimension."""

    @property
    @abstractmethod
    def t_min(self) -> float:
        """Lower bound of the time interval."""

    @property
    @abstractmethod
    def t_max(self) -> float:
        """Upper bound of the time interval."""

    @property
    @abstractmethod
    def degree(self) -> int:
        """Polynomial degree of the curve."""

    def time_range(self) -> Tuple[float, float]:
        return self.t_min, self.t_max

    def is_approx(
        self,
        other: 'CurveABC',
        precision: Optional[float] = None,
        order: Optional[int] = None
    ) -> bool:
        """Check equality with ``other`` by sampling both curves.

        The curves must share t_min, t_max and dimension. Then values and
        derivatives of order 1..``order`` are compared every ``approx_step``
        time units from t_min while t <= t_max. Disagreement between samples
        is not detected; concrete curves override this with an exact check
        where one exists.

        Args:
            other: Curve to compare with
            precision: Comparison threshold, defaults to the configured value
            order: Highest derivative order compared, defaults to the configured value

        Returns:
            True if the curves are approximately equal
        """
        config = get_default_config()
        if precision is None:
            precision = config.approx_precision
        if order is None:
            order = config.approx_order
        step = config.approx_step

        if (self.t_min != other.t_min
                or self.t_max != other.t_max
                or self.dimension != other.dimension):
            return False

        t = self.t_min
        while t <= self.t_max:
            if not points_approx(self.evaluate(t), other.evaluate(t), precision):
                return False
            t += step

        for n in range(1, order + 1):
            t = self.t_min
            while t <= self.t_max:
                if not points_approx(self.derivative_at(t, n), other.derivative_at(t, n), precision):
                    return False
                t += step
        return True

    def __eq__(self, other):
        if not isinstance(other, CurveABC):
            return NotImplemented
        return self.is_approx(other)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None
