"""Affine variables for optimization-ready curves.

A ``LinearVariable`` stands for a point whose value depends linearly on an
undetermined decision vector ``x``:

    p(x) = B x + c

Curves whose control points are linear variables can be assembled before
``x`` is known, e.g. to write constraints or costs of a QP, and turned into
numeric curves once ``x`` is solved for (see ``curves.optimization.specialize``).

The additive identity is an explicit variant (``is_zero``). It is absorbed by
addition and subtraction: the result takes the shape of the other operand.
"""

import numbers
from typing import Optional

import numpy as np

from ..config import get_default_config, resolve_safe
from .exceptions import DimensionError
from .records import LinearVariableRecord


class LinearVariable:
    """Affine map ``x -> B x + c`` with an explicit zero variant.

    Instances are immutable: arithmetic always returns new objects and the
    ``B``/``c`` accessors return copies.

    Args:
        B: Linear part, shape [dim, n]
        c: Constant part, shape [dim]. Defaults to zeros.
        safe: Check dimensions on arithmetic and evaluation.
            None uses the configured default.
    """

    # Let numpy scalars and arrays defer to the operators below.
    __array_ufunc__ = None

    def __init__(self, B, c=None, safe: Optional[bool] = None):
        B = np.array(B, dtype=float, ndmin=2)
        if c is None:
            c = np.zeros(B.shape[0])
        c = np.array(c, dtype=float, ndmin=1)
        self.safe = resolve_safe(safe)
        if self.safe:
            if B.ndim != 2 or c.ndim != 1:
                raise DimensionError(
                    f"B must be a matrix and c a vector, got shapes {B.shape} and {c.shape}"
                )
            if B.shape[0] != c.shape[0]:
                raise DimensionError(
                    f"B has {B.shape[0]} rows but c has {c.shape[0]} entries"
                )
        self._B = B
        self._c = c
        self._zero = False

    @classmethod
    def _from_parts(cls, B: np.ndarray, c: np.ndarray, zero: bool, safe: bool) -> 'LinearVariable':
        obj = cls.__new__(cls)
        obj._B = B
        obj._c = c
        obj._zero = zero
        obj.safe = safe
        return obj

    @classmethod
    def zero(cls, dim: int = 0, safe: Optional[bool] = None) -> 'LinearVariable':
        """Additive identity for a ``dim``-dimensional output.

        Stored as an identity ``B`` and a zero ``c``, but every operation
        treats it as zero.
        """
        return cls._from_parts(np.eye(dim), np.zeros(dim), True, resolve_safe(safe))

    @classmethod
    def constant(cls, c, n: Optional[int] = None, safe: Optional[bool] = None) -> 'LinearVariable':
        """Point that does not depend on ``x``.

        ``n`` is the size of the decision vector, defaulting to ``len(c)``.
        """
        c = np.array(c, dtype=float, ndmin=1)
        if n is None:
            n = c.shape[0]
        return cls(np.zeros((c.shape[0], n)), c, safe=safe)

    @classmethod
    def variable(cls, dim: int, safe: Optional[bool] = None) -> 'LinearVariable':
        """Point equal to the decision vector itself (``B = I``, ``c = 0``)."""
        return cls(np.eye(dim), np.zeros(dim), safe=safe)

    def with_safe(self, safe: bool) -> 'LinearVariable':
        """Same variable with the given safety mode."""
        if safe == self.safe:
            return self
        return self._from_parts(self._B, self._c, self._zero, safe)

    @property
    def B(self) -> np.ndarray:
        return self._B.copy()

    @property
    def c(self) -> np.ndarray:
        return self._c.copy()

    @property
    def is_zero(self) -> bool:
        return self._zero

    @property
    def dim(self) -> int:
        """Output dimension."""
        return self._c.shape[0]

    @property
    def size(self) -> int:
        """0 for the zero variant, otherwise ``max(B.cols, len(c))``."""
        if self._zero:
            return 0
        return max(self._B.shape[1], self._c.shape[0])

    def evaluate(self, x) -> np.ndarray:
        """Value of the variable for a given decision vector.

        Args:
            x: Decision vector, length equal to the columns of ``B``

        Returns:
            ``B x + c``, or ``c`` for the zero variant whatever ``x`` is

        Raises:
            DimensionError: In safe mode, if ``x`` has the wrong length
        """
        if self._zero:
            return self._c.copy()
        x = np.asarray(x, dtype=float)
        if self.safe and (x.ndim != 1 or x.shape[0] != self._B.shape[1]):
            raise DimensionError(
                "Cannot evaluate linear variable, variable value does not have the correct "
                f"dimension: expected {self._B.shape[1]}, got {x.shape}"
            )
        return self._B @ x + self._c

    __call__ = evaluate

    def _check_same_shape(self, other: 'LinearVariable', op: str) -> None:
        if not (self.safe or other.safe):
            return
        if self._B.shape != other._B.shape or self._c.shape != other._c.shape:
            raise DimensionError(
                f"Cannot {op} linear variables of shapes B{self._B.shape}, c{self._c.shape} "
                f"and B{other._B.shape}, c{other._c.shape}"
            )

    def __add__(self, other):
        if not isinstance(other, LinearVariable):
            return NotImplemented
        safe = self.safe or other.safe
        if other._zero:
            return self._from_parts(self._B, self._c, self._zero, safe)
        if self._zero:
            return self._from_parts(other._B, other._c, False, safe)
        self._check_same_shape(other, "add")
        return self._from_parts(self._B + other._B, self._c + other._c, False, safe)

    def __sub__(self, other):
        if not isinstance(other, LinearVariable):
            return NotImplemented
        safe = self.safe or other.safe
        if other._zero:
            return self._from_parts(self._B, self._c, self._zero, safe)
        if self._zero:
            return self._from_parts(-other._B, -other._c, False, safe)
        self._check_same_shape(other, "subtract")
        return self._from_parts(self._B - other._B, self._c - other._c, False, safe)

    def __neg__(self):
        if self._zero:
            return self
        return self._from_parts(-self._B, -self._c, False, self.safe)

    def __mul__(self, k):
        if not isinstance(k, numbers.Real):
            return NotImplemented
        if self._zero:
            return self
        return self._from_parts(self._B * k, self._c * k, False, self.safe)

    __rmul__ = __mul__

    def __truediv__(self, k):
        if not isinstance(k, numbers.Real):
            return NotImplemented
        if self._zero:
            return self
        return self._from_parts(self._B / k, self._c / k, False, self.safe)

    def norm(self) -> float:
        """Combined norm ``||B|| + ||c||`` (Frobenius and Euclidean).

        This is an upper-bound style magnitude used for approximate
        comparison, not the induced operator norm of the affine map.
        """
        if self._zero:
            return 0.0
        return float(np.linalg.norm(self._B) + np.linalg.norm(self._c))

    def is_approx(self, other: 'LinearVariable', precision: Optional[float] = None) -> bool:
        """True if ``||self - other|| < precision``."""
        if precision is None:
            precision = get_default_config().approx_precision
        return (self - other).norm() < precision

    def to_record(self) -> LinearVariableRecord:
        return LinearVariableRecord(B=self._B.tolist(), c=self._c.tolist(), is_zero=self._zero)

    @classmethod
    def from_record(cls, record: LinearVariableRecord, safe: Optional[bool] = None) -> 'LinearVariable':
        c = np.array(record.c, dtype=float, ndmin=1)
        if record.is_zero:
            return cls.zero(c.shape[0], safe=safe)
        B = np.array(record.B, dtype=float)
        if B.ndim != 2:
            B = np.zeros((c.shape[0], 0))
        return cls(B, c, safe=safe)

    def __repr__(self) -> str:
        if self._zero:
            return f"LinearVariable.zero({self.dim})"
        return f"LinearVariable(B={self._B.tolist()}, c={self._c.tolist()})"
