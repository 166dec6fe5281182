"""Named-field records exposed to persistence layers.

Each record holds exactly the fields needed to rebuild its entity. The
records only use plain lists and scalars so any encoder can consume them;
``dataclass_json`` adds ``to_dict``/``from_dict``/``to_json``/``from_json``.
"""

from dataclasses import dataclass, field
from typing import List

from dataclasses_json import dataclass_json


@dataclass_json
@dataclass
class PolynomialRecord:
    """Fields of a numeric polynomial curve.

    Attributes:
        dimension: Output dimension (rows of the coefficient matrix)
        coefficients: Coefficient matrix as nested rows [dimension][degree + 1]
        degree: Polynomial degree
        t_min: Lower bound of the time interval
        t_max: Upper bound of the time interval
        safe: Whether safety checks were enabled
    """
    dimension: int
    coefficients: List[List[float]] = field(default_factory=list)
    degree: int = 0
    t_min: float = 0.0
    t_max: float = 0.0
    safe: bool = True


@dataclass_json
@dataclass
class LinearVariableRecord:
    """Fields of an affine variable ``B x + c``.

    Attributes:
        B: Linear part as nested rows
        c: Constant part
        is_zero: True for the additive identity
    """
    B: List[List[float]] = field(default_factory=list)
    c: List[float] = field(default_factory=list)
    is_zero: bool = False
