# -- lesdiag/theory/linear_eos.py

from dataclasses import dataclass
from typing import Union

import numpy as np

from lesdiag import globals

NumericArray = Union[np.ndarray, float]


@dataclass(frozen=True)
class LinearEquationOfState:
    """Buoyancy b = alpha * g * T, salinity held constant."""

    alpha: float = globals.DEFAULT_ALPHA
    g: float = globals.DEFAULT_G

    def __post_init__(self) -> None:
        if not self.alpha > 0:
            raise ValueError(f"thermal expansion coefficient must be positive, got alpha={self.alpha}")
        if not self.g > 0:
            raise ValueError(f"gravitational acceleration must be positive, got g={self.g}")

    def buoyancy_gradient(self, Tz: NumericArray) -> NumericArray:
        return self.alpha * self.g * Tz

    def temperature_flux(self, Qb: NumericArray) -> NumericArray:
        """Temperature flux equivalent to the buoyancy flux Qb."""
        return Qb / (self.alpha * self.g)

    def temperature_gradient(self, N2: NumericArray) -> NumericArray:
        """Temperature gradient giving the buoyancy frequency squared N2."""
        return N2 / (self.alpha * self.g)
