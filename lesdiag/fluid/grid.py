# -- lesdiag/fluid/grid.py

from dataclasses import dataclass
from typing import Literal, Optional, Union

import numpy as np

from lesdiag.errors import InvalidGridError

Location = Literal["center", "face"]


@dataclass(frozen=True)
class VerticalGrid:
    """
    Staggered vertical grid with N cell centers and N + 1 cell faces.

    Both coordinate arrays increase upwards and every face lies strictly
    between its neighbouring cell centers.
    """

    zC: np.ndarray
    zF: np.ndarray
    dz: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "zC", np.asarray(self.zC, dtype=np.float64))
        object.__setattr__(self, "zF", np.asarray(self.zF, dtype=np.float64))
        object.__setattr__(self, "dz", float(self.dz))
        self.validate()

    @classmethod
    def regular(cls, Nz: int, Lz: float, z_top: float = 0.0) -> "VerticalGrid":
        """Uniform grid spanning (z_top - Lz, z_top)."""
        if Nz < 1 or Lz <= 0:
            raise InvalidGridError(f"cannot build a grid with Nz={Nz} and Lz={Lz}")
        zF: np.ndarray = np.linspace(z_top - Lz, z_top, Nz + 1)
        zC: np.ndarray = 0.5 * (zF[1:] + zF[:-1])
        return cls(zC=zC, zF=zF, dz=Lz / Nz)

    @property
    def Nz(self) -> int:
        return len(self.zC)

    @property
    def Lz(self) -> float:
        return float(self.zF[-1] - self.zF[0])

    @property
    def interior_faces(self) -> np.ndarray:
        return self.zF[1:-1]

    def validate(self) -> None:
        if self.zC.ndim != 1 or self.zF.ndim != 1:
            raise InvalidGridError("grid coordinates must be one dimensional")
        if self.zC.size < 1:
            raise InvalidGridError("grid needs at least one cell")
        if self.zF.size != self.zC.size + 1:
            raise InvalidGridError(
                f"grid has {self.zC.size} cell centers but {self.zF.size} faces (expected {self.zC.size + 1})"
            )
        if not np.isfinite(self.dz) or self.dz <= 0:
            raise InvalidGridError(f"grid spacing must be positive, got dz={self.dz}")
        if not np.allclose(np.diff(self.zF), self.dz, rtol=1e-6, atol=0.0):
            raise InvalidGridError(f"face spacing is not uniformly dz={self.dz}")
        if not (np.all(self.zF[:-1] < self.zC) and np.all(self.zC < self.zF[1:])):
            raise InvalidGridError("cell centers are not staggered between faces")

    def coordinate(self, location: Location) -> np.ndarray:
        if location == "center":
            return self.zC
        if location == "face":
            return self.zF
        raise ValueError(f'unknown grid location "{location}"')

    def boundary_distance(self, z: np.ndarray, Lz: Optional[float] = None) -> np.ndarray:
        """
        Distance from z to the nearest of the top (zF[-1]) and bottom
        (zF[-1] - Lz) boundaries. Lz defaults to the extent of the grid and may
        not be smaller than it.
        """
        if Lz is None:
            Lz = self.Lz
        if Lz <= 0:
            raise InvalidGridError(f"domain extent must be positive, got Lz={Lz}")
        if Lz < self.Lz * (1.0 - 1e-9):
            raise InvalidGridError(f"domain extent Lz={Lz} is smaller than the grid extent {self.Lz}")
        z_top: float = float(self.zF[-1])
        z_bottom: float = z_top - float(Lz)
        z = np.asarray(z, dtype=np.float64)
        return np.minimum(z - z_bottom, z_top - z)


@dataclass(frozen=True)
class Profile:
    """A horizontally averaged profile tagged with its grid location."""

    name: str
    values: np.ndarray
    location: Location

    def __post_init__(self) -> None:
        values = np.asarray(self.values, dtype=np.float64)
        if values.ndim != 1:
            raise ValueError(f'profile "{self.name}" must be 1-D, got shape {values.shape}')
        object.__setattr__(self, "values", values)

    def __len__(self) -> int:
        return len(self.values)

    def coordinate(self, grid: VerticalGrid) -> np.ndarray:
        z: np.ndarray = grid.coordinate(self.location)
        if len(z) != len(self.values):
            raise InvalidGridError(
                f'profile "{self.name}" has {len(self.values)} values, grid has {len(z)} {self.location} points'
            )
        return z

    def negated(self) -> "Profile":
        return Profile(self.name, -self.values, self.location)

    def __add__(self, other: "Profile") -> "Profile":
        if other.location != self.location:
            raise ValueError(
                f'cannot add "{self.name}" ({self.location}) to "{other.name}" ({other.location}) without regridding'
            )
        if len(other) != len(self):
            raise ValueError(f'length mismatch between "{self.name}" and "{other.name}"')
        return Profile(f"{self.name}+{other.name}", self.values + other.values, self.location)


ProfileLike = Union[Profile, np.ndarray]


def _values(profile: ProfileLike) -> np.ndarray:
    if isinstance(profile, Profile):
        return profile.values
    return np.asarray(profile, dtype=np.float64)


def interp_to_faces(data: ProfileLike) -> np.ndarray:
    """Average adjacent cell values onto the N - 1 interior faces."""
    values: np.ndarray = _values(data)
    return 0.5 * (values[1:] + values[:-1])


def ddz(data: ProfileLike, dz: float) -> np.ndarray:
    """Centered difference of a cell profile, located on the interior faces."""
    if dz <= 0:
        raise InvalidGridError(f"grid spacing must be positive, got dz={dz}")
    values: np.ndarray = _values(data)
    return (values[1:] - values[:-1]) / dz


def interior_faces(data: ProfileLike) -> np.ndarray:
    """Drop the bottom and top face of a full face profile."""
    return _values(data)[1:-1]

