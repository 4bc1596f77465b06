# -- lesdiag/fluid/mixing_length.py

"""
Mixing length diagnostics on the interior cell faces.

Two estimates are compared:

- measured: inversion of the flux-gradient model wT = -l sqrt(tke) dT/dz
- estimated: sqrt(tke / N^2), capped by the distance to the nearest boundary

Degenerate depths (dT/dz == 0, negative tke) give NaN instead of raising.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from lesdiag.errors import InvalidGridError
from lesdiag.fluid.grid import Profile, ProfileLike, VerticalGrid, ddz, interior_faces, interp_to_faces
from lesdiag.theory.linear_eos import LinearEquationOfState


@dataclass(frozen=True)
class MixingLengthPair:
    """Measured and estimated mixing lengths on the faces zF[2:-2]."""

    z: np.ndarray
    measured: np.ndarray
    estimated: np.ndarray


@dataclass(frozen=True)
class GradientProfiles:
    """Everything evaluated on the N - 1 interior faces zF[1:-1]."""

    z: np.ndarray
    Tz: np.ndarray
    bz: np.ndarray
    tkeF: np.ndarray
    wT: np.ndarray
    boundary_distance: np.ndarray
    l_measured: np.ndarray
    l_estimated: np.ndarray

    def trimmed(self) -> MixingLengthPair:
        """Drop the first and last interior face."""
        return MixingLengthPair(
            z=self.z[1:-1],
            measured=self.l_measured[1:-1],
            estimated=self.l_estimated[1:-1],
        )


def _center_values(name: str, data: ProfileLike, grid: VerticalGrid) -> np.ndarray:
    if isinstance(data, Profile):
        if data.location != "center":
            raise ValueError(f'"{name}" must be cell centered, got {data.location}')
        data = data.values
    values: np.ndarray = np.asarray(data, dtype=np.float64)
    if values.shape != (grid.Nz,):
        raise InvalidGridError(f'"{name}" has shape {values.shape}, grid has {grid.Nz} cells')
    return values


def _interior_face_values(name: str, data: ProfileLike, grid: VerticalGrid) -> np.ndarray:
    """Accept either a full face profile (N + 1) or one already cut to the interior faces."""
    values: np.ndarray = np.asarray(data.values if isinstance(data, Profile) else data, dtype=np.float64)
    if isinstance(data, Profile) and data.location != "face":
        raise ValueError(f'"{name}" must be face centered, got {data.location}')
    if values.shape == (grid.Nz + 1,):
        return interior_faces(values)
    if values.shape == (grid.Nz - 1,):
        return values
    raise InvalidGridError(
        f'"{name}" has shape {values.shape}, expected {grid.Nz + 1} faces or {grid.Nz - 1} interior faces'
    )


def measured_mixing_length(wT: np.ndarray, tkeF: np.ndarray, Tz: np.ndarray) -> np.ndarray:
    """l = -wT / (sqrt(tke) dT/dz), NaN wherever the quotient is not finite."""
    with np.errstate(divide="ignore", invalid="ignore"):
        ell: np.ndarray = -wT / (np.sqrt(tkeF) * Tz)
    return np.where(np.isfinite(ell), ell, np.nan)


def estimated_mixing_length(tkeF: np.ndarray, bz: np.ndarray, boundary_distance: np.ndarray) -> np.ndarray:
    """
    l = min(d, sqrt(tke / max(0, bz))).

    With bz <= 0 the buoyancy term is unbounded and l is exactly the boundary
    distance d. Negative tke with bz > 0 gives NaN.
    """
    N2: np.ndarray = np.maximum(0.0, bz)
    with np.errstate(divide="ignore", invalid="ignore"):
        buoyancy_length: np.ndarray = np.where(N2 > 0, np.sqrt(tkeF / N2), np.inf)
    return np.minimum(boundary_distance, buoyancy_length)


def compute_gradient_profiles(
    T: ProfileLike,
    tke: ProfileLike,
    wT: ProfileLike,
    grid: VerticalGrid,
    eos: LinearEquationOfState,
    Lz: Optional[float] = None,
) -> GradientProfiles:
    """
    Args:
        T: cell centered temperature (N)
        tke: cell centered turbulent kinetic energy (N)
        wT: vertical temperature flux on faces (N + 1, or N - 1 interior faces)
        grid: vertical grid
        eos: linear equation of state providing alpha and g
        Lz: domain depth for the boundary distance, defaults to the grid extent

    Returns:
        GradientProfiles on the interior faces
    """
    grid.validate()
    T_values: np.ndarray = _center_values("T", T, grid)
    tke_values: np.ndarray = _center_values("turbulent_kinetic_energy", tke, grid)
    wT_values: np.ndarray = _interior_face_values("wT", wT, grid)

    Tz: np.ndarray = ddz(T_values, grid.dz)
    bz: np.ndarray = np.asarray(eos.buoyancy_gradient(Tz))
    tkeF: np.ndarray = interp_to_faces(tke_values)
    z: np.ndarray = grid.interior_faces
    distance: np.ndarray = grid.boundary_distance(z, Lz)

    return GradientProfiles(
        z=z,
        Tz=Tz,
        bz=bz,
        tkeF=tkeF,
        wT=wT_values,
        boundary_distance=distance,
        l_measured=measured_mixing_length(wT_values, tkeF, Tz),
        l_estimated=estimated_mixing_length(tkeF, bz, distance),
    )


def mixing_length(
    T: ProfileLike,
    tke: ProfileLike,
    wT: ProfileLike,
    grid: VerticalGrid,
    eos: LinearEquationOfState,
    Lz: Optional[float] = None,
) -> MixingLengthPair:
    return compute_gradient_profiles(T, tke, wT, grid, eos, Lz).trimmed()
