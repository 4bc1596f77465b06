# -- lesdiag/fluid/tke_budget.py

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple, Union

import numpy as np

from lesdiag.fluid.grid import Profile
from lesdiag.fluid.snapshot import SnapshotSelector

SOURCE_TERMS: Tuple[str, ...] = ("buoyancy_flux", "shear_production")
# stored as positive loss magnitudes
LOSS_TERMS: Tuple[str, ...] = ("dissipation", "pressure_transport", "advective_transport")
BUDGET_TERMS: Tuple[str, ...] = SOURCE_TERMS + LOSS_TERMS


@dataclass(frozen=True)
class TKEBudgetBundle:
    """Cell-centered TKE budget terms, signed so that losses are negative."""

    buoyancy_flux: Profile
    shear_production: Profile
    dissipation: Profile
    pressure_transport: Profile
    advective_transport: Profile
    total_transport: Profile

    @property
    def residual(self) -> np.ndarray:
        return (
            self.buoyancy_flux.values
            + self.shear_production.values
            + self.dissipation.values
            + self.total_transport.values
        )

    def as_dict(self) -> Dict[str, np.ndarray]:
        return {
            "buoyancy_flux": self.buoyancy_flux.values,
            "shear_production": self.shear_production.values,
            "dissipation": self.dissipation.values,
            "pressure_transport": self.pressure_transport.values,
            "advective_transport": self.advective_transport.values,
            "total_transport": self.total_transport.values,
            "residual": self.residual,
        }


def _as_center_profile(name: str, data: Union[Profile, np.ndarray]) -> Profile:
    if isinstance(data, Profile):
        if data.location != "center":
            raise ValueError(f'budget term "{name}" must be cell centered, got {data.location}')
        return data
    return Profile(name, np.asarray(data, dtype=np.float64), "center")


def assemble_budget(raw: Mapping[str, Union[Profile, np.ndarray]]) -> TKEBudgetBundle:
    """Apply the energetics sign convention to raw budget terms and sum the transport."""
    terms: Dict[str, Profile] = {name: _as_center_profile(name, raw[name]) for name in BUDGET_TERMS}

    pressure_transport: Profile = terms["pressure_transport"].negated()
    advective_transport: Profile = terms["advective_transport"].negated()
    total: Profile = pressure_transport + advective_transport

    return TKEBudgetBundle(
        buoyancy_flux=terms["buoyancy_flux"],
        shear_production=terms["shear_production"],
        dissipation=terms["dissipation"].negated(),
        pressure_transport=pressure_transport,
        advective_transport=advective_transport,
        total_transport=Profile("total_transport", total.values, "center"),
    )


def read_budget(selector: SnapshotSelector) -> TKEBudgetBundle:
    return assemble_budget({name: selector.profile(name) for name in BUDGET_TERMS})
