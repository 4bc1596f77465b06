# -- lesdiag/fluid/report.py

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from lesdiag.fluid.grid import Profile, VerticalGrid
from lesdiag.fluid.mixing_length import MixingLengthPair
from lesdiag.fluid.tke_budget import TKEBudgetBundle


@dataclass(frozen=True)
class ProfileCurve:
    label: str
    values: np.ndarray
    z: np.ndarray
    key: Optional[str] = None

    def __post_init__(self) -> None:
        if np.shape(self.values) != np.shape(self.z):
            raise ValueError(
                f'curve "{self.label}" has {np.shape(self.values)} values but {np.shape(self.z)} coordinates'
            )


@dataclass(frozen=True)
class ProfilePanel:
    name: str
    xlabel: str
    curves: List[ProfileCurve]
    xlim: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class DiagnosticReport:
    """The four panels handed to a renderer. NaN means no data at that depth."""

    iteration: int
    temperature: ProfilePanel
    variances: ProfilePanel
    budget: ProfilePanel
    mixing_length: ProfilePanel
    zlim: Tuple[float, float]
    extras: Dict[str, Any] = field(default_factory=dict)

    @property
    def panels(self) -> List[ProfilePanel]:
        return [self.temperature, self.variances, self.budget, self.mixing_length]

    def to_dict(self) -> Dict[str, Any]:
        """Nested dict suitable for myio.save_to_h5."""
        out: Dict[str, Any] = {"iteration": self.iteration}
        for panel in self.panels:
            out[panel.name] = {
                (curve.key or _key(curve.label)): {"values": curve.values, "z": curve.z} for curve in panel.curves
            }
        out.update(self.extras)
        return out


def _key(label: str) -> str:
    return label.replace(" ", "_").replace("/", "over")


def build_report(
    iteration: int,
    grid: VerticalGrid,
    T: Profile,
    tke: Profile,
    ww: Profile,
    budget: TKEBudgetBundle,
    lengths: MixingLengthPair,
    extras: Optional[Dict[str, Any]] = None,
) -> DiagnosticReport:
    temperature = ProfilePanel(
        name="temperature",
        xlabel=r"Temperature ($^\circ$C)",
        curves=[ProfileCurve("temperature", T.values, T.coordinate(grid))],
    )
    variances = ProfilePanel(
        name="variances",
        xlabel=r"Velocity variances (m$^2$ s$^{-2}$)",
        curves=[
            ProfileCurve(r"$(u^2 + v^2 + w^2) / 2$", tke.values, tke.coordinate(grid), key="tke"),
            ProfileCurve(r"$w^2 / 2$", 0.5 * ww.values, ww.coordinate(grid), key="ww_half"),
        ],
    )
    budget_panel = ProfilePanel(
        name="budget",
        xlabel=r"TKE budget terms (m$^2$ s$^{-3}$)",
        curves=[
            ProfileCurve("buoyancy flux", budget.buoyancy_flux.values, budget.buoyancy_flux.coordinate(grid)),
            ProfileCurve("dissipation", budget.dissipation.values, budget.dissipation.coordinate(grid)),
            ProfileCurve(
                "kinetic energy transport",
                budget.total_transport.values,
                budget.total_transport.coordinate(grid),
            ),
        ],
    )
    mixing_length = ProfilePanel(
        name="mixing_length",
        xlabel="Mixing length (m)",
        curves=[
            ProfileCurve("measured", lengths.measured, lengths.z),
            ProfileCurve("estimated", lengths.estimated, lengths.z),
        ],
        xlim=(-5.0, 20.0),
    )
    return DiagnosticReport(
        iteration=iteration,
        temperature=temperature,
        variances=variances,
        budget=budget_panel,
        mixing_length=mixing_length,
        zlim=(float(grid.zF[0]), float(grid.zF[-1])),
        extras=dict(extras or {}),
    )
