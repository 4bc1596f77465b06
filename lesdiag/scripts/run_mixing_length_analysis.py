# -- lesdiag/scripts/run_mixing_length_analysis.py

import warnings
from pathlib import Path
from typing import Dict, List, Optional, Union

from lesdiag.fluid.grid import Profile, VerticalGrid
from lesdiag.fluid.mixing_length import GradientProfiles, compute_gradient_profiles
from lesdiag.fluid.report import DiagnosticReport, build_report
from lesdiag.fluid.snapshot import ProfileStore, SnapshotSelector
from lesdiag.fluid.tke_budget import TKEBudgetBundle, read_budget
from lesdiag.myio import myio
from lesdiag import plotting
from lesdiag.theory.linear_eos import LinearEquationOfState
from lesdiag.theory.mixing_length_fit import fit_coefficient

PROFILE_NAMES: List[str] = ["T", "ww", "turbulent_kinetic_energy", "wT"]


def compute_mixing_length_diagnostics(
    store: ProfileStore,
    eos: LinearEquationOfState,
    grid: Optional[VerticalGrid] = None,
    Lz: Optional[float] = None,
) -> DiagnosticReport:
    """
    Read the latest iteration of the store and derive the TKE budget and both
    mixing lengths.

    Args:
        store: statistics archive
        eos: linear equation of state (alpha, g)
        grid: vertical grid, built as a regular grid over (-Lz, 0) when None
        Lz: domain depth used for the boundary distance

    Returns:
        DiagnosticReport with the four panels
    """
    selector = SnapshotSelector(store)
    profiles: Dict[str, Profile] = selector.read_all(PROFILE_NAMES)
    budget: TKEBudgetBundle = read_budget(selector)

    if grid is None:
        if Lz is None:
            raise ValueError("either a grid or the domain depth Lz is required")
        grid = VerticalGrid.regular(len(profiles["T"]), Lz)

    gradients: GradientProfiles = compute_gradient_profiles(
        profiles["T"],
        profiles["turbulent_kinetic_energy"],
        profiles["wT"],
        grid,
        eos,
        Lz,
    )
    lengths = gradients.trimmed()
    coefficient: float = fit_coefficient(lengths.measured, lengths.estimated)
    print(f"Fitted mixing length coefficient l_measured / l_estimated = {coefficient:.3f}")

    return build_report(
        selector.iteration,
        grid,
        profiles["T"],
        profiles["turbulent_kinetic_energy"],
        profiles["ww"],
        budget,
        lengths,
        extras={
            "interior_faces": {
                "z": gradients.z,
                "Tz": gradients.Tz,
                "bz": gradients.bz,
                "tkeF": gradients.tkeF,
                "wT": gradients.wT,
                "boundary_distance": gradients.boundary_distance,
                "l_measured": gradients.l_measured,
                "l_estimated": gradients.l_estimated,
            },
            "tke_budget": budget.as_dict(),
            "mixing_length_coefficient": coefficient,
        },
    )


def find_statistics_file(data_dir: Union[str, Path]) -> Path:
    print(f'Looking for statistics files in directory: "{data_dir}"')
    statistics_files: List[Path] = myio.list_statistics_files(Path(data_dir))
    if not statistics_files:
        raise FileNotFoundError(f"no statistics files found in {data_dir}")
    if len(statistics_files) > 1:
        warnings.warn(
            f"found {len(statistics_files)} statistics files, using {statistics_files[-1].name}",
            category=UserWarning,
        )
    return statistics_files[-1]


def main(
    data_dir: Union[str, Path],
    output_dir: Union[str, Path],
    statistics_file: Optional[Union[str, Path]] = None,
    alpha: Optional[float] = None,
    g: Optional[float] = None,
    Lz: Optional[float] = None,
    halo: Optional[int] = None,
    plot: bool = True,
) -> DiagnosticReport:

    # =============================================================================
    # CONFIGURATION AND CONSTANTS
    # =============================================================================

    data_dir = Path(data_dir)
    output_dir = Path(output_dir) / "mixing_length"
    plot_dir = output_dir / "plots"

    constants: Dict[str, float] = myio.read_physical_constants(data_dir)
    if alpha is not None:
        constants["alpha"] = alpha
    if g is not None:
        constants["g"] = g
    if Lz is not None:
        constants["Lz"] = Lz
    eos = LinearEquationOfState(alpha=constants["alpha"], g=constants["g"])

    statistics_path: Path = (
        Path(statistics_file) if statistics_file is not None else find_statistics_file(data_dir)
    )
    store = myio.H5ProfileStore(statistics_path, halo=halo)

    grid: Optional[VerticalGrid] = None
    try:
        grid = myio.read_grid(statistics_path)
    except KeyError:
        warnings.warn(
            f"no grid stored in {statistics_path}, assuming a regular grid over (-Lz, 0)",
            category=UserWarning,
        )

    # =============================================================================
    # Computation and plotting
    # =============================================================================

    report: DiagnosticReport = compute_mixing_length_diagnostics(store, eos, grid, constants.get("Lz"))

    metadata: Dict[str, Optional[Union[str, int, float]]] = {
        "statistics_file": str(statistics_path),
        "iteration": report.iteration,
        "time": store.time(report.iteration),
        "alpha": eos.alpha,
        "g": eos.g,
        "Lz": constants.get("Lz"),
    }
    # surface forcing and initial stratification in temperature units
    if "Qb" in constants:
        metadata["Qb"] = constants["Qb"]
        metadata["temperature_flux"] = float(eos.temperature_flux(constants["Qb"]))
    if "N2" in constants:
        metadata["N2"] = constants["N2"]
        metadata["temperature_gradient"] = float(eos.temperature_gradient(constants["N2"]))

    myio.save_to_h5(output_dir / "mixing_length.h5", report.to_dict(), metadata)

    if plot:
        plotting.templates.mixing_length_diagnostics(plot_dir, report)

    return report
