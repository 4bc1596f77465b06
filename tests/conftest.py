import os

# never open windows while testing
os.environ.setdefault("MY_MACHINE", "cluster")

import matplotlib

matplotlib.use("Agg")

from pathlib import Path
from typing import Dict, Set

import h5py
import numpy as np
import pytest

from lesdiag.fluid.grid import VerticalGrid
from lesdiag.myio.myio import DictProfileStore

ALPHA: float = 2e-4
G: float = 9.81


def example_bundle() -> Dict[str, np.ndarray]:
    """Four cells, dz = 2, z in (-8, 0)."""
    return {
        "T": np.array([0.1, 0.2, 0.4, 0.5]),
        "ww": np.array([0.0, 0.4, 0.6, 0.2, 0.0]),
        "turbulent_kinetic_energy": np.array([1.0, 2.0, 2.0, 1.0]),
        "wT": np.array([0.0, -0.01, -0.02, -0.01, 0.0]),
        "buoyancy_flux": np.array([1e-8, 2e-8, 3e-8, 4e-8]),
        "shear_production": np.array([0.0, 1e-9, 2e-9, 0.0]),
        "dissipation": np.array([2e-8, 3e-8, 4e-8, 5e-8]),
        "pressure_transport": np.array([1e-9, -1e-9, 2e-9, -2e-9]),
        "advective_transport": np.array([3e-9, 1e-9, -1e-9, 0.0]),
    }


class RecordingStore(DictProfileStore):
    """Remembers which iteration every read asked for."""

    def __init__(self, data) -> None:
        super().__init__(data)
        self.requested: Set[int] = set()

    def get_profile(self, variable_name: str, time_index: int) -> np.ndarray:
        self.requested.add(time_index)
        return super().get_profile(variable_name, time_index)


@pytest.fixture
def example_grid() -> VerticalGrid:
    return VerticalGrid(
        zC=np.array([-7.0, -5.0, -3.0, -1.0]),
        zF=np.array([-8.0, -6.0, -4.0, -2.0, 0.0]),
        dz=2.0,
    )


@pytest.fixture
def example_store() -> RecordingStore:
    early: Dict[str, np.ndarray] = {name: np.zeros_like(values) for name, values in example_bundle().items()}
    return RecordingStore({0: early, 5: early, 12: example_bundle()})


def write_statistics_file(
    path: Path,
    bundles: Dict[int, Dict[str, np.ndarray]],
    zC: np.ndarray,
    zF: np.ndarray,
    dz: float,
    halo: int = 0,
) -> Path:
    """Write profiles the way a JLD2 statistics writer lays them out: (Nz, 1, 1) per iteration."""
    with h5py.File(str(path), "w") as f:
        f.create_dataset("grid/zC", data=np.pad(zC, halo, mode="edge"))
        f.create_dataset("grid/zF", data=np.pad(zF, halo, mode="edge"))
        f.create_dataset("grid/Δz", data=dz)
        f.create_dataset("grid/Hz", data=halo)
        f.create_group("timeseries/t")
        for iteration, bundle in bundles.items():
            f.create_dataset(f"timeseries/t/{iteration}", data=float(iteration) * 10.0)
            for name, values in bundle.items():
                padded: np.ndarray = np.pad(values, halo, mode="edge")
                f.create_dataset(f"timeseries/{name}/{iteration}", data=padded.reshape(-1, 1, 1))
        # serialization metadata written next to the iterations
        f.create_dataset("timeseries/t/serialized", data=0)
    return path


@pytest.fixture
def statistics_file(tmp_path: Path, example_grid: VerticalGrid) -> Path:
    early: Dict[str, np.ndarray] = {name: np.ones_like(values) for name, values in example_bundle().items()}
    return write_statistics_file(
        tmp_path / "free_convection_statistics.jld2",
        {100: early, 2000: example_bundle()},
        example_grid.zC,
        example_grid.zF,
        example_grid.dz,
    )


@pytest.fixture
def raw_bundle() -> Dict[str, np.ndarray]:
    return example_bundle()


@pytest.fixture
def statistics_writer():
    return write_statistics_file
