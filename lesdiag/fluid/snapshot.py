# -- lesdiag/fluid/snapshot.py

from typing import Dict, Iterable, Protocol, Sequence, Set

import numpy as np
import tqdm

from lesdiag.errors import EmptyArchiveError, MissingVariableError
from lesdiag.fluid.grid import Location, Profile


class ProfileStore(Protocol):
    """Read-only source of horizontally averaged profiles."""

    def get_profile(self, variable_name: str, time_index: int) -> Sequence[float]: ...

    def available_time_indices(self) -> Set[int]: ...


VARIABLE_LOCATIONS: Dict[str, Location] = {
    "T": "center",
    "ww": "face",
    "wT": "face",
    "turbulent_kinetic_energy": "center",
    "buoyancy_flux": "center",
    "shear_production": "center",
    "dissipation": "center",
    "pressure_transport": "center",
    "advective_transport": "center",
}


class SnapshotSelector:
    """
    Reads every profile of one diagnostic run at the same iteration.

    The iteration is fixed once, at construction, to the latest one stored;
    later reads never re-query the available iterations.
    """

    def __init__(self, store: ProfileStore) -> None:
        indices: Set[int] = set(store.available_time_indices())
        if not indices:
            raise EmptyArchiveError("statistics archive contains no iterations")
        self.store: ProfileStore = store
        self.iteration: int = max(indices)

    def get(self, name: str) -> np.ndarray:
        try:
            data = self.store.get_profile(name, self.iteration)
        except KeyError as error:
            raise MissingVariableError(name, self.iteration) from error
        return np.asarray(data, dtype=np.float64)

    def profile(self, name: str) -> Profile:
        try:
            location: Location = VARIABLE_LOCATIONS[name]
        except KeyError:
            raise ValueError(f'grid location of variable "{name}" is unknown') from None
        return Profile(name, self.get(name), location)

    def read_all(self, names: Iterable[str]) -> Dict[str, Profile]:
        names = list(names)
        print(f"Reading {len(names)} profiles at iteration {self.iteration}")
        return {name: self.profile(name) for name in tqdm.tqdm(names, desc="Reading profiles")}
