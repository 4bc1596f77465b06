# -- lesdiag/myio/myio.py

import ast
import configparser
import glob
import warnings
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

import h5py
import numpy as np
from natsort import natsorted

from lesdiag import globals
from lesdiag.fluid.grid import VerticalGrid


# ------------------------- profile stores -------------------------


class DictProfileStore:
    """In-memory store: {iteration: {variable name: profile}}."""

    def __init__(self, data: Mapping[int, Mapping[str, Sequence[float]]]) -> None:
        self._data: Dict[int, Dict[str, np.ndarray]] = {
            int(iteration): {name: np.asarray(values, dtype=np.float64) for name, values in bundle.items()}
            for iteration, bundle in data.items()
        }

    def get_profile(self, variable_name: str, time_index: int) -> np.ndarray:
        return self._data[int(time_index)][variable_name]

    def available_time_indices(self) -> Set[int]:
        return set(self._data)


class H5ProfileStore:
    """
    Profiles from a JLD2 (HDF5) statistics file laid out as
    timeseries/<variable>/<iteration>, with the iterations listed under
    timeseries/t.

    Args:
        path: statistics file
        halo: number of halo points to strip from each end of a profile,
            read from grid/Hz in the file when None
    """

    def __init__(self, path: Union[str, Path], halo: Optional[int] = None) -> None:
        self.path: Path = Path(path)
        self.halo: int = read_halo(self.path) if halo is None else int(halo)
        if self.halo < 0:
            raise ValueError(f"halo must be non-negative, got {self.halo}")

    def iterations(self) -> List[int]:
        with h5py.File(str(self.path), "r") as f:
            if "timeseries/t" not in f:
                return []
            keys: List[str] = [k for k in f["timeseries/t"].keys() if k.isdigit()]  # type: ignore
        return [int(k) for k in natsorted(keys)]

    def available_time_indices(self) -> Set[int]:
        return set(self.iterations())

    def get_profile(self, variable_name: str, time_index: int) -> np.ndarray:
        key: str = f"timeseries/{variable_name}/{int(time_index)}"
        with h5py.File(str(self.path), "r") as f:
            if key not in f:
                raise KeyError(key)
            data: np.ndarray = np.asarray(f[key][()], dtype=np.float64)  # type: ignore
        # stored as (Nz, 1, 1) for a horizontally averaged field
        profile: np.ndarray = np.atleast_1d(np.squeeze(data))
        if profile.ndim != 1:
            raise ValueError(f'"{key}" in {self.path} is not a vertical profile (shape {data.shape})')
        if self.halo > 0:
            profile = profile[self.halo : len(profile) - self.halo]
        return profile

    def time(self, time_index: int) -> Optional[float]:
        with h5py.File(str(self.path), "r") as f:
            key: str = f"timeseries/t/{int(time_index)}"
            if key not in f:
                return None
            return float(f[key][()])  # type: ignore


def read_halo(path: Union[str, Path]) -> int:
    """Number of halo points (grid/Hz) padding each end of the stored profiles, 0 if absent."""
    with h5py.File(str(path), "r") as f:
        if "grid/Hz" not in f:
            return 0
        return int(np.ravel(f["grid/Hz"][()])[0])  # type: ignore


def read_grid(path: Union[str, Path]) -> VerticalGrid:
    """Read the vertical grid (grid/zC, grid/zF, grid/Δz) stored alongside the statistics."""
    with h5py.File(str(path), "r") as f:
        if "grid/zC" not in f or "grid/zF" not in f:
            raise KeyError(f"no vertical grid found in {path}")
        zC: np.ndarray = np.ravel(f["grid/zC"][()])  # type: ignore
        zF: np.ndarray = np.ravel(f["grid/zF"][()])  # type: ignore
        dz: Optional[float] = None
        for dz_key in ("grid/Δz", "grid/dz"):
            if dz_key in f:
                dz = float(np.ravel(f[dz_key][()])[0])  # type: ignore
                break

    Hz: int = read_halo(path)
    if Hz > 0:
        zC = zC[Hz : len(zC) - Hz]
        zF = zF[Hz : len(zF) - Hz]
    if dz is None:
        dz = float(zF[1] - zF[0])
    return VerticalGrid(zC=zC, zF=zF, dz=dz)


def list_statistics_files(data_dir: Path, base_name: str = "statistics") -> List[Path]:
    """
    Find statistics files (<prefix>_<base_name>[_partN].jld2 or .h5) in data_dir,
    naturally sorted so that the last entry is the most recent part.
    """
    all_files: List[Path] = []
    for extension in ("jld2", "h5"):
        file_pattern: str = str(Path(data_dir) / f"*_{base_name}*.{extension}")
        all_files += [Path(f) for f in glob.glob(file_pattern)]
    return natsorted(all_files, key=lambda f: f.stem)


# ------------------------- configuration -------------------------


def read_physical_constants(data_dir: Path, inp_name: str = "diagnostics.inp") -> Dict[str, float]:
    """Read alpha, g and optionally Lz, Qb, N2 from the diagnostics input file."""
    params: Dict[str, Union[np.ndarray, int, float]] = _read_inp(Path(data_dir) / inp_name)
    constants: Dict[str, float] = {}

    key: str
    default: float
    for key, default in (("alpha", globals.DEFAULT_ALPHA), ("g", globals.DEFAULT_G)):
        try:
            constants[key] = float(params[key])  # type: ignore
        except KeyError:
            warnings.warn(
                f"{key} not found in {inp_name}, using {key} = {default}",
                category=UserWarning,
            )
            constants[key] = default

    for key in ("Lz", "Qb", "N2"):
        if key in params:
            constants[key] = float(params[key])  # type: ignore
    return constants


def _read_inp(inp_file: Path) -> Dict[str, Union[np.ndarray, int, float]]:
    """Return a dict of all parameters in a config file."""
    config_parser = configparser.ConfigParser(inline_comment_prefixes="#")

    def _optionxform(option: str) -> str:
        return option

    config_parser.optionxform = _optionxform  # type: ignore
    config_parser.read(inp_file)
    config_dicts: List[Dict[str, str]] = [dict(config_parser[s]) for s in config_parser.sections()]
    config_raw: Dict[str, str] = _merge_dicts(config_dicts)
    config_raw = {k: v.replace("{", "[").replace("}", "]") for k, v in config_raw.items()}
    config_list: Dict[str, Union[List, int, float]] = {
        k: ast.literal_eval(v) for k, v in config_raw.items()
    }
    config_np: Dict[str, Union[np.ndarray, int, float]] = {
        k: np.array(v) if isinstance(v, list) else v for k, v in config_list.items()
    }
    return config_np


def _merge_dicts(dict_list: List[dict]) -> dict:
    """Merge a list of dicts into a single dict."""
    merged: dict = {}
    for d in dict_list:
        merged |= d
    return merged


# ------------------------- results -------------------------


def save_to_h5(
    output_path: Path,
    data_dict: Dict[str, Any],
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    def _save_nested_dict(h5_group: h5py.Group, data: Dict[str, Any]) -> None:
        for key, value in data.items():
            if isinstance(value, dict):
                subgroup = h5_group.create_group(key)
                _save_nested_dict(subgroup, value)
            elif isinstance(value, np.ndarray):
                h5_group.create_dataset(key, data=value, compression="gzip", compression_opts=6)
            # bool before int, bool is an int subclass
            elif isinstance(value, (bool, np.bool_)):
                h5_group.create_dataset(key, data=np.bool_(value))  # type: ignore[arg-type]
            elif isinstance(value, (int, float, complex, np.floating, np.integer)):
                h5_group.create_dataset(key, data=value)  # type: ignore[arg-type]
            elif isinstance(value, str):
                str_dtype = h5py.string_dtype(encoding="utf-8")
                h5_group.create_dataset(key, data=value, dtype=str_dtype)
            elif isinstance(value, (list, tuple)):
                try:
                    array_value = np.array(value)
                    h5_group.create_dataset(key, data=array_value, compression="gzip", compression_opts=6)
                except (ValueError, TypeError):
                    warnings.warn(
                        f'when saving to h5 failed to convert tuple or list "{value}" with key "{key}" to numpy array. Converting to string instead',
                        category=UserWarning,
                    )
                    str_dtype = h5py.string_dtype(encoding="utf-8")
                    h5_group.create_dataset(key, data=str(value), dtype=str_dtype)
            else:
                warnings.warn(
                    f'Failed to recognise type of value with key "{key}". Converting to string. (Value is "{value}")',
                    category=UserWarning,
                )
                str_dtype = h5py.string_dtype(encoding="utf-8")
                h5_group.create_dataset(key, data=str(value), dtype=str_dtype)

    with h5py.File(str(output_path), "w") as h5_file:
        _save_nested_dict(h5_file, data_dict)
        if metadata:
            for mkey, mval in metadata.items():
                if mval is None:
                    continue
                try:
                    h5_file.attrs[mkey] = mval
                except TypeError:
                    h5_file.attrs[mkey] = str(mval)


def load_from_h5(input_path: Path) -> Tuple[Dict[str, Any], Optional[Dict[str, Any]]]:

    def _load_nested_dict(h5_group: h5py.Group) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, item in h5_group.items():
            if isinstance(item, h5py.Group):
                result[key] = _load_nested_dict(item)
            elif isinstance(item, h5py.Dataset):
                data: Any = item[()]
                if isinstance(data, (bytes, bytearray)):
                    result[key] = data.decode("utf-8")
                # numpy scalar (0-d) -> convert to Python scalar
                elif np.asarray(data).shape == ():
                    result[key] = np.asarray(data).item()
                else:
                    result[key] = data
        return result

    metadata: Optional[Dict[str, Any]] = None
    with h5py.File(str(input_path), "r") as h5_file:
        data_dict = _load_nested_dict(h5_file)
        metadata = dict(h5_file.attrs) if h5_file.attrs else None

    return data_dict, metadata
