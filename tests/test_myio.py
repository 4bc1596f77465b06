from pathlib import Path

import numpy as np
import pytest

from lesdiag.myio import myio


class TestH5ProfileStore:
    def test_iterations_are_read_from_time_group(self, statistics_file):
        store = myio.H5ProfileStore(statistics_file)
        assert store.iterations() == [100, 2000]
        assert store.available_time_indices() == {100, 2000}

    def test_profiles_are_reduced_to_one_dimension(self, statistics_file, raw_bundle):
        store = myio.H5ProfileStore(statistics_file)
        T = store.get_profile("T", 2000)
        assert T.shape == (4,)
        np.testing.assert_allclose(T, raw_bundle["T"])
        assert store.get_profile("wT", 2000).shape == (5,)

    def test_missing_profile_raises_key_error(self, statistics_file):
        store = myio.H5ProfileStore(statistics_file)
        with pytest.raises(KeyError):
            store.get_profile("uv", 2000)
        with pytest.raises(KeyError):
            store.get_profile("T", 7)

    def test_time(self, statistics_file):
        store = myio.H5ProfileStore(statistics_file)
        assert store.time(2000) == pytest.approx(20000.0)
        assert store.time(7) is None

    def test_halo_points_are_stripped(self, tmp_path, statistics_writer, example_grid, raw_bundle):
        path = statistics_writer(
            tmp_path / "halo_statistics.jld2",
            {5: raw_bundle},
            example_grid.zC,
            example_grid.zF,
            example_grid.dz,
            halo=1,
        )
        store = myio.H5ProfileStore(path, halo=1)
        np.testing.assert_allclose(store.get_profile("T", 5), raw_bundle["T"])

        grid = myio.read_grid(path)
        np.testing.assert_allclose(grid.zC, example_grid.zC)
        np.testing.assert_allclose(grid.zF, example_grid.zF)

    def test_halo_defaults_to_archive_value(self, tmp_path, statistics_writer, example_grid, raw_bundle):
        path = statistics_writer(
            tmp_path / "halo_statistics.jld2",
            {5: raw_bundle},
            example_grid.zC,
            example_grid.zF,
            example_grid.dz,
            halo=2,
        )
        assert myio.read_halo(path) == 2
        store = myio.H5ProfileStore(path)
        assert store.halo == 2
        np.testing.assert_allclose(store.get_profile("T", 5), raw_bundle["T"])
        np.testing.assert_allclose(store.get_profile("wT", 5), raw_bundle["wT"])

        # an explicit halo wins over the archive
        assert myio.H5ProfileStore(path, halo=0).get_profile("T", 5).shape == (8,)

    def test_archive_without_halo(self, tmp_path):
        path = tmp_path / "no_grid_statistics.h5"
        myio.save_to_h5(path, {"timeseries": {"T": {"1": np.zeros(3)}}})
        assert myio.read_halo(path) == 0
        assert myio.H5ProfileStore(path).halo == 0


def test_read_grid(statistics_file, example_grid):
    grid = myio.read_grid(statistics_file)
    np.testing.assert_allclose(grid.zF, example_grid.zF)
    assert grid.dz == pytest.approx(2.0)


def test_read_grid_without_grid_group(tmp_path):
    path = tmp_path / "no_grid_statistics.h5"
    myio.save_to_h5(path, {"timeseries": {"T": {"1": np.zeros(3)}}})
    with pytest.raises(KeyError):
        myio.read_grid(path)


def test_list_statistics_files_natural_order(tmp_path):
    for name in ["run_statistics_part10.jld2", "run_statistics_part2.jld2", "run_fields.jld2", "notes.txt"]:
        (tmp_path / name).touch()
    files = myio.list_statistics_files(tmp_path)
    assert [f.name for f in files] == ["run_statistics_part2.jld2", "run_statistics_part10.jld2"]


class TestPhysicalConstants:
    def test_read_from_inp(self, tmp_path):
        (tmp_path / "diagnostics.inp").write_text(
            "[physics]\nalpha = 1e-4  # thermal expansion\ng = 9.8\n\n[domain]\nLz = 64\nQb = 1e-7\n"
        )
        constants = myio.read_physical_constants(tmp_path)
        assert constants == {"alpha": 1e-4, "g": 9.8, "Lz": 64.0, "Qb": 1e-7}

    def test_defaults_with_warning(self, tmp_path):
        with pytest.warns(UserWarning, match="alpha"):
            constants = myio.read_physical_constants(tmp_path)
        assert constants["alpha"] == pytest.approx(2e-4)
        assert constants["g"] == pytest.approx(9.81)
        assert "Lz" not in constants


def test_save_and_load_nested_results(tmp_path):
    path: Path = tmp_path / "out" / "results.h5"
    myio.save_to_h5(
        path,
        {"mixing_length": {"z": np.array([-4.0]), "measured": np.array([np.nan])}, "iteration": 12, "ok": True},
        {"alpha": 2e-4, "time": None},
    )
    data, metadata = myio.load_from_h5(path)
    assert data["iteration"] == 12
    assert data["ok"] is True
    assert np.isnan(data["mixing_length"]["measured"][0])
    assert metadata == {"alpha": pytest.approx(2e-4)}
