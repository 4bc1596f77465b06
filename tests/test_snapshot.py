import numpy as np
import pytest

from lesdiag.errors import EmptyArchiveError, MissingVariableError
from lesdiag.fluid.snapshot import VARIABLE_LOCATIONS, SnapshotSelector
from lesdiag.myio.myio import DictProfileStore


def test_latest_iteration_is_selected(example_store):
    selector = SnapshotSelector(example_store)
    assert selector.iteration == 12


def test_every_read_uses_the_fixed_iteration(example_store):
    selector = SnapshotSelector(example_store)
    selector.read_all(VARIABLE_LOCATIONS)
    assert example_store.requested == {12}


def test_iteration_fixed_at_construction(example_store, raw_bundle):
    selector = SnapshotSelector(example_store)
    # a later iteration appearing does not change the run's snapshot
    example_store._data[20] = {name: np.asarray(values) for name, values in raw_bundle.items()}
    selector.get("T")
    assert selector.iteration == 12
    assert example_store.requested == {12}


def test_empty_archive_fails():
    with pytest.raises(EmptyArchiveError):
        SnapshotSelector(DictProfileStore({}))


def test_missing_variable_fails(raw_bundle):
    del raw_bundle["wT"]
    selector = SnapshotSelector(DictProfileStore({3: raw_bundle}))
    with pytest.raises(MissingVariableError) as excinfo:
        selector.get("wT")
    assert excinfo.value.name == "wT"
    assert excinfo.value.iteration == 3
    assert "wT" in str(excinfo.value)


def test_missing_variable_error_is_a_key_error():
    selector = SnapshotSelector(DictProfileStore({3: {}}))
    with pytest.raises(KeyError):
        selector.get("T")


def test_profiles_carry_their_grid_location(example_store):
    profiles = SnapshotSelector(example_store).read_all(["T", "ww", "wT"])
    assert profiles["T"].location == "center"
    assert profiles["ww"].location == "face"
    assert profiles["wT"].location == "face"
    np.testing.assert_allclose(profiles["T"].values, [0.1, 0.2, 0.4, 0.5])


def test_unknown_variable_location(example_store):
    with pytest.raises(ValueError, match="unknown"):
        SnapshotSelector(example_store).profile("u")
