"""
Tests for preference hydration and persistence.
"""
import json

from datagrid.grid.actions import PinColumn, SetDensity, SetSearch, SetTheme, ToggleColumnVisibility
from datagrid.grid.models import Density, PinSide, Theme
from datagrid.grid.preferences import (
    DEFAULT_PREFERENCE_KEY,
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceBridge,
    preference_snapshot,
)
from datagrid.grid.state import initial_state
from datagrid.grid.store import GridStore


SAVED = {
    "visibleColumns": ["id", "name", "salary"],
    "density": "compact",
    "theme": "dark",
    "pinnedColumns": {"left": ["id"], "right": ["salary"]},
}


class TestPreferenceSnapshot:
    def test_shape(self):
        snapshot = preference_snapshot(initial_state())

        assert set(snapshot) == {"visibleColumns", "density", "theme", "pinnedColumns"}
        assert snapshot["density"] == "standard"
        assert snapshot["pinnedColumns"] == {"left": [], "right": []}


class TestPreferenceBridge:
    def test_hydrate_applies_saved_values(self):
        store = GridStore()
        prefs = MemoryPreferenceStore({DEFAULT_PREFERENCE_KEY: SAVED})
        bridge = PreferenceBridge(store, prefs)

        assert bridge.hydrate()

        state = store.state
        assert state.density == Density.COMPACT
        assert state.theme == Theme.DARK
        assert state.visible_columns == ("id", "name", "salary")
        assert state.pinned.left == ("id",)
        assert state.pinned.right == ("salary",)

    def test_hydrate_restores_saved_column_order(self):
        store = GridStore()
        saved = dict(SAVED, visibleColumns=["salary", "id", "bogus", "name", "id"])
        bridge = PreferenceBridge(store, MemoryPreferenceStore({DEFAULT_PREFERENCE_KEY: saved}))

        bridge.hydrate()

        assert store.state.visible_columns == ("salary", "id", "name")
        assert preference_snapshot(store.state)["visibleColumns"] == ["salary", "id", "name"]

    def test_hydrate_does_not_write_back(self):
        store = GridStore()
        prefs = MemoryPreferenceStore({DEFAULT_PREFERENCE_KEY: SAVED})
        bridge = PreferenceBridge(store, prefs)

        bridge.hydrate()

        assert prefs.save_count == 0

    def test_hydrate_runs_once(self):
        store = GridStore()
        prefs = MemoryPreferenceStore({DEFAULT_PREFERENCE_KEY: SAVED})
        bridge = PreferenceBridge(store, prefs)
        bridge.hydrate()
        store.dispatch(SetTheme(Theme.LIGHT))

        assert not bridge.hydrate()
        assert store.state.theme == Theme.LIGHT

    def test_no_saves_before_hydration(self):
        store = GridStore()
        prefs = MemoryPreferenceStore()
        PreferenceBridge(store, prefs)

        store.dispatch(SetTheme(Theme.DARK))

        assert prefs.save_count == 0

    def test_saves_on_change_with_empty_storage(self):
        store = GridStore()
        prefs = MemoryPreferenceStore()
        PreferenceBridge(store, prefs).hydrate()

        store.dispatch(SetDensity(Density.COMFORTABLE))

        assert prefs.save_count == 1
        assert prefs.data[DEFAULT_PREFERENCE_KEY]["density"] == "comfortable"

    def test_unrelated_changes_do_not_save(self):
        store = GridStore()
        prefs = MemoryPreferenceStore()
        PreferenceBridge(store, prefs).hydrate()

        store.dispatch(SetSearch("eng"))

        assert prefs.save_count == 0

    def test_round_trip_change_saves_each_time(self):
        store = GridStore()
        prefs = MemoryPreferenceStore()
        PreferenceBridge(store, prefs).hydrate()

        store.dispatch(ToggleColumnVisibility("email"))
        store.dispatch(PinColumn("name", PinSide.LEFT))
        store.dispatch(ToggleColumnVisibility("email"))

        assert prefs.save_count == 3
        saved = prefs.data[DEFAULT_PREFERENCE_KEY]
        assert "email" in saved["visibleColumns"]
        assert saved["pinnedColumns"]["left"] == ["name"]

    def test_invalid_saved_values_are_skipped(self, log_messages):
        store = GridStore()
        prefs = MemoryPreferenceStore({DEFAULT_PREFERENCE_KEY: {"density": "huge", "theme": "dark"}})

        PreferenceBridge(store, prefs).hydrate()

        assert store.state.density == Density.STANDARD
        assert store.state.theme == Theme.DARK
        assert any("huge" in m for m in log_messages)

    def test_detach(self):
        store = GridStore()
        prefs = MemoryPreferenceStore()
        bridge = PreferenceBridge(store, prefs)
        bridge.hydrate()

        bridge.detach()
        store.dispatch(SetTheme(Theme.DARK))

        assert prefs.save_count == 0

    def test_custom_key(self):
        store = GridStore()
        prefs = MemoryPreferenceStore()
        PreferenceBridge(store, prefs, key="grid.users").hydrate()

        store.dispatch(SetTheme(Theme.DARK))

        assert "grid.users" in prefs.data


class TestJsonFilePreferenceStore:
    def test_missing_file_loads_nothing(self, tmp_path):
        store = JsonFilePreferenceStore(tmp_path / "prefs.json")

        assert store.load(DEFAULT_PREFERENCE_KEY) is None

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        store = JsonFilePreferenceStore(path)

        store.save(DEFAULT_PREFERENCE_KEY, SAVED)
        store.save("other", {"theme": "light"})

        assert store.load(DEFAULT_PREFERENCE_KEY) == SAVED
        assert set(json.loads(path.read_text(encoding="utf-8"))) == {DEFAULT_PREFERENCE_KEY, "other"}

    def test_corrupt_file_loads_nothing(self, tmp_path, log_messages):
        path = tmp_path / "prefs.json"
        path.write_text("{oops", encoding="utf-8")

        assert JsonFilePreferenceStore(path).load(DEFAULT_PREFERENCE_KEY) is None
        assert log_messages

    def test_bridge_persists_across_sessions(self, tmp_path):
        path = tmp_path / "prefs.json"
        first = GridStore()
        PreferenceBridge(first, JsonFilePreferenceStore(path)).hydrate()
        first.dispatch(SetDensity(Density.COMPACT))
        first.dispatch(PinColumn("id", PinSide.LEFT))

        second = GridStore()
        PreferenceBridge(second, JsonFilePreferenceStore(path)).hydrate()

        assert second.state.density == Density.COMPACT
        assert second.state.pinned.left == ("id",)
