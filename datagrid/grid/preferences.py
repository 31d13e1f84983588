"""
Preference persistence - restores and saves user-facing grid settings.

Persisted subset: visible columns, pinned columns, density and theme.
The bridge hydrates the store once at startup and only then starts
writing, and it writes only when the serialized subset actually changed,
so hydration never bounces straight back into a save.
"""
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from loguru import logger

from datagrid.grid.actions import PinColumn, SetDensity, SetTheme, ToggleColumnVisibility
from datagrid.grid.models.specs import Density, PinSide, Theme
from datagrid.grid.state import GridState
from datagrid.grid.store import GridStore


DEFAULT_PREFERENCE_KEY = "dataGridPreferences"


class PreferenceStore(Protocol):
    """Key-value store for persisted grid preferences."""

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        ...

    def save(self, key: str, value: Dict[str, Any]) -> None:
        ...


class MemoryPreferenceStore:
    """Preference store kept in a dict (tests, ephemeral sessions)."""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        self.data: Dict[str, Dict[str, Any]] = dict(initial or {})
        self.save_count = 0

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        value = self.data.get(key)
        return json.loads(json.dumps(value)) if value is not None else None

    def save(self, key: str, value: Dict[str, Any]) -> None:
        self.data[key] = json.loads(json.dumps(value))
        self.save_count += 1


class JsonFilePreferenceStore:
    """
    Preference store persisted to a JSON file holding ``{key: value}``.

    Read/write failures are logged; a missing or unreadable file loads as
    empty.
    """

    def __init__(self, path: Union[str, Path] = "grid_preferences.json"):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except Exception as e:
            logger.warning(f"Failed to read preferences from {self.path}: {e}")
            return {}

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        return self._read_all().get(key)

    def save(self, key: str, value: Dict[str, Any]) -> None:
        data = self._read_all()
        data[key] = value
        try:
            if self.path.parent and not self.path.parent.exists():
                os.makedirs(self.path.parent, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except Exception as e:
            logger.error(f"Failed to save preferences to {self.path}: {e}")


def preference_snapshot(state: GridState) -> Dict[str, Any]:
    """Persisted subset of a state, in the stored JSON shape."""
    return {
        "visibleColumns": list(state.visible_columns),
        "density": state.density.value,
        "theme": state.theme.value,
        "pinnedColumns": {
            "left": list(state.pinned.left),
            "right": list(state.pinned.right),
        },
    }


def _serialize(snapshot: Optional[Dict[str, Any]]) -> str:
    return json.dumps(snapshot, sort_keys=True)


class PreferenceBridge:
    """
    Connects a GridStore to a PreferenceStore.

    Example:
        bridge = PreferenceBridge(store, JsonFilePreferenceStore("prefs.json"))
        bridge.hydrate()        # once, at startup
        store.dispatch(SetTheme(Theme.DARK))   # saved automatically
    """

    def __init__(
        self,
        store: GridStore,
        preferences: PreferenceStore,
        key: str = DEFAULT_PREFERENCE_KEY,
    ):
        self._store = store
        self._preferences = preferences
        self._key = key
        self._hydrated = False
        self._last_serialized: Optional[str] = None
        self._unsubscribe = store.subscribe(self._on_state_changed)

    @property
    def hydrated(self) -> bool:
        return self._hydrated

    def hydrate(self) -> bool:
        """
        Apply saved preferences to the store. Runs at most once.

        Returns:
            True on the first call, False afterwards
        """
        if self._hydrated:
            return False

        saved = self._preferences.load(self._key)
        if saved:
            self._apply(saved)
            logger.debug(f"Preferences restored from '{self._key}'")

        self._last_serialized = _serialize(preference_snapshot(self._store.state))
        self._hydrated = True
        return True

    def detach(self):
        self._unsubscribe()

    def _apply(self, saved: Dict[str, Any]):
        state = self._store.state

        density = self._coerce(Density, saved.get("density"))
        if density is not None and density != state.density:
            self._store.dispatch(SetDensity(density))

        theme = self._coerce(Theme, saved.get("theme"))
        if theme is not None and theme != state.theme:
            self._store.dispatch(SetTheme(theme))

        visible = saved.get("visibleColumns")
        if isinstance(visible, list):
            wanted = tuple(dict.fromkeys(c for c in visible if c in state.column_ids))
            if wanted != state.visible_columns:
                # Toggling on appends, so rebuild in saved order
                for column_id in state.visible_columns:
                    self._store.dispatch(ToggleColumnVisibility(column_id))
                for column_id in wanted:
                    self._store.dispatch(ToggleColumnVisibility(column_id))

        pinned = saved.get("pinnedColumns")
        if isinstance(pinned, dict):
            left = list(pinned.get("left") or [])
            right = list(pinned.get("right") or [])
            current = self._store.state.pinned
            if sorted(left) != sorted(current.left) or sorted(right) != sorted(current.right):
                for column_id in current.left + current.right:
                    self._store.dispatch(PinColumn(column_id, PinSide.NONE))
                for column_id in left:
                    self._store.dispatch(PinColumn(column_id, PinSide.LEFT))
                for column_id in right:
                    self._store.dispatch(PinColumn(column_id, PinSide.RIGHT))

    @staticmethod
    def _coerce(enum_cls, value):
        if value is None:
            return None
        try:
            return enum_cls(value)
        except ValueError:
            logger.warning(f"Ignoring saved {enum_cls.__name__} '{value}'")
            return None

    def _on_state_changed(self, old: GridState, new: GridState):
        if not self._hydrated:
            return
        if (
            old.visible_columns is new.visible_columns
            and old.pinned is new.pinned
            and old.density is new.density
            and old.theme is new.theme
        ):
            return

        snapshot = preference_snapshot(new)
        serialized = _serialize(snapshot)
        if serialized == self._last_serialized:
            return

        self._preferences.save(self._key, snapshot)
        self._last_serialized = serialized
        logger.debug(f"Preferences saved to '{self._key}'")
