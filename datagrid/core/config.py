from typing import Any, Dict, List
import json
import os
from pydantic import BaseModel, Field
from loguru import logger
from .events import Signal


# --- Grid Settings Models ---
class ItemHeights(BaseModel):
    pointer: int
    touch: int


def _default_item_heights() -> Dict[str, ItemHeights]:
    return {
        "compact": ItemHeights(pointer=32, touch=36),
        "standard": ItemHeights(pointer=44, touch=48),
        "comfortable": ItemHeights(pointer=56, touch=64),
    }


class GridSettings(BaseModel):
    page_size: int = 50
    page_size_options: List[int] = Field(default_factory=lambda: [25, 50, 100, 200])
    search_debounce_ms: int = 300
    swipe_min_distance: float = 50
    swipe_max_duration_ms: float = 300
    # Touch scrolling carries momentum, so it renders further ahead
    overscan_touch: int = 5
    overscan_pointer: int = 3
    container_height_touch: int = 400
    container_height_pointer: int = 500
    item_heights: Dict[str, ItemHeights] = Field(default_factory=_default_item_heights)
    min_column_width: int = 50
    default_column_width: int = 150
    preference_key: str = "dataGridPreferences"


class GeneralSettings(BaseModel):
    debug_mode: bool = True
    log_dir: str = "logs"
    theme: str = "light"


class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    grid: GridSettings = Field(default_factory=GridSettings)


# --- Manager ---
class ConfigManager:
    """
    Manages application configuration with persistence and reactivity.
    """
    def __init__(self, filepath: str = "config.json"):
        self.filepath = filepath
        self._data = AppConfig()
        self.on_changed = Signal("ConfigChanged")
        self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if not hasattr(self._data, section):
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if not hasattr(section_obj, key):
            raise ValueError(f"Invalid key: {key} in section {section}")

        updated = section_obj.model_validate({**section_obj.model_dump(), key: value})
        setattr(self._data, section, updated)
        self._save()
        self.on_changed.emit(section, key, getattr(updated, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = AppConfig.model_validate(raw)
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
                self._save()
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if self.filepath.endswith('.toml'):
            # tomllib is read-only; TOML configs are edited by hand
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
