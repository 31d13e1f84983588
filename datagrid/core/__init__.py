"""
Core services shared by the grid engine: configuration, logging and signals.
"""
from datagrid.core.config import AppConfig, ConfigManager, GeneralSettings, GridSettings, ItemHeights
from datagrid.core.events import Signal
from datagrid.core.logging import setup_logging, setup_logging_from

__all__ = [
    "AppConfig",
    "ConfigManager",
    "GeneralSettings",
    "GridSettings",
    "ItemHeights",
    "Signal",
    "setup_logging",
    "setup_logging_from",
]
