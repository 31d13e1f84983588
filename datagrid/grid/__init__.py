"""
Grid Module - Headless Data Grid Engine.

An MVVM-compatible grid state engine with:
- Immutable GridState driven by a pure reducer through GridStore
- Sort -> filter -> paginate pipeline with memoization
- O(1) viewport windowing for long row lists
- Swipe pagination, column drag-reorder and resize gestures
- Debounced search, async row loading and persisted preferences

Usage:
    from datagrid.grid import GridViewModel, InMemoryRowSource, generate_mock_rows

    vm = GridViewModel(source=InMemoryRowSource(generate_mock_rows(1000)))
    await vm.load()
    vm.sort_by("salary")
    rows = vm.visible_slice()
"""
from datagrid.grid.models import (
    ColumnDescriptor,
    ColumnKind,
    DEFAULT_COLUMNS,
    Density,
    FilterKind,
    FilterPredicate,
    Pagination,
    PinnedColumns,
    PinSide,
    Row,
    SortDirection,
    SortEntry,
    Theme,
)
from datagrid.grid.state import GridState, initial_state
from datagrid.grid.reducer import reduce
from datagrid.grid.store import GridStore
from datagrid.grid.pipeline import GridPipeline, build_view
from datagrid.grid.windowing import VirtualScroller, Window, compute_window
from datagrid.grid.debounce import Debouncer, SearchBox
from datagrid.grid.data_source import (
    FetchResult,
    InMemoryRowSource,
    RowNotFoundError,
    RowSource,
    RowSourceError,
    generate_mock_rows,
)
from datagrid.grid.loader import GridLoader
from datagrid.grid.preferences import (
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceBridge,
    PreferenceStore,
)
from datagrid.grid.viewmodel import GridViewModel

__all__ = [
    # ViewModel
    "GridViewModel",
    # State
    "GridState",
    "GridStore",
    "initial_state",
    "reduce",
    # Data types
    "ColumnDescriptor",
    "ColumnKind",
    "DEFAULT_COLUMNS",
    "Density",
    "FilterKind",
    "FilterPredicate",
    "Pagination",
    "PinnedColumns",
    "PinSide",
    "Row",
    "SortDirection",
    "SortEntry",
    "Theme",
    # Pipeline
    "GridPipeline",
    "build_view",
    # Virtualization
    "VirtualScroller",
    "Window",
    "compute_window",
    # Input
    "Debouncer",
    "SearchBox",
    # Loading
    "FetchResult",
    "GridLoader",
    "InMemoryRowSource",
    "RowNotFoundError",
    "RowSource",
    "RowSourceError",
    "generate_mock_rows",
    # Preferences
    "JsonFilePreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceBridge",
    "PreferenceStore",
]
