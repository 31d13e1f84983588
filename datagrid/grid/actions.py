"""
Grid actions - the closed set of transition requests accepted by the store.

Each action carries only the payload its transition needs.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from datagrid.grid.models.column import ColumnDescriptor
from datagrid.grid.models.row import Row
from datagrid.grid.models.specs import (
    Density,
    FilterSpec,
    PinSide,
    SortSpec,
    Theme,
)


@dataclass(frozen=True)
class GridAction:
    """Base class for all grid actions."""


@dataclass(frozen=True)
class SetRows(GridAction):
    rows: Tuple[Row, ...]


@dataclass(frozen=True)
class SetLoading(GridAction):
    loading: bool


@dataclass(frozen=True)
class SetError(GridAction):
    message: Optional[str]


@dataclass(frozen=True)
class SetColumns(GridAction):
    columns: Tuple[ColumnDescriptor, ...]


@dataclass(frozen=True)
class ToggleColumnVisibility(GridAction):
    column_id: str


@dataclass(frozen=True)
class ReorderColumns(GridAction):
    from_index: int
    to_index: int


@dataclass(frozen=True)
class PinColumn(GridAction):
    column_id: str
    side: PinSide


@dataclass(frozen=True)
class ResizeColumn(GridAction):
    column_id: str
    width: int


@dataclass(frozen=True)
class SetSort(GridAction):
    sort: SortSpec


@dataclass(frozen=True)
class SetFilter(GridAction):
    filters: FilterSpec


@dataclass(frozen=True)
class SetSearch(GridAction):
    query: str


@dataclass(frozen=True)
class SelectRow(GridAction):
    key: str


@dataclass(frozen=True)
class SelectAll(GridAction):
    selected: bool


@dataclass(frozen=True)
class SetPagination(GridAction):
    """Shallow merge; fields left as None keep their current value."""
    page: Optional[int] = None
    page_size: Optional[int] = None
    total: Optional[int] = None


@dataclass(frozen=True)
class UpdateRow(GridAction):
    key: str
    patch: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RemoveRow(GridAction):
    key: str


@dataclass(frozen=True)
class SetDensity(GridAction):
    density: Density


@dataclass(frozen=True)
class SetTheme(GridAction):
    theme: Theme
