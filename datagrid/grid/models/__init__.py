from datagrid.grid.models.row import Row, RowId
from datagrid.grid.models.column import ColumnDescriptor, ColumnKind, DEFAULT_COLUMNS
from datagrid.grid.models.specs import (
    Density,
    FilterKind,
    FilterPredicate,
    FilterSpec,
    Pagination,
    PinnedColumns,
    PinSide,
    SortDirection,
    SortEntry,
    SortSpec,
    Theme,
)

__all__ = [
    "Row",
    "RowId",
    "ColumnDescriptor",
    "ColumnKind",
    "DEFAULT_COLUMNS",
    "Density",
    "FilterKind",
    "FilterPredicate",
    "FilterSpec",
    "Pagination",
    "PinnedColumns",
    "PinSide",
    "SortDirection",
    "SortEntry",
    "SortSpec",
    "Theme",
]
