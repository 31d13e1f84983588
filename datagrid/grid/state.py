"""
GridState - immutable snapshot of grid configuration and data.

Transitions never mutate a snapshot; they build a new one with
``dataclasses.replace`` so untouched fields are shared between snapshots.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Optional, Tuple

from datagrid.grid.models.column import ColumnDescriptor, DEFAULT_COLUMNS
from datagrid.grid.models.row import Row
from datagrid.grid.models.specs import (
    Density,
    FilterSpec,
    Pagination,
    PinnedColumns,
    SortSpec,
    Theme,
)


def _empty_filters() -> FilterSpec:
    return MappingProxyType({})


@dataclass(frozen=True)
class GridState:
    """
    Snapshot of everything the grid engine tracks.

    Attributes:
        rows: Loaded row collection (the current server page)
        columns: Ordered column descriptors
        visible_columns: Ids of visible columns, in toggle order
        pinned: Left/right pinned column ids
        sort: Priority-ordered sort entries
        filters: Column id -> predicate (read-only mapping)
        selection: Selected row keys
        pagination: Page, page size and server total
        loading: Fetch in progress
        error: Last fetch error message
        search: Committed search query
        density: Row density
        theme: Colour theme
    """
    rows: Tuple[Row, ...] = ()
    columns: Tuple[ColumnDescriptor, ...] = DEFAULT_COLUMNS
    visible_columns: Tuple[str, ...] = ()
    pinned: PinnedColumns = PinnedColumns()
    sort: SortSpec = ()
    filters: FilterSpec = field(default_factory=_empty_filters)
    selection: frozenset = frozenset()
    pagination: Pagination = Pagination()
    loading: bool = False
    error: Optional[str] = None
    search: str = ""
    density: Density = Density.STANDARD
    theme: Theme = Theme.LIGHT

    @property
    def column_ids(self) -> List[str]:
        return [c.id for c in self.columns]

    @property
    def row_keys(self) -> List[str]:
        return [row.key for row in self.rows]

    def column(self, column_id: str) -> Optional[ColumnDescriptor]:
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    def visible_column_descriptors(self) -> List[ColumnDescriptor]:
        """Visible descriptors in column order (not toggle order)."""
        visible = set(self.visible_columns)
        return [c for c in self.columns if c.id in visible]

    def selected_rows(self) -> List[Row]:
        return [row for row in self.rows if row.key in self.selection]

    @property
    def all_selected(self) -> bool:
        return bool(self.rows) and len(self.selection) == len(self.rows)


def initial_state(
    columns: Optional[Iterable[ColumnDescriptor]] = None,
    page_size: int = 50,
) -> GridState:
    """
    Create the session's starting state.

    Args:
        columns: Column descriptors (defaults to the built-in user columns)
        page_size: Initial page size
    """
    cols = tuple(columns) if columns is not None else DEFAULT_COLUMNS
    return GridState(
        columns=cols,
        visible_columns=tuple(c.id for c in cols if c.visible),
        pagination=Pagination(page=1, page_size=page_size, total=0),
    )
