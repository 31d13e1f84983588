"""
Derived-view pipeline: rows + configuration -> rows to display.

The order is fixed: sort, then filter/search, then paginate. Sorting first
means filtered-out rows never influence how surviving ties are ordered, and
paginating last puts page boundaries on the final view.
"""
from typing import Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from datagrid.grid.controllers.filter_controller import filter_rows
from datagrid.grid.controllers.pagination import paginate
from datagrid.grid.controllers.sort_controller import sort_rows
from datagrid.grid.models.column import ColumnDescriptor
from datagrid.grid.models.row import Row
from datagrid.grid.models.specs import FilterSpec, SortSpec
from datagrid.grid.state import GridState


def build_view(
    rows: Iterable[Row],
    sort: SortSpec,
    filters: FilterSpec,
    search: str = "",
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    columns: Optional[Iterable[ColumnDescriptor]] = None,
) -> List[Row]:
    """
    Run the full pipeline once, without memoization.

    Pagination is applied only when both ``page`` and ``page_size`` are given.
    """
    result = sort_rows(rows, sort, columns)
    result = filter_rows(result, filters, search)
    if page is not None and page_size is not None:
        result = paginate(result, page, page_size)
    return result


class GridPipeline:
    """
    Memoizes the sorted and filtered view of a GridState.

    The cache key is (rows, sort, filters, search, column kinds). Rows are
    compared by identity, which holds because the store shares the rows
    tuple between snapshots until rows actually change; the specifications
    are compared by value.

    Example:
        pipeline = GridPipeline()
        rows = pipeline.process(store.state)
        page = pipeline.page(store.state)
    """

    def __init__(self):
        self._rows: Optional[Sequence[Row]] = None
        self._key: Optional[tuple] = None
        self._result: Tuple[Row, ...] = ()
        self.recompute_count = 0

    def process(self, state: GridState) -> Tuple[Row, ...]:
        """
        Sorted and filtered rows for ``state`` (not paginated).

        Returns:
            Cached tuple when none of the inputs changed
        """
        kinds = tuple((c.id, c.kind) for c in state.columns)
        key = (state.sort, dict(state.filters), state.search, kinds)
        if self._rows is state.rows and self._key == key:
            return self._result

        self._result = tuple(build_view(state.rows, state.sort, state.filters, state.search, columns=state.columns))
        self._rows = state.rows
        self._key = key
        self.recompute_count += 1
        logger.debug(f"Pipeline recomputed: {len(state.rows)} → {len(self._result)} rows")
        return self._result

    def page(self, state: GridState) -> List[Row]:
        """Processed rows sliced to the state's current page."""
        return paginate(self.process(state), state.pagination.page, state.pagination.page_size)

    def invalidate(self):
        self._rows = None
        self._key = None
        self._result = ()
