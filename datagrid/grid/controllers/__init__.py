"""Pure sort, filter and pagination functions used by the grid pipeline."""
from datagrid.grid.controllers.sort_controller import compare_values, sort_direction_of, sort_rows, toggle_sort
from datagrid.grid.controllers.filter_controller import (
    active_filter_columns,
    filter_rows,
    matches_predicate,
    matches_search,
    set_column_filter,
)
from datagrid.grid.controllers.pagination import (
    clamp_page,
    page_buttons,
    page_for_swipe,
    page_range_label,
    paginate,
    total_pages,
)

__all__ = [
    "compare_values",
    "sort_direction_of",
    "sort_rows",
    "toggle_sort",
    "active_filter_columns",
    "filter_rows",
    "matches_predicate",
    "matches_search",
    "set_column_filter",
    "clamp_page",
    "page_buttons",
    "page_for_swipe",
    "page_range_label",
    "paginate",
    "total_pages",
]
