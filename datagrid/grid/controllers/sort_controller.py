"""
Sort functions for the grid pipeline.

Multi-key, stable sorting of rows by a priority-ordered sort specification,
plus the header-click toggle that produces the next specification.
"""
from datetime import date, datetime, time
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Optional

from datagrid.grid.models.column import ColumnDescriptor, ColumnKind
from datagrid.grid.models.row import Row
from datagrid.grid.models.specs import SortDirection, SortEntry, SortSpec


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float))


def _as_date(value: Any) -> Any:
    """Parse ISO date strings so date columns order chronologically."""
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            return value
    return value


def _as_datetime(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return value


def _compare_text(a: str, b: str) -> int:
    folded_a, folded_b = a.casefold(), b.casefold()
    if folded_a != folded_b:
        return -1 if folded_a < folded_b else 1
    return -1 if a < b else (1 if a > b else 0)


def compare_values(a: Any, b: Any, kind: Optional[ColumnKind] = None) -> int:
    """
    Compare two field values, returning -1, 0 or 1.

    Text compares case-insensitively first, numbers by difference and
    dates chronologically. Values of mismatched or unknown types compare
    equal so they keep their relative order.
    """
    if kind == ColumnKind.DATE:
        a, b = _as_date(a), _as_date(b)

    if isinstance(a, str) and isinstance(b, str):
        return _compare_text(a, b)
    if _is_number(a) and _is_number(b):
        return _sign(a - b)
    if isinstance(a, date) and isinstance(b, date):
        a, b = _as_datetime(a), _as_datetime(b)
        if (a.tzinfo is None) != (b.tzinfo is None):
            return 0
        return _sign((a - b).total_seconds())
    return 0


def sort_rows(
    rows: Iterable[Row],
    sort_spec: SortSpec,
    columns: Optional[Iterable[ColumnDescriptor]] = None,
) -> List[Row]:
    """
    Sort rows by a multi-key specification.

    Args:
        rows: Rows to sort
        sort_spec: (column, direction) entries, primary key first
        columns: Optional descriptors; date columns parse ISO strings

    Returns:
        New list. Rows equal under every key keep their original order.
    """
    if not sort_spec:
        return list(rows)

    kinds: Dict[str, ColumnKind] = {c.id: c.kind for c in columns} if columns else {}

    def compare(a: Row, b: Row) -> int:
        for entry in sort_spec:
            result = compare_values(
                a.get_field(entry.column_id),
                b.get_field(entry.column_id),
                kinds.get(entry.column_id),
            )
            if result:
                return -result if entry.descending else result
        return 0

    # sorted() is stable, which preserves input order for ties
    return sorted(rows, key=cmp_to_key(compare))


def sort_direction_of(sort_spec: SortSpec, column_id: str) -> Optional[SortDirection]:
    """Direction of ``column_id`` in the specification, or None if unsorted."""
    for entry in sort_spec:
        if entry.column_id == column_id:
            return entry.direction
    return None


def toggle_sort(sort_spec: SortSpec, column_id: str) -> SortSpec:
    """
    Next specification after clicking a column header.

    Absent columns are appended ascending, ascending flips to descending
    in place, and descending is removed.
    """
    current = sort_direction_of(sort_spec, column_id)
    if current is None:
        return tuple(sort_spec) + (SortEntry(column_id, SortDirection.ASCENDING),)
    if current == SortDirection.ASCENDING:
        return tuple(
            SortEntry(column_id, SortDirection.DESCENDING) if e.column_id == column_id else e
            for e in sort_spec
        )
    return tuple(e for e in sort_spec if e.column_id != column_id)
