"""
Filter functions for the grid pipeline.

Supports a flat free-text search across every field and one predicate per
column. Both passes combine with AND.
"""
import math
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional

from datagrid.grid.models.row import Row
from datagrid.grid.models.specs import FilterKind, FilterPredicate, FilterSpec


_NOT_A_NUMBER = math.nan


def _to_number(value: Any) -> float:
    """Coerce to float; anything non-numeric becomes NaN, which never compares true."""
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return _NOT_A_NUMBER
    return _NOT_A_NUMBER


_TEXT_KINDS = (FilterKind.CONTAINS, FilterKind.STARTS_WITH, FilterKind.ENDS_WITH)


def _text(value: Any) -> str:
    return str(value).casefold()


def matches_search(row: Row, query: str) -> bool:
    """
    Check if any field of the row (id included) contains the query.

    Args:
        row: Row to test
        query: Search text (case-insensitive)

    Returns:
        True if the query is empty or found in any field
    """
    if not query:
        return True
    needle = query.casefold()
    return any(value is not None and needle in _text(value) for value in row.iter_values())


def matches_predicate(value: Any, predicate: FilterPredicate) -> bool:
    """Evaluate one column predicate against a field value."""
    kind = predicate.kind
    operand = predicate.operand

    if kind in _TEXT_KINDS and value is None:
        return False
    if kind == FilterKind.CONTAINS:
        return _text(operand) in _text(value)
    if kind == FilterKind.STARTS_WITH:
        return _text(value).startswith(_text(operand))
    if kind == FilterKind.ENDS_WITH:
        return _text(value).endswith(_text(operand))
    if kind == FilterKind.EQUALS:
        if value == operand:
            return True
        # Operands typed into a text box arrive as strings
        return (
            isinstance(operand, str)
            and value is not None
            and not isinstance(value, str)
            and str(value) == operand
        )
    if kind == FilterKind.GREATER_THAN:
        return _to_number(value) > _to_number(operand)
    if kind == FilterKind.LESS_THAN:
        return _to_number(value) < _to_number(operand)
    return True


def filter_rows(rows: Iterable[Row], filter_spec: FilterSpec, search_query: str = "") -> List[Row]:
    """
    Apply search, then column filters.

    Args:
        rows: Rows to filter (order is preserved)
        filter_spec: Column id -> predicate
        search_query: Free-text query; empty disables the search pass

    Returns:
        Filtered list
    """
    result = list(rows)

    if search_query:
        result = [row for row in result if matches_search(row, search_query)]

    for column_id, predicate in filter_spec.items():
        result = [
            row for row in result
            if matches_predicate(row.get_field(column_id), predicate)
        ]

    return result


def is_empty_operand(operand: Any) -> bool:
    return operand is None or (isinstance(operand, str) and operand == "")


def set_column_filter(
    filter_spec: FilterSpec,
    column_id: str,
    operand: Any,
    kind: FilterKind = FilterKind.CONTAINS,
) -> Mapping[str, FilterPredicate]:
    """
    Next filter specification after editing a column's filter input.

    An empty operand removes the column's entry; anything else replaces it.
    """
    updated = dict(filter_spec)
    if is_empty_operand(operand):
        updated.pop(column_id, None)
    else:
        updated[column_id] = FilterPredicate(kind, operand)
    return MappingProxyType(updated)


def active_filter_columns(filter_spec: FilterSpec, search_query: Optional[str] = None) -> List[str]:
    """Names of active filters, with "search" first when a query is set."""
    names = list(filter_spec.keys())
    if search_query:
        names.insert(0, "search")
    return names
