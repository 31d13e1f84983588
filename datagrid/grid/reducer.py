"""
Grid reducer - pure ``(state, action) -> state`` transition function.

Handlers are registered per action type. Every transition is total: an
unknown action, column id or row key leaves the state untouched instead of
raising. A transition that changes nothing returns the same snapshot
object, so callers can detect change with ``is``.
"""
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Callable, Dict, Type

from loguru import logger

from datagrid.grid.actions import (
    GridAction,
    PinColumn,
    RemoveRow,
    ReorderColumns,
    ResizeColumn,
    SelectAll,
    SelectRow,
    SetColumns,
    SetDensity,
    SetError,
    SetFilter,
    SetLoading,
    SetPagination,
    SetRows,
    SetSearch,
    SetSort,
    SetTheme,
    ToggleColumnVisibility,
    UpdateRow,
)
from datagrid.grid.models.specs import Pagination, PinnedColumns, PinSide
from datagrid.grid.state import GridState


Handler = Callable[[GridState, Any], GridState]
_HANDLERS: Dict[Type[GridAction], Handler] = {}


def handles(action_cls: Type[GridAction]) -> Callable[[Handler], Handler]:
    """Register the decorated function as the transition for ``action_cls``."""
    def register(fn: Handler) -> Handler:
        _HANDLERS[action_cls] = fn
        return fn
    return register


def _update(state: GridState, **changes: Any) -> GridState:
    """``dataclasses.replace`` that returns ``state`` itself when nothing differs."""
    if all(getattr(state, name) == value for name, value in changes.items()):
        return state
    return replace(state, **changes)


def reduce(state: GridState, action: GridAction) -> GridState:
    """
    Apply one action to a state snapshot.

    Args:
        state: Current snapshot
        action: Transition request

    Returns:
        New snapshot, or ``state`` when the action changes nothing
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.warning(f"No grid transition registered for {type(action).__name__}")
        return state
    return handler(state, action)


# --- Data & status ---

@handles(SetRows)
def _set_rows(state: GridState, action: SetRows) -> GridState:
    return _update(state, rows=tuple(action.rows))


@handles(SetLoading)
def _set_loading(state: GridState, action: SetLoading) -> GridState:
    return _update(state, loading=bool(action.loading))


@handles(SetError)
def _set_error(state: GridState, action: SetError) -> GridState:
    return _update(state, error=action.message)


@handles(UpdateRow)
def _update_row(state: GridState, action: UpdateRow) -> GridState:
    for index, row in enumerate(state.rows):
        if row.key == action.key:
            rows = list(state.rows)
            rows[index] = row.patched(action.patch)
            return _update(state, rows=tuple(rows))
    return state


@handles(RemoveRow)
def _remove_row(state: GridState, action: RemoveRow) -> GridState:
    rows = tuple(row for row in state.rows if row.key != action.key)
    if len(rows) == len(state.rows):
        return state
    return _update(state, rows=rows, selection=state.selection - {action.key})


# --- Columns ---

@handles(SetColumns)
def _set_columns(state: GridState, action: SetColumns) -> GridState:
    return _update(state, columns=tuple(action.columns))


@handles(ToggleColumnVisibility)
def _toggle_visibility(state: GridState, action: ToggleColumnVisibility) -> GridState:
    column_id = action.column_id
    if column_id in state.visible_columns:
        return _update(
            state,
            visible_columns=tuple(c for c in state.visible_columns if c != column_id),
        )
    if column_id not in state.column_ids:
        return state
    return _update(state, visible_columns=state.visible_columns + (column_id,))


@handles(ReorderColumns)
def _reorder_columns(state: GridState, action: ReorderColumns) -> GridState:
    columns = list(state.columns)
    # Indices are validated by the caller; an unknown source index moves nothing
    if not -len(columns) <= action.from_index < len(columns):
        return state
    moved = columns.pop(action.from_index)
    columns.insert(action.to_index, moved)
    return _update(state, columns=tuple(columns))


@handles(PinColumn)
def _pin_column(state: GridState, action: PinColumn) -> GridState:
    column_id = action.column_id
    left = tuple(c for c in state.pinned.left if c != column_id)
    right = tuple(c for c in state.pinned.right if c != column_id)
    if action.side == PinSide.LEFT:
        left += (column_id,)
    elif action.side == PinSide.RIGHT:
        right += (column_id,)
    return _update(state, pinned=PinnedColumns(left=left, right=right))


@handles(ResizeColumn)
def _resize_column(state: GridState, action: ResizeColumn) -> GridState:
    columns = tuple(
        c.model_copy(update={"width": action.width}) if c.id == action.column_id else c
        for c in state.columns
    )
    return _update(state, columns=columns)


# --- Sort / filter / search ---

@handles(SetSort)
def _set_sort(state: GridState, action: SetSort) -> GridState:
    seen = set()
    entries = []
    for entry in action.sort:
        if entry.column_id not in seen:
            seen.add(entry.column_id)
            entries.append(entry)
    return _update(state, sort=tuple(entries))


@handles(SetFilter)
def _set_filter(state: GridState, action: SetFilter) -> GridState:
    return _update(state, filters=MappingProxyType(dict(action.filters)))


@handles(SetSearch)
def _set_search(state: GridState, action: SetSearch) -> GridState:
    return _update(state, search=action.query or "")


# --- Selection ---

@handles(SelectRow)
def _select_row(state: GridState, action: SelectRow) -> GridState:
    key = action.key
    if key in state.selection:
        return _update(state, selection=state.selection - {key})
    if key not in state.row_keys:
        return state
    return _update(state, selection=state.selection | {key})


@handles(SelectAll)
def _select_all(state: GridState, action: SelectAll) -> GridState:
    selection = frozenset(state.row_keys) if action.selected else frozenset()
    return _update(state, selection=selection)


# --- Pagination ---

@handles(SetPagination)
def _set_pagination(state: GridState, action: SetPagination) -> GridState:
    current = state.pagination
    page = current.page if action.page is None else action.page
    page_size = current.page_size if action.page_size is None else action.page_size
    total = current.total if action.total is None else action.total

    # A new page size invalidates the current page; start again from page 1
    if action.page is None and page_size != current.page_size:
        page = 1

    return _update(
        state,
        pagination=Pagination(page=max(1, page), page_size=page_size, total=total),
    )


# --- Presentation ---

@handles(SetDensity)
def _set_density(state: GridState, action: SetDensity) -> GridState:
    return _update(state, density=action.density)


@handles(SetTheme)
def _set_theme(state: GridState, action: SetTheme) -> GridState:
    return _update(state, theme=action.theme)
