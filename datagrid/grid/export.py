"""
CSV/JSON export of grid rows, plus the column-reset helper used by the
column manager.
"""
import csv
import io
import json
from pathlib import Path
from typing import Iterable, List, Union

from loguru import logger

from datagrid.grid.actions import ToggleColumnVisibility
from datagrid.grid.models.column import ColumnDescriptor
from datagrid.grid.models.row import Row
from datagrid.grid.state import GridState


def data_columns(columns: Iterable[ColumnDescriptor]) -> List[str]:
    """Ids of columns that carry data (``actions`` columns are skipped)."""
    return [c.id for c in columns if c.has_data]


def export_csv(rows: Iterable[Row], columns: Iterable[ColumnDescriptor]) -> str:
    """Render rows as CSV with one header line of column ids."""
    fields = data_columns(columns)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fields, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({name: "" if value is None else value for name, value in row.to_record(fields).items()})
    return buffer.getvalue()


def export_json(rows: Iterable[Row], columns: Iterable[ColumnDescriptor]) -> str:
    """Render rows as a JSON array of objects keyed by column id."""
    fields = data_columns(columns)
    return json.dumps([row.to_record(fields) for row in rows], indent=2, default=str)


def write_export(path: Union[str, Path], content: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info(f"Exported {path}")
    return path


def selected_rows(state: GridState) -> List[Row]:
    """Rows picked by the bulk-actions export: the selected loaded rows."""
    return state.selected_rows()


def visible_export_rows(state: GridState) -> List[Row]:
    """Rows picked by the column-manager export: every loaded row."""
    return list(state.rows)


def export_selected(state: GridState, fmt: str = "csv") -> str:
    """Export the selected loaded rows with every data column."""
    return _render(selected_rows(state), state.columns, fmt)


def export_visible(state: GridState, fmt: str = "csv") -> str:
    """Export all loaded rows restricted to the visible columns, in toggle order."""
    columns = [state.column(c) for c in state.visible_columns]
    return _render(visible_export_rows(state), [c for c in columns if c is not None], fmt)


def _render(rows, columns, fmt: str) -> str:
    if fmt == "csv":
        return export_csv(rows, columns)
    if fmt == "json":
        return export_json(rows, columns)
    raise ValueError(f"Unsupported export format: {fmt}")


def default_visible_columns(state: GridState) -> List[str]:
    return [c.id for c in state.columns if c.visible]


def reset_visibility_actions(state: GridState) -> List[ToggleColumnVisibility]:
    """Toggles that bring column visibility back to the descriptors' defaults."""
    defaults = set(default_visible_columns(state))
    visible = set(state.visible_columns)
    return [
        ToggleColumnVisibility(c.id)
        for c in state.columns
        if (c.id in defaults) != (c.id in visible)
    ]
