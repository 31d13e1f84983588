"""
Column descriptor model and the default column set.
"""
from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ColumnKind(str, Enum):
    """Kind of data a column displays."""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    ACTIONS = "actions"


class ColumnDescriptor(BaseModel):
    """
    Metadata governing how a field is displayed, sorted, filtered,
    pinned and resized.

    An ``actions`` column carries no data field, so it is never sortable
    or filterable regardless of the flags passed in.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique, stable column id")
    label: str = Field(..., description="Display label")
    kind: ColumnKind = Field(ColumnKind.TEXT, description="Field kind")
    sortable: bool = True
    filterable: bool = True
    resizable: bool = True
    pinnable: bool = True
    width: int = Field(150, description="Width in pixels")
    min_width: int = Field(50, description="Minimum width in pixels")
    visible: bool = Field(True, description="Visible by default")

    @model_validator(mode="before")
    @classmethod
    def _actions_have_no_data(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("kind") in (ColumnKind.ACTIONS, "actions"):
            data = {**data, "sortable": False, "filterable": False}
        return data

    @property
    def has_data(self) -> bool:
        return self.kind != ColumnKind.ACTIONS


DEFAULT_COLUMNS: tuple[ColumnDescriptor, ...] = (
    ColumnDescriptor(id="id", label="ID", kind=ColumnKind.NUMBER, width=80),
    ColumnDescriptor(id="name", label="Name", kind=ColumnKind.TEXT, width=150),
    ColumnDescriptor(id="email", label="Email", kind=ColumnKind.TEXT, width=200),
    ColumnDescriptor(id="role", label="Role", kind=ColumnKind.SELECT, width=120),
    ColumnDescriptor(id="department", label="Department", kind=ColumnKind.SELECT, width=130),
    ColumnDescriptor(id="salary", label="Salary", kind=ColumnKind.NUMBER, width=120),
    ColumnDescriptor(id="joinDate", label="Join Date", kind=ColumnKind.DATE, width=120),
    ColumnDescriptor(id="status", label="Status", kind=ColumnKind.SELECT, width=100),
    ColumnDescriptor(id="actions", label="Actions", kind=ColumnKind.ACTIONS, width=120),
)
