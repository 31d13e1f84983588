"""
Row Data Model.

Pydantic model for one record of the displayed dataset. Rows are frozen;
edits produce a new Row through ``patched``.
"""
from typing import Any, Dict, Iterator, Mapping, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


RowId = Union[int, str]


class Row(BaseModel):
    """
    Data model for a single grid row.

    Attributes:
        id: Stable unique identifier (string or integer)
        values: Named field values (text, number, date or enumerated text)

    Example:
        row = Row(id=7, values={"name": "User 7", "salary": 52000})
        row.get_field("salary")  # 52000
        row.key                  # "7"
    """
    model_config = ConfigDict(frozen=True)

    id: RowId = Field(..., description="Unique identifier")
    values: Dict[str, Any] = Field(default_factory=dict, description="Field values")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Row":
        """Build a Row from a flat mapping holding an ``id`` key."""
        values = {k: v for k, v in record.items() if k != "id"}
        return cls(id=record["id"], values=values)

    @property
    def key(self) -> str:
        """Identifier as a string, the form used by selection."""
        return str(self.id)

    def get_field(self, field_name: str) -> Any:
        """
        Get field value by name for sorting and filtering.

        Args:
            field_name: Name of field to retrieve ("id" included)

        Returns:
            Field value or None if not found
        """
        if field_name == "id":
            return self.id
        return self.values.get(field_name)

    def iter_values(self) -> Iterator[Any]:
        """Yield the identifier followed by every field value."""
        yield self.id
        yield from self.values.values()

    def patched(self, patch: Mapping[str, Any]) -> "Row":
        """
        Return a copy with ``patch`` merged into the field values.

        The identifier is never patched.
        """
        merged = dict(self.values)
        merged.update({k: v for k, v in patch.items() if k != "id"})
        return self.model_copy(update={"values": merged})

    def to_record(self, fields: Optional[list[str]] = None) -> Dict[str, Any]:
        """Flatten to a plain dict, optionally restricted to ``fields``."""
        if fields is None:
            return {"id": self.id, **self.values}
        return {name: self.get_field(name) for name in fields}
