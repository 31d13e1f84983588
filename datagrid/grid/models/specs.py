"""
Value types for grid configuration: sort, filter, pinning, pagination,
density and theme.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Tuple


class SortDirection(str, Enum):
    """Sort direction."""
    ASCENDING = "asc"
    DESCENDING = "desc"


class FilterKind(str, Enum):
    """Predicate applied by a column filter."""
    CONTAINS = "contains"
    EQUALS = "equals"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


class PinSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


class Density(str, Enum):
    COMPACT = "compact"
    STANDARD = "standard"
    COMFORTABLE = "comfortable"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class SortEntry:
    """One (column, direction) pair of a sort specification."""
    column_id: str
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESCENDING


@dataclass(frozen=True)
class FilterPredicate:
    """Single-field predicate; one per column in a filter specification."""
    kind: FilterKind
    operand: Any


SortSpec = Tuple[SortEntry, ...]
FilterSpec = Mapping[str, FilterPredicate]


@dataclass(frozen=True)
class PinnedColumns:
    """
    Left- and right-pinned column ids.

    The two sides are kept disjoint by the pin transition.
    """
    left: Tuple[str, ...] = ()
    right: Tuple[str, ...] = ()

    def side_of(self, column_id: str) -> PinSide:
        if column_id in self.left:
            return PinSide.LEFT
        if column_id in self.right:
            return PinSide.RIGHT
        return PinSide.NONE


@dataclass(frozen=True)
class Pagination:
    """Current page (1-based), page size and server-reported total."""
    page: int = 1
    page_size: int = 50
    total: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total / self.page_size)

    @property
    def is_last_page(self) -> bool:
        return self.page >= self.total_pages
