"""
Row sources - where the grid's rows come from.

``RowSource`` is the interface the engine consumes. ``InMemoryRowSource``
is a per-session, injectable implementation backed by a list of rows,
used for demos and tests in place of a real backend.
"""
import asyncio
import math
import random
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Tuple

from loguru import logger

from datagrid.grid.controllers.pagination import paginate
from datagrid.grid.models.row import Row
from datagrid.grid.models.specs import SortDirection, SortEntry
from datagrid.grid.pipeline import build_view


class RowSourceError(Exception):
    """A row source request failed."""


class RowNotFoundError(RowSourceError):
    """No row exists with the requested key."""


@dataclass(frozen=True)
class FetchResult:
    rows: Tuple[Row, ...]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total / self.page_size)


class RowSource(Protocol):
    """Paginated pull source feeding the grid store."""

    async def fetch(self, page: int, page_size: int, search: str = "") -> FetchResult:
        ...

    async def update(self, key: str, patch: Mapping[str, Any]) -> Row:
        ...

    async def delete(self, key: str) -> None:
        ...


# --- Mock dataset ---

ROLES = ["Developer", "Designer", "Manager", "Analyst", "QA Engineer"]
DEPARTMENTS = ["Engineering", "Design", "Marketing", "Sales", "HR"]
STATUSES = ["active", "inactive"]


def generate_mock_rows(count: int, seed: Optional[int] = 0) -> List[Row]:
    """
    Generate ``count`` user rows with ids 1..count.

    Args:
        count: Number of rows
        seed: Random seed; the same seed always yields the same rows
    """
    rng = random.Random(seed)
    rows = []
    for index in range(count):
        n = index + 1
        joined = date(2020 + rng.randrange(4), rng.randrange(12) + 1, rng.randrange(28) + 1)
        rows.append(Row(id=n, values={
            "name": f"User {n}",
            "email": f"user{n}@example.com",
            "role": rng.choice(ROLES),
            "department": rng.choice(DEPARTMENTS),
            "salary": rng.randrange(100000) + 40000,
            "joinDate": joined.isoformat(),
            "status": rng.choice(STATUSES),
            "avatar": f"https://api.dicebear.com/7.x/avataaars/svg?seed={n}",
        }))
    return rows


class InMemoryRowSource:
    """
    Row source over an in-memory list, with optional simulated latency.

    Example:
        source = InMemoryRowSource(generate_mock_rows(1000), latency_ms=500)
        result = await source.fetch(page=1, page_size=50, search="eng")
    """

    def __init__(self, rows: Iterable[Row] = (), latency_ms: float = 0):
        self._rows: List[Row] = list(rows)
        self.latency_ms = latency_ms

    @property
    def rows(self) -> List[Row]:
        return list(self._rows)

    async def _delay(self, ms: float):
        if ms > 0:
            await asyncio.sleep(ms / 1000.0)

    def _index_of(self, key: str) -> int:
        for index, row in enumerate(self._rows):
            if row.key == key:
                return index
        raise RowNotFoundError(f"Row not found: {key}")

    async def fetch(
        self,
        page: int,
        page_size: int,
        search: str = "",
        sort_by: Optional[str] = None,
        sort_order: SortDirection = SortDirection.ASCENDING,
    ) -> FetchResult:
        """
        Fetch one page, searching and optionally sorting server-side.

        Returns:
            FetchResult with the page's rows and the total match count
        """
        await self._delay(self.latency_ms)

        sort = (SortEntry(sort_by, SortDirection(sort_order)),) if sort_by else ()
        matches = build_view(self._rows, sort, {}, search)
        rows = tuple(paginate(matches, page, page_size))
        logger.debug(f"Fetched page {page} ({len(rows)} of {len(matches)} rows)")
        return FetchResult(rows=rows, total=len(matches), page=page, page_size=page_size)

    async def update(self, key: str, patch: Mapping[str, Any]) -> Row:
        await self._delay(self.latency_ms)
        index = self._index_of(key)
        self._rows[index] = self._rows[index].patched(patch)
        return self._rows[index]

    async def delete(self, key: str) -> None:
        await self._delay(self.latency_ms)
        del self._rows[self._index_of(key)]
