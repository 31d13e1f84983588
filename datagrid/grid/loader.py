"""
GridLoader - moves rows from a RowSource into a GridStore.

Fetches are asynchronous and superseded by arrival order: a response that
lands after a newer request was issued is discarded.
"""
from typing import Any, Mapping, Optional

from loguru import logger

from datagrid.grid.actions import RemoveRow, SetError, SetLoading, SetPagination, SetRows, UpdateRow
from datagrid.grid.data_source import RowSource
from datagrid.grid.models.row import Row
from datagrid.grid.store import GridStore


class GridLoader:
    """
    Loads pages into the store and forwards row edits to the source.

    A failed fetch records an error message and clears the loading flag;
    the previously loaded rows and pagination stay as they were, so the
    same view can be retried. There is no automatic retry.

    Example:
        loader = GridLoader(store, InMemoryRowSource(generate_mock_rows(1000)))
        await loader.load()               # current page/size/search
        await loader.load(page=2)
    """

    ERROR_MESSAGE = "Failed to load data"

    def __init__(self, store: GridStore, source: RowSource):
        self._store = store
        self._source = source
        self._request_seq = 0

    @property
    def source(self) -> RowSource:
        return self._source

    @property
    def latest_request(self) -> int:
        return self._request_seq

    async def load(
        self,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        search: Optional[str] = None,
    ) -> bool:
        """
        Fetch a page and apply it to the store.

        Arguments left as None use the store's current values.

        Returns:
            True if the result was applied, False on failure or when a
            newer request superseded this one
        """
        state = self._store.state
        page = state.pagination.page if page is None else page
        page_size = state.pagination.page_size if page_size is None else page_size
        search = state.search if search is None else search

        self._request_seq += 1
        request = self._request_seq
        self._store.dispatch(SetLoading(True))

        try:
            result = await self._source.fetch(page, page_size, search)
        except Exception as e:
            if request != self._request_seq:
                logger.debug(f"Ignoring failure of superseded request #{request}: {e}")
                return False
            logger.error(f"Failed to load page {page}: {e}")
            self._store.dispatch(SetError(self.ERROR_MESSAGE))
            return False
        else:
            if request != self._request_seq:
                logger.debug(f"Discarding stale response for request #{request}")
                return False

            self._store.dispatch_all([
                SetError(None),
                SetRows(result.rows),
                SetPagination(page=result.page, page_size=result.page_size, total=result.total),
            ])
            logger.debug(f"Loaded page {result.page}/{result.total_pages} ({result.total} rows total)")
            return True
        finally:
            # Also runs on cancellation; a newer request owns the flag otherwise
            if request == self._request_seq:
                self._store.dispatch(SetLoading(False))

    async def update_row(self, key: str, patch: Mapping[str, Any]) -> Row:
        """
        Persist an edit through the source, then merge it into the store.

        Raises:
            RowSourceError: If the source rejects the update
        """
        try:
            updated = await self._source.update(key, patch)
        except Exception as e:
            logger.error(f"Failed to update row {key}: {e}")
            raise
        self._store.dispatch(UpdateRow(key, dict(updated.values)))
        return updated

    async def delete_row(self, key: str) -> None:
        """
        Delete a row through the source, then remove it from the store.

        Raises:
            RowSourceError: If the source rejects the deletion
        """
        try:
            await self._source.delete(key)
        except Exception as e:
            logger.error(f"Failed to delete row {key}: {e}")
            raise
        self._store.dispatch(RemoveRow(key))
