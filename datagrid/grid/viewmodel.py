"""
GridViewModel - MVVM ViewModel for the data grid.

Wires the store, pipeline, windowing, gestures, search debounce, loader and
preference bridge together and exposes Qt signals for a view to bind to.
The view model never renders anything itself.
"""
from typing import Callable, Iterable, List, Optional, Tuple

from PySide6.QtCore import QObject, QTimer, Signal
from loguru import logger

from datagrid.core.clock import monotonic_ms
from datagrid.core.config import GridSettings
from datagrid.grid.actions import (
    PinColumn,
    ReorderColumns,
    ResizeColumn,
    SelectAll,
    SelectRow,
    SetDensity,
    SetFilter,
    SetPagination,
    SetSort,
    SetTheme,
    ToggleColumnVisibility,
    UpdateRow,
)
from datagrid.grid.controllers.filter_controller import set_column_filter
from datagrid.grid.controllers.pagination import page_for_swipe
from datagrid.grid.controllers.sort_controller import toggle_sort
from datagrid.grid.data_source import RowSource
from datagrid.grid.debounce import SearchBox
from datagrid.grid.export import reset_visibility_actions
from datagrid.grid.gestures.drag_reorder import DragReorderTracker
from datagrid.grid.gestures.resize import ColumnResizeTracker
from datagrid.grid.gestures.swipe import SwipeDetector
from datagrid.grid.loader import GridLoader
from datagrid.grid.models.column import ColumnDescriptor
from datagrid.grid.models.row import Row
from datagrid.grid.models.specs import Density, FilterKind, PinSide, Theme
from datagrid.grid.pipeline import GridPipeline
from datagrid.grid.preferences import PreferenceBridge, PreferenceStore
from datagrid.grid.state import GridState, initial_state
from datagrid.grid.store import GridStore
from datagrid.grid.windowing import (
    VirtualScroller,
    Window,
    container_height_for,
    item_height_for,
    overscan_for,
)


class GridViewModel(QObject):
    """
    ViewModel for the data grid.

    Signals:
        stateChanged(GridState): any store change
        processedRowsChanged(list): sorted/filtered rows changed
        windowChanged(Window): rendered index range changed
        pageChanged(int): current page changed
        reloadRequested(): page, page size or search changed; the host
            should ``await vm.load()``

    Example:
        vm = GridViewModel(source=InMemoryRowSource(generate_mock_rows(1000)))
        vm.reloadRequested.connect(lambda: asyncio.ensure_future(vm.load()))
        await vm.load()
        vm.sort_by("salary")
        rows = vm.visible_slice()
    """

    stateChanged = Signal(object)
    processedRowsChanged = Signal(list)
    windowChanged = Signal(object)
    pageChanged = Signal(int)
    reloadRequested = Signal()

    def __init__(
        self,
        source: Optional[RowSource] = None,
        preferences: Optional[PreferenceStore] = None,
        settings: Optional[GridSettings] = None,
        columns: Optional[Iterable[ColumnDescriptor]] = None,
        touch: bool = False,
        clock: Callable[[], float] = monotonic_ms,
    ):
        super().__init__()
        self.settings = settings or GridSettings()
        self._touch = touch

        self.store = GridStore(initial_state(columns, page_size=self.settings.page_size))
        self.pipeline = GridPipeline()
        self.scroller = VirtualScroller.for_density(self.store.state.density, touch, self.settings)
        self.swipe = SwipeDetector(clock, self.settings)
        self.drag = DragReorderTracker()
        self.resizer = ColumnResizeTracker(settings=self.settings)
        self.search_box = SearchBox(self.store, self.settings.search_debounce_ms, clock)

        # Deferred search commit
        self._search_timer = QTimer(self)
        self._search_timer.setSingleShot(True)
        self._search_timer.setInterval(int(self.settings.search_debounce_ms))
        self._search_timer.timeout.connect(self._commit_search)

        self.loader = GridLoader(self.store, source) if source is not None else None

        self._rows: Tuple[Row, ...] = self.pipeline.process(self.store.state)
        self._window: Window = self.scroller.window(len(self._rows))
        self.store.subscribe(self._on_state_changed)

        self.preferences: Optional[PreferenceBridge] = None
        if preferences is not None:
            self.preferences = PreferenceBridge(self.store, preferences, self.settings.preference_key)
            self.preferences.hydrate()

    # --- State ---

    @property
    def state(self) -> GridState:
        return self.store.state

    @property
    def touch(self) -> bool:
        return self._touch

    def _on_state_changed(self, old: GridState, new: GridState):
        if new.density != old.density:
            self.scroller.configure(item_height=item_height_for(new.density, self._touch, self.settings))

        self.stateChanged.emit(new)

        rows = self.pipeline.process(new)
        if rows is not self._rows:
            self._rows = rows
            self.processedRowsChanged.emit(list(rows))
        self._refresh_window()

        if new.pagination.page != old.pagination.page:
            self.pageChanged.emit(new.pagination.page)
        if (
            new.pagination.page != old.pagination.page
            or new.pagination.page_size != old.pagination.page_size
            or new.search != old.search
        ):
            self.reloadRequested.emit()

    def _refresh_window(self) -> Window:
        window = self.scroller.window(len(self._rows))
        if window != self._window:
            self._window = window
            self.windowChanged.emit(window)
        return window

    # --- Derived view ---

    def processed_rows(self) -> List[Row]:
        return list(self._rows)

    def visible_slice(self) -> List[Row]:
        """Rows inside the current window, ready to render."""
        return self._window.slice(self._rows)

    @property
    def window(self) -> Window:
        return self._window

    def visible_columns(self) -> List[ColumnDescriptor]:
        return self.state.visible_column_descriptors()

    def column_layout(self) -> Tuple[List[ColumnDescriptor], List[ColumnDescriptor], List[ColumnDescriptor]]:
        """Visible columns split into (left-pinned, unpinned, right-pinned)."""
        pinned = self.state.pinned
        visible = {c.id: c for c in self.visible_columns()}
        left = [visible[c] for c in pinned.left if c in visible]
        right = [visible[c] for c in pinned.right if c in visible]
        center = [c for c in visible.values() if c.id not in pinned.left and c.id not in pinned.right]
        return left, center, right

    # --- Scrolling ---

    def on_scroll(self, offset: float) -> Window:
        self.scroller.on_scroll(offset)
        return self._refresh_window()

    def set_touch_mode(self, touch: bool):
        """Switch between touch and pointer sizing (row height, container, overscan)."""
        if touch == self._touch:
            return
        self._touch = touch
        self.scroller.configure(
            item_height=item_height_for(self.state.density, touch, self.settings),
            container_height=container_height_for(touch, self.settings),
            overscan=overscan_for(touch, self.settings),
        )
        self._refresh_window()

    # --- Swipe pagination ---

    def touch_start(self, x: float, y: float):
        self.swipe.press(x, y)

    def touch_move(self, x: float, y: float):
        self.swipe.move(x, y)

    def handle_swipe_release(self) -> Optional[int]:
        """
        Finish a touch; a horizontal swipe turns the page.

        Returns:
            The new page number, or None if no navigation happened
        """
        result = self.swipe.release()
        if result is None:
            return None
        page = page_for_swipe(result.direction, self.state.pagination)
        if page is not None:
            self.store.dispatch(SetPagination(page=page))
        return page

    # --- Column drag/resize ---

    def begin_column_drag(self, index: int):
        self.drag.start(index)

    def column_drag_over(self, index: int):
        self.drag.over(index)

    def drop_column(self, index: int) -> bool:
        return self.drag.drop(index, lambda src, dst: self.store.dispatch(ReorderColumns(src, dst)))

    def cancel_column_drag(self):
        self.drag.end()

    def begin_resize(self, column_id: str, x: float):
        column = self.state.column(column_id)
        if column is None or not column.resizable:
            return
        self.resizer.begin(column_id, x, column.width)

    def resize_to(self, x: float):
        update = self.resizer.move(x)
        if update is not None:
            self.store.dispatch(ResizeColumn(*update))

    def end_resize(self):
        self.resizer.end()

    # --- Commands ---

    def sort_by(self, column_id: str):
        column = self.state.column(column_id)
        if column is None or not column.sortable:
            return
        self.store.dispatch(SetSort(toggle_sort(self.state.sort, column_id)))

    def filter_column(self, column_id: str, value, kind: FilterKind = FilterKind.CONTAINS):
        column = self.state.column(column_id)
        if column is None or not column.filterable:
            return
        self.store.dispatch(SetFilter(set_column_filter(self.state.filters, column_id, value, kind)))

    def type_search(self, text: str):
        self.search_box.type(text)
        self._search_timer.start()

    def _commit_search(self):
        if self.search_box.debouncer.flush():
            logger.debug(f"Search committed: {self.state.search!r}")

    def poll_search(self, now: Optional[float] = None) -> bool:
        """Commit the search draft if typing has paused long enough."""
        return self.search_box.poll(now)

    def toggle_row(self, key: str):
        self.store.dispatch(SelectRow(key))

    def toggle_select_all(self):
        self.store.dispatch(SelectAll(not self.state.all_selected))

    def clear_selection(self):
        self.store.dispatch(SelectAll(False))

    def change_page(self, page: int):
        self.store.dispatch(SetPagination(page=page))

    def change_page_size(self, page_size: int):
        self.store.dispatch(SetPagination(page=1, page_size=page_size))

    def toggle_column(self, column_id: str):
        self.store.dispatch(ToggleColumnVisibility(column_id))

    def pin_column(self, column_id: str, side: PinSide):
        self.store.dispatch(PinColumn(column_id, side))

    def reset_columns(self):
        self.store.dispatch_all(reset_visibility_actions(self.state))

    def set_density(self, density: Density):
        self.store.dispatch(SetDensity(density))

    def toggle_theme(self):
        theme = Theme.DARK if self.state.theme == Theme.LIGHT else Theme.LIGHT
        self.store.dispatch(SetTheme(theme))

    def edit_cell(self, key: str, column_id: str, value):
        """Apply an inline cell edit to the loaded rows."""
        self.store.dispatch(UpdateRow(key, {column_id: value}))

    # --- Loading ---

    async def load(self) -> bool:
        if self.loader is None:
            logger.warning("GridViewModel has no row source; nothing to load")
            return False
        return await self.loader.load()

    async def refresh(self) -> bool:
        """Go back to page 1 and reload."""
        self.store.dispatch(SetPagination(page=1))
        return await self.load()

    async def save_cell(self, key: str, column_id: str, value) -> Row:
        """Persist a cell edit through the row source."""
        if self.loader is None:
            raise RuntimeError("GridViewModel has no row source")
        return await self.loader.update_row(key, {column_id: value})

    async def delete_row(self, key: str):
        if self.loader is None:
            raise RuntimeError("GridViewModel has no row source")
        await self.loader.delete_row(key)
