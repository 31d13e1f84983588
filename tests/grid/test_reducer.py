"""
Tests for the pure grid reducer: every transition and its invariants.
"""
from dataclasses import dataclass
from types import MappingProxyType

import pytest

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
from datagrid.grid.models import (
    ColumnDescriptor,
    DEFAULT_COLUMNS,
    Density,
    FilterKind,
    FilterPredicate,
    PinSide,
    SortDirection,
    SortEntry,
    Theme,
)
from datagrid.grid.reducer import reduce
from datagrid.grid.state import GridState, initial_state


@dataclass(frozen=True)
class UnknownAction(GridAction):
    pass


@pytest.fixture
def loaded(mock_rows):
    return reduce(initial_state(), SetRows(mock_rows[:50]))


class TestInitialState:
    def test_defaults(self):
        state = initial_state()

        assert state.rows == ()
        assert state.visible_columns == tuple(c.id for c in DEFAULT_COLUMNS)
        assert state.pagination.page == 1
        assert state.pagination.page_size == 50
        assert state.density == Density.STANDARD
        assert state.theme == Theme.LIGHT
        assert not state.loading
        assert state.error is None

    def test_hidden_by_default_columns(self):
        columns = [
            ColumnDescriptor(id="a", label="A"),
            ColumnDescriptor(id="b", label="B", visible=False),
        ]

        state = initial_state(columns, page_size=25)

        assert state.visible_columns == ("a",)
        assert state.pagination.page_size == 25


class TestDataTransitions:
    def test_unknown_action_is_noop(self, log_messages):
        state = initial_state()

        assert reduce(state, UnknownAction()) is state
        assert any("UnknownAction" in m for m in log_messages)

    def test_set_rows(self, mock_rows):
        state = reduce(initial_state(), SetRows(mock_rows[:3]))

        assert [r.id for r in state.rows] == [1, 2, 3]

    def test_loading_and_error(self):
        state = reduce(initial_state(), SetLoading(True))
        assert state.loading

        state = reduce(state, SetError("Failed to load data"))
        assert state.error == "Failed to load data"

        state = reduce(state, SetError(None))
        assert state.error is None

    def test_update_row(self, loaded):
        state = reduce(loaded, UpdateRow("2", {"name": "Renamed"}))

        assert state.rows[1].get_field("name") == "Renamed"
        assert state.rows[1].id == 2
        assert loaded.rows[1].get_field("name") == "User 2"
        assert state.rows[0] is loaded.rows[0]

    def test_update_missing_row_is_noop(self, loaded):
        assert reduce(loaded, UpdateRow("9999", {"name": "x"})) is loaded

    def test_remove_row_drops_selection(self, loaded):
        state = reduce(loaded, SelectRow("3"))

        state = reduce(state, RemoveRow("3"))

        assert "3" not in state.row_keys
        assert "3" not in state.selection
        assert len(state.rows) == 49

    def test_remove_missing_row_is_noop(self, loaded):
        assert reduce(loaded, RemoveRow("9999")) is loaded

    def test_noop_returns_same_object(self, loaded):
        assert reduce(loaded, SetLoading(False)) is loaded
        assert reduce(loaded, SetDensity(Density.STANDARD)) is loaded

    def test_structural_sharing(self, loaded):
        state = reduce(loaded, SetTheme(Theme.DARK))

        assert state is not loaded
        assert state.rows is loaded.rows
        assert state.columns is loaded.columns


class TestColumnTransitions:
    def test_toggle_visibility(self):
        state = reduce(initial_state(), ToggleColumnVisibility("email"))
        assert "email" not in state.visible_columns

        state = reduce(state, ToggleColumnVisibility("email"))
        assert state.visible_columns.count("email") == 1

    def test_toggle_unknown_column_is_noop(self):
        state = initial_state()

        assert reduce(state, ToggleColumnVisibility("nope")) is state

    def test_visible_subset_of_known_ids(self):
        state = initial_state()
        for column_id in ["name", "nope", "name", "salary", "ghost", "salary", "name"]:
            state = reduce(state, ToggleColumnVisibility(column_id))

        assert set(state.visible_columns) <= set(state.column_ids)
        assert len(state.visible_columns) == len(set(state.visible_columns))

    def test_visible_descriptors_follow_column_order(self):
        state = reduce(initial_state(), ToggleColumnVisibility("id"))
        state = reduce(state, ToggleColumnVisibility("id"))

        assert state.visible_columns[-1] == "id"
        assert state.visible_column_descriptors()[0].id == "id"

    def test_reorder(self):
        state = reduce(initial_state(), ReorderColumns(0, 2))

        assert state.column_ids[:3] == ["name", "email", "id"]

    def test_reorder_out_of_range_does_not_raise(self):
        state = initial_state()

        assert reduce(state, ReorderColumns(50, 0)) is state
        moved = reduce(state, ReorderColumns(0, 50))
        assert moved.column_ids[-1] == "id"
        assert sorted(moved.column_ids) == sorted(state.column_ids)

    def test_set_columns_keeps_visibility(self):
        state = initial_state()
        columns = (ColumnDescriptor(id="x", label="X"),)

        state = reduce(state, SetColumns(columns))

        assert state.column_ids == ["x"]
        assert state.visible_columns == initial_state().visible_columns

    def test_pin_moves_between_sides(self):
        state = reduce(initial_state(), PinColumn("name", PinSide.LEFT))
        assert state.pinned.left == ("name",)

        state = reduce(state, PinColumn("name", PinSide.RIGHT))
        assert state.pinned.left == ()
        assert state.pinned.right == ("name",)

        state = reduce(state, PinColumn("name", PinSide.NONE))
        assert state.pinned.right == ()

    def test_pin_sides_stay_disjoint(self):
        state = initial_state()
        sequence = [
            ("id", PinSide.LEFT), ("name", PinSide.LEFT), ("id", PinSide.RIGHT),
            ("actions", PinSide.RIGHT), ("name", PinSide.RIGHT), ("id", PinSide.LEFT),
            ("name", PinSide.LEFT), ("actions", PinSide.NONE), ("id", PinSide.LEFT),
        ]
        for column_id, side in sequence:
            state = reduce(state, PinColumn(column_id, side))
            assert not set(state.pinned.left) & set(state.pinned.right)

        assert state.pinned.left == ("name", "id")
        assert state.pinned.right == ()

    def test_resize_has_no_floor(self):
        state = reduce(initial_state(), ResizeColumn("email", 10))

        assert state.column("email").width == 10

    def test_resize_unknown_is_noop(self):
        state = initial_state()

        assert reduce(state, ResizeColumn("nope", 200)) is state


class TestSortFilterSearch:
    def test_set_sort_replaces(self):
        sort = (SortEntry("salary", SortDirection.DESCENDING),)

        state = reduce(initial_state(), SetSort(sort))

        assert state.sort == sort

    def test_sort_ids_are_unique(self):
        sort = (SortEntry("salary"), SortEntry("name"), SortEntry("salary", SortDirection.DESCENDING))

        state = reduce(initial_state(), SetSort(sort))

        assert state.sort == (SortEntry("salary"), SortEntry("name"))

    def test_set_filter_is_read_only_copy(self):
        filters = {"status": FilterPredicate(FilterKind.EQUALS, "active")}

        state = reduce(initial_state(), SetFilter(filters))
        filters["name"] = FilterPredicate(FilterKind.CONTAINS, "x")

        assert list(state.filters) == ["status"]
        assert isinstance(state.filters, MappingProxyType)

    def test_set_search(self):
        state = reduce(initial_state(), SetSearch("eng"))

        assert state.search == "eng"


class TestSelection:
    def test_toggle_row(self, loaded):
        state = reduce(loaded, SelectRow("1"))
        assert state.selection == {"1"}

        state = reduce(state, SelectRow("1"))
        assert state.selection == frozenset()

    def test_select_unknown_key_is_noop(self, loaded):
        assert reduce(loaded, SelectRow("9999")) is loaded

    def test_select_all_and_clear(self, loaded):
        state = reduce(loaded, SelectAll(True))
        assert state.selection == set(loaded.row_keys)
        assert state.all_selected

        state = reduce(state, SelectAll(False))
        assert state.selection == frozenset()
        assert not state.all_selected

    def test_selection_survives_set_rows(self, loaded, mock_rows):
        state = reduce(loaded, SelectAll(True))

        state = reduce(state, SetRows(mock_rows[50:100]))

        assert state.selection == {str(n) for n in range(1, 51)}
        assert state.selected_rows() == []


class TestPagination:
    def test_shallow_merge(self):
        state = reduce(initial_state(), SetPagination(total=1000))
        state = reduce(state, SetPagination(page=3))

        assert state.pagination.page == 3
        assert state.pagination.page_size == 50
        assert state.pagination.total == 1000

    def test_page_size_change_resets_page(self):
        state = reduce(initial_state(), SetPagination(page=7, total=1000))

        state = reduce(state, SetPagination(page_size=100))

        assert state.pagination.page == 1
        assert state.pagination.page_size == 100

    def test_explicit_page_with_page_size_is_kept(self):
        state = reduce(initial_state(), SetPagination(page=4, page_size=25, total=1000))

        assert state.pagination.page == 4

    def test_page_never_below_one(self):
        state = reduce(initial_state(), SetPagination(page=0))

        assert state.pagination.page == 1


class TestPresentation:
    def test_density_and_theme(self):
        state = reduce(initial_state(), SetDensity(Density.COMPACT))
        state = reduce(state, SetTheme(Theme.DARK))

        assert state.density == Density.COMPACT
        assert state.theme == Theme.DARK

    def test_state_is_immutable(self):
        state = initial_state()

        with pytest.raises(AttributeError):
            state.loading = True
        assert isinstance(state, GridState)
