"""
GridStore - owner of the current GridState.

Runs actions through the pure reducer and notifies subscribers when the
snapshot is replaced.
"""
from typing import Callable, Iterable, Optional

from loguru import logger

from datagrid.core.events import Signal
from datagrid.grid.actions import GridAction
from datagrid.grid.reducer import reduce
from datagrid.grid.state import GridState, initial_state


Listener = Callable[[GridState, GridState], None]


class GridStore:
    """
    Holds the grid state for one session.

    All transitions run synchronously on the caller's thread. Subscribers
    receive ``(old_state, new_state)`` after every dispatch that produced a
    new snapshot; a no-op dispatch notifies nobody.

    Example:
        store = GridStore()
        store.subscribe(lambda old, new: print(new.density))
        store.dispatch(SetDensity(Density.COMPACT))
    """

    def __init__(self, state: Optional[GridState] = None):
        self._state = state if state is not None else initial_state()
        self.changed = Signal("GridStoreChanged")

    @property
    def state(self) -> GridState:
        return self._state

    def dispatch(self, action: GridAction) -> GridState:
        """
        Apply an action and notify subscribers if the state changed.

        Returns:
            The (possibly unchanged) current state
        """
        old = self._state
        new = reduce(old, action)
        if new is old:
            return old

        self._state = new
        logger.trace(f"Dispatched {type(action).__name__}")
        self.changed.emit(old, new)
        return new

    def dispatch_all(self, actions: Iterable[GridAction]) -> GridState:
        for action in actions:
            self.dispatch(action)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Function that removes the listener again
        """
        return self.changed.connect(listener)

    def unsubscribe(self, listener: Listener):
        self.changed.disconnect(listener)
