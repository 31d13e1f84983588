"""
Debounce - commit the latest value only after input goes quiet.

Keystrokes update the draft immediately; the committed value changes only
after ``delay_ms`` without further input, so a burst of typing costs one
pipeline recomputation. Time comes from an injectable millisecond clock and
the caller drives expiry through ``poll`` (from a timer, an event loop tick
or a test), so the debouncer is independent of any UI toolkit.
"""
from typing import Callable, Generic, Optional, TypeVar

from loguru import logger

from datagrid.core.clock import monotonic_ms
from datagrid.grid.actions import SetSearch


T = TypeVar("T")

_NOTHING = object()


class Debouncer(Generic[T]):
    """
    Buffers the latest pushed value and commits it after quiescence.

    Example:
        debouncer = Debouncer(300, commit=print, clock=fake_clock)
        debouncer.push("e")
        debouncer.push("en")
        fake_clock.advance(300)
        debouncer.poll()     # prints "en" once
    """

    def __init__(
        self,
        delay_ms: float,
        commit: Callable[[T], None],
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.delay_ms = delay_ms
        self._commit = commit
        self._clock = clock
        self._pending = _NOTHING
        self._deadline: Optional[float] = None
        self.draft: Optional[T] = None

    @property
    def pending(self) -> bool:
        return self._pending is not _NOTHING

    @property
    def deadline(self) -> Optional[float]:
        """Clock time at which the pending value becomes committable."""
        return self._deadline

    def push(self, value: T):
        """Record a new draft value and restart the quiescence window."""
        self.draft = value
        self._pending = value
        self._deadline = self._clock() + self.delay_ms

    def poll(self, now: Optional[float] = None) -> bool:
        """
        Commit the pending value if the quiescence window has elapsed.

        Returns:
            True if a value was committed
        """
        if not self.pending:
            return False
        now = self._clock() if now is None else now
        if now < self._deadline:
            return False
        self.flush()
        return True

    def flush(self) -> bool:
        """Commit the pending value immediately."""
        if not self.pending:
            return False
        value = self._pending
        self._pending = _NOTHING
        self._deadline = None
        self._commit(value)
        return True

    def cancel(self):
        self._pending = _NOTHING
        self._deadline = None


class SearchBox:
    """
    Search input bound to a store: draft text is local, the store's
    committed query updates through a debouncer.
    """

    def __init__(self, store, delay_ms: float = 300, clock: Callable[[], float] = monotonic_ms):
        self._store = store
        self._debouncer: Debouncer[str] = Debouncer(delay_ms, self._commit, clock)
        self._debouncer.draft = store.state.search

    @property
    def text(self) -> str:
        return self._debouncer.draft or ""

    @property
    def debouncer(self) -> Debouncer[str]:
        return self._debouncer

    def type(self, text: str):
        self._debouncer.push(text)

    def poll(self, now: Optional[float] = None) -> bool:
        return self._debouncer.poll(now)

    def _commit(self, text: str):
        logger.debug(f"Search committed: '{text}'")
        self._store.dispatch(SetSearch(text))
