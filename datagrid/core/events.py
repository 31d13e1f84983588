"""
Synchronous in-process signals.

Used for store change notification and config change events; Qt signals
are reserved for the view-model boundary.
"""
from typing import Callable, List

from loguru import logger


class Signal:
    """
    Named list of callbacks invoked synchronously, in connection order.

    A callback that raises is logged with its traceback and skipped; the
    remaining callbacks still run and the emitter never sees the error.

    Example:
        changed = Signal("GridStoreChanged")
        disconnect = changed.connect(lambda old, new: print(new))
        changed.emit(old_state, new_state)
        disconnect()
    """

    def __init__(self, name: str = "Signal"):
        self.name = name
        self._callbacks: List[Callable] = []

    def connect(self, callback: Callable) -> Callable[[], None]:
        """
        Subscribe ``callback``. Connecting the same callback twice is a no-op.

        Returns:
            Function that disconnects the callback again
        """
        if callback not in self._callbacks:
            self._callbacks.append(callback)
        return lambda: self.disconnect(callback)

    def disconnect(self, callback: Callable):
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def clear(self):
        self._callbacks.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def emit(self, *args, **kwargs):
        # Iterate a copy: callbacks may disconnect themselves
        for callback in list(self._callbacks):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.opt(exception=e).error(f"Signal '{self.name}' callback {callback!r} failed: {e}")
