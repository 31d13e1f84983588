import time


def monotonic_ms() -> float:
    """Monotonic time in milliseconds; the default clock for gestures and debouncing."""
    return time.monotonic() * 1000.0
