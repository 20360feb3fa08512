"""Time helpers."""

import threading
import time

_sequence_lock = threading.Lock()
_last_sequence = 0


def get_timestamp_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def next_sequence() -> int:
    """Insertion sequence, strictly increasing within the process.

    Unix time in nanoseconds, bumped past the previous value when the
    clock has not moved forward since the last call.
    """
    global _last_sequence
    with _sequence_lock:
        _last_sequence = max(time.time_ns(), _last_sequence + 1)
        return _last_sequence
