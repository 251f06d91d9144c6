"""Wall-clock helpers measured in whole milliseconds."""

from __future__ import annotations

import time


def now_ms() -> int:
    """Return the current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def elapsed_ms(start: int) -> int:
    """Return the milliseconds that have passed since ``start``."""
    return now_ms() - start