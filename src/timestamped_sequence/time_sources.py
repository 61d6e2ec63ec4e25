from __future__ import annotations

import time
from typing import Callable

TimeSource = Callable[[], int]


def milliseconds_now() -> int:
    """Current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def microseconds_now() -> int:
    """Current time in microseconds since the epoch."""
    return time.time_ns() // 1_000


_TIME_SOURCES: dict[str, TimeSource] = {
    "milliseconds": milliseconds_now,
    "ms": milliseconds_now,
    "microseconds": microseconds_now,
    "us": microseconds_now,
}


def get_time_source(name: str) -> TimeSource:
    try:
        return _TIME_SOURCES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown time source {name!r} (expected one of {sorted(_TIME_SOURCES)})"
        ) from None
