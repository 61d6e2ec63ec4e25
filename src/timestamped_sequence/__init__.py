"""Ordered container of timestamped values with sequence search.

Environment driven configuration lives in ``timestamped_sequence.config``,
which needs python-dotenv.
"""

from .errors import (
    EmptyContainer,
    IndexOutOfRange,
    InvalidTimestamp,
    TimestampedSequenceError,
)
from .sequence import ANY, Entry, TimestampedSequence, Wildcard
from .time_sources import get_time_source, microseconds_now, milliseconds_now

__all__ = [
    "ANY",
    "EmptyContainer",
    "Entry",
    "IndexOutOfRange",
    "InvalidTimestamp",
    "TimestampedSequence",
    "TimestampedSequenceError",
    "Wildcard",
    "get_time_source",
    "microseconds_now",
    "milliseconds_now",
]
