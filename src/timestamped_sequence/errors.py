from __future__ import annotations


class TimestampedSequenceError(Exception):
    """Base class for errors raised by TimestampedSequence."""


class InvalidTimestamp(TimestampedSequenceError, ValueError):
    def __init__(self, timestamp: int, last_timestamp: int) -> None:
        super().__init__(
            f"timestamp must be greater than {last_timestamp}, got {timestamp}"
        )
        self.timestamp = timestamp
        self.last_timestamp = last_timestamp


class EmptyContainer(TimestampedSequenceError, IndexError):
    def __init__(self, message: str = "the sequence is empty") -> None:
        super().__init__(message)


class IndexOutOfRange(TimestampedSequenceError, IndexError):
    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"index {index} out of range for length {length}")
        self.index = index
        self.length = length
