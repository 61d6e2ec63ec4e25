from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterator, Sequence, TypeVar

from .errors import EmptyContainer, IndexOutOfRange, InvalidTimestamp
from .time_sources import TimeSource, milliseconds_now

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Wildcard(Enum):
    """Pattern slot that matches any stored value."""

    ANY = "ANY"

    def __repr__(self) -> str:
        return "ANY"


ANY = Wildcard.ANY


@dataclass(frozen=True)
class Entry(Generic[T]):
    value: T
    timestamp: int

    def __str__(self) -> str:
        return f"({self.value}, {self.timestamp})"


class TimestampedSequence(Generic[T]):
    """
    Ordered container of values stamped with strictly increasing timestamps.

    Entries can be searched for contiguous runs of values (patterns), optionally
    requiring that the run was completed within a time window. A pattern slot
    holding ANY matches every value; a slot holding None does too unless
    match_none is set, in which case it only matches stored None values.

    Slices share value references with the sequence they were taken from, so
    mutating a mutable value is visible through both.
    """

    def __init__(
        self,
        *,
        max_depth: int | None = None,
        collapse_repeats: bool = False,
        time_source: TimeSource = milliseconds_now,
    ) -> None:
        if max_depth is not None and max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        self._max_depth = max_depth
        self._collapse_repeats = collapse_repeats
        self._time_source = time_source
        self._entries: list[Entry[T]] = []

    @property
    def max_depth(self) -> int | None:
        return self._max_depth

    @property
    def collapse_repeats(self) -> bool:
        return self._collapse_repeats

    @property
    def time_source(self) -> TimeSource:
        return self._time_source

    # Mutation

    def add(self, value: T, timestamp: int | None = None) -> None:
        """
        Append value stamped with timestamp (or the time source when None).

        Raises InvalidTimestamp, leaving the sequence untouched, when timestamp
        is not greater than the last one stored.
        """
        if timestamp is None:
            timestamp = self._time_source()

        if self._entries:
            last = self._entries[-1]
            if timestamp <= last.timestamp:
                logger.debug(
                    "rejected timestamp %s (last is %s)", timestamp, last.timestamp
                )
                raise InvalidTimestamp(timestamp, last.timestamp)
            if self._collapse_repeats and last.value == value:
                logger.debug("collapsing repeated value %r", value)
                self._entries.pop()

        self._entries.append(Entry(value, timestamp))
        self._enforce_max()

    def push(self, value: T, timestamp: int | None = None) -> None:
        self.add(value, timestamp)

    def pop(self) -> Entry[T]:
        """Remove and return the oldest entry. O(n), the entries are a list."""
        if not self._entries:
            raise EmptyContainer()
        return self._entries.pop(0)

    def _enforce_max(self) -> None:
        if self._max_depth is None:
            return
        overflow = len(self._entries) - self._max_depth
        if overflow > 0:
            del self._entries[:overflow]
            logger.debug("evicted %d oldest entries (max_depth=%d)", overflow, self._max_depth)

    # Accessors

    @property
    def first(self) -> Entry[T]:
        if not self._entries:
            raise EmptyContainer()
        return self._entries[0]

    @property
    def last(self) -> Entry[T]:
        if not self._entries:
            raise EmptyContainer()
        return self._entries[-1]

    @property
    def last_value(self) -> T:
        return self.last.value

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def elapsed(self) -> int | None:
        """Time between the oldest and the newest entry, None when empty."""
        if not self._entries:
            return None
        return self._entries[-1].timestamp - self._entries[0].timestamp

    def at(self, index: int) -> Entry[T]:
        if index < 0 or index >= len(self._entries):
            raise IndexOutOfRange(index, len(self._entries))
        return self._entries[index]

    def slice(self, start: int, end: int | None = None) -> TimestampedSequence[T]:
        """
        New sequence holding the entries from start to end, both included.

        A negative start counts from the end (-4 is the fourth newest entry).
        The copy is shallow and keeps this sequence's configuration.
        """
        length = len(self._entries)
        if end is None:
            end = length - 1
        end = min(end + 1, length)
        if start < 0:
            start = max(length + start, 0)

        result: TimestampedSequence[T] = TimestampedSequence(
            max_depth=self._max_depth,
            collapse_repeats=self._collapse_repeats,
            time_source=self._time_source,
        )
        if end > start:
            result._entries.extend(self._entries[start:end])
        return result

    # Search

    def is_sequence_at(
        self,
        pattern: Sequence[T | Wildcard | None],
        position: int,
        time_limit: int | None = None,
        skip_for_timestamp: int = 0,
        match_none: bool = False,
    ) -> bool:
        """
        True if pattern matches the entries starting at position.

        With time_limit, the match also requires that the time between the
        entry at position + skip_for_timestamp and the last matched entry is
        not greater than time_limit.
        """
        size = len(pattern)
        if size == 0:
            return True
        if not self._entries or position < 0:
            return False
        if position + size > len(self._entries) or not 0 <= skip_for_timestamp <= size:
            return False

        for j, expected in enumerate(pattern):
            if expected is ANY or (expected is None and not match_none):
                continue
            if expected != self._entries[position + j].value:
                return False

        if time_limit is not None:
            end = position + size - 1
            # skip_for_timestamp == size measures from the last matched entry
            begin = min(position + skip_for_timestamp, end)
            elapsed = self._entries[end].timestamp - self._entries[begin].timestamp
            if elapsed > time_limit:
                return False
        return True

    def sequence_find(
        self,
        pattern: Sequence[T | Wildcard | None],
        time_limit: int | None = None,
        offset: int = 0,
        skip_for_timestamp: int = 0,
        match_none: bool = False,
    ) -> int | None:
        """First position at or after offset where pattern matches, or None."""
        size = len(pattern)
        if offset + size > len(self._entries):
            return None
        if size == 0:
            return offset

        for i in range(offset, len(self._entries) - size + 1):
            if self.is_sequence_at(
                pattern,
                i,
                time_limit=time_limit,
                skip_for_timestamp=skip_for_timestamp,
                match_none=match_none,
            ):
                return i
        return None

    def sequence_reverse_find(
        self,
        pattern: Sequence[T | Wildcard | None],
        time_limit: int | None = None,
        offset: int | None = None,
        skip_for_timestamp: int = 0,
        match_none: bool = False,
    ) -> int | None:
        """
        Last position where pattern matches, or None.

        A non-negative offset is the lowest position searched. A negative
        offset keeps the search away from the newest entries instead: with
        1000 entries and a 5 value pattern, offset=30 searches positions
        30..995 while offset=-30 searches 0..970.
        """
        if offset is None:
            offset = 0
        size = len(pattern)
        search_start = 0
        search_end = len(self._entries) - size

        if offset >= 0:
            search_start = offset
        else:
            search_end = min(search_end, len(self._entries) + offset)

        if search_end < search_start:
            return None
        if search_end - search_start + 1 < size:
            return None
        if size == 0:
            return search_end

        for i in range(search_end, search_start - 1, -1):
            if self.is_sequence_at(
                pattern,
                i,
                time_limit=time_limit,
                skip_for_timestamp=skip_for_timestamp,
                match_none=match_none,
            ):
                return i
        return None

    def last_sequence_done(
        self,
        pattern: Sequence[T | Wildcard | None],
        time_limit: int | None = None,
        skip_for_timestamp: int = 0,
        match_none: bool = False,
    ) -> bool:
        """True if pattern is the most recent run of values in the sequence."""
        position = self.sequence_reverse_find(
            pattern,
            time_limit=time_limit,
            skip_for_timestamp=skip_for_timestamp,
            match_none=match_none,
        )
        if position is None:
            return False
        return position == len(self._entries) - len(pattern)

    def find(
        self, item: T | Wildcard | None, offset: int = 0, match_none: bool = False
    ) -> int | None:
        return self.sequence_find([item], offset=offset, match_none=match_none)

    def reverse_find(
        self, item: T | Wildcard | None, offset: int = 0, match_none: bool = False
    ) -> int | None:
        return self.sequence_reverse_find([item], offset=offset, match_none=match_none)

    # Rendering and protocols

    def to_string(self, max_shown: int = 10) -> str:
        start = max(0, len(self._entries) - max_shown)
        shown = " ".join(str(e) for e in self._entries[start:])
        prefix = "... " if start > 0 else ""
        return f"Elements in queue: {prefix}{shown}".rstrip()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"TimestampedSequence(length={len(self._entries)}, "
            f"max_depth={self._max_depth!r}, collapse_repeats={self._collapse_repeats!r})"
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[Entry[T]]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry[T]:
        return self.at(index)
