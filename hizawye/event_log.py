"""Bounded thought log shown beside the simulation."""

from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional

from .schemas import LogEntry

DEFAULT_LOG_CAPACITY = 21


class EventLog:
    """Append-only ring of the most recent log entries.

    Entries are kept in the order they were appended; once the log holds
    ``capacity`` entries, every new one pushes the oldest out.
    """

    def __init__(self, capacity: int = DEFAULT_LOG_CAPACITY, entries: Iterable[LogEntry] = ()):
        if capacity < 1:
            raise ValueError(f"EventLog capacity must be at least 1 (got {capacity})")
        self.capacity = capacity
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self.extend(entries)

    def extend(self, entries: Iterable[LogEntry]) -> None:
        """Append entries in order, dropping the oldest beyond capacity."""
        # deque(maxlen=...) discards from the left as we append on the right
        self._entries.extend(entries)

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)

    @property
    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    @property
    def latest(self) -> Optional[LogEntry]:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(list(self._entries))
