"""buffer.py - Thread-safe pending-entry buffer for dabug.

LineBuffer holds the entries recorded since the last flush. Trace calls append
to its tail; ``Tracer.flush()`` calls ``drain()`` to atomically take every
pending entry and reset the buffer for the next batch.

Design decisions:
    - A plain ``list`` guarded by one ``threading.Lock``. Unlike a per-thread
      buffer, a single buffer is shared by every thread that traces into the
      same Tracer, so append and drain must be serialized explicitly.
    - No capacity limit: no entry is ever dropped between two flushes.
    - ``is_empty()`` peeks without taking the lock so that a flush of an empty
      buffer costs nothing.
"""

import threading
from typing import List

from .source import Source


class Entry:
    """One trace record: message, call site and precomputed display prefix.

    Attributes:
        message (str): Text payload. Empty for a bare "this line ran" marker.
        source (Source): Call site captured when the entry was created.
        prefix (str): Display prefix (global prefix + source location),
            computed once when the entry is created and reused by every
            render pass.
    """

    __slots__ = ("message", "source", "prefix")

    def __init__(self, message: str, source: Source, prefix: str) -> None:
        self.message = message
        self.source = source
        self.prefix = prefix

    @classmethod
    def create(cls, message: str, source: Source, global_prefix: str = "") -> "Entry":
        """Build an Entry, deriving its prefix from ``global_prefix`` and ``source``.

        Example:
            >>> e = Entry.create("hi", Source("a.py", "m.f", 3), "[dbg] ")
            >>> e.prefix
            '[dbg] a.py:3 '
        """
        return cls(message, source, f"{global_prefix}{source} ")

    def __repr__(self) -> str:  # pragma: no cover
        return f"Entry({self.prefix!r}, {self.message!r})"


class LineBuffer:
    """Ordered, append-only sequence of pending Entry objects.

    Insertion order is the order in which callers acquired the lock, which for
    a single thread is simply call order.

    Example:
        >>> buf = LineBuffer()
        >>> buf.append(Entry.create("A", Source("a.py", "m.f", 1)))
        >>> len(buf)
        1
        >>> [e.message for e in buf.drain()]
        ['A']
        >>> buf.is_empty()
        True
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: List[Entry] = []

    def append(self, entry: Entry) -> None:
        """Add ``entry`` to the tail of the buffer."""
        with self._lock:
            self._entries.append(entry)

    def drain(self) -> List[Entry]:
        """Return all pending entries and reset the buffer to empty.

        The swap happens under the lock, so an entry appended concurrently
        lands either in the returned batch or in the next one, never in both
        and never in neither.

        Returns:
            The pending entries in insertion order (oldest first).
        """
        with self._lock:
            entries = self._entries
            self._entries = []
        return entries

    def snapshot(self) -> List[Entry]:
        """Return a copy of the pending entries without clearing them."""
        with self._lock:
            return list(self._entries)

    def is_empty(self) -> bool:
        """Return True if nothing is pending; peeks without taking the lock."""
        return not self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
