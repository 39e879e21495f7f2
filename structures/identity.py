"""
identity.py — Node Identity Allocator
======================================
Process-wide, monotonically increasing counter that mints node identities
for linked-structure generators.

An identity is handed out once and never again for the lifetime of the
process, so a renderer can animate "the same node moved" simply by
matching ids between two consecutive snapshots. The counter is never
reset: identities are only compared within one trace and never persisted,
so sharing one counter across traces costs nothing.
"""

import itertools
import threading


class IdentityAllocator:
    """Thread-safe monotonic id source."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock    = threading.Lock()
        self._last    = start - 1

    def next_id(self) -> int:
        with self._lock:
            self._last = next(self._counter)
            return self._last

    @property
    def last_issued(self) -> int:
        """Most recently issued id (start - 1 before the first call)."""
        return self._last


DEFAULT_ALLOCATOR = IdentityAllocator()


def allocate_id() -> int:
    """Mint a fresh identity from the process-wide allocator."""
    return DEFAULT_ALLOCATOR.next_id()
