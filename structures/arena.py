"""
arena.py — Linked-Node Arena
=============================
Flat storage for the nodes of one linked-structure run.

Nodes live in a dict keyed by identity; a chain is nothing more than an
ordered list of identities into that dict. "Cloning" a chain for a new
snapshot is therefore a tuple copy plus a subset of the arena, never a
recursive rebuild of pointer structures, so cycles cost nothing extra
(the tail's back-link is recorded separately as a single identity).

Identities come from the process-wide IdentityAllocator, which keeps
them unique across every arena in the process.
"""

from typing import Any, Dict, Iterable, List, Optional

from structures.identity import IdentityAllocator, DEFAULT_ALLOCATOR


class NodeArena:
    """
    Attributes:
        allocator : Identity source (the process-wide allocator by default).
        dummies   : Identities created as sentinel/dummy anchors.
    """

    DUMMY_VALUE = None

    def __init__(self, allocator: Optional[IdentityAllocator] = None):
        self.allocator: IdentityAllocator = allocator or DEFAULT_ALLOCATOR
        self.dummies:   set               = set()
        self._values:   Dict[int, Any]    = {}

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    def create(self, value: Any) -> int:
        node_id = self.allocator.next_id()
        self._values[node_id] = value
        return node_id

    def create_many(self, values: Iterable[Any]) -> List[int]:
        return [self.create(v) for v in values]

    def create_dummy(self) -> int:
        node_id = self.create(self.DUMMY_VALUE)
        self.dummies.add(node_id)
        return node_id

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def value(self, node_id: int) -> Any:
        return self._values[node_id]

    def values(self, ids: Iterable[int]) -> List[Any]:
        return [self._values[i] for i in ids]

    def subset(self, ids: Iterable[int]) -> Dict[int, Any]:
        return {i: self._values[i] for i in ids}

    def is_dummy(self, node_id: int) -> bool:
        return node_id in self.dummies

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"NodeArena(nodes={len(self._values)}, dummies={len(self.dummies)})"
