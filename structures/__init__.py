"""
structures/
-----------
Linked-structure storage. Public API:

    from structures import NodeArena, IdentityAllocator, allocate_id
"""

from structures.identity import IdentityAllocator, DEFAULT_ALLOCATOR, allocate_id
from structures.arena    import NodeArena

__all__ = [
    "IdentityAllocator",
    "DEFAULT_ALLOCATOR",
    "allocate_id",
    "NodeArena",
]
