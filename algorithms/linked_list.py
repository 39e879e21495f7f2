"""
linked_list.py — Singly Linked List Operations
===============================================
Insert (head / tail / index), delete (head / tail / value / index),
search, traversal and iterative reversal on a singly linked list.

Node identity:
  Every node is minted once by the NodeArena (ids come from the
  process-wide allocator) and keeps its id for the whole trace. A chain
  is a plain list of ids; the builder copies it into each Snapshot.
  A node about to be unlinked is tagged REMOVED in the snapshot where it
  leaves, and is absent from every later snapshot. A freshly created node
  first appears alone in the "new" chain, then moves into "list".

Pointers (`head`, `curr`, `prev`, `next`) hold node ids; a pointer that
would be null is simply absent.

The helpers at the bottom are shared by the other linked-list families.
"""

from typing import Generator, List, Optional, Sequence, Tuple

from algorithms.snapshot import Snapshot, SnapshotBuilder
from structures.arena import NodeArena


TRAVERSE_PSEUDOCODE: List[str] = [
    "curr ← head",                               # 0
    "while curr ≠ null:",                        # 1
    "    visit(curr);  curr ← curr.next",        # 2
    "return",                                    # 3
]
TRAVERSE_PHASES = {"init": 0, "visit": 2, "done": 3}

REVERSE_PSEUDOCODE: List[str] = [
    "prev ← null;  curr ← head",                 # 0
    "while curr ≠ null:",                        # 1
    "    next ← curr.next",                      # 2
    "    curr.next ← prev",                      # 3
    "    prev ← curr;  curr ← next",             # 4
    "head ← prev",                               # 5
]
REVERSE_PHASES = {"init": 0, "relink": 3, "done": 5}

INSERT_PSEUDOCODE: List[str] = [
    "walk prev to the node before the slot",     # 0
    "node ← Node(value)",                        # 1
    "node.next ← prev.next;  prev.next ← node",  # 2
    "return head",                               # 3
]
INSERT_PHASES = {"init": 0, "walk": 0, "create": 1, "link": 2, "done": 3}

DELETE_PSEUDOCODE: List[str] = [
    "walk prev / curr to the node to delete",    # 0
    "if curr.val matches: mark curr",            # 1
    "prev.next ← curr.next",                     # 2
    "return head",                               # 3
]
DELETE_PHASES = {"init": 0, "walk": 0, "compare": 1, "remove": 1, "unlink": 2, "done": 3}

SEARCH_PSEUDOCODE: List[str] = [
    "curr ← head",                               # 0
    "while curr ≠ null:",                        # 1
    "    if curr.val == target: return curr",    # 2
    "    curr ← curr.next",                      # 3
    "return null",                               # 4
]
SEARCH_PHASES = {"init": 0, "compare": 2, "done": 4}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------
def new_list(values: Sequence[int]) -> Tuple[NodeArena, List[int], SnapshotBuilder]:
    """Fresh arena + chain of ids + builder bound to the "list" chain."""
    arena = NodeArena()
    ids   = arena.create_many(values)
    sb    = SnapshotBuilder(arena=arena, primary="list")
    sb.chains["list"] = ids
    return arena, ids, sb


def values_of(arena: NodeArena, ids: Sequence[int]) -> List[int]:
    return [v for v in arena.values(ids)]


def detach_dummies(sb: SnapshotBuilder, chain: List[int], *dummies: int) -> None:
    """Move sentinel nodes out of `chain` into the "discarded" chain."""
    for d in dummies:
        if d in chain:
            chain.remove(d)
    sb.chains["discarded"] = list(dummies)


def _head(sb: SnapshotBuilder, ids: List[int]) -> None:
    if ids:
        sb.point("head", ids[0])


def _walk(
    sb: SnapshotBuilder,
    arena: NodeArena,
    ids: List[int],
    stop: int,
    label: str,
) -> Generator[Snapshot, None, None]:
    """One snapshot per hop from the head to position `stop` (inclusive)."""
    for i in range(stop + 1):
        sb.clear()
        _head(sb, ids)
        sb.mark_many(ids[:i], "visited")
        sb.mark(ids[i], "active")
        sb.point("curr", ids[i])
        sb.phase = "walk"
        sb.narrative = f"{label}: curr is at position {i} (value {arena.value(ids[i])})."
        yield sb.build()


def _done(sb: SnapshotBuilder, arena: NodeArena, ids: List[int], narrative: str, **result) -> Snapshot:
    sb.result = dict(result, list=values_of(arena, ids), length=len(ids))
    sb.phase = "done"
    sb.narrative = narrative
    return sb.build(terminal=True)


def _initial(sb: SnapshotBuilder, ids: List[int], narrative: str) -> Snapshot:
    sb.clear()
    _head(sb, ids)
    sb.phase = "init"
    sb.narrative = narrative
    return sb.build()


# ---------------------------------------------------------------------------
# Traversal & search
# ---------------------------------------------------------------------------
def ll_traverse(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    yield _initial(sb, ids, f"Walk the list {list(values)} from head to null.")

    for i, node in enumerate(ids):
        sb.clear()
        _head(sb, ids)
        sb.mark_many(ids[:i], "visited")
        sb.mark(node, "active")
        sb.point("curr", node)
        sb.phase = "visit"
        sb.narrative = f"Visit node {i}: value {arena.value(node)}."
        yield sb.build()

    sb.clear()
    _head(sb, ids)
    sb.mark_many(ids, "visited")
    yield _done(sb, arena, ids, f"✅ curr reached null after {len(ids)} node(s): {values_of(arena, ids)}.")


def ll_search(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    yield _initial(sb, ids, f"Search the list {list(values)} for {target}.")

    for i, node in enumerate(ids):
        hit = arena.value(node) == target
        sb.clear()
        _head(sb, ids)
        sb.mark_many(ids[:i], "visited")
        sb.mark(node, "comparing")
        sb.point("curr", node)
        sb.phase = "compare"
        sb.count("comparisons")
        sb.narrative = f"Node {i} holds {arena.value(node)}: " + ("a match." if hit else f"not {target}, follow next.")
        yield sb.build()

        if hit:
            sb.clear()
            _head(sb, ids)
            sb.mark_many(ids[:i], "visited")
            sb.mark(node, "found")
            sb.point("curr", node)
            yield _done(sb, arena, ids, f"✅ Found {target} at position {i}.", index=i)
            return

    sb.clear()
    _head(sb, ids)
    sb.mark_many(ids, "visited")
    yield _done(sb, arena, ids, f"❌ {target} is not in the list; curr fell off the end.", index=-1)


# ---------------------------------------------------------------------------
# Insertion
# ---------------------------------------------------------------------------
def _create(sb: SnapshotBuilder, arena: NodeArena, ids: List[int], value: int) -> Generator[Snapshot, None, int]:
    node = arena.create(value)
    sb.clear()
    sb.chains["new"] = [node]
    _head(sb, ids)
    sb.mark(node, "inserted")
    sb.phase = "create"
    sb.narrative = f"Create a new node holding {value}; it is not linked yet."
    yield sb.build()
    return node


def _link(sb: SnapshotBuilder, ids: List[int], node: int, pos: int, narrative: str) -> Snapshot:
    ids.insert(pos, node)
    del sb.chains["new"]
    sb.clear()
    _head(sb, ids)
    sb.mark(node, "inserted")
    if pos > 0:
        sb.point("prev", ids[pos - 1])
    sb.phase = "link"
    sb.count("writes")
    sb.narrative = narrative
    return sb.build()


def ll_insert_head(values: Sequence[int], value: int) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    yield _initial(sb, ids, f"Insert {value} at the head of {list(values)}.")

    node = yield from _create(sb, arena, ids, value)
    yield _link(sb, ids, node, 0, f"new.next ← head, then head ← new: {value} is the first node. O(1).")

    sb.clear()
    _head(sb, ids)
    sb.mark(node, "inserted")
    yield _done(sb, arena, ids, f"✅ Inserted {value} at the head: {values_of(arena, ids)}.", index=0)


def ll_insert_tail(values: Sequence[int], value: int) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    yield _initial(sb, ids, f"Insert {value} at the tail of {list(values)}.")

    if ids:
        yield from _walk(sb, arena, ids, len(ids) - 1, "Find the tail")
    node = yield from _create(sb, arena, ids, value)
    yield _link(sb, ids, node, len(ids), f"tail.next ← new: {value} becomes the last node.")

    sb.clear()
    _head(sb, ids)
    sb.mark(node, "inserted")
    yield _done(sb, arena, ids, f"✅ Inserted {value} at the tail: {values_of(arena, ids)}.", index=len(ids) - 1)


def ll_insert_at(values: Sequence[int], index: int, value: int) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    yield _initial(sb, ids, f"Insert {value} at position {index} of {list(values)}.")

    if index > 0:
        yield from _walk(sb, arena, ids, index - 1, f"Walk to position {index - 1}, the node before the gap")
    node = yield from _create(sb, arena, ids, value)
    if index == 0:
        text = f"Position 0 is the head: new.next ← head, head ← new."
    else:
        text = f"new.next ← prev.next, then prev.next ← new: {value} now sits at position {index}."
    yield _link(sb, ids, node, index, text)

    sb.clear()
    _head(sb, ids)
    sb.mark(node, "inserted")
    yield _done(sb, arena, ids, f"✅ Inserted {value} at position {index}: {values_of(arena, ids)}.", index=index)


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------
def _unlink(sb: SnapshotBuilder, arena: NodeArena, ids: List[int], pos: int, reason: str) -> Generator[Snapshot, None, int]:
    node = ids[pos]
    sb.clear()
    _head(sb, ids)
    sb.mark(node, "removed")
    sb.point("curr", node)
    if pos > 0:
        sb.point("prev", ids[pos - 1])
    sb.phase = "remove"
    sb.narrative = reason
    yield sb.build()

    ids.pop(pos)
    value = arena.value(node)
    sb.clear()
    _head(sb, ids)
    if pos > 0:
        sb.point("prev", ids[pos - 1])
    sb.phase = "unlink"
    sb.count("writes")
    if pos == 0:
        sb.narrative = f"head ← head.next: the node holding {value} is gone."
    else:
        sb.narrative = f"prev.next ← curr.next: the node holding {value} is bypassed and gone."
    yield sb.build()
    return value


def ll_delete_head(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    yield _initial(sb, ids, f"Delete the head of {list(values)}.")

    removed = yield from _unlink(sb, arena, ids, 0, f"The head holds {arena.value(ids[0])}; it will be removed.")
    sb.clear()
    _head(sb, ids)
    yield _done(sb, arena, ids, f"✅ Deleted the head ({removed}): {values_of(arena, ids)}.", removed=removed)


def ll_delete_tail(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    yield _initial(sb, ids, f"Delete the tail of {list(values)}.")

    last = len(ids) - 1
    if last > 0:
        yield from _walk(sb, arena, ids, last - 1, "Find the node before the tail")
    removed = yield from _unlink(sb, arena, ids, last, f"The tail holds {arena.value(ids[last])}; it will be removed.")
    sb.clear()
    _head(sb, ids)
    yield _done(sb, arena, ids, f"✅ Deleted the tail ({removed}): {values_of(arena, ids)}.", removed=removed)


def ll_delete_value(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    """Delete the first node whose value equals `target`."""
    arena, ids, sb = new_list(values)
    yield _initial(sb, ids, f"Delete the first node holding {target} from {list(values)}.")

    for i, node in enumerate(ids):
        hit = arena.value(node) == target
        sb.clear()
        _head(sb, ids)
        sb.mark_many(ids[:i], "visited")
        sb.mark(node, "comparing")
        sb.point("curr", node)
        if i > 0:
            sb.point("prev", ids[i - 1])
        sb.phase = "compare"
        sb.count("comparisons")
        sb.narrative = f"Node {i} holds {arena.value(node)}: " + ("a match." if hit else "keep walking.")
        yield sb.build()

        if hit:
            yield from _unlink(sb, arena, ids, i, f"Remove the node holding {target}.")
            sb.clear()
            _head(sb, ids)
            yield _done(sb, arena, ids, f"✅ Deleted {target} from position {i}: {values_of(arena, ids)}.", removed=target, index=i)
            return

    sb.clear()
    _head(sb, ids)
    sb.mark_many(ids, "visited")
    yield _done(sb, arena, ids, f"❌ {target} is not in the list; nothing was deleted.", removed=None, index=-1)


def ll_delete_at(values: Sequence[int], index: int) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    yield _initial(sb, ids, f"Delete the node at position {index} of {list(values)}.")

    if index > 0:
        yield from _walk(sb, arena, ids, index - 1, f"Walk to position {index - 1}, the node before the target")
    removed = yield from _unlink(sb, arena, ids, index, f"Position {index} holds {arena.value(ids[index])}; it will be removed.")
    sb.clear()
    _head(sb, ids)
    yield _done(sb, arena, ids, f"✅ Deleted position {index} ({removed}): {values_of(arena, ids)}.", removed=removed, index=index)


# ---------------------------------------------------------------------------
# Iterative reversal
# ---------------------------------------------------------------------------
def ll_reverse(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for prev/curr/next reversal.

    The part already reversed is the "reversed" chain (its first node is
    prev); the untouched remainder stays in "list" (its first node is curr).
    Each step moves exactly one node from the remainder to the front of
    the reversed part.
    """
    arena, ids, sb = new_list(values)
    rest = ids
    rev: List[int] = []
    sb.chains["reversed"] = rev

    sb.clear()
    _head(sb, rest)
    sb.point("curr", rest[0])
    sb.phase = "init"
    sb.narrative = f"Reverse {list(values)} in place: prev starts at null, curr at the head."
    yield sb.build()

    while rest:
        node = rest.pop(0)
        rev.insert(0, node)
        sb.clear()
        sb.mark_many(rev[1:], "visited")
        sb.mark(node, "swapping")
        sb.point("prev", node)
        if rest:
            sb.point("curr", rest[0])
            sb.point("next", rest[0])
        sb.phase = "relink"
        sb.count("writes")
        nxt = arena.value(rest[0]) if rest else "null"
        before = arena.value(rev[1]) if len(rev) > 1 else "null"
        sb.narrative = (
            f"Save next ({nxt}), point {arena.value(node)}.next back to {before}, "
            f"then advance prev to {arena.value(node)} and curr to {nxt}."
        )
        yield sb.build()

    sb.chains = {"list": rev}
    sb.clear()
    _head(sb, rev)
    sb.mark_many(rev, "found")
    yield _done(sb, arena, rev, f"✅ curr is null, so prev is the new head: {values_of(arena, rev)}.")
