"""
dummy_node.py — Sentinel (Dummy) Anchor Techniques
===================================================
Merge two sorted lists, remove every node holding a value, partition
around a pivot, and drop every value that repeats in a sorted list.

All four hang the result off a dummy node so that the real head can be
deleted or replaced without a special case. The dummy is an ordinary
arena node with value None; the builder tags it `dummy` on every frame.
It is created in its own snapshot and, in the terminal snapshot, moved
to the "discarded" chain so the result chain never contains it.
"""

from typing import Generator, List, Sequence

from algorithms.linked_list import detach_dummies, new_list, values_of
from algorithms.snapshot import Snapshot, SnapshotBuilder
from structures.arena import NodeArena


MERGE_PSEUDOCODE: List[str] = [
    "dummy ← Node();  tail ← dummy",              # 0
    "while l1 and l2:",                           # 1
    "    if l1.val ≤ l2.val:",                    # 2
    "        tail.next ← l1;  l1 ← l1.next",      # 3
    "    else: tail.next ← l2;  l2 ← l2.next",    # 4
    "    tail ← tail.next",                       # 5
    "tail.next ← l1 or l2",                       # 6
    "return dummy.next",                          # 7
]
MERGE_PHASES = {"init": 0, "dummy": 0, "compare": 2, "take_l1": 3, "take_l2": 4, "attach": 6, "done": 7}

REMOVE_PSEUDOCODE: List[str] = [
    "dummy.next ← head;  prev ← dummy",           # 0
    "while prev.next:",                           # 1
    "    if prev.next.val == target:",            # 2
    "        prev.next ← prev.next.next",         # 3
    "    else: prev ← prev.next",                 # 4
    "return dummy.next",                          # 5
]
REMOVE_PHASES = {"init": 0, "dummy": 0, "compare": 2, "remove": 3, "unlink": 3, "advance": 4, "done": 5}

PARTITION_PSEUDOCODE: List[str] = [
    "before ← Node();  after ← Node()",           # 0
    "for node in list:",                          # 1
    "    if node.val < pivot: append to before",  # 2
    "    else: append to after",                  # 3
    "after_tail.next ← null",                     # 4
    "before_tail.next ← after.next",              # 5
    "return before.next",                         # 6
]
PARTITION_PHASES = {"init": 0, "dummy": 0, "compare": 1, "to_before": 2, "to_after": 3, "stitch": 5, "done": 6}

DEDUP_RUNS_PSEUDOCODE: List[str] = [
    "dummy.next ← head;  prev ← dummy",           # 0
    "while prev.next:",                           # 1
    "    curr ← prev.next",                       # 2
    "    if curr.next and curr.val == curr.next.val:",  # 3
    "        skip every node with curr.val",      # 4
    "        prev.next ← first node after the run",  # 5
    "    else: prev ← curr",                      # 6
    "return dummy.next",                          # 7
]
DEDUP_RUNS_PHASES = {"init": 0, "dummy": 0, "compare": 3, "remove": 4, "unlink": 5, "advance": 6, "done": 7}


def _head(sb: SnapshotBuilder, chain: List[int], arena: NodeArena) -> None:
    for node in chain:
        if not arena.is_dummy(node):
            sb.point("head", node)
            return


def _finish(
    sb: SnapshotBuilder,
    arena: NodeArena,
    chain: List[int],
    dummies: Sequence[int],
    narrative: str,
    **result,
) -> Snapshot:
    detach_dummies(sb, chain, *dummies)
    sb.clear()
    _head(sb, chain, arena)
    sb.mark_many(chain, "found")
    sb.phase = "done"
    sb.result = dict(result, list=values_of(arena, chain), length=len(chain))
    sb.narrative = narrative
    return sb.build(terminal=True)


def _with_dummy(sb: SnapshotBuilder, arena: NodeArena, chain: List[int]) -> Generator[Snapshot, None, int]:
    dummy = arena.create_dummy()
    chain.insert(0, dummy)
    sb.clear()
    _head(sb, chain, arena)
    sb.point("prev", dummy)
    sb.phase = "dummy"
    sb.narrative = "Put a dummy node D in front of the head; prev starts on D so the head needs no special case."
    yield sb.build()
    return dummy


# ---------------------------------------------------------------------------
# Merge two sorted lists
# ---------------------------------------------------------------------------
def merge_sorted(values: Sequence[int], other: Sequence[int]) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for the dummy-anchored merge of two sorted lists.

    The merged chain is "list"; the untaken parts of the inputs are the
    "l1" and "l2" chains. Ties take from l1 first, keeping the merge stable.
    Until the dummy is placed "list" is empty, so the first snapshot has
    `values == ()` and the inputs are only visible through the l1 and l2
    chains.
    """
    arena = NodeArena()
    l1    = arena.create_many(values)
    l2    = arena.create_many(other)
    out: List[int] = []
    sb    = SnapshotBuilder(arena=arena, primary="list")
    sb.chains["list"] = out
    sb.chains["l1"]   = l1
    sb.chains["l2"]   = l2

    def place_pointers() -> None:
        if l1:
            sb.point("l1", l1[0])
        if l2:
            sb.point("l2", l2[0])
        if out:
            sb.point("tail", out[-1])

    place_pointers()
    sb.phase = "init"
    sb.narrative = f"Merge the sorted lists {list(values)} and {list(other)} into one sorted list."
    yield sb.build()

    dummy = arena.create_dummy()
    out.append(dummy)
    sb.clear()
    place_pointers()
    sb.phase = "dummy"
    sb.narrative = "Create a dummy node D as the anchor of the merged list; tail starts on D."
    yield sb.build()

    while l1 and l2:
        a, b = arena.value(l1[0]), arena.value(l2[0])
        sb.clear()
        sb.mark_many([l1[0], l2[0]], "comparing")
        place_pointers()
        sb.phase = "compare"
        sb.count("comparisons")
        if a <= b:
            sb.narrative = f"Compare {a} and {b}: {a} ≤ {b}, so l1's node goes next."
        else:
            sb.narrative = f"Compare {a} and {b}: {b} < {a}, so l2's node goes next."
        yield sb.build()

        source, name = (l1, "l1") if a <= b else (l2, "l2")
        node = source.pop(0)
        out.append(node)
        sb.clear()
        sb.mark(node, "inserted")
        place_pointers()
        sb.phase = f"take_{name}"
        sb.count("writes")
        sb.narrative = f"tail.next ← the {arena.value(node)} node from {name}; tail and {name} both advance."
        yield sb.build()

    rest, name = (l1, "l1") if l1 else (l2, "l2")
    if rest:
        moved = list(rest)
        out.extend(moved)
        del rest[:]
        sb.clear()
        sb.mark_many(moved, "inserted")
        place_pointers()
        sb.phase = "attach"
        sb.count("writes")
        sb.narrative = (
            f"The other list is empty: link the rest of {name} ({values_of(arena, moved)}) "
            f"in one step, it is already sorted."
        )
        yield sb.build()

    del sb.chains["l1"]
    del sb.chains["l2"]
    merged = values_of(arena, out[1:])
    yield _finish(
        sb, arena, out, [dummy],
        f"✅ Return dummy.next: {merged}. The dummy D is discarded.",
    )


# ---------------------------------------------------------------------------
# Remove every node holding a value
# ---------------------------------------------------------------------------
def remove_value(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    arena, chain, sb = new_list(values)
    sb.clear()
    _head(sb, chain, arena)
    sb.phase = "init"
    sb.narrative = f"Remove every node holding {target} from {list(values)}."
    yield sb.build()

    dummy = yield from _with_dummy(sb, arena, chain)
    prev = 0
    removed = 0

    while prev + 1 < len(chain):
        curr = chain[prev + 1]
        hit  = arena.value(curr) == target
        sb.clear()
        _head(sb, chain, arena)
        sb.mark(curr, "comparing")
        sb.point("prev", chain[prev])
        sb.point("curr", curr)
        sb.phase = "compare"
        sb.count("comparisons")
        sb.narrative = (
            f"curr holds {arena.value(curr)}: "
            + (f"equal to {target}, remove it." if hit else f"not {target}, keep it.")
        )
        yield sb.build()

        if hit:
            sb.clear()
            _head(sb, chain, arena)
            sb.mark(curr, "removed")
            sb.point("prev", chain[prev])
            sb.point("curr", curr)
            sb.phase = "remove"
            sb.narrative = f"This {target} is removed; prev stays where it is."
            yield sb.build()

            chain.pop(prev + 1)
            removed += 1
            sb.clear()
            _head(sb, chain, arena)
            sb.point("prev", chain[prev])
            sb.phase = "unlink"
            sb.count("writes")
            sb.narrative = "prev.next ← curr.next: the removed node is bypassed."
            yield sb.build()
        else:
            prev += 1
            sb.clear()
            _head(sb, chain, arena)
            sb.mark_many(chain[1:prev + 1], "visited")
            sb.point("prev", chain[prev])
            sb.phase = "advance"
            sb.narrative = f"Advance prev to the {arena.value(chain[prev])} node."
            yield sb.build()

    kept = values_of(arena, chain[1:])
    if removed:
        text = f"✅ Removed {removed} node(s) holding {target}: {kept}."
    else:
        text = f"❌ No node holds {target}; the list is unchanged: {kept}."
    yield _finish(sb, arena, chain, [dummy], text, removed=removed)


# ---------------------------------------------------------------------------
# Partition around a pivot
# ---------------------------------------------------------------------------
def partition_list(values: Sequence[int], pivot: int) -> Generator[Snapshot, None, None]:
    """
    Nodes below `pivot` keep their order in front of all others, which
    keep their order too. Two dummies anchor the two partial lists.
    """
    arena, rest, sb = new_list(values)
    sb.clear()
    _head(sb, rest, arena)
    sb.phase = "init"
    sb.narrative = f"Partition {list(values)}: values below {pivot} first, the rest after, order kept."
    yield sb.build()

    before = [arena.create_dummy()]
    after  = [arena.create_dummy()]
    sb.chains["before"] = before
    sb.chains["after"]  = after

    def place_pointers() -> None:
        if rest:
            sb.point("curr", rest[0])
        sb.point("before", before[-1])
        sb.point("after", after[-1])

    sb.clear()
    place_pointers()
    sb.phase = "dummy"
    sb.narrative = "Create two dummy anchors: one for the 'before' list, one for the 'after' list."
    yield sb.build()

    while rest:
        node  = rest[0]
        value = arena.value(node)
        small = value < pivot
        sb.clear()
        sb.mark(node, "comparing")
        place_pointers()
        sb.phase = "compare"
        sb.count("comparisons")
        sb.narrative = f"{value} {'<' if small else '≥'} {pivot}: it belongs to the '{'before' if small else 'after'}' list."
        yield sb.build()

        rest.pop(0)
        (before if small else after).append(node)
        sb.clear()
        sb.mark(node, "inserted")
        place_pointers()
        sb.phase = "to_before" if small else "to_after"
        sb.count("writes")
        sb.narrative = f"Append {value} to the tail of the '{'before' if small else 'after'}' list."
        yield sb.build()

    tail = after[1:]
    rest.extend(before)
    rest.extend(tail)
    del after[1:]
    del sb.chains["before"]
    sb.clear()
    _head(sb, rest, arena)
    sb.mark_many(tail, "window")
    sb.phase = "stitch"
    sb.count("writes")
    sb.narrative = "Cut the 'after' tail, then link the 'before' tail to the first real node of 'after'."
    yield sb.build()

    del sb.chains["after"]
    split = len(before) - 1
    yield _finish(
        sb, arena, rest, [before[0], after[0]],
        f"✅ Partitioned: {values_of(arena, rest[1:])}. The first {split} value(s) are below {pivot}.",
        pivot=pivot, split=split,
    )


# ---------------------------------------------------------------------------
# Drop every value that repeats (sorted list)
# ---------------------------------------------------------------------------
def remove_duplicate_runs(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    """
    A run of equal values disappears with a single `prev.next` assignment,
    so the whole run is tagged removed in one snapshot and unlinked in the next.
    """
    arena, chain, sb = new_list(values)
    sb.clear()
    _head(sb, chain, arena)
    sb.phase = "init"
    sb.narrative = f"Drop every value that appears more than once in sorted {list(values)}."
    yield sb.build()

    dummy = yield from _with_dummy(sb, arena, chain)
    prev = 0
    dropped: List[int] = []

    while prev + 1 < len(chain):
        pos  = prev + 1
        curr = chain[pos]
        value = arena.value(curr)
        has_next = pos + 1 < len(chain)
        repeats  = has_next and arena.value(chain[pos + 1]) == value

        sb.clear()
        _head(sb, chain, arena)
        sb.mark(curr, "comparing")
        sb.point("prev", chain[prev])
        sb.point("curr", curr)
        sb.phase = "compare"
        if has_next:
            sb.mark(chain[pos + 1], "comparing")
            sb.count("comparisons")
            sb.narrative = (
                f"curr holds {value}, the next node holds {arena.value(chain[pos + 1])}: "
                + ("a repeated value." if repeats else "not repeated here.")
            )
        else:
            sb.narrative = f"curr holds {value} and is the last node: nothing follows it."
        yield sb.build()

        if repeats:
            end = pos
            while end + 1 < len(chain) and arena.value(chain[end + 1]) == value:
                end += 1
                sb.count("comparisons")
            run = chain[pos:end + 1]
            sb.clear()
            _head(sb, chain, arena)
            sb.mark_many(run, "removed")
            sb.point("prev", chain[prev])
            sb.point("curr", curr)
            sb.phase = "remove"
            sb.narrative = f"Skip the whole run of {len(run)} × {value}; every copy goes."
            yield sb.build()

            del chain[pos:end + 1]
            dropped.append(value)
            sb.clear()
            _head(sb, chain, arena)
            sb.point("prev", chain[prev])
            sb.phase = "unlink"
            sb.count("writes")
            sb.narrative = f"prev.next ← the first node after the run: {value} no longer appears."
            yield sb.build()
        else:
            prev = pos
            sb.clear()
            _head(sb, chain, arena)
            sb.mark_many(chain[1:prev + 1], "visited")
            sb.point("prev", chain[prev])
            sb.phase = "advance"
            sb.narrative = f"{value} is unique: advance prev onto it."
            yield sb.build()

    kept = values_of(arena, chain[1:])
    if dropped:
        text = f"✅ Dropped every copy of {dropped}: {kept}."
    else:
        text = f"❌ No value repeats; the list is unchanged: {kept}."
    yield _finish(sb, arena, chain, [dummy], text, dropped=dropped)
