"""
reversal.py — In-Place Sublist Reversal
========================================
Reverse positions left..right (1-based), reverse in groups of k, and
swap adjacent pairs.

All three anchor on a dummy node and use the "front insertion" move:
the node after `curr` is cut out and re-linked right after `prev`. One
move is three pointer assignments done together, so it is one snapshot.
"""

from typing import Generator, List, Sequence

from algorithms.linked_list import detach_dummies, new_list, values_of
from algorithms.snapshot import Snapshot, SnapshotBuilder
from structures.arena import NodeArena


BETWEEN_PSEUDOCODE: List[str] = [
    "dummy.next ← head;  prev ← dummy",          # 0
    "repeat left - 1 times: prev ← prev.next",   # 1
    "curr ← prev.next",                          # 2
    "repeat right - left times:",                # 3
    "    nxt ← curr.next",                       # 4
    "    curr.next ← nxt.next;  nxt.next ← prev.next;  prev.next ← nxt",  # 5
    "return dummy.next",                         # 6
]
BETWEEN_PHASES = {"init": 0, "dummy": 0, "walk": 1, "anchor": 2, "move": 5, "done": 6}

K_GROUP_PSEUDOCODE: List[str] = [
    "dummy.next ← head;  group_prev ← dummy",    # 0
    "while k nodes follow group_prev:",          # 1
    "    curr ← group_prev.next",                # 2
    "    repeat k - 1 times: move curr.next to the group front",  # 3
    "    group_prev ← curr",                     # 4
    "leave a short tail as it is",               # 5
    "return dummy.next",                         # 6
]
K_GROUP_PHASES = {"init": 0, "dummy": 0, "check": 1, "move": 3, "group": 4, "leftover": 5, "done": 6}

SWAP_PAIRS_PSEUDOCODE: List[str] = [
    "dummy.next ← head;  prev ← dummy",          # 0
    "while prev.next and prev.next.next:",       # 1
    "    a ← prev.next;  b ← a.next",            # 2
    "    a.next ← b.next;  b.next ← a;  prev.next ← b",  # 3
    "    prev ← a",                              # 4
    "return dummy.next",                         # 5
]
SWAP_PAIRS_PHASES = {"init": 0, "dummy": 0, "pair": 2, "swap": 3, "done": 5}


def _head(sb: SnapshotBuilder, chain: List[int]) -> None:
    if len(chain) > 1:
        sb.point("head", chain[1])


def _setup(values: Sequence[int], narrative: str):
    arena, chain, sb = new_list(values)
    sb.clear()
    sb.point("head", chain[0])
    sb.phase = "init"
    sb.narrative = narrative
    first = sb.build()

    dummy = arena.create_dummy()
    chain.insert(0, dummy)
    sb.clear()
    _head(sb, chain)
    sb.point("prev", dummy)
    sb.phase = "dummy"
    sb.narrative = "Put a dummy node D in front of the head so reversing from position 1 needs no special case."
    return arena, chain, sb, dummy, [first, sb.build()]


def _move(sb: SnapshotBuilder, arena: NodeArena, chain: List[int], prev: int, curr: int) -> Snapshot:
    """Cut the node after `curr` and re-link it right after `prev` (chain positions)."""
    nxt = chain.pop(curr + 1)
    chain.insert(prev + 1, nxt)
    curr += 1
    sb.clear()
    _head(sb, chain)
    sb.mark_many(chain[prev + 1:curr + 1], "window")
    sb.mark(nxt, "swapping")
    sb.point("prev", chain[prev])
    sb.point("curr", chain[curr])
    sb.point("next", nxt)
    sb.phase = "move"
    sb.count("writes", 3)
    sb.narrative = (
        f"Move {arena.value(nxt)} to the front of the reversed block: "
        f"curr ({arena.value(chain[curr])}).next skips it, it now follows prev."
    )
    return sb.build()


def _finish(sb: SnapshotBuilder, arena: NodeArena, chain: List[int], dummy: int, narrative: str, **result) -> Snapshot:
    detach_dummies(sb, chain, dummy)
    sb.clear()
    if chain:
        sb.point("head", chain[0])
    sb.mark_many(chain, "found")
    sb.phase = "done"
    sb.result = dict(result, list=values_of(arena, chain), length=len(chain))
    sb.narrative = narrative
    return sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Reverse positions left..right
# ---------------------------------------------------------------------------
def reverse_between(values: Sequence[int], left: int, right: int) -> Generator[Snapshot, None, None]:
    """
    Args:
        values : Node values.
        left   : First position to reverse, 1-based.
        right  : Last position to reverse, 1-based, left ≤ right ≤ len.
    """
    arena, chain, sb, dummy, frames = _setup(
        values, f"Reverse positions {left}..{right} (1-based) of {list(values)} in one pass."
    )
    yield from frames

    prev = 0
    for _ in range(left - 1):
        prev += 1
        sb.clear()
        _head(sb, chain)
        sb.mark_many(chain[1:prev], "visited")
        sb.mark(chain[prev], "active")
        sb.point("prev", chain[prev])
        sb.phase = "walk"
        sb.narrative = f"prev → position {prev} (value {arena.value(chain[prev])})."
        yield sb.build()

    curr = prev + 1
    sb.clear()
    _head(sb, chain)
    sb.mark_many(chain[curr:right + 1], "window")
    sb.point("prev", chain[prev])
    sb.point("curr", chain[curr])
    sb.phase = "anchor"
    sb.narrative = (
        f"prev stays just before the block; curr ({arena.value(chain[curr])}) will end up "
        f"last in it. {right - left} move(s) needed."
    )
    yield sb.build()

    for step in range(right - left):
        yield _move(sb, arena, chain, prev, curr + step)

    yield _finish(
        sb, arena, chain, dummy,
        f"✅ Positions {left}..{right} reversed: {values_of(arena, chain[1:])}.",
        range=[left, right],
    )


# ---------------------------------------------------------------------------
# Reverse in groups of k
# ---------------------------------------------------------------------------
def reverse_k_group(values: Sequence[int], k: int) -> Generator[Snapshot, None, None]:
    arena, chain, sb, dummy, frames = _setup(
        values, f"Reverse {list(values)} in groups of {k}; a shorter tail stays as it is."
    )
    yield from frames

    group_prev = 0
    groups = 0
    while True:
        block = chain[group_prev + 1:group_prev + 1 + k]
        full  = len(block) == k

        sb.clear()
        _head(sb, chain)
        sb.mark_many(chain[1:group_prev + 1], "found")
        sb.mark_many(block, "window" if full else "visited")
        sb.point("prev", chain[group_prev])
        sb.phase = "check"
        sb.count("comparisons")
        if full:
            sb.narrative = f"{k} nodes follow prev: {values_of(arena, block)}. Reverse this group."
        else:
            sb.narrative = f"Only {len(block)} node(s) left, fewer than {k}."
        yield sb.build()

        if not full:
            break

        curr = group_prev + 1
        for step in range(k - 1):
            yield _move(sb, arena, chain, group_prev, curr + step)

        group_prev += k
        groups += 1
        sb.clear()
        _head(sb, chain)
        sb.mark_many(chain[1:group_prev + 1], "found")
        sb.point("prev", chain[group_prev])
        sb.phase = "group"
        sb.narrative = f"Group {groups} reversed; prev moves to its last node ({arena.value(chain[group_prev])})."
        yield sb.build()

    leftover = len(chain) - 1 - group_prev
    if leftover:
        sb.clear()
        _head(sb, chain)
        sb.mark_many(chain[1:group_prev + 1], "found")
        sb.mark_many(chain[group_prev + 1:], "visited")
        sb.phase = "leftover"
        sb.narrative = f"The last {leftover} node(s) do not fill a group and keep their order."
        yield sb.build()

    yield _finish(
        sb, arena, chain, dummy,
        f"✅ Reversed {groups} group(s) of {k}: {values_of(arena, chain[1:])}.",
        groups=groups, k=k,
    )


# ---------------------------------------------------------------------------
# Swap adjacent pairs
# ---------------------------------------------------------------------------
def swap_pairs(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arena, chain, sb, dummy, frames = _setup(values, f"Swap every two adjacent nodes of {list(values)}.")
    yield from frames

    prev = 0
    swaps = 0
    while prev + 2 < len(chain):
        a, b = chain[prev + 1], chain[prev + 2]
        sb.clear()
        _head(sb, chain)
        sb.mark_many(chain[1:prev + 1], "found")
        sb.mark_many([a, b], "comparing")
        sb.point("prev", chain[prev])
        sb.point("a", a)
        sb.point("b", b)
        sb.phase = "pair"
        sb.narrative = f"Next pair after prev: {arena.value(a)} and {arena.value(b)}."
        yield sb.build()

        chain[prev + 1], chain[prev + 2] = b, a
        swaps += 1
        sb.clear()
        _head(sb, chain)
        sb.mark_many(chain[1:prev + 1], "found")
        sb.mark_many([a, b], "swapping")
        sb.point("prev", chain[prev])
        sb.point("a", a)
        sb.point("b", b)
        sb.phase = "swap"
        sb.count("swaps")
        sb.narrative = (
            f"a.next ← b.next, b.next ← a, prev.next ← b: now {arena.value(b)} comes before "
            f"{arena.value(a)}. prev moves onto {arena.value(a)}."
        )
        yield sb.build()
        prev += 2

    if prev + 1 < len(chain):
        text = f"✅ Swapped {swaps} pair(s); the odd last node stays put: {values_of(arena, chain[1:])}."
    else:
        text = f"✅ Swapped {swaps} pair(s): {values_of(arena, chain[1:])}."
    yield _finish(sb, arena, chain, dummy, text, swaps=swaps)
