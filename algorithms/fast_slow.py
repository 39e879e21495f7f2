"""
fast_slow.py — Fast & Slow Pointers (Floyd)
============================================
Middle of a list, cycle detection, and locating the node where a cycle
begins.

Cycles:
  The chain stays a plain list of ids; the tail's back-link is stored in
  overlay["cycle_to"] as the id of the node the tail points to. Pointer
  moves follow that link, so positions are simulated with `_next()`
  instead of walking real references, and a cycle can never trap the
  snapshot copier.

`slow` advances one node per step, `fast` two; both moves happen in the
same loop iteration so they share one snapshot.
"""

from typing import Generator, List, Optional, Sequence

from algorithms.linked_list import new_list, values_of
from algorithms.snapshot import Snapshot, SnapshotBuilder


MIDDLE_PSEUDOCODE: List[str] = [
    "slow ← head;  fast ← head",                  # 0
    "while fast and fast.next:",                 # 1
    "    slow ← slow.next;  fast ← fast.next.next",  # 2
    "return slow",                               # 3
]
MIDDLE_PHASES = {"init": 0, "move": 2, "done": 3}

CYCLE_PSEUDOCODE: List[str] = [
    "slow ← head;  fast ← head",                 # 0
    "while fast and fast.next:",                 # 1
    "    slow ← slow.next;  fast ← fast.next.next",  # 2
    "    if slow == fast: return true",          # 3
    "return false",                              # 4
]
CYCLE_PHASES = {"init": 0, "move": 2, "meet": 3, "done": 4}

CYCLE_START_PSEUDOCODE: List[str] = [
    "slow ← head;  fast ← head",                 # 0
    "repeat: slow ← slow.next;  fast ← fast.next.next",  # 1
    "    until slow == fast  (or fast hits null → no cycle)",  # 2
    "slow ← head",                               # 3
    "while slow ≠ fast:",                        # 4
    "    slow ← slow.next;  fast ← fast.next",   # 5
    "return slow",                               # 6
]
CYCLE_START_PHASES = {"init": 0, "move": 1, "meet": 2, "reset": 3, "walk": 5, "done": 6}


def _next(pos: Optional[int], n: int, cycle_index: int) -> Optional[int]:
    if pos is None:
        return None
    if pos + 1 < n:
        return pos + 1
    return cycle_index if cycle_index >= 0 else None


def _frame(
    sb: SnapshotBuilder,
    ids: List[int],
    cycle_index: int,
    slow: Optional[int],
    fast: Optional[int],
) -> None:
    """Shared decoration: head, both pointers, the cycle link."""
    sb.clear()
    sb.point("head", ids[0])
    if cycle_index >= 0:
        sb.overlay["cycle_to"] = ids[cycle_index]
    if fast is not None:
        sb.point("fast", ids[fast])
        sb.mark(ids[fast], "leaving")
    if slow is not None:
        sb.point("slow", ids[slow])
        sb.mark(ids[slow], "active")
    if slow is not None and slow == fast:
        sb.mark(ids[slow], "found")


def _describe(pos: Optional[int], arena, ids: List[int]) -> str:
    return "null" if pos is None else f"the {arena.value(ids[pos])} node (position {pos})"


# ---------------------------------------------------------------------------
# Middle node
# ---------------------------------------------------------------------------
def find_middle(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    """For an even length the second of the two middle nodes is returned."""
    arena, ids, sb = new_list(values)
    n = len(ids)
    slow, fast = 0, 0

    _frame(sb, ids, -1, slow, fast)
    sb.phase = "init"
    sb.narrative = f"Find the middle of {list(values)}: slow moves 1 step, fast moves 2."
    yield sb.build()

    while fast is not None and _next(fast, n, -1) is not None:
        slow = _next(slow, n, -1)
        fast = _next(_next(fast, n, -1), n, -1)
        _frame(sb, ids, -1, slow, fast)
        sb.mark_many(ids[:slow], "visited")
        sb.phase = "move"
        sb.narrative = f"slow → {_describe(slow, arena, ids)}, fast → {_describe(fast, arena, ids)}."
        yield sb.build()

    _frame(sb, ids, -1, slow, None)
    sb.mark(ids[slow], "found")
    sb.phase = "done"
    sb.result = {"index": slow, "value": arena.value(ids[slow]), "list": values_of(arena, ids)}
    reason = "fast is null" if fast is None else "fast is on the last node"
    sb.narrative = f"✅ {reason}, so slow sits on the middle: {arena.value(ids[slow])} at position {slow}."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Cycle detection / cycle start
# ---------------------------------------------------------------------------
def _chase(
    sb: SnapshotBuilder,
    arena,
    ids: List[int],
    cycle_index: int,
) -> Generator[Snapshot, None, Optional[int]]:
    """Runs the first Floyd phase; returns the meeting position or None."""
    n = len(ids)
    slow, fast = 0, 0
    while fast is not None and _next(fast, n, cycle_index) is not None:
        slow = _next(slow, n, cycle_index)
        fast = _next(_next(fast, n, cycle_index), n, cycle_index)
        _frame(sb, ids, cycle_index, slow, fast)
        sb.phase = "move"
        sb.count("comparisons")
        sb.narrative = f"slow → {_describe(slow, arena, ids)}, fast → {_describe(fast, arena, ids)}."
        if slow == fast:
            sb.narrative += " They are on the same node."
        yield sb.build()
        if slow == fast:
            return slow
    return None


def _start(sb: SnapshotBuilder, ids: List[int], cycle_index: int, narrative: str) -> Snapshot:
    _frame(sb, ids, cycle_index, 0, 0)
    sb.phase = "init"
    sb.narrative = narrative
    return sb.build()


def _link_text(arena, ids: List[int], cycle_index: int) -> str:
    if cycle_index < 0:
        return "the tail points to null"
    return f"the tail links back to the {arena.value(ids[cycle_index])} node (position {cycle_index})"


def detect_cycle(values: Sequence[int], cycle_index: int = -1) -> Generator[Snapshot, None, None]:
    """
    Args:
        values      : Node values.
        cycle_index : Position the tail links back to; -1 means no cycle.
    """
    arena, ids, sb = new_list(values)
    yield _start(sb, ids, cycle_index, f"Does {list(values)} contain a cycle? Here {_link_text(arena, ids, cycle_index)}.")

    meet = yield from _chase(sb, arena, ids, cycle_index)

    if meet is None:
        _frame(sb, ids, cycle_index, None, None)
        sb.mark_many(ids, "visited")
        sb.phase = "done"
        sb.result = {"has_cycle": False, "meeting_index": None}
        sb.narrative = "❌ No cycle: fast reached the end of the list."
    else:
        _frame(sb, ids, cycle_index, meet, meet)
        sb.phase = "meet"
        sb.result = {"has_cycle": True, "meeting_index": meet}
        sb.narrative = f"✅ Cycle detected: slow and fast met on the {arena.value(ids[meet])} node (position {meet})."
    yield sb.build(terminal=True)


def find_cycle_start(values: Sequence[int], cycle_index: int = -1) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    n = len(ids)
    yield _start(sb, ids, cycle_index, f"Find where the cycle begins in {list(values)}; {_link_text(arena, ids, cycle_index)}.")

    meet = yield from _chase(sb, arena, ids, cycle_index)

    if meet is None:
        _frame(sb, ids, cycle_index, None, None)
        sb.mark_many(ids, "visited")
        sb.phase = "done"
        sb.result = {"has_cycle": False, "start_index": None}
        sb.narrative = "❌ No cycle: fast reached the end of the list, so there is no cycle start."
        yield sb.build(terminal=True)
        return

    slow, fast = 0, meet
    _frame(sb, ids, cycle_index, slow, fast)
    sb.phase = "reset"
    sb.narrative = (
        "They met inside the cycle. Move slow back to the head and leave fast at the meeting point; "
        "from now on both move one step."
    )
    yield sb.build()

    while slow != fast:
        slow = _next(slow, n, cycle_index)
        fast = _next(fast, n, cycle_index)
        _frame(sb, ids, cycle_index, slow, fast)
        sb.phase = "walk"
        sb.count("comparisons")
        sb.narrative = f"slow → {_describe(slow, arena, ids)}, fast → {_describe(fast, arena, ids)}."
        yield sb.build()

    _frame(sb, ids, cycle_index, slow, fast)
    sb.phase = "done"
    sb.result = {"has_cycle": True, "start_index": slow, "value": arena.value(ids[slow])}
    sb.narrative = f"✅ The cycle starts at the {arena.value(ids[slow])} node (position {slow})."
    yield sb.build(terminal=True)
