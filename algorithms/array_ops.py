"""
array_ops.py — Dynamic Array Operations
========================================
CRUD on a dynamic array: push (with capacity doubling), pop, insert and
delete at an index (one snapshot per shifted element), random access,
update, linear search, in-place reversal and a min/max scan.

The backing capacity is modelled as the smallest power of two ≥ the size
(at least 4) and reported in overlay["capacity"] next to overlay["size"].
A push into a full array first emits a resize snapshot.

Each call works on its own copy of the input; nothing is shared between
calls or between the snapshots of one call.
"""

from typing import Dict, Generator, List, Sequence

from algorithms.snapshot import Snapshot, SnapshotBuilder

MIN_CAPACITY = 4

# One short listing per operation; phase → line maps sit next to each.
PSEUDOCODE: Dict[str, List[str]] = {
    "push": [
        "if size == capacity:",
        "    grow capacity ×2, copy every element",
        "a[size] ← value;  size ← size + 1",
    ],
    "pop": [
        "x ← a[size - 1]",
        "size ← size - 1;  return x",
    ],
    "insert_at": [
        "if size == capacity: grow ×2",
        "for i in size-1 down to index: a[i+1] ← a[i]",
        "a[index] ← value;  size ← size + 1",
    ],
    "delete_at": [
        "x ← a[index]",
        "for i in index .. size-2: a[i] ← a[i+1]",
        "size ← size - 1;  return x",
    ],
    "access": ["return a[index]   (O(1): base + index × width)"],
    "update": ["a[index] ← value"],
    "linear_search": [
        "for i in 0 .. n-1:",
        "    if a[i] == target: return i",
        "return -1",
    ],
    "reverse": [
        "left ← 0;  right ← n - 1",
        "while left < right: swap a[left], a[right]; step inward",
        "return a",
    ],
    "find_min_max": [
        "lo ← hi ← a[0]",
        "for i in 1 .. n-1: update lo / hi with a[i]",
        "return (lo, hi)",
    ],
}

PHASES: Dict[str, Dict[str, int]] = {
    "push":          {"init": 0, "resize": 1, "done": 2},
    "pop":           {"init": 0, "remove": 0, "done": 1},
    "insert_at":     {"init": 0, "resize": 0, "shift": 1, "place": 2, "done": 2},
    "delete_at":     {"init": 0, "remove": 0, "shift": 1, "done": 2},
    "access":        {"init": 0, "done": 0},
    "update":        {"init": 0, "select": 0, "done": 0},
    "linear_search": {"init": 0, "compare": 1, "found": 1, "done": 2},
    "reverse":       {"init": 0, "swap": 1, "done": 2},
    "find_min_max":  {"init": 0, "compare": 1, "done": 2},
}


def capacity_for(size: int) -> int:
    cap = MIN_CAPACITY
    while cap < size:
        cap *= 2
    return cap


def _frame(sb: SnapshotBuilder, arr: List[int], cap: int) -> None:
    sb.clear()
    sb.overlay["capacity"] = cap
    sb.overlay["size"] = len(arr)


def _initial(sb: SnapshotBuilder, arr: List[int], cap: int, narrative: str) -> Snapshot:
    _frame(sb, arr, cap)
    sb.phase = "init"
    sb.narrative = narrative
    return sb.build()


# ---------------------------------------------------------------------------
# push / pop
# ---------------------------------------------------------------------------
def push(values: Sequence[int], value: int) -> Generator[Snapshot, None, None]:
    arr = list(values)
    cap = capacity_for(len(arr))
    sb  = SnapshotBuilder(arr)

    yield _initial(sb, arr, cap, f"Append {value} to {arr} (size {len(arr)}, capacity {cap}).")

    if len(arr) == cap:
        cap *= 2
        _frame(sb, arr, cap)
        sb.mark_many(range(len(arr)), "shifting")
        sb.phase = "resize"
        sb.count("writes", len(arr))
        sb.narrative = (
            f"The array is full: allocate a new block of capacity {cap} and copy all "
            f"{len(arr)} elements. This O(n) copy is rare, so push stays O(1) amortised."
        )
        yield sb.build()

    arr.append(value)
    _frame(sb, arr, cap)
    sb.mark(len(arr) - 1, "inserted")
    sb.phase = "done"
    sb.count("writes")
    sb.result = {"size": len(arr), "capacity": cap, "index": len(arr) - 1}
    sb.narrative = f"✅ Wrote {value} at index {len(arr) - 1}; size is now {len(arr)}."
    yield sb.build(terminal=True)


def pop(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr = list(values)
    cap = capacity_for(len(arr))
    sb  = SnapshotBuilder(arr)

    yield _initial(sb, arr, cap, f"Remove the last element of {arr}.")

    last = len(arr) - 1
    _frame(sb, arr, cap)
    sb.mark(last, "removed")
    sb.point("i", last)
    sb.phase = "remove"
    sb.narrative = f"The last element {arr[last]} is at index {last}; removing it needs no shifting."
    yield sb.build()

    popped = arr.pop()
    _frame(sb, arr, cap)
    sb.phase = "done"
    sb.count("writes")
    sb.result = {"popped": popped, "size": len(arr)}
    sb.narrative = f"✅ Popped {popped}; size is now {len(arr)}."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# insert / delete at index
# ---------------------------------------------------------------------------
def insert_at(values: Sequence[int], index: int, value: int) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for inserting `value` at `index` (0 ≤ index ≤ len).

    Elements from the end down to `index` move one slot right, one
    snapshot per moved element, before the value is placed.
    """
    arr = list(values)
    cap = capacity_for(len(arr))
    sb  = SnapshotBuilder(arr)
    n   = len(arr)

    yield _initial(sb, arr, cap, f"Insert {value} at index {index} of {arr}.")

    if n == cap:
        cap *= 2
        _frame(sb, arr, cap)
        sb.phase = "resize"
        sb.count("writes", n)
        sb.narrative = f"No free slot: grow the capacity to {cap} and copy {n} elements."
        yield sb.build()

    arr.append(None)
    for i in range(n, index, -1):
        arr[i] = arr[i - 1]
        _frame(sb, arr, cap)
        sb.mark(i, "shifting")
        sb.point("i", i)
        sb.phase = "shift"
        sb.count("writes")
        sb.narrative = f"Shift {arr[i]} from index {i - 1} to {i} to make room."
        yield sb.build()

    arr[index] = value
    _frame(sb, arr, cap)
    sb.mark(index, "inserted")
    sb.point("i", index)
    sb.phase = "place"
    sb.count("writes")
    sb.narrative = f"Place {value} at index {index}."
    yield sb.build()

    _frame(sb, arr, cap)
    sb.mark(index, "inserted")
    sb.phase = "done"
    sb.result = {"size": len(arr), "index": index, "shifted": n - index}
    sb.narrative = f"✅ Inserted {value} at index {index} after shifting {n - index} element(s): {arr}."
    yield sb.build(terminal=True)


def delete_at(values: Sequence[int], index: int) -> Generator[Snapshot, None, None]:
    arr = list(values)
    cap = capacity_for(len(arr))
    sb  = SnapshotBuilder(arr)
    n   = len(arr)

    yield _initial(sb, arr, cap, f"Delete the element at index {index} of {arr}.")

    removed = arr[index]
    _frame(sb, arr, cap)
    sb.mark(index, "removed")
    sb.point("i", index)
    sb.phase = "remove"
    sb.narrative = f"Remove {removed} at index {index}; the elements after it must close the gap."
    yield sb.build()

    for i in range(index, n - 1):
        arr[i] = arr[i + 1]
        _frame(sb, arr, cap)
        sb.mark(i, "shifting")
        sb.point("i", i)
        sb.phase = "shift"
        sb.count("writes")
        sb.narrative = f"Shift {arr[i]} from index {i + 1} to {i}."
        yield sb.build()

    arr.pop()
    _frame(sb, arr, cap)
    sb.phase = "done"
    sb.result = {"removed": removed, "size": len(arr), "shifted": n - 1 - index}
    sb.narrative = f"✅ Deleted {removed}; {n - 1 - index} element(s) shifted left: {arr}."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# access / update
# ---------------------------------------------------------------------------
def access(values: Sequence[int], index: int) -> Generator[Snapshot, None, None]:
    arr = list(values)
    cap = capacity_for(len(arr))
    sb  = SnapshotBuilder(arr)

    yield _initial(sb, arr, cap, f"Read the element at index {index} of {arr}.")

    _frame(sb, arr, cap)
    sb.mark(index, "found")
    sb.point("i", index)
    sb.phase = "done"
    sb.result = {"index": index, "value": arr[index]}
    sb.narrative = (
        f"✅ a[{index}] = {arr[index]}. The address is base + {index} × element size, "
        f"so access is O(1) with no scanning."
    )
    yield sb.build(terminal=True)


def update(values: Sequence[int], index: int, value: int) -> Generator[Snapshot, None, None]:
    arr = list(values)
    cap = capacity_for(len(arr))
    sb  = SnapshotBuilder(arr)

    yield _initial(sb, arr, cap, f"Overwrite index {index} of {arr} with {value}.")

    old = arr[index]
    _frame(sb, arr, cap)
    sb.mark(index, "comparing")
    sb.point("i", index)
    sb.phase = "select"
    sb.narrative = f"Jump straight to index {index}, which holds {old}."
    yield sb.build()

    arr[index] = value
    _frame(sb, arr, cap)
    sb.mark(index, "found")
    sb.point("i", index)
    sb.phase = "done"
    sb.count("writes")
    sb.result = {"index": index, "old": old, "new": value}
    sb.narrative = f"✅ a[{index}] changed from {old} to {value}."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# linear search
# ---------------------------------------------------------------------------
def linear_search(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    arr = list(values)
    cap = capacity_for(len(arr))
    sb  = SnapshotBuilder(arr)

    yield _initial(sb, arr, cap, f"Scan {arr} from the left for {target}.")

    for i, x in enumerate(arr):
        _frame(sb, arr, cap)
        sb.mark_many(range(i), "visited")
        sb.mark(i, "comparing")
        sb.point("i", i)
        sb.phase = "compare"
        sb.count("comparisons")
        if x == target:
            sb.narrative = f"a[{i}] = {x} equals {target}."
        else:
            sb.narrative = f"a[{i}] = {x} is not {target}; move on."
        yield sb.build()

        if x == target:
            _frame(sb, arr, cap)
            sb.mark_many(range(i), "visited")
            sb.mark(i, "found")
            sb.point("i", i)
            sb.phase = "found"
            sb.result = {"index": i, "comparisons": i + 1}
            sb.narrative = f"✅ Found {target} at index {i} after {i + 1} comparison(s)."
            yield sb.build(terminal=True)
            return

    _frame(sb, arr, cap)
    sb.mark_many(range(len(arr)), "visited")
    sb.phase = "done"
    sb.result = {"index": -1, "comparisons": len(arr)}
    sb.narrative = f"❌ {target} was not found after checking all {len(arr)} elements."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# reverse in place
# ---------------------------------------------------------------------------
def reverse(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr = list(values)
    cap = capacity_for(len(arr))
    sb  = SnapshotBuilder(arr)
    left, right = 0, len(arr) - 1
    done: List[int] = []

    _frame(sb, arr, cap)
    sb.point("left", left)
    sb.point("right", right)
    sb.phase = "init"
    sb.narrative = f"Reverse {arr} in place by swapping from both ends inward."
    yield sb.build()

    while left < right:
        arr[left], arr[right] = arr[right], arr[left]
        done.extend([left, right])
        _frame(sb, arr, cap)
        sb.mark_many(done, "visited")
        sb.mark_many([left, right], "swapping")
        sb.point("left", left)
        sb.point("right", right)
        sb.phase = "swap"
        sb.count("swaps")
        sb.narrative = f"Swap positions {left} and {right}: {arr[left]} ↔ {arr[right]}."
        yield sb.build()
        left, right = left + 1, right - 1

    _frame(sb, arr, cap)
    sb.mark_many(range(len(arr)), "found")
    sb.phase = "done"
    sb.result = {"reversed": list(arr), "swaps": sb.metrics["swaps"]}
    sb.narrative = f"✅ Reversed with {sb.metrics['swaps']} swap(s): {arr}."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# min / max scan
# ---------------------------------------------------------------------------
def find_min_max(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr = list(values)
    cap = capacity_for(len(arr))
    sb  = SnapshotBuilder(arr)
    lo_i = hi_i = 0

    yield _initial(sb, arr, cap, f"Find the minimum and maximum of {arr} in one pass.")

    for i in range(1, len(arr)):
        x = arr[i]
        prev_min, prev_max = arr[lo_i], arr[hi_i]
        notes = []
        if x < arr[lo_i]:
            notes.append(f"new minimum (was {prev_min})")
            lo_i = i
        if x > arr[hi_i]:
            notes.append(f"new maximum (was {prev_max})")
            hi_i = i
        _frame(sb, arr, cap)
        sb.mark_many(range(i), "visited")
        sb.mark(i, "comparing")
        sb.mark(lo_i, "minimum")
        sb.mark(hi_i, "best")
        sb.point("i", i)
        sb.point("min", lo_i)
        sb.point("max", hi_i)
        sb.phase = "compare"
        sb.count("comparisons", 2)
        sb.narrative = f"Compare {x} with min {prev_min} and max {prev_max}: " + (
            ", ".join(notes) if notes else "neither changes."
        )
        yield sb.build()

    _frame(sb, arr, cap)
    sb.mark(lo_i, "minimum")
    sb.mark(hi_i, "best")
    sb.point("min", lo_i)
    sb.point("max", hi_i)
    sb.phase = "done"
    sb.result = {"min": arr[lo_i], "min_index": lo_i, "max": arr[hi_i], "max_index": hi_i}
    sb.narrative = f"✅ Minimum {arr[lo_i]} at index {lo_i}; maximum {arr[hi_i]} at index {hi_i}."
    yield sb.build(terminal=True)
