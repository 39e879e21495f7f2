"""
sorting.py — Comparison Sorts
==============================
Generator-based bubble, selection, insertion and quick sort. Each yields
a Snapshot at every event a learner should see:
  1. Compare two positions        →  both tagged COMPARING
  2. Swap / shift / place         →  tagged SWAPPING / SHIFTING / INSERTED
  3. A position becomes final     →  tagged SORTED (kept on every later frame)
  4. Final snapshot               →  every position SORTED, result attached

A compare and the swap it triggers are two snapshots (two decisions); the
two halves of one swap are one snapshot (simultaneous).

Bubble sort scans a full pass before concluding no swap happened; that
conclusion gets its own snapshot which marks every remaining position
sorted and explains the early stop.
"""

from typing import Generator, List, Sequence, Set

from algorithms.snapshot import Snapshot, SnapshotBuilder


# ---------------------------------------------------------------------------
# Pseudocode: each string is one displayed line; PHASES maps phase → line
# ---------------------------------------------------------------------------
BUBBLE_PSEUDOCODE: List[str] = [
    "for i in 0 .. n-2:",                        # 0
    "    swapped ← false",                       # 1
    "    for j in 0 .. n-2-i:",                  # 2
    "        if a[j] > a[j+1]:",                 # 3
    "            swap a[j], a[j+1]",             # 4
    "            swapped ← true",                # 5
    "    if not swapped: break",                 # 6
    "return a",                                  # 7
]
BUBBLE_PHASES = {"init": 0, "compare": 3, "swap": 4, "pass": 2, "early_exit": 6, "done": 7}

SELECTION_PSEUDOCODE: List[str] = [
    "for i in 0 .. n-2:",                        # 0
    "    min ← i",                               # 1
    "    for j in i+1 .. n-1:",                  # 2
    "        if a[j] < a[min]: min ← j",         # 3
    "    swap a[i], a[min]",                     # 4
    "return a",                                  # 5
]
SELECTION_PHASES = {"init": 0, "select": 1, "compare": 3, "minimum": 3, "swap": 4, "done": 5}

INSERTION_PSEUDOCODE: List[str] = [
    "for i in 1 .. n-1:",                        # 0
    "    key ← a[i];  j ← i - 1",                # 1
    "    while j ≥ 0 and a[j] > key:",           # 2
    "        a[j+1] ← a[j];  j ← j - 1",         # 3
    "    a[j+1] ← key",                          # 4
    "return a",                                  # 5
]
INSERTION_PHASES = {"init": 0, "pick": 1, "compare": 2, "shift": 3, "insert": 4, "done": 5}

QUICK_PSEUDOCODE: List[str] = [
    "quicksort(lo, hi):",                        # 0
    "    if lo ≥ hi: return",                    # 1
    "    pivot ← a[hi];  i ← lo",                # 2
    "    for j in lo .. hi-1:",                  # 3
    "        if a[j] < pivot:",                  # 4
    "            swap a[i], a[j];  i ← i + 1",   # 5
    "    swap a[i], a[hi]",                      # 6
    "    quicksort(lo, i-1);  quicksort(i+1, hi)",  # 7
]
QUICK_PHASES = {"init": 0, "base": 1, "pivot": 2, "compare": 4, "swap": 5, "place": 6, "done": 0}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------
def _frame(sb: SnapshotBuilder, done: Set[int]) -> None:
    """Start a new frame: drop last frame's decoration, keep the sorted marks."""
    sb.clear()
    sb.mark_many(done, "sorted")


def _finish(sb: SnapshotBuilder, arr: List[int], name: str) -> Snapshot:
    _frame(sb, set(range(len(arr))))
    sb.phase = "done"
    sb.result = {
        "sorted":      list(arr),
        "comparisons": sb.metrics["comparisons"],
        "swaps":       sb.metrics["swaps"],
    }
    sb.narrative = (
        f"✅ {name} complete: {arr} after {sb.metrics['comparisons']} comparisons "
        f"and {sb.metrics['swaps']} swaps."
    )
    return sb.build(terminal=True)


def _initial(sb: SnapshotBuilder, arr: List[int], name: str) -> Snapshot:
    sb.phase = "init"
    sb.narrative = f"{name} on {arr} ({len(arr)} elements). Nothing has moved yet."
    return sb.build()


# ---------------------------------------------------------------------------
# Bubble sort
# ---------------------------------------------------------------------------
def bubble_sort(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for bubble sort with early termination.

    Args:
        values : The sequence to sort (not mutated; a working copy is used).

    Yields:
        Snapshot – one per compare, swap, pass end, early stop and the final state.
    """
    arr  = list(values)
    n    = len(arr)
    sb   = SnapshotBuilder(arr)
    done: Set[int] = set()

    yield _initial(sb, arr, "Bubble sort")

    for i in range(n - 1):
        swapped = False
        for j in range(n - 1 - i):
            _frame(sb, done)
            sb.mark_many([j, j + 1], "comparing")
            sb.point("j", j)
            sb.phase = "compare"
            sb.count("comparisons")
            if arr[j] > arr[j + 1]:
                sb.narrative = f"Pass {i + 1}: {arr[j]} > {arr[j + 1]}, so they are out of order."
            else:
                sb.narrative = f"Pass {i + 1}: {arr[j]} ≤ {arr[j + 1]}, already in order."
            yield sb.build()

            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
                _frame(sb, done)
                sb.mark_many([j, j + 1], "swapping")
                sb.point("j", j)
                sb.phase = "swap"
                sb.count("swaps")
                sb.narrative = f"Swap positions {j} and {j + 1}: now {arr[j]} comes before {arr[j + 1]}."
                yield sb.build()

        if not swapped:
            done.update(range(n))
            _frame(sb, done)
            sb.phase = "early_exit"
            sb.narrative = (
                f"Early termination: pass {i + 1} made no swaps, so every element "
                f"is already in order. Stopping without the remaining passes."
            )
            yield sb.build()
            break

        done.add(n - 1 - i)
        _frame(sb, done)
        sb.phase = "pass"
        sb.narrative = (
            f"Pass {i + 1} complete: the largest unsorted value {arr[n - 1 - i]} "
            f"has bubbled to position {n - 1 - i}."
        )
        yield sb.build()

    yield _finish(sb, arr, "Bubble sort")


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def selection_sort(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr  = list(values)
    n    = len(arr)
    sb   = SnapshotBuilder(arr)
    done: Set[int] = set()

    yield _initial(sb, arr, "Selection sort")

    for i in range(n - 1):
        min_idx = i
        _frame(sb, done)
        sb.mark(i, "minimum")
        sb.point("i", i)
        sb.point("min", i)
        sb.phase = "select"
        sb.narrative = f"Round {i + 1}: assume {arr[i]} at position {i} is the minimum of the unsorted part."
        yield sb.build()

        for j in range(i + 1, n):
            _frame(sb, done)
            sb.mark(min_idx, "minimum")
            sb.mark(j, "comparing")
            sb.point("i", i)
            sb.point("min", min_idx)
            sb.point("j", j)
            sb.phase = "compare"
            sb.count("comparisons")
            if arr[j] < arr[min_idx]:
                sb.narrative = f"Compare {arr[j]} with current minimum {arr[min_idx]}: smaller."
            else:
                sb.narrative = f"Compare {arr[j]} with current minimum {arr[min_idx]}: not smaller, keep scanning."
            yield sb.build()

            if arr[j] < arr[min_idx]:
                min_idx = j
                _frame(sb, done)
                sb.mark(min_idx, "minimum")
                sb.point("i", i)
                sb.point("min", min_idx)
                sb.phase = "minimum"
                sb.narrative = f"New minimum {arr[min_idx]} at position {min_idx}."
                yield sb.build()

        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            done.add(i)
            _frame(sb, done)
            sb.mark_many([i, min_idx], "swapping")
            sb.point("i", i)
            sb.phase = "swap"
            sb.count("swaps")
            sb.narrative = f"Swap the minimum {arr[i]} into position {i}; position {i} is now final."
        else:
            done.add(i)
            _frame(sb, done)
            sb.point("i", i)
            sb.phase = "swap"
            sb.narrative = f"{arr[i]} is already the minimum and stays at position {i}; no swap needed."
        yield sb.build()

    yield _finish(sb, arr, "Selection sort")


# ---------------------------------------------------------------------------
# Insertion sort
# ---------------------------------------------------------------------------
def insertion_sort(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr = list(values)
    n   = len(arr)
    sb  = SnapshotBuilder(arr)

    yield _initial(sb, arr, "Insertion sort")

    for i in range(1, n):
        key = arr[i]
        sb.clear()
        sb.mark(i, "active")
        sb.point("i", i)
        sb.overlay["key"] = key
        sb.phase = "pick"
        sb.narrative = f"Pick key {key} at position {i}; positions 0..{i - 1} are sorted among themselves."
        yield sb.build()

        j = i - 1
        while j >= 0:
            sb.clear()
            sb.mark(j, "comparing")
            sb.point("j", j)
            sb.overlay["key"] = key
            sb.phase = "compare"
            sb.count("comparisons")
            if arr[j] > key:
                sb.narrative = f"{arr[j]} > key {key}: it must move one place right."
            else:
                sb.narrative = f"{arr[j]} ≤ key {key}: the key belongs right after it."
            yield sb.build()
            if arr[j] <= key:
                break

            arr[j + 1] = arr[j]
            sb.clear()
            sb.mark(j + 1, "shifting")
            sb.point("j", j)
            sb.overlay["key"] = key
            sb.phase = "shift"
            sb.count("writes")
            sb.narrative = f"Shift {arr[j]} from position {j} to {j + 1}."
            yield sb.build()
            j -= 1

        arr[j + 1] = key
        sb.clear()
        sb.mark(j + 1, "inserted")
        sb.point("i", i)
        sb.phase = "insert"
        sb.count("writes")
        sb.narrative = f"Insert key {key} at position {j + 1}; positions 0..{i} are now in order."
        yield sb.build()

    yield _finish(sb, arr, "Insertion sort")


# ---------------------------------------------------------------------------
# Quick sort (Lomuto partition, last element as pivot)
# ---------------------------------------------------------------------------
def quick_sort(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr  = list(values)
    sb   = SnapshotBuilder(arr)
    done: Set[int] = set()

    yield _initial(sb, arr, "Quick sort")
    yield from _quick(sb, arr, 0, len(arr) - 1, done)
    yield _finish(sb, arr, "Quick sort")


def _quick(
    sb: SnapshotBuilder,
    arr: List[int],
    lo: int,
    hi: int,
    done: Set[int],
) -> Generator[Snapshot, None, None]:
    if lo > hi:
        return
    if lo == hi:
        done.add(lo)
        _frame(sb, done)
        sb.point("lo", lo)
        sb.point("hi", hi)
        sb.phase = "base"
        sb.narrative = f"Range [{lo}, {hi}] holds one element ({arr[lo]}); it is already in place."
        yield sb.build()
        return

    pivot = arr[hi]
    _frame(sb, done)
    sb.mark_many(range(lo, hi), "active")
    sb.mark(hi, "pivot")
    sb.point("lo", lo)
    sb.point("hi", hi)
    sb.phase = "pivot"
    sb.narrative = f"Partition [{lo}, {hi}] around pivot {pivot} (the last element)."
    yield sb.build()

    i = lo
    for j in range(lo, hi):
        _frame(sb, done)
        sb.mark(hi, "pivot")
        sb.mark(j, "comparing")
        sb.point("i", i)
        sb.point("j", j)
        sb.phase = "compare"
        sb.count("comparisons")
        if arr[j] < pivot:
            sb.narrative = f"{arr[j]} < pivot {pivot}: it belongs in the left part."
        else:
            sb.narrative = f"{arr[j]} ≥ pivot {pivot}: leave it in the right part."
        yield sb.build()

        if arr[j] < pivot:
            if i != j:
                arr[i], arr[j] = arr[j], arr[i]
                _frame(sb, done)
                sb.mark(hi, "pivot")
                sb.mark_many([i, j], "swapping")
                sb.point("i", i)
                sb.point("j", j)
                sb.phase = "swap"
                sb.count("swaps")
                sb.narrative = f"Swap {arr[i]} into the left part at position {i}."
                yield sb.build()
            i += 1

    if i != hi:
        arr[i], arr[hi] = arr[hi], arr[i]
        sb.count("swaps")
    done.add(i)
    _frame(sb, done)
    sb.mark(i, "pivot")
    sb.point("i", i)
    sb.phase = "place"
    sb.narrative = (
        f"Place pivot {pivot} at position {i}: everything left of it is smaller, "
        f"everything right of it is greater or equal."
    )
    yield sb.build()

    yield from _quick(sb, arr, lo, i - 1, done)
    yield from _quick(sb, arr, i + 1, hi, done)
