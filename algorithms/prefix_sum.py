"""
prefix_sum.py — Prefix Sum Family
==================================
Building the prefix table, answering a range-sum query from it, and
counting subarrays that sum to k with a hash map of prefix counts.

The prefix table P has n + 1 entries with P[0] = 0 as the zero-sum
sentinel; P[i + 1] = P[i] + a[i]. The sentinel is present in the very
first Snapshot, before any accumulation step.

The table lives in overlay["prefix"]; overlay["prefix_focus"] lists the
P-indices the current step reads or writes so the renderer can light them.
"""

from typing import Dict, Generator, List, Sequence

from algorithms.snapshot import Snapshot, SnapshotBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
BUILD_PSEUDOCODE: List[str] = [
    "P[0] ← 0",                                  # 0
    "for i in 0 .. n-1:",                        # 1
    "    P[i+1] ← P[i] + a[i]",                  # 2
    "return P",                                  # 3
]
BUILD_PHASES = {"init": 0, "build": 2, "done": 3}

RANGE_PSEUDOCODE: List[str] = [
    "build P (P[0] = 0)",                        # 0
    "sum(l..r) = P[r+1] - P[l]",                 # 1
    "    read P[r+1]",                           # 2
    "    read P[l]",                             # 3
    "    subtract",                              # 4
]
RANGE_PHASES = {"init": 0, "build": 0, "range": 1, "lookup_right": 2, "lookup_left": 3, "done": 4}

SUBARRAY_K_PSEUDOCODE: List[str] = [
    "seen ← {0: 1};  run ← 0;  count ← 0",       # 0
    "for x in a:",                               # 1
    "    run ← run + x",                         # 2
    "    count ← count + seen.get(run - k, 0)",  # 3
    "    seen[run] ← seen.get(run, 0) + 1",      # 4
    "return count",                              # 5
]
SUBARRAY_K_PHASES = {"init": 0, "check": 2, "found": 3, "insert": 4, "done": 5}


def _build_steps(sb: SnapshotBuilder, arr: List[int], prefix: List[int]) -> Generator[Snapshot, None, None]:
    for i, x in enumerate(arr):
        prefix.append(prefix[i] + x)
        sb.clear()
        sb.mark(i, "active")
        sb.point("i", i)
        sb.overlay["prefix"] = list(prefix)
        sb.overlay["prefix_focus"] = [i, i + 1]
        sb.phase = "build"
        sb.count("writes")
        sb.narrative = f"P[{i + 1}] = P[{i}] + a[{i}] = {prefix[i]} + {x} = {prefix[i + 1]}."
        yield sb.build()


def _sentinel(sb: SnapshotBuilder, narrative: str) -> Snapshot:
    sb.phase = "init"
    sb.overlay["prefix"] = [0]
    sb.overlay["prefix_focus"] = [0]
    sb.narrative = narrative
    return sb.build()


# ---------------------------------------------------------------------------
# Build the prefix table
# ---------------------------------------------------------------------------
def build_prefix(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr = list(values)
    sb  = SnapshotBuilder(arr)
    prefix = [0]

    yield _sentinel(sb, f"Prefix sums of {arr}. P[0] = 0 is the sentinel: the sum of nothing.")
    yield from _build_steps(sb, arr, prefix)

    sb.clear()
    sb.mark_many(range(len(arr)), "visited")
    sb.overlay["prefix"] = list(prefix)
    sb.phase = "done"
    sb.result = {"prefix": list(prefix), "total": prefix[-1]}
    sb.narrative = f"✅ Prefix table complete: P = {prefix}. Any range sum is now one subtraction."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Range-sum query
# ---------------------------------------------------------------------------
def range_sum(values: Sequence[int], left: int, right: int) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for sum(a[left..right]) via the prefix table.

    Args:
        values      : Input sequence.
        left, right : Inclusive 0-based query range, left ≤ right.
    """
    arr = list(values)
    sb  = SnapshotBuilder(arr)
    prefix = [0]

    yield _sentinel(sb, f"Answer sum(a[{left}..{right}]) for {arr}. First build P, starting from the sentinel P[0] = 0.")
    yield from _build_steps(sb, arr, prefix)

    sb.clear()
    sb.mark_many(range(left, right + 1), "window")
    sb.point("left", left)
    sb.point("right", right)
    sb.overlay["prefix"] = list(prefix)
    sb.phase = "range"
    sb.narrative = f"Query range [{left}..{right}]: its sum is P[{right + 1}] - P[{left}]."
    yield sb.build()

    sb.clear()
    sb.mark_many(range(0, right + 1), "window")
    sb.point("left", left)
    sb.point("right", right)
    sb.overlay["prefix"] = list(prefix)
    sb.overlay["prefix_focus"] = [right + 1]
    sb.phase = "lookup_right"
    sb.narrative = f"P[{right + 1}] = {prefix[right + 1]} is the sum of a[0..{right}]."
    yield sb.build()

    sb.clear()
    sb.mark_many(range(0, left), "leaving")
    sb.mark_many(range(left, right + 1), "window")
    sb.point("left", left)
    sb.point("right", right)
    sb.overlay["prefix"] = list(prefix)
    sb.overlay["prefix_focus"] = [left]
    sb.phase = "lookup_left"
    if left == 0:
        sb.narrative = "P[0] = 0 is the sentinel: nothing precedes the range, so nothing is subtracted."
    else:
        sb.narrative = f"P[{left}] = {prefix[left]} is the sum of a[0..{left - 1}], the part before the range."
    yield sb.build()

    total = prefix[right + 1] - prefix[left]
    sb.clear()
    sb.mark_many(range(left, right + 1), "found")
    sb.point("left", left)
    sb.point("right", right)
    sb.overlay["prefix"] = list(prefix)
    sb.overlay["prefix_focus"] = [left, right + 1]
    sb.phase = "done"
    sb.result = {"sum": total, "range": [left, right]}
    sb.narrative = f"✅ sum(a[{left}..{right}]) = P[{right + 1}] - P[{left}] = {prefix[right + 1]} - {prefix[left]} = {total}."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Count subarrays summing to k
# ---------------------------------------------------------------------------
def subarray_sum_k(values: Sequence[int], k: int) -> Generator[Snapshot, None, None]:
    arr  = list(values)
    sb   = SnapshotBuilder(arr)
    seen: Dict[int, int] = {0: 1}
    ends: Dict[int, List[int]] = {0: [-1]}   # prefix value → positions where it occurred
    running = 0
    count = 0
    found: List[List[int]] = []

    sb.phase = "init"
    sb.overlay["seen"] = dict(seen)
    sb.overlay["running"] = running
    sb.narrative = (
        f"Count subarrays of {arr} that sum to {k}. seen = {{0: 1}} stands for the "
        f"empty prefix, so runs starting at index 0 are counted too."
    )
    yield sb.build()

    for i, x in enumerate(arr):
        running += x
        need = running - k
        hits = seen.get(need, 0)
        sb.clear()
        sb.mark(i, "active")
        sb.point("i", i)
        sb.overlay["seen"] = dict(seen)
        sb.overlay["running"] = running
        sb.overlay["need"] = need
        sb.phase = "check"
        sb.count("comparisons")
        if hits:
            sb.narrative = f"run = {running}. Look up run - k = {need}: seen {hits} time(s)."
        else:
            sb.narrative = f"run = {running}. Look up run - k = {need}: not seen, no subarray ends here."
        yield sb.build()

        if hits:
            count += hits
            matches = [[j + 1, i] for j in ends[need]]
            found.extend(matches)
            sb.clear()
            for start, end in matches:
                sb.mark_many(range(start, end + 1), "found")
            sb.point("i", i)
            sb.overlay["seen"] = dict(seen)
            sb.overlay["running"] = running
            sb.overlay["count"] = count
            sb.phase = "found"
            spans = ", ".join(f"[{s}..{e}]" for s, e in matches)
            sb.narrative = f"Found {hits} subarray(s) ending at {i}: {spans}. count = {count}."
            yield sb.build()

        seen[running] = seen.get(running, 0) + 1
        ends.setdefault(running, []).append(i)
        sb.clear()
        sb.point("i", i)
        sb.overlay["seen"] = dict(seen)
        sb.overlay["running"] = running
        sb.overlay["count"] = count
        sb.phase = "insert"
        sb.count("writes")
        sb.narrative = f"Record prefix {running}: seen[{running}] = {seen[running]}."
        yield sb.build()

    sb.clear()
    for start, end in found:
        sb.mark_many(range(start, end + 1), "found")
    sb.overlay["seen"] = dict(seen)
    sb.overlay["count"] = count
    sb.phase = "done"
    sb.result = {"count": count, "subarrays": found}
    if count:
        sb.narrative = f"✅ {count} subarray(s) sum to {k}: " + ", ".join(f"[{s}..{e}]" for s, e in found) + "."
    else:
        sb.narrative = f"❌ No subarray sums to {k}."
    yield sb.build(terminal=True)
