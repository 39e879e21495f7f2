"""
sliding_window.py — Sliding Window Family
==========================================
Fixed-size maximum-sum window, minimum-length subarray reaching a target
sum (variable window) and longest run of distinct values.

Tags:
  WINDOW   – inside the current window
  ENTERING – the element that just joined the window
  LEAVING  – the element that just dropped out
  BEST     – the best window found so far / the final answer

Pointers `left` and `right` bound the window (inclusive). When a sum is
below the target the window grows on the right; when it reaches the
target it shrinks from the left.
"""

from typing import Dict, Generator, List, Sequence

from algorithms.snapshot import Snapshot, SnapshotBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
MAX_SUM_PSEUDOCODE: List[str] = [
    "sum ← a[0] + … + a[k-1];  best ← sum",      # 0
    "for right in k .. n-1:",                    # 1
    "    sum ← sum + a[right] - a[right-k]",     # 2
    "    best ← max(best, sum)",                 # 3
    "return best",                               # 4
]
MAX_SUM_PHASES = {"init": 0, "build": 0, "first_window": 0, "slide": 2, "compare": 3, "done": 4}

MIN_LEN_PSEUDOCODE: List[str] = [
    "left ← 0;  sum ← 0;  best ← ∞",             # 0
    "for right in 0 .. n-1:",                    # 1
    "    sum ← sum + a[right]",                  # 2
    "    while sum ≥ target:",                   # 3
    "        best ← min(best, right - left + 1)",  # 4
    "        sum ← sum - a[left];  left ← left + 1",  # 5
    "return best (or 0 if ∞)",                   # 6
]
MIN_LEN_PHASES = {"init": 0, "expand": 2, "record": 4, "shrink": 5, "done": 6}

UNIQUE_PSEUDOCODE: List[str] = [
    "left ← 0;  last ← {}",                      # 0
    "for right in 0 .. n-1:",                    # 1
    "    if a[right] in last and last[a[right]] ≥ left:",  # 2
    "        left ← last[a[right]] + 1",         # 3
    "    last[a[right]] ← right",                # 4
    "    best ← max(best, right - left + 1)",    # 5
    "return best",                               # 6
]
UNIQUE_PHASES = {"init": 0, "duplicate": 2, "jump": 3, "expand": 5, "done": 6}


def _window(sb: SnapshotBuilder, left: int, right: int, tag: str = "window") -> None:
    sb.mark_many(range(left, right + 1), tag)
    sb.point("left", left)
    sb.point("right", right)


# ---------------------------------------------------------------------------
# Maximum-sum window of fixed size k
# ---------------------------------------------------------------------------
def max_sum_window(values: Sequence[int], k: int) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for the fixed-size maximum-sum window.

    Args:
        values : Input sequence.
        k      : Window size, 1 ≤ k ≤ len(values).

    Yields:
        Snapshot – one per element added to the first window, then a slide
        and a comparison per later position, then the final answer.
    """
    arr = list(values)
    n   = len(arr)
    sb  = SnapshotBuilder(arr)

    sb.phase = "init"
    sb.narrative = f"Find the maximum sum of any {k} consecutive elements in {arr}."
    yield sb.build()

    window_sum = 0
    for i in range(k):
        window_sum += arr[i]
        sb.clear()
        _window(sb, 0, i)
        sb.mark(i, "entering")
        sb.overlay["window_sum"] = window_sum
        sb.phase = "build"
        sb.narrative = f"Build the first window: add {arr[i]} → sum = {window_sum}."
        yield sb.build()

    best, best_start = window_sum, 0
    sb.clear()
    _window(sb, 0, k - 1, "best")
    sb.overlay["window_sum"] = window_sum
    sb.overlay["best_sum"] = best
    sb.phase = "first_window"
    sb.narrative = f"First window [0..{k - 1}] sums to {window_sum}; it is the best so far."
    yield sb.build()

    for right in range(k, n):
        left = right - k + 1
        window_sum += arr[right] - arr[right - k]
        sb.clear()
        _window(sb, left, right)
        sb.mark(right - k, "leaving")
        sb.mark(right, "entering")
        sb.overlay["window_sum"] = window_sum
        sb.overlay["best_sum"] = best
        sb.phase = "slide"
        sb.narrative = (
            f"Slide right: drop {arr[right - k]}, add {arr[right]} → "
            f"sum = {window_sum} for [{left}..{right}]."
        )
        yield sb.build()

        sb.clear()
        sb.count("comparisons")
        if window_sum > best:
            best, best_start = window_sum, left
            _window(sb, left, right, "best")
            sb.narrative = f"{window_sum} beats the previous best: new maximum over [{left}..{right}]."
        else:
            _window(sb, left, right)
            sb.narrative = f"{window_sum} does not beat the best sum {best}."
        sb.overlay["window_sum"] = window_sum
        sb.overlay["best_sum"] = best
        sb.phase = "compare"
        yield sb.build()

    best_end = best_start + k - 1
    sb.clear()
    _window(sb, best_start, best_end, "best")
    sb.overlay["best_sum"] = best
    sb.phase = "done"
    sb.result = {"sum": best, "positions": [best_start, best_end], "values": arr[best_start:best_end + 1]}
    sb.narrative = (
        f"✅ Maximum window sum is {best} over positions [{best_start}..{best_end}] "
        f"(values {arr[best_start:best_end + 1]})."
    )
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Minimum-length subarray with sum ≥ target (variable window)
# ---------------------------------------------------------------------------
def min_subarray_len(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    """Shortest contiguous run whose sum reaches `target` (positive inputs)."""
    arr  = list(values)
    n    = len(arr)
    sb   = SnapshotBuilder(arr)
    left = 0
    total = 0
    best_len = n + 1
    best_start = -1

    sb.phase = "init"
    sb.narrative = f"Find the shortest run of {arr} whose sum is at least {target}."
    yield sb.build()

    for right in range(n):
        total += arr[right]
        sb.clear()
        _window(sb, left, right)
        sb.mark(right, "entering")
        sb.overlay["window_sum"] = total
        sb.phase = "expand"
        sb.count("comparisons")
        if total >= target:
            sb.narrative = f"Expand: add {arr[right]} → sum = {total} ≥ {target}, the window qualifies."
        else:
            sb.narrative = f"Expand: add {arr[right]} → sum = {total} < {target}, keep growing."
        yield sb.build()

        while total >= target:
            length = right - left + 1
            sb.clear()
            if length < best_len:
                best_len, best_start = length, left
                _window(sb, left, right, "best")
                sb.narrative = f"Window [{left}..{right}] of length {length} is the shortest so far."
            else:
                _window(sb, left, right)
                sb.narrative = f"Window [{left}..{right}] qualifies but is not shorter than {best_len}."
            sb.overlay["window_sum"] = total
            sb.phase = "record"
            yield sb.build()

            total -= arr[left]
            left += 1
            sb.clear()
            sb.mark(left - 1, "leaving")
            sb.mark_many(range(left, right + 1), "window")
            sb.point("left", left)
            sb.point("right", right)
            sb.overlay["window_sum"] = total
            sb.phase = "shrink"
            sb.count("comparisons")
            if total >= target:
                sb.narrative = f"Shrink: drop {arr[left - 1]} → sum = {total}, still ≥ {target}."
            else:
                sb.narrative = f"Shrink: drop {arr[left - 1]} → sum = {total} < {target}, stop shrinking."
            yield sb.build()

    sb.clear()
    sb.phase = "done"
    if best_start < 0:
        sb.result = {"length": 0, "positions": None}
        sb.narrative = f"❌ No valid subarray: even the whole array sums to less than {target}."
    else:
        best_end = best_start + best_len - 1
        _window(sb, best_start, best_end, "best")
        sb.result = {
            "length":    best_len,
            "positions": [best_start, best_end],
            "sum":       sum(arr[best_start:best_end + 1]),
        }
        sb.narrative = (
            f"✅ Shortest qualifying run has length {best_len}: positions "
            f"[{best_start}..{best_end}] = {arr[best_start:best_end + 1]}."
        )
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Longest run of distinct values
# ---------------------------------------------------------------------------
def longest_unique(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr  = list(values)
    n    = len(arr)
    sb   = SnapshotBuilder(arr)
    last: Dict[int, int] = {}
    left = 0
    best_len, best_start = 0, 0

    sb.phase = "init"
    sb.narrative = f"Find the longest run of {arr} in which no value repeats."
    yield sb.build()

    for right in range(n):
        v = arr[right]
        if v in last and last[v] >= left:
            prev = last[v]
            sb.clear()
            sb.mark_many(range(left, right), "window")
            sb.mark_many([prev, right], "comparing")
            sb.point("left", left)
            sb.point("right", right)
            sb.overlay["seen"] = dict(last)
            sb.phase = "duplicate"
            sb.count("comparisons")
            sb.narrative = f"{v} is already in the window at position {prev}: the window must start after it."
            yield sb.build()

            old_left, left = left, prev + 1
            sb.clear()
            sb.mark_many(range(left, right), "window")
            sb.mark_many(range(old_left, left), "leaving")
            sb.point("left", left)
            sb.point("right", right)
            sb.overlay["seen"] = dict(last)
            sb.phase = "jump"
            sb.narrative = f"Jump left to {left}, past the earlier {v}."
            yield sb.build()

        last[v] = right
        length = right - left + 1
        sb.clear()
        sb.overlay["seen"] = dict(last)
        sb.phase = "expand"
        if length > best_len:
            best_len, best_start = length, left
            _window(sb, left, right, "best")
            sb.mark(right, "entering")
            sb.narrative = f"Add {v}: window [{left}..{right}] has {length} distinct values, the longest so far."
        else:
            _window(sb, left, right)
            sb.mark(right, "entering")
            sb.narrative = f"Add {v}: window [{left}..{right}] has {length} distinct values (best is {best_len})."
        yield sb.build()

    best_end = best_start + best_len - 1
    sb.clear()
    _window(sb, best_start, best_end, "best")
    sb.phase = "done"
    sb.result = {
        "length":    best_len,
        "positions": [best_start, best_end],
        "values":    arr[best_start:best_end + 1],
    }
    sb.narrative = (
        f"✅ Longest run without repeats has length {best_len}: "
        f"{arr[best_start:best_end + 1]} at [{best_start}..{best_end}]."
    )
    yield sb.build(terminal=True)
