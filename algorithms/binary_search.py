"""
binary_search.py — Binary Search Family
========================================
Standard search, first/last occurrence, lower/upper bound, search in a
rotated array, peak finding and minimum of a rotated array.

Every generator:
  • computes mid as lo + (hi - lo) // 2, never (lo + hi) // 2
  • yields exactly one Snapshot per loop iteration, carrying the lo, mid
    and hi pointers together and explaining which half is discarded
  • ends with a terminal Snapshot that either tags the answer FOUND or
    says plainly that there is none

The live search range is tagged ACTIVE and the probed element COMPARING.
"""

from typing import Generator, List, Optional, Sequence

from algorithms.snapshot import Snapshot, SnapshotBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
BINARY_SEARCH_PSEUDOCODE: List[str] = [
    "lo ← 0;  hi ← n - 1",                       # 0
    "while lo ≤ hi:",                            # 1
    "    mid ← lo + (hi - lo) // 2",             # 2
    "    if a[mid] == target: return mid",       # 3
    "    if a[mid] < target: lo ← mid + 1",      # 4
    "    else: hi ← mid - 1",                    # 5
    "return NOT FOUND",                          # 6
]
BINARY_SEARCH_PHASES = {"init": 0, "compare": 2, "found": 3, "done": 6}

BOUND_PSEUDOCODE: List[str] = [
    "lo ← 0;  hi ← n",                           # 0
    "while lo < hi:",                            # 1
    "    mid ← lo + (hi - lo) // 2",             # 2
    "    if a[mid] ≥ target: hi ← mid   (lower)", # 3
    "    if a[mid] > target: hi ← mid   (upper)", # 4
    "    else: lo ← mid + 1",                    # 5
    "return lo",                                 # 6
]
BOUND_PHASES = {"init": 0, "compare": 2, "found": 6, "done": 6}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------
def _midpoint(lo: int, hi: int) -> int:
    return lo + (hi - lo) // 2


def _initial(sb: SnapshotBuilder, lo: int, hi: int, narrative: str) -> Snapshot:
    sb.clear()
    sb.point("lo", lo)
    sb.point("hi", hi)
    sb.phase = "init"
    sb.narrative = narrative
    return sb.build()


def _iteration(
    sb: SnapshotBuilder,
    n: int,
    lo: int,
    mid: int,
    hi: int,
    narrative: str,
    exclusive_hi: bool = False,
    overlay: Optional[dict] = None,
) -> Snapshot:
    sb.clear()
    last = hi - 1 if exclusive_hi else hi
    sb.mark_many(range(max(lo, 0), min(last, n - 1) + 1), "active")
    sb.mark(mid, "comparing")
    sb.point("lo", lo)
    sb.point("mid", mid)
    sb.point("hi", hi)
    sb.phase = "compare"
    sb.count("comparisons")
    sb.narrative = narrative
    if overlay:
        sb.overlay.update(overlay)
    return sb.build()


def _found(sb: SnapshotBuilder, idx: int, narrative: str, extra: Optional[dict] = None) -> Snapshot:
    sb.clear()
    sb.mark(idx, "found")
    sb.point("mid", idx)
    sb.phase = "found"
    sb.result = {"index": idx, "iterations": sb.metrics["comparisons"]}
    if extra:
        sb.result.update(extra)
    sb.narrative = narrative
    return sb.build(terminal=True)


def _not_found(sb: SnapshotBuilder, lo: int, hi: int, narrative: str, index: int = -1) -> Snapshot:
    sb.clear()
    sb.point("lo", lo)
    sb.point("hi", hi)
    sb.phase = "done"
    sb.result = {"index": index, "iterations": sb.metrics["comparisons"]}
    sb.narrative = narrative
    return sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Standard binary search
# ---------------------------------------------------------------------------
def binary_search(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for a classic binary search on a sorted sequence.

    Args:
        values : Sorted ascending sequence.
        target : Value to look for.
    """
    arr = list(values)
    n   = len(arr)
    sb  = SnapshotBuilder(arr)
    lo, hi = 0, n - 1

    yield _initial(sb, lo, hi, f"Search for {target} in sorted {arr}. The whole array is the search range.")

    while lo <= hi:
        mid = _midpoint(lo, hi)
        if arr[mid] == target:
            text = f"mid = {lo} + ({hi} - {lo}) // 2 = {mid}: a[{mid}] = {arr[mid]} equals the target."
        elif arr[mid] < target:
            text = f"mid = {mid}: a[{mid}] = {arr[mid]} < {target}, discard the left half (lo → {mid + 1})."
        else:
            text = f"mid = {mid}: a[{mid}] = {arr[mid]} > {target}, discard the right half (hi → {mid - 1})."
        yield _iteration(sb, n, lo, mid, hi, text)

        if arr[mid] == target:
            yield _found(sb, mid, f"✅ Found {target} at index {mid} after {sb.metrics['comparisons']} iteration(s).")
            return
        if arr[mid] < target:
            lo = mid + 1
        else:
            hi = mid - 1

    yield _not_found(sb, lo, hi, f"❌ {target} is not in the array: lo ({lo}) passed hi ({hi}).")


# ---------------------------------------------------------------------------
# First / last occurrence
# ---------------------------------------------------------------------------
def first_occurrence(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    yield from _occurrence(values, target, first=True)


def last_occurrence(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    yield from _occurrence(values, target, first=False)


def _occurrence(values: Sequence[int], target: int, first: bool) -> Generator[Snapshot, None, None]:
    arr  = list(values)
    n    = len(arr)
    sb   = SnapshotBuilder(arr)
    lo, hi = 0, n - 1
    ans  = -1
    side = "first" if first else "last"

    yield _initial(sb, lo, hi, f"Find the {side} occurrence of {target} in sorted {arr}.")

    while lo <= hi:
        mid = _midpoint(lo, hi)
        if arr[mid] == target:
            ans = mid
            if first:
                text = f"a[{mid}] = {target}: record index {mid}, keep looking left for an earlier one (hi → {mid - 1})."
            else:
                text = f"a[{mid}] = {target}: record index {mid}, keep looking right for a later one (lo → {mid + 1})."
        elif arr[mid] < target:
            text = f"a[{mid}] = {arr[mid]} < {target}: go right (lo → {mid + 1})."
        else:
            text = f"a[{mid}] = {arr[mid]} > {target}: go left (hi → {mid - 1})."
        yield _iteration(sb, n, lo, mid, hi, text, overlay={"best": ans})

        if arr[mid] == target:
            if first:
                hi = mid - 1
            else:
                lo = mid + 1
        elif arr[mid] < target:
            lo = mid + 1
        else:
            hi = mid - 1

    if ans >= 0:
        yield _found(sb, ans, f"✅ The {side} occurrence of {target} is at index {ans}.")
    else:
        yield _not_found(sb, lo, hi, f"❌ {target} does not occur in the array.")


# ---------------------------------------------------------------------------
# Lower / upper bound
# ---------------------------------------------------------------------------
def lower_bound(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    yield from _bound(values, target, upper=False)


def upper_bound(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    yield from _bound(values, target, upper=True)


def _bound(values: Sequence[int], target: int, upper: bool) -> Generator[Snapshot, None, None]:
    arr = list(values)
    n   = len(arr)
    sb  = SnapshotBuilder(arr)
    lo, hi = 0, n
    rule = f"> {target}" if upper else f"≥ {target}"

    yield _initial(sb, lo, hi, f"Find the first index whose value is {rule} in {arr}. hi starts one past the end.")

    while lo < hi:
        mid = _midpoint(lo, hi)
        goes_left = arr[mid] > target if upper else arr[mid] >= target
        if goes_left:
            text = f"a[{mid}] = {arr[mid]} is {rule}: the answer is at {mid} or earlier (hi → {mid})."
        else:
            text = f"a[{mid}] = {arr[mid]} is not {rule}: the answer is after {mid} (lo → {mid + 1})."
        yield _iteration(sb, n, lo, mid, hi, text, exclusive_hi=True)
        if goes_left:
            hi = mid
        else:
            lo = mid + 1

    name = "Upper bound" if upper else "Lower bound"
    if lo < n:
        yield _found(sb, lo, f"✅ {name} of {target} is index {lo} (value {arr[lo]}).")
    else:
        yield _not_found(sb, lo, hi, f"No element is {rule}: the {name.lower()} is {n}, one past the end.", index=n)


# ---------------------------------------------------------------------------
# Search in rotated sorted array
# ---------------------------------------------------------------------------
def search_rotated(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    arr = list(values)
    n   = len(arr)
    sb  = SnapshotBuilder(arr)
    lo, hi = 0, n - 1

    yield _initial(sb, lo, hi, f"Search for {target} in the rotated sorted array {arr}.")

    while lo <= hi:
        mid = _midpoint(lo, hi)
        if arr[mid] == target:
            text = f"a[{mid}] = {arr[mid]} equals the target."
            nxt = None
        elif arr[lo] <= arr[mid]:
            if arr[lo] <= target < arr[mid]:
                text = f"Left half [{lo}..{mid}] is sorted and holds {target}: hi → {mid - 1}."
                nxt = (lo, mid - 1)
            else:
                text = f"Left half [{lo}..{mid}] is sorted but {target} is outside it: lo → {mid + 1}."
                nxt = (mid + 1, hi)
        else:
            if arr[mid] < target <= arr[hi]:
                text = f"Right half [{mid}..{hi}] is sorted and holds {target}: lo → {mid + 1}."
                nxt = (mid + 1, hi)
            else:
                text = f"Right half [{mid}..{hi}] is sorted but {target} is outside it: hi → {mid - 1}."
                nxt = (lo, mid - 1)
        yield _iteration(sb, n, lo, mid, hi, text)

        if nxt is None:
            yield _found(sb, mid, f"✅ Found {target} at index {mid}.")
            return
        lo, hi = nxt

    yield _not_found(sb, lo, hi, f"❌ {target} is not in the rotated array.")


# ---------------------------------------------------------------------------
# Peak element
# ---------------------------------------------------------------------------
def find_peak(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr = list(values)
    n   = len(arr)
    sb  = SnapshotBuilder(arr)
    lo, hi = 0, n - 1

    yield _initial(sb, lo, hi, f"Find a peak (an element greater than its neighbours) in {arr}.")

    while lo < hi:
        mid = _midpoint(lo, hi)
        if arr[mid] > arr[mid + 1]:
            text = f"a[{mid}] = {arr[mid]} > a[{mid + 1}] = {arr[mid + 1]}: descending slope, a peak is at {mid} or left (hi → {mid})."
        else:
            text = f"a[{mid}] = {arr[mid]} < a[{mid + 1}] = {arr[mid + 1]}: ascending slope, a peak is to the right (lo → {mid + 1})."
        yield _iteration(sb, n, lo, mid, hi, text)
        if arr[mid] > arr[mid + 1]:
            hi = mid
        else:
            lo = mid + 1

    yield _found(sb, lo, f"✅ lo and hi met at index {lo}: {arr[lo]} is a peak.", {"value": arr[lo]})


# ---------------------------------------------------------------------------
# Minimum of rotated sorted array
# ---------------------------------------------------------------------------
def find_min_rotated(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr = list(values)
    n   = len(arr)
    sb  = SnapshotBuilder(arr)
    lo, hi = 0, n - 1

    yield _initial(sb, lo, hi, f"Find the minimum of the rotated sorted array {arr}.")

    while lo < hi:
        mid = _midpoint(lo, hi)
        if arr[mid] > arr[hi]:
            text = f"a[{mid}] = {arr[mid]} > a[{hi}] = {arr[hi]}: the rotation point is right of mid (lo → {mid + 1})."
        else:
            text = f"a[{mid}] = {arr[mid]} ≤ a[{hi}] = {arr[hi]}: the minimum is at mid or left of it (hi → {mid})."
        yield _iteration(sb, n, lo, mid, hi, text)
        if arr[mid] > arr[hi]:
            lo = mid + 1
        else:
            hi = mid

    yield _found(sb, lo, f"✅ The minimum is {arr[lo]} at index {lo}.", {"value": arr[lo]})
