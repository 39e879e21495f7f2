"""
two_pointers.py — Two-Pointer Techniques
=========================================
Pair with a target sum in a sorted sequence, palindrome check, and
in-place removal of duplicates from a sorted sequence (slow/fast).

Pair-sum policy: when the current sum is below the target the LEFT
pointer (the one that is too small) moves right; when it is above, the
RIGHT pointer moves left; an exact match stops immediately and is
recorded without any further pointer movement. Comparing and moving are
separate snapshots.
"""

from typing import Generator, List, Sequence

from algorithms.snapshot import Snapshot, SnapshotBuilder


PAIR_SUM_PSEUDOCODE: List[str] = [
    "left ← 0;  right ← n - 1",                  # 0
    "while left < right:",                       # 1
    "    s ← a[left] + a[right]",                # 2
    "    if s == target: return (left, right)",  # 3
    "    if s < target: left ← left + 1",        # 4
    "    else: right ← right - 1",               # 5
    "return NOT FOUND",                          # 6
]
PAIR_SUM_PHASES = {"init": 0, "compare": 2, "found": 3, "move_left": 4, "move_right": 5, "done": 6}

PALINDROME_PSEUDOCODE: List[str] = [
    "left ← 0;  right ← n - 1",                  # 0
    "while left < right:",                       # 1
    "    if s[left] ≠ s[right]: return false",   # 2
    "    left ← left + 1;  right ← right - 1",   # 3
    "return true",                               # 4
]
PALINDROME_PHASES = {"init": 0, "compare": 2, "move": 3, "done": 4}

DEDUP_PSEUDOCODE: List[str] = [
    "slow ← 0",                                  # 0
    "for fast in 1 .. n-1:",                     # 1
    "    if a[fast] ≠ a[slow]:",                 # 2
    "        slow ← slow + 1;  a[slow] ← a[fast]",  # 3
    "return slow + 1",                           # 4
]
DEDUP_PHASES = {"init": 0, "compare": 2, "write": 3, "done": 4}


# ---------------------------------------------------------------------------
# Pair with target sum (sorted input)
# ---------------------------------------------------------------------------
def pair_sum(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for the converging two-pointer pair search.

    Args:
        values : Sorted ascending sequence.
        target : Desired pair sum.
    """
    arr = list(values)
    sb  = SnapshotBuilder(arr)
    left, right = 0, len(arr) - 1
    visited: List[int] = []

    sb.point("left", left)
    sb.point("right", right)
    sb.phase = "init"
    sb.narrative = f"Find two values in sorted {arr} that add up to {target}. Start at both ends."
    yield sb.build()

    while left < right:
        total = arr[left] + arr[right]
        sb.clear()
        sb.mark_many(visited, "visited")
        sb.mark_many([left, right], "comparing")
        sb.point("left", left)
        sb.point("right", right)
        sb.overlay["sum"] = total
        sb.phase = "compare"
        sb.count("comparisons")
        if total == target:
            sb.narrative = f"{arr[left]} + {arr[right]} = {total}: exactly the target."
        elif total < target:
            sb.narrative = f"{arr[left]} + {arr[right]} = {total} < {target}: the left value is too small."
        else:
            sb.narrative = f"{arr[left]} + {arr[right]} = {total} > {target}: the right value is too large."
        yield sb.build()

        if total == target:
            sb.clear()
            sb.mark_many(visited, "visited")
            sb.mark_many([left, right], "found")
            sb.point("left", left)
            sb.point("right", right)
            sb.phase = "found"
            sb.result = {"positions": [left, right], "pair": [arr[left], arr[right]], "sum": total}
            sb.narrative = f"✅ Pair found: a[{left}] + a[{right}] = {arr[left]} + {arr[right]} = {target}."
            yield sb.build(terminal=True)
            return

        sb.clear()
        if total < target:
            visited.append(left)
            left += 1
            sb.phase = "move_left"
            sb.narrative = f"Move left to {left} (value {arr[left]}) to increase the sum."
        else:
            visited.append(right)
            right -= 1
            sb.phase = "move_right"
            sb.narrative = f"Move right to {right} (value {arr[right]}) to decrease the sum."
        sb.mark_many(visited, "visited")
        sb.point("left", left)
        sb.point("right", right)
        yield sb.build()

    sb.clear()
    sb.mark_many(range(len(arr)), "visited")
    sb.point("left", left)
    sb.point("right", right)
    sb.phase = "done"
    sb.result = {"positions": None, "pair": None, "sum": None}
    sb.narrative = f"❌ No pair found: the pointers met without any two values summing to {target}."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Palindrome check
# ---------------------------------------------------------------------------
def is_palindrome(values: Sequence[str]) -> Generator[Snapshot, None, None]:
    chars = list(values)
    word  = "".join(str(c) for c in chars)
    sb    = SnapshotBuilder(chars)
    left, right = 0, len(chars) - 1
    matched: List[int] = []

    sb.point("left", left)
    sb.point("right", right)
    sb.phase = "init"
    sb.narrative = f"Is {word!r} a palindrome? Compare characters from both ends inward."
    yield sb.build()

    while left < right:
        same = chars[left] == chars[right]
        sb.clear()
        sb.mark_many(matched, "visited")
        sb.mark_many([left, right], "comparing")
        sb.point("left", left)
        sb.point("right", right)
        sb.phase = "compare"
        sb.count("comparisons")
        if same:
            sb.narrative = f"{chars[left]!r} at {left} matches {chars[right]!r} at {right}."
        else:
            sb.narrative = f"{chars[left]!r} at {left} differs from {chars[right]!r} at {right}."
        yield sb.build()

        if not same:
            sb.clear()
            sb.mark_many(matched, "visited")
            sb.mark_many([left, right], "comparing")
            sb.point("left", left)
            sb.point("right", right)
            sb.phase = "done"
            sb.result = {"palindrome": False, "mismatch": [left, right]}
            sb.narrative = f"❌ {word!r} is not a palindrome: positions {left} and {right} differ."
            yield sb.build(terminal=True)
            return

        matched.extend([left, right])
        left, right = left + 1, right - 1
        sb.clear()
        sb.mark_many(matched, "visited")
        sb.point("left", left)
        sb.point("right", right)
        sb.phase = "move"
        sb.narrative = f"Both pointers step inward: left → {left}, right → {right}."
        yield sb.build()

    sb.clear()
    sb.mark_many(range(len(chars)), "found")
    sb.phase = "done"
    sb.result = {"palindrome": True, "mismatch": None}
    sb.narrative = f"✅ {word!r} is a palindrome: every mirrored pair matched."
    yield sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Remove duplicates from a sorted sequence (slow / fast)
# ---------------------------------------------------------------------------
def remove_duplicates(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    arr  = list(values)
    n    = len(arr)
    sb   = SnapshotBuilder(arr)
    slow = 0

    sb.point("slow", 0)
    sb.phase = "init"
    sb.narrative = f"Compact the unique values of sorted {arr} to the front. slow marks the last unique slot."
    yield sb.build()

    for fast in range(1, n):
        differs = arr[fast] != arr[slow]
        sb.clear()
        sb.mark_many(range(slow + 1), "found")
        sb.mark_many([slow, fast], "comparing")
        sb.point("slow", slow)
        sb.point("fast", fast)
        sb.phase = "compare"
        sb.count("comparisons")
        if differs:
            sb.narrative = f"a[{fast}] = {arr[fast]} differs from a[{slow}] = {arr[slow]}: a new unique value."
        else:
            sb.narrative = f"a[{fast}] = {arr[fast]} repeats a[{slow}]: skip it."
        yield sb.build()

        if differs:
            slow += 1
            arr[slow] = arr[fast]
            sb.clear()
            sb.mark_many(range(slow), "found")
            sb.mark(slow, "inserted")
            sb.point("slow", slow)
            sb.point("fast", fast)
            sb.phase = "write"
            sb.count("writes")
            sb.narrative = f"Advance slow to {slow} and write {arr[slow]} there."
            yield sb.build()

    length = slow + 1
    sb.clear()
    sb.mark_many(range(length), "found")
    sb.mark_many(range(length, n), "removed")
    sb.point("slow", slow)
    sb.phase = "done"
    sb.result = {"length": length, "unique": arr[:length]}
    sb.narrative = f"✅ {length} unique value(s): {arr[:length]}. Positions {length}..{n - 1} are leftovers."
    if length == n:
        sb.narrative = f"✅ No duplicates: all {n} values are unique."
    yield sb.build(terminal=True)
