"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, family, fn, params, pseudocode, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine, the input validator
and the UI all consume it, so adding a new algorithm is literally: write
the generator, add one entry here.  That's the plugin system.

Parameter kinds (AlgoInfo.params maps name → kind):
    "int"         any value in the allowed value range
    "positive"    integer ≥ 1
    "window"      1 .. len(values)
    "index"       0 .. len(values) - 1
    "slot"        0 .. len(values)          (insert positions)
    "position"    1 .. len(values)          (1-based list positions)
    "cycle"       -1 .. len(values) - 1     (-1 = no cycle)
    "sorted_list" a second sorted list of ints
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms import (
    array_ops,
    binary_search as bsearch,
    dummy_node,
    fast_slow,
    linked_list,
    merge_intervals as intervals,
    prefix_sum,
    recursion,
    reversal,
    sliding_window,
    sorting,
    two_pointers,
)


FAMILIES: Dict[str, str] = {
    "sorting":         "Sorting",
    "binary_search":   "Binary Search",
    "sliding_window":  "Sliding Window",
    "prefix_sum":      "Prefix Sum",
    "merge_intervals": "Merge Intervals",
    "two_pointers":    "Two Pointers",
    "array_ops":       "Array Operations",
    "linked_list":     "Linked List",
    "dummy_node":      "Dummy Node",
    "fast_slow":       "Fast & Slow Pointers",
    "reversal":        "In-Place Reversal",
    "recursion":       "Recursion",
}

LINKED_FAMILIES = frozenset({"linked_list", "dummy_node", "fast_slow", "reversal", "recursion"})


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bubble_sort"
    label:            str                    # human label, e.g. "Bubble Sort"
    family:           str                    # FAMILIES key
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    phase_lines:      Dict[str, int] = field(default_factory=dict)   # snapshot.phase → pseudocode line
    params:           Dict[str, str] = field(default_factory=dict)   # name → kind (see module docstring)
    tags:             List[str]      = field(default_factory=list)
    complexity_time:  str            = ""          # e.g. "O(n log n)"
    complexity_space: str            = ""          # e.g. "O(1)"
    description:      str            = ""          # one-liner for the UI card
    example:          Dict[str, Any] = field(default_factory=dict)   # {"values": [...], "params": {...}}
    input_kind:       str            = "ints"      # "ints" | "chars" | "intervals"
    min_len:          int            = 1
    max_len:          int            = 20
    needs_sorted:     bool           = False       # input must be ascending
    input_rule:       str            = ""          # "positive" | "rotated" | "distinct_adjacent"

    @property
    def is_linked(self) -> bool:
        return self.family in LINKED_FAMILIES

    def line_for(self, phase: Optional[str]) -> int:
        """Pseudocode line to highlight for a snapshot phase, or -1."""
        return self.phase_lines.get(phase, -1) if phase else -1


def _ex(values: List[Any], **params: Any) -> Dict[str, Any]:
    return {"values": values, "params": params}


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # ── Sorting ─────────────────────────────────────────────────────────────
    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", family="sorting", fn=sorting.bubble_sort,
        pseudocode=sorting.BUBBLE_PSEUDOCODE, phase_lines=sorting.BUBBLE_PHASES,
        tags=["comparison", "stable", "in-place", "early-exit"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Adjacent swaps bubble the largest value to the end. Stops early on a swap-free pass.",
        example=_ex([38, 27, 43, 3, 9, 82, 10]),
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", family="sorting", fn=sorting.selection_sort,
        pseudocode=sorting.SELECTION_PSEUDOCODE, phase_lines=sorting.SELECTION_PHASES,
        tags=["comparison", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Find the minimum of the unsorted part, swap it to the front. At most n-1 swaps.",
        example=_ex([29, 10, 14, 37, 13]),
    ),

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", family="sorting", fn=sorting.insertion_sort,
        pseudocode=sorting.INSERTION_PSEUDOCODE, phase_lines=sorting.INSERTION_PHASES,
        tags=["comparison", "stable", "in-place", "adaptive"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grow a sorted prefix by shifting larger values right. Fast on nearly sorted input.",
        example=_ex([12, 11, 13, 5, 6]),
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", family="sorting", fn=sorting.quick_sort,
        pseudocode=sorting.QUICK_PSEUDOCODE, phase_lines=sorting.QUICK_PHASES,
        tags=["comparison", "in-place", "divide-and-conquer"],
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Lomuto partition around the last element, then sort both sides.",
        example=_ex([10, 80, 30, 90, 40, 50, 70]),
    ),

    # ── Binary search ───────────────────────────────────────────────────────
    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", family="binary_search", fn=bsearch.binary_search,
        pseudocode=bsearch.BINARY_SEARCH_PSEUDOCODE, phase_lines=bsearch.BINARY_SEARCH_PHASES,
        params={"target": "int"}, tags=["search", "sorted"], needs_sorted=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halve the search range around mid until the target is found or the range is empty.",
        example=_ex([1, 2, 3, 4, 5, 6, 7], target=4),
    ),

    "first_occurrence": AlgoInfo(
        key="first_occurrence", label="First Occurrence", family="binary_search", fn=bsearch.first_occurrence,
        pseudocode=bsearch.BOUND_PSEUDOCODE, phase_lines=bsearch.BOUND_PHASES,
        params={"target": "int"}, tags=["search", "sorted", "duplicates"], needs_sorted=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="On a match, remember it and keep searching to the left.",
        example=_ex([1, 2, 2, 2, 3, 4], target=2),
    ),

    "last_occurrence": AlgoInfo(
        key="last_occurrence", label="Last Occurrence", family="binary_search", fn=bsearch.last_occurrence,
        pseudocode=bsearch.BOUND_PSEUDOCODE, phase_lines=bsearch.BOUND_PHASES,
        params={"target": "int"}, tags=["search", "sorted", "duplicates"], needs_sorted=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="On a match, remember it and keep searching to the right.",
        example=_ex([1, 2, 2, 2, 3, 4], target=2),
    ),

    "lower_bound": AlgoInfo(
        key="lower_bound", label="Lower Bound", family="binary_search", fn=bsearch.lower_bound,
        pseudocode=bsearch.BOUND_PSEUDOCODE, phase_lines=bsearch.BOUND_PHASES,
        params={"target": "int"}, tags=["search", "sorted", "bounds"], needs_sorted=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="First index whose value is ≥ target (n when there is none).",
        example=_ex([1, 3, 3, 5, 8], target=4),
    ),

    "upper_bound": AlgoInfo(
        key="upper_bound", label="Upper Bound", family="binary_search", fn=bsearch.upper_bound,
        pseudocode=bsearch.BOUND_PSEUDOCODE, phase_lines=bsearch.BOUND_PHASES,
        params={"target": "int"}, tags=["search", "sorted", "bounds"], needs_sorted=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="First index whose value is > target (n when there is none).",
        example=_ex([1, 3, 3, 5, 8], target=3),
    ),

    "search_rotated": AlgoInfo(
        key="search_rotated", label="Search Rotated Array", family="binary_search", fn=bsearch.search_rotated,
        pseudocode=bsearch.BINARY_SEARCH_PSEUDOCODE, phase_lines=bsearch.BINARY_SEARCH_PHASES,
        params={"target": "int"}, tags=["search", "rotated"], input_rule="rotated",
        complexity_time="O(log n)", complexity_space="O(1)",
        description="One half around mid is always sorted; check whether the target lies in it.",
        example=_ex([4, 5, 6, 7, 0, 1, 2], target=0),
    ),

    "find_peak": AlgoInfo(
        key="find_peak", label="Find Peak Element", family="binary_search", fn=bsearch.find_peak,
        pseudocode=bsearch.BOUND_PSEUDOCODE, phase_lines=bsearch.BOUND_PHASES,
        tags=["search", "answer-space"], input_rule="distinct_adjacent",
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Walk uphill: if a[mid] < a[mid+1] a peak lies to the right, otherwise at or left of mid.",
        example=_ex([1, 3, 20, 4, 1, 0]),
    ),

    "find_min_rotated": AlgoInfo(
        key="find_min_rotated", label="Minimum of Rotated Array", family="binary_search", fn=bsearch.find_min_rotated,
        pseudocode=bsearch.BOUND_PSEUDOCODE, phase_lines=bsearch.BOUND_PHASES,
        tags=["search", "rotated"], input_rule="rotated",
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Compare mid with hi to find which side holds the rotation point.",
        example=_ex([4, 5, 6, 7, 0, 1, 2]),
    ),

    # ── Sliding window ──────────────────────────────────────────────────────
    "max_sum_window": AlgoInfo(
        key="max_sum_window", label="Max Sum Window (fixed k)", family="sliding_window", fn=sliding_window.max_sum_window,
        pseudocode=sliding_window.MAX_SUM_PSEUDOCODE, phase_lines=sliding_window.MAX_SUM_PHASES,
        params={"k": "window"}, tags=["window", "fixed-size"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Slide a window of k: add the entering value, subtract the leaving one.",
        example=_ex([2, 1, 5, 1, 3, 2], k=3),
    ),

    "min_subarray_len": AlgoInfo(
        key="min_subarray_len", label="Min Subarray Length ≥ Target", family="sliding_window", fn=sliding_window.min_subarray_len,
        pseudocode=sliding_window.MIN_LEN_PSEUDOCODE, phase_lines=sliding_window.MIN_LEN_PHASES,
        params={"target": "positive"}, tags=["window", "variable-size"], input_rule="positive",
        complexity_time="O(n)", complexity_space="O(1)",
        description="Expand right until the sum reaches the target, then shrink left while it still does.",
        example=_ex([2, 3, 1, 2, 4, 3], target=7),
    ),

    "longest_unique": AlgoInfo(
        key="longest_unique", label="Longest Run Without Repeats", family="sliding_window", fn=sliding_window.longest_unique,
        pseudocode=sliding_window.UNIQUE_PSEUDOCODE, phase_lines=sliding_window.UNIQUE_PHASES,
        tags=["window", "variable-size", "hash-map"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="Remember each value's last index; on a repeat, jump left past it.",
        example=_ex([1, 2, 3, 1, 2, 3, 4, 5]),
    ),

    # ── Prefix sum ──────────────────────────────────────────────────────────
    "build_prefix": AlgoInfo(
        key="build_prefix", label="Build Prefix Sums", family="prefix_sum", fn=prefix_sum.build_prefix,
        pseudocode=prefix_sum.BUILD_PSEUDOCODE, phase_lines=prefix_sum.BUILD_PHASES,
        tags=["prefix", "precompute"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="P[0] = 0 and P[i+1] = P[i] + a[i].",
        example=_ex([3, 1, 4, 1, 5, 9]),
    ),

    "range_sum": AlgoInfo(
        key="range_sum", label="Range Sum Query", family="prefix_sum", fn=prefix_sum.range_sum,
        pseudocode=prefix_sum.RANGE_PSEUDOCODE, phase_lines=prefix_sum.RANGE_PHASES,
        params={"left": "index", "right": "index"}, tags=["prefix", "query"],
        complexity_time="O(n) build, O(1) query", complexity_space="O(n)",
        description="sum(a[l..r]) = P[r+1] - P[l].",
        example=_ex([3, 1, 4, 1, 5, 9], left=1, right=3),
    ),

    "subarray_sum_k": AlgoInfo(
        key="subarray_sum_k", label="Subarrays Summing to k", family="prefix_sum", fn=prefix_sum.subarray_sum_k,
        pseudocode=prefix_sum.SUBARRAY_K_PSEUDOCODE, phase_lines=prefix_sum.SUBARRAY_K_PHASES,
        params={"k": "int"}, tags=["prefix", "hash-map", "counting"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="Count earlier prefixes equal to running - k, starting from {0: 1}.",
        example=_ex([3, 1, 4, 1, 5, 9], k=5),
    ),

    # ── Merge intervals ─────────────────────────────────────────────────────
    "merge_intervals": AlgoInfo(
        key="merge_intervals", label="Merge Intervals", family="merge_intervals", fn=intervals.merge_intervals,
        pseudocode=intervals.PSEUDOCODE, phase_lines=intervals.PHASES,
        tags=["intervals", "sorting"], input_kind="intervals",
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Sort by start; extend the last group on overlap, otherwise open a new one.",
        example=_ex([[1, 3], [2, 6], [8, 10], [15, 18]]),
    ),

    # ── Two pointers ────────────────────────────────────────────────────────
    "pair_sum": AlgoInfo(
        key="pair_sum", label="Pair With Target Sum", family="two_pointers", fn=two_pointers.pair_sum,
        pseudocode=two_pointers.PAIR_SUM_PSEUDOCODE, phase_lines=two_pointers.PAIR_SUM_PHASES,
        params={"target": "int"}, tags=["converging", "sorted"], needs_sorted=True,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Sum too small: move left up. Too large: move right down.",
        example=_ex([1, 3, 5, 7, 11, 15], target=16),
    ),

    "is_palindrome": AlgoInfo(
        key="is_palindrome", label="Palindrome Check", family="two_pointers", fn=two_pointers.is_palindrome,
        pseudocode=two_pointers.PALINDROME_PSEUDOCODE, phase_lines=two_pointers.PALINDROME_PHASES,
        tags=["converging", "strings"], input_kind="chars",
        complexity_time="O(n)", complexity_space="O(1)",
        description="Compare mirrored characters from both ends inward.",
        example=_ex(list("racecar")),
    ),

    "remove_duplicates": AlgoInfo(
        key="remove_duplicates", label="Remove Duplicates (sorted)", family="two_pointers", fn=two_pointers.remove_duplicates,
        pseudocode=two_pointers.DEDUP_PSEUDOCODE, phase_lines=two_pointers.DEDUP_PHASES,
        tags=["slow-fast", "in-place", "sorted"], needs_sorted=True,
        complexity_time="O(n)", complexity_space="O(1)",
        description="fast scans, slow writes each new value once.",
        example=_ex([1, 1, 2, 3, 3, 3, 4]),
    ),

    # ── Array operations ────────────────────────────────────────────────────
    "push": AlgoInfo(
        key="push", label="Push (append)", family="array_ops", fn=array_ops.push,
        pseudocode=array_ops.PSEUDOCODE["push"], phase_lines=array_ops.PHASES["push"],
        params={"value": "int"}, tags=["crud", "amortised"], min_len=0, max_len=19,
        complexity_time="O(1) amortised", complexity_space="O(1)",
        description="Write at the end; double the capacity when full.",
        example=_ex([5, 8, 2, 7], value=4),
    ),

    "pop": AlgoInfo(
        key="pop", label="Pop (remove last)", family="array_ops", fn=array_ops.pop,
        pseudocode=array_ops.PSEUDOCODE["pop"], phase_lines=array_ops.PHASES["pop"],
        tags=["crud"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Remove the last element; nothing shifts.",
        example=_ex([5, 8, 2, 7, 4]),
    ),

    "insert_at": AlgoInfo(
        key="insert_at", label="Insert at Index", family="array_ops", fn=array_ops.insert_at,
        pseudocode=array_ops.PSEUDOCODE["insert_at"], phase_lines=array_ops.PHASES["insert_at"],
        params={"index": "slot", "value": "int"}, tags=["crud", "shifting"], min_len=0, max_len=19,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Shift the tail right one slot at a time, then place the value.",
        example=_ex([10, 20, 30, 40, 50], index=2, value=25),
    ),

    "delete_at": AlgoInfo(
        key="delete_at", label="Delete at Index", family="array_ops", fn=array_ops.delete_at,
        pseudocode=array_ops.PSEUDOCODE["delete_at"], phase_lines=array_ops.PHASES["delete_at"],
        params={"index": "index"}, tags=["crud", "shifting"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Remove the element, then shift the tail left to close the gap.",
        example=_ex([10, 20, 30, 40, 50], index=1),
    ),

    "access": AlgoInfo(
        key="access", label="Access by Index", family="array_ops", fn=array_ops.access,
        pseudocode=array_ops.PSEUDOCODE["access"], phase_lines=array_ops.PHASES["access"],
        params={"index": "index"}, tags=["crud", "random-access"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Direct address arithmetic: no scanning.",
        example=_ex([10, 20, 30, 40, 50], index=3),
    ),

    "update": AlgoInfo(
        key="update", label="Update at Index", family="array_ops", fn=array_ops.update,
        pseudocode=array_ops.PSEUDOCODE["update"], phase_lines=array_ops.PHASES["update"],
        params={"index": "index", "value": "int"}, tags=["crud", "random-access"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="Overwrite one slot in place.",
        example=_ex([10, 20, 30, 40, 50], index=2, value=99),
    ),

    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", family="array_ops", fn=array_ops.linear_search,
        pseudocode=array_ops.PSEUDOCODE["linear_search"], phase_lines=array_ops.PHASES["linear_search"],
        params={"target": "int"}, tags=["search"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Check every element left to right until a match.",
        example=_ex([7, 3, 9, 4, 6], target=4),
    ),

    "reverse": AlgoInfo(
        key="reverse", label="Reverse In Place", family="array_ops", fn=array_ops.reverse,
        pseudocode=array_ops.PSEUDOCODE["reverse"], phase_lines=array_ops.PHASES["reverse"],
        tags=["in-place", "converging"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Swap the two ends and step inward.",
        example=_ex([1, 2, 3, 4, 5]),
    ),

    "find_min_max": AlgoInfo(
        key="find_min_max", label="Find Min & Max", family="array_ops", fn=array_ops.find_min_max,
        pseudocode=array_ops.PSEUDOCODE["find_min_max"], phase_lines=array_ops.PHASES["find_min_max"],
        tags=["scan"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="One pass keeping the smallest and largest seen so far.",
        example=_ex([7, 3, 9, 1, 6, 12]),
    ),

    # ── Linked list ─────────────────────────────────────────────────────────
    "ll_insert_head": AlgoInfo(
        key="ll_insert_head", label="Insert at Head", family="linked_list", fn=linked_list.ll_insert_head,
        pseudocode=linked_list.INSERT_PSEUDOCODE, phase_lines=linked_list.INSERT_PHASES,
        params={"value": "int"}, tags=["insert"], min_len=0, max_len=19,
        complexity_time="O(1)", complexity_space="O(1)",
        description="New node points at the old head and becomes the head.",
        example=_ex([3, 5, 7], value=1),
    ),

    "ll_insert_tail": AlgoInfo(
        key="ll_insert_tail", label="Insert at Tail", family="linked_list", fn=linked_list.ll_insert_tail,
        pseudocode=linked_list.INSERT_PSEUDOCODE, phase_lines=linked_list.INSERT_PHASES,
        params={"value": "int"}, tags=["insert", "traversal"], min_len=0, max_len=19,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Walk to the tail, then link the new node after it.",
        example=_ex([3, 5, 7], value=9),
    ),

    "ll_insert_at": AlgoInfo(
        key="ll_insert_at", label="Insert at Position", family="linked_list", fn=linked_list.ll_insert_at,
        pseudocode=linked_list.INSERT_PSEUDOCODE, phase_lines=linked_list.INSERT_PHASES,
        params={"index": "slot", "value": "int"}, tags=["insert", "traversal"], min_len=0, max_len=19,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Walk to the node before the slot and splice the new node in.",
        example=_ex([3, 5, 7], index=2, value=6),
    ),

    "ll_delete_head": AlgoInfo(
        key="ll_delete_head", label="Delete Head", family="linked_list", fn=linked_list.ll_delete_head,
        pseudocode=linked_list.DELETE_PSEUDOCODE, phase_lines=linked_list.DELETE_PHASES,
        tags=["delete"],
        complexity_time="O(1)", complexity_space="O(1)",
        description="head ← head.next.",
        example=_ex([1, 3, 5, 7]),
    ),

    "ll_delete_tail": AlgoInfo(
        key="ll_delete_tail", label="Delete Tail", family="linked_list", fn=linked_list.ll_delete_tail,
        pseudocode=linked_list.DELETE_PSEUDOCODE, phase_lines=linked_list.DELETE_PHASES,
        tags=["delete", "traversal"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Walk to the second-to-last node and cut its next link.",
        example=_ex([1, 3, 5, 7]),
    ),

    "ll_delete_value": AlgoInfo(
        key="ll_delete_value", label="Delete by Value", family="linked_list", fn=linked_list.ll_delete_value,
        pseudocode=linked_list.DELETE_PSEUDOCODE, phase_lines=linked_list.DELETE_PHASES,
        params={"target": "int"}, tags=["delete", "search"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Find the first node holding the value and bypass it.",
        example=_ex([1, 3, 5, 7], target=5),
    ),

    "ll_delete_at": AlgoInfo(
        key="ll_delete_at", label="Delete at Position", family="linked_list", fn=linked_list.ll_delete_at,
        pseudocode=linked_list.DELETE_PSEUDOCODE, phase_lines=linked_list.DELETE_PHASES,
        params={"index": "index"}, tags=["delete", "traversal"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Walk to the node before the position and bypass the next one.",
        example=_ex([1, 3, 5, 7], index=2),
    ),

    "ll_search": AlgoInfo(
        key="ll_search", label="Search", family="linked_list", fn=linked_list.ll_search,
        pseudocode=linked_list.SEARCH_PSEUDOCODE, phase_lines=linked_list.SEARCH_PHASES,
        params={"target": "int"}, tags=["search", "traversal"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Follow next links until a node holds the target.",
        example=_ex([4, 8, 15, 16, 23, 42], target=16),
    ),

    "ll_reverse": AlgoInfo(
        key="ll_reverse", label="Reverse List", family="linked_list", fn=linked_list.ll_reverse,
        pseudocode=linked_list.REVERSE_PSEUDOCODE, phase_lines=linked_list.REVERSE_PHASES,
        tags=["reversal", "in-place"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="prev / curr / next: flip one link per step.",
        example=_ex([1, 2, 3, 4, 5]),
    ),

    "ll_traverse": AlgoInfo(
        key="ll_traverse", label="Traverse", family="linked_list", fn=linked_list.ll_traverse,
        pseudocode=linked_list.TRAVERSE_PSEUDOCODE, phase_lines=linked_list.TRAVERSE_PHASES,
        tags=["traversal"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Visit every node from head to null.",
        example=_ex([1, 2, 3, 4]),
    ),

    # ── Dummy node ──────────────────────────────────────────────────────────
    "merge_sorted": AlgoInfo(
        key="merge_sorted", label="Merge Two Sorted Lists", family="dummy_node", fn=dummy_node.merge_sorted,
        pseudocode=dummy_node.MERGE_PSEUDOCODE, phase_lines=dummy_node.MERGE_PHASES,
        params={"other": "sorted_list"}, tags=["dummy", "merge", "sorted"], needs_sorted=True, max_len=10,
        complexity_time="O(n + m)", complexity_space="O(1)",
        description="A dummy anchor collects the smaller head of the two lists each step.",
        example=_ex([1, 3, 5], other=[2, 4, 6]),
    ),

    "remove_value": AlgoInfo(
        key="remove_value", label="Remove All Occurrences", family="dummy_node", fn=dummy_node.remove_value,
        pseudocode=dummy_node.REMOVE_PSEUDOCODE, phase_lines=dummy_node.REMOVE_PHASES,
        params={"target": "int"}, tags=["dummy", "delete"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="prev starts on a dummy so even the head can be removed without a special case.",
        example=_ex([1, 2, 6, 3, 4, 5, 6], target=6),
    ),

    "partition_list": AlgoInfo(
        key="partition_list", label="Partition Around Pivot", family="dummy_node", fn=dummy_node.partition_list,
        pseudocode=dummy_node.PARTITION_PSEUDOCODE, phase_lines=dummy_node.PARTITION_PHASES,
        params={"pivot": "int"}, tags=["dummy", "partition", "stable"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Two dummies build the 'before' and 'after' lists, then stitch them.",
        example=_ex([1, 4, 3, 2, 5, 2], pivot=3),
    ),

    "remove_duplicate_runs": AlgoInfo(
        key="remove_duplicate_runs", label="Drop Repeated Values", family="dummy_node", fn=dummy_node.remove_duplicate_runs,
        pseudocode=dummy_node.DEDUP_RUNS_PSEUDOCODE, phase_lines=dummy_node.DEDUP_RUNS_PHASES,
        tags=["dummy", "delete", "sorted"], needs_sorted=True,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Every value that appears more than once is removed entirely.",
        example=_ex([1, 2, 3, 3, 4, 4, 5]),
    ),

    # ── Fast & slow ─────────────────────────────────────────────────────────
    "find_middle": AlgoInfo(
        key="find_middle", label="Middle of List", family="fast_slow", fn=fast_slow.find_middle,
        pseudocode=fast_slow.MIDDLE_PSEUDOCODE, phase_lines=fast_slow.MIDDLE_PHASES,
        tags=["fast-slow"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="fast moves two steps per slow step; slow ends on the (second) middle.",
        example=_ex([1, 2, 3, 4, 5, 6]),
    ),

    "detect_cycle": AlgoInfo(
        key="detect_cycle", label="Detect Cycle (Floyd)", family="fast_slow", fn=fast_slow.detect_cycle,
        pseudocode=fast_slow.CYCLE_PSEUDOCODE, phase_lines=fast_slow.CYCLE_PHASES,
        params={"cycle_index": "cycle"}, tags=["fast-slow", "cycle"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="If there is a loop, fast laps slow and they meet.",
        example=_ex([3, 2, 0, -4], cycle_index=1),
    ),

    "find_cycle_start": AlgoInfo(
        key="find_cycle_start", label="Cycle Start", family="fast_slow", fn=fast_slow.find_cycle_start,
        pseudocode=fast_slow.CYCLE_START_PSEUDOCODE, phase_lines=fast_slow.CYCLE_START_PHASES,
        params={"cycle_index": "cycle"}, tags=["fast-slow", "cycle"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="After the meeting, restart slow at the head; both at speed 1 meet at the cycle start.",
        example=_ex([3, 2, 0, -4, 7], cycle_index=1),
    ),

    # ── In-place reversal ───────────────────────────────────────────────────
    "reverse_between": AlgoInfo(
        key="reverse_between", label="Reverse Sublist", family="reversal", fn=reversal.reverse_between,
        pseudocode=reversal.BETWEEN_PSEUDOCODE, phase_lines=reversal.BETWEEN_PHASES,
        params={"left": "position", "right": "position"}, tags=["reversal", "dummy"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Front-insert each node of the block right after prev.",
        example=_ex([1, 2, 3, 4, 5], left=2, right=4),
    ),

    "reverse_k_group": AlgoInfo(
        key="reverse_k_group", label="Reverse in k-Groups", family="reversal", fn=reversal.reverse_k_group,
        pseudocode=reversal.K_GROUP_PSEUDOCODE, phase_lines=reversal.K_GROUP_PHASES,
        params={"k": "window"}, tags=["reversal", "dummy"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Reverse each full group of k; a short tail keeps its order.",
        example=_ex([1, 2, 3, 4, 5], k=2),
    ),

    "swap_pairs": AlgoInfo(
        key="swap_pairs", label="Swap Adjacent Pairs", family="reversal", fn=reversal.swap_pairs,
        pseudocode=reversal.SWAP_PAIRS_PSEUDOCODE, phase_lines=reversal.SWAP_PAIRS_PHASES,
        tags=["reversal", "dummy"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Rewire each pair: prev → b → a → rest.",
        example=_ex([1, 2, 3, 4, 5]),
    ),

    # ── Recursion ───────────────────────────────────────────────────────────
    "rec_reverse": AlgoInfo(
        key="rec_reverse", label="Reverse (recursive)", family="recursion", fn=recursion.rec_reverse,
        pseudocode=recursion.REVERSE_PSEUDOCODE, phase_lines=recursion.REVERSE_PHASES,
        tags=["recursion", "reversal", "call-stack"],
        complexity_time="O(n)", complexity_space="O(n) stack",
        description="Recurse to the tail, then flip one pointer per frame while unwinding.",
        example=_ex([1, 2, 3, 4]),
    ),

    "rec_search": AlgoInfo(
        key="rec_search", label="Search (recursive)", family="recursion", fn=recursion.rec_search,
        pseudocode=recursion.SEARCH_PSEUDOCODE, phase_lines=recursion.SEARCH_PHASES,
        params={"target": "int"}, tags=["recursion", "search", "call-stack"],
        complexity_time="O(n)", complexity_space="O(n) stack",
        description="Each call checks one node and hands the rest of the list to the next call.",
        example=_ex([4, 8, 15, 16, 23], target=15),
    ),

    "rec_palindrome": AlgoInfo(
        key="rec_palindrome", label="Palindrome (recursive)", family="recursion", fn=recursion.rec_palindrome,
        pseudocode=recursion.PALINDROME_PSEUDOCODE, phase_lines=recursion.PALINDROME_PHASES,
        tags=["recursion", "two-pointer", "call-stack"],
        complexity_time="O(n)", complexity_space="O(n) stack",
        description="right descends by recursion while left walks forward as the frames return.",
        example=_ex([1, 2, 3, 2, 1]),
    ),

    "rec_remove": AlgoInfo(
        key="rec_remove", label="Remove All (recursive)", family="recursion", fn=recursion.rec_remove,
        pseudocode=recursion.REMOVE_PSEUDOCODE, phase_lines=recursion.REMOVE_PHASES,
        params={"target": "int"}, tags=["recursion", "delete", "call-stack"],
        complexity_time="O(n)", complexity_space="O(n) stack",
        description="Each frame returns the node its caller should link to, skipping matches.",
        example=_ex([1, 2, 6, 3, 6], target=6),
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    """Registry entries of one family, in registry order."""
    return [a for a in REGISTRY.values() if a.family == family]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def families() -> Dict[str, List[str]]:
    """{family: [keys…]} in registry order, only families that have entries."""
    out: Dict[str, List[str]] = {}
    for info in REGISTRY.values():
        out.setdefault(info.family, []).append(info.key)
    return out


__all__ = [
    "AlgoInfo",
    "FAMILIES",
    "LINKED_FAMILIES",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_family",
    "algorithms_by_tag",
    "families",
]
