import pytest

from algorithms.snapshot import thaw
from engine import generate_trace


def result_of(key, values, **params):
    return thaw(generate_trace(key, values, **params).result)


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("key", ["bubble_sort", "selection_sort", "insertion_sort", "quick_sort"])
@pytest.mark.parametrize("values", [[5], [2, 1], [38, 27, 43, 3, 9, 82, 10], [4, 4, -1, 0, 4]])
def test_sorts_sort(key, values):
    trace = generate_trace(key, values)
    assert list(trace.terminal.values) == sorted(values)
    assert thaw(trace.result)["sorted"] == sorted(values)


def test_insertion_sort_shifts_instead_of_swapping():
    trace = generate_trace("insertion_sort", [3, 1, 2])
    assert trace.find("shift")
    assert not trace.find("swap")


# ---------------------------------------------------------------------------
# Binary search family
# ---------------------------------------------------------------------------
def test_binary_search_reports_absence():
    trace = generate_trace("binary_search", [1, 3, 5], target=4)
    assert thaw(trace.result)["index"] == -1
    assert trace.terminal.narrative.startswith("❌")


@pytest.mark.parametrize("key,expected", [("first_occurrence", 1), ("last_occurrence", 3)])
def test_occurrences(key, expected):
    assert result_of(key, [1, 2, 2, 2, 3, 4], target=2)["index"] == expected


def test_bounds():
    assert result_of("lower_bound", [1, 3, 3, 5, 8], target=4)["index"] == 3
    assert result_of("upper_bound", [1, 3, 3, 5, 8], target=3)["index"] == 3
    assert result_of("lower_bound", [1, 3], target=9)["index"] == 2


def test_rotated_and_peak():
    assert result_of("search_rotated", [4, 5, 6, 7, 0, 1, 2], target=0)["index"] == 4
    assert result_of("find_min_rotated", [4, 5, 6, 7, 0, 1, 2])["index"] == 4
    peak = result_of("find_peak", [1, 3, 20, 4, 1, 0])["index"]
    assert peak == 2


# ---------------------------------------------------------------------------
# Windows, prefix sums, intervals, two pointers
# ---------------------------------------------------------------------------
def test_min_subarray_len():
    assert result_of("min_subarray_len", [2, 3, 1, 2, 4, 3], target=7)["length"] == 2
    miss = generate_trace("min_subarray_len", [1, 1], target=7)
    assert thaw(miss.result)["length"] == 0
    assert miss.terminal.narrative.startswith("❌")


def test_longest_unique():
    assert result_of("longest_unique", [1, 2, 3, 1, 2, 3, 4, 5])["length"] == 5


def test_prefix_sums():
    trace = generate_trace("build_prefix", [3, 1, 4])
    assert thaw(trace[0].overlay)["prefix"][0] == 0
    assert thaw(trace.result)["prefix"] == [0, 3, 4, 8]
    assert result_of("range_sum", [3, 1, 4, 1, 5, 9], left=1, right=3)["sum"] == 6
    assert result_of("subarray_sum_k", [3, 1, 4, 1, 5, 9], k=5)["count"] == 3


def test_merge_intervals():
    result = result_of("merge_intervals", [[8, 10], [1, 3], [2, 6], [15, 18]])
    assert result["merged"] == [[1, 6], [8, 10], [15, 18]]
    assert result["count"] == 3


def test_pair_sum_without_match():
    trace = generate_trace("pair_sum", [1, 2, 3], target=100)
    assert thaw(trace.result)["pair"] is None
    assert trace.terminal.narrative.startswith("❌")


def test_palindrome():
    assert result_of("is_palindrome", list("racecar"))["palindrome"] is True
    assert result_of("is_palindrome", list("abca"))["mismatch"] == [1, 2]


def test_remove_duplicates():
    result = result_of("remove_duplicates", [1, 1, 2, 3, 3, 3, 4])
    assert result == {"length": 4, "unique": [1, 2, 3, 4]}


# ---------------------------------------------------------------------------
# Array operations
# ---------------------------------------------------------------------------
def test_push_resizes_a_full_array():
    trace = generate_trace("push", [1, 2, 3, 4], value=5)
    assert len(trace.find("resize")) == 1
    assert thaw(trace.result)["capacity"] == 8
    assert trace.terminal.values == (1, 2, 3, 4, 5)


def test_insert_at_shifts_one_element_per_step():
    trace = generate_trace("insert_at", [10, 20, 30, 40, 50], index=2, value=25)
    assert len(trace.find("shift")) == 3
    assert trace.terminal.values == (10, 20, 25, 30, 40, 50)


def test_array_crud():
    assert result_of("pop", [5, 8, 2])["popped"] == 2
    assert result_of("delete_at", [10, 20, 30], index=0)["removed"] == 10
    assert result_of("access", [10, 20, 30], index=2)["value"] == 30
    assert result_of("update", [10, 20, 30], index=1, value=99)["new"] == 99
    assert result_of("linear_search", [7, 3, 9], target=9)["index"] == 2
    assert result_of("reverse", [1, 2, 3])["reversed"] == [3, 2, 1]
    mm = result_of("find_min_max", [7, 3, 9, 1, 6, 12])
    assert (mm["min"], mm["max"]) == (1, 12)


# ---------------------------------------------------------------------------
# Linked lists
# ---------------------------------------------------------------------------
def test_linked_inserts():
    assert result_of("ll_insert_head", [3, 5], value=1)["list"] == [1, 3, 5]
    assert result_of("ll_insert_tail", [3, 5], value=9)["list"] == [3, 5, 9]
    assert result_of("ll_insert_at", [3, 5, 7], index=2, value=6)["list"] == [3, 5, 6, 7]
    assert result_of("ll_insert_head", [], value=1)["list"] == [1]


def test_new_node_is_created_before_it_is_linked():
    trace = generate_trace("ll_insert_head", [3, 5], value=1)
    create = trace.find("create")[0]
    assert create.values == (3, 5)
    assert len(create.chains["new"]) == 1
    assert "new" not in trace.find("link")[0].chains


def test_linked_deletes():
    assert result_of("ll_delete_head", [1, 3, 5])["list"] == [3, 5]
    assert result_of("ll_delete_tail", [1, 3, 5])["list"] == [1, 3]
    assert result_of("ll_delete_value", [1, 3, 5], target=3)["list"] == [1, 5]
    assert result_of("ll_delete_value", [1, 3, 5], target=4)["index"] == -1
    assert result_of("ll_delete_at", [1, 3, 5, 7], index=2)["list"] == [1, 3, 7]


def test_linked_search_traverse_reverse():
    assert result_of("ll_search", [4, 8, 15], target=15)["index"] == 2
    assert result_of("ll_traverse", [1, 2])["length"] == 2
    trace = generate_trace("ll_reverse", [1, 2, 3])
    assert trace.terminal.values == (3, 2, 1)
    assert len(trace.find("relink")) == 3


def test_reverse_keeps_node_identity():
    trace = generate_trace("ll_reverse", [1, 2, 3])
    assert set(trace[0].node_ids()) == set(trace.terminal.node_ids())
    assert trace.terminal.primary_chain == tuple(reversed(trace[0].primary_chain))


# ---------------------------------------------------------------------------
# Dummy anchors
# ---------------------------------------------------------------------------
def test_partition_and_duplicate_runs():
    part = result_of("partition_list", [1, 4, 3, 2, 5, 2], pivot=3)
    assert part["list"] == [1, 2, 2, 4, 3, 5]
    assert part["split"] == 3
    runs = result_of("remove_duplicate_runs", [1, 2, 3, 3, 4, 4, 5])
    assert runs["list"] == [1, 2, 5]
    assert runs["dropped"] == [3, 4]


def test_remove_value_without_match_is_unchanged():
    trace = generate_trace("remove_value", [1, 2], target=9)
    assert trace.terminal.values == (1, 2)
    assert trace.terminal.narrative.startswith("❌")
    assert not trace.find("remove")


# ---------------------------------------------------------------------------
# Fast & slow pointers
# ---------------------------------------------------------------------------
def test_find_middle_takes_second_middle():
    assert result_of("find_middle", [1, 2, 3, 4, 5, 6])["value"] == 4
    assert result_of("find_middle", [1, 2, 3, 4, 5])["value"] == 3


def test_detect_cycle():
    hit = generate_trace("detect_cycle", [3, 2, 0, -4], cycle_index=1)
    assert thaw(hit.result)["has_cycle"] is True
    assert hit.terminal.overlay["cycle_to"] == hit.terminal.primary_chain[1]
    assert result_of("detect_cycle", [3, 2, 0, -4], cycle_index=-1)["has_cycle"] is False


def test_find_cycle_start():
    result = result_of("find_cycle_start", [3, 2, 0, -4, 7], cycle_index=1)
    assert result["start_index"] == 1
    assert result["value"] == 2
    assert result_of("find_cycle_start", [1, 2], cycle_index=0)["start_index"] == 0


# ---------------------------------------------------------------------------
# In-place reversal
# ---------------------------------------------------------------------------
def test_reversal_family():
    assert result_of("reverse_between", [1, 2, 3, 4, 5], left=2, right=4)["list"] == [1, 4, 3, 2, 5]
    assert result_of("reverse_k_group", [1, 2, 3, 4, 5], k=2)["list"] == [2, 1, 4, 3, 5]
    assert result_of("reverse_k_group", [1, 2, 3, 4, 5], k=3)["list"] == [3, 2, 1, 4, 5]
    assert result_of("swap_pairs", [1, 2, 3, 4, 5])["list"] == [2, 1, 4, 3, 5]


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------
def stack_depths(trace):
    return [len(thaw(s.overlay)["stack"]) for s in trace]


def test_rec_reverse_grows_and_unwinds_the_stack():
    trace = generate_trace("rec_reverse", [1, 2, 3])
    assert stack_depths(trace) == [0, 1, 2, 3, 3, 2, 1, 0]
    assert result_of("rec_reverse", [1, 2, 3])["list"] == [3, 2, 1]
    assert trace.terminal.chains["list"] == tuple(reversed(trace[0].chains["list"]))

    states = [f["state"] for f in thaw(trace[3].overlay)["stack"]]
    assert states == ["waiting", "waiting", "active"]
    top = thaw(trace[4].overlay)["stack"][-1]
    assert top["state"] == "returning" and top["returns"] == 3


def test_rec_search():
    hit = generate_trace("rec_search", [4, 8, 15, 16, 23], target=15)
    assert thaw(hit.result)["index"] == 2
    assert thaw(hit.result)["frames"] == 3
    assert stack_depths(hit) == [0, 1, 2, 3, 3, 2, 1, 0]

    miss = generate_trace("rec_search", [4, 8], target=5)
    assert thaw(miss.result)["index"] == -1
    assert thaw(miss.result)["found"] is False
    assert miss.terminal.narrative.startswith("❌")
    assert max(stack_depths(miss)) == 3


def test_rec_palindrome():
    trace = generate_trace("rec_palindrome", [1, 2, 3, 2, 1])
    assert thaw(trace.result)["palindrome"] is True
    assert trace.terminal.metrics["comparisons"] == 2
    assert stack_depths(trace)[-1] == 0

    result = result_of("rec_palindrome", [1, 2])
    assert result["palindrome"] is False
    assert result["mismatch"] == [0, 1]


def test_rec_remove_tags_each_removal():
    trace = generate_trace("rec_remove", [1, 2, 6, 3, 6], target=6)
    assert trace.terminal.values == (1, 2, 3)
    assert thaw(trace.result)["removed"] == 2

    removals = trace.find("remove")
    assert len(removals) == 2
    for snap in removals:
        tagged = [k for k, tag in snap.highlights.items() if tag == "removed"]
        assert [snap.nodes[k] for k in tagged] == [6]
        after = trace[snap.step_number + 1]
        assert tagged[0] not in after.node_ids()


def test_rec_remove_without_match_is_unchanged():
    trace = generate_trace("rec_remove", [1, 2], target=9)
    assert trace.terminal.values == (1, 2)
    assert thaw(trace.result)["removed"] == 0
    assert trace.terminal.narrative.startswith("❌")
    assert not trace.find("remove")
