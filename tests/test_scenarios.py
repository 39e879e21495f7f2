"""End-to-end runs of the teaching scenarios shown on the landing page."""

from algorithms.snapshot import thaw
from engine import generate_trace


def test_max_sum_window_finds_best_window():
    trace = generate_trace("max_sum_window", [2, 1, 5, 1, 3, 2], k=3)
    result = thaw(trace.result)

    assert result["sum"] == 9
    assert result["positions"] == [2, 4]
    assert [trace.terminal.tag(i) for i in (2, 3, 4)] == ["best"] * 3


def test_pair_sum_stops_on_first_match():
    trace = generate_trace("pair_sum", [1, 3, 5, 7, 11, 15], target=16)
    result = thaw(trace.result)

    assert result["sum"] == 16
    assert sum(result["pair"]) == 16
    assert trace.terminal.phase == "found"
    assert len(trace.find("compare")) == 1


def test_bubble_sort_stops_early_on_sorted_input():
    flat = generate_trace("bubble_sort", [3, 3, 3])
    unsorted = generate_trace("bubble_sort", [3, 2, 1])

    assert len(flat.find("early_exit")) == 1
    assert len(flat.find("compare")) == 2
    assert len(flat.find("swap")) == 0
    assert len(flat) < len(unsorted)
    assert all(flat.terminal.tag(i) == "sorted" for i in range(3))


def test_binary_search_is_logarithmic():
    trace = generate_trace("binary_search", [1, 2, 3, 4, 5, 6, 7], target=4)

    assert trace.terminal.metrics["comparisons"] <= 3
    assert thaw(trace.result)["index"] == 3
    assert trace.terminal.tag(3) == "found"
    compare = trace.find("compare")[0]
    assert set(compare.pointers) == {"lo", "mid", "hi"}


def test_merge_sorted_lists():
    trace = generate_trace("merge_sorted", [1, 3, 5], other=[2, 4, 6])

    assert trace.terminal.values == (1, 2, 3, 4, 5, 6)
    assert thaw(trace.result)["list"] == [1, 2, 3, 4, 5, 6]
    dummy_steps = trace.find("dummy")
    assert len(dummy_steps) == 1
    (dummy,) = [k for k, tag in dummy_steps[0].highlights.items() if tag == "dummy"]
    assert dummy not in trace.terminal.chains["list"]
    assert trace.terminal.chains["discarded"] == (dummy,)


def test_merge_sorted_starts_with_inputs_outside_the_merged_chain():
    first = generate_trace("merge_sorted", [1, 3], other=[2])[0]

    assert first.values == ()
    assert first.chains["list"] == ()
    assert [first.nodes[i] for i in first.chains["l1"]] == [1, 3]
    assert [first.nodes[i] for i in first.chains["l2"]] == [2]


def test_remove_value_drops_every_occurrence():
    trace = generate_trace("remove_value", [1, 2, 6, 3, 4, 5, 6], target=6)

    assert trace.terminal.values == (1, 2, 3, 4, 5)
    assert thaw(trace.result)["removed"] == 2
    removals = trace.find("remove")
    assert len(removals) == 2
    for snap in removals:
        (node,) = [k for k, tag in snap.highlights.items() if tag == "removed"]
        assert snap.nodes[node] == 6
