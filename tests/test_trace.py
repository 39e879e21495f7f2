import pytest

from algorithms import REGISTRY, get_algorithm
from algorithms.snapshot import Snapshot, thaw
from engine import Trace, TraceContractError, generate_trace

EXAMPLES = sorted(REGISTRY)
LINKED = sorted(k for k, info in REGISTRY.items() if info.is_linked)


def _run_example(key):
    example = get_algorithm(key).example
    return generate_trace(key, example["values"], **example["params"])


# ---------------------------------------------------------------------------
# Construction contract
# ---------------------------------------------------------------------------
def test_empty_trace_is_rejected():
    with pytest.raises(TraceContractError):
        Trace([])


def test_missing_terminal_is_rejected():
    with pytest.raises(TraceContractError):
        Trace([Snapshot(), Snapshot()])


def test_early_terminal_is_rejected():
    with pytest.raises(TraceContractError):
        Trace([Snapshot(terminal=True), Snapshot(terminal=True)])


def test_non_snapshot_items_are_rejected():
    with pytest.raises(TraceContractError):
        Trace([{"terminal": True}])


def test_step_numbers_are_assigned():
    trace = Trace([Snapshot(step_number=7), Snapshot(step_number=7, terminal=True)])
    assert [s.step_number for s in trace] == [0, 1]
    assert trace.last_index == 1
    assert trace.terminal is trace[-1]


# ---------------------------------------------------------------------------
# Every registered algorithm
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("key", EXAMPLES)
def test_example_trace_is_total(key):
    trace = _run_example(key)
    terminals = [s.step_number for s in trace if s.terminal]

    assert len(trace) >= 2
    assert terminals == [len(trace) - 1]
    assert trace.terminal.result is not None
    assert trace.terminal.narrative
    assert not trace[0].terminal and trace[0].result is None


@pytest.mark.parametrize("key", EXAMPLES)
def test_example_trace_is_deterministic(key):
    assert _run_example(key).structure() == _run_example(key).structure()


@pytest.mark.parametrize("key", EXAMPLES)
def test_every_phase_maps_to_a_pseudocode_line(key):
    info = get_algorithm(key)
    for snap in _run_example(key):
        line = info.line_for(snap.phase)
        assert 0 <= line < len(info.pseudocode), (key, snap.phase)


@pytest.mark.parametrize("key", EXAMPLES)
def test_metrics_never_decrease(key):
    trace = _run_example(key)
    for prev, curr in zip(trace, trace[1:]):
        for name, value in prev.metrics.items():
            assert curr.metrics[name] >= value


@pytest.mark.parametrize("key", LINKED)
def test_linked_nodes_leave_only_when_removed(key):
    trace = _run_example(key)
    for prev, curr in zip(trace, trace[1:]):
        gone = set(prev.node_ids()) - set(curr.node_ids())
        for node_id in gone:
            assert prev.tag(node_id) == "removed", (key, prev.step_number, node_id)


@pytest.mark.parametrize("key", LINKED)
def test_linked_node_values_never_change(key):
    trace = _run_example(key)
    seen = {}
    for snap in trace:
        for node_id, value in snap.nodes.items():
            assert seen.setdefault(node_id, value) == value


@pytest.mark.parametrize("key", LINKED)
def test_terminal_primary_chain_has_no_dummy(key):
    terminal = _run_example(key).terminal
    assert None not in terminal.values
    result = thaw(terminal.result)
    if "list" in result:
        assert list(terminal.values) == result["list"]


def test_structure_renames_node_ids():
    a = generate_trace("ll_reverse", [1, 2, 3])
    b = generate_trace("ll_reverse", [1, 2, 3])
    assert a != b
    assert a.structure() == b.structure()
    assert a.structure()[0]["chains"]["list"] == [0, 1, 2]


def test_find_and_to_list():
    trace = generate_trace("bubble_sort", [2, 1])
    assert [s.phase for s in trace.find("swap")] == ["swap"]
    dumped = trace.to_list()
    assert dumped[-1]["terminal"] is True
    assert dumped[-1]["result"]["sorted"] == [1, 2]


@pytest.mark.parametrize("key", LINKED)
def test_linked_nodes_never_come_back(key):
    trace = _run_example(key)
    live, gone = set(), set()
    for snap in trace:
        current = set(snap.node_ids())
        assert not current & gone, (key, snap.step_number, current & gone)
        gone |= live - current
        live = current
