import json

import pytest

from engine import Recorder, UnknownAlgorithmError, compare


def _recorded(key, values, **params):
    rec = Recorder()
    rec.start(key, values, **params)
    rec.run_to_completion()
    return rec


def test_unknown_algorithm_is_a_key_error():
    with pytest.raises(UnknownAlgorithmError) as err:
        Recorder().start("not_an_algo", [1, 2])
    assert isinstance(err.value, KeyError)
    assert "not_an_algo" in str(err.value)


def test_run_before_start_fails():
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()


def test_metrics_come_from_the_terminal_snapshot():
    rec = _recorded("bubble_sort", [3, 2, 1])
    m = rec.get_metrics()

    assert m.algo_key == "bubble_sort"
    assert m.algo_label == "Bubble Sort"
    assert m.family == "sorting"
    assert m.input_size == 3
    assert m.total_steps == len(rec.trace) == 10
    assert (m.comparisons, m.swaps) == (3, 3)
    assert m.result["sorted"] == [1, 2, 3]
    assert m.outcome.startswith("✅")
    assert m.memory_bytes > 0


def test_export_is_json_serialisable():
    rec = _recorded("merge_sorted", [1, 3], other=[2])
    dumped = rec.export()

    assert dumped["algo_key"] == "merge_sorted"
    assert dumped["params"] == {"other": [2]}
    assert len(dumped["steps"]) == len(rec.trace)
    json.dumps(dumped)


def test_compare_picks_the_cheaper_run():
    left = _recorded("bubble_sort", [1, 2, 3, 4])
    right = _recorded("selection_sort", [1, 2, 3, 4])
    result = compare(left, right)

    assert result.winner_steps == "Bubble Sort"
    assert result.winner_comparisons == "Bubble Sort"
    assert result.winner_swaps == "tie"
    assert result.to_dict()["right"]["comparisons"] == 6


def test_compare_identical_runs_ties():
    result = compare(_recorded("quick_sort", [2, 1]), _recorded("quick_sort", [2, 1]))
    assert {result.winner_steps, result.winner_comparisons, result.winner_swaps} == {"tie"}
