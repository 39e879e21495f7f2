import pytest

from algorithms import REGISTRY
from engine import UnknownAlgorithmError
from forms import InputError, parse_chars, parse_intervals, parse_ints, validate_run_request
from settings import load_settings


def _validate(algo, values, **params):
    return validate_run_request({"algo": algo, "values": values, "params": params})


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def test_parse_ints_accepts_text_and_lists():
    assert parse_ints("3, 1  2") == [3, 1, 2]
    assert parse_ints([3, "-1", 2.0]) == [3, -1, 2]
    assert parse_ints("") == []


@pytest.mark.parametrize("raw", ["1, x", "1.5", [True], "1000", [-1000]])
def test_parse_ints_rejects_bad_values(raw):
    with pytest.raises(InputError):
        parse_ints(raw)


def test_parse_chars():
    assert parse_chars("race car") == list("racecar")
    with pytest.raises(InputError):
        parse_chars("ab!")
    with pytest.raises(InputError):
        parse_chars("")


def test_parse_intervals():
    assert parse_intervals("1,3; 2,6") == [[1, 3], [2, 6]]
    assert parse_intervals([[5, 5]]) == [[5, 5]]
    with pytest.raises(InputError):
        parse_intervals("3,1")
    with pytest.raises(InputError):
        parse_intervals("1,2,3")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
def test_valid_request():
    info, values, params = _validate("pair_sum", "1, 3, 5, 7", target="8")
    assert info.key == "pair_sum"
    assert values == [1, 3, 5, 7]
    assert params == {"target": 8}


def test_unknown_algorithm():
    with pytest.raises(UnknownAlgorithmError):
        _validate("warp_sort", "1, 2")


def test_blank_algo_is_an_input_error():
    with pytest.raises(InputError):
        validate_run_request({"algo": "  ", "values": "1"})


def test_length_limits():
    with pytest.raises(InputError):
        _validate("bubble_sort", "")
    with pytest.raises(InputError):
        _validate("bubble_sort", list(range(21)))
    _, values, _ = _validate("push", "", value="1")
    assert values == []


def test_sorted_input_required():
    with pytest.raises(InputError, match="sorted"):
        _validate("binary_search", "3, 1", target=1)


def test_rotated_rule():
    _validate("search_rotated", "4, 5, 6, 1, 2", target=1)
    with pytest.raises(InputError):
        _validate("search_rotated", "1, 5, 2, 6", target=1)


def test_positive_and_adjacent_rules():
    with pytest.raises(InputError):
        _validate("min_subarray_len", "1, 0, 2", target=3)
    with pytest.raises(InputError):
        _validate("find_peak", "1, 2, 2, 1")


def test_param_bounds():
    with pytest.raises(InputError):
        _validate("max_sum_window", "1, 2, 3", k=0)
    with pytest.raises(InputError):
        _validate("max_sum_window", "1, 2, 3", k=4)
    _, _, params = _validate("insert_at", "1, 2, 3", index=3, value=9)
    assert params == {"index": 3, "value": 9}
    with pytest.raises(InputError):
        _validate("detect_cycle", "1, 2, 3", cycle_index=3)


def test_missing_parameter():
    with pytest.raises(InputError, match="Missing parameter: target"):
        _validate("binary_search", "1, 2, 3")


def test_left_must_not_exceed_right():
    with pytest.raises(InputError):
        _validate("range_sum", "1, 2, 3, 4", left=3, right=1)


def test_other_list_must_be_sorted():
    with pytest.raises(InputError):
        _validate("merge_sorted", "1, 3", other="4, 2")


@pytest.mark.parametrize("key", sorted(REGISTRY))
def test_every_example_validates(key):
    example = REGISTRY[key].example
    info, _, params = _validate(key, example["values"], **example["params"])
    assert info.key == key
    assert set(params) == set(info.params)


def test_max_input_len_comes_from_the_environment(monkeypatch):
    monkeypatch.setenv("DSAVIZ_MAX_INPUT_LEN", "4")
    load_settings.cache_clear()
    _validate("bubble_sort", "1, 2, 3, 4")
    with pytest.raises(InputError):
        _validate("bubble_sort", "1, 2, 3, 4, 5")
