"""
forms.py — Input Validation
============================
Turns the raw JSON / form payload of a run request into validated
generator arguments, or raises InputError with a message fit for the user.

    info, values, params = validate_run_request({"algo": "pair_sum",
                                                 "values": "1, 3, 5, 7",
                                                 "params": {"target": "8"}})

Generators assume clean input, so every rule that keeps them total lives
here: lengths, value ranges, sortedness, index bounds and the few
family-specific shapes (rotated arrays, character strings, interval pairs).
"""

import re
from typing import Any, Dict, List, Sequence, Tuple, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from algorithms import AlgoInfo, get_algorithm
from engine.recorder import UnknownAlgorithmError
from settings import load_settings

VALUE_MIN = -999
VALUE_MAX = 999
PARAM_LIMIT = 100_000
OTHER_MAX_LEN = 10
MAX_TEXT_LEN = 20

_SPLIT = re.compile(r"[,\s]+")


class InputError(ValueError):
    """User input that cannot be turned into a valid run."""


class RunRequest(BaseModel):
    """Raw request: values may be text ("3, 1, 2") or an already-parsed list."""

    algo:   str                      = Field(min_length=1, description="Registry key")
    values: Union[str, List[Any]]    = Field(default="", description="Input sequence")
    params: Dict[str, Any]           = Field(default_factory=dict, description="Algorithm parameters")

    @field_validator("algo")
    @classmethod
    def _strip_algo(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("algo must not be blank")
        return v


# ---------------------------------------------------------------------------
# Scalar parsing
# ---------------------------------------------------------------------------
def _to_int(raw: Any, what: str) -> int:
    if isinstance(raw, bool):
        raise InputError(f"{what} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if re.fullmatch(r"[+-]?\d+", text):
            return int(text)
    raise InputError(f"{what} must be an integer, got {raw!r}")


def parse_ints(raw: Union[str, Sequence[Any]], what: str = "values") -> List[int]:
    """'3, 1  2' or [3, "1", 2] → [3, 1, 2]; each value within the allowed range."""
    if isinstance(raw, str):
        items: Sequence[Any] = [t for t in _SPLIT.split(raw.strip()) if t]
    else:
        items = list(raw)
    out = [_to_int(v, f"{what}[{i}]") for i, v in enumerate(items)]
    for i, v in enumerate(out):
        if not VALUE_MIN <= v <= VALUE_MAX:
            raise InputError(f"{what}[{i}] = {v} is outside [{VALUE_MIN}, {VALUE_MAX}]")
    return out


def parse_chars(raw: Union[str, Sequence[Any]]) -> List[str]:
    text = raw if isinstance(raw, str) else "".join(str(c) for c in raw)
    text = re.sub(r"[\s,]+", "", text)
    if not 1 <= len(text) <= MAX_TEXT_LEN:
        raise InputError(f"Text must have 1 to {MAX_TEXT_LEN} characters, got {len(text)}")
    if not text.isalnum():
        raise InputError("Text may only contain letters and digits")
    return list(text)


def parse_intervals(raw: Union[str, Sequence[Any]]) -> List[List[int]]:
    """'1,3; 2,6' or [[1, 3], [2, 6]] → [[1, 3], [2, 6]] with start ≤ end."""
    if isinstance(raw, str):
        groups: Sequence[Any] = [g for g in raw.split(";") if g.strip()]
    else:
        groups = list(raw)
    out: List[List[int]] = []
    for i, group in enumerate(groups):
        pair = parse_ints(group, f"interval {i}")
        if len(pair) != 2:
            raise InputError(f"Interval {i} must have exactly two numbers, got {len(pair)}")
        if pair[0] > pair[1]:
            raise InputError(f"Interval {i} has start {pair[0]} > end {pair[1]}")
        out.append(pair)
    return out


# ---------------------------------------------------------------------------
# Shape rules
# ---------------------------------------------------------------------------
def _is_sorted(values: Sequence[int]) -> bool:
    return all(values[i] <= values[i + 1] for i in range(len(values) - 1))


def _is_rotated_sorted(values: Sequence[int]) -> bool:
    if len(set(values)) != len(values):
        return False
    drops = sum(1 for i in range(len(values) - 1) if values[i] > values[i + 1])
    if drops == 0:
        return True
    return drops == 1 and values[-1] < values[0]


def _check_rule(info: AlgoInfo, values: List[int]) -> None:
    rule = info.input_rule
    if rule == "positive" and any(v < 1 for v in values):
        raise InputError(f"{info.label} needs every value to be a positive integer")
    if rule == "rotated" and not _is_rotated_sorted(values):
        raise InputError(f"{info.label} needs distinct values forming a rotated sorted array, e.g. 4, 5, 6, 1, 2")
    if rule == "distinct_adjacent" and any(values[i] == values[i + 1] for i in range(len(values) - 1)):
        raise InputError(f"{info.label} needs neighbouring values to differ")


def _check_param(name: str, kind: str, raw: Any, n: int) -> Any:
    if kind == "sorted_list":
        other = parse_ints(raw, name)
        if not 1 <= len(other) <= OTHER_MAX_LEN:
            raise InputError(f"{name} must have 1 to {OTHER_MAX_LEN} values, got {len(other)}")
        if not _is_sorted(other):
            raise InputError(f"{name} must be sorted ascending")
        return other

    value = _to_int(raw, name)
    bounds = {
        "int":      (-PARAM_LIMIT, PARAM_LIMIT),
        "positive": (1, PARAM_LIMIT),
        "window":   (1, n),
        "index":    (0, n - 1),
        "slot":     (0, n),
        "position": (1, n),
        "cycle":    (-1, n - 1),
    }
    lo, hi = bounds[kind]
    if not lo <= value <= hi:
        raise InputError(f"{name} = {value} must be between {lo} and {hi}")
    return value


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def validate_run_request(data: Any) -> Tuple[AlgoInfo, List[Any], Dict[str, Any]]:
    """
    Returns (AlgoInfo, values, params) ready for Recorder.start().

    Raises:
        InputError            : malformed or out-of-range input (HTTP 400)
        UnknownAlgorithmError : no such registry key (HTTP 404)
    """
    try:
        req = RunRequest.model_validate(data if data is not None else {})
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(p) for p in first.get("loc", ())) or "request"
        raise InputError(f"{where}: {first.get('msg', 'invalid')}") from exc

    info = get_algorithm(req.algo)
    if info is None:
        raise UnknownAlgorithmError(f"Unknown algorithm: {req.algo}")

    if info.input_kind == "chars":
        values: List[Any] = parse_chars(req.values)
    elif info.input_kind == "intervals":
        values = parse_intervals(req.values)
    else:
        values = parse_ints(req.values)

    max_len = min(info.max_len, load_settings().max_input_len)
    if not info.min_len <= len(values) <= max_len:
        raise InputError(f"{info.label} needs {info.min_len} to {max_len} values, got {len(values)}")

    if info.needs_sorted and not _is_sorted(values):
        raise InputError(f"{info.label} needs the values sorted ascending")
    _check_rule(info, values)

    params: Dict[str, Any] = {}
    for name, kind in info.params.items():
        if name not in req.params or req.params[name] in (None, ""):
            raise InputError(f"Missing parameter: {name}")
        params[name] = _check_param(name, kind, req.params[name], len(values))

    if "left" in params and "right" in params and params["left"] > params["right"]:
        raise InputError(f"left ({params['left']}) must not exceed right ({params['right']})")

    return info, values, params


__all__ = [
    "InputError",
    "RunRequest",
    "parse_ints",
    "parse_chars",
    "parse_intervals",
    "validate_run_request",
]
