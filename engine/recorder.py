"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (its whole Trace), then computes the
analytics metrics the UI needs for the Analytics panel and Comparison
Mode.

Usage:
    rec = Recorder()
    rec.start("bubble_sort", [5, 1, 4, 2])
    rec.run_to_completion()          # exhausts the generator into a Trace
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay

Comparison Mode:
    The UI holds two Recorders (one per algo), runs both to completion
    on the SAME input, then calls compare(rec1, rec2) → ComparisonResult.

Generation is synchronous and complete before playback begins: the
PlaybackController only ever sees finished Traces.
"""

import logging
import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Generator, List, Optional, Sequence

from algorithms import AlgoInfo, get_algorithm
from algorithms.snapshot import Snapshot, thaw
from engine.trace import Trace

log = logging.getLogger(__name__)


class UnknownAlgorithmError(KeyError):
    """No registry entry for the requested algorithm key."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown algorithm"


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    family:       str   = ""
    input_size:   int   = 0
    total_steps:  int   = 0          # number of Snapshots in the Trace
    comparisons:  int   = 0
    swaps:        int   = 0
    writes:       int   = 0
    result:       Any   = None       # terminal snapshot result, thawed
    outcome:      str   = ""         # terminal narrative
    wall_time_ms: float = 0.0        # wall-clock time to run to completion
    memory_bytes: int   = 0          # approx size of the snapshot buffer (sys.getsizeof)


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived: label of the cheaper run, or "tie"
    winner_steps:       str = ""
    winner_comparisons: str = ""
    winner_swaps:       str = ""
    winner_writes:      str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        trace   : The finished Trace (available after run_to_completion).
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.trace:   Optional[Trace]      = None
        self.metrics: Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo]                  = None
        self._values:    List[Any]                           = []
        self._params:    Dict[str, Any]                      = {}
        self._gen:       Optional[Generator[Snapshot, None, None]] = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, values: Sequence[Any], **params: Any) -> None:
        """Initialise the generator for this run. Inputs must already be validated."""
        info = get_algorithm(algo_key)
        if info is None:
            raise UnknownAlgorithmError(f"Unknown algorithm: {algo_key}")

        self._algo_info = info
        self._values    = list(values)
        self._params    = dict(params)
        self.trace      = None
        self.metrics    = None
        self._gen       = info.fn(list(values), **params)

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, validate the Trace, compute metrics."""
        if self._gen is None or self._algo_info is None:
            raise RuntimeError("Call start() first.")

        start = time.monotonic()
        self.trace = Trace(self._gen, algo_key=self._algo_info.key)
        wall_ms = (time.monotonic() - start) * 1000
        self._gen = None

        self.metrics = self._compute_metrics(wall_ms)
        log.debug("recorded %s: %d snapshots in %.2f ms",
                  self._algo_info.key, len(self.trace), wall_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        info = self._algo_info
        return {
            "algo_key": info.key if info else "",
            "family":   info.family if info else "",
            "values":   thaw(self._values),
            "params":   thaw(self._params),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    self.trace.to_list() if self.trace else [],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.trace.terminal

        # approximate memory: sizeof the snapshot buffer
        mem = sys.getsizeof(self.trace.snapshots)
        for s in self.trace:
            mem += sys.getsizeof(s)

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            family=info.family,
            input_size=len(self._values),
            total_steps=len(self.trace),
            comparisons=last.metrics.get("comparisons", 0),
            swaps=last.metrics.get("swaps", 0),
            writes=last.metrics.get("writes", 0),
            result=thaw(last.result),
            outcome=last.narrative,
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )


def generate_trace(algo_key: str, values: Sequence[Any], **params: Any) -> Trace:
    """One-shot: run an algorithm and return its Trace."""
    rec = Recorder()
    rec.start(algo_key, values, **params)
    rec.run_to_completion()
    return rec.trace


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps      =winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_swaps      =winner(l.swaps, r.swaps, l.algo_label, r.algo_label),
        winner_writes     =winner(l.writes, r.writes, l.algo_label, r.algo_label),
    )
