"""
trace.py — Immutable Trace
===========================
A Trace is the full ordered list of Snapshots produced by one generator
invocation for one (algorithm, input) pair.

Contract (checked on construction, violations are programming errors):
    • at least one snapshot
    • exactly one snapshot has terminal=True, and it is the last one

Step numbers are assigned here (0..n-1) so generators never track them.
"""

import dataclasses
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from algorithms.snapshot import Snapshot, thaw

log = logging.getLogger(__name__)


class TraceContractError(ValueError):
    """A generator produced a sequence that is not a valid trace."""


class Trace:
    """
    Attributes:
        snapshots : Tuple of Snapshots, step_number == position.
        algo_key  : Registry key of the algorithm that produced it ("" if unknown).
    """

    __slots__ = ("_snapshots", "algo_key")

    def __init__(self, snapshots: Iterable[Snapshot], algo_key: str = ""):
        items = list(snapshots)
        self.algo_key: str = algo_key
        self._validate(items)
        self._snapshots: Tuple[Snapshot, ...] = tuple(
            s if s.step_number == i else dataclasses.replace(s, step_number=i)
            for i, s in enumerate(items)
        )

    def _validate(self, items: List[Any]) -> None:
        label = self.algo_key or "<anonymous>"
        if not items:
            log.error("trace for %s is empty", label)
            raise TraceContractError(f"{label}: a trace needs at least one snapshot")
        for i, s in enumerate(items):
            if not isinstance(s, Snapshot):
                raise TraceContractError(f"{label}: item {i} is {type(s).__name__}, not Snapshot")
        terminals = [i for i, s in enumerate(items) if s.terminal]
        if terminals != [len(items) - 1]:
            log.error("trace for %s has terminal snapshots at %s (length %d)",
                      label, terminals, len(items))
            raise TraceContractError(
                f"{label}: exactly one terminal snapshot must close the trace, "
                f"found terminal positions {terminals} in {len(items)} snapshots"
            )

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._snapshots)

    def __getitem__(self, idx):
        return self._snapshots[idx]

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self._snapshots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trace):
            return NotImplemented
        return self._snapshots == other._snapshots

    def __repr__(self) -> str:
        return f"Trace(algo={self.algo_key!r}, steps={len(self._snapshots)})"

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------
    @property
    def snapshots(self) -> Tuple[Snapshot, ...]:
        return self._snapshots

    @property
    def terminal(self) -> Snapshot:
        return self._snapshots[-1]

    @property
    def result(self) -> Any:
        return self._snapshots[-1].result

    @property
    def last_index(self) -> int:
        return len(self._snapshots) - 1

    def to_list(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self._snapshots]

    def structure(self) -> List[Dict[str, Any]]:
        """
        Canonical, identity-independent form used to compare two traces.

        Node identities come from a process-wide counter, so two runs of
        the same linked input get different ids. Here every id is renamed
        to the order in which it first appears in the trace, which makes
        structure() equal for equal inputs.
        """
        rename: Dict[int, int] = {}

        def canon(node_id: Any) -> Any:
            if node_id not in rename:
                rename[node_id] = len(rename)
            return rename[node_id]

        out: List[Dict[str, Any]] = []
        for s in self._snapshots:
            linked = s.is_linked
            for node_id in s.node_ids():
                canon(node_id)
            key = canon if linked else (lambda k: k)
            overlay = thaw(s.overlay)
            if linked and overlay.get("cycle_to") is not None:
                overlay["cycle_to"] = canon(overlay["cycle_to"])
            out.append({
                "values":     thaw(s.values),
                "highlights": {key(k): v for k, v in s.highlights.items()},
                "pointers":   {n: key(k) for n, k in s.pointers.items()},
                "chains":     {n: [canon(i) for i in ids] for n, ids in s.chains.items()},
                "phase":      s.phase,
                "narrative":  s.narrative,
                "terminal":   s.terminal,
                "result":     thaw(s.result),
                "overlay":    overlay,
            })
        return out

    def find(self, phase: Optional[str]) -> List[Snapshot]:
        """All snapshots whose phase equals `phase`."""
        return [s for s in self._snapshots if s.phase == phase]
