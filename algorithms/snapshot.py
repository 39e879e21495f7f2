"""
snapshot.py — Algorithm Snapshot
=================================
Every algorithm is a generator that yields Snapshot objects.
A Snapshot is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • The visible sequence (array contents, or a linked chain's values)
    • Which positions are highlighted and with which semantic tag
    • Where the named pointers (left, right, mid, slow, fast, …) sit
    • For linked structures: the named chains as tuples of node identities
      plus the identity → value table for the nodes they reference
    • A plain-English narrative of what changed and why
    • The result, once the algorithm knows it

Design decisions:
  - Snapshot is a frozen dataclass whose containers are frozen too
    (tuples and read-only mapping proxies over private copies). Two
    snapshots of one trace never share anything mutable.
  - The algorithm generator is the only writer. It mutates a working
    copy through a SnapshotBuilder and calls build() after each event;
    build() copies, so later mutations never leak into earlier frames.
  - Highlight tags come from a closed set. Builders reject unknown tags;
    renderers fall back to "default" for anything absent.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


class SnapshotError(ValueError):
    """Raised when a generator builds a snapshot the data model forbids."""


# ---------------------------------------------------------------------------
# Highlight tags
# ---------------------------------------------------------------------------
class Highlight(str, Enum):
    DEFAULT   = "default"
    ACTIVE    = "active"
    COMPARING = "comparing"
    SWAPPING  = "swapping"
    SORTED    = "sorted"
    PIVOT     = "pivot"
    FOUND     = "found"
    REMOVED   = "removed"
    INSERTED  = "inserted"
    SHIFTING  = "shifting"
    ENTERING  = "entering"
    LEAVING   = "leaving"
    BEST      = "best"
    DUMMY     = "dummy"
    VISITED   = "visited"
    MINIMUM   = "minimum"
    WINDOW    = "window"


TAGS = frozenset(h.value for h in Highlight)

METRIC_KEYS = ("comparisons", "swaps", "writes")


# ---------------------------------------------------------------------------
# Freezing helpers
# ---------------------------------------------------------------------------
def freeze(value: Any) -> Any:
    """Recursively turn lists/dicts/sets into tuples/mapping proxies."""
    if isinstance(value, (MappingProxyType, dict)):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze() for serialisation: plain dicts and lists."""
    if isinstance(value, (MappingProxyType, dict)):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(thaw(v) for v in value)
    return value


def _empty() -> Mapping:
    return MappingProxyType({})


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        step_number : 0-based position in the trace (assigned by Trace).
        values      : Visible sequence, array contents or primary chain values.
        highlights  : {position_key: tag}. Index keys for arrays, node ids for chains.
        pointers    : {pointer_name: position_key}. Absent name = no such pointer now.
        narrative   : Human-readable "what changed and why".
        phase       : Short machine tag grouping steps ("compare", "swap", "done", …).
        terminal    : True on the very last snapshot only.
        result      : Algorithm-specific result, attached once it is known.
        chains      : {chain_name: (node_id, …)}  — linked families only.
        nodes       : {node_id: value} for every node any chain references.
        overlay     : Free-form auxiliary panel data:
                        • "prefix"     – prefix-sum table built so far
                        • "seen"       – hash map contents (prefix counts, last index)
                        • "merged"     – merged intervals so far
                        • "window_sum" – running window sum
                        • "capacity"   – backing array capacity
                        • "cycle_to"   – node id the tail links back to
        metrics     : Running tally of comparisons / swaps / writes.
    """

    step_number: int                     = 0
    values:      Tuple[Any, ...]         = ()
    highlights:  Mapping[Any, str]       = field(default_factory=_empty)
    pointers:    Mapping[str, Any]       = field(default_factory=_empty)
    narrative:   str                     = ""
    phase:       Optional[str]           = None
    terminal:    bool                    = False
    result:      Any                     = None
    chains:      Mapping[str, Tuple[int, ...]] = field(default_factory=_empty)
    nodes:       Mapping[int, Any]       = field(default_factory=_empty)
    overlay:     Mapping[str, Any]       = field(default_factory=_empty)
    metrics:     Mapping[str, int]       = field(default_factory=_empty)

    def tag(self, key: Any) -> str:
        """Highlight tag for a position; absent keys are "default"."""
        return self.highlights.get(key, Highlight.DEFAULT.value)

    @property
    def is_linked(self) -> bool:
        return bool(self.chains)

    @property
    def primary_chain(self) -> Tuple[int, ...]:
        for ids in self.chains.values():
            return ids
        return ()

    def node_ids(self) -> List[int]:
        """Every node id referenced by any chain, in chain order."""
        out: List[int] = []
        for ids in self.chains.values():
            out.extend(i for i in ids if i not in out)
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number": self.step_number,
            "values":      thaw(self.values),
            "highlights":  thaw(self.highlights),
            "pointers":    thaw(self.pointers),
            "narrative":   self.narrative,
            "phase":       self.phase,
            "terminal":    self.terminal,
            "result":      thaw(self.result),
            "chains":      thaw(self.chains),
            "nodes":       thaw(self.nodes),
            "overlay":     thaw(self.overlay),
            "metrics":     thaw(self.metrics),
        }


# ---------------------------------------------------------------------------
# Convenience builder so generators don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class SnapshotBuilder:
    """
    Mutable scratch-pad that generators use to construct Snapshots cleanly.

    Usage inside an array generator:
        arr = list(values)
        sb  = SnapshotBuilder(arr)
        sb.mark_many([j, j + 1], "comparing")
        sb.narrative = f"Compare {arr[j]} and {arr[j + 1]}."
        yield sb.build()
        sb.clear()

    Usage inside a linked-list generator:
        arena = NodeArena()
        head  = arena.create_many(values)
        sb    = SnapshotBuilder(arena=arena)
        sb.chains["list"] = head          # the builder reads the live list
        yield sb.build()

    `clear()` drops per-frame decoration (highlights, pointers, narrative,
    phase, result, overlay) but keeps the working values, the chains and
    the running metrics.
    """

    def __init__(
        self,
        values: Optional[List[Any]] = None,
        arena: Any = None,
        primary: Optional[str] = None,
    ):
        self.values:  List[Any]              = values if values is not None else []
        self.arena                           = arena
        self.primary: Optional[str]          = primary
        self.chains:  Dict[str, List[int]]   = {}
        self.metrics: Dict[str, int]         = {k: 0 for k in METRIC_KEYS}
        self.clear()

    def clear(self) -> None:
        self.highlights: Dict[Any, str]  = {}
        self.pointers:   Dict[str, Any]  = {}
        self.narrative:  str             = ""
        self.phase:      Optional[str]   = None
        self.result:     Any             = None
        self.overlay:    Dict[str, Any]  = {}

    # -- helpers --
    def mark(self, key: Any, tag: Any) -> None:
        tag = tag.value if isinstance(tag, Highlight) else tag
        if tag not in TAGS:
            raise SnapshotError(f"Unknown highlight tag: {tag!r}")
        if tag == Highlight.DEFAULT.value:
            self.highlights.pop(key, None)
        else:
            self.highlights[key] = tag

    def mark_many(self, keys: Iterable[Any], tag: Any) -> None:
        for key in keys:
            self.mark(key, tag)

    def point(self, name: str, key: Any) -> None:
        """Place a pointer; None removes it."""
        if key is None:
            self.pointers.pop(name, None)
        else:
            self.pointers[name] = key

    def count(self, metric: str, n: int = 1) -> None:
        self.metrics[metric] = self.metrics.get(metric, 0) + n

    def build(self, terminal: bool = False) -> Snapshot:
        values: Tuple[Any, ...]
        nodes: Dict[int, Any] = {}
        highlights = dict(self.highlights)
        if self.chains:
            primary = self.primary or next(iter(self.chains))
            values = tuple(self.arena.values(self.chains[primary]))
            for ids in self.chains.values():
                nodes.update(self.arena.subset(ids))
            # sentinels keep their tag unless the frame says otherwise
            for node_id in nodes:
                if self.arena.is_dummy(node_id):
                    highlights.setdefault(node_id, Highlight.DUMMY.value)
        else:
            values = tuple(self.values)

        return Snapshot(
            values=freeze(values),
            highlights=freeze(highlights),
            pointers=freeze(self.pointers),
            narrative=self.narrative,
            phase=self.phase,
            terminal=terminal,
            result=freeze(self.result),
            chains=freeze({name: ids for name, ids in self.chains.items()}),
            nodes=freeze(nodes),
            overlay=freeze(self.overlay),
            metrics=freeze(self.metrics),
        )
