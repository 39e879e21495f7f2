"""
merge_intervals.py — Merge Overlapping Intervals
=================================================
Sort intervals by start, then sweep once: an interval that starts at or
before the end of the last merged group extends that group, otherwise it
opens a new group.

Snapshot.values holds the intervals as (start, end) pairs; highlight keys
are positions in that list. overlay["merged"] is the output built so
far, each group remembering which input positions it absorbed.
"""

from typing import Any, Dict, Generator, List, Sequence

from algorithms.snapshot import Snapshot, SnapshotBuilder


PSEUDOCODE: List[str] = [
    "sort intervals by start",                   # 0
    "merged ← [intervals[0]]",                   # 1
    "for cur in intervals[1:]:",                 # 2
    "    if cur.start ≤ merged[-1].end:",        # 3
    "        merged[-1].end ← max(merged[-1].end, cur.end)",  # 4
    "    else: merged.append(cur)",              # 5
    "return merged",                             # 6
]
PHASES = {"input": 0, "sort": 0, "process": 1, "compare": 3, "merge": 4, "new_group": 5, "done": 6}


def _groups(merged: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{"start": g["start"], "end": g["end"], "sources": list(g["sources"])} for g in merged]


def merge_intervals(values: Sequence[Sequence[int]]) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for the sort-then-sweep interval merge.

    Args:
        values : Intervals as [start, end] pairs with start ≤ end.
    """
    items = [(int(s), int(e)) for s, e in values]
    sb    = SnapshotBuilder(items)

    sb.phase = "input"
    sb.narrative = f"Merge overlapping intervals {[list(iv) for iv in items]}."
    yield sb.build()

    items.sort(key=lambda iv: iv[0])
    sb.clear()
    sb.phase = "sort"
    sb.narrative = (
        f"Sort by start: {[list(iv) for iv in items]}. Overlapping intervals are now "
        f"neighbours, so one left-to-right sweep is enough."
    )
    yield sb.build()

    merged: List[Dict[str, Any]] = [{"start": items[0][0], "end": items[0][1], "sources": [0]}]
    sb.clear()
    sb.mark(0, "window")
    sb.point("cur", 0)
    sb.overlay["merged"] = _groups(merged)
    sb.phase = "process"
    sb.narrative = f"Start the first group with {list(items[0])}."
    yield sb.build()

    for i in range(1, len(items)):
        start, end = items[i]
        last = merged[-1]
        overlaps = start <= last["end"]

        sb.clear()
        sb.mark_many(last["sources"], "window")
        sb.mark(i, "comparing")
        sb.point("cur", i)
        sb.overlay["merged"] = _groups(merged)
        sb.phase = "compare"
        sb.count("comparisons")
        if overlaps:
            sb.narrative = f"{list(items[i])} starts at {start} ≤ {last['end']}, the end of the last group: they overlap."
        else:
            sb.narrative = f"{list(items[i])} starts at {start} > {last['end']}, the end of the last group: no overlap."
        yield sb.build()

        sb.clear()
        sb.point("cur", i)
        if overlaps:
            old_end = last["end"]
            last["end"] = max(last["end"], end)
            last["sources"].append(i)
            sb.mark_many(last["sources"], "window")
            sb.phase = "merge"
            sb.count("writes")
            if last["end"] != old_end:
                sb.narrative = f"Merge: the group grows to [{last['start']}, {last['end']}]."
            else:
                sb.narrative = f"Merge: {list(items[i])} lies inside [{last['start']}, {last['end']}], the end stays."
        else:
            merged.append({"start": start, "end": end, "sources": [i]})
            sb.mark(i, "window")
            sb.phase = "new_group"
            sb.narrative = f"Open a new group [{start}, {end}]."
        sb.overlay["merged"] = _groups(merged)
        yield sb.build()

    result = [[g["start"], g["end"]] for g in merged]
    sb.clear()
    sb.mark_many(range(len(items)), "found")
    sb.overlay["merged"] = _groups(merged)
    sb.phase = "done"
    sb.result = {"merged": result, "count": len(result)}
    sb.narrative = f"✅ {len(items)} intervals merged into {len(result)}: {result}."
    yield sb.build(terminal=True)
