import json

import pytest

from algorithms.snapshot import (
    Highlight,
    Snapshot,
    SnapshotBuilder,
    SnapshotError,
    freeze,
    thaw,
)
from structures import NodeArena


def test_builder_copies_working_values():
    arr = [3, 1, 2]
    sb = SnapshotBuilder(arr)
    first = sb.build()
    arr[0] = 99
    second = sb.build()

    assert first.values == (3, 1, 2)
    assert second.values == (99, 1, 2)


def test_snapshot_containers_are_read_only():
    sb = SnapshotBuilder([1, 2])
    sb.mark(0, "active")
    sb.point("left", 0)
    sb.overlay["seen"] = {"a": [1, 2]}
    snap = sb.build()

    with pytest.raises(TypeError):
        snap.highlights[1] = "found"
    with pytest.raises(TypeError):
        snap.pointers["right"] = 1
    assert snap.overlay["seen"]["a"] == (1, 2)


def test_clear_keeps_metrics_and_drops_decoration():
    sb = SnapshotBuilder([1, 2])
    sb.mark(0, "comparing")
    sb.point("i", 0)
    sb.narrative = "x"
    sb.count("comparisons")
    sb.clear()
    snap = sb.build()

    assert dict(snap.highlights) == {}
    assert dict(snap.pointers) == {}
    assert snap.narrative == ""
    assert snap.metrics["comparisons"] == 1


def test_unknown_tag_is_rejected():
    sb = SnapshotBuilder([1])
    with pytest.raises(SnapshotError):
        sb.mark(0, "sparkly")


def test_default_tag_removes_highlight():
    sb = SnapshotBuilder([1, 2])
    sb.mark(0, Highlight.ACTIVE)
    sb.mark(0, "default")
    assert sb.build().tag(0) == "default"


def test_point_none_removes_pointer():
    sb = SnapshotBuilder([1, 2])
    sb.point("mid", 1)
    sb.point("mid", None)
    assert "mid" not in sb.build().pointers


def test_linked_build_uses_primary_chain_and_tags_dummies():
    arena = NodeArena()
    ids = arena.create_many([4, 5])
    dummy = arena.create_dummy()
    sb = SnapshotBuilder(arena=arena, primary="list")
    sb.chains["extra"] = [dummy]
    sb.chains["list"] = ids
    snap = sb.build()

    assert snap.values == (4, 5)
    assert snap.tag(dummy) == "dummy"
    assert set(snap.nodes) == set(ids) | {dummy}
    assert snap.is_linked
    assert snap.node_ids() == [dummy] + ids


def test_freeze_thaw_and_to_dict_are_json_safe():
    frozen = freeze({"a": [1, {"b": [2]}], "s": {3}})
    assert thaw(frozen) == {"a": [1, {"b": [2]}], "s": [3]}

    sb = SnapshotBuilder([1, 2])
    sb.result = {"positions": [0, 1]}
    payload = sb.build(terminal=True).to_dict()
    assert json.loads(json.dumps(payload))["result"] == {"positions": [0, 1]}


def test_plain_snapshot_defaults():
    snap = Snapshot()
    assert snap.values == ()
    assert snap.primary_chain == ()
    assert not snap.is_linked
    assert snap.tag("anything") == "default"
