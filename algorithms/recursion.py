"""
recursion.py — Recursive Linked List Operations
================================================
Reverse, search, palindrome check and remove-all written as recursion on
`node.next`, with the call stack drawn next to the list.

Call stack:
  overlay["stack"] lists the live frames, outermost first. Each frame is
  {"depth", "call", "state", "returns"} where state is "waiting" (blocked
  on a deeper call), "active" (the frame being entered) or "returning"
  (about to hand `returns` to its caller). Every call is one snapshot on
  the way down and every return is one snapshot on the way up, so a list
  of n nodes shows the stack grow to its full depth and unwind to empty.

The `node` pointer follows the node owned by the current frame; a call
on null has no node and therefore no pointer.
"""

from typing import Any, Dict, Generator, List, Optional, Sequence

from algorithms.linked_list import new_list, values_of
from algorithms.snapshot import Snapshot, SnapshotBuilder
from structures.arena import NodeArena


REVERSE_PSEUDOCODE: List[str] = [
    "def reverse(node):",                                # 0
    "    if node.next is null: return node",             # 1
    "    new_head ← reverse(node.next)",                 # 2
    "    node.next.next ← node;  node.next ← null",      # 3
    "    return new_head",                               # 4
]
REVERSE_PHASES = {"init": 0, "call": 2, "base": 1, "return": 1, "unwind": 3, "done": 4}

SEARCH_PSEUDOCODE: List[str] = [
    "def search(node, target):",                         # 0
    "    if node is null: return false",                 # 1
    "    if node.val == target: return true",            # 2
    "    return search(node.next, target)",              # 3
]
SEARCH_PHASES = {"init": 0, "compare": 3, "found": 2, "base": 1, "unwind": 3, "done": 3}

PALINDROME_PSEUDOCODE: List[str] = [
    "left ← head",                                       # 0
    "def check(right):",                                 # 1
    "    if right is null: return true",                 # 2
    "    ok ← check(right.next)",                        # 3
    "    ok ← ok and left.val == right.val",             # 4
    "    left ← left.next;  return ok",                  # 5
]
PALINDROME_PHASES = {"init": 0, "call": 3, "base": 2, "compare": 4, "unwind": 5, "done": 5}

REMOVE_PSEUDOCODE: List[str] = [
    "def remove(node, target):",                         # 0
    "    if node is null: return null",                  # 1
    "    node.next ← remove(node.next, target)",         # 2
    "    if node.val == target: return node.next",       # 3
    "    return node",                                   # 4
]
REMOVE_PHASES = {"init": 0, "call": 2, "base": 1, "remove": 3, "keep": 4, "done": 4}


# ---------------------------------------------------------------------------
# Call stack
# ---------------------------------------------------------------------------
class CallStack:
    """Frames of the simulated recursion; `view()` is what goes in the overlay."""

    def __init__(self):
        self.frames: List[Dict[str, Any]] = []

    def push(self, call: str) -> None:
        for frame in self.frames:
            frame["state"] = "waiting"
        self.frames.append({"depth": len(self.frames), "call": call, "state": "active", "returns": None})

    def returning(self, value: Any) -> None:
        top = self.frames[-1]
        top["state"] = "returning"
        top["returns"] = value

    def pop(self) -> None:
        self.frames.pop()

    @property
    def depth(self) -> int:
        return len(self.frames)

    def view(self) -> List[Dict[str, Any]]:
        return [dict(f) for f in self.frames]


def _frame(sb: SnapshotBuilder, stack: CallStack, node: Optional[int], head: Optional[int]) -> None:
    sb.clear()
    sb.overlay["stack"] = stack.view()
    if head is not None:
        sb.point("head", head)
    if node is not None:
        sb.point("node", node)


def _first(ids: Sequence[int]) -> Optional[int]:
    return ids[0] if ids else None


def _done(
    sb: SnapshotBuilder,
    arena: NodeArena,
    ids: List[int],
    frames: int,
    narrative: str,
    **result,
) -> Snapshot:
    sb.result = dict(result, list=values_of(arena, ids), length=len(ids), frames=frames)
    sb.phase = "done"
    sb.narrative = narrative
    return sb.build(terminal=True)


# ---------------------------------------------------------------------------
# Recursive reverse
# ---------------------------------------------------------------------------
def rec_reverse(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for reverse(node) recursing to the tail.

    Descent pushes one frame per node; the tail is the base case and
    becomes the new head. On the way back each frame turns its link
    around, which moves its node from the end of "list" to the end of
    the "reversed" chain.
    """
    arena, ids, sb = new_list(values)
    n = len(ids)
    stack = CallStack()

    _frame(sb, stack, None, _first(ids))
    sb.phase = "init"
    sb.narrative = (
        f"Reverse {list(values)} recursively: go down to the tail, then flip "
        f"one pointer per frame on the way back up."
    )
    yield sb.build()

    for i, node in enumerate(ids):
        stack.push(f"reverse({arena.value(node)})")
        _frame(sb, stack, node, ids[0])
        sb.mark_many(ids[:i], "visited")
        sb.mark(node, "active")
        if i == n - 1:
            sb.phase = "base"
            sb.narrative = (
                f"Depth {i}: reverse({arena.value(node)}). node.next is null, so this "
                f"is the base case and {arena.value(node)} becomes the new head."
            )
        else:
            sb.phase = "call"
            sb.narrative = (
                f"Depth {i}: reverse({arena.value(node)}) waits on "
                f"reverse({arena.value(ids[i + 1])})."
            )
        yield sb.build()

    rest = list(ids)
    rev: List[int] = []
    sb.chains["list"] = rest
    sb.chains["reversed"] = rev
    new_head = ids[-1] if ids else None
    for i in range(n - 1, -1, -1):
        node = rest.pop()
        rev.append(node)
        stack.returning(arena.value(new_head))
        _frame(sb, stack, node, _first(rest))
        sb.point("new_head", new_head)
        sb.mark_many(rest, "visited")
        sb.mark_many(rev[:-1], "sorted")
        sb.mark(node, "leaving")
        if i == n - 1:
            sb.phase = "return"
            sb.narrative = f"Depth {i} returns {arena.value(node)} as new_head."
        else:
            sb.phase = "unwind"
            sb.count("writes", 2)
            sb.narrative = (
                f"Depth {i}: {arena.value(ids[i + 1])}.next ← {arena.value(node)}, "
                f"then {arena.value(node)}.next ← null. Pass new_head "
                f"({arena.value(new_head)}) up."
            )
        yield sb.build()
        stack.pop()

    sb.chains = {"list": rev}
    _frame(sb, stack, None, _first(rev))
    sb.mark_many(rev, "found")
    yield _done(
        sb, arena, rev, n,
        f"✅ Every frame has returned: {values_of(arena, rev)}. The recursion used {n} "
        f"stack frame(s), O(n) extra space.",
    )


# ---------------------------------------------------------------------------
# Recursive search
# ---------------------------------------------------------------------------
def rec_search(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    arena, ids, sb = new_list(values)
    stack = CallStack()
    head = _first(ids)

    _frame(sb, stack, None, head)
    sb.phase = "init"
    sb.narrative = f"Search {list(values)} for {target}: each call checks one node and delegates the rest."
    yield sb.build()

    found = -1
    for i, node in enumerate(ids):
        stack.push(f"search({arena.value(node)})")
        hit = arena.value(node) == target
        _frame(sb, stack, node, head)
        sb.mark_many(ids[:i], "visited")
        sb.count("comparisons")
        if hit:
            found = i
            sb.mark(node, "found")
            sb.phase = "found"
            sb.narrative = f"Depth {i}: {arena.value(node)} == {target}. Base case, return true."
        else:
            sb.mark(node, "comparing")
            sb.phase = "compare"
            sb.narrative = f"Depth {i}: {arena.value(node)} ≠ {target}, recurse on node.next."
        yield sb.build()
        if hit:
            break

    if found < 0:
        stack.push("search(null)")
        _frame(sb, stack, None, head)
        sb.mark_many(ids, "visited")
        sb.phase = "base"
        sb.narrative = f"Depth {len(ids)}: node is null. Base case, {target} is not here: return false."
        yield sb.build()
        stack.pop()

    answer = "true" if found >= 0 else "false"
    for depth in range(stack.depth - 1, -1, -1):
        stack.returning(answer)
        node = ids[depth]
        _frame(sb, stack, node, head)
        sb.mark_many(ids[:found if found >= 0 else len(ids)], "visited")
        if found >= 0:
            sb.mark(ids[found], "found")
        if depth != found:
            sb.mark(node, "leaving")
        sb.phase = "unwind"
        sb.narrative = f"Depth {depth} hands {answer} back to its caller."
        yield sb.build()
        stack.pop()

    _frame(sb, stack, None, head)
    frames = (found + 1) if found >= 0 else len(ids) + 1
    if found >= 0:
        sb.mark_many(ids[:found], "visited")
        sb.mark(ids[found], "found")
        text = f"✅ Found {target} at position {found} after {frames} call(s)."
    else:
        sb.mark_many(ids, "visited")
        text = f"❌ {target} is not in the list; the search reached null after {frames} call(s)."
    yield _done(sb, arena, ids, frames, text, index=found, found=found >= 0)


# ---------------------------------------------------------------------------
# Recursive palindrome check
# ---------------------------------------------------------------------------
def rec_palindrome(values: Sequence[int]) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for the left-pointer palindrome check.

    `right` descends by recursion, `left` advances from the head as the
    frames return. Pairs are compared until the pointers meet or a pair
    differs; the frames after that only pass the answer up.
    """
    arena, ids, sb = new_list(values)
    n = len(ids)
    stack = CallStack()
    head = _first(ids)

    _frame(sb, stack, None, head)
    sb.phase = "init"
    sb.narrative = (
        f"Is {list(values)} a palindrome? Recurse right to the end, then compare "
        f"it with left, which walks forward from the head as the calls return."
    )
    yield sb.build()

    for i, node in enumerate(ids):
        stack.push(f"check({arena.value(node)})")
        _frame(sb, stack, node, head)
        sb.point("right", node)
        sb.mark_many(ids[:i], "visited")
        sb.mark(node, "active")
        sb.phase = "call"
        sb.narrative = f"Depth {i}: right = {arena.value(node)}, recurse deeper."
        yield sb.build()

    stack.push("check(null)")
    _frame(sb, stack, None, head)
    sb.point("left", head)
    sb.mark_many(ids, "visited")
    sb.phase = "base"
    sb.narrative = f"Depth {n}: right is null, return true. left starts on the head."
    yield sb.build()
    stack.pop()

    left = 0
    ok = True
    mismatch = None
    for i in range(n - 1, -1, -1):
        right = ids[i]
        compared = ok and left < i
        if compared:
            a, b = arena.value(ids[left]), arena.value(right)
            sb.count("comparisons")
            ok = a == b
            if not ok:
                mismatch = [left, i]
        stack.returning("true" if ok else "false")
        _frame(sb, stack, right, head)
        sb.point("right", right)
        if left < n:
            sb.point("left", ids[left])
        sb.mark_many(ids, "visited")
        if compared:
            tag = "found" if ok else "comparing"
            sb.mark_many([ids[left], right], tag)
            sb.phase = "compare"
            if ok:
                sb.narrative = f"Depth {i}: left {a} == right {b}. Advance left and return true."
            else:
                sb.narrative = f"Depth {i}: left {a} ≠ right {b}. Return false."
        else:
            sb.mark(right, "leaving")
            sb.phase = "unwind"
            if ok:
                sb.narrative = f"Depth {i}: left and right have met, nothing left to compare. Return true."
            else:
                sb.narrative = f"Depth {i}: a pair already differed, pass false up."
        yield sb.build()
        stack.pop()
        if compared:
            left += 1

    _frame(sb, stack, None, head)
    if ok:
        sb.mark_many(ids, "found")
        text = f"✅ {values_of(arena, ids)} reads the same both ways."
    else:
        sb.mark_many(ids, "visited")
        sb.mark_many([ids[j] for j in mismatch], "comparing")
        text = f"❌ Not a palindrome: positions {mismatch[0]} and {mismatch[1]} differ."
    yield _done(sb, arena, ids, n + 1, text, palindrome=ok, mismatch=mismatch)


# ---------------------------------------------------------------------------
# Recursive remove-all
# ---------------------------------------------------------------------------
def rec_remove(values: Sequence[int], target: int) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshots for remove(node) returning the node its caller should
    link to.

    The list is only changed on the way up: a frame whose node holds the
    target returns node.next, so its node is tagged `removed` in that
    frame's snapshot and is gone from "list" in the next one.
    """
    arena, ids, sb = new_list(values)
    n = len(ids)
    original = list(ids)
    stack = CallStack()

    _frame(sb, stack, None, _first(ids))
    sb.phase = "init"
    sb.narrative = (
        f"Remove every {target} from {list(values)} recursively: each call first fixes "
        f"the rest of the list, then decides whether to keep its own node."
    )
    yield sb.build()

    for i, node in enumerate(original):
        stack.push(f"remove({arena.value(node)})")
        _frame(sb, stack, node, ids[0])
        sb.mark_many(original[:i], "visited")
        sb.mark(node, "active")
        sb.phase = "call"
        sb.narrative = f"Depth {i}: remove({arena.value(node)}) first recurses on node.next."
        yield sb.build()

    stack.push("remove(null)")
    _frame(sb, stack, None, _first(ids))
    sb.mark_many(original, "visited")
    sb.phase = "base"
    sb.narrative = f"Depth {n}: node is null. Base case, return null."
    yield sb.build()
    stack.pop()

    removed = 0
    pending: Optional[int] = None
    for i in range(n - 1, -1, -1):
        if pending is not None:
            ids.remove(pending)
            pending = None
        node = original[i]
        value = arena.value(node)
        hit = value == target
        sb.count("comparisons")
        stack.returning(f"skip {value}" if hit else f"keep {value}")
        _frame(sb, stack, node, _first(ids))
        sb.mark_many(original[:i], "visited")
        sb.mark_many([m for m in original[i + 1:] if m in ids], "found")
        if hit:
            removed += 1
            pending = node
            sb.mark(node, "removed")
            sb.phase = "remove"
            sb.count("writes")
            sb.narrative = f"Depth {i}: {value} == {target}, return node.next so the caller skips this node."
        else:
            sb.mark(node, "leaving")
            sb.phase = "keep"
            sb.narrative = f"Depth {i}: {value} ≠ {target}, keep it: node.next ← the fixed rest, return node."
        yield sb.build()
        stack.pop()

    if pending is not None:
        ids.remove(pending)
    _frame(sb, stack, None, _first(ids))
    sb.mark_many(ids, "found")
    if removed:
        text = f"✅ Removed {removed} node(s) holding {target}: {values_of(arena, ids)}. Used {n + 1} stack frames."
    else:
        text = f"❌ No node holds {target}; the list is unchanged after {n + 1} calls."
    yield _done(sb, arena, ids, n + 1, text, removed=removed)
