"""
scheduler.py — Delay Primitives for Playback
==============================================
The PlaybackController never sleeps or spins a loop of its own. It asks a
scheduler to call it back once after a delay, and re-arms from inside
that callback. Two schedulers ship:

    • TimerScheduler   – real wall-clock delays via daemon threading.Timer
                         (used by the Flask server)
    • ManualScheduler  – a virtual clock advanced explicitly; deterministic,
                         used by tests and headless tooling

Both return a handle with cancel(); cancelling a call that already fired
or was already cancelled is a no-op.
"""

import heapq
import itertools
import logging
import threading
from typing import Any, Callable, List, Protocol, Tuple

log = logging.getLogger(__name__)


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_s: float, fn: Callable[..., Any], *args: Any) -> ScheduledCall: ...


# ---------------------------------------------------------------------------
# Real time
# ---------------------------------------------------------------------------
class TimerScheduler:
    """One daemon threading.Timer per pending call."""

    def call_later(self, delay_s: float, fn: Callable[..., Any], *args: Any) -> threading.Timer:
        timer = threading.Timer(max(0.0, delay_s), fn, args=args)
        timer.daemon = True
        timer.start()
        return timer


# ---------------------------------------------------------------------------
# Virtual time
# ---------------------------------------------------------------------------
class ManualCall:
    __slots__ = ("due", "fn", "args", "cancelled", "fired")

    def __init__(self, due: float, fn: Callable[..., Any], args: Tuple[Any, ...]):
        self.due       = due
        self.fn        = fn
        self.args      = args
        self.cancelled = False
        self.fired     = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual clock. Nothing fires until advance() moves time past a call's
    due time; calls then fire in due order (ties in scheduling order).
    Calls scheduled by a firing callback fire in the same advance() if
    they fall due inside the window.

    Attributes:
        now   : Current virtual time in seconds.
        fired : Number of callbacks executed so far.
    """

    def __init__(self):
        self.now:   float = 0.0
        self.fired: int   = 0
        self._queue: List[Tuple[float, int, ManualCall]] = []
        self._seq = itertools.count()

    def call_later(self, delay_s: float, fn: Callable[..., Any], *args: Any) -> ManualCall:
        call = ManualCall(self.now + max(0.0, delay_s), fn, args)
        heapq.heappush(self._queue, (call.due, next(self._seq), call))
        return call

    def advance(self, seconds: float) -> int:
        """Move the clock forward; return how many callbacks fired."""
        deadline = self.now + seconds
        count = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self.now = due
            call.fired = True
            self.fired += 1
            count += 1
            call.fn(*call.args)
        self.now = deadline
        return count

    def advance_ms(self, ms: float) -> int:
        return self.advance(ms / 1000.0)

    @property
    def pending(self) -> int:
        return sum(1 for _, _, c in self._queue if not c.cancelled)
