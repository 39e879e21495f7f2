"""
playback.py — Trace Playback Controller
========================================
The PlaybackController is the ONLY object the UI interacts with during a
visualization. It owns one Trace, the current index and the play/pause/
speed state, and exposes a VCR-style API.

State machine:
    IDLE     →  load()                      →  READY   (index 0)
    READY    →  run()                       →  RUNNING
    PAUSED   →  run()                       →  RUNNING
    RUNNING  →  pause()                     →  PAUSED
    RUNNING  →  (last index reached)        →  FINISHED
    any      →  step/seek onto last index   →  FINISHED
    FINISHED →  step_backward() / seek()    →  PAUSED
    FINISHED →  run()                       →  RUNNING from index 0
    any      →  reset()                     →  IDLE

Scheduling:
  run() arms exactly one delayed call on the injected scheduler. Each call
  advances one step and, if still running, re-arms using the interval
  current at that moment, so set_speed() applies from the next armed step
  on. pause(), reset() and load() cancel the pending call synchronously and
  bump a generation token; a callback that already left the scheduler's
  queue sees a stale token and does nothing.

Thread safety:
  Public methods and the scheduled callback serialise on one RLock, so a
  TimerScheduler thread and Flask request threads can share a controller.
  `on_change` runs under that lock and must not block.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, Optional

from algorithms.snapshot import Snapshot
from engine.scheduler import ScheduledCall, Scheduler, TimerScheduler
from engine.trace import Trace
from settings import load_settings

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE     = "idle"
    READY    = "ready"
    RUNNING  = "running"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "slow":   1000,   # teaching mode
    "medium": 400,
    "fast":   150,    # demo mode
    "turbo":  50,
}


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        scheduler : Delay primitive used by run() (TimerScheduler by default).
        on_change : Optional callback(Snapshot) fired whenever the index changes.
                    The UI hooks its re-render here.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        interval_ms: Optional[int] = None,
        on_change: Optional[Callable[[Snapshot], None]] = None,
    ):
        cfg = load_settings()
        self.scheduler:  Scheduler = scheduler or TimerScheduler()
        self.on_change:  Optional[Callable[[Snapshot], None]] = on_change
        self.min_interval_ms: int = cfg.min_interval_ms
        self.max_interval_ms: int = max(cfg.max_interval_ms, cfg.min_interval_ms)

        self._lock        = threading.RLock()
        self._trace:      Optional[Trace]         = None
        self._index:      Optional[int]           = None
        self._state:      PlaybackState           = PlaybackState.IDLE
        self._interval:   int                     = SPEED_PRESETS[cfg.default_speed]
        self._pending:    Optional[ScheduledCall] = None
        self._generation: int                     = 0

        if interval_ms is not None:
            self.set_speed(interval_ms)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, trace: Trace) -> None:
        """Attach a trace and show its first snapshot. Stops any running loop first."""
        if not isinstance(trace, Trace):
            raise TypeError(f"load() expects a Trace, got {type(trace).__name__}")
        with self._lock:
            if self._state == PlaybackState.RUNNING:
                log.debug("load() while running: pausing first")
            self._cancel_pending()
            self._trace = trace
            self._index = 0
            self._state = PlaybackState.READY
            log.debug("loaded %r", trace)
            self._notify()

    def reset(self) -> None:
        """Back to IDLE from any state. The pending step (if any) is cancelled first."""
        with self._lock:
            self._cancel_pending()
            self._trace = None
            self._index = None
            self._state = PlaybackState.IDLE
            log.debug("reset to idle")

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step. Returns False (no-op) at the last index or when idle."""
        with self._lock:
            if self._trace is None or self._index >= self._trace.last_index:
                return False
            self._advance()
            return True

    def step_backward(self) -> bool:
        """Go back one step, floored at 0. Does not start or stop a running loop."""
        with self._lock:
            if self._trace is None or self._index <= 0:
                return False
            self._index -= 1
            if self._state == PlaybackState.FINISHED:
                self._state = PlaybackState.PAUSED
            self._notify()
            return True

    def seek(self, idx: int) -> bool:
        """Jump to `idx`, clamped to [0, length - 1]."""
        with self._lock:
            if self._trace is None:
                return False
            target = min(max(int(idx), 0), self._trace.last_index)
            self._index = target
            if target == self._trace.last_index:
                self._finish()
            elif self._state == PlaybackState.FINISHED:
                self._state = PlaybackState.PAUSED
            self._notify()
            return True

    def rewind(self) -> bool:
        return self.seek(0)

    def jump_to_end(self) -> bool:
        with self._lock:
            if self._trace is None:
                return False
            return self.seek(self._trace.last_index)

    # ------------------------------------------------------------------
    # Run / Pause
    # ------------------------------------------------------------------
    def run(self) -> bool:
        """
        Start auto-advancing. Idempotent while already running. At the last
        index playback restarts from 0. Returns True if a loop is active
        after the call.
        """
        with self._lock:
            if self._trace is None:
                return False
            if self._state == PlaybackState.RUNNING:
                return True
            if self._index >= self._trace.last_index:
                if self._trace.last_index == 0:
                    self._state = PlaybackState.FINISHED
                    return False
                log.info("run() at the last step: restarting %r from step 0", self._trace)
                self._index = 0
                self._notify()
            self._state = PlaybackState.RUNNING
            self._arm()
            return True

    def pause(self) -> bool:
        """RUNNING → PAUSED. The pending step is cancelled before returning."""
        with self._lock:
            if self._state != PlaybackState.RUNNING:
                return False
            self._cancel_pending()
            self._state = PlaybackState.PAUSED
            return True

    def toggle(self) -> bool:
        """Pause when running, run otherwise. Returns the new `running` flag."""
        with self._lock:
            if self._state == PlaybackState.RUNNING:
                self.pause()
            else:
                self.run()
            return self.running

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, interval_ms: int) -> int:
        """Set ms between auto steps, clamped to the configured bounds; returns the value used."""
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)):
            raise TypeError("interval_ms must be a number")
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        with self._lock:
            self._interval = int(min(max(interval_ms, self.min_interval_ms), self.max_interval_ms))
            return self._interval

    def set_speed_preset(self, preset: str) -> int:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {preset!r}")
        return self.set_speed(SPEED_PRESETS[preset])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def trace(self) -> Optional[Trace]:
        return self._trace

    @property
    def index(self) -> Optional[int]:
        return self._index

    @property
    def length(self) -> int:
        return len(self._trace) if self._trace is not None else 0

    @property
    def running(self) -> bool:
        return self._state == PlaybackState.RUNNING

    @property
    def interval_ms(self) -> int:
        return self._interval

    @property
    def current_snapshot(self) -> Optional[Snapshot]:
        with self._lock:
            if self._trace is None:
                return None
            return self._trace[self._index]

    @property
    def is_finished(self) -> bool:
        return self._state == PlaybackState.FINISHED

    def status(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "state":       self._state.value,
                "index":       self._index,
                "length":      self.length,
                "running":     self.running,
                "interval_ms": self._interval,
            }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _arm(self) -> None:
        self._pending = self.scheduler.call_later(
            self._interval / 1000.0, self._fire, self._generation
        )

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._state != PlaybackState.RUNNING:
                log.debug("dropping stale playback callback (generation %d)", generation)
                return
            self._pending = None
            self._advance()
            if self._state == PlaybackState.RUNNING:
                self._arm()

    def _advance(self) -> None:
        self._index += 1
        if self._index >= self._trace.last_index:
            self._finish()
        self._notify()

    def _finish(self) -> None:
        self._cancel_pending()
        self._state = PlaybackState.FINISHED

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _notify(self) -> None:
        if self.on_change is not None and self._trace is not None:
            self.on_change(self._trace[self._index])
