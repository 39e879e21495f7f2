"""
engine/
-------
Trace, playback & recording layer.

    from engine import PlaybackController, Recorder, generate_trace, compare
"""

from engine.trace     import Trace, TraceContractError
from engine.scheduler import ManualScheduler, TimerScheduler
from engine.playback  import PlaybackController, PlaybackState, SPEED_PRESETS
from engine.recorder  import (
    Recorder,
    RunMetrics,
    ComparisonResult,
    UnknownAlgorithmError,
    compare,
    generate_trace,
)

__all__ = [
    "Trace",
    "TraceContractError",
    "ManualScheduler",
    "TimerScheduler",
    "PlaybackController",
    "PlaybackState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "UnknownAlgorithmError",
    "compare",
    "generate_trace",
]
