import random

import pytest

from algorithms.snapshot import Snapshot
from engine import PlaybackController, PlaybackState, Trace, generate_trace


def test_starts_idle(controller):
    assert controller.state == PlaybackState.IDLE
    assert controller.index is None
    assert controller.length == 0
    assert controller.current_snapshot is None
    assert controller.step_forward() is False
    assert controller.step_backward() is False
    assert controller.seek(3) is False
    assert controller.run() is False
    assert controller.pause() is False


def test_load_shows_first_snapshot(controller, bubble_trace):
    controller.load(bubble_trace)
    assert controller.state == PlaybackState.READY
    assert controller.index == 0
    assert controller.length == len(bubble_trace) == 10
    assert controller.current_snapshot is bubble_trace[0]


def test_load_rejects_non_traces(controller):
    with pytest.raises(TypeError):
        controller.load([Snapshot(terminal=True)])


def test_stepping_reaches_finished(controller, bubble_trace):
    controller.load(bubble_trace)
    for _ in range(9):
        assert controller.step_forward() is True
    assert controller.index == 9
    assert controller.state == PlaybackState.FINISHED
    assert controller.step_forward() is False
    assert controller.index == 9

    assert controller.step_backward() is True
    assert controller.state == PlaybackState.PAUSED
    assert controller.index == 8


def test_seek_clamps(controller, bubble_trace):
    controller.load(bubble_trace)
    controller.seek(-5)
    assert controller.index == 0
    controller.seek(100)
    assert controller.index == 9
    assert controller.is_finished
    controller.seek(4)
    assert controller.state == PlaybackState.PAUSED
    assert controller.rewind() and controller.index == 0
    assert controller.jump_to_end() and controller.index == 9


def test_run_advances_on_the_scheduler(controller, scheduler, bubble_trace):
    controller.load(bubble_trace)
    assert controller.run() is True
    assert controller.state == PlaybackState.RUNNING
    assert scheduler.pending == 1

    scheduler.advance(0.35)
    assert controller.index == 3
    assert controller.running

    scheduler.advance(5)
    assert controller.index == 9
    assert controller.state == PlaybackState.FINISHED
    assert scheduler.pending == 0


def test_run_is_idempotent(controller, scheduler, bubble_trace):
    controller.load(bubble_trace)
    controller.run()
    controller.run()
    assert scheduler.pending == 1
    scheduler.advance(0.15)
    assert controller.index == 1


def test_pause_cancels_the_pending_step(controller, scheduler, bubble_trace):
    controller.load(bubble_trace)
    controller.run()
    scheduler.advance(0.15)
    assert controller.pause() is True
    assert controller.state == PlaybackState.PAUSED
    assert scheduler.pending == 0

    scheduler.advance(2)
    assert controller.index == 1
    assert controller.pause() is False


def test_run_at_the_end_restarts(controller, scheduler, bubble_trace):
    controller.load(bubble_trace)
    controller.jump_to_end()
    assert controller.run() is True
    assert controller.index == 0
    assert controller.state == PlaybackState.RUNNING


def test_single_snapshot_trace_finishes_immediately(controller, scheduler):
    controller.load(Trace([Snapshot(terminal=True)]))
    assert controller.run() is False
    assert controller.state == PlaybackState.FINISHED
    assert scheduler.pending == 0


def test_reset_from_running(controller, scheduler, bubble_trace):
    controller.load(bubble_trace)
    controller.run()
    controller.reset()

    assert controller.state == PlaybackState.IDLE
    assert controller.index is None
    assert controller.trace is None
    assert scheduler.pending == 0
    scheduler.advance(5)
    assert controller.index is None


def test_load_while_running_stops_the_old_loop(controller, scheduler, bubble_trace):
    controller.load(bubble_trace)
    controller.run()
    scheduler.advance(0.15)

    other = generate_trace("insertion_sort", [2, 1])
    controller.load(other)
    assert controller.state == PlaybackState.READY
    assert controller.index == 0
    assert scheduler.pending == 0
    scheduler.advance(5)
    assert controller.index == 0


def test_speed_change_applies_to_the_next_armed_step(controller, scheduler, bubble_trace):
    controller.load(bubble_trace)
    controller.run()
    scheduler.advance(0.05)
    assert controller.set_speed(1000) == 1000

    scheduler.advance(0.06)          # the step armed at 100 ms still fires
    assert controller.index == 1
    scheduler.advance(0.5)
    assert controller.index == 1
    scheduler.advance(0.6)
    assert controller.index == 2


def test_set_speed_validation(controller):
    assert controller.set_speed(1) == controller.min_interval_ms
    assert controller.set_speed(10 ** 9) == controller.max_interval_ms
    assert controller.set_speed(250.7) == 250
    assert controller.set_speed_preset("fast") == 150
    with pytest.raises(ValueError):
        controller.set_speed(0)
    with pytest.raises(TypeError):
        controller.set_speed("fast")
    with pytest.raises(TypeError):
        controller.set_speed(True)
    with pytest.raises(ValueError):
        controller.set_speed_preset("warp")


def test_on_change_sees_every_index_change(scheduler, bubble_trace):
    seen = []
    ctrl = PlaybackController(scheduler=scheduler, interval_ms=100, on_change=seen.append)
    ctrl.load(bubble_trace)
    ctrl.step_forward()
    ctrl.seek(5)
    assert [s.step_number for s in seen] == [0, 1, 5]


def test_status_and_toggle(controller, bubble_trace):
    controller.load(bubble_trace)
    assert controller.toggle() is True
    assert controller.status() == {
        "state": "running",
        "index": 0,
        "length": 10,
        "running": True,
        "interval_ms": 100,
    }
    assert controller.toggle() is False
    assert controller.status()["state"] == "paused"


def test_random_operations_keep_the_index_valid(controller, scheduler, bubble_trace):
    rng = random.Random(1234)
    short = generate_trace("insertion_sort", [2, 1])
    ops = ["fwd", "back", "seek", "run", "pause", "reset", "load", "load_short", "tick", "speed"]

    for _ in range(2000):
        op = rng.choice(ops)
        if op == "fwd":
            controller.step_forward()
        elif op == "back":
            controller.step_backward()
        elif op == "seek":
            controller.seek(rng.randint(-3, 15))
        elif op == "run":
            controller.run()
        elif op == "pause":
            controller.pause()
        elif op == "reset":
            controller.reset()
        elif op == "load":
            controller.load(bubble_trace)
        elif op == "load_short":
            controller.load(short)
        elif op == "tick":
            scheduler.advance(rng.choice([0.05, 0.1, 0.35, 1.0]))
        else:
            controller.set_speed(rng.choice([20, 100, 400]))

        assert scheduler.pending <= 1
        assert (scheduler.pending == 1) == controller.running
        if controller.trace is None:
            assert controller.state == PlaybackState.IDLE
            assert controller.index is None
        else:
            assert 0 <= controller.index < controller.length
            at_end = controller.index == controller.trace.last_index
            assert at_end == (controller.state == PlaybackState.FINISHED)
