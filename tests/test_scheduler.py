import threading

from engine import ManualScheduler, TimerScheduler


def test_manual_calls_fire_in_due_order():
    sched = ManualScheduler()
    fired = []
    sched.call_later(0.3, fired.append, "c")
    sched.call_later(0.1, fired.append, "a")
    sched.call_later(0.2, fired.append, "b")

    assert sched.advance(0.25) == 2
    assert fired == ["a", "b"]
    assert sched.pending == 1
    sched.advance(1)
    assert fired == ["a", "b", "c"]
    assert sched.fired == 3


def test_cancelled_calls_never_fire():
    sched = ManualScheduler()
    fired = []
    call = sched.call_later(0.1, fired.append, 1)
    call.cancel()
    call.cancel()

    assert sched.pending == 0
    assert sched.advance(1) == 0
    assert fired == []


def test_calls_scheduled_while_advancing_fire_if_due():
    sched = ManualScheduler()
    ticks = []

    def tick():
        ticks.append(sched.now)
        if len(ticks) < 10:
            sched.call_later(0.1, tick)

    sched.call_later(0.1, tick)
    sched.advance_ms(350)

    assert len(ticks) == 3
    assert sched.pending == 1


def test_timer_scheduler_runs_and_cancels():
    done = threading.Event()
    never = threading.Event()
    sched = TimerScheduler()

    sched.call_later(0.0, done.set)
    cancelled = sched.call_later(0.5, never.set)
    cancelled.cancel()

    assert done.wait(2.0)
    assert not never.wait(0.6)
