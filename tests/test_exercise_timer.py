from __future__ import annotations

import asyncio

from quickfit.core.clock import SystemClock
from quickfit.workout.model import Exercise
from quickfit.workout.timer import ExerciseTimer

from conftest import FakeClock


def _timer(exercise: Exercise, clock: FakeClock, finishes: list[str]) -> ExerciseTimer:
    return ExerciseTimer(exercise, clock, on_finish=lambda: finishes.append(exercise.name))


def test_initial_state_is_paused_work_phase(clock: FakeClock) -> None:
    timer = _timer(Exercise("Burpees", "40s", "15s"), clock, [])
    snapshot = timer.snapshot()
    assert snapshot.phase == "work"
    assert snapshot.remaining_sec == 40
    assert snapshot.running is False
    assert snapshot.finished is False
    assert clock.active_handles == 0


def test_work_then_rest_then_finish(clock: FakeClock) -> None:
    finishes: list[str] = []
    timer = _timer(Exercise("Burpees", "40s", "15s"), clock, finishes)
    timer.start()

    clock.advance(39)
    assert timer.phase == "work"
    assert timer.remaining_sec == 1

    clock.advance(1)
    assert timer.phase == "rest"
    assert timer.remaining_sec == 15
    assert timer.is_running is True
    assert finishes == []

    clock.advance(15)
    assert finishes == ["Burpees"]
    assert timer.is_running is False
    assert timer.is_finished is True
    assert clock.active_handles == 0

    clock.advance(10)
    assert finishes == ["Burpees"]


def test_finish_directly_from_work_without_rest(clock: FakeClock) -> None:
    finishes: list[str] = []
    timer = _timer(Exercise("Neck pulses", "30s"), clock, finishes)
    timer.start()

    clock.advance(29)
    assert finishes == []
    clock.advance(1)
    assert finishes == ["Neck pulses"]
    assert timer.phase == "work"


def test_pause_then_start_resumes_from_remaining(clock: FakeClock) -> None:
    timer = _timer(Exercise("Plank", "30s"), clock, [])
    timer.start()
    clock.advance(12)
    timer.pause()
    clock.advance(5)
    assert timer.remaining_sec == 18
    assert clock.active_handles == 0

    timer.start()
    clock.advance(3)
    assert timer.remaining_sec == 15


def test_restart_replaces_previous_tick(clock: FakeClock) -> None:
    timer = _timer(Exercise("Plank", "30s"), clock, [])
    timer.start()
    timer.start()
    assert clock.active_handles == 1
    clock.advance(2)
    assert timer.remaining_sec == 28


def test_reset_returns_to_work_phase(clock: FakeClock) -> None:
    timer = _timer(Exercise("Burpees", "40s", "15s"), clock, [])
    timer.start()
    clock.advance(45)
    assert timer.phase == "rest"

    timer.reset()
    assert timer.phase == "work"
    assert timer.remaining_sec == 40
    assert timer.is_running is False
    assert clock.active_handles == 0


def test_complete_now_signals_once(clock: FakeClock) -> None:
    finishes: list[str] = []
    timer = _timer(Exercise("Burpees", "40s", "15s"), clock, finishes)
    timer.start()
    clock.advance(5)

    timer.complete_now()
    timer.complete_now()
    assert finishes == ["Burpees"]
    assert clock.active_handles == 0

    timer.reset()
    timer.start()
    clock.advance(60)
    assert finishes == ["Burpees"]


def test_already_completed_timer_never_signals(clock: FakeClock) -> None:
    finishes: list[str] = []
    timer = ExerciseTimer(
        Exercise("Burpees", "40s"),
        clock,
        on_finish=lambda: finishes.append("x"),
        already_completed=True,
    )
    timer.start()
    timer.complete_now()
    assert finishes == []
    assert timer.snapshot().finished is True


def test_dispose_cancels_tick(clock: FakeClock) -> None:
    timer = _timer(Exercise("Plank", "30s"), clock, [])
    timer.start()
    timer.dispose()
    clock.advance(5)
    assert timer.remaining_sec == 30
    assert clock.active_handles == 0


def test_unparseable_duration_finishes_on_first_tick(clock: FakeClock) -> None:
    finishes: list[str] = []
    timer = _timer(Exercise("Mystery", "1 minute"), clock, finishes)
    assert timer.remaining_sec == 0
    timer.start()
    clock.advance(1)
    assert finishes == ["Mystery"]


def test_system_clock_drives_timer_on_event_loop() -> None:
    async def _run() -> None:
        finishes: list[bool] = []
        timer = ExerciseTimer(
            Exercise("Sprint", "3s", "2s"),
            SystemClock(),
            on_finish=lambda: finishes.append(True),
            interval_sec=0.01,
        )
        timer.start()
        for _ in range(200):
            if finishes:
                break
            await asyncio.sleep(0.01)
        assert finishes == [True]
        assert timer.is_running is False
        assert timer.phase == "rest"

    asyncio.run(_run())
