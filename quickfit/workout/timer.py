"""Work/rest countdown for a single exercise."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from quickfit.core.clock import Clock, TickHandle
from quickfit.workout.model import Exercise


logger = logging.getLogger(__name__)

TimerPhase = Literal["work", "rest"]
FinishCallback = Callable[[], None]


@dataclass(frozen=True)
class TimerSnapshot:
    phase: TimerPhase
    remaining_sec: int
    phase_duration_sec: int
    running: bool
    finished: bool


class ExerciseTimer:
    """State machine over ``work -> rest -> finished``.

    The clock drives :meth:`tick` once per interval while running. Phase
    changes happen inside the tick; the schedule itself is never re-armed for
    the rest phase. ``on_finish`` fires at most once per timer instance,
    whether the countdown runs out or :meth:`complete_now` is used.
    """

    def __init__(
        self,
        exercise: Exercise,
        clock: Clock,
        on_finish: Optional[FinishCallback] = None,
        *,
        interval_sec: float = 1.0,
        already_completed: bool = False,
    ) -> None:
        self._exercise = exercise
        self._clock = clock
        self._on_finish = on_finish
        self._interval_sec = interval_sec
        self._handle: Optional[TickHandle] = None
        self._phase: TimerPhase = "work"
        self._remaining = exercise.work_sec
        self._running = False
        self._finished = already_completed
        self._signaled = already_completed

    @property
    def exercise(self) -> Exercise:
        return self._exercise

    @property
    def phase(self) -> TimerPhase:
        return self._phase

    @property
    def remaining_sec(self) -> int:
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_finished(self) -> bool:
        return self._finished

    def snapshot(self) -> TimerSnapshot:
        duration = self._exercise.work_sec if self._phase == "work" else self._exercise.rest_sec
        return TimerSnapshot(
            phase=self._phase,
            remaining_sec=self._remaining,
            phase_duration_sec=duration,
            running=self._running,
            finished=self._finished,
        )

    def start(self) -> None:
        if self._finished:
            return
        self._cancel_tick()
        self._running = True
        self._handle = self._clock.schedule_every(self._interval_sec, self.tick)

    def pause(self) -> None:
        self._cancel_tick()
        self._running = False

    def reset(self) -> None:
        self._cancel_tick()
        self._phase = "work"
        self._remaining = self._exercise.work_sec
        self._running = False
        self._finished = False

    def dispose(self) -> None:
        """Stop ticking for good; used when the exercise leaves the screen."""
        self._cancel_tick()
        self._running = False

    def tick(self) -> None:
        if not self._running:
            return
        if self._remaining > 1:
            self._remaining -= 1
            return
        if self._phase == "work" and self._exercise.has_rest:
            self._phase = "rest"
            self._remaining = self._exercise.rest_sec
            logger.debug("Rest phase started for %s", self._exercise.name)
            return
        self._remaining = 0
        self._finish()

    def complete_now(self) -> None:
        self._finish()

    def _finish(self) -> None:
        self._cancel_tick()
        self._running = False
        self._finished = True
        if self._signaled:
            return
        self._signaled = True
        logger.debug("Exercise finished: %s", self._exercise.name)
        if self._on_finish is not None:
            self._on_finish()

    def _cancel_tick(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
