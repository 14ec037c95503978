"""Controller used by the UI layers: one engine, at most one live exercise timer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from quickfit.core.clock import Clock
from quickfit.core.engine import SessionEngine, SessionSnapshot
from quickfit.workout.model import Exercise, Section
from quickfit.workout.progress import DEFAULT_WEEK_START, AggregateStats
from quickfit.workout.session import Position
from quickfit.workout.timer import ExerciseTimer, TimerSnapshot


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExerciseView:
    section_index: int
    exercise_index: int
    section: Section
    exercise: Exercise
    completed: bool


class WorkoutController:
    def __init__(
        self,
        engine: SessionEngine | None = None,
        *,
        state_path: Path | None = None,
        clock: Clock | None = None,
        week_start: int = DEFAULT_WEEK_START,
        tick_interval_sec: float = 1.0,
    ) -> None:
        self._engine = engine or SessionEngine(
            state_path=state_path, clock=clock, week_start=week_start
        )
        self._tick_interval_sec = tick_interval_sec
        self._timer: ExerciseTimer | None = None
        self._view: ExerciseView | None = None

    @property
    def engine(self) -> SessionEngine:
        return self._engine

    @property
    def current_view(self) -> ExerciseView | None:
        return self._view

    def start_workout(self, template_id: str) -> None:
        self.close_exercise()
        self._engine.start_session(template_id)

    def resume_or_start(self, template_id: str) -> None:
        """Reconcile yesterday's leftovers, then start only if nothing is in progress."""
        self._engine.check_for_stale_sessions()
        if self._engine.state.session is None:
            self._engine.start_session(template_id)

    def reset_workout(self) -> None:
        self.close_exercise()
        self._engine.reset_session()

    def open_exercise(self, section_index: int, exercise_index: int) -> ExerciseView | None:
        """Show an exercise and build its timer; None when the pair does not exist."""
        self.close_exercise()
        exercise = self._engine.locate_exercise(section_index, exercise_index)
        session = self._engine.state.session
        if exercise is None or session is None:
            return None

        completed = session.is_completed(section_index, exercise_index)
        self._view = ExerciseView(
            section_index=section_index,
            exercise_index=exercise_index,
            section=session.template.sections[section_index],
            exercise=exercise,
            completed=completed,
        )
        self._timer = ExerciseTimer(
            exercise,
            self._engine.clock,
            on_finish=lambda: self._on_exercise_finished(section_index, exercise_index),
            interval_sec=self._tick_interval_sec,
            already_completed=completed,
        )
        return self._view

    def close_exercise(self) -> None:
        """Leave the current exercise: stop its ticks and keep partial progress."""
        if self._timer is None:
            return
        self._timer.dispose()
        self._timer = None
        self._view = None
        self._engine.save_partial_progress()

    def start_timer(self) -> None:
        if self._timer is not None:
            self._timer.start()

    def pause_timer(self) -> None:
        if self._timer is not None:
            self._timer.pause()

    def reset_timer(self) -> None:
        if self._timer is not None:
            self._timer.reset()

    def complete_now(self) -> None:
        if self._timer is not None:
            self._timer.complete_now()

    def next_exercise(self) -> Position | None:
        """Finish the shown exercise if needed and return where to go next."""
        if self._timer is not None and not self._timer.is_finished:
            self._timer.complete_now()
        return self._engine.next_incomplete()

    def timer_snapshot(self) -> TimerSnapshot | None:
        return None if self._timer is None else self._timer.snapshot()

    def session_snapshot(self) -> SessionSnapshot | None:
        return self._engine.session_snapshot()

    def stats(self) -> AggregateStats:
        return self._engine.stats()

    def _on_exercise_finished(self, section_index: int, exercise_index: int) -> None:
        logger.info("Exercise %d/%d finished", section_index, exercise_index)
        self._engine.complete_exercise(section_index, exercise_index)
        if self._view is not None:
            self._view = replace(self._view, completed=True)
