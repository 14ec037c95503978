"""Application state persisted between runs."""

from __future__ import annotations

from dataclasses import dataclass

from quickfit.workout.history import History
from quickfit.workout.library import list_templates
from quickfit.workout.model import WorkoutTemplate
from quickfit.workout.session import Position, WorkoutSession


DEFAULT_WEEKLY_GOAL = 5


@dataclass(frozen=True)
class AppState:
    history: History = ()
    total_workouts: int = 0
    weekly_goal: int = DEFAULT_WEEKLY_GOAL
    this_week_completed: int = 0
    total_time_spent: int = 0
    catalog: tuple[WorkoutTemplate, ...] = list_templates()
    session: WorkoutSession | None = None
    active_section: int = 0
    active_exercise: int = 0
    workout_started: bool = False
    workout_completed: bool = False

    @property
    def active_position(self) -> Position:
        return self.active_section, self.active_exercise
