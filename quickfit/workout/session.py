"""Workout session value and its copy-on-write updates."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date

from quickfit.core.errors import NotFoundError
from quickfit.workout.model import Exercise, WorkoutTemplate


Position = tuple[int, int]


@dataclass(frozen=True)
class WorkoutSession:
    """One attempt at a template.

    ``completed`` mirrors the template shape: one tuple of flags per section,
    one flag per exercise.
    """

    template: WorkoutTemplate
    start_date: date | None
    completed: tuple[tuple[bool, ...], ...]

    @classmethod
    def begin(cls, template: WorkoutTemplate, start_date: date) -> WorkoutSession:
        flags = tuple(
            tuple(False for _ in section.exercises) for section in template.sections
        )
        return cls(template=template, start_date=start_date, completed=flags)

    @property
    def total_exercises(self) -> int:
        return sum(len(flags) for flags in self.completed)

    @property
    def completed_exercises(self) -> int:
        return sum(sum(1 for flag in flags if flag) for flags in self.completed)

    @property
    def progress_pct(self) -> int:
        total = self.total_exercises
        if total == 0:
            return 0
        return round(100 * self.completed_exercises / total)

    @property
    def is_fully_completed(self) -> bool:
        total = self.total_exercises
        return total > 0 and self.completed_exercises == total

    def exercise_at(self, section_index: int, exercise_index: int) -> Exercise:
        sections = self.template.sections
        if not 0 <= section_index < len(sections):
            raise NotFoundError(f"Section {section_index} does not exist")
        exercises = sections[section_index].exercises
        if not 0 <= exercise_index < len(exercises):
            raise NotFoundError(
                f"Exercise {exercise_index} does not exist in section {section_index}"
            )
        return exercises[exercise_index]

    def is_completed(self, section_index: int, exercise_index: int) -> bool:
        self.exercise_at(section_index, exercise_index)
        return self.completed[section_index][exercise_index]

    def mark_completed(self, section_index: int, exercise_index: int) -> WorkoutSession:
        if self.is_completed(section_index, exercise_index):
            return self
        flags = list(self.completed[section_index])
        flags[exercise_index] = True
        sections = list(self.completed)
        sections[section_index] = tuple(flags)
        return replace(self, completed=tuple(sections))

    def with_start_date(self, day: date) -> WorkoutSession:
        if self.start_date is not None:
            return self
        return replace(self, start_date=day)

    def positions(self) -> list[Position]:
        return [
            (s, e)
            for s, flags in enumerate(self.completed)
            for e in range(len(flags))
        ]

    def next_incomplete(self, after: Position | None = None) -> Position | None:
        """First incomplete exercise in document order, optionally strictly after ``after``."""
        for position in self.positions():
            if after is not None and position <= after:
                continue
            if not self.completed[position[0]][position[1]]:
                return position
        return None

    def section_counts(self) -> list[tuple[int, int]]:
        return [(sum(1 for flag in flags if flag), len(flags)) for flags in self.completed]


def next_position(session: WorkoutSession, position: Position) -> Position | None:
    """Position following ``position`` in document order, wrapping across sections."""
    section_index, exercise_index = position
    sections = session.template.sections
    exercise_index += 1
    while section_index < len(sections):
        if exercise_index < len(sections[section_index].exercises):
            return section_index, exercise_index
        section_index += 1
        exercise_index = 0
    return None
