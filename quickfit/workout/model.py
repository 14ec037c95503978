"""Workout domain models."""

from __future__ import annotations

import re
from dataclasses import dataclass


_DURATION_RE = re.compile(r"(\d+)s")


def parse_duration(token: str | None) -> int:
    """Parse a duration token such as ``"40s"`` to seconds (0 when unparseable)."""
    if not token:
        return 0
    match = _DURATION_RE.search(str(token))
    if match is None:
        return 0
    return int(match.group(1))


@dataclass(frozen=True)
class Exercise:
    name: str
    duration: str
    rest: str | None = None

    @property
    def work_sec(self) -> int:
        return parse_duration(self.duration)

    @property
    def rest_sec(self) -> int:
        return parse_duration(self.rest)

    @property
    def has_rest(self) -> bool:
        return self.rest_sec > 0


@dataclass(frozen=True)
class Section:
    title: str
    exercises: tuple[Exercise, ...]


@dataclass(frozen=True)
class WorkoutTemplate:
    id: str
    name: str
    duration_min: int
    sections: tuple[Section, ...]

    @property
    def total_exercises(self) -> int:
        return sum(len(section.exercises) for section in self.sections)
