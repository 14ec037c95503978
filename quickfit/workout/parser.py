"""Workout template parser (JSON)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from quickfit.workout.model import Exercise, Section, WorkoutTemplate


class WorkoutParseError(ValueError):
    """Raised when a workout template is invalid."""


def load_template(path: str | Path) -> WorkoutTemplate:
    file_path = Path(path)
    if file_path.suffix.lower() != ".json":
        raise WorkoutParseError(
            f"Unsupported workout format '{file_path.suffix}'. Use .json"
        )
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise WorkoutParseError(f"Invalid JSON: {exc}") from exc

    if isinstance(data, dict):
        data.setdefault("id", file_path.stem)
        data.setdefault("name", file_path.stem)
    return template_from_dict(data)


def template_from_dict(data: object) -> WorkoutTemplate:
    if not isinstance(data, dict):
        raise WorkoutParseError("Workout JSON must be an object")

    template_id = data.get("id")
    if not isinstance(template_id, str) or not template_id.strip():
        raise WorkoutParseError("Workout field 'id' must be a non-empty string")

    name_obj = data.get("name", template_id)
    if not isinstance(name_obj, str):
        raise WorkoutParseError("Workout field 'name' must be a string")

    duration_min = _parse_minutes(data.get("duration", 0))

    sections_obj = data.get("sections")
    if not isinstance(sections_obj, list):
        raise WorkoutParseError("Workout field 'sections' must be an array")

    sections = tuple(_build_section(raw, i) for i, raw in enumerate(sections_obj))
    return WorkoutTemplate(
        id=template_id.strip(),
        name=name_obj.strip() or template_id,
        duration_min=duration_min,
        sections=sections,
    )


def template_to_dict(template: WorkoutTemplate) -> dict[str, Any]:
    return {
        "id": template.id,
        "name": template.name,
        "duration": template.duration_min,
        "sections": [
            {
                "title": section.title,
                "exercises": [
                    {"name": ex.name, "duration": ex.duration, "rest": ex.rest}
                    for ex in section.exercises
                ],
            }
            for section in template.sections
        ],
    }


def _build_section(raw: object, index: int) -> Section:
    if not isinstance(raw, dict):
        raise WorkoutParseError(f"Section {index + 1}: must be an object")
    title = raw.get("title", f"Section {index + 1}")
    exercises_obj = raw.get("exercises")
    if not isinstance(exercises_obj, list):
        raise WorkoutParseError(f"Section {index + 1}: 'exercises' must be an array")
    exercises = tuple(
        _build_exercise(item, section_index=index, index=i)
        for i, item in enumerate(exercises_obj)
    )
    return Section(title=str(title), exercises=exercises)


def _build_exercise(raw: object, *, section_index: int, index: int) -> Exercise:
    where = f"Section {section_index + 1}, exercise {index + 1}"
    if not isinstance(raw, dict):
        raise WorkoutParseError(f"{where}: must be an object")
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise WorkoutParseError(f"{where}: 'name' must be a non-empty string")

    # Unparseable duration tokens are kept and count as zero seconds.
    duration = raw.get("duration")
    rest = raw.get("rest")
    return Exercise(
        name=name.strip(),
        duration="" if duration is None else str(duration),
        rest=None if rest is None or str(rest).strip() == "" else str(rest),
    )


def _parse_minutes(raw: object) -> int:
    try:
        value = int(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError("Workout field 'duration' must be an integer") from exc
    if value < 0:
        raise WorkoutParseError("Workout field 'duration' must be >= 0")
    return value
