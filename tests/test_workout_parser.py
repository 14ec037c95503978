from __future__ import annotations

from pathlib import Path

import pytest

from quickfit.workout.parser import (
    WorkoutParseError,
    load_template,
    template_from_dict,
    template_to_dict,
)

from conftest import SMALL_TEMPLATE


def test_load_template_json(tmp_path: Path) -> None:
    workout_file = tmp_path / "core.json"
    workout_file.write_text(
        (
            '{"name":"Core Blast","duration":15,"sections":[{"title":"Core",'
            '"exercises":[{"name":"Plank","duration":"45s"},'
            '{"name":"Crunch","duration":"40s","rest":"15s"}]}]}'
        ),
        encoding="utf-8",
    )

    template = load_template(workout_file)

    assert template.id == "core"
    assert template.name == "Core Blast"
    assert template.duration_min == 15
    assert template.total_exercises == 2
    assert template.sections[0].exercises[0].rest is None
    assert template.sections[0].exercises[1].rest_sec == 15


def test_unparseable_duration_counts_as_zero() -> None:
    template = template_from_dict(
        {
            "id": "odd",
            "sections": [{"title": "A", "exercises": [{"name": "Walk", "duration": "a while"}]}],
        }
    )
    assert template.sections[0].exercises[0].work_sec == 0


def test_template_dict_round_trip() -> None:
    assert template_from_dict(template_to_dict(SMALL_TEMPLATE)) == SMALL_TEMPLATE


def test_load_template_invalid_extension(tmp_path: Path) -> None:
    workout_file = tmp_path / "sample.csv"
    workout_file.write_text("name,duration\n", encoding="utf-8")

    with pytest.raises(WorkoutParseError):
        load_template(workout_file)


def test_load_template_invalid_json(tmp_path: Path) -> None:
    workout_file = tmp_path / "broken.json"
    workout_file.write_text("{", encoding="utf-8")

    with pytest.raises(WorkoutParseError):
        load_template(workout_file)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"id": "", "sections": []},
        {"id": "x", "sections": {}},
        {"id": "x", "sections": [{"title": "A", "exercises": [{"duration": "30s"}]}]},
        {"id": "x", "duration": "long", "sections": []},
        {"id": "x", "duration": -5, "sections": []},
    ],
)
def test_template_from_dict_rejects_bad_structure(payload: object) -> None:
    with pytest.raises(WorkoutParseError):
        template_from_dict(payload)
