from __future__ import annotations

from quickfit.workout.library import DEFAULT_TEMPLATE_ID, get_template, list_templates
from quickfit.workout.model import Exercise, parse_duration

from conftest import SMALL_TEMPLATE


def test_default_template_shape() -> None:
    template = get_template(DEFAULT_TEMPLATE_ID)
    assert template.name == "30 Min Full Body"
    assert template.duration_min == 30
    assert [section.title for section in template.sections] == ["Warm Up", "Main Workout"]
    assert len(template.sections[0].exercises) == 12
    assert len(template.sections[1].exercises) == 24
    assert template.total_exercises == 36


def test_main_exercises_have_rest_and_warmup_does_not() -> None:
    template = get_template(DEFAULT_TEMPLATE_ID)
    assert all(not ex.has_rest for ex in template.sections[0].exercises)
    assert all(ex.work_sec == 40 for ex in template.sections[1].exercises)
    rests = {ex.rest_sec for ex in template.sections[1].exercises}
    assert rests == {15, 40}


def test_get_template_falls_back_to_default() -> None:
    assert get_template("unknown").id == DEFAULT_TEMPLATE_ID
    assert get_template("unknown", (SMALL_TEMPLATE,)).id == "small"
    assert get_template("small", list_templates() + (SMALL_TEMPLATE,)).id == "small"


def test_parse_duration_tokens() -> None:
    assert parse_duration("30s") == 30
    assert parse_duration("40s") == 40
    assert parse_duration("0s") == 0
    assert parse_duration("") == 0
    assert parse_duration(None) == 0
    assert parse_duration("soon") == 0
    assert parse_duration("2m") == 0


def test_exercise_without_rest() -> None:
    exercise = Exercise("Plank", "45s")
    assert exercise.work_sec == 45
    assert exercise.rest_sec == 0
    assert exercise.has_rest is False
    assert Exercise("Plank", "45s", "0s").has_rest is False
