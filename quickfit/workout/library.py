"""Built-in workout templates."""

from __future__ import annotations

from quickfit.workout.model import Exercise, Section, WorkoutTemplate


DEFAULT_TEMPLATE_ID = "full-body-30"


def _warmup(name: str) -> Exercise:
    return Exercise(name, "30s")


def _main(name: str, rest: str = "15s") -> Exercise:
    return Exercise(name, "40s", rest)


TEMPLATES: tuple[WorkoutTemplate, ...] = (
    WorkoutTemplate(
        id=DEFAULT_TEMPLATE_ID,
        name="30 Min Full Body",
        duration_min=30,
        sections=(
            Section(
                title="Warm Up",
                exercises=(
                    _warmup("Neck pulses"),
                    _warmup("Neck rotations"),
                    _warmup("Shoulder rotations"),
                    _warmup("Arnold rotations"),
                    _warmup("Chest expansion (lateral)"),
                    _warmup("Chest expansion (front)"),
                    _warmup("Hip rotations"),
                    _warmup("Side to side arm extensions"),
                    _warmup("Lower back & hamstrings"),
                    _warmup("Side lunge pulse"),
                    _warmup("Knee to chest"),
                    _warmup("Squat rotations reach the sky"),
                ),
            ),
            Section(
                title="Main Workout",
                exercises=(
                    _main("3 x Push up 3 x Climbers"),
                    _main("Pike shoulder tap"),
                    _main("Push up into plank rotation"),
                    _main("Reverse snow angels"),
                    _main("In and out push up"),
                    _main("Low plank to high plank", rest="40s"),
                    _main("Reverse lunge reach the sky"),
                    _main("Pulse squats"),
                    _main("Side to side lunge"),
                    _main("Glute bridge"),
                    _main("Squat walk outs"),
                    _main("In and out squat", rest="40s"),
                    _main("Long arm crunches"),
                    _main("Plank knee rotation"),
                    _main("Heel touches"),
                    _main("Oblique crunch (left)"),
                    _main("Oblique crunch (right)"),
                    _main("Reverse crunch", rest="40s"),
                    _main("Burpees"),
                    _main("Jumping jacks"),
                    _main("High knees"),
                    _main("Criss cross oblique crunch"),
                    _main("Butt kicks"),
                    _main("Mountain climbers"),
                ),
            ),
        ),
    ),
)


def list_templates() -> tuple[WorkoutTemplate, ...]:
    return TEMPLATES


def get_template(
    template_id: str,
    catalog: tuple[WorkoutTemplate, ...] | None = None,
) -> WorkoutTemplate:
    """Return the template with ``template_id``, falling back to the default one."""
    templates = catalog if catalog else TEMPLATES
    template = next((item for item in templates if item.id == template_id), None)
    if template is not None:
        return template
    default = next((item for item in templates if item.id == DEFAULT_TEMPLATE_ID), None)
    return default or templates[0]
