"""Local persistence for the workout state (history, counters, active session)."""

from __future__ import annotations

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Any

from quickfit.core.errors import MalformedStateError, NotFoundError
from quickfit.core.state import AppState
from quickfit.workout.history import HistoryEntry
from quickfit.workout.parser import WorkoutParseError, template_from_dict, template_to_dict
from quickfit.workout.session import WorkoutSession


logger = logging.getLogger(__name__)

STATE_VERSION = 1


def _default_state_path() -> Path:
    return Path.home() / ".quickfit" / "state.json"


def save_state(state: AppState, path: Path | None = None) -> Path:
    target = path or _default_state_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(target.name + ".tmp")
    tmp.write_text(
        json.dumps(state_to_dict(state), ensure_ascii=True, indent=2), encoding="utf-8"
    )
    os.replace(tmp, target)
    return target


def load_state(path: Path | None = None) -> AppState:
    """Load persisted state; missing or malformed data yields the default state."""
    target = path or _default_state_path()
    if not target.exists():
        return AppState()
    # ValueError covers bad UTF-8 and bad JSON; deep nesting raises RecursionError.
    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
        return state_from_dict(payload)
    except (OSError, ValueError, RecursionError, MalformedStateError) as exc:
        logger.warning("Discarding unreadable workout state at %s: %s", target, exc)
        return AppState()


def state_to_dict(state: AppState) -> dict[str, Any]:
    session = state.session
    return {
        "version": STATE_VERSION,
        "history": [
            {
                "date": entry.date.isoformat(),
                "completed": entry.completed,
                "progress": entry.progress,
            }
            for entry in state.history
        ],
        "total_workouts": state.total_workouts,
        "weekly_goal": state.weekly_goal,
        "this_week_completed": state.this_week_completed,
        "total_time_spent": state.total_time_spent,
        "catalog": [template_to_dict(template) for template in state.catalog],
        "session": None
        if session is None
        else {
            "template": template_to_dict(session.template),
            "start_date": session.start_date.isoformat() if session.start_date else None,
            "completed": [list(flags) for flags in session.completed],
            "total_exercises": session.total_exercises,
            "completed_exercises": session.completed_exercises,
        },
        "active_section": state.active_section,
        "active_exercise": state.active_exercise,
        "workout_started": state.workout_started,
        "workout_completed": state.workout_completed,
    }


def state_from_dict(payload: object) -> AppState:
    if not isinstance(payload, dict):
        raise MalformedStateError("State must be an object")

    defaults = AppState()
    try:
        history = tuple(_entry_from_dict(raw) for raw in _list(payload, "history"))
        catalog = tuple(template_from_dict(raw) for raw in _list(payload, "catalog"))
        session_obj = payload.get("session")
        session = None if session_obj is None else _session_from_dict(session_obj)
    except WorkoutParseError as exc:
        raise MalformedStateError(str(exc)) from exc

    seen: set[date] = set()
    for entry in history:
        if entry.date in seen:
            raise MalformedStateError(f"Duplicate history entry for {entry.date}")
        seen.add(entry.date)

    active = (_int(payload, "active_section", 0), _int(payload, "active_exercise", 0))
    started = _bool(payload, "workout_started", False)
    finished = _bool(payload, "workout_completed", False)
    _check_session_position(session, active, started, finished)

    return AppState(
        history=history,
        total_workouts=_int(payload, "total_workouts", defaults.total_workouts),
        weekly_goal=_int(payload, "weekly_goal", defaults.weekly_goal),
        this_week_completed=_int(payload, "this_week_completed", defaults.this_week_completed),
        total_time_spent=_int(payload, "total_time_spent", defaults.total_time_spent),
        catalog=catalog or defaults.catalog,
        session=session,
        active_section=active[0],
        active_exercise=active[1],
        workout_started=started,
        workout_completed=finished,
    )


def _check_session_position(
    session: WorkoutSession | None,
    active: tuple[int, int],
    started: bool,
    finished: bool,
) -> None:
    if session is None:
        if started or finished:
            raise MalformedStateError("Workout flags are set without a session")
        if active != (0, 0):
            raise MalformedStateError(f"Active position {active} is set without a session")
        return
    # A template without exercises keeps the pointer at the origin.
    if session.total_exercises == 0 and active == (0, 0):
        return
    try:
        session.exercise_at(*active)
    except NotFoundError as exc:
        raise MalformedStateError(f"Active position {active} is outside the session") from exc


def _entry_from_dict(raw: object) -> HistoryEntry:
    if not isinstance(raw, dict):
        raise MalformedStateError("History entry must be an object")
    progress = _int(raw, "progress", 0)
    if not 0 <= progress <= 100:
        raise MalformedStateError(f"History progress out of range: {progress}")
    return HistoryEntry(
        date=_date(raw.get("date")),
        completed=_bool(raw, "completed", False),
        progress=progress,
    )


def _session_from_dict(raw: object) -> WorkoutSession:
    if not isinstance(raw, dict):
        raise MalformedStateError("Session must be an object")
    template = template_from_dict(raw.get("template"))
    start_obj = raw.get("start_date")
    start_date = None if start_obj is None else _date(start_obj)

    flags_obj = raw.get("completed")
    if not isinstance(flags_obj, list) or len(flags_obj) != len(template.sections):
        raise MalformedStateError("Session flags do not match the template sections")
    flags: list[tuple[bool, ...]] = []
    for section, section_flags in zip(template.sections, flags_obj):
        if not isinstance(section_flags, list) or len(section_flags) != len(section.exercises):
            raise MalformedStateError(f"Session flags do not match section '{section.title}'")
        if not all(isinstance(flag, bool) for flag in section_flags):
            raise MalformedStateError("Session flags must be booleans")
        flags.append(tuple(section_flags))
    return WorkoutSession(template=template, start_date=start_date, completed=tuple(flags))


def _list(payload: dict[str, Any], key: str) -> list[Any]:
    value = payload.get(key, [])
    if not isinstance(value, list):
        raise MalformedStateError(f"Field '{key}' must be an array")
    return value


def _int(payload: dict[str, Any], key: str, default: int) -> int:
    value = payload.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedStateError(f"Field '{key}' must be a non-negative integer")
    return value


def _bool(payload: dict[str, Any], key: str, default: bool) -> bool:
    value = payload.get(key, default)
    if not isinstance(value, bool):
        raise MalformedStateError(f"Field '{key}' must be a boolean")
    return value


def _date(raw: object) -> date:
    if not isinstance(raw, str):
        raise MalformedStateError(f"Invalid date: {raw!r}")
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise MalformedStateError(f"Invalid date: {raw!r}") from exc
