"""Workout session lifecycle.

The module-level functions are pure transitions ``AppState -> AppState``.
:class:`SessionEngine` holds the one current state value, threads the clock's
date into the transitions and writes the state to disk after each change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Optional

from quickfit.core.clock import Clock, SystemClock
from quickfit.core.errors import InvalidStateError, NotFoundError
from quickfit.core.state import AppState
from quickfit.workout.history import HistoryEntry, upsert_entry
from quickfit.workout.library import get_template
from quickfit.workout.model import Exercise, WorkoutTemplate
from quickfit.workout.progress import (
    DEFAULT_WEEK_START,
    AggregateStats,
    compute_stats,
    did_workout_today,
)
from quickfit.workout.session import Position, WorkoutSession, next_position
from quickfit.workout.store import load_state, save_state


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    template_id: str
    name: str
    duration_min: int
    start_date: date | None
    total_exercises: int
    completed_exercises: int
    progress_pct: int
    active_section: int
    active_exercise: int
    workout_started: bool
    workout_completed: bool
    section_counts: tuple[tuple[int, int], ...]


def _cleared(state: AppState) -> AppState:
    return replace(
        state,
        session=None,
        active_section=0,
        active_exercise=0,
        workout_started=False,
        workout_completed=False,
    )


def _record_progress(state: AppState, session: WorkoutSession, day: date) -> AppState:
    """Write the ledger entry for ``day`` from the session flags."""
    if state.workout_completed:
        # A finalized day stays finalized.
        entry = HistoryEntry(date=day, completed=True, progress=100)
    else:
        entry = HistoryEntry(
            date=day,
            completed=session.is_fully_completed,
            progress=session.progress_pct,
        )
    return replace(state, session=session, history=upsert_entry(state.history, entry))


def _finalize(state: AppState, session: WorkoutSession, day: date) -> AppState:
    entry = HistoryEntry(date=day, completed=True, progress=100)
    logger.info("Workout '%s' completed on %s", session.template.name, day)
    return replace(
        state,
        session=session,
        history=upsert_entry(state.history, entry),
        workout_completed=True,
        total_workouts=state.total_workouts + 1,
        this_week_completed=state.this_week_completed + 1,
        total_time_spent=state.total_time_spent + session.template.duration_min,
    )


def _require_session(state: AppState) -> WorkoutSession:
    if state.session is None:
        raise InvalidStateError("No active workout session")
    return state.session


def check_for_stale_sessions(state: AppState, today: date) -> AppState:
    session = state.session
    if session is None or session.start_date is None:
        return state
    if session.start_date == today or session.completed_exercises == 0:
        return state

    if state.workout_completed:
        logger.info("Clearing completed session from %s", session.start_date)
        return _cleared(state)

    # An abandoned day is archived as incomplete, whatever its progress.
    entry = HistoryEntry(
        date=session.start_date,
        completed=False,
        progress=session.progress_pct,
    )
    logger.info(
        "Archiving stale session from %s at %d%%", session.start_date, entry.progress
    )
    return _cleared(replace(state, history=upsert_entry(state.history, entry)))


def start_session(state: AppState, template_id: str, today: date) -> AppState:
    if state.session is not None:
        state = check_for_stale_sessions(state, today)

    template = get_template(template_id, state.catalog)
    if template.id != template_id:
        logger.warning("Unknown workout template '%s', using '%s'", template_id, template.id)
    return replace(
        state,
        session=WorkoutSession.begin(template, today),
        active_section=0,
        active_exercise=0,
        workout_started=True,
        workout_completed=False,
    )


def complete_exercise(
    state: AppState,
    today: date,
    section_index: Optional[int] = None,
    exercise_index: Optional[int] = None,
) -> AppState:
    try:
        session = _require_session(state)
    except InvalidStateError as exc:
        logger.debug("complete_exercise ignored: %s", exc)
        return state

    target: Position = state.active_position
    explicit = False
    if section_index is not None and exercise_index is not None:
        target = (section_index, exercise_index)
        explicit = True
    try:
        session = session.mark_completed(*target).with_start_date(today)
    except NotFoundError as exc:
        logger.warning("complete_exercise ignored: %s", exc)
        return state

    day = session.start_date or today
    state = _record_progress(state, session, day)

    if explicit:
        # The pointer follows the first incomplete exercise, never the user's pick.
        pointer = session.next_incomplete() or state.active_position
    else:
        pointer = next_position(session, target) or target
    state = replace(state, active_section=pointer[0], active_exercise=pointer[1])

    reached_end = not explicit and next_position(session, target) is None
    if (reached_end or session.is_fully_completed) and not state.workout_completed:
        state = _finalize(state, session, day)
    return state


def save_partial_progress(state: AppState, today: date) -> AppState:
    if state.session is None:
        return state
    session = state.session.with_start_date(today)
    if session.completed_exercises == 0:
        return replace(state, session=session)
    return _record_progress(state, session, session.start_date or today)


def reset_session(state: AppState) -> AppState:
    return _cleared(state)


def add_template(state: AppState, template: WorkoutTemplate) -> AppState:
    """Add ``template`` to the catalog, replacing any template with the same id."""
    others = tuple(item for item in state.catalog if item.id != template.id)
    return replace(state, catalog=others + (template,))


def locate_exercise(state: AppState, section_index: int, exercise_index: int) -> Exercise:
    session = _require_session(state)
    return session.exercise_at(section_index, exercise_index)


def is_navigable(state: AppState, section_index: int, exercise_index: int) -> bool:
    """Completed exercises, anything up to the active position, and the one after a completed exercise."""
    session = state.session
    if session is None:
        return False
    try:
        if session.is_completed(section_index, exercise_index):
            return True
    except NotFoundError:
        return False
    if (section_index, exercise_index) <= state.active_position:
        return True
    positions = session.positions()
    index = positions.index((section_index, exercise_index))
    if index == 0:
        return False
    previous = positions[index - 1]
    return session.completed[previous[0]][previous[1]]


def session_snapshot(state: AppState) -> SessionSnapshot | None:
    session = state.session
    if session is None:
        return None
    return SessionSnapshot(
        template_id=session.template.id,
        name=session.template.name,
        duration_min=session.template.duration_min,
        start_date=session.start_date,
        total_exercises=session.total_exercises,
        completed_exercises=session.completed_exercises,
        progress_pct=session.progress_pct,
        active_section=state.active_section,
        active_exercise=state.active_exercise,
        workout_started=state.workout_started,
        workout_completed=state.workout_completed,
        section_counts=tuple(session.section_counts()),
    )


class SessionEngine:
    def __init__(
        self,
        state_path: Path | None = None,
        clock: Clock | None = None,
        week_start: int = DEFAULT_WEEK_START,
        state: AppState | None = None,
    ) -> None:
        self._state_path = state_path
        self._clock = clock or SystemClock()
        self._week_start = week_start
        self._state = state if state is not None else load_state(state_path)

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def clock(self) -> Clock:
        return self._clock

    def start_session(self, template_id: str) -> None:
        self._commit(start_session(self._state, template_id, self._clock.today()))

    def complete_exercise(
        self,
        section_index: Optional[int] = None,
        exercise_index: Optional[int] = None,
    ) -> None:
        self._commit(
            complete_exercise(
                self._state,
                self._clock.today(),
                section_index,
                exercise_index,
            )
        )

    def save_partial_progress(self) -> None:
        self._commit(save_partial_progress(self._state, self._clock.today()))

    def check_for_stale_sessions(self) -> None:
        self._commit(check_for_stale_sessions(self._state, self._clock.today()))

    def reset_session(self) -> None:
        self._commit(reset_session(self._state))

    def add_template(self, template: WorkoutTemplate) -> None:
        self._commit(add_template(self._state, template))

    def locate_exercise(self, section_index: int, exercise_index: int) -> Exercise | None:
        try:
            return locate_exercise(self._state, section_index, exercise_index)
        except (NotFoundError, InvalidStateError) as exc:
            logger.debug("Exercise lookup failed: %s", exc)
            return None

    def is_navigable(self, section_index: int, exercise_index: int) -> bool:
        return is_navigable(self._state, section_index, exercise_index)

    def next_incomplete(self) -> Position | None:
        if self._state.session is None:
            return None
        return self._state.session.next_incomplete()

    def session_snapshot(self) -> SessionSnapshot | None:
        return session_snapshot(self._state)

    def stats(self) -> AggregateStats:
        return compute_stats(self._state, self._clock.today(), self._week_start)

    def did_workout_today(self) -> bool:
        return did_workout_today(self._state.history, self._clock.today())

    def _commit(self, new_state: AppState) -> None:
        if new_state is self._state:
            return
        save_state(new_state, self._state_path)
        self._state = new_state
