"""Streak and weekly figures derived from the history ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING

from quickfit.workout.history import History, find_entry, sorted_entries

if TYPE_CHECKING:
    from quickfit.core.state import AppState


DEFAULT_WEEK_START = 6  # Sunday, using date.weekday() numbering


@dataclass(frozen=True)
class AggregateStats:
    current_streak: int
    total_workouts: int
    weekly_goal: int
    this_week_completed: int
    total_time_spent: int


def streak(history: History) -> int:
    count = 0
    previous: date | None = None
    for entry in sorted_entries(history, newest_first=True):
        if not entry.completed:
            break
        if previous is not None and (previous - entry.date).days > 1:
            break
        count += 1
        previous = entry.date
    return count


def week_start_date(today: date, week_start: int = DEFAULT_WEEK_START) -> date:
    offset = (today.weekday() - week_start) % 7
    return today - timedelta(days=offset)


def weekly_completed(
    history: History,
    today: date,
    week_start: int = DEFAULT_WEEK_START,
) -> int:
    first_day = week_start_date(today, week_start)
    return sum(
        1 for entry in history if entry.completed and first_day <= entry.date <= today
    )


def did_workout_today(history: History, today: date) -> bool:
    entry = find_entry(history, today)
    return entry is not None and entry.completed


def compute_stats(
    state: AppState,
    today: date,
    week_start: int = DEFAULT_WEEK_START,
) -> AggregateStats:
    return AggregateStats(
        current_streak=streak(state.history),
        total_workouts=state.total_workouts,
        weekly_goal=state.weekly_goal,
        this_week_completed=weekly_completed(state.history, today, week_start),
        total_time_spent=state.total_time_spent,
    )
