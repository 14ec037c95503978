"""Per-day workout history ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class HistoryEntry:
    date: date
    completed: bool
    progress: int = 0


History = tuple[HistoryEntry, ...]


def find_entry(history: History, day: date) -> HistoryEntry | None:
    return next((entry for entry in history if entry.date == day), None)


def upsert_entry(history: History, entry: HistoryEntry) -> History:
    """Return a new ledger with ``entry`` replacing any entry for the same date."""
    if find_entry(history, entry.date) is None:
        return history + (entry,)
    return tuple(entry if item.date == entry.date else item for item in history)


def sorted_entries(history: History, *, newest_first: bool = False) -> list[HistoryEntry]:
    return sorted(history, key=lambda entry: entry.date, reverse=newest_first)
