from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable

import pytest

from quickfit.core.engine import SessionEngine
from quickfit.core.state import AppState
from quickfit.workout.model import Exercise, Section, WorkoutTemplate


class FakeTickHandle:
    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeClock:
    """Clock whose date is set by hand and whose ticks fire on ``advance``."""

    def __init__(self, today: date = date(2026, 3, 4)) -> None:
        self.current = today
        self.handles: list[FakeTickHandle] = []

    def today(self) -> date:
        return self.current

    def schedule_every(self, interval_sec: float, callback: Callable[[], None]) -> FakeTickHandle:
        handle = FakeTickHandle(callback)
        self.handles.append(handle)
        return handle

    def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            for handle in [h for h in self.handles if not h.cancelled]:
                if not handle.cancelled:
                    handle.callback()

    @property
    def active_handles(self) -> int:
        return sum(1 for handle in self.handles if not handle.cancelled)


SMALL_TEMPLATE = WorkoutTemplate(
    id="small",
    name="Small Circuit",
    duration_min=10,
    sections=(
        Section("Warm Up", (Exercise("Neck pulses", "30s"), Exercise("Hip rotations", "30s"))),
        Section(
            "Main",
            (Exercise("Burpees", "40s", "15s"), Exercise("Glute bridge", "40s", "15s")),
        ),
    ),
)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "state.json"


@pytest.fixture
def engine(state_path: Path, clock: FakeClock) -> SessionEngine:
    return SessionEngine(
        state_path=state_path,
        clock=clock,
        state=AppState(catalog=(SMALL_TEMPLATE,)),
    )
