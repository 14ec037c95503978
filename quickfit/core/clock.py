"""Clock source: current date and a recurring tick on the asyncio loop."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Callable, Optional, Protocol


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    def today(self) -> date: ...

    def schedule_every(self, interval_sec: float, callback: Callable[[], None]) -> TickHandle: ...


class _TaskTickHandle:
    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    def cancel(self) -> None:
        if not self._task.done():
            self._task.cancel()


class SystemClock:
    """Local calendar date plus ticks scheduled as tasks on the running loop."""

    def __init__(self, today_fn: Optional[Callable[[], date]] = None) -> None:
        self._today_fn = today_fn or date.today

    def today(self) -> date:
        return self._today_fn()

    def schedule_every(self, interval_sec: float, callback: Callable[[], None]) -> TickHandle:
        loop = asyncio.get_running_loop()
        return _TaskTickHandle(loop.create_task(_tick_loop(interval_sec, callback)))


async def _tick_loop(interval_sec: float, callback: Callable[[], None]) -> None:
    while True:
        await asyncio.sleep(interval_sec)
        callback()
