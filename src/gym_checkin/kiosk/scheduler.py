from __future__ import annotations

import threading
from typing import Callable, Protocol


class ScheduledTask(Protocol):
    def cancel(self) -> None:
        raise NotImplementedError


class Scheduler(Protocol):
    def call_later(self, delay_seconds: float, fn: Callable[[], None]) -> ScheduledTask:
        raise NotImplementedError


class ThreadingScheduler(Scheduler):
    """Run callbacks on daemon threading.Timer threads."""

    def call_later(self, delay_seconds: float, fn: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(delay_seconds, fn)
        timer.daemon = True
        timer.start()
        return timer
