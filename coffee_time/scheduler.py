from __future__ import annotations
import sched, time
from typing import Callable, Optional

SECONDS_PER_MINUTE = 60

def make_loop(timefunc: Callable[[], float] = time.time,
              delayfunc: Callable[[float], object] = time.sleep) -> sched.scheduler:
    return sched.scheduler(timefunc, delayfunc)

def cancel_event(loop: sched.scheduler, event) -> None:
    if event is None:
        return
    try:
        loop.cancel(event)
    except ValueError:
        # already fired or already cancelled
        pass


class Scheduler:
    """
    Repeating timer driven by an absolute target time.

    Each firing advances ``next_time`` by exactly one interval, so time spent
    in the callback or a late wake-up never shifts the cadence. A firing that
    is already overdue runs immediately (delay clamped to zero).

    When a status reporter is attached, the status line is refreshed right
    after each firing, once ``next_time`` points at the following break.
    """

    def __init__(self, loop: sched.scheduler, status=None):
        self.loop = loop
        self.status = status
        self.interval_seconds: float = 0
        self.next_time: Optional[float] = None
        self._on_fire: Optional[Callable[[], None]] = None
        self._event = None
        self._running = False

    def start(self, interval_minutes: int, on_fire: Callable[[], None]) -> None:
        self.stop()
        self.interval_seconds = interval_minutes * SECONDS_PER_MINUTE
        self._on_fire = on_fire
        self._running = True
        self.next_time = self.loop.timefunc() + self.interval_seconds
        self._schedule_next()

    def stop(self) -> None:
        self._running = False
        cancel_event(self.loop, self._event)
        self._event = None

    @property
    def pending(self) -> bool:
        return self._event is not None

    def _schedule_next(self) -> None:
        delay = max(0, self.next_time - self.loop.timefunc())
        self._event = self.loop.enter(delay, 0, self._fire)

    def _fire(self) -> None:
        self._event = None
        self._on_fire()
        self.next_time += self.interval_seconds
        if self._running:
            if self.status is not None:
                self.status.write_status()
            self._schedule_next()
