from __future__ import annotations
import signal
from typing import Callable, Optional

from .scheduler import Scheduler
from .status import CoffeeArt, StatusReporter

FAREWELL = "Stopped. Stay fresh ☕"
SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class LifecycleController:
    def __init__(self, scheduler: Scheduler, log: Callable[[str], None],
                 status: Optional[StatusReporter] = None, art: Optional[CoffeeArt] = None):
        self.scheduler = scheduler
        self.log = log
        self.status = status
        self.art = art
        self.stopped = False

    def install(self) -> None:
        for signum in SHUTDOWN_SIGNALS:
            signal.signal(signum, self.shutdown)

    def shutdown(self, signum=None, frame=None) -> None:
        """
        Cancel every pending timer, say goodbye once, exit with status 0.
        Safe to trigger more than once.
        """
        if not self.stopped:
            self.stopped = True
            self.scheduler.stop()
            if self.status is not None:
                self.status.stop()
            if self.art is not None:
                self.art.stop()
            self.log("\n" + FAREWELL)
        raise SystemExit(0)
