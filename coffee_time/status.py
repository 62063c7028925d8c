from __future__ import annotations
import sys, sched
from typing import Callable, List, Optional, TextIO

from .scheduler import cancel_event
from .utils import format_remaining, supports_emoji

STATUS_PERIOD_SECONDS = 60
STATUS_PRIORITY = 1
ART_PRIORITY = 2

EMOJI_CLOCK = "⏰"
PLAIN_CLOCK = "[next]"

COFFEE_FRAMES = [
    [
        "   (  (   ",
        "    )  )  ",
        "   ((((   ",
        "  ........",
        "  |      |]",
        "  \\      /",
        "   '----'",
    ],
    [
        "    (     ",
        "   ( )    ",
        "    ) ))  ",
        "  ........",
        "  |      |]",
        "  \\      /",
        "   '----'",
    ],
    [
        "    )  )  ",
        "   (  (   ",
        "    ((    ",
        "  ........",
        "  |      |]",
        "  \\      /",
        "   '----'",
    ],
    [
        "   (      ",
        "    ) )   ",
        "   )  )   ",
        "  ........",
        "  |      |]",
        "  \\      /",
        "   '----'",
    ],
]

def clock_glyph() -> str:
    return EMOJI_CLOCK if supports_emoji() else PLAIN_CLOCK


class StatusReporter:
    """
    Keeps a single "Next break in ..." line up to date in the terminal.

    The line is rewritten in place with a carriage return and padded to the
    previous message length. Anything else printed while the status line is
    showing must go through ``log_line`` so it starts on a fresh line.
    """

    def __init__(self, loop: sched.scheduler, next_time: Callable[[], Optional[float]],
                 stream: Optional[TextIO] = None, clock: Optional[str] = None):
        self.loop = loop
        self.next_time = next_time
        self.clock = clock if clock is not None else clock_glyph()
        self._stream = stream
        self._length = 0
        self._active = False
        self._next_tick: Optional[float] = None
        self._event = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def active(self) -> bool:
        return self._active

    def log_line(self, message: str) -> None:
        if self._active:
            self.stream.write("\n")
            self._active = False
            self._length = 0
        print(message, file=self.stream, flush=True)

    def write_status(self) -> None:
        target = self.next_time()
        remaining = 0 if target is None else target - self.loop.timefunc()
        message = f"{self.clock} Next break in {format_remaining(remaining)}"
        self.stream.write("\r" + message.ljust(self._length))
        self.stream.flush()
        self._length = len(message)
        self._active = True

    def start(self, started_at: Optional[float] = None) -> None:
        self.stop()
        started_at = self.loop.timefunc() if started_at is None else started_at
        self._next_tick = started_at + STATUS_PERIOD_SECONDS
        self._schedule()

    def stop(self) -> None:
        cancel_event(self.loop, self._event)
        self._event = None

    def _schedule(self) -> None:
        self._event = self.loop.enterabs(self._next_tick, STATUS_PRIORITY, self._tick)

    def _tick(self) -> None:
        self._event = None
        self.write_status()
        self._next_tick += STATUS_PERIOD_SECONDS
        self._schedule()


class CoffeeArt:
    """Steaming cup animation, redrawn in place for a few seconds at startup."""

    def __init__(self, loop: sched.scheduler, stream: Optional[TextIO] = None,
                 frame_seconds: float = 0.2, duration: float = 4.0,
                 frames: Optional[List[List[str]]] = None):
        self.loop = loop
        self._stream = stream
        self.frame_seconds = frame_seconds
        self.duration = duration
        frames = frames or COFFEE_FRAMES
        width = max(len(line) for frame in frames for line in frame)
        self.frames = [[line.ljust(width) for line in frame] for frame in frames]
        self.height = len(self.frames[0])
        self._index = 0
        self._next_frame: Optional[float] = None
        self._deadline: Optional[float] = None
        self._event = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def running(self) -> bool:
        return self._event is not None

    def render(self, first: bool = False) -> None:
        if not first:
            self.stream.write(f"\x1b[{self.height}A")
        self.stream.write("\n".join(self.frames[self._index]) + "\n")
        self.stream.flush()
        self._index = (self._index + 1) % len(self.frames)

    def start(self) -> None:
        self.stop()
        started_at = self.loop.timefunc()
        self._deadline = started_at + self.duration
        self._next_frame = started_at + self.frame_seconds
        self._index = 0
        self.render(first=True)
        self._schedule()

    def stop(self) -> None:
        cancel_event(self.loop, self._event)
        self._event = None

    def _schedule(self) -> None:
        if self._next_frame >= self._deadline:
            self._event = None
            return
        self._event = self.loop.enterabs(self._next_frame, ART_PRIORITY, self._advance)

    def _advance(self) -> None:
        self.render()
        self._next_frame += self.frame_seconds
        self._schedule()
