from __future__ import annotations
import os, re, sys, sched, argparse
from dataclasses import dataclass
from typing import List, Optional

from .lifecycle import LifecycleController
from .notifications import Notifier
from .scheduler import Scheduler, make_loop
from .status import CoffeeArt, StatusReporter

APP_NAME = "coffee-time"
BASIC_NAME = "coffee-break"
SCRIPT_NAMES = (APP_NAME, BASIC_NAME)
INTEGER = re.compile(r"\s*[+-]?[0-9]+\s*")
INVALID_INTERVAL = "Invalid interval. Provide an integer value >= 1 minute."


@dataclass(frozen=True)
class Config:
    interval_minutes: int
    show_status: bool = False
    show_art: bool = True


def interval_minutes(value: str) -> int:
    # ASCII digits only: int() would also take "1_0" and other scripts' digits
    if not INTEGER.fullmatch(value):
        raise argparse.ArgumentTypeError(INVALID_INTERVAL)
    minutes = int(value)
    if minutes < 1:
        raise argparse.ArgumentTypeError(INVALID_INTERVAL)
    return minutes

def build_parser(prog: str = APP_NAME) -> argparse.ArgumentParser:
    """
    The coffee-break variant is the plain loop: no --status and no art.
    """
    parser = argparse.ArgumentParser(prog=prog, description="Periodic coffee break reminders",
                                     allow_abbrev=False)
    commands = parser.add_subparsers(dest="command", metavar="start", required=True)
    start = commands.add_parser("start", help="remind me every --interval minutes", allow_abbrev=False)
    start.add_argument("--interval", type=interval_minutes, required=True, metavar="<minutes>",
                       help="minutes between breaks (integer >= 1)")
    if prog != BASIC_NAME:
        start.add_argument("--status", action="store_true",
                           help="show a live 'next break in' line")
    return parser

def parse_args(argv: Optional[List[str]] = None, prog: str = APP_NAME) -> Config:
    """
    Exits with status 2 (argparse usage error) on anything it cannot accept.
    """
    args = build_parser(prog).parse_args(argv)
    return Config(interval_minutes=args.interval,
                  show_status=getattr(args, "status", False),
                  show_art=prog != BASIC_NAME)

def break_message(interval: int) -> str:
    return f"Time for a coffee break! ({interval} min interval)"


class CoffeeTime:
    """
    Wires the scheduler, notifier and optional status line onto one loop.
    """

    def __init__(self, config: Config, loop: Optional[sched.scheduler] = None,
                 notifier: Optional[Notifier] = None, stream=None):
        self.config = config
        self.loop = loop if loop is not None else make_loop()
        self.notifier = notifier if notifier is not None else Notifier()
        self.stream = stream
        self.status: Optional[StatusReporter] = None
        self.art: Optional[CoffeeArt] = None
        if config.show_status:
            self.status = StatusReporter(self.loop, lambda: self.scheduler.next_time, stream=stream)
        if config.show_art:
            self.art = CoffeeArt(self.loop, stream=stream)
        self.scheduler = Scheduler(self.loop, status=self.status)
        self.lifecycle = LifecycleController(self.scheduler, self.log_line, self.status, self.art)

    def log_line(self, message: str) -> None:
        if self.status is not None:
            self.status.log_line(message)
        else:
            print(message, file=self.stream if self.stream is not None else sys.stdout, flush=True)

    def on_break(self) -> None:
        message = break_message(self.config.interval_minutes)
        self.log_line(f"☕ {message}")
        self.notifier.notify(message)

    def start(self) -> None:
        interval = self.config.interval_minutes
        self.log_line(f"Coffee breaks scheduled every {interval} minutes. Press Ctrl+C to stop.")
        started_at = self.loop.timefunc()
        if self.art is not None:
            self.art.start()
        self.scheduler.start(interval, self.on_break)
        if self.status is not None:
            self.status.start(started_at)

    def run(self, install_signals: bool = True) -> None:
        if install_signals:
            self.lifecycle.install()
        self.start()
        self.loop.run()


def program_name() -> str:
    name = os.path.splitext(os.path.basename(sys.argv[0]))[0] if sys.argv else ""
    return name if name in SCRIPT_NAMES else APP_NAME

def main(argv: Optional[List[str]] = None) -> int:
    prog = program_name()
    config = parse_args(argv, prog=prog)
    try:
        CoffeeTime(config, notifier=Notifier(title=prog)).run()
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
