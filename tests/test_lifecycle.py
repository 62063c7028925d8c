import io, os, signal, sys, time

import pytest

from coffee_time.lifecycle import FAREWELL, LifecycleController
from coffee_time.scheduler import Scheduler
from coffee_time.status import CoffeeArt, StatusReporter, PLAIN_CLOCK


def build(loop):
    out = io.StringIO()
    scheduler = Scheduler(loop)
    status = StatusReporter(loop, lambda: scheduler.next_time, stream=out, clock=PLAIN_CLOCK)
    art = CoffeeArt(loop, stream=out)
    controller = LifecycleController(scheduler, status.log_line, status, art)
    scheduler.start(1, lambda: None)
    status.start()
    art.start()
    return controller, status, out


def test_shutdown_cancels_everything_and_exits_zero(loop):
    controller, status, out = build(loop)
    assert len(loop.queue) == 3
    with pytest.raises(SystemExit) as exc:
        controller.shutdown(signal.SIGINT, None)
    assert exc.value.code == 0
    assert loop.empty()
    assert out.getvalue().endswith("\n" + FAREWELL + "\n")


def test_shutdown_is_idempotent(loop):
    controller, status, out = build(loop)
    for _ in range(2):
        with pytest.raises(SystemExit):
            controller.shutdown()
    assert out.getvalue().count(FAREWELL) == 1


def test_farewell_starts_below_active_status_line(loop):
    controller, status, out = build(loop)
    status.write_status()
    with pytest.raises(SystemExit):
        controller.shutdown()
    assert "1 minute\n" in out.getvalue()
    assert not status.active


def test_install_registers_one_handler_for_both_signals(loop, monkeypatch):
    registered = {}
    monkeypatch.setattr(signal, "signal", lambda signum, handler: registered.setdefault(signum, handler))
    controller, _, _ = build(loop)
    controller.install()
    assert registered == {signal.SIGINT: controller.shutdown, signal.SIGTERM: controller.shutdown}


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signal delivery")
def test_sigterm_triggers_shutdown(loop):
    controller, _, out = build(loop)
    previous = {s: signal.getsignal(s) for s in (signal.SIGINT, signal.SIGTERM)}
    try:
        controller.install()
        with pytest.raises(SystemExit) as exc:
            os.kill(os.getpid(), signal.SIGTERM)
            time.sleep(5)
        assert exc.value.code == 0
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
    assert loop.empty()
    assert FAREWELL in out.getvalue()
