import pytest
from coffee_time.scheduler import make_loop


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += max(0, seconds)


class Halt(Exception):
    pass


def run_until(loop, until):
    """Run the loop on simulated time until ``until``, then stop it."""
    def halt():
        raise Halt
    loop.enterabs(until, 99, halt)
    try:
        loop.run()
    except Halt:
        pass


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def loop(clock):
    return make_loop(clock.time, clock.sleep)
