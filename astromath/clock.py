import time


class Clock:
    """Source of monotonically increasing time in seconds."""

    def now(self) -> float:
        raise NotImplementedError


class MonotonicClock(Clock):
    def now(self) -> float:
        return time.monotonic()


class FakeClock(Clock):
    """Clock that only moves when told to. Used by tests and headless runs."""

    def __init__(self, start=0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds):
        if seconds < 0:
            raise ValueError('cannot move the clock backwards')
        self._now += seconds
