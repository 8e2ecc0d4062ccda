import pytest


class FakeTimer:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeClock:
    """Scheduler stand-in for :class:`cabinet.registry.SessionRegistry`.

    Timers only fire when :meth:`advance` moves the clock past them.
    """

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def __call__(self, delay, callback):
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds):
        self.now += seconds
        for timer in list(self.timers):
            if not timer.cancelled and not timer.fired and timer.when <= self.now:
                timer.fired = True
                timer.callback()


@pytest.fixture()
def clock():
    return FakeClock()
