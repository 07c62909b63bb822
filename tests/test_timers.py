import pytest

from astromath.clock import FakeClock
from astromath.timers import TimerQueue


def test_timers_fire_in_deadline_order():
    q = TimerQueue()
    fired = []
    q.schedule('b', 2.0, lambda: fired.append('b'), now=0)
    q.schedule('a', 1.0, lambda: fired.append('a'), now=0)
    assert q.run_due(0.5) == 0
    assert q.run_due(2.0) == 2
    assert fired == ['a', 'b']
    assert len(q) == 0


def test_rescheduling_a_name_replaces_it():
    q = TimerQueue()
    fired = []
    q.schedule('flash', 1.0, lambda: fired.append('old'), now=0)
    q.schedule('flash', 3.0, lambda: fired.append('new'), now=0)
    q.run_due(2.0)
    assert fired == []
    q.run_due(3.0)
    assert fired == ['new']


def test_cancel_and_cancel_all():
    q = TimerQueue()
    fired = []
    q.schedule('a', 1.0, lambda: fired.append('a'), now=0)
    q.schedule('b', 1.0, lambda: fired.append('b'), now=0)
    assert q.cancel('a')
    assert not q.cancel('a')
    assert q.pending('b')
    q.cancel_all()
    assert not q.pending('b')
    q.run_due(10)
    assert fired == []


def test_callback_can_chain_timers():
    q = TimerQueue()
    fired = []

    def tick():
        fired.append(len(fired))
        if len(fired) < 3:
            q.schedule('tick', 0.0, tick, now=1.0)

    q.schedule('tick', 1.0, tick, now=0)
    q.run_due(1.0)
    assert fired == [0, 1, 2]


def test_fake_clock():
    clock = FakeClock(5)
    clock.advance(0.25)
    assert clock.now() == 5.25
    with pytest.raises(ValueError):
        clock.advance(-1)
