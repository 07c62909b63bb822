"""Named one-shot timers fired from the frame callback.

Timers never run on their own thread: ``run_due`` is called once per frame
and invokes every callback whose deadline has passed, earliest first.
Scheduling a name that is already pending replaces the old timer.
"""
import heapq
import itertools
import logging

logger = logging.getLogger(__name__)


class TimerQueue:
    def __init__(self):
        self._heap = []
        self._live = {}     # name -> sequence number of its current entry
        self._seq = itertools.count()

    def schedule(self, name, delay, callback, now):
        seq = next(self._seq)
        deadline = now + delay
        self._live[name] = seq
        heapq.heappush(self._heap, (deadline, seq, name, callback))
        logger.debug('[timer-set] name=%s delay=%.3f deadline=%.3f', name, delay, deadline)

    def cancel(self, name):
        if self._live.pop(name, None) is not None:
            logger.debug('[timer-cancel] name=%s', name)
            return True
        return False

    def cancel_all(self):
        if self._live:
            logger.debug('[timer-cancel-all] names=%s', ','.join(sorted(self._live)))
        self._live.clear()
        self._heap.clear()

    def pending(self, name):
        return name in self._live

    def __len__(self):
        return len(self._live)

    def run_due(self, now):
        """Fire due timers; returns how many callbacks ran.

        A callback may schedule new timers; any that are already due fire
        in the same pass.
        """
        fired = 0
        while self._heap and self._heap[0][0] <= now:
            deadline, seq, name, callback = heapq.heappop(self._heap)
            if self._live.get(name) != seq:
                continue    # cancelled or replaced
            del self._live[name]
            logger.debug('[timer-fire] name=%s deadline=%.3f now=%.3f', name, deadline, now)
            callback()
            fired += 1
        return fired
