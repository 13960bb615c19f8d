"""Stick output hand-off between the poll loop and the transmit side

The poll loop is the only producer. What happens when the consumer falls
behind depends on the policy:

  block        bounded; put() waits for room, stalling the poll loop
  drop_oldest  bounded; the oldest queued output is discarded, put() never waits
  unbounded    put() never waits and nothing is discarded
"""
import logging
from queue import Empty, Full, Queue

from core.errors import ConfigurationError
from core.state import StickOutput

LOG = logging.getLogger("tellopad.vehicle")

BLOCK = "block"
DROP_OLDEST = "drop_oldest"
UNBOUNDED = "unbounded"
POLICIES = (BLOCK, DROP_OLDEST, UNBOUNDED)


class StickChannel:
    def __init__(self, policy: str = DROP_OLDEST, maxsize: int = 4):
        if policy not in POLICIES:
            raise ConfigurationError(f"unknown queue policy {policy!r}, expected one of {', '.join(POLICIES)}")
        if policy != UNBOUNDED and maxsize < 1:
            raise ConfigurationError(f"queue policy {policy} needs a size of at least 1")
        self.policy = policy
        self.maxsize = 0 if policy == UNBOUNDED else maxsize
        self._q = Queue(maxsize=self.maxsize)
        self.dropped = 0

    def put(self, sm: StickOutput):
        if self.policy != DROP_OLDEST:
            self._q.put(sm)
            return
        # keep only the most recent outputs
        while True:
            try:
                self._q.put_nowait(sm)
                return
            except Full:
                try:
                    self._q.get_nowait()
                    self.dropped += 1
                    LOG.debug("stick channel full, dropped oldest output (%d so far)", self.dropped)
                except Empty:
                    pass

    def get(self, timeout=None) -> StickOutput:
        """Next output in order; raises queue.Empty after `timeout`."""
        return self._q.get(timeout=timeout)

    def qsize(self) -> int:
        return self._q.qsize()
