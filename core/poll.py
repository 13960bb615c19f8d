"""Poll loop: read -> normalize -> detect edges -> dispatch -> sleep

One loop serves both diagnostic and operational mode; only the dispatcher's
sink and the period differ. The previous poll's raw state lives on the loop
instance and nowhere else.
"""
import logging
import time

from core.edges import detect_edges
from core.errors import DeviceReadError
from core.profiles import DeviceProfile
from core.reader import ControllerDevice
from core.state import RawControllerState, StickOutput
from core.sticks import normalize_sticks

LOG = logging.getLogger("tellopad.poll")


class PollLoop:
    def __init__(self, device: ControllerDevice, profile: DeviceProfile, dispatcher, period: float, sleep=time.sleep):
        self.device = device
        self.profile = profile
        self.dispatcher = dispatcher
        self.period = period
        self._sleep = sleep
        self.previous = RawControllerState()
        self.cycles = 0
        self.read_errors = 0

    def _read(self) -> RawControllerState:
        try:
            return self.device.read()
        except DeviceReadError as e:
            self.read_errors += 1
            LOG.warning("Error reading joystick: %s", e)
            if e.partial is not None:
                # a failed read never creates or releases a press
                return RawControllerState(axes=e.partial.axes, buttons=self.previous.buttons)
            return self.previous

    def step(self) -> StickOutput:
        state = self._read()
        sm = normalize_sticks(state, self.profile)
        edges = detect_edges(state, self.previous, self.profile)
        self.dispatcher.dispatch(sm, edges)
        self.previous = state
        self.cycles += 1
        return sm

    def run(self, max_cycles=None):
        """Poll until the process exits, or for `max_cycles` polls."""
        LOG.info("polling %s every %.0f ms", self.profile.name, self.period * 1000)
        while max_cycles is None or self.cycles < max_cycles:
            self.step()
            self._sleep(self.period)
