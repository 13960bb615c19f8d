"""Dry-run vehicle and stick consumer

`DryRunVehicle` stands in for the real drone link: every action is logged and
a minimal flying flag is tracked so the Square button branch can be exercised
without hardware. `StickConsumer` drains a StickChannel on its own thread and
hands each output to a callback, the way the transmit side would.
"""
import logging
import threading
from queue import Empty

from core.state import FlightData, StickOutput
from core.vehicle import VehicleControl
from vehicle.channel import StickChannel

LOG = logging.getLogger("tellopad.vehicle")


class DryRunVehicle(VehicleControl):
    def __init__(self):
        self._flying = False
        self.calls = []

    def _record(self, action):
        self.calls.append(action)
        LOG.info("vehicle dry-run: %s", action)

    def set_slow_mode(self):
        self._record("set_slow_mode")

    def set_fast_mode(self):
        self._record("set_fast_mode")

    def bounce(self):
        self._record("bounce")

    def take_off(self):
        self._record("take_off")
        self._flying = True

    def throw_take_off(self):
        self._record("throw_take_off")
        self._flying = True

    def land(self):
        self._record("land")
        self._flying = False

    def palm_land(self):
        self._record("palm_land")
        self._flying = False

    def take_picture(self):
        self._record("take_picture")

    def left_flip(self):
        self._record("left_flip")

    def right_flip(self):
        self._record("right_flip")

    def forward_flip(self):
        self._record("forward_flip")

    def back_flip(self):
        self._record("back_flip")

    def get_flight_data(self) -> FlightData:
        return FlightData(flying=self._flying)


def log_stick_output(sm: StickOutput):
    LOG.debug("stick dry-run: lx=%d ly=%d rx=%d ry=%d", sm.lx, sm.ly, sm.rx, sm.ry)


class StickConsumer:
    def __init__(self, channel: StickChannel, callback=log_stick_output, poll_interval: float = 0.1):
        self.channel = channel
        self.callback = callback
        self.poll_interval = poll_interval
        self.consumed = 0
        self._t = None
        self._stop = threading.Event()

    def start(self):
        self._stop.clear()
        self._t = threading.Thread(target=self._loop, name="StickConsumer", daemon=True)
        self._t.start()

    def stop(self):
        self._stop.set()
        if self._t:
            self._t.join(timeout=1.0)

    def _loop(self):
        while not self._stop.is_set():
            try:
                sm = self.channel.get(timeout=self.poll_interval)
            except Empty:
                continue
            try:
                self.callback(sm)
                self.consumed += 1
            except Exception:
                LOG.exception("stick consumer callback failed")
