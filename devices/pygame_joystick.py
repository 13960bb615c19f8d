"""Game controller backend using pygame.joystick

Axis floats are scaled back to raw device units (value * 32768) and buttons are
packed into one bitmask, bit N for pygame button N.
"""
import logging

import pygame

from core.errors import DeviceOpenError, DeviceReadError
from core.reader import ControllerDevice
from core.state import RawControllerState

LOG = logging.getLogger("tellopad.joystick")

MAX_LISTED_JOYSTICKS = 10


def _init():
    pygame.init()
    pygame.joystick.init()


def to_raw(value: float) -> int:
    return int(round(value * 32768))


def list_joysticks():
    """Return (id, name, axes, buttons) for each attached controller."""
    _init()
    found = []
    for jsid in range(min(pygame.joystick.get_count(), MAX_LISTED_JOYSTICKS)):
        js = pygame.joystick.Joystick(jsid)
        js.init()
        found.append((jsid, js.get_name() or "", js.get_numaxes(), js.get_numbuttons()))
        js.quit()
    return found


class PygameJoystick(ControllerDevice):
    def __init__(self):
        self._joystick = None

    def open(self, device_id: int):
        _init()
        count = pygame.joystick.get_count()
        if device_id >= count:
            raise DeviceOpenError(f"Could not open specified joystick ID:{device_id} ({count} attached)")
        try:
            js = pygame.joystick.Joystick(device_id)
            js.init()
        except pygame.error as e:
            raise DeviceOpenError(f"Could not open specified joystick ID:{device_id}: {e}")
        self._joystick = js
        LOG.info(
            "Found joystick: %s (index %d, axes=%d, buttons=%d)",
            js.get_name(), device_id, js.get_numaxes(), js.get_numbuttons(),
        )
        return self

    def read(self) -> RawControllerState:
        js = self._joystick
        if js is None:
            raise DeviceReadError("joystick is not open")
        try:
            pygame.event.pump()
            axes = tuple(to_raw(js.get_axis(i)) for i in range(js.get_numaxes()))
        except pygame.error as e:
            raise DeviceReadError(f"axis read failed: {e}")
        buttons = 0
        try:
            for i in range(js.get_numbuttons()):
                if js.get_button(i):
                    buttons |= 1 << i
        except pygame.error as e:
            raise DeviceReadError(f"button read failed: {e}", partial=RawControllerState(axes=axes, buttons=buttons))
        return RawControllerState(axes=axes, buttons=buttons)

    def axis_count(self) -> int:
        return self._joystick.get_numaxes() if self._joystick else 0

    def button_count(self) -> int:
        return self._joystick.get_numbuttons() if self._joystick else 0

    def name(self) -> str:
        if self._joystick is None:
            return "unopened joystick"
        return self._joystick.get_name() or "joystick"

    def close(self):
        if self._joystick is not None:
            try:
                self._joystick.quit()
            except pygame.error:
                LOG.debug("joystick already closed")
            self._joystick = None
