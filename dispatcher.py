"""Command dispatch: button edges and stick output -> sink

The same dispatcher feeds both run modes. `ConsoleSink` prints what would
happen (diagnostic mode) and `VehicleSink` enqueues stick output and calls
the vehicle (operational mode), so what is checked on the console is exactly
what flies.
"""
import abc
import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from core.edges import ButtonEdges
from core.profiles import DeviceProfile
from core.state import FeatureFlag, LogicalButton, StickOutput
from core.vehicle import VehicleControl
from vehicle.channel import StickChannel

LOG = logging.getLogger("tellopad.dispatch")

# diagnostic mode polls slower to keep the console readable
DIAGNOSTIC_PERIOD = 0.15


class Action(Enum):
    SLOW_MODE = "slow flight mode"
    BOUNCE = "bounce on/off"
    FAST_MODE = "fast flight mode"
    THROW_TAKE_OFF_OR_PALM_LAND = "throw takeoff / palm land"
    TAKE_OFF = "takeoff"
    TAKE_PICTURE = "take photo"
    LAND = "land"
    LEFT_FLIP = "flip left"
    RIGHT_FLIP = "flip right"
    FORWARD_FLIP = "flip forward"
    BACK_FLIP = "flip backward"


B = LogicalButton

# dispatch order within one poll; None marks a reserved button
ACTION_TABLE = (
    (B.L1, Action.SLOW_MODE),
    (B.L2, Action.BOUNCE),
    (B.R1, Action.FAST_MODE),
    (B.L3, None),
    (B.R3, None),
    (B.SQUARE, Action.THROW_TAKE_OFF_OR_PALM_LAND),
    (B.TRIANGLE, Action.TAKE_OFF),
    (B.CIRCLE, Action.TAKE_PICTURE),
    (B.X, Action.LAND),
)

FLIP_TABLE = (
    (B.DPAD_LEFT, Action.LEFT_FLIP),
    (B.DPAD_RIGHT, Action.RIGHT_FLIP),
    (B.DPAD_UP, Action.FORWARD_FLIP),
    (B.DPAD_DOWN, Action.BACK_FLIP),
)

# R2 is level-sensitive, see core.sticks.precision_held
PRECISION_BUTTON = B.R2

BUTTON_LABELS = {
    B.SQUARE: "⌑",
    B.TRIANGLE: "△",
    B.CIRCLE: "○",
    B.X: "╳",
    B.DPAD_LEFT: "D-Pad Left",
    B.DPAD_RIGHT: "D-Pad Right",
    B.DPAD_UP: "D-Pad Up",
    B.DPAD_DOWN: "D-Pad Down",
}


def button_label(button: LogicalButton) -> str:
    return BUTTON_LABELS.get(button, button.value)


@dataclass(frozen=True)
class Command:
    button: LogicalButton
    action: Optional[Action]


def commands_for(edges: ButtonEdges, profile: DeviceProfile) -> List[Command]:
    """Commands for this poll's pressed edges, in dispatch order."""
    table = list(ACTION_TABLE)
    if profile.feature(FeatureFlag.FLIPS_ENABLED):
        table.extend(FLIP_TABLE)
    return [Command(button, action) for button, action in table if button in edges.pressed]


class Sink(abc.ABC):
    @abc.abstractmethod
    def sticks(self, sm: StickOutput):
        raise NotImplementedError

    @abc.abstractmethod
    def execute(self, cmd: Command):
        raise NotImplementedError

    def precision(self, engaged: bool):
        pass


class ConsoleSink(Sink):
    def __init__(self, out=None):
        self.out = out

    def _print(self, text):
        print(text, file=self.out or sys.stdout)

    def precision(self, engaged: bool):
        self._print(f"{button_label(PRECISION_BUTTON)} {'pressed' if engaged else 'released'}")

    def sticks(self, sm: StickOutput):
        if not sm.is_centered():
            self._print(f"JS: Lx: {sm.lx}, Ly: {sm.ly}, Rx: {sm.rx}, Ry: {sm.ry}")

    def execute(self, cmd: Command):
        self._print(f"{button_label(cmd.button)} pressed")


class VehicleSink(Sink):
    _METHODS = {
        Action.SLOW_MODE: "set_slow_mode",
        Action.BOUNCE: "bounce",
        Action.FAST_MODE: "set_fast_mode",
        Action.TAKE_OFF: "take_off",
        Action.TAKE_PICTURE: "take_picture",
        Action.LAND: "land",
        Action.LEFT_FLIP: "left_flip",
        Action.RIGHT_FLIP: "right_flip",
        Action.FORWARD_FLIP: "forward_flip",
        Action.BACK_FLIP: "back_flip",
    }

    def __init__(self, vehicle: VehicleControl, channel: StickChannel):
        self.vehicle = vehicle
        self.channel = channel

    def sticks(self, sm: StickOutput):
        self.channel.put(sm)

    def execute(self, cmd: Command):
        if cmd.action is None:
            return
        try:
            if cmd.action is Action.THROW_TAKE_OFF_OR_PALM_LAND:
                if self.vehicle.get_flight_data().flying:
                    self.vehicle.palm_land()
                else:
                    self.vehicle.throw_take_off()
            else:
                getattr(self.vehicle, self._METHODS[cmd.action])()
        except Exception:
            LOG.exception("vehicle action %s for %s failed", cmd.action.name, cmd.button.value)


class CommandDispatcher:
    def __init__(self, profile: DeviceProfile, sink: Sink):
        self.profile = profile
        self.sink = sink

    def dispatch(self, sm: StickOutput, edges: ButtonEdges):
        if PRECISION_BUTTON in edges.pressed:
            self.sink.precision(True)
        elif PRECISION_BUTTON in edges.released:
            self.sink.precision(False)

        self.sink.sticks(sm)

        for cmd in commands_for(edges, self.profile):
            LOG.debug("%s pressed -> %s", cmd.button.value, cmd.action.name if cmd.action else "reserved")
            self.sink.execute(cmd)


def mapping_help() -> str:
    lines = [
        "tellopad joystick control mapping",
        "",
        "Left Stick   Forward/Backward/Left/Right",
        "Right Stick  Up/Down/Turn",
        "",
    ]
    for button, action in ACTION_TABLE + FLIP_TABLE:
        if action is not None:
            lines.append(f"{button_label(button):<13} {action.value}")
    lines.append(
        f"{button_label(PRECISION_BUTTON):<13} precision (hold for lower stick sensitivity, "
        "does not change flight speed mode)"
    )
    lines.append("")
    lines.append("Flips are only available on controllers with a usable D-pad.")
    return "\n".join(lines)
