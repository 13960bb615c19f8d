"""State models and lightweight DTOs"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

# raw value a saturated axis reports at full positive deflection
AXIS_SENTINEL = 32768
AXIS_MAX = 32767


class LogicalAxis(Enum):
    LEFT_X = "LeftX"
    LEFT_Y = "LeftY"
    RIGHT_X = "RightX"
    RIGHT_Y = "RightY"
    # trigger axes, not populated by any built-in profile yet
    L1 = "L1"
    L2 = "L2"
    R1 = "R1"
    R2 = "R2"


class LogicalButton(Enum):
    X = "X"
    CIRCLE = "Circle"
    TRIANGLE = "Triangle"
    SQUARE = "Square"
    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    R1 = "R1"
    R2 = "R2"
    R3 = "R3"
    DPAD_LEFT = "DPadLeft"
    DPAD_RIGHT = "DPadRight"
    DPAD_UP = "DPadUp"
    DPAD_DOWN = "DPadDown"
    UNKNOWN = "Unknown"


class FeatureFlag(Enum):
    FLIPS_ENABLED = "FlipsEnabled"


@dataclass(frozen=True)
class RawControllerState:
    """One poll's snapshot: raw axis magnitudes plus a button bitmask."""
    axes: Tuple[int, ...] = ()
    buttons: int = 0

    def axis(self, index: int) -> int:
        # partial reads may carry fewer axes than the profile expects
        if 0 <= index < len(self.axes):
            return self.axes[index]
        return 0

    def is_set(self, bit: int) -> bool:
        return self.buttons & (1 << bit) != 0


@dataclass(frozen=True)
class StickOutput:
    lx: int = 0
    ly: int = 0
    rx: int = 0
    ry: int = 0

    def is_centered(self) -> bool:
        return self.lx == 0 and self.ly == 0 and self.rx == 0 and self.ry == 0


@dataclass
class FlightData:
    flying: bool = False
