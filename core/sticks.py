"""Stick normalization: raw axis magnitudes -> signed, dead-zoned StickOutput"""
from core.profiles import DeviceProfile
from core.state import (
    AXIS_MAX,
    AXIS_SENTINEL,
    LogicalAxis,
    LogicalButton,
    RawControllerState,
    StickOutput,
)

DEAD_ZONE = 2000  # on the +/-32767 scale, about 6%
PRECISION_DIVISOR = 3


def to_int16(value: int) -> int:
    """Narrow to a signed 16-bit value with two's complement wrap."""
    return ((int(value) + 0x8000) & 0xFFFF) - 0x8000


def _axis_value(state: RawControllerState, profile: DeviceProfile, axis: LogicalAxis, invert: bool) -> int:
    raw = state.axis(profile.axis_index(axis))
    if raw == AXIS_SENTINEL:
        value = AXIS_MAX
    else:
        value = to_int16(raw)
    if invert:
        value = -value
    # -(-32768) does not fit in 16 bits
    value = max(-AXIS_MAX, min(AXIS_MAX, value))
    if abs(value) < DEAD_ZONE:
        return 0
    return value


def _truncate_div(value: int, divisor: int) -> int:
    # Python's // floors; flight scaling truncates toward zero
    q = abs(value) // divisor
    return q if value >= 0 else -q


def precision_held(state: RawControllerState, profile: DeviceProfile) -> bool:
    return state.is_set(profile.button_bit(LogicalButton.R2))


def normalize_sticks(state: RawControllerState, profile: DeviceProfile) -> StickOutput:
    lx = _axis_value(state, profile, LogicalAxis.LEFT_X, invert=False)
    # controller "up" reads negative, climb must be positive
    ly = _axis_value(state, profile, LogicalAxis.LEFT_Y, invert=True)
    rx = _axis_value(state, profile, LogicalAxis.RIGHT_X, invert=False)
    ry = _axis_value(state, profile, LogicalAxis.RIGHT_Y, invert=True)

    if precision_held(state, profile):
        lx, ly, rx, ry = (_truncate_div(v, PRECISION_DIVISOR) for v in (lx, ly, rx, ry))

    return StickOutput(lx=lx, ly=ly, rx=rx, ry=ry)
