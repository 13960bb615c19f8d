"""Button edge detection between two consecutive polls"""
from dataclasses import dataclass
from typing import FrozenSet

from core.profiles import DeviceProfile
from core.state import LogicalButton, RawControllerState


def is_down(state: RawControllerState, button: LogicalButton, profile: DeviceProfile) -> bool:
    return state.is_set(profile.button_bit(button))


def pressed_this_cycle(current, previous, button, profile) -> bool:
    return is_down(current, button, profile) and not is_down(previous, button, profile)


def released_this_cycle(current, previous, button, profile) -> bool:
    return is_down(previous, button, profile) and not is_down(current, button, profile)


@dataclass(frozen=True)
class ButtonEdges:
    pressed: FrozenSet[LogicalButton] = frozenset()
    released: FrozenSet[LogicalButton] = frozenset()

    def __bool__(self):
        return bool(self.pressed or self.released)


def detect_edges(current: RawControllerState, previous: RawControllerState, profile: DeviceProfile) -> ButtonEdges:
    """Rising and falling edges for every button the profile maps.

    A button held across many polls yields one pressed edge and, once let go,
    one released edge. There is no debounce: a one-poll glitch produces an
    extra pressed/released pair.
    """
    changed = current.buttons ^ previous.buttons
    if not changed:
        return ButtonEdges()
    pressed, released = set(), set()
    for button, bit in profile.buttons.items():
        if not changed & (1 << bit):
            continue
        if current.is_set(bit):
            pressed.add(button)
        else:
            released.add(button)
    return ButtonEdges(pressed=frozenset(pressed), released=frozenset(released))
