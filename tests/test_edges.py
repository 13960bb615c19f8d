from core.edges import ButtonEdges, detect_edges, is_down, pressed_this_cycle, released_this_cycle
from core.profiles import DUALSHOCK4, EIGHTBITDO_SF30_PRO
from core.state import LogicalButton, RawControllerState
from fakes import state

B = LogicalButton
TRIANGLE = DUALSHOCK4.button_bit(B.TRIANGLE)
X = DUALSHOCK4.button_bit(B.X)


def run_sequence(states, profile=DUALSHOCK4):
    previous = RawControllerState()
    pressed, released = [], []
    for current in states:
        edges = detect_edges(current, previous, profile)
        pressed.extend(edges.pressed)
        released.extend(edges.released)
        previous = current
    return pressed, released


def test_is_down_uses_profile_bit():
    assert is_down(state(TRIANGLE), B.TRIANGLE, DUALSHOCK4)
    assert not is_down(state(TRIANGLE), B.X, DUALSHOCK4)


def test_pressed_and_released_single_cycle():
    up, down = state(), state(X)
    assert pressed_this_cycle(down, up, B.X, DUALSHOCK4)
    assert not pressed_this_cycle(down, down, B.X, DUALSHOCK4)
    assert released_this_cycle(up, down, B.X, DUALSHOCK4)
    assert not released_this_cycle(up, up, B.X, DUALSHOCK4)


def test_holding_fires_once_whatever_the_hold_length():
    for held_for in (2, 3, 10, 50):
        states = [state()] + [state(TRIANGLE)] * held_for + [state(), state()]
        pressed, released = run_sequence(states)
        assert pressed == [B.TRIANGLE]
        assert released == [B.TRIANGLE]


def test_simultaneous_presses_are_all_reported():
    edges = detect_edges(state(TRIANGLE, X), state(), DUALSHOCK4)
    assert edges.pressed == {B.TRIANGLE, B.X}
    assert edges.released == frozenset()


def test_press_and_release_in_same_cycle_on_different_buttons():
    edges = detect_edges(state(X), state(TRIANGLE), DUALSHOCK4)
    assert edges.pressed == {B.X}
    assert edges.released == {B.TRIANGLE}


def test_glitch_cycle_produces_extra_edge_pair():
    pressed, released = run_sequence([state(X), state(), state(X)])
    assert pressed == [B.X, B.X]
    assert released == [B.X]


def test_unmapped_bits_are_ignored():
    # DualShock4 maps nothing on bits 8..15
    edges = detect_edges(state(8, 12, 15), state(), DUALSHOCK4)
    assert not edges
    assert edges == ButtonEdges()


def test_no_change_yields_empty_edges():
    assert not detect_edges(state(X), state(X), DUALSHOCK4)


def test_dpad_edges_on_profile_with_dpad():
    left = EIGHTBITDO_SF30_PRO.button_bit(B.DPAD_LEFT)
    edges = detect_edges(state(left), state(), EIGHTBITDO_SF30_PRO)
    assert edges.pressed == {B.DPAD_LEFT}
