import pytest

from core.profiles import DUALSHOCK4, TFLIGHT_HOTAS_X
from core.state import RawControllerState
from core.sticks import DEAD_ZONE, normalize_sticks, to_int16


def ds4(lx=0, ly=0, rx=0, ry=0, r2=False):
    # DualShock4 (non-Windows) reads LX 0, LY 1, RX 3, RY 4 and R2 on bit 7
    return RawControllerState(axes=(lx, ly, 0, rx, ry), buttons=(1 << 7) if r2 else 0)


def test_to_int16_wraps_like_a_narrowing_cast():
    assert to_int16(0) == 0
    assert to_int16(32767) == 32767
    assert to_int16(32768) == -32768
    assert to_int16(40000) == -25536
    assert to_int16(65535) == -1
    assert to_int16(-32768) == -32768


def test_sentinel_clamps_to_signed_max():
    sm = normalize_sticks(ds4(lx=32768, ly=32768, rx=32768, ry=32768), DUALSHOCK4)
    assert sm.lx == 32767
    assert sm.ly == -32767
    assert sm.rx == 32767
    assert sm.ry == -32767


@pytest.mark.parametrize("raw", [-1999, -1000, -1, 0, 1, 1000, 1999])
def test_values_inside_dead_zone_are_zero(raw):
    sm = normalize_sticks(ds4(lx=raw, ly=raw, rx=raw, ry=raw), DUALSHOCK4)
    assert (sm.lx, sm.ly, sm.rx, sm.ry) == (0, 0, 0, 0)


def test_dead_zone_edge_passes_through():
    sm = normalize_sticks(ds4(lx=DEAD_ZONE, ly=DEAD_ZONE, rx=-DEAD_ZONE, ry=-DEAD_ZONE), DUALSHOCK4)
    assert sm.lx == 2000
    assert sm.ly == -2000
    assert sm.rx == -2000
    assert sm.ry == 2000


def test_dead_zone_is_per_axis():
    sm = normalize_sticks(ds4(lx=1500, ly=-12000, rx=30000, ry=10), DUALSHOCK4)
    assert sm.lx == 0
    assert sm.ly == 12000
    assert sm.rx == 30000
    assert sm.ry == 0


def test_y_inversion_of_wrapped_value_is_deterministic():
    raw = ds4(ly=40000)
    first = normalize_sticks(raw, DUALSHOCK4)
    second = normalize_sticks(raw, DUALSHOCK4)
    assert first.ly == 25536
    assert first == second


def test_inverting_most_negative_value_saturates():
    sm = normalize_sticks(ds4(ly=-32768, lx=-32768), DUALSHOCK4)
    assert sm.ly == 32767
    assert sm.lx == -32767


def test_precision_mode_divides_by_three_truncating():
    sm = normalize_sticks(ds4(lx=2001, ly=9000, rx=-2002, ry=-32768, r2=True), DUALSHOCK4)
    assert sm.lx == 667
    assert sm.ly == -3000
    assert sm.rx == -667  # truncates toward zero, not floor
    assert sm.ry == 10922


def test_precision_mode_applies_after_dead_zone():
    sm = normalize_sticks(ds4(lx=1999, ly=-1999, r2=True), DUALSHOCK4)
    assert sm.lx == 0
    assert sm.ly == 0


def test_precision_mode_leaves_no_residual_state():
    raw = dict(lx=30000, ly=-30000, rx=6000, ry=-6000)
    normal = normalize_sticks(ds4(**raw), DUALSHOCK4)
    held = normalize_sticks(ds4(r2=True, **raw), DUALSHOCK4)
    again = normalize_sticks(ds4(**raw), DUALSHOCK4)
    assert held.lx == normal.lx // 3
    assert again == normal


def test_profile_axis_remapping():
    # HotasX: LX 4, LY 2, RX 0, RY 1
    raw = RawControllerState(axes=(5000, 6000, 7000, 0, 8000))
    sm = normalize_sticks(raw, TFLIGHT_HOTAS_X)
    assert sm.lx == 8000
    assert sm.ly == -7000
    assert sm.rx == 5000
    assert sm.ry == -6000


def test_partial_state_reads_missing_axes_as_centered():
    sm = normalize_sticks(RawControllerState(axes=(25000,)), DUALSHOCK4)
    assert sm.lx == 25000
    assert (sm.ly, sm.rx, sm.ry) == (0, 0, 0)
