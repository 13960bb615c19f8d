import sys

import pytest

import app
from core.config import RunConfig
from core.errors import ConfigurationError
from core.profiles import DUALSHOCK4
from core.state import LogicalButton
from dispatcher import DIAGNOSTIC_PERIOD
from fakes import FakeDevice, RecordingVehicle, state

TRIANGLE = DUALSHOCK4.button_bit(LogicalButton.TRIANGLE)


class DeviceFactory:
    def __init__(self, script=()):
        self.device = FakeDevice(script)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.device


def test_unknown_model_fails_before_any_device_is_opened():
    factory = DeviceFactory()
    with pytest.raises(ConfigurationError):
        app.run(RunConfig(jstype="Foo"), device_factory=factory, max_cycles=1)
    assert factory.calls == 0


def test_missing_model_fails_before_any_device_is_opened():
    factory = DeviceFactory()
    with pytest.raises(ConfigurationError):
        app.run(RunConfig(), device_factory=factory, max_cycles=1)
    assert factory.calls == 0


@pytest.mark.parametrize("period", [0, -10])
def test_update_period_must_be_positive(period):
    with pytest.raises(ConfigurationError):
        RunConfig(jstype="DualShock4", update_period_ms=period).validate()


def test_operational_run_flies_and_closes_device():
    factory = DeviceFactory([state(), state(TRIANGLE), state(TRIANGLE)])
    vehicle = RecordingVehicle()
    config = RunConfig(jstype="DualShock4", os_name="linux", joystick_id=2, update_period_ms=20)
    loop = app.run(config, device_factory=factory, vehicle=vehicle, max_cycles=3, sleep=lambda _: None)
    assert vehicle.calls == ["take_off"]
    assert loop.period == pytest.approx(0.02)
    assert factory.device.opened == 2
    assert factory.device.closed


def test_diagnostic_run_prints_and_uses_fixed_period(capsys):
    factory = DeviceFactory([state(), state(TRIANGLE)])
    vehicle = RecordingVehicle()
    config = RunConfig(jstype="DualShock4", os_name="linux", test=True)
    loop = app.run(config, device_factory=factory, vehicle=vehicle, max_cycles=2, sleep=lambda _: None)
    assert loop.period == DIAGNOSTIC_PERIOD
    assert vehicle.calls == []
    assert "△ pressed" in capsys.readouterr().out


def test_profile_file_adds_models(tmp_path):
    path = tmp_path / "pads.yaml"
    path.write_text(
        "profiles:\n"
        "  - name: MyPad\n"
        "    axes: {LeftX: 0, LeftY: 1, RightX: 2, RightY: 3}\n"
        "    buttons: {X: 0, Circle: 1, Triangle: 9, Square: 3, L1: 4, L2: 5, R1: 6, R2: 7}\n",
        encoding="utf-8",
    )
    factory = DeviceFactory([state(9)])
    vehicle = RecordingVehicle()
    config = RunConfig(jstype="MyPad", profile_file=str(path))
    loop = app.run(config, device_factory=factory, vehicle=vehicle, max_cycles=1, sleep=lambda _: None)
    assert loop.profile.name == "MyPad"
    assert vehicle.calls == ["take_off"]


def test_main_exits_on_unknown_model(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["tellopad", "--jstype", "Foo"])
    with pytest.raises(SystemExit) as exc:
        app.main()
    assert exc.value.code == 1


def test_main_prints_mapping_help(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["tellopad", "--mapping-help"])
    app.main()
    assert "Left Stick" in capsys.readouterr().out
