"""Controller device profiles and the registry that selects one.

A profile tells the rest of the pipeline which physical axis index and which
button bit each logical control lives on for one controller model. Profiles
are validated when they are built so a missing mapping surfaces at start-up,
not in the middle of a flight.
"""
import logging
import platform
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

import yaml

from core.errors import ConfigurationError, ProfileLookupFault
from core.state import FeatureFlag, LogicalAxis, LogicalButton

LOG = logging.getLogger("tellopad.profiles")

STICK_AXES = (LogicalAxis.LEFT_X, LogicalAxis.LEFT_Y, LogicalAxis.RIGHT_X, LogicalAxis.RIGHT_Y)

REQUIRED_BUTTONS = (
    LogicalButton.X,
    LogicalButton.CIRCLE,
    LogicalButton.TRIANGLE,
    LogicalButton.SQUARE,
    LogicalButton.L1,
    LogicalButton.L2,
    LogicalButton.R1,
    LogicalButton.R2,
)

DPAD_BUTTONS = (
    LogicalButton.DPAD_LEFT,
    LogicalButton.DPAD_RIGHT,
    LogicalButton.DPAD_UP,
    LogicalButton.DPAD_DOWN,
)

WINDOWS = "windows"


def normalize_os(os_name: Optional[str]) -> str:
    if not os_name:
        os_name = platform.system()
    name = os_name.strip().lower()
    if name in ("win32", "win64", "nt"):
        return WINDOWS
    return name


@dataclass(frozen=True, eq=False)
class DeviceProfile:
    name: str
    axes: Mapping[LogicalAxis, int]
    buttons: Mapping[LogicalButton, int]
    features: Mapping[FeatureFlag, bool]
    os: Optional[str] = None  # None means the layout is the same on every OS

    def __post_init__(self):
        # freeze the mappings so nothing can patch a live profile
        object.__setattr__(self, "axes", MappingProxyType(dict(self.axes)))
        object.__setattr__(self, "buttons", MappingProxyType(dict(self.buttons)))
        object.__setattr__(self, "features", MappingProxyType(dict(self.features)))
        self._validate()

    def _validate(self):
        for axis in STICK_AXES:
            if axis not in self.axes:
                raise ProfileLookupFault(f"profile {self.name}: stick axis {axis.value} is not mapped")
        for axis, index in self.axes.items():
            _check_index(self.name, axis.value, index)

        for flag in FeatureFlag:
            if flag not in self.features:
                raise ProfileLookupFault(f"profile {self.name}: feature {flag.value} has no value")

        required = list(REQUIRED_BUTTONS)
        if self.features[FeatureFlag.FLIPS_ENABLED]:
            required.extend(DPAD_BUTTONS)
        for button in required:
            if button not in self.buttons:
                raise ProfileLookupFault(f"profile {self.name}: button {button.value} is not mapped")

        if LogicalButton.UNKNOWN in self.buttons:
            raise ProfileLookupFault(f"profile {self.name}: the Unknown button cannot be mapped")

        seen = {}
        for button, bit in self.buttons.items():
            _check_index(self.name, button.value, bit)
            if bit in seen:
                raise ProfileLookupFault(
                    f"profile {self.name}: {button.value} and {seen[bit].value} share button bit {bit}"
                )
            seen[bit] = button

    @property
    def key(self):
        return (self.name.lower(), self.os)

    def axis_index(self, axis: LogicalAxis) -> int:
        return self.axes[axis]

    def button_bit(self, button: LogicalButton) -> int:
        return self.buttons[button]

    def has_button(self, button: LogicalButton) -> bool:
        return button in self.buttons

    def feature(self, flag: FeatureFlag) -> bool:
        return self.features[flag]


def _check_index(profile_name, control, index):
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise ProfileLookupFault(f"profile {profile_name}: {control} has invalid index {index!r}")


A, B, F = LogicalAxis, LogicalButton, FeatureFlag

DUALSHOCK4 = DeviceProfile(
    name="DualShock4",
    axes={A.LEFT_X: 0, A.LEFT_Y: 1, A.RIGHT_X: 3, A.RIGHT_Y: 4},
    buttons={
        B.X: 0, B.CIRCLE: 1, B.TRIANGLE: 2, B.SQUARE: 3, B.L1: 4,
        B.L2: 6, B.R1: 5, B.R2: 7,
    },
    features={F.FLIPS_ENABLED: False},
)

# the Windows HID stack orders the face buttons differently
DUALSHOCK4_WINDOWS = DeviceProfile(
    name="DualShock4",
    os=WINDOWS,
    axes={A.LEFT_X: 0, A.LEFT_Y: 1, A.RIGHT_X: 2, A.RIGHT_Y: 3},
    buttons={
        B.X: 1, B.CIRCLE: 2, B.TRIANGLE: 3, B.SQUARE: 0, B.L1: 4,
        B.L2: 6, B.R1: 5, B.R2: 7,
    },
    features={F.FLIPS_ENABLED: False},
)

# B, A, Y, X, L1, L2, R1, R2
EIGHTBITDO_SF30_PRO = DeviceProfile(
    name="EightBitDoSF30Pro",
    axes={A.LEFT_X: 0, A.LEFT_Y: 1, A.RIGHT_X: 2, A.RIGHT_Y: 3},
    buttons={
        B.X: 0, B.CIRCLE: 1, B.TRIANGLE: 3, B.SQUARE: 2, B.L1: 4,
        B.L2: 6, B.R1: 5, B.R2: 7,
        B.DPAD_LEFT: 13, B.DPAD_RIGHT: 14, B.DPAD_UP: 15, B.DPAD_DOWN: 16,
    },
    features={F.FLIPS_ENABLED: True},
)

# same layout on windows and linux
TFLIGHT_HOTAS_X = DeviceProfile(
    name="HotasX",
    axes={A.LEFT_X: 4, A.LEFT_Y: 2, A.RIGHT_X: 0, A.RIGHT_Y: 1},
    buttons={
        B.R1: 0, B.L1: 1, B.R3: 2, B.L3: 3, B.SQUARE: 4, B.X: 5,
        B.CIRCLE: 6, B.TRIANGLE: 7, B.R2: 8, B.L2: 9,
    },
    features={F.FLIPS_ENABLED: False},
)

STEAM_CONTROLLER = DeviceProfile(
    name="SteamController",
    axes={A.LEFT_X: 0, A.LEFT_Y: 1, A.RIGHT_X: 2, A.RIGHT_Y: 3},
    buttons={
        B.R1: 7, B.L1: 6, B.R3: 14, B.L3: 13, B.SQUARE: 4, B.X: 2,
        B.CIRCLE: 3, B.TRIANGLE: 5, B.R2: 9, B.L2: 8,
        B.DPAD_LEFT: 19, B.DPAD_RIGHT: 20, B.DPAD_UP: 17, B.DPAD_DOWN: 18,
        # unmapped: DTouch 0, R3Touch 1, Select 10, Start 11, Home 12, BackL 15, BackR 16
    },
    features={F.FLIPS_ENABLED: True},
)

BUILTIN_PROFILES = (
    DUALSHOCK4,
    DUALSHOCK4_WINDOWS,
    EIGHTBITDO_SF30_PRO,
    TFLIGHT_HOTAS_X,
    STEAM_CONTROLLER,
)


class ProfileRegistry:
    def __init__(self, profiles: Iterable[DeviceProfile] = BUILTIN_PROFILES):
        self._profiles: Dict[tuple, DeviceProfile] = {}
        for profile in profiles:
            self.register(profile)

    def register(self, profile: DeviceProfile):
        if profile.key in self._profiles:
            LOG.info("profile %s (%s) replaced", profile.name, profile.os or "any os")
        self._profiles[profile.key] = profile

    def models(self) -> List[str]:
        return sorted({p.name for p in self._profiles.values()})

    def select(self, model: Optional[str], os_name: Optional[str] = None) -> DeviceProfile:
        """Pick the profile for `model`, preferring an OS-specific layout."""
        if not model:
            raise ConfigurationError("no controller model supplied, please use the --jstype option")
        os_key = normalize_os(os_name)
        name = model.lower()
        profile = self._profiles.get((name, os_key)) or self._profiles.get((name, None))
        if profile is None:
            raise ConfigurationError(
                f"unknown controller model <{model}>, known models: {', '.join(self.models())}"
            )
        LOG.debug("selected profile %s for os %s", profile.name, os_key)
        return profile


def select_profile(model: Optional[str], os_name: Optional[str] = None) -> DeviceProfile:
    return ProfileRegistry().select(model, os_name)


def _lookup(enum_cls, key, where):
    for member in enum_cls:
        if key == member.value or str(key).upper() == member.name:
            return member
    raise ConfigurationError(f"{where}: unknown {enum_cls.__name__} {key!r}")


def profile_from_dict(data: dict, where: str = "profile") -> DeviceProfile:
    if not isinstance(data, dict) or not data.get("name"):
        raise ConfigurationError(f"{where}: every profile needs a name")
    where = f"{where} {data['name']}"
    try:
        axes = {_lookup(LogicalAxis, k, where): v for k, v in (data.get("axes") or {}).items()}
        buttons = {_lookup(LogicalButton, k, where): v for k, v in (data.get("buttons") or {}).items()}
        features = {flag: False for flag in FeatureFlag}
        for k, v in (data.get("features") or {}).items():
            if not isinstance(v, bool):
                raise ConfigurationError(f"{where}: feature {k} must be true or false, got {v!r}")
            features[_lookup(FeatureFlag, k, where)] = v
    except AttributeError:
        raise ConfigurationError(f"{where}: axes, buttons and features must be mappings")
    os_name = data.get("os")
    return DeviceProfile(
        name=str(data["name"]),
        os=normalize_os(os_name) if os_name else None,
        axes=axes,
        buttons=buttons,
        features=features,
    )


def load_profiles(path: str) -> List[DeviceProfile]:
    """Load extra controller profiles from a YAML file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"cannot read profile file {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"profile file {path} is not valid YAML: {e}")

    entries = (data or {}).get("profiles") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ConfigurationError(f"profile file {path} must contain a 'profiles' list")
    profiles = [profile_from_dict(entry, where=path) for entry in entries]
    LOG.info("loaded %d profile(s) from %s", len(profiles), path)
    return profiles
