"""Run configuration collected from the command line"""
from dataclasses import dataclass
from typing import Optional

from core.errors import ConfigurationError

DEFAULT_UPDATE_PERIOD_MS = 50


@dataclass
class RunConfig:
    jstype: Optional[str] = None
    joystick_id: int = 0
    update_period_ms: int = DEFAULT_UPDATE_PERIOD_MS
    test: bool = False
    os_name: Optional[str] = None
    profile_file: Optional[str] = None
    queue_policy: str = "drop_oldest"
    queue_size: int = 4

    @classmethod
    def from_args(cls, args):
        return cls(
            jstype=args.jstype,
            joystick_id=args.joystick_id,
            update_period_ms=args.update_period_ms,
            test=args.test,
            os_name=args.os,
            profile_file=args.profile_file,
            queue_policy=args.queue_policy,
            queue_size=args.queue_size,
        )

    @property
    def update_period(self) -> float:
        return self.update_period_ms / 1000.0

    def validate(self):
        if not self.jstype:
            raise ConfigurationError("no joystick type supplied, please use the --jstype option")
        if self.update_period_ms <= 0:
            raise ConfigurationError(f"update period must be positive, got {self.update_period_ms} ms")
        if self.joystick_id < 0:
            raise ConfigurationError(f"joystick id must not be negative, got {self.joystick_id}")
        return self
