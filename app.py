"""Entry point for tellopad

Selects a controller profile, opens the joystick and runs the poll loop in
either diagnostic (--test) or operational mode.
"""
import argparse
import logging
import sys
import time

from core.config import DEFAULT_UPDATE_PERIOD_MS, RunConfig
from core.errors import ConfigurationError, TelloPadError
from core.poll import PollLoop
from core.profiles import ProfileRegistry, load_profiles
from dispatcher import DIAGNOSTIC_PERIOD, CommandDispatcher, ConsoleSink, VehicleSink, mapping_help
from vehicle.channel import POLICIES, StickChannel
from vehicle.dry_run import DryRunVehicle, StickConsumer

LOG = logging.getLogger("tellopad")


def build_parser():
    parser = argparse.ArgumentParser(description="tellopad: game controller -> quadcopter flight commands")
    parser.add_argument("--jstype", help="controller model, e.g. DualShock4, HotasX, EightBitDoSF30Pro, SteamController")
    parser.add_argument("--joystick-id", type=int, default=0, help="joystick id to open (default: 0)")
    parser.add_argument("--update-period-ms", type=int, default=DEFAULT_UPDATE_PERIOD_MS,
                        help=f"poll period in operational mode (default: {DEFAULT_UPDATE_PERIOD_MS})")
    parser.add_argument("--test", action="store_true",
                        help="diagnostic mode: print controller events instead of flying")
    parser.add_argument("--list-joysticks", action="store_true", help="list attached joysticks and exit")
    parser.add_argument("--mapping-help", action="store_true", help="print the control mapping and exit")
    parser.add_argument("--profile-file", help="YAML file with extra controller profiles")
    parser.add_argument("--os", help="override the detected OS when picking a profile")
    parser.add_argument("--queue-policy", default="drop_oldest", choices=POLICIES,
                        help="what to do when the stick consumer falls behind (default: drop_oldest)")
    parser.add_argument("--queue-size", type=int, default=4, help="stick queue size for bounded policies")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-format", default="%(levelname)s:%(name)s:%(message)s",
                        help="Logging format string (default: %(levelname)s:%(name)s:%(message)s)")
    parser.add_argument("--debug-modules", nargs="*", default=[],
                        help="Modules to set to DEBUG level (e.g., 'profiles', 'poll', 'dispatch', 'joystick', 'vehicle')")
    return parser


def setup_logging(args):
    logging.basicConfig(level=getattr(logging, args.log_level), format=args.log_format)
    for module in args.debug_modules:
        logging.getLogger(f"tellopad.{module}").setLevel(logging.DEBUG)


def print_joysticks():
    from devices.pygame_joystick import list_joysticks

    found = list_joysticks()
    if not found:
        print("No joysticks detected")
    for jsid, name, axes, buttons in found:
        print(f"Joystick ID: {jsid}: Name: {name}, Axes: {axes}, Buttons: {buttons}")


def default_device():
    from devices.pygame_joystick import PygameJoystick

    return PygameJoystick()


def run(config: RunConfig, device_factory=default_device, vehicle=None, max_cycles=None, sleep=None):
    """Select the profile, open the device and poll.

    The profile is resolved before the device is touched, so a bad model name
    never opens hardware.
    """
    config.validate()
    registry = ProfileRegistry()
    if config.profile_file:
        for profile in load_profiles(config.profile_file):
            registry.register(profile)
    profile = registry.select(config.jstype, config.os_name)

    device = device_factory()
    device.open(config.joystick_id)
    LOG.info("using %s with profile %s", device.name(), profile.name)

    consumer = None
    if config.test:
        sink = ConsoleSink()
        period = DIAGNOSTIC_PERIOD
    else:
        channel = StickChannel(config.queue_policy, config.queue_size)
        consumer = StickConsumer(channel)
        sink = VehicleSink(vehicle or DryRunVehicle(), channel)
        period = config.update_period

    loop = PollLoop(device, profile, CommandDispatcher(profile, sink), period, sleep=sleep or time.sleep)
    try:
        if consumer:
            consumer.start()
        loop.run(max_cycles=max_cycles)
    finally:
        if consumer:
            consumer.stop()
        device.close()
    return loop


def main():
    args = build_parser().parse_args()
    setup_logging(args)

    if args.mapping_help:
        print(mapping_help())
        return
    if args.list_joysticks:
        print_joysticks()
        return

    try:
        run(RunConfig.from_args(args))
    except KeyboardInterrupt:
        LOG.info("shutdown requested")
    except ConfigurationError as e:
        LOG.error("configuration error: %s", e)
        sys.exit(1)
    except TelloPadError as e:
        LOG.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
