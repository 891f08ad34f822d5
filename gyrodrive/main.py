# main.py
"""
Main entrypoint: set up the robot, then drive straight and turn.
"""
import argparse

from gyrodrive.errors import GyrodriveError
from gyrodrive.logging_utils import setup_logger
from gyrodrive.maneuver_controller import ManeuverController
from gyrodrive.robot import build_hardware, setup_robot
from gyrodrive.timing import RunSignal

logger = setup_logger('Main')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Gyro corrected drive and turn")
    parser.add_argument('--power', type=float, default=0.5, help="drive power, 0 to 1")
    parser.add_argument('--seconds', type=float, default=2.0, help="straight drive duration")
    parser.add_argument('--turn', type=float, default=90.0,
                        help="turn angle in degrees, negative = clockwise")
    parser.add_argument('--turn-power', type=float, default=0.3)
    parser.add_argument('--gain', type=float, default=None, help="heading hold gain")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    running = RunSignal(active=True)
    hardware = build_hardware()
    controller = None
    try:
        setup_robot(hardware, running)
        controller = ManeuverController(hardware, running, gain=args.gain)
        controller.drive_straight(args.power, args.seconds)
        controller.rotate_to_angle(args.turn, args.turn_power)
    except KeyboardInterrupt:
        running.cancel()
        if controller is None:
            logger.info("Setup interrupted, nothing was run")
            return 1
        logger.info("Shutting down")
    except GyrodriveError:
        logger.exception("Run aborted")
        return 1
    finally:
        for motor in hardware.motors:
            motor.set_power(0)
        hardware.close()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
