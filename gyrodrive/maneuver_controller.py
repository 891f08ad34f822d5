# maneuver_controller.py
"""
Gyro-corrected maneuvers: turn to an angle, drive straight for a time,
and strafe while holding heading.

Every maneuver blocks until it is done or the run-active signal goes
false, and always ends with the motors stopped.
"""
import math
import time
from enum import Enum

from gyrodrive import config
from gyrodrive.correction import correction
from gyrodrive.drive_train import DriveTrain, strafe_vector
from gyrodrive.errors import MissingHardwareError
from gyrodrive.heading_tracker import HeadingTracker
from gyrodrive.logging_utils import setup_logger
from gyrodrive.timing import ElapsedTimer
from gyrodrive.vision_locator import CENTERED, side_of_center


class ManeuverState(Enum):
    IDLE = 0
    TURNING = 1
    DRIVING_STRAIGHT = 2
    SETTLING = 3
    STRAFING = 4


class ManeuverController:
    def __init__(self, hardware, is_active, gain=None, settle_seconds=None,
                 sleep=time.sleep, timer_factory=ElapsedTimer):
        """
        Args:
            hardware: RobotHardware with the motor channels and IMU to use.
            is_active: Callable returning False once the run should stop.
            gain: Proportional gain for heading hold, nominally 0 to 1.
            settle_seconds: Wait after stopping before the heading is re-zeroed.
            sleep: Blocking wait used for settling.
            timer_factory: Creates the elapsed time source for timed drives.
        """
        self.hardware = hardware
        self.is_active = is_active
        self.gain = config.STRAIGHT_DRIVE_GAIN if gain is None else gain
        self.settle_seconds = config.SETTLE_SECONDS if settle_seconds is None else settle_seconds
        self._sleep = sleep
        self._timer_factory = timer_factory

        self.tracker = HeadingTracker(hardware.imu)
        self.drive_train = DriveTrain(hardware.front_left, hardware.front_right,
                                      hardware.back_left, hardware.back_right)
        self.state = ManeuverState.IDLE
        self.logger = setup_logger(self.__class__.__name__)

    def set_gain(self, new_gain: float):
        """Change the heading hold sensitivity for later corrections."""
        self.gain = new_gain
        self.logger.info(f"Gain set to {new_gain}")

    def get_correction(self) -> float:
        """Sample the heading and turn it into a power correction."""
        return correction(self.tracker.sample(), self.gain)

    def rotate_to_angle(self, target_degrees: float, power: float):
        """
        Turn in place until the heading reaches target_degrees.

        Negative targets turn clockwise, positive counterclockwise.
        """
        if not -180 <= target_degrees <= 180:
            raise ValueError(f"Target angle must be within [-180, 180], got {target_degrees}")

        self.tracker.reset()
        if target_degrees == 0:
            return

        self.logger.info(f"Turning to {target_degrees:.1f} degrees at power {power:.2f}")
        self.state = ManeuverState.TURNING
        try:
            if target_degrees < 0:
                self.drive_train.rotate_clockwise(power)
                while self.is_active() and self.tracker.sample() > target_degrees:
                    pass
            else:
                self.drive_train.rotate_counter_clockwise(power)
                while self.is_active() and self.tracker.sample() < target_degrees:
                    pass
        except BaseException:
            self.state = ManeuverState.IDLE
            raise
        finally:
            self.drive_train.stop()
        self.logger.info(f"Turn stopped at {self.tracker.heading:.1f} degrees")
        self._settle()

    def drive_straight(self, power: float, seconds: float):
        """Drive forward for a number of seconds, correcting heading drift."""
        self.tracker.reset()
        timer = self._timer_factory()
        timer.reset()

        self.logger.info(f"Driving straight for {seconds}s at power {power:.2f}")
        self.state = ManeuverState.DRIVING_STRAIGHT
        try:
            while self.is_active() and timer.seconds() < seconds:
                c = self.get_correction()
                self.drive_train.drive(power + c, power - c)
        except BaseException:
            self.state = ManeuverState.IDLE
            raise
        finally:
            self.drive_train.stop()
        self.logger.info(f"Drive stopped with heading {self.tracker.heading:.1f} degrees")
        self._settle()

    def corrected_strafe(self, direction: float, power: float, correction_value: float):
        """One strafe command toward direction (radians) with a heading correction."""
        left_power, right_power = strafe_vector(direction, power)
        self.drive_train.strafe_with_correction(left_power, right_power, correction_value)

    def strafe_until_centered(self, locator, power=None, frame_center_x=None,
                              tolerance=None, max_age=None) -> bool:
        """
        Strafe sideways until the located object sits in the centre band.

        Returns True once centred, False if the run was stopped or the
        object was lost.
        """
        power = config.STRAFE_POWER if power is None else power
        frame_center_x = config.FRAME_CENTER_X if frame_center_x is None else frame_center_x
        tolerance = config.CENTER_TOLERANCE_PX if tolerance is None else tolerance
        max_age = config.LOCATOR_MAX_AGE if max_age is None else max_age

        self.tracker.reset()
        self.state = ManeuverState.STRAFING
        last_frame = None
        try:
            while self.is_active():
                snapshot = locator.snapshot()
                if snapshot is None or time.monotonic() - snapshot.timestamp > max_age:
                    self.logger.warning("Object lost, stopping strafe")
                    return False
                if snapshot.frame_id != last_frame:
                    self.logger.debug(f"Center point: {snapshot.center_x},{snapshot.center_y}")
                    last_frame = snapshot.frame_id

                side = side_of_center(snapshot.center_x, frame_center_x, tolerance)
                if side == CENTERED:
                    self.logger.info("Object centred")
                    return True
                # object right of centre -> strafe right (clockwise of forward)
                self.corrected_strafe(-side * math.pi / 2, power, self.get_correction())
            return False
        finally:
            self.drive_train.stop()
            self.tracker.reset()
            self.state = ManeuverState.IDLE

    def run_intake(self, power: float):
        """Spin the intake wheels; positive pulls in."""
        self._require_intake()
        self.hardware.left_intake.set_power(power)
        self.hardware.right_intake.set_power(-power)

    def set_intake_release(self, position: float):
        """Move both release servos; the right one is mounted mirrored."""
        self._require_intake()
        self.hardware.left_release.set_position(position)
        self.hardware.right_release.set_position(1.0 - position)

    def _require_intake(self):
        if not self.hardware.has_intake:
            raise MissingHardwareError("This robot has no intake fitted")

    def _settle(self):
        self.state = ManeuverState.SETTLING
        try:
            if self.is_active():
                self._sleep(self.settle_seconds)
            self.tracker.reset()
        finally:
            self.state = ManeuverState.IDLE
