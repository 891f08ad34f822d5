# robot.py
"""
Hardware context for the robot and the one-time setup before a run.

The controller never creates hardware itself; whoever starts the run
builds a RobotHardware and hands it over.
"""
from gyrodrive import config
from gyrodrive.imu_module import ImuModule, wait_for_calibration
from gyrodrive.logging_utils import setup_logger
from gyrodrive.motor_control import BRAKE, FORWARD, REVERSE, MotorBus, MotorChannel, ServoChannel

logger = setup_logger(__name__)


class RobotHardware:
    def __init__(self, front_left, front_right, back_left, back_right, imu,
                 left_intake=None, right_intake=None, left_release=None, right_release=None,
                 bus=None):
        self.front_left = front_left
        self.front_right = front_right
        self.back_left = back_left
        self.back_right = back_right
        self.imu = imu
        self.left_intake = left_intake
        self.right_intake = right_intake
        self.left_release = left_release
        self.right_release = right_release
        self.bus = bus

    @property
    def motors(self):
        return [self.front_left, self.front_right, self.back_left, self.back_right]

    @property
    def has_intake(self) -> bool:
        return None not in (self.left_intake, self.right_intake,
                            self.left_release, self.right_release)

    def close(self):
        if self.bus is not None:
            self.bus.close()


def build_hardware(with_intake=False, bus=None, imu=None) -> RobotHardware:
    """Create the channels and IMU described in config."""
    bus = bus if bus is not None else MotorBus()
    imu = imu if imu is not None else ImuModule(calibration_file=config.IMU_CALIBRATION_FILE)
    intake = {}
    if with_intake:
        intake = {
            'left_intake': ServoChannel(bus, config.INTAKE_LEFT, continuous=True),
            'right_intake': ServoChannel(bus, config.INTAKE_RIGHT, continuous=True),
            'left_release': ServoChannel(bus, config.INTAKE_LEFT_RELEASE, continuous=False),
            'right_release': ServoChannel(bus, config.INTAKE_RIGHT_RELEASE, continuous=False),
        }
    return RobotHardware(
        MotorChannel(bus, config.MOTOR_FRONT_LEFT),
        MotorChannel(bus, config.MOTOR_FRONT_RIGHT),
        MotorChannel(bus, config.MOTOR_BACK_LEFT),
        MotorChannel(bus, config.MOTOR_BACK_RIGHT),
        imu,
        bus=bus,
        **intake
    )


def setup_robot(hardware: RobotHardware, is_active, timeout=None):
    """
    Set motor directions and brake mode, then bring up the IMU.

    Raises CalibrationError (or ImuError) if the IMU does not come up; the
    run must not start in that case.
    """
    hardware.back_left.configure(REVERSE, BRAKE)
    hardware.front_left.configure(REVERSE, BRAKE)
    hardware.front_right.configure(FORWARD, BRAKE)
    hardware.back_right.configure(FORWARD, BRAKE)

    hardware.imu.initialize()
    wait_for_calibration(hardware.imu, is_active, timeout=timeout)
    logger.info("Robot ready")
