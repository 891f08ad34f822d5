# imu_module.py
"""
Orientation sensor interface for the BNO055 IMU over I2C using smbus2.

The BNO055 does its own sensor fusion; we only switch it into IMU mode,
wait for the gyro to calibrate and read the Euler angles back.
"""
import json
import os
import struct
import time
from collections import namedtuple

import smbus2

from gyrodrive import config
from gyrodrive.errors import CalibrationError, ImuError
from gyrodrive.logging_utils import setup_logger

# Register map (page 0)
CHIP_ID_REGISTER = 0x00
BNO055_CHIP_ID = 0xA0
EULER_HEADING_LSB = 0x1A
CALIB_STAT_REGISTER = 0x35
UNIT_SEL_REGISTER = 0x3B
OPR_MODE_REGISTER = 0x3D
PWR_MODE_REGISTER = 0x3E
OFFSETS_START_REGISTER = 0x55
OFFSETS_LENGTH = 22

MODE_CONFIG = 0x00
MODE_IMU = 0x08
POWER_NORMAL = 0x00
UNITS_DEGREES = 0x00  # m/s^2, dps, degrees, celsius, windows orientation

EULER_LSB_PER_DEGREE = 16.0
MODE_SWITCH_DELAY = 0.025

# Order of the signed 16 bit values in the offset block
OFFSET_FIELDS = (
    'accel_offset_x', 'accel_offset_y', 'accel_offset_z',
    'mag_offset_x', 'mag_offset_y', 'mag_offset_z',
    'gyro_offset_x', 'gyro_offset_y', 'gyro_offset_z',
    'accel_radius', 'mag_radius',
)

# Angles in degrees, intrinsic Z-Y-X order. first_angle is the heading,
# (-180, 180], positive = counterclockwise.
Orientation = namedtuple('Orientation', ['first_angle', 'second_angle', 'third_angle'])


def normalize_angle(degrees: float) -> float:
    """Map any angle into (-180, 180]."""
    degrees = degrees % 360.0
    if degrees > 180.0:
        degrees -= 360.0
    return degrees


class ImuModule:
    def __init__(self, bus=None, address=None, calibration_file=None):
        self.bus = bus if bus is not None else smbus2.SMBus(config.IMU_I2C_BUS)
        self.address = address if address is not None else config.IMU_ADDRESS
        self.calibration_file = calibration_file
        self.logger = setup_logger(self.__class__.__name__)

    def initialize(self):
        """Check the chip, select units and start IMU fusion mode."""
        try:
            chip_id = self.bus.read_byte_data(self.address, CHIP_ID_REGISTER)
        except OSError as e:
            raise ImuError(f"No IMU answering at 0x{self.address:02X}") from e
        if chip_id != BNO055_CHIP_ID:
            raise ImuError(f"Unexpected chip id 0x{chip_id:02X} at 0x{self.address:02X}")

        self._set_mode(MODE_CONFIG)
        self._write(PWR_MODE_REGISTER, POWER_NORMAL)
        self._write(UNIT_SEL_REGISTER, UNITS_DEGREES)
        if self.calibration_file and os.path.exists(self.calibration_file):
            self._write_offsets(self._read_calibration_file(self.calibration_file))
        elif self.calibration_file:
            self.logger.warning(f"No calibration file at {self.calibration_file}, calibrating from scratch")
        self._set_mode(MODE_IMU)
        self.logger.info("IMU initialized in IMU fusion mode")

    def calibration_status(self) -> dict:
        status = self._read(CALIB_STAT_REGISTER)
        return {
            'system': (status >> 6) & 0x03,
            'gyro': (status >> 4) & 0x03,
            'accel': (status >> 2) & 0x03,
            'mag': status & 0x03,
        }

    def is_gyro_calibrated(self) -> bool:
        return self.calibration_status()['gyro'] == 3

    def read_orientation(self) -> Orientation:
        """Read a fresh heading/roll/pitch triple."""
        try:
            data = self.bus.read_i2c_block_data(self.address, EULER_HEADING_LSB, 6)
        except OSError as e:
            self.logger.exception("Failed to read IMU")
            raise ImuError("Failed to read orientation") from e
        heading, roll, pitch = struct.unpack('<hhh', bytes(data))
        # BNO055 heading grows clockwise from 0 to 360
        first = normalize_angle(-heading / EULER_LSB_PER_DEGREE)
        return Orientation(first, roll / EULER_LSB_PER_DEGREE, pitch / EULER_LSB_PER_DEGREE)

    def load_calibration(self, path):
        """Write offsets from a calibration file; the sensor is left in IMU mode."""
        offsets = self._read_calibration_file(path)
        self._set_mode(MODE_CONFIG)
        self._write_offsets(offsets)
        self._set_mode(MODE_IMU)

    def save_calibration(self, path):
        self._set_mode(MODE_CONFIG)
        try:
            data = self.bus.read_i2c_block_data(self.address, OFFSETS_START_REGISTER, OFFSETS_LENGTH)
        except OSError as e:
            raise ImuError("Failed to read calibration offsets") from e
        finally:
            self._set_mode(MODE_IMU)
        values = struct.unpack('<11h', bytes(data))
        with open(path, 'w') as f:
            json.dump(dict(zip(OFFSET_FIELDS, values)), f, indent=2)
        self.logger.info(f"Calibration offsets saved to {path}")

    def _read_calibration_file(self, path):
        with open(path) as f:
            try:
                stored = json.load(f)
            except ValueError as e:
                raise ImuError(f"Calibration file {path} is not valid JSON") from e
        try:
            return [int(stored[name]) for name in OFFSET_FIELDS]
        except KeyError as e:
            raise ImuError(f"Calibration file {path} is missing {e.args[0]}") from e

    def _write_offsets(self, offsets):
        raw = list(struct.pack('<11h', *offsets))
        try:
            self.bus.write_i2c_block_data(self.address, OFFSETS_START_REGISTER, raw)
        except OSError as e:
            raise ImuError("Failed to write calibration offsets") from e
        self.logger.info("Calibration offsets loaded")

    def _set_mode(self, mode):
        self._write(OPR_MODE_REGISTER, mode)
        time.sleep(MODE_SWITCH_DELAY)

    def _read(self, register):
        try:
            return self.bus.read_byte_data(self.address, register)
        except OSError as e:
            raise ImuError(f"Failed to read IMU register 0x{register:02X}") from e

    def _write(self, register, value):
        try:
            self.bus.write_byte_data(self.address, register, value)
        except OSError as e:
            raise ImuError(f"Failed to write IMU register 0x{register:02X}") from e


def wait_for_calibration(imu, is_active, timeout=None, poll_interval=None, sleep=time.sleep):
    """
    Poll the gyro calibration status until it reports calibrated.

    Raises CalibrationError when the timeout runs out or the run is
    cancelled first. There is no retry; the caller should halt.
    """
    timeout = config.IMU_CALIBRATION_TIMEOUT if timeout is None else timeout
    poll_interval = config.IMU_CALIBRATION_POLL_INTERVAL if poll_interval is None else poll_interval
    logger = setup_logger(__name__)

    deadline = time.monotonic() + timeout
    while not imu.is_gyro_calibrated():
        if not is_active():
            raise CalibrationError("Run stopped while the IMU was calibrating")
        if time.monotonic() >= deadline:
            raise CalibrationError(f"IMU gyro not calibrated after {timeout:.1f}s")
        logger.debug("IMU calibrating...")
        sleep(poll_interval)
    logger.info("IMU ready")
