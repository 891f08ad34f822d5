# errors.py
"""
Exceptions raised by the robot setup and controller.
"""


class GyrodriveError(Exception):
    pass


class ImuError(GyrodriveError):
    """The IMU could not be reached or is not the expected chip."""


class CalibrationError(GyrodriveError):
    """The gyro never reported calibrated during setup."""


class MissingHardwareError(GyrodriveError):
    """An operation needs hardware this robot was built without."""
