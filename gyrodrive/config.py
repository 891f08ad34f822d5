# config.py
"""
Central configuration parameters for the robot system.
"""

# Serial settings for motor and servo control via ESP32
SERIAL_PORT = '/dev/esp32'
SERIAL_BAUDRATE = 115200
SERIAL_TIMEOUT = 1

# Motor channel names as known by the ESP32 firmware
MOTOR_FRONT_LEFT = 'FL'
MOTOR_FRONT_RIGHT = 'FR'
MOTOR_BACK_LEFT = 'BL'
MOTOR_BACK_RIGHT = 'BR'

# Intake servos (only fitted on the intake variant of the robot)
INTAKE_LEFT = 'LI'
INTAKE_RIGHT = 'RI'
INTAKE_LEFT_RELEASE = 'LIrelease'
INTAKE_RIGHT_RELEASE = 'RIrelease'

# I2C settings for the IMU (BNO055)
IMU_I2C_BUS = 1
IMU_ADDRESS = 0x28
IMU_CALIBRATION_FILE = 'BNO055IMUCalibration.json'
IMU_CALIBRATION_TIMEOUT = 30.0  # seconds before setup gives up
IMU_CALIBRATION_POLL_INTERVAL = 0.05

# Heading hold
STRAIGHT_DRIVE_GAIN = 0.1  # higher gains overcorrect, lower are ineffective
SETTLE_SECONDS = 0.5       # wait after stop before the next measurement

# Vision guided strafe
FRAME_CENTER_X = 320       # sideways camera, 640x480 stream
CENTER_TOLERANCE_PX = 10
STRAFE_POWER = 0.3
LOCATOR_MAX_AGE = 0.5      # seconds before a detection counts as stale

# Logging
LOG_FILE = 'robot.log'
LOG_LEVEL = 'DEBUG'
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 5
