# calibrate_imu.py
"""
Calibrate the IMU and store its offsets for later runs.

Keep the robot still for the gyro, then tilt it through a few positions
for the accelerometer until both gyro and accel read 3. The system and
magnetometer fields are not used in IMU mode.
"""
import time

from gyrodrive import config
from gyrodrive.imu_module import ImuModule
from gyrodrive.logging_utils import setup_logger

logger = setup_logger('CalibrateImu')


def main():
    imu = ImuModule()
    imu.initialize()
    logger.info("Starting IMU calibration - keep still, then tilt slowly")
    try:
        while True:
            status = imu.calibration_status()
            logger.info(f"Calibration status: {status}")
            if status['gyro'] == 3 and status['accel'] == 3:
                break
            time.sleep(0.5)
    except KeyboardInterrupt:
        logger.info("Calibration aborted, nothing saved")
        return 1
    imu.save_calibration(config.IMU_CALIBRATION_FILE)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
