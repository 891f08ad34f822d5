# heading_tracker.py
"""
Track the robot's heading as one continuous angle.

The IMU reports heading in (-180, 180]; a turn through the wrap point shows
up as a jump of almost 360 degrees between two readings. The tracker takes
the shortest path between consecutive readings and keeps the sum, so the
accumulated heading can run past +-180 and over several revolutions.
Positive = counterclockwise.
"""
from gyrodrive.logging_utils import setup_logger


def unwrap_delta(delta: float) -> float:
    """Shortest signed rotation for a raw reading difference."""
    if delta < -180:
        delta += 360
    elif delta > 180:
        delta -= 360
    return delta


class HeadingTracker:
    def __init__(self, imu):
        """
        Args:
            imu: Anything with read_orientation() returning an Orientation.
        """
        self._imu = imu
        self._reference = None
        self._last = None
        self._heading = 0.0
        self.logger = setup_logger(self.__class__.__name__)

    @property
    def heading(self) -> float:
        return self._heading

    @property
    def reference_reading(self):
        return self._reference

    @property
    def last_reading(self):
        return self._last

    def reset(self):
        """Zero the accumulated heading at the current orientation."""
        reading = self._imu.read_orientation()
        self._reference = reading
        self._last = reading
        self._heading = 0.0
        self.logger.debug(f"Heading zeroed at {reading.first_angle:.2f}")

    def sample(self) -> float:
        """Take a fresh reading and return the heading since the last reset."""
        if self._last is None:
            self.reset()
        reading = self._imu.read_orientation()
        self._heading += unwrap_delta(reading.first_angle - self._last.first_angle)
        self._last = reading
        return self._heading
