# vision_locator.py
"""
Latest object position from the vision pipeline, shared with the control loop.

The pipeline runs on its own thread and publishes one centroid per frame.
The control loop reads one snapshot per tick. Each snapshot is replaced
whole under a lock, so x, y and frame id always belong to the same frame.
"""
import threading
import time
from collections import namedtuple


LocatorSnapshot = namedtuple('LocatorSnapshot', ['frame_id', 'center_x', 'center_y', 'timestamp'])

RIGHT = 1
LEFT = -1
CENTERED = 0


def side_of_center(center_x: float, frame_center_x: float, tolerance: float) -> int:
    """Which side of the centre band an x coordinate lies on."""
    if center_x > frame_center_x + tolerance:
        return RIGHT
    if center_x < frame_center_x - tolerance:
        return LEFT
    return CENTERED


class ObjectLocator:
    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot = None
        self._frame_id = 0

    def publish(self, center_x: float, center_y: float):
        """Called by the vision thread with the centroid found in a frame."""
        with self._lock:
            self._frame_id += 1
            self._snapshot = LocatorSnapshot(self._frame_id, center_x, center_y, time.monotonic())

    def clear(self):
        """Called by the vision thread when a frame has no detection."""
        with self._lock:
            self._snapshot = None

    def snapshot(self):
        """Latest detection, or None if the last frame found nothing."""
        with self._lock:
            return self._snapshot
