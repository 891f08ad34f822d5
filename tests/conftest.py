import os
import tempfile

from gyrodrive import config

# keep test runs from writing robot.log into the working directory
config.LOG_FILE = os.path.join(tempfile.gettempdir(), "gyrodrive-tests.log")

from gyrodrive.imu_module import Orientation  # noqa: E402
from gyrodrive.robot import RobotHardware  # noqa: E402


class FakeImu:
    """Returns the queued headings in order, then repeats the last one."""

    def __init__(self, headings=(0.0,)):
        self.headings = list(headings)
        self.reads = 0

    def read_orientation(self):
        index = min(self.reads, len(self.headings) - 1)
        self.reads += 1
        return Orientation(self.headings[index], 0.0, 0.0)


class FakeChannel:
    def __init__(self, name):
        self.name = name
        self.power = 0.0
        self.history = []

    def set_power(self, power):
        self.power = power
        self.history.append(power)


class FakeServo:
    def __init__(self):
        self.value = None

    def set_power(self, power):
        self.value = power

    def set_position(self, position):
        self.value = position


class FakeTimer:
    """Elapsed time grows by step on every seconds() call."""

    def __init__(self, step=0.5):
        self.step = step
        self.calls = 0

    def reset(self):
        self.calls = 0

    def seconds(self):
        elapsed = self.calls * self.step
        self.calls += 1
        return elapsed


class CountdownSignal:
    """Active for the first n checks, inactive afterwards."""

    def __init__(self, n):
        self.remaining = n

    def __call__(self):
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True


def make_hardware(imu, with_intake=False):
    intake = {}
    if with_intake:
        intake = {
            'left_intake': FakeServo(),
            'right_intake': FakeServo(),
            'left_release': FakeServo(),
            'right_release': FakeServo(),
        }
    return RobotHardware(FakeChannel('FL'), FakeChannel('FR'),
                         FakeChannel('BL'), FakeChannel('BR'), imu, **intake)
