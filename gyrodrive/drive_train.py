# drive_train.py
"""
Motion primitives for the four wheel drive train.

Commands go straight out to the motor channels; nothing here blocks,
clamps or reports status.
"""
import math


def strafe_vector(direction: float, power: float):
    """
    Split a strafe direction (radians) into the two diagonal wheel powers.

    Returns (left, right): left drives front-left/back-right,
    right drives front-right/back-left.
    """
    angle = direction + math.pi / 4
    return math.cos(angle) * power, math.sin(angle) * power


class DriveTrain:
    def __init__(self, front_left, front_right, back_left, back_right):
        self.front_left = front_left
        self.front_right = front_right
        self.back_left = back_left
        self.back_right = back_right

    def stop(self):
        self.front_left.set_power(0)
        self.front_right.set_power(0)
        self.back_left.set_power(0)
        self.back_right.set_power(0)

    def rotate_clockwise(self, power: float):
        self.front_left.set_power(-power)
        self.back_left.set_power(-power)
        self.front_right.set_power(power)
        self.back_right.set_power(power)

    def rotate_counter_clockwise(self, power: float):
        self.front_left.set_power(power)
        self.back_left.set_power(power)
        self.front_right.set_power(-power)
        self.back_right.set_power(-power)

    def drive(self, left_power: float, right_power: float):
        """Tank drive: left and right pairs powered independently."""
        self.front_left.set_power(left_power)
        self.front_right.set_power(right_power)
        self.back_left.set_power(left_power)
        self.back_right.set_power(right_power)

    def strafe_with_correction(self, left_power: float, right_power: float, correction: float):
        """Diagonal (mecanum) drive with a heading correction split across the sides."""
        self.front_left.set_power(left_power + correction)
        self.back_right.set_power(left_power - correction)
        self.front_right.set_power(right_power - correction)
        self.back_left.set_power(right_power + correction)
