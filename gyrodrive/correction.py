# correction.py
"""
Proportional heading correction.
"""


def correction(accumulated_heading: float, gain: float) -> float:
    """
    Power correction for a heading error.

    Counterclockwise drift (positive heading) gives a negative correction.
    The result is not clamped; saturation is left to the motor channels.
    """
    if accumulated_heading == 0:
        return 0.0
    return -accumulated_heading * gain


def clamp_power(value: float, limit: float = 1.0) -> float:
    return max(min(value, limit), -limit)
