"""Gyro heading hold and maneuver control for a four wheel robot."""

__version__ = '0.1.0'
