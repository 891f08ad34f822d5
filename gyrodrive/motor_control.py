# motor_control.py
"""
Motor and servo channels that send commands to the ESP32 over serial.

Every channel command is one ASCII line:
    P <channel> <power>       motor power, -1.0 .. 1.0
    D <channel> <direction>   FORWARD or REVERSE
    Z <channel> <behavior>    zero power behavior, BRAKE or FLOAT
    S <channel> <value>       servo power (continuous) or position (0 .. 1)
"""
import serial

from gyrodrive import config
from gyrodrive.correction import clamp_power
from gyrodrive.logging_utils import setup_logger

FORWARD = 'FORWARD'
REVERSE = 'REVERSE'
BRAKE = 'BRAKE'
FLOAT = 'FLOAT'


class MotorBus:
    def __init__(self, connection=None):
        self.logger = setup_logger(self.__class__.__name__)
        if connection is None:
            connection = serial.Serial(config.SERIAL_PORT,
                                       config.SERIAL_BAUDRATE,
                                       timeout=config.SERIAL_TIMEOUT)
            self.logger.info(f"Connected to ESP32 on {config.SERIAL_PORT}")
        self._serial = connection

    def send_command(self, command: str):
        """Write one command line. Failures are logged, never raised."""
        try:
            self._serial.write(f"{command}\n".encode())
        except serial.SerialException as e:
            self.logger.error(f"Failed to send to ESP32: {command!r}: {e}")

    def close(self):
        self._serial.close()


class MotorChannel:
    def __init__(self, bus: MotorBus, name: str):
        self.bus = bus
        self.name = name
        self.power = 0.0

    def configure(self, direction=FORWARD, zero_power_behavior=BRAKE):
        """One-time setup before any power is commanded."""
        self.bus.send_command(f"D {self.name} {direction}")
        self.bus.send_command(f"Z {self.name} {zero_power_behavior}")

    def set_power(self, power: float):
        self.power = clamp_power(power)
        self.bus.send_command(f"P {self.name} {self.power:.3f}")


class ServoChannel:
    """Continuous rotation servo (power) or positional servo (position)."""

    def __init__(self, bus: MotorBus, name: str, continuous: bool):
        self.bus = bus
        self.name = name
        self.continuous = continuous
        self.value = 0.0 if continuous else 0.5

    def set_power(self, power: float):
        if not self.continuous:
            raise TypeError(f"Servo {self.name} is positional")
        self.value = clamp_power(power)
        self.bus.send_command(f"S {self.name} {self.value:.3f}")

    def set_position(self, position: float):
        if self.continuous:
            raise TypeError(f"Servo {self.name} is continuous rotation")
        self.value = max(min(position, 1.0), 0.0)
        self.bus.send_command(f"S {self.name} {self.value:.3f}")
