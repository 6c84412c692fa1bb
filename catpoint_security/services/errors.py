"""Exceptions raised by the security services."""


class SecurityError(Exception):
    """Base class for security monitor errors."""


class UnknownSensorError(SecurityError):
    """Raised when an operation references a sensor that was never added."""

    def __init__(self, sensor):
        self.sensor = sensor
        super().__init__(f"Unknown sensor: {sensor.name} ({sensor.sensor_type.name})")


class DetectionUnavailableError(SecurityError):
    """Raised when the image classifier cannot produce a result."""
