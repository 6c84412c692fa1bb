"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import Any, Set

from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus


class SecurityRepositoryInterface(ABC):
    """Interface for durable storage of sensors and status fields."""

    @abstractmethod
    def get_sensors(self) -> Set[Sensor]:
        """Get all monitored sensors."""
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor to the monitored set."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor from the monitored set."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Persist the state of a sensor."""
        pass

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get the persisted alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status."""
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get the persisted arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Persist the arming status."""
        pass


class ImageServiceInterface(ABC):
    """Interface for image classification."""

    @abstractmethod
    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """Return True if the image contains a cat at or above the threshold (percent).

        Raises DetectionUnavailableError when no answer can be produced.
        """
        pass


class StatusListener(ABC):
    """Receives alarm, cat and sensor change notifications."""

    @abstractmethod
    def notify(self, alarm_status: AlarmStatus) -> None:
        """Called after the alarm status is written."""
        pass

    @abstractmethod
    def cat_detected(self, cat_detected: bool) -> None:
        """Called after each processed image."""
        pass

    @abstractmethod
    def sensor_status_changed(self) -> None:
        """Called after one or more sensors changed activation."""
        pass
