"""Alarm decision logic.

The engine reconciles arming status, sensor activation and image
classification into a single alarm status. It keeps no copy of persisted
state: every operation reads the current status from the repository,
applies its rules in a fixed order and writes the result back.
"""

import threading
from typing import Any, List, Optional, Set

from ..models.config import SystemConfig
from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus
from .interfaces import ImageServiceInterface, SecurityRepositoryInterface, StatusListener
from .errors import DetectionUnavailableError, UnknownSensorError
from .error_handler import ErrorHandler, ErrorSeverity, global_error_handler
from ..logging_config import get_logger

logger = get_logger("alarm_engine")

IMAGE_SERVICE_COMPONENT = "image_service"


class AlarmEngine:
    """Owns the alarm status transitions."""

    def __init__(self,
                 repository: SecurityRepositoryInterface,
                 image_service: ImageServiceInterface,
                 config: Optional[SystemConfig] = None,
                 error_handler: Optional[ErrorHandler] = None):
        self.repository = repository
        self.image_service = image_service
        self.config = config or SystemConfig()
        self.error_handler = error_handler or global_error_handler
        self.error_handler.register_component(IMAGE_SERVICE_COMPONENT)

        self._lock = threading.RLock()
        self._listeners: List[StatusListener] = []
        # Result of the most recent processed image
        self._cat_detected = False

    @property
    def cat_detected(self) -> bool:
        return self._cat_detected

    @property
    def confidence_threshold(self) -> float:
        return self.config.cat_confidence_threshold

    # Listeners

    def add_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # Repository pass-through

    def get_alarm_status(self) -> AlarmStatus:
        return self.repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        return self.repository.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.repository.add_sensor(sensor)
            logger.info(f"Sensor added: {sensor.name} ({sensor.sensor_type.name})")
            self._fire_sensor_status_changed()

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.repository.remove_sensor(sensor)
            logger.info(f"Sensor removed: {sensor.name} ({sensor.sensor_type.name})")
            self._fire_sensor_status_changed()

    # Rules

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status and tell the listeners."""
        with self._lock:
            self.repository.set_alarm_status(alarm_status)
            logger.info(f"Alarm status set to {alarm_status.name}",
                        extra={"context": {"arming_status": self.repository.get_arming_status().name,
                                           "cat_detected": self._cat_detected}})
            for listener in list(self._listeners):
                try:
                    listener.notify(alarm_status)
                except Exception as e:
                    logger.error(f"Error in status listener {listener!r}: {e}")

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Change the arming status.

        Disarming always clears the alarm. Arming from DISARMED resets every
        active sensor (one repository update per sensor that was active) and,
        when arming home while a cat was last seen, raises the alarm
        immediately. Switching between the armed modes changes nothing else.
        """
        with self._lock:
            previous = self.repository.get_arming_status()
            self.repository.set_arming_status(arming_status)
            logger.info(f"Arming status changed: {previous.name if previous else None} -> {arming_status.name}")

            if arming_status is ArmingStatus.DISARMED:
                self.set_alarm_status(AlarmStatus.NO_ALARM)
                return

            if previous is not ArmingStatus.DISARMED:
                logger.debug("Switching between armed modes; sensors and alarm kept")
                return

            # A failed update propagates before any alarm decision is made
            reset_count = self._reset_sensors()
            if reset_count:
                self._fire_sensor_status_changed()

            if self._cat_detected and arming_status is ArmingStatus.ARMED_HOME:
                logger.warning("Armed at home while a cat is in view")
                self.set_alarm_status(AlarmStatus.ALARM)

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Apply a sensor activation event."""
        with self._lock:
            stored = self._find_sensor(sensor)
            alarm_status = self.repository.get_alarm_status()
            arming_status = self.repository.get_arming_status()

            changed = stored.active != active
            reaffirmed_while_pending = (active and not changed and arming_status.is_armed
                                        and alarm_status is AlarmStatus.PENDING_ALARM)
            if not changed and not reaffirmed_while_pending:
                logger.debug(f"Sensor {stored.name} already {'active' if active else 'inactive'}; nothing to do")
                return

            if changed:
                stored.active = active
                sensor.active = active
                self.repository.update_sensor(stored)
                logger.info(f"Sensor {stored.name} is now {'active' if active else 'inactive'}")

            if active:
                self._handle_sensor_activated(arming_status, alarm_status)
            else:
                self._handle_sensor_deactivated(alarm_status)

            if changed:
                self._fire_sensor_status_changed()

    def process_image(self, image: Any) -> bool:
        """Classify an image and apply the cat rules.

        Returns whether a cat was detected. Raises DetectionUnavailableError
        when the classifier fails; the alarm status and the remembered
        detection result are then left as they were.
        """
        with self._lock:
            try:
                cat_detected = self.image_service.image_contains_cat(image, self.confidence_threshold)
            except DetectionUnavailableError as e:
                self.error_handler.handle_error(IMAGE_SERVICE_COMPONENT, e, ErrorSeverity.MEDIUM)
                raise
            except Exception as e:
                error = DetectionUnavailableError(f"Image classification failed: {e}")
                self.error_handler.handle_error(IMAGE_SERVICE_COMPONENT, error, ErrorSeverity.MEDIUM)
                raise error from e

            self.error_handler.mark_healthy(IMAGE_SERVICE_COMPONENT)
            self._cat_detected = bool(cat_detected)
            logger.info(f"Image processed: cat {'detected' if self._cat_detected else 'not detected'}")

            for listener in list(self._listeners):
                try:
                    listener.cat_detected(self._cat_detected)
                except Exception as e:
                    logger.error(f"Error in status listener {listener!r}: {e}")

            if self._cat_detected:
                if self.repository.get_arming_status() is ArmingStatus.ARMED_HOME:
                    self.set_alarm_status(AlarmStatus.ALARM)
            elif not self._any_sensor_active():
                self.set_alarm_status(AlarmStatus.NO_ALARM)
            else:
                logger.debug("No cat, but a sensor is active; alarm status kept")

            return self._cat_detected

    # Helpers

    def _handle_sensor_activated(self, arming_status: ArmingStatus, alarm_status: AlarmStatus) -> None:
        if not arming_status.is_armed:
            return
        if alarm_status is AlarmStatus.NO_ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status is AlarmStatus.PENDING_ALARM:
            self.set_alarm_status(AlarmStatus.ALARM)

    def _handle_sensor_deactivated(self, alarm_status: AlarmStatus) -> None:
        # An active alarm is only cleared by disarming or an image with no cat
        if alarm_status is AlarmStatus.PENDING_ALARM and not self._any_sensor_active():
            self.set_alarm_status(AlarmStatus.NO_ALARM)

    def _reset_sensors(self) -> int:
        """Deactivate every active sensor, returning how many were updated."""
        reset_count = 0
        for sensor in sorted(self.repository.get_sensors()):
            if sensor.active:
                sensor.active = False
                self.repository.update_sensor(sensor)
                reset_count += 1
        if reset_count:
            logger.info(f"Reset {reset_count} active sensor(s) on arming")
        return reset_count

    def _find_sensor(self, sensor: Sensor) -> Sensor:
        for stored in self.repository.get_sensors():
            if stored == sensor:
                return stored
        logger.warning(f"Activation change for unknown sensor {sensor.name}")
        raise UnknownSensorError(sensor)

    def _any_sensor_active(self) -> bool:
        return any(sensor.active for sensor in self.repository.get_sensors())

    def _fire_sensor_status_changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener.sensor_status_changed()
            except Exception as e:
                logger.error(f"Error in status listener {listener!r}: {e}")
