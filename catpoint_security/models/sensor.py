"""Sensor data model."""

import uuid
from enum import Enum
from typing import NamedTuple, Optional


class SensorType(Enum):
    """Kinds of monitored points."""
    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"


class SensorKey(NamedTuple):
    """Composite identity of a sensor."""
    name: str
    sensor_type: SensorType


class Sensor:
    """A named, typed sensor with a mutable activation flag.

    Two sensors are the same entity when their name and type match; the
    ``active`` flag and ``sensor_id`` take no part in equality or hashing.
    """

    __slots__ = ("_name", "_sensor_type", "sensor_id", "active")

    def __init__(self, name: str, sensor_type: SensorType, active: bool = False,
                 sensor_id: Optional[str] = None):
        if not isinstance(sensor_type, SensorType):
            raise TypeError(f"sensor_type must be a SensorType, got {sensor_type!r}")
        self._name = name
        self._sensor_type = sensor_type
        self.sensor_id = sensor_id or str(uuid.uuid4())
        self.active = bool(active)

    @property
    def name(self) -> str:
        return self._name

    @property
    def sensor_type(self) -> SensorType:
        return self._sensor_type

    @property
    def key(self) -> SensorKey:
        return SensorKey(self._name, self._sensor_type)

    def copy(self) -> "Sensor":
        """Return a detached copy with the same identity and state."""
        return Sensor(self._name, self._sensor_type, self.active, self.sensor_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __lt__(self, other: "Sensor") -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return (self._name, self._sensor_type.value) < (other._name, other._sensor_type.value)

    def __repr__(self) -> str:
        return (f"Sensor(name={self._name!r}, sensor_type={self._sensor_type.name}, "
                f"active={self.active})")
