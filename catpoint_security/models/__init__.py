"""Data models for the security monitor."""

from .sensor import Sensor, SensorKey, SensorType
from .status import AlarmStatus, ArmingStatus
from .config import SystemConfig

__all__ = ['Sensor', 'SensorKey', 'SensorType', 'AlarmStatus', 'ArmingStatus', 'SystemConfig']
